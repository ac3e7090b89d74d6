"""Unit tests for EquipmentAutoMapper."""

from __future__ import annotations

import pytest

from bacmap.config import MatchingConfig
from bacmap.matching.auto_mapper import EquipmentAutoMapper, type_compatibility
from bacmap.models import BulkMappingPair, Equipment, MappingType


def _eq(id: str, name: str, type: str = "") -> Equipment:
    return Equipment(id=id, name=name, type=type)


@pytest.fixture
def sources() -> list[Equipment]:
    return [
        _eq("s1", "AHU-1", "AHU"),
        _eq("s2", "VAV-101", "VAV"),
        _eq("s3", "Boiler", "Boiler"),
    ]


@pytest.fixture
def targets() -> list[Equipment]:
    return [
        _eq("t1", "ahu-1", "Air Handling Unit"),
        _eq("t2", "VAV 101", "Variable Air Volume"),
        _eq("t3", "Chiller", "Chiller"),
    ]


class TestTypeCompatibility:
    """Test equipment type compatibility scoring."""

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("VAV", "vav", 1.0),
            ("AHU", "Air Handling Unit", 0.9),
            ("Fan", "Exhaust Fan", 0.9),
            ("CHW", "Chiller", 0.9),
            ("Pump", "Heat Pump", 0.6),
            ("Boiler", "Chiller", 0.0),
            ("", "AHU", 0.0),
            (None, None, 0.0),
        ],
    )
    def test_scores(self, a: str | None, b: str | None, expected: float) -> None:
        assert type_compatibility(a, b) == expected


class TestSuggestPairings:
    """Test bulk greedy pairing."""

    def test_type_bonus_lifts_pair_over_floor(self, auto_mapper: EquipmentAutoMapper) -> None:
        targets = [_eq("t1", "EF1000", "fan")]

        typed = auto_mapper.suggest_pairings([_eq("s1", "EF1", "FAN")], targets)
        untyped = auto_mapper.suggest_pairings([_eq("s1", "EF1")], targets)

        assert len(typed) == 1
        assert typed[0].confidence == pytest.approx(0.7)
        assert typed[0].mapping_type == MappingType.FUZZY
        assert untyped == []

    def test_score_capped(self, auto_mapper: EquipmentAutoMapper) -> None:
        pairs = auto_mapper.suggest_pairings([_eq("s1", "VAV-1", "VAV")], [_eq("t1", "VAV1", "VAV")])
        assert pairs[0].confidence == 1.0

    def test_sorted_by_confidence(self, auto_mapper: EquipmentAutoMapper) -> None:
        sources = [_eq("weak", "AHU"), _eq("strong", "AHU-2")]
        targets = [_eq("t1", "AHU-2")]

        pairs = auto_mapper.suggest_pairings(sources, targets)

        assert [p.source_id for p in pairs] == ["strong", "weak"]
        assert pairs[1].confidence == pytest.approx(0.75)

    def test_target_can_be_best_for_several_sources(self, auto_mapper: EquipmentAutoMapper) -> None:
        pairs = auto_mapper.suggest_pairings(
            [_eq("s1", "RTU-1"), _eq("s2", "RTU1")], [_eq("t1", "RTU 1"), _eq("t2", "Pump")]
        )
        assert {p.target_id for p in pairs} == {"t1"}
        assert len(pairs) == 2

    def test_ties_keep_first_target(self, auto_mapper: EquipmentAutoMapper) -> None:
        pairs = auto_mapper.suggest_pairings(
            [_eq("s1", "FCU")], [_eq("a", "FCU-1"), _eq("b", "FCU-2")]
        )
        assert pairs[0].target_id == "a"

    def test_existing_mappings_excluded(self, auto_mapper: EquipmentAutoMapper) -> None:
        existing = [BulkMappingPair(source_id="s1", target_id="t1", confidence=1.0)]

        pairs = auto_mapper.suggest_pairings(
            [_eq("s1", "AHU-1"), _eq("s2", "AHU-1")],
            [_eq("t1", "AHU-1"), _eq("t2", "AHU-1A")],
            existing,
        )

        assert [(p.source_id, p.target_id) for p in pairs] == [("s2", "t2")]

    def test_floor_is_configurable(self) -> None:
        mapper = EquipmentAutoMapper(config=MatchingConfig(pairing_min_confidence=0.9))
        assert mapper.suggest_pairings([_eq("s1", "AHU")], [_eq("t1", "AHU-1")]) == []

    def test_no_targets(self, auto_mapper: EquipmentAutoMapper) -> None:
        assert auto_mapper.suggest_pairings([_eq("s1", "AHU")], []) == []


class TestAutoMap:
    """Test exact fast path plus fuzzy suggestions."""

    def test_exact_then_fuzzy(self, auto_mapper: EquipmentAutoMapper, sources, targets) -> None:
        result = auto_mapper.auto_map(sources, targets)

        assert [(p.source_id, p.target_id) for p in result.exact_pairs] == [("s1", "t1")]
        assert result.exact_pairs[0].mapping_type == MappingType.EXACT
        assert result.exact_pairs[0].confidence == 1.0
        assert [(p.source_id, p.target_id) for p in result.suggested_pairs] == [("s2", "t2")]
        assert result.suggested_pairs[0].confidence == 1.0
        # "boiler" shares 4 of 7 characters with "chiller"
        assert result.unmatched_source_ids == ("s3",)

    def test_first_equal_target_wins(self, auto_mapper: EquipmentAutoMapper) -> None:
        exact = auto_mapper.find_exact_matches(
            [_eq("s1", " AHU-1 ")], [_eq("t1", "AHU-1"), _eq("t2", "ahu-1")]
        )
        assert [(p.source_id, p.target_id) for p in exact] == [("s1", "t1")]

    def test_already_mapped_sources_not_reported(
        self, auto_mapper: EquipmentAutoMapper, sources, targets
    ) -> None:
        existing = [BulkMappingPair(source_id="s3", target_id="t3", confidence=0.9)]

        result = auto_mapper.auto_map(sources, targets, existing)

        assert result.unmatched_source_ids == ()
        assert "s3" not in {p.source_id for p in result.suggested_pairs}

    def test_empty_inventories(self, auto_mapper: EquipmentAutoMapper) -> None:
        result = auto_mapper.auto_map([], [])

        assert result.exact_pairs == ()
        assert result.suggested_pairs == ()
        assert result.unmatched_source_ids == ()


class TestMappingSuggestions:
    """Test ranked suggestions for one unmapped source."""

    @pytest.fixture
    def candidates(self) -> list[Equipment]:
        return [
            _eq("t4", "Boiler-1", "Boiler"),
            _eq("t3", "AHU-1A", "AHU"),
            _eq("t2", "AHU-2", "AHU"),
            _eq("t1", "AHU 1", "Air Handling Unit"),
        ]

    def test_ranked(self, auto_mapper: EquipmentAutoMapper, candidates) -> None:
        suggestions = auto_mapper.find_mapping_suggestions(_eq("s1", "AHU-1", "AHU"), candidates)

        assert [s.target_id for s in suggestions] == ["t1", "t2", "t3"]
        assert suggestions[0].confidence == pytest.approx(0.89)
        assert suggestions[1].confidence == pytest.approx(0.7)
        assert suggestions[2].confidence == pytest.approx(0.612)
        assert suggestions[0].target_name == "AHU 1"
        assert suggestions[0].target_type == "Air Handling Unit"

    def test_reasons(self, auto_mapper: EquipmentAutoMapper, candidates) -> None:
        suggestions = auto_mapper.find_mapping_suggestions(_eq("s1", "AHU-1", "AHU"), candidates)

        assert suggestions[0].reason == (
            "Exact name match (100%) + equipment type compatibility (90%)"
        )
        assert suggestions[1].reason == (
            "High name similarity (75%) + equipment type compatibility (100%)"
        )
        assert suggestions[2].reason.startswith("Moderate name similarity (64%)")

    def test_limit(self, auto_mapper: EquipmentAutoMapper, candidates) -> None:
        suggestions = auto_mapper.find_mapping_suggestions(
            _eq("s1", "AHU-1", "AHU"), candidates, limit=1
        )
        assert [s.target_id for s in suggestions] == ["t1"]

    def test_nothing_above_floor(self, auto_mapper: EquipmentAutoMapper) -> None:
        suggestions = auto_mapper.find_mapping_suggestions(
            _eq("s1", "Cooling Tower"), [_eq("t1", "VAV-7")]
        )
        assert suggestions == []
        assert auto_mapper.should_offer_create_new(suggestions) is True

    def test_create_new_offered_for_weak_best(
        self, auto_mapper: EquipmentAutoMapper, candidates
    ) -> None:
        strong = auto_mapper.find_mapping_suggestions(_eq("s1", "AHU-1", "AHU"), candidates)
        weak = auto_mapper.find_mapping_suggestions(
            _eq("s1", "AHU-1", "AHU"), [c for c in candidates if c.id == "t3"]
        )

        assert auto_mapper.should_offer_create_new(strong) is False
        assert auto_mapper.should_offer_create_new(weak) is True
