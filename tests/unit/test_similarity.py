"""Unit tests for string similarity scorers."""

from __future__ import annotations

import pytest

from bacmap.matching.similarity import name_similarity, similarity


class TestSimilarity:
    """Test the containment / shared-character scorer."""

    def test_identical_ignoring_case(self) -> None:
        assert similarity("ahu", "AHU") == 1.0

    def test_punctuation_ignored(self) -> None:
        assert similarity("VAV-101", "VAV101") == 1.0

    def test_containment_ratio(self) -> None:
        assert similarity("AHU", "AHU-1") == pytest.approx(0.75)
        assert similarity("AHU-1", "AHU") == pytest.approx(0.75)

    def test_shared_characters(self) -> None:
        assert similarity("abc", "xyzab") == pytest.approx(0.4)

    def test_equal_length_first_argument_is_needle(self) -> None:
        """Characters are counted with repetition, so argument order matters."""
        assert similarity("aab", "abc") == pytest.approx(1.0)
        assert similarity("abc", "aab") == pytest.approx(2 / 3)

    @pytest.mark.parametrize(
        ("a", "b"),
        [("", "AHU"), ("AHU", ""), ("--", "AB"), (None, None), ("", "")],
    )
    def test_empty_sides_score_zero(self, a: str | None, b: str | None) -> None:
        assert similarity(a, b) == 0.0

    def test_no_overlap(self) -> None:
        assert similarity("xyz", "abc") == 0.0

    def test_bounded(self) -> None:
        for a, b in [("ZN-T", "Zone Temp"), ("SAT", "SA-TEMP"), ("1", "11111")]:
            assert 0.0 <= similarity(a, b) <= 1.0


class TestNameSimilarity:
    """Test the equipment-name scorer."""

    def test_equal_after_normalization(self) -> None:
        assert name_similarity("AHU-1", "ahu 1") == 1.0

    def test_zero_padding(self) -> None:
        assert name_similarity("VAV-7", "VAV-07") == pytest.approx(0.95)
        assert name_similarity("VAV_007", "vav 7") == pytest.approx(0.95)

    def test_containment_scaled(self) -> None:
        assert name_similarity("AHU1", "AHU10") == pytest.approx(0.64)

    def test_numbers_stay_significant(self) -> None:
        assert name_similarity("AHU-1", "AHU-2") == pytest.approx(0.75)

    def test_empty(self) -> None:
        assert name_similarity("", "AHU") == 0.0
        assert name_similarity(None, "") == 0.0

    def test_unrelated_names_score_low(self) -> None:
        assert name_similarity("Boiler-1", "AHU-1") < 0.5
