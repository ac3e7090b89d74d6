"""Equipment auto-mapping between the device inventory and the commissioning inventory.

Three entry points:
- find_exact_matches(): case-insensitive name equality fast path
- suggest_pairings(): bulk greedy pairing by similarity plus a type bonus
- find_mapping_suggestions(): ranked candidates for one unmapped source
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from bacmap.config import MatchingConfig, get_config
from bacmap.matching.similarity import name_similarity, similarity
from bacmap.models import (
    AutoMappingResult,
    BulkMappingPair,
    Equipment,
    MappingType,
    NameMatchSuggestion,
)

logger = logging.getLogger(__name__)

# Canonical type -> spellings seen in either inventory
TYPE_COMPATIBILITY: dict[str, tuple[str, ...]] = {
    "air handling unit": ("ahu", "air handler", "air handler unit", "air handling unit"),
    "variable air volume": ("vav", "variable air volume", "vvr"),
    "chiller": ("ch", "chiller", "cooling", "chw"),
    "boiler": ("boiler", "heating", "blr", "hhw"),
    "rooftop unit": ("rtu", "rooftop unit"),
    "fan coil unit": ("fcu", "fan coil", "fan coil unit"),
    "exhaust fan": ("ef", "exhaust", "fan", "lab exhaust"),
    "supply fan": ("sf", "supply", "fan"),
    "pump": ("pump", "p", "cwp", "hwp"),
    "valve": ("valve", "vlv"),
    "damper": ("damper", "dmp"),
    "lab exhaust": ("lab air valve", "lab valve", "lab exhaust", "fume hood"),
}


class _Mapped(Protocol):
    source_id: str
    target_id: str


def type_compatibility(source_type: str | None, target_type: str | None) -> float:
    """How compatible two equipment type labels are.

    Returns:
        1.0 equal, 0.9 same compatibility group, 0.6 one contains the
        other, else 0.0 (also when either is empty)
    """
    a = (source_type or "").strip().lower()
    b = (target_type or "").strip().lower()
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    for canonical, variants in TYPE_COMPATIBILITY.items():
        if (a == canonical or a in variants) and (b == canonical or b in variants):
            return 0.9

    if a in b or b in a:
        return 0.6
    return 0.0


def _same_type(a: str, b: str) -> bool:
    left, right = a.strip().casefold(), b.strip().casefold()
    return bool(left) and left == right


class EquipmentAutoMapper:
    """Suggests equipment pairings between two independently named inventories."""

    def __init__(self, config: MatchingConfig | None = None) -> None:
        """Initialize auto-mapper.

        Args:
            config: Matching thresholds (default: from environment)
        """
        self.config = config or get_config().matching

    def pair_score(self, source: Equipment, target: Equipment) -> float:
        """similarity(source.name, target.name) plus the type bonus, capped at 1.0."""
        score = similarity(source.name, target.name)
        if _same_type(source.type, target.type):
            score += self.config.type_match_bonus
        return min(score, 1.0)

    def suggest_pairings(
        self,
        sources: Sequence[Equipment],
        targets: Sequence[Equipment],
        existing: Iterable[_Mapped] = (),
    ) -> list[BulkMappingPair]:
        """Best target per unmapped source, kept when at or above the floor.

        Greedy per source: a target may be best for several sources. Ties
        keep the first target in input order.

        Args:
            sources: Device-side equipment
            targets: Commissioning equipment
            existing: Already accepted mappings; their sources and targets
                are excluded

        Returns:
            Pairs sorted by descending confidence (stable)
        """
        mapped_sources, mapped_targets = self._mapped_ids(existing)
        open_targets = [t for t in targets if t.id not in mapped_targets]

        pairs: list[BulkMappingPair] = []
        for source in sources:
            if source.id in mapped_sources:
                continue

            best: Equipment | None = None
            best_score = 0.0
            for target in open_targets:
                score = self.pair_score(source, target)
                if best is None or score > best_score:
                    best, best_score = target, score

            if best is not None and best_score >= self.config.pairing_min_confidence:
                pairs.append(
                    BulkMappingPair(
                        source_id=source.id,
                        target_id=best.id,
                        confidence=best_score,
                        mapping_type=MappingType.FUZZY,
                    )
                )

        pairs.sort(key=lambda p: p.confidence, reverse=True)
        logger.info(f"Suggested {len(pairs)} pairings for {len(sources)} source equipment")
        return pairs

    def find_exact_matches(
        self,
        sources: Sequence[Equipment],
        targets: Sequence[Equipment],
        existing: Iterable[_Mapped] = (),
    ) -> list[BulkMappingPair]:
        """Pairs whose names are equal ignoring case; first equal target wins."""
        mapped_sources, mapped_targets = self._mapped_ids(existing)

        by_name: dict[str, Equipment] = {}
        for target in targets:
            key = target.name.strip().casefold()
            if key and target.id not in mapped_targets:
                by_name.setdefault(key, target)

        pairs = []
        for source in sources:
            if source.id in mapped_sources:
                continue
            target = by_name.get(source.name.strip().casefold())
            if target is not None:
                pairs.append(
                    BulkMappingPair(
                        source_id=source.id,
                        target_id=target.id,
                        confidence=1.0,
                        mapping_type=MappingType.EXACT,
                    )
                )
        return pairs

    def auto_map(
        self,
        sources: Sequence[Equipment],
        targets: Sequence[Equipment],
        existing: Iterable[_Mapped] = (),
    ) -> AutoMappingResult:
        """Exact fast path, then fuzzy suggestions for the remaining sources."""
        existing = list(existing)
        exact = self.find_exact_matches(sources, targets, existing)
        exact_ids = {p.source_id for p in exact}

        remaining = [s for s in sources if s.id not in exact_ids]
        suggested = self.suggest_pairings(remaining, targets, existing)
        suggested_ids = {p.source_id for p in suggested}

        mapped_sources, _ = self._mapped_ids(existing)
        unmatched = tuple(
            s.id
            for s in sources
            if s.id not in exact_ids and s.id not in suggested_ids and s.id not in mapped_sources
        )

        logger.info(
            f"Auto-mapping: {len(exact)} exact, {len(suggested)} suggested, "
            f"{len(unmatched)} unmatched"
        )
        return AutoMappingResult(
            exact_pairs=tuple(exact),
            suggested_pairs=tuple(suggested),
            unmatched_source_ids=unmatched,
        )

    def find_mapping_suggestions(
        self,
        source: Equipment,
        targets: Sequence[Equipment],
        limit: int | None = None,
    ) -> list[NameMatchSuggestion]:
        """Ranked candidates for one unmapped source.

        Confidence = 0.8 x name_similarity + 0.1 x type_compatibility,
        capped at 1.0; candidates below the pairing floor are dropped.

        Args:
            source: Device-side equipment without a mapping
            targets: Commissioning equipment to rank
            limit: Maximum suggestions (default: configured limit, 3)

        Returns:
            Suggestions sorted by descending confidence
        """
        limit = limit or self.config.suggestion_limit

        suggestions = []
        for target in targets:
            name_score = name_similarity(source.name, target.name)
            type_score = type_compatibility(source.type, target.type)
            confidence = min(name_score * 0.8 + type_score * 0.1, 1.0)
            if confidence < self.config.pairing_min_confidence:
                continue

            suggestions.append(
                NameMatchSuggestion(
                    target_id=target.id,
                    target_name=target.name,
                    target_type=target.type,
                    confidence=confidence,
                    reason=self._reason(name_score, type_score),
                )
            )

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        return suggestions[:limit]

    def should_offer_create_new(self, suggestions: Sequence[NameMatchSuggestion]) -> bool:
        """True when there is no suggestion good enough to accept outright."""
        if not suggestions:
            return True
        best = max(s.confidence for s in suggestions)
        return best < self.config.create_new_threshold

    @staticmethod
    def _reason(name_score: float, type_score: float) -> str:
        if name_score >= 0.95:
            reason = f"Exact name match ({round(name_score * 100)}%)"
        elif name_score >= 0.7:
            reason = f"High name similarity ({round(name_score * 100)}%)"
        elif name_score >= 0.5:
            reason = f"Moderate name similarity ({round(name_score * 100)}%)"
        else:
            reason = ""

        if type_score > 0:
            type_reason = f"equipment type compatibility ({round(type_score * 100)}%)"
            reason = f"{reason} + {type_reason}" if reason else type_reason.capitalize()
        return reason

    @staticmethod
    def _mapped_ids(existing: Iterable[_Mapped]) -> tuple[set[str], set[str]]:
        sources: set[str] = set()
        targets: set[str] = set()
        for mapping in existing:
            sources.add(mapping.source_id)
            targets.add(mapping.target_id)
        return sources, targets
