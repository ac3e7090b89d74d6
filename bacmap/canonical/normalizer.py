"""Point normalization: raw BACnet point names -> readable, tagged, scored points.

Pipeline per point:
1. Tokenize the raw name (offsets kept)
2. Expand greedily left to right, longest compound first (up to 4 tokens)
3. Render expansions in title case, joined by single spaces
4. Score confidence from the tier and strength of every raw token
5. Classify point function and category, derive Haystack markers
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from bacmap.canonical.classifier import classify_category, classify_function, expanded_words
from bacmap.canonical.haystack import haystack_tags
from bacmap.canonical.tokenizer import tokenize_spans
from bacmap.config import NormalizationConfig, get_config
from bacmap.dictionaries.lookup import AcronymDictionary, get_dictionary
from bacmap.dictionaries.vendor import infer_vendor
from bacmap.models import (
    BatchNormalizationSummary,
    ConfidenceLevel,
    DictionaryTier,
    NormalizationContext,
    NormalizedPoint,
    PointFunction,
    RawPoint,
    TokenExpansion,
    UnresolvedToken,
)

logger = logging.getLogger(__name__)

MAX_COMPOUND_TOKENS = 4
MAX_TOKEN_EXAMPLES = 3

TIER_WEIGHTS: dict[DictionaryTier, float] = {
    DictionaryTier.VENDOR: 1.0,
    DictionaryTier.EQUIPMENT: 1.0,
    DictionaryTier.GENERIC: 0.9,
    DictionaryTier.UNIT: 0.8,
    DictionaryTier.NONE: 0.0,
}
NUMERIC_WEIGHT = 1.0

# Tie-break order for normalization_method, most specific first
_TIER_ORDER = [
    DictionaryTier.VENDOR,
    DictionaryTier.EQUIPMENT,
    DictionaryTier.GENERIC,
    DictionaryTier.UNIT,
]


def title_case(text: str) -> str:
    """Upper-case the first letter of each word, leave the rest as written."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split())


class PointNormalizer:
    """Normalizes RawPoints against a layered acronym dictionary."""

    def __init__(
        self,
        dictionary: AcronymDictionary | None = None,
        config: NormalizationConfig | None = None,
    ) -> None:
        """Initialize normalizer.

        Args:
            dictionary: Acronym tables (default: built-in tables plus the
                configured YAML overlay, if any)
            config: Normalization settings (default: from environment)
        """
        self.config = config or get_config().normalization
        self.dictionary = dictionary or get_dictionary(self.config.overrides_path)

    def normalize(
        self, point: RawPoint, context: NormalizationContext | None = None
    ) -> NormalizedPoint:
        """Normalize one point.

        Never raises for malformed names: an empty name yields an empty
        normalized name with confidence 0.0, flagged for review. A name of
        delimiters only keeps its raw text, also at 0.0.

        Args:
            point: Raw point from device-export ingestion
            context: Equipment type / vendor / units hints

        Returns:
            NormalizedPoint
        """
        context = self._effective_context(point, context)
        tiers = self.dictionary.resolve_tiers(context)

        expansions = self.expand(point.original_name, tiers)
        normalized_name = self.render(expansions)
        if not normalized_name and point.original_name:
            # Delimiters only ("--", " . "): nothing to expand, keep the raw text
            normalized_name = point.original_name.strip() or point.original_name
        confidence = self.score(expansions)

        description = point.original_description or ""
        expanded_description = (
            self.render(self.expand(description, tiers)) if description.strip() else normalized_name
        )

        name_words = expanded_words(normalized_name)
        function = classify_function(name_words)
        tag_words = name_words
        if function == PointFunction.UNKNOWN and name_words and description.strip():
            # Cryptic names often carry a readable description
            description_words = expanded_words(expanded_description)
            function = classify_function(description_words)
            tag_words = name_words | description_words

        category = classify_category(function, point.object_type)
        tags = haystack_tags(tag_words, category, function, context.units)

        result = NormalizedPoint(
            point_id=point.key,
            original_name=point.original_name,
            original_description=description,
            object_type=point.object_type,
            object_instance=point.object_instance,
            units=point.units,
            normalized_name=normalized_name,
            expanded_description=expanded_description,
            point_function=function,
            category=category,
            haystack_tags=tags,
            confidence=confidence,
            normalization_method=self.method(expansions),
            requires_manual_review=confidence < self.config.review_threshold,
            tokens=tuple(expansions),
        )

        logger.debug(
            f"Normalized {point.original_name!r} -> {normalized_name!r} "
            f"(confidence={confidence:.2f}, method={result.normalization_method})"
        )
        return result

    def normalize_batch(
        self, points: Iterable[RawPoint], context: NormalizationContext | None = None
    ) -> BatchNormalizationSummary:
        """Normalize many points with one shared context and summarize quality."""
        normalized = [self.normalize(point, context) for point in points]
        levels = Counter(p.confidence_level for p in normalized)
        review_count = sum(1 for p in normalized if p.requires_manual_review)
        average = (
            sum(p.confidence for p in normalized) / len(normalized) if normalized else 0.0
        )

        if review_count:
            logger.info(f"{review_count} of {len(normalized)} points require manual review")

        unresolved = self.unresolved_tokens(normalized)
        if unresolved:
            logger.info(f"{len(unresolved)} distinct tokens not found in any dictionary tier")

        return BatchNormalizationSummary(
            points=tuple(normalized),
            total_points=len(normalized),
            high_confidence_count=levels[ConfidenceLevel.HIGH],
            medium_confidence_count=levels[ConfidenceLevel.MEDIUM],
            low_confidence_count=levels[ConfidenceLevel.LOW],
            unknown_confidence_count=levels[ConfidenceLevel.UNKNOWN],
            requires_review_count=review_count,
            average_confidence=average,
            unresolved_tokens=unresolved,
        )

    @staticmethod
    def unresolved_tokens(points: Iterable[NormalizedPoint]) -> tuple[UnresolvedToken, ...]:
        """Dictionary gaps across a batch.

        Counts every alphabetic token that passed through unexpanded,
        case-insensitively, with up to MAX_TOKEN_EXAMPLES distinct point
        names per token. Sorted by frequency (descending), then token.
        """
        counts: Counter[str] = Counter()
        examples: dict[str, list[str]] = {}
        for point in points:
            for e in point.tokens:
                if e.resolved or not any(c.isalpha() for c in e.original):
                    continue
                token = e.original.upper()
                counts[token] += 1
                names = examples.setdefault(token, [])
                if len(names) < MAX_TOKEN_EXAMPLES and point.original_name not in names:
                    names.append(point.original_name)

        return tuple(
            UnresolvedToken(token=token, frequency=count, example_points=tuple(examples[token]))
            for token, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        )

    def expand(
        self, text: str, tiers: list[tuple[DictionaryTier, dict[str, str]]]
    ) -> list[TokenExpansion]:
        """Greedy left-to-right expansion, longest compound first.

        A compound is looked up by its raw spelling (delimiters included),
        so "ZN-T" matches the "ZN-T" entry but not "ZN_T".
        """
        tokens = tokenize_spans(text)
        expansions: list[TokenExpansion] = []

        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.is_numeric:
                expansions.append(
                    TokenExpansion(
                        original=token.text,
                        expansion=token.text,
                        tier=DictionaryTier.NONE,
                        strength=1.0,
                        numeric=True,
                    )
                )
                i += 1
                continue

            longest = min(MAX_COMPOUND_TOKENS, len(tokens) - i)
            for span in range(longest, 0, -1):
                raw = text[token.start : tokens[i + span - 1].end]
                hit = self.dictionary.lookup(raw, tiers)
                if hit is not None:
                    expansions.append(
                        TokenExpansion(
                            original=raw,
                            expansion=hit.text,
                            tier=hit.tier,
                            strength=hit.strength,
                            span=span,
                        )
                    )
                    i += span
                    break
            else:
                expansions.append(
                    TokenExpansion(
                        original=token.text,
                        expansion=token.text,
                        tier=DictionaryTier.NONE,
                        strength=0.0,
                    )
                )
                i += 1

        return expansions

    @staticmethod
    def render(expansions: list[TokenExpansion]) -> str:
        parts = [
            title_case(e.expansion) if e.tier != DictionaryTier.NONE else e.original
            for e in expansions
        ]
        return " ".join(parts)

    @staticmethod
    def score(expansions: list[TokenExpansion]) -> float:
        """Weighted mean of tier strength over raw tokens.

        Unresolved tokens add nothing but still count in the denominator.
        """
        raw_tokens = sum(e.span for e in expansions)
        if raw_tokens == 0:
            return 0.0
        total = 0.0
        for e in expansions:
            weight = NUMERIC_WEIGHT if e.numeric else TIER_WEIGHTS[e.tier]
            total += weight * e.strength * e.span
        return min(1.0, total / raw_tokens)

    @staticmethod
    def method(expansions: list[TokenExpansion]) -> str:
        """Tier covering the most raw tokens; ties go to the more specific tier."""
        coverage: Counter[DictionaryTier] = Counter()
        for e in expansions:
            if not e.numeric and e.tier != DictionaryTier.NONE:
                coverage[e.tier] += e.span
        if coverage:
            best = max(coverage.values())
            return next(t.value for t in _TIER_ORDER if coverage[t] == best)
        if expansions and all(e.numeric for e in expansions):
            return "numeric"
        return DictionaryTier.NONE.value

    def _effective_context(
        self, point: RawPoint, context: NormalizationContext | None
    ) -> NormalizationContext:
        context = context or NormalizationContext()
        updates: dict[str, str] = {}
        if not context.units and point.units:
            updates["units"] = point.units
        if not context.vendor and self.config.infer_vendor:
            vendor = infer_vendor(point.original_name)
            if vendor:
                updates["vendor"] = vendor
        return context.model_copy(update=updates) if updates else context


def normalize_point_name(
    name: str,
    equipment_type: str | None = None,
    vendor: str | None = None,
    units: str | None = None,
) -> tuple[str, float]:
    """Normalize a bare point name.

    Returns:
        (normalized_name, confidence)
    """
    context = NormalizationContext(equipment_type=equipment_type, vendor=vendor, units=units)
    result = PointNormalizer().normalize(RawPoint(original_name=name), context)
    return result.normalized_name, result.confidence
