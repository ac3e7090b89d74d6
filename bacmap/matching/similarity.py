"""String similarity scoring for template and equipment matching.

Two scorers:
- similarity(): cheap containment / shared-character score used by the
  template engine and the bulk auto-mapper
- name_similarity(): separator-insensitive Levenshtein ratio (RapidFuzz)
  used for ranked suggestion lists
"""

from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein

_NON_ALNUM = re.compile(r"[\W_]+")
_SEPARATORS = re.compile(r"[-_\s.]+")
_PADDED_NUMBER = re.compile(r"(?<!\d)0+(?=\d)")


def _strip(text: str) -> str:
    return _NON_ALNUM.sub("", text.casefold())


def _unpad(text: str) -> str:
    return _PADDED_NUMBER.sub("", text)


def similarity(a: str | None, b: str | None) -> float:
    """Score how well ``b`` matches ``a`` in [0, 1].

    1. Identical ignoring case -> 1.0
    2. Punctuation and whitespace removed; either side empty -> 0.0
    3. The longer contains the shorter -> len(shorter) / len(longer)
    4. Otherwise characters of the shorter (with repetition) present
       anywhere in the longer, over len(longer)

    On equal length ``a`` is the shorter (needle), so call it as
    similarity(template_value, candidate_value).

    Examples:
        similarity("VAV-101", "VAV101") -> 1.0
        similarity("AHU", "AHU-1") -> 0.75
    """
    a = a or ""
    b = b or ""
    if a.casefold() == b.casefold() and a:
        return 1.0

    left, right = _strip(a), _strip(b)
    if not left or not right:
        return 0.0

    shorter, longer = (left, right) if len(left) <= len(right) else (right, left)
    if shorter in longer:
        return len(shorter) / len(longer)

    present = sum(1 for ch in shorter if ch in longer)
    return present / len(longer)


def name_similarity(a: str | None, b: str | None) -> float:
    """Equipment-name similarity that keeps numbers significant.

    - equal after removing every non-alphanumeric character -> 1.0
    - equal once zero padding is dropped from numbers (VAV-7 / VAV-07) -> 0.95
    - one contains the other -> 0.8 x len(shorter) / len(longer)
    - otherwise normalized Levenshtein similarity
    """
    left_norm, right_norm = _strip(a or ""), _strip(b or "")
    if not left_norm or not right_norm:
        return 0.0
    if left_norm == right_norm:
        return 1.0

    if _unpad(left_norm) == _unpad(right_norm):
        return 0.95

    left = _SEPARATORS.sub("", (a or "").lower())
    right = _SEPARATORS.sub("", (b or "").lower())

    if left in right or right in left:
        shorter, longer = sorted((left, right), key=len)
        return 0.8 * (len(shorter) / len(longer))

    return Levenshtein.normalized_similarity(left, right)
