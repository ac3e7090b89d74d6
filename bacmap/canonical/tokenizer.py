"""Split raw BACnet point names into ordered tokens.

"ZN-T_SP" -> ["ZN", "T", "SP"], "SAT1" -> ["SAT", "1"],
"ZoneTempSP" -> ["Zone", "Temp", "SP"].
"""

from __future__ import annotations

import re
from typing import NamedTuple

# Runs of characters between delimiters (underscore, hyphen, period, whitespace)
_CHUNK = re.compile(r"[^\s_.\-]+")

# Letter/digit transitions in either direction, and lower -> upper camel case
_BOUNDARY = re.compile(r"(?<=\d)(?=\D)|(?<=\D)(?=\d)|(?<=[a-z])(?=[A-Z])")


class Token(NamedTuple):
    """A token and its [start, end) offsets in the raw name."""

    text: str
    start: int
    end: int

    @property
    def is_numeric(self) -> bool:
        return self.text.isdigit()


def tokenize_spans(raw_name: str | None) -> list[Token]:
    """Tokenize keeping source offsets, so adjacent tokens can be re-joined
    exactly as written for compound lookups ("ZN-T", "DMPR_POS")."""
    if not raw_name:
        return []

    tokens: list[Token] = []
    for chunk in _CHUNK.finditer(raw_name):
        text = chunk.group()
        edges = [0, *(m.start() for m in _BOUNDARY.finditer(text)), len(text)]
        for a, b in zip(edges, edges[1:]):
            tokens.append(Token(text[a:b], chunk.start() + a, chunk.start() + b))
    return tokens


def tokenize(raw_name: str | None) -> list[str]:
    """Split a raw point name into tokens; empty input yields []."""
    return [token.text for token in tokenize_spans(raw_name)]
