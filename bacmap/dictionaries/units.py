"""Unit-stem tier: short stems that only resolve with a matching units hint."""

from __future__ import annotations

import re

# Physical class -> stems expanded only when the point's units are of that class
UNIT_STEMS: dict[str, dict[str, str]] = {
    "temperature": {"T": "Temperature", "TMP": "Temperature", "TE": "Temperature"},
    "pressure": {"P": "Pressure", "PR": "Pressure"},
    "flow": {"F": "Flow", "FL": "Flow"},
    "humidity": {"H": "Humidity"},
    "power": {"W": "Power", "PW": "Power"},
}

_UNIT_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("temperature", re.compile(r"°|deg|^[cfk]$|fahrenheit|celsius|kelvin", re.IGNORECASE)),
    ("humidity", re.compile(r"%\s*rh|^rh$|relative", re.IGNORECASE)),
    ("pressure", re.compile(r"psi|^k?pa$|pascal|in\.?\s*w\.?c|inh2o|inhg|bar|wc$", re.IGNORECASE)),
    ("flow", re.compile(r"cfm|gpm|l/s|^lps$|m3/h|m³/h|cubic", re.IGNORECASE)),
    ("power", re.compile(r"^k?w$|kwh|watt|^hp$|btu", re.IGNORECASE)),
]


def classify_units(units: str | None) -> str | None:
    """Return the physical class of a units string ("°F" -> "temperature")."""
    if not units:
        return None

    text = units.strip()
    for unit_class, pattern in _UNIT_PATTERNS:
        if pattern.search(text):
            return unit_class
    return None
