"""Project Haystack marker tags for normalized points."""

from __future__ import annotations

from bacmap.dictionaries.units import classify_units
from bacmap.models import PointCategory, PointFunction

# Expanded word -> marker tags
WORD_MARKERS: dict[str, tuple[str, ...]] = {
    "temperature": ("temp",),
    "temp": ("temp",),
    "flow": ("flow",),
    "airflow": ("air", "flow"),
    "cfm": ("flow",),
    "gpm": ("flow",),
    "pressure": ("pressure",),
    "power": ("power",),
    "energy": ("energy",),
    "humidity": ("humidity",),
    "co2": ("co2",),
    "air": ("air",),
    "water": ("water",),
    "steam": ("steam",),
    "chilled": ("chilled",),
    "hot": ("hot",),
    "condenser": ("condenser",),
    "damper": ("damper",),
    "valve": ("valve",),
    "fan": ("fan",),
    "pump": ("pump",),
    "zone": ("zone",),
    "room": ("space",),
    "space": ("space",),
    "supply": ("supply",),
    "return": ("return",),
    "discharge": ("discharge",),
    "outside": ("outside",),
    "outdoor": ("outside",),
    "mixed": ("mixed",),
    "exhaust": ("exhaust",),
    "static": ("static",),
    "speed": ("speed",),
    "cooling": ("cool",),
    "heating": ("heat",),
    "reheat": ("heat",),
    "occupancy": ("occ",),
    "occupied": ("occ",),
    "alarm": ("alarm",),
}

UNIT_CLASS_MARKERS: dict[str, str] = {
    "temperature": "temp",
    "pressure": "pressure",
    "flow": "flow",
    "humidity": "humidity",
    "power": "power",
}


def haystack_tags(
    words: frozenset[str],
    category: PointCategory,
    function: PointFunction,
    units: str | None = None,
) -> frozenset[str]:
    """Marker tags for a point.

    Always includes "point". Sensors and status points get "sensor";
    commands get "sp" for setpoints and "cmd" otherwise. Substance and
    measurement markers come from the expanded words and the units class.
    """
    tags = {"point"}

    if category in (PointCategory.SENSOR, PointCategory.STATUS):
        tags.add("sensor")
    elif category == PointCategory.COMMAND:
        tags.add("sp" if function.is_setpoint else "cmd")

    for word in words:
        tags.update(WORD_MARKERS.get(word, ()))

    # Unit markers only qualify a named point
    unit_class = classify_units(units) if words else None
    if unit_class in UNIT_CLASS_MARKERS:
        tags.add(UNIT_CLASS_MARKERS[unit_class])

    return frozenset(tags)
