"""Acronym dictionaries for BACnet point names."""

from bacmap.dictionaries.equipment import resolve_equipment_type
from bacmap.dictionaries.lookup import (
    TIER_STRENGTHS,
    AcronymDictionary,
    DictionaryConfigError,
    Expansion,
    get_dictionary,
)
from bacmap.dictionaries.units import classify_units
from bacmap.dictionaries.vendor import infer_vendor, resolve_vendor

__all__ = [
    "TIER_STRENGTHS",
    "AcronymDictionary",
    "DictionaryConfigError",
    "Expansion",
    "classify_units",
    "get_dictionary",
    "infer_vendor",
    "resolve_equipment_type",
    "resolve_vendor",
]
