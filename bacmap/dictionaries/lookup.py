"""Layered acronym lookup.

Tiers are consulted most specific first: vendor, equipment type, generic,
unit stem. Each tier is an independent upper-case keyed map; the first tier
holding the key wins, so a more specific tier always shadows a generic one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from bacmap.dictionaries.equipment import EQUIPMENT_ACRONYMS, resolve_equipment_type
from bacmap.dictionaries.generic import GENERIC_ACRONYMS
from bacmap.dictionaries.units import UNIT_STEMS, classify_units
from bacmap.dictionaries.vendor import VENDOR_ACRONYMS, resolve_vendor
from bacmap.models import DictionaryTier, NormalizationContext

logger = logging.getLogger(__name__)

TIER_STRENGTHS: dict[DictionaryTier, float] = {
    DictionaryTier.VENDOR: 0.95,
    DictionaryTier.EQUIPMENT: 0.95,
    DictionaryTier.GENERIC: 0.9,
    DictionaryTier.UNIT: 0.8,
    DictionaryTier.NONE: 0.0,
}


class DictionaryConfigError(Exception):
    """Acronym overlay file is invalid or missing."""

    pass


@dataclass(frozen=True)
class Expansion:
    """Result of a single dictionary lookup."""

    text: str
    tier: DictionaryTier
    strength: float


def _upper_keys(table: Mapping[str, str]) -> dict[str, str]:
    return {str(k).upper(): str(v) for k, v in table.items()}


class AcronymDictionary:
    """Read-only acronym tables with context-driven tier selection."""

    def __init__(
        self,
        generic: Mapping[str, str] | None = None,
        equipment: Mapping[str, Mapping[str, str]] | None = None,
        vendor: Mapping[str, Mapping[str, str]] | None = None,
        unit_stems: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        """Build a dictionary from explicit tables.

        Args:
            generic: Acronym -> expansion, applies to every point
            equipment: Equipment type key ("VAV") -> acronym table
            vendor: Vendor name ("Trane") -> acronym table
            unit_stems: Units class ("temperature") -> stem table
        """
        self._generic = _upper_keys(GENERIC_ACRONYMS if generic is None else generic)
        self._equipment = {
            k.upper(): _upper_keys(v)
            for k, v in (EQUIPMENT_ACRONYMS if equipment is None else equipment).items()
        }
        self._vendor = {
            k: _upper_keys(v) for k, v in (VENDOR_ACRONYMS if vendor is None else vendor).items()
        }
        self._unit_stems = {
            k.lower(): _upper_keys(v)
            for k, v in (UNIT_STEMS if unit_stems is None else unit_stems).items()
        }

    @classmethod
    def from_yaml(cls, path: Path) -> AcronymDictionary:
        """Built-in tables with a YAML overlay merged on top.

        The overlay may define any of ``generic``, ``equipment.<TYPE>``,
        ``vendor.<Vendor>`` and ``units.<class>``; its entries replace
        built-in entries with the same key.

        Raises:
            DictionaryConfigError: If the file is missing or malformed
        """
        if not path.exists():
            raise DictionaryConfigError(f"Acronym overlay not found: {path}")

        try:
            with path.open(encoding="utf-8") as f:
                overlay = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise DictionaryConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(overlay, dict):
            raise DictionaryConfigError(f"Acronym overlay must be a mapping: {path}")

        unknown = set(overlay) - {"generic", "equipment", "vendor", "units"}
        if unknown:
            raise DictionaryConfigError(f"Unknown overlay sections: {sorted(unknown)}")

        generic = dict(GENERIC_ACRONYMS)
        generic.update(_flat_section(overlay.get("generic"), "generic"))

        equipment = {k: dict(v) for k, v in EQUIPMENT_ACRONYMS.items()}
        for key, table in _nested_section(overlay.get("equipment"), "equipment").items():
            equipment.setdefault(key.upper(), {}).update(table)

        vendor = {k: dict(v) for k, v in VENDOR_ACRONYMS.items()}
        for key, table in _nested_section(overlay.get("vendor"), "vendor").items():
            canonical = next((v for v in vendor if v.lower() == key.lower()), key)
            vendor.setdefault(canonical, {}).update(table)

        stems = {k: dict(v) for k, v in UNIT_STEMS.items()}
        for key, table in _nested_section(overlay.get("units"), "units").items():
            stems.setdefault(key.lower(), {}).update(table)

        logger.info(f"Loaded acronym overlay from {path}")
        return cls(generic=generic, equipment=equipment, vendor=vendor, unit_stems=stems)

    @property
    def equipment_types(self) -> list[str]:
        return sorted(self._equipment)

    @property
    def vendors(self) -> list[str]:
        return sorted(self._vendor)

    def equipment_table(self, equipment_type: str | None) -> dict[str, str]:
        """Acronym table for an equipment type or any of its aliases."""
        key = self._resolve_equipment(equipment_type)
        return dict(self._equipment[key]) if key else {}

    def vendor_table(self, vendor: str | None) -> dict[str, str]:
        key = self._resolve_vendor(vendor)
        return dict(self._vendor[key]) if key else {}

    def resolve_tiers(
        self, context: NormalizationContext | None
    ) -> list[tuple[DictionaryTier, dict[str, str]]]:
        """Ordered (tier, table) list applicable to a context.

        Vendor and equipment tables appear only when the context names a
        known vendor or equipment type; unit stems only when the units hint
        has a recognised physical class.
        """
        context = context or NormalizationContext()
        tiers: list[tuple[DictionaryTier, dict[str, str]]] = []

        vendor = self._resolve_vendor(context.vendor)
        if vendor:
            tiers.append((DictionaryTier.VENDOR, self._vendor[vendor]))

        equipment = self._resolve_equipment(context.equipment_type)
        if equipment:
            tiers.append((DictionaryTier.EQUIPMENT, self._equipment[equipment]))

        tiers.append((DictionaryTier.GENERIC, self._generic))

        unit_class = classify_units(context.units)
        if unit_class and unit_class in self._unit_stems:
            tiers.append((DictionaryTier.UNIT, self._unit_stems[unit_class]))

        return tiers

    def expand(self, token: str, context: NormalizationContext | None = None) -> Expansion:
        """Expand a single token (or compound) using the context's tiers.

        Misses return the token unchanged with tier "none" and strength 0.
        """
        hit = self.lookup(token, self.resolve_tiers(context))
        if hit is not None:
            return hit
        return Expansion(token, DictionaryTier.NONE, TIER_STRENGTHS[DictionaryTier.NONE])

    @staticmethod
    def lookup(
        key: str, tiers: list[tuple[DictionaryTier, dict[str, str]]]
    ) -> Expansion | None:
        """First hit for ``key`` across already-resolved tiers, or None."""
        needle = key.upper()
        if not needle:
            return None
        for tier, table in tiers:
            text = table.get(needle)
            if text is not None:
                return Expansion(text, tier, TIER_STRENGTHS[tier])
        return None

    def _resolve_equipment(self, equipment_type: str | None) -> str | None:
        if not equipment_type:
            return None
        normalized = equipment_type.strip().upper()
        if normalized in self._equipment:
            return normalized
        canonical = resolve_equipment_type(equipment_type)
        return canonical if canonical in self._equipment else None

    def _resolve_vendor(self, vendor: str | None) -> str | None:
        if not vendor:
            return None
        lowered = vendor.strip().lower()
        for canonical in self._vendor:
            if canonical.lower() == lowered:
                return canonical
        canonical = resolve_vendor(vendor)
        return canonical if canonical in self._vendor else None


def _flat_section(section: Any, name: str) -> dict[str, str]:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise DictionaryConfigError(f"Overlay section '{name}' must be a mapping")
    for key, value in section.items():
        if not isinstance(value, str):
            raise DictionaryConfigError(
                f"Overlay entry '{name}.{key}' must map to a string, got {type(value).__name__}"
            )
    return {str(k).upper(): v for k, v in section.items()}


def _nested_section(section: Any, name: str) -> dict[str, dict[str, str]]:
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise DictionaryConfigError(f"Overlay section '{name}' must be a mapping")
    return {str(k): _flat_section(v, f"{name}.{k}") for k, v in section.items()}


_default: AcronymDictionary | None = None


def get_dictionary(overrides_path: Path | None = None) -> AcronymDictionary:
    """Shared built-in dictionary, or a fresh overlay dictionary when a path is given."""
    global _default
    if overrides_path is not None:
        return AcronymDictionary.from_yaml(overrides_path)
    if _default is None:
        _default = AcronymDictionary()
    return _default
