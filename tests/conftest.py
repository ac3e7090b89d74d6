"""Pytest configuration and fixtures for bacmap tests.

Provides common fixtures for testing.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from bacmap.canonical.normalizer import PointNormalizer
from bacmap.config import MatchingConfig, NormalizationConfig, reset_config
from bacmap.dictionaries.lookup import AcronymDictionary
from bacmap.matching.auto_mapper import EquipmentAutoMapper
from bacmap.matching.templates import TemplateEngine
from bacmap.models import Equipment, NormalizationContext, NormalizedPoint, ObjectType, RawPoint

_CONFIG_ENV_VARS = (
    "TEMPLATE_CONFIDENCE_THRESHOLD",
    "PAIRING_MIN_CONFIDENCE",
    "TYPE_MATCH_BONUS",
    "REVIEW_CONFIDENCE_THRESHOLD",
    "CREATE_NEW_THRESHOLD",
    "SUGGESTION_LIMIT",
    "ACRONYM_OVERRIDES_PATH",
    "INFER_VENDOR",
    "LOG_LEVEL",
    "JSON_LOGS",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Every test starts from default configuration."""
    for var in _CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def dictionary() -> AcronymDictionary:
    """Built-in acronym tables."""
    return AcronymDictionary()


@pytest.fixture
def normalizer(dictionary: AcronymDictionary) -> PointNormalizer:
    """Normalizer with default settings."""
    return PointNormalizer(dictionary=dictionary, config=NormalizationConfig())


@pytest.fixture
def vav_context() -> NormalizationContext:
    return NormalizationContext(equipment_type="VAV")


@pytest.fixture
def engine() -> TemplateEngine:
    return TemplateEngine(config=MatchingConfig())


@pytest.fixture
def auto_mapper() -> EquipmentAutoMapper:
    return EquipmentAutoMapper(config=MatchingConfig())


@pytest.fixture
def make_point() -> Callable[..., NormalizedPoint]:
    """Factory for NormalizedPoints without going through the normalizer."""

    def _make(
        name: str,
        point_id: str | None = None,
        object_type: ObjectType | None = None,
        object_instance: int | None = None,
        description: str = "",
        normalized_name: str | None = None,
        units: str | None = None,
        confidence: float = 0.9,
    ) -> NormalizedPoint:
        normalized = normalized_name if normalized_name is not None else name
        return NormalizedPoint(
            point_id=point_id or name,
            original_name=name,
            original_description=description,
            object_type=object_type,
            object_instance=object_instance,
            units=units,
            normalized_name=normalized,
            expanded_description=description or normalized,
            confidence=confidence,
            requires_manual_review=confidence < 0.5,
        )

    return _make


@pytest.fixture
def vav_source() -> Equipment:
    """Device-side VAV box whose points were mapped by hand."""
    return Equipment(id="bac-vav-1", name="VAV-1-01", type="VAV")


@pytest.fixture
def vav_target() -> Equipment:
    """Commissioning record the source VAV was mapped onto."""
    return Equipment(id="cx-101", name="VAV 1-01", type="Variable Air Volume")


@pytest.fixture
def vav_raw_points() -> list[RawPoint]:
    """Typical VAV point list."""
    return [
        RawPoint(
            original_name="ZN-T",
            object_type=ObjectType.ANALOG_INPUT,
            object_instance=1,
            units="°F",
        ),
        RawPoint(
            original_name="ZN-T_SP",
            object_type=ObjectType.ANALOG_VALUE,
            object_instance=2,
            units="°F",
        ),
        RawPoint(
            original_name="DMPR_POS",
            object_type=ObjectType.ANALOG_OUTPUT,
            object_instance=3,
            units="%",
        ),
        RawPoint(
            original_name="AF",
            object_type=ObjectType.ANALOG_INPUT,
            object_instance=4,
            units="cfm",
        ),
    ]
