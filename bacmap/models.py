"""bacmap Pydantic models for type-safe data validation.

Raw and normalized points, mapping templates and their applications,
equipment pairings. Everything except MappingTemplate is immutable once built.
"""

from __future__ import annotations

import threading
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator


class ObjectType(str, Enum):
    """BACnet object types found in device exports."""

    ANALOG_INPUT = "analog-input"
    ANALOG_OUTPUT = "analog-output"
    ANALOG_VALUE = "analog-value"
    BINARY_INPUT = "binary-input"
    BINARY_OUTPUT = "binary-output"
    BINARY_VALUE = "binary-value"
    MULTISTATE_INPUT = "multistate-input"
    MULTISTATE_OUTPUT = "multistate-output"
    MULTISTATE_VALUE = "multistate-value"

    @property
    def code(self) -> str:
        """BACnet short code (AI, AO, AV, ...)."""
        return _OBJECT_TYPE_CODES[self]

    @property
    def is_output(self) -> bool:
        return self.value.endswith("-output")

    @property
    def is_input(self) -> bool:
        return self.value.endswith("-input")

    @classmethod
    def parse(cls, value: str | ObjectType | None) -> ObjectType | None:
        """Parse a short code ("AI") or full name ("analog-input"), case-insensitive."""
        if value is None or isinstance(value, ObjectType):
            return value
        text = value.strip().lower().replace("_", "-").replace(" ", "-")
        if not text:
            return None
        for member, code in _OBJECT_TYPE_CODES.items():
            if text == member.value or text == code.lower():
                return member
        raise ValueError(f"Unknown BACnet object type: {value!r}")


_OBJECT_TYPE_CODES = {
    ObjectType.ANALOG_INPUT: "AI",
    ObjectType.ANALOG_OUTPUT: "AO",
    ObjectType.ANALOG_VALUE: "AV",
    ObjectType.BINARY_INPUT: "BI",
    ObjectType.BINARY_OUTPUT: "BO",
    ObjectType.BINARY_VALUE: "BV",
    ObjectType.MULTISTATE_INPUT: "MI",
    ObjectType.MULTISTATE_OUTPUT: "MO",
    ObjectType.MULTISTATE_VALUE: "MV",
}


class PointFunction(str, Enum):
    """What a point measures or controls."""

    TEMPERATURE_SENSOR = "temperature-sensor"
    TEMPERATURE_SETPOINT = "temperature-setpoint"
    AIRFLOW_SENSOR = "airflow-sensor"
    AIRFLOW_SETPOINT = "airflow-setpoint"
    AIRFLOW_COMMAND = "airflow-command"
    PRESSURE_SENSOR = "pressure-sensor"
    PRESSURE_SETPOINT = "pressure-setpoint"
    DAMPER_POSITION = "damper-position"
    VALVE_POSITION = "valve-position"
    FAN_STATUS = "fan-status"
    PUMP_STATUS = "pump-status"
    ALARM_STATUS = "alarm-status"
    HUMIDITY_SENSOR = "humidity-sensor"
    CO2_SENSOR = "co2-sensor"
    ENERGY_METER = "energy-meter"
    POWER_SENSOR = "power-sensor"
    OCCUPANCY_STATUS = "occupancy-status"
    UNKNOWN = "unknown"

    @property
    def is_setpoint(self) -> bool:
        return self.value.endswith("-setpoint")


class PointCategory(str, Enum):
    """Coarse role of a point."""

    SENSOR = "sensor"
    COMMAND = "command"
    STATUS = "status"
    UNKNOWN = "unknown"


class ConfidenceLevel(str, Enum):
    """Bucketed normalization confidence."""

    HIGH = "high"  # >= 0.8
    MEDIUM = "medium"  # >= 0.5
    LOW = "low"  # >= 0.2
    UNKNOWN = "unknown"  # < 0.2

    @classmethod
    def from_score(cls, score: float) -> ConfidenceLevel:
        if score >= 0.8:
            return cls.HIGH
        if score >= 0.5:
            return cls.MEDIUM
        if score >= 0.2:
            return cls.LOW
        return cls.UNKNOWN


class DictionaryTier(str, Enum):
    """Acronym dictionary tier, most specific first."""

    VENDOR = "vendor"
    EQUIPMENT = "equipment"
    GENERIC = "generic"
    UNIT = "unit"
    NONE = "none"


class MatchingFacet(str, Enum):
    """Point field used as the template matching key."""

    OBJECT_REFERENCE = "object-reference"
    DISPLAY_NAME = "display-name"
    DESCRIPTION = "description"


class MappingType(str, Enum):
    """How an equipment pairing was established."""

    EXACT = "exact"
    FUZZY = "fuzzy"
    MANUAL = "manual"


def _object_reference(object_type: ObjectType | None, instance: int | None) -> str:
    if object_type is None or instance is None:
        return ""
    return f"{object_type.code}{instance}"


class RawPoint(BaseModel):
    """Point as produced by device-export ingestion."""

    model_config = ConfigDict(frozen=True)

    original_name: str = ""
    original_description: str | None = None
    object_type: ObjectType | None = None
    object_instance: int | None = None
    units: str | None = None
    point_id: str | None = None

    @field_validator("original_name", mode="before")
    @classmethod
    def coerce_name(cls, v: object) -> str:
        # Malformed names degrade to an empty name instead of failing ingestion
        return "" if v is None else str(v)

    @field_validator("object_type", mode="before")
    @classmethod
    def parse_object_type(cls, v: object) -> ObjectType | None:
        if isinstance(v, str):
            return ObjectType.parse(v)
        return v

    @property
    def object_reference(self) -> str:
        """Object type code plus instance, e.g. "AV23"."""
        return _object_reference(self.object_type, self.object_instance)

    @property
    def key(self) -> str:
        """Stable identifier: caller id, then object reference, then name."""
        return self.point_id or self.object_reference or self.original_name


class NormalizationContext(BaseModel):
    """Hints that select the dictionary tiers consulted during expansion."""

    model_config = ConfigDict(frozen=True)

    equipment_type: str | None = None
    vendor: str | None = None
    units: str | None = None


class TokenExpansion(BaseModel):
    """How one token (or compound of adjacent tokens) was expanded."""

    model_config = ConfigDict(frozen=True)

    original: str
    expansion: str
    tier: DictionaryTier
    strength: float
    span: int = 1  # raw tokens consumed
    numeric: bool = False

    @property
    def resolved(self) -> bool:
        return self.numeric or self.tier != DictionaryTier.NONE


class NormalizedPoint(BaseModel):
    """A RawPoint after acronym expansion, classification and tagging."""

    model_config = ConfigDict(frozen=True)

    point_id: str
    original_name: str
    original_description: str = ""
    object_type: ObjectType | None = None
    object_instance: int | None = None
    units: str | None = None

    normalized_name: str
    expanded_description: str
    point_function: PointFunction = PointFunction.UNKNOWN
    category: PointCategory = PointCategory.UNKNOWN
    haystack_tags: frozenset[str] = Field(default_factory=frozenset)

    confidence: float = Field(ge=0.0, le=1.0)
    normalization_method: str = DictionaryTier.NONE.value
    requires_manual_review: bool = True
    tokens: tuple[TokenExpansion, ...] = ()

    @property
    def confidence_level(self) -> ConfidenceLevel:
        return ConfidenceLevel.from_score(self.confidence)

    @property
    def object_reference(self) -> str:
        return _object_reference(self.object_type, self.object_instance)


class UnresolvedToken(BaseModel):
    """A token no dictionary tier expanded, counted across a batch.

    Candidates for a dictionary overlay entry.
    """

    model_config = ConfigDict(frozen=True)

    token: str  # upper-cased
    frequency: int = Field(ge=1)
    example_points: tuple[str, ...] = ()


class BatchNormalizationSummary(BaseModel):
    """Quality counts for one batch of normalized points."""

    model_config = ConfigDict(frozen=True)

    points: tuple[NormalizedPoint, ...] = ()
    total_points: int = 0
    high_confidence_count: int = 0
    medium_confidence_count: int = 0
    low_confidence_count: int = 0
    unknown_confidence_count: int = 0
    requires_review_count: int = 0
    average_confidence: float = 0.0
    unresolved_tokens: tuple[UnresolvedToken, ...] = ()  # most frequent first


class Equipment(BaseModel):
    """Equipment record from either inventory."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str = ""
    description: str | None = None
    location: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        # Commissioning inventories use integer ids
        return str(v)


class PointMapping(BaseModel):
    """One row of a mapping template, captured from a verified mapping."""

    model_config = ConfigDict(frozen=True)

    template_point_id: str
    cur_ref: str = ""
    display_name: str = ""
    description: str = ""
    nav_name: str = ""
    units: str | None = None
    point_function: PointFunction = PointFunction.UNKNOWN
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    def facet_value(self, facet: MatchingFacet) -> str:
        if facet == MatchingFacet.OBJECT_REFERENCE:
            return self.cur_ref
        if facet == MatchingFacet.DESCRIPTION:
            return self.description
        return self.display_name


class MappingTemplate(BaseModel):
    """Reusable point-mapping pattern harvested from one verified equipment mapping.

    Usage statistics are the only mutable state and change only through
    record_application(), which serializes concurrent updates.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    source_equipment_id: str
    source_equipment_type: str = ""
    point_mappings: tuple[PointMapping, ...] = ()
    usage_count: int = Field(default=0, ge=0)
    success_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    _lock: Any = PrivateAttr(default_factory=threading.Lock)

    def record_application(self, success: bool) -> tuple[int, float]:
        """Fold one application outcome into the running statistics.

        Returns:
            (usage_count, success_rate) after the update
        """
        with self._lock:
            n = self.usage_count + 1
            rate = (self.success_rate * (n - 1) + (1.0 if success else 0.0)) / n
            self.usage_count = n
            self.success_rate = rate
            return n, rate


class TemplateMatchingOptions(BaseModel):
    """Per-application matching settings."""

    model_config = ConfigDict(frozen=True)

    matching_facet: MatchingFacet = MatchingFacet.DISPLAY_NAME
    confidence_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    allow_partial_matches: bool = True
    copy_nav_name: bool = True
    copy_units: bool = True


class AppliedPointMapping(BaseModel):
    """A template point bound to a target point."""

    model_config = ConfigDict(frozen=True)

    template_point_id: str
    target_point_id: str
    nav_name: str
    units: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)
    exact: bool = False


class TemplateApplication(BaseModel):
    """Immutable record of one template application attempt."""

    model_config = ConfigDict(frozen=True)

    template_id: str
    target_equipment_id: str
    matching_facet: MatchingFacet
    applied_mappings: tuple[AppliedPointMapping, ...] = ()
    unmatched_template_point_ids: tuple[str, ...] = ()
    matched_count: int = 0
    unmatched_count: int = 0
    average_confidence: float = 0.0
    is_successful: bool = False


class TemplateEffectiveness(BaseModel):
    """How well a template has performed over its recorded applications.

    ``effectiveness`` is success_rate x point_match_rate x average_confidence;
    all four are 0.0 for a template that was never applied.
    """

    model_config = ConfigDict(frozen=True)

    template_id: str
    application_count: int = 0
    success_rate: float = 0.0
    point_match_rate: float = 0.0
    average_confidence: float = 0.0
    effectiveness: float = 0.0
    recommendations: tuple[str, ...] = ()


class BulkMappingPair(BaseModel):
    """Suggested equipment-to-equipment pairing."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    target_id: str
    confidence: float = Field(ge=0.0, le=1.0)
    is_manual: bool = False
    mapping_type: MappingType = MappingType.FUZZY


class EquipmentMapping(BaseModel):
    """Accepted link between a source and a target equipment."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    target_id: str
    mapping_type: MappingType
    confidence: float = Field(ge=0.0, le=1.0)
    is_verified: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)


class AutoMappingResult(BaseModel):
    """Exact fast-path matches and fuzzy suggestions for one inventory pass."""

    model_config = ConfigDict(frozen=True)

    exact_pairs: tuple[BulkMappingPair, ...] = ()
    suggested_pairs: tuple[BulkMappingPair, ...] = ()
    unmatched_source_ids: tuple[str, ...] = ()


class NameMatchSuggestion(BaseModel):
    """Ranked target candidate for one unmapped source equipment."""

    model_config = ConfigDict(frozen=True)

    target_id: str
    target_name: str
    target_type: str = ""
    confidence: float = Field(ge=0.0, le=1.0)
    reason: str = ""
