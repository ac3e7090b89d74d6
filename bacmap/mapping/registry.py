"""In-memory registries for mapping templates and accepted equipment mappings.

Persistence is left to callers; these stores hold the working set for one
commissioning session and enforce reference integrity on every write.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence

from bacmap.matching.templates import TemplateEngine
from bacmap.models import (
    BulkMappingPair,
    Equipment,
    EquipmentMapping,
    MappingTemplate,
    MappingType,
    NormalizedPoint,
    TemplateApplication,
    TemplateEffectiveness,
    TemplateMatchingOptions,
)

logger = logging.getLogger(__name__)

# Effectiveness report cutoffs
LOW_EFFECTIVENESS = 0.6
LOW_POINT_MATCH_RATE = 0.7
LOW_MATCH_CONFIDENCE = 0.8


class ReferenceIntegrityError(Exception):
    """A template or equipment id does not resolve."""

    pass


class TemplateNotFoundError(ReferenceIntegrityError):
    """Template id is not registered."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Template not found: {template_id}")
        self.template_id = template_id


class EquipmentNotFoundError(ReferenceIntegrityError):
    """Equipment id is not part of the inventory."""

    def __init__(self, equipment_id: str, inventory: str) -> None:
        super().__init__(f"Equipment {equipment_id} not found in {inventory} inventory")
        self.equipment_id = equipment_id
        self.inventory = inventory


class TemplateRegistry:
    """Templates keyed by id, plus the history of their applications."""

    def __init__(self, engine: TemplateEngine | None = None) -> None:
        self.engine = engine or TemplateEngine()
        self._templates: dict[str, MappingTemplate] = {}
        self._applications: dict[str, list[TemplateApplication]] = {}
        self._lock = threading.Lock()

    def add(self, template: MappingTemplate) -> MappingTemplate:
        """Register (or replace) a template."""
        with self._lock:
            self._templates[template.id] = template
            self._applications.setdefault(template.id, [])
        return template

    def get(self, template_id: str) -> MappingTemplate:
        """Look up a template.

        Raises:
            TemplateNotFoundError: If the id is not registered
        """
        with self._lock:
            template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def list(self) -> list[MappingTemplate]:
        with self._lock:
            return list(self._templates.values())

    def for_equipment_type(self, equipment_type: str) -> list[MappingTemplate]:
        """Templates whose source equipment type equals ``equipment_type``, ignoring case."""
        wanted = equipment_type.strip().casefold()
        return [t for t in self.list() if t.source_equipment_type.strip().casefold() == wanted]

    def delete(self, template_id: str) -> None:
        """Remove a template and its application history.

        Raises:
            TemplateNotFoundError: If the id is not registered
        """
        with self._lock:
            if template_id not in self._templates:
                raise TemplateNotFoundError(template_id)
            del self._templates[template_id]
            self._applications.pop(template_id, None)
        logger.info(f"Deleted template {template_id}")

    def apply(
        self,
        template_id: str,
        target_equipment: Equipment,
        target_points: Sequence[NormalizedPoint],
        options: TemplateMatchingOptions | None = None,
    ) -> TemplateApplication:
        """Apply a registered template and record the application.

        Raises:
            TemplateNotFoundError: If the id is not registered
        """
        template = self.get(template_id)
        application = self.engine.apply_template(template, target_equipment, target_points, options)
        with self._lock:
            self._applications.setdefault(template_id, []).append(application)
        return application

    def applications(self, template_id: str) -> list[TemplateApplication]:
        """Application history of one template, oldest first.

        Raises:
            TemplateNotFoundError: If the id is not registered
        """
        with self._lock:
            if template_id not in self._templates:
                raise TemplateNotFoundError(template_id)
            return list(self._applications.get(template_id, []))

    def effectiveness(self, template_id: str) -> TemplateEffectiveness:
        """Score a template from its application history.

        Per application the point match rate is matched / template points.
        Rates and confidence are averaged over all applications, failed ones
        included.

        Raises:
            TemplateNotFoundError: If the id is not registered
        """
        history = self.applications(template_id)
        if not history:
            return TemplateEffectiveness(
                template_id=template_id, recommendations=("Template has not been used yet",)
            )

        count = len(history)
        success_rate = sum(1 for a in history if a.is_successful) / count
        match_rate = sum(_point_match_rate(a) for a in history) / count
        confidence = sum(a.average_confidence for a in history) / count
        effectiveness = success_rate * match_rate * confidence

        recommendations = []
        if effectiveness < LOW_EFFECTIVENESS:
            recommendations.append("Template effectiveness is low; review its point mappings")
        if match_rate < LOW_POINT_MATCH_RATE:
            recommendations.append("Point match rate is low; allow partial matches or lower the threshold")
        if confidence < LOW_MATCH_CONFIDENCE:
            recommendations.append("Match confidence is low; try a more specific matching facet")

        return TemplateEffectiveness(
            template_id=template_id,
            application_count=count,
            success_rate=success_rate,
            point_match_rate=match_rate,
            average_confidence=confidence,
            effectiveness=effectiveness,
            recommendations=tuple(recommendations),
        )


def _point_match_rate(application: TemplateApplication) -> float:
    total = application.matched_count + application.unmatched_count
    return application.matched_count / total if total else 0.0


class EquipmentMappingRegistry:
    """Accepted source -> target equipment mappings; at most one per source."""

    def __init__(self, sources: Iterable[Equipment], targets: Iterable[Equipment]) -> None:
        """Initialize registry over both inventories.

        Args:
            sources: Device-side equipment
            targets: Commissioning equipment
        """
        self._sources = {e.id: e for e in sources}
        self._targets = {e.id: e for e in targets}
        self._mappings: dict[str, EquipmentMapping] = {}
        self._lock = threading.Lock()

    def accept(
        self,
        source_id: str,
        target_id: str,
        mapping_type: MappingType = MappingType.MANUAL,
        confidence: float = 1.0,
        verified: bool = False,
    ) -> EquipmentMapping:
        """Record a mapping, superseding any earlier mapping of the same source.

        Raises:
            EquipmentNotFoundError: If either id is not in its inventory
        """
        self._check_ids(source_id, target_id)
        mapping = EquipmentMapping(
            source_id=source_id,
            target_id=target_id,
            mapping_type=mapping_type,
            confidence=confidence,
            is_verified=verified,
        )
        self._commit([mapping])
        return mapping

    def accept_pairs(
        self, pairs: Iterable[BulkMappingPair], verified: bool = False
    ) -> list[EquipmentMapping]:
        """Accept suggested pairs; exact pairs are always marked verified.

        All or nothing: every id is checked before any mapping is stored.

        Raises:
            EquipmentNotFoundError: If any pair names an unknown id
        """
        pairs = list(pairs)
        for pair in pairs:
            self._check_ids(pair.source_id, pair.target_id)

        accepted = [
            EquipmentMapping(
                source_id=pair.source_id,
                target_id=pair.target_id,
                mapping_type=MappingType.MANUAL if pair.is_manual else pair.mapping_type,
                confidence=pair.confidence,
                is_verified=verified or pair.mapping_type == MappingType.EXACT,
            )
            for pair in pairs
        ]
        self._commit(accepted)
        return accepted

    def get(self, source_id: str) -> EquipmentMapping | None:
        with self._lock:
            return self._mappings.get(source_id)

    def remove(self, source_id: str) -> None:
        """Drop the mapping of a source.

        Raises:
            EquipmentNotFoundError: If the source is not in the inventory
        """
        if source_id not in self._sources:
            raise EquipmentNotFoundError(source_id, "source")
        with self._lock:
            self._mappings.pop(source_id, None)

    def mapped_ids(self) -> tuple[set[str], set[str]]:
        """(mapped source ids, mapped target ids)."""
        with self._lock:
            mappings = list(self._mappings.values())
        return {m.source_id for m in mappings}, {m.target_id for m in mappings}

    def all(self) -> list[EquipmentMapping]:
        with self._lock:
            return list(self._mappings.values())

    def _check_ids(self, source_id: str, target_id: str) -> None:
        if source_id not in self._sources:
            raise EquipmentNotFoundError(source_id, "source")
        if target_id not in self._targets:
            raise EquipmentNotFoundError(target_id, "target")

    def _commit(self, mappings: list[EquipmentMapping]) -> None:
        """Store mappings in one locked write, later ones superseding earlier."""
        moved = []
        with self._lock:
            for mapping in mappings:
                previous = self._mappings.get(mapping.source_id)
                self._mappings[mapping.source_id] = mapping
                if previous is not None and previous.target_id != mapping.target_id:
                    moved.append((mapping.source_id, previous.target_id, mapping.target_id))

        for source_id, old_target, new_target in moved:
            logger.info(f"Mapping for {source_id} moved from {old_target} to {new_target}")
