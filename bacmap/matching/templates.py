"""Mapping templates: capture a verified equipment mapping, replay it on similar equipment.

A template is harvested from one equipment whose points were mapped by hand.
Applying it to another equipment of the same kind binds each template point
to a target point by the selected facet (object reference, display name or
description): exact case-insensitive equality first, then, if allowed, the
best similarity score at or above the threshold.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from bacmap.config import MatchingConfig, get_config
from bacmap.matching.similarity import similarity
from bacmap.models import (
    AppliedPointMapping,
    Equipment,
    MappingTemplate,
    MatchingFacet,
    NormalizedPoint,
    PointMapping,
    TemplateApplication,
    TemplateMatchingOptions,
)

logger = logging.getLogger(__name__)


def point_facet(point: NormalizedPoint, facet: MatchingFacet) -> str:
    """Facet text of a normalized point, as captured into templates."""
    if facet == MatchingFacet.OBJECT_REFERENCE:
        return point.object_reference
    if facet == MatchingFacet.DESCRIPTION:
        return point.original_description or point.expanded_description
    return point.original_name


class TemplateEngine:
    """Creates and applies MappingTemplates."""

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or get_config().matching

    def default_options(self) -> TemplateMatchingOptions:
        return TemplateMatchingOptions(
            confidence_threshold=self.config.template_confidence_threshold
        )

    def create_template(
        self,
        source_equipment: Equipment,
        target_equipment: Equipment,
        source_points: Sequence[NormalizedPoint],
        nav_names: Mapping[str, str] | None = None,
        name: str | None = None,
    ) -> MappingTemplate:
        """Capture the mapping of ``source_equipment`` as a reusable template.

        Pure capture: no matching happens here.

        Args:
            source_equipment: Device-side equipment whose points were mapped
            target_equipment: Commissioning equipment they were mapped onto
            source_points: Normalized points of the source equipment, in order
            nav_names: Assigned target labels keyed by point_id; points
                without one keep their normalized name
            name: Template name (default: "<target name> Template")

        Returns:
            MappingTemplate with one PointMapping per source point
        """
        nav_names = nav_names or {}
        mappings = tuple(
            PointMapping(
                template_point_id=point.point_id,
                cur_ref=point_facet(point, MatchingFacet.OBJECT_REFERENCE),
                display_name=point_facet(point, MatchingFacet.DISPLAY_NAME),
                description=point_facet(point, MatchingFacet.DESCRIPTION),
                nav_name=nav_names.get(point.point_id)
                or point.normalized_name
                or point.original_name,
                units=point.units,
                point_function=point.point_function,
                confidence=point.confidence,
            )
            for point in source_points
        )

        template = MappingTemplate(
            name=name or f"{target_equipment.name} Template",
            source_equipment_id=source_equipment.id,
            source_equipment_type=source_equipment.type or target_equipment.type,
            point_mappings=mappings,
        )
        logger.info(
            f"Created template {template.name!r} with {len(mappings)} points "
            f"from equipment {source_equipment.id}"
        )
        return template

    def find_matching_point(
        self,
        template_point: PointMapping,
        target_points: Sequence[NormalizedPoint],
        options: TemplateMatchingOptions,
    ) -> tuple[NormalizedPoint, float, bool] | None:
        """Best target for one template point.

        Returns:
            (point, confidence, exact) or None when nothing qualifies
        """
        facet = options.matching_facet
        search = template_point.facet_value(facet).strip()
        if not search:
            return None

        needle = search.casefold()
        for point in target_points:
            if point_facet(point, facet).strip().casefold() == needle:
                return point, 1.0, True

        if not options.allow_partial_matches:
            return None

        best: NormalizedPoint | None = None
        best_score = 0.0
        for point in target_points:
            candidate = point_facet(point, facet)
            if not candidate.strip():
                continue
            score = similarity(search, candidate)
            # Strictly greater keeps the first of equally good candidates
            if score >= options.confidence_threshold and (best is None or score > best_score):
                best, best_score = point, score

        if best is None:
            return None
        return best, best_score, False

    def apply_template(
        self,
        template: MappingTemplate,
        target_equipment: Equipment,
        target_points: Sequence[NormalizedPoint],
        options: TemplateMatchingOptions | None = None,
    ) -> TemplateApplication:
        """Bind every template point to a point of ``target_equipment``.

        Updates the template's usage statistics through
        MappingTemplate.record_application(), so concurrent applications
        of one template are all counted.

        Args:
            template: Template to replay
            target_equipment: Equipment receiving the mapping
            target_points: Its normalized points
            options: Matching settings (default: configured threshold,
                display-name facet, partial matches allowed)

        Returns:
            TemplateApplication
        """
        options = options or self.default_options()

        applied: list[AppliedPointMapping] = []
        unmatched: list[str] = []
        for template_point in template.point_mappings:
            match = self.find_matching_point(template_point, target_points, options)
            if match is None:
                unmatched.append(template_point.template_point_id)
                continue

            point, confidence, exact = match
            applied.append(
                AppliedPointMapping(
                    template_point_id=template_point.template_point_id,
                    target_point_id=point.point_id,
                    nav_name=template_point.nav_name
                    if options.copy_nav_name
                    else (point.normalized_name or point.original_name),
                    units=template_point.units if options.copy_units else point.units,
                    confidence=confidence,
                    exact=exact,
                )
            )

        matched = len(applied)
        average = sum(m.confidence for m in applied) / matched if matched else 0.0
        successful = matched > 0 and average >= options.confidence_threshold

        application = TemplateApplication(
            template_id=template.id,
            target_equipment_id=target_equipment.id,
            matching_facet=options.matching_facet,
            applied_mappings=tuple(applied),
            unmatched_template_point_ids=tuple(unmatched),
            matched_count=matched,
            unmatched_count=len(template.point_mappings) - matched,
            average_confidence=average,
            is_successful=successful,
        )

        usage_count, success_rate = template.record_application(successful)
        logger.info(
            f"Applied template {template.id} to {target_equipment.id}: "
            f"{matched}/{len(template.point_mappings)} matched, "
            f"avg={average:.2f}, success_rate={success_rate:.2f} over {usage_count} uses"
        )
        return application
