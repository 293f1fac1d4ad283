# skin_wellness/chart/surface.py
"""
Visualization Surface
---------------------
Interactive radial chart. Owns a single active-segment slot and turns clicks
into selection changes, +/- level adjustments and "view details" requests.

Callbacks (all optional, fired synchronously):
    on_segment_selected(category_id | None)
    on_adjust_level(category_id, assessments)     full updated list, unbuffered
    on_view_details(category_id)

Click handling mirrors DOM bubbling: every segment, label, button and detail
handler stops propagation, and the canvas handler only runs for clicks that
were not stopped. A click on a segment therefore never also clears the
selection it just made.
"""
import structlog
from typing import Callable, Dict, List, Optional, Sequence

from skin_wellness.chart.geometry import PolarGeometry, Point
from skin_wellness.chart.scene import (
    BG_FILL_ALPHA,
    BG_FILL_ALPHA_ACTIVE,
    BG_STROKE_ALPHA,
    BG_STROKE_ALPHA_ACTIVE,
    AdjustButton,
    ChartScene,
    ChartTarget,
    ClickEvent,
    DetailArc,
    LabelPill,
    SegmentShape,
    hex_to_rgba,
)
from skin_wellness.core.exceptions import SegmentNotActiveError, UnknownCategoryError
from skin_wellness.models.category import CategoryAssessment
from skin_wellness.models.enumerations import ChartTargetKind
from skin_wellness.scoring.aggregator import NEUTRAL_LEVEL
from skin_wellness.scoring.category_registry import CATEGORY_REGISTRY, CategoryRegistry
from skin_wellness.scoring.severity_scale import band_for, score_text
from skin_wellness.scoring.utils import clamp_level

logger = structlog.get_logger(__name__)

SegmentSelectedCallback = Callable[[Optional[str]], None]
AdjustLevelCallback = Callable[[str, List[CategoryAssessment]], None]
ViewDetailsCallback = Callable[[str], None]

_SEGMENT_TARGETS = (ChartTargetKind.PETAL, ChartTargetKind.BACKGROUND, ChartTargetKind.LABEL)
_BUTTON_DELTAS = {ChartTargetKind.INCREMENT: 1, ChartTargetKind.DECREMENT: -1}


class SegmentedChart:
    """
    Usage:
        chart = SegmentedChart(editable=True, on_adjust_level=save_levels)
        scene = chart.render(assessments)
        chart.select_segment("redness")
        chart.adjust_level(assessments, "redness", +1)
    """

    def __init__(
        self,
        registry: CategoryRegistry = CATEGORY_REGISTRY,
        geometry: Optional[PolarGeometry] = None,
        editable: bool = False,
        on_segment_selected: Optional[SegmentSelectedCallback] = None,
        on_adjust_level: Optional[AdjustLevelCallback] = None,
        on_view_details: Optional[ViewDetailsCallback] = None,
    ):
        self.registry = registry
        self.geometry = geometry or PolarGeometry()
        self.editable = editable
        self.on_segment_selected = on_segment_selected
        self.on_adjust_level = on_adjust_level
        self.on_view_details = on_view_details
        self.active_category_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------

    def levels(self, assessments: Sequence[CategoryAssessment]) -> Dict[str, int]:
        """Level per registered category; missing categories fall back to 5."""
        by_id: Dict[str, int] = {}
        for assessment in assessments:
            if assessment.category_id not in self.registry:
                raise UnknownCategoryError(assessment.category_id)
            by_id[assessment.category_id] = assessment.visibility_level

        for category in self.registry:
            if category.id not in by_id:
                logger.warning(
                    "assessment_missing",
                    category_id=category.id,
                    fallback_level=NEUTRAL_LEVEL,
                )
                by_id[category.id] = NEUTRAL_LEVEL
        return by_id

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, assessments: Sequence[CategoryAssessment]) -> ChartScene:
        levels = self.levels(assessments)
        count = len(self.registry)
        geo = self.geometry
        scene = ChartScene(
            dimensions=geo.dims,
            active_category_id=self.active_category_id,
            editable=self.editable,
        )

        for index, category in enumerate(self.registry):
            level = levels[category.id]
            active = category.id == self.active_category_id

            scene.backgrounds.append(SegmentShape(
                category_id=category.id,
                kind=ChartTargetKind.BACKGROUND,
                outline=geo.background(index, count),
                fill=hex_to_rgba(category.color, BG_FILL_ALPHA_ACTIVE if active else BG_FILL_ALPHA),
                stroke=hex_to_rgba(category.color, BG_STROKE_ALPHA_ACTIVE if active else BG_STROKE_ALPHA),
                stroke_width=2 if active else 1,
            ))
            scene.petals.append(SegmentShape(
                category_id=category.id,
                kind=ChartTargetKind.PETAL,
                outline=geo.petal(index, count, level),
                fill=category.color,
                stroke="white" if active else None,
                stroke_width=2 if active else 0,
                level=level,
            ))

            anchor = geo.label_anchor(index, count)
            text = score_text(level)
            scene.labels.append(LabelPill(
                category_id=category.id,
                anchor=anchor,
                rect=geo.label_pill_rect(anchor, category.name, text),
                name=category.name,
                score_text=text,
                score_color=band_for(level).color,
            ))

            if not active:
                continue

            if self.on_view_details is not None:
                scene.detail_arc = DetailArc(
                    category_id=category.id,
                    geometry=geo.detail_arc(index, count),
                    color=category.color,
                )
            if self.editable:
                buttons = geo.adjust_button_centers(index, count)
                scene.buttons = [
                    AdjustButton(category.id, ChartTargetKind.INCREMENT,
                                 buttons.increment, category.color, enabled=level < 10),
                    AdjustButton(category.id, ChartTargetKind.DECREMENT,
                                 buttons.decrement, category.color, enabled=level > 0),
                ]

        return scene

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_segment(self, category_id: str) -> Optional[str]:
        """Toggle selection; returns the new active id."""
        self.registry.get(category_id)
        if not self.editable:
            return self.active_category_id

        if self.active_category_id == category_id:
            self.active_category_id = None
        else:
            self.active_category_id = category_id

        logger.info("segment_selected", category_id=category_id, active=self.active_category_id)
        if self.on_segment_selected:
            self.on_segment_selected(self.active_category_id)
        return self.active_category_id

    def click_background(self) -> None:
        """Clear the selection, as a click on empty chart area does."""
        if not self.editable or self.active_category_id is None:
            return
        self.active_category_id = None
        logger.info("segment_deselected")
        if self.on_segment_selected:
            self.on_segment_selected(None)

    # ------------------------------------------------------------------
    # Level adjustment and details
    # ------------------------------------------------------------------

    def adjust_level(
        self,
        assessments: Sequence[CategoryAssessment],
        category_id: str,
        delta: int,
    ) -> Optional[List[CategoryAssessment]]:
        """
        Step the active category's level by ±1.

        Returns the full updated list, or None when the step is clamped away
        (0 − 1, 10 + 1) or the chart is read-only. Nothing fires in that case.
        """
        self.registry.get(category_id)
        if delta not in (1, -1):
            raise ValueError(f"delta must be +1 or -1, got {delta}")
        if self.active_category_id != category_id:
            raise SegmentNotActiveError(category_id, self.active_category_id)
        if not self.editable:
            return None

        current = self.levels(assessments)[category_id]
        new_level = clamp_level(current + delta)
        if new_level == current:
            logger.debug("adjust_level_rejected", category_id=category_id, level=current, delta=delta)
            return None

        updated: List[CategoryAssessment] = []
        found = False
        for assessment in assessments:
            if assessment.category_id == category_id:
                assessment = assessment.model_copy(update={"visibility_level": new_level})
                found = True
            updated.append(assessment)
        if not found:
            updated.append(CategoryAssessment(category_id=category_id, visibility_level=new_level))

        logger.info("level_adjusted", category_id=category_id, old_level=current, new_level=new_level)
        if self.on_adjust_level:
            self.on_adjust_level(category_id, updated)
        return updated

    def open_details(self, category_id: str) -> None:
        self.registry.get(category_id)
        if self.on_view_details:
            self.on_view_details(category_id)

    # ------------------------------------------------------------------
    # Click dispatch
    # ------------------------------------------------------------------

    def dispatch(
        self,
        target: ChartTarget,
        assessments: Sequence[CategoryAssessment],
        point: Optional[Point] = None,
    ) -> ClickEvent:
        event = ClickEvent(target=target, point=point)

        if target.kind in _SEGMENT_TARGETS:
            event.stop_propagation()
            self.select_segment(target.category_id)
        elif target.kind == ChartTargetKind.DETAIL:
            event.stop_propagation()
            self.open_details(target.category_id)
        elif target.kind in _BUTTON_DELTAS:
            event.stop_propagation()
            self.adjust_level(assessments, target.category_id, _BUTTON_DELTAS[target.kind])

        if not event.propagation_stopped:
            self.click_background()
        return event

    def click(self, x: float, y: float, assessments: Sequence[CategoryAssessment]) -> ClickEvent:
        """Hit-test a view box point against the current scene and dispatch it."""
        point = Point(x, y)
        target = self.render(assessments).hit_test(point)
        return self.dispatch(target, assessments, point)
