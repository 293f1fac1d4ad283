# skin_wellness/chart/scene.py
"""
Chart scene model
-----------------
Renderer-independent description of one frame of the radial chart, plus the
click event object used for hit-test dispatch.

Draw order, bottom to top:
    backgrounds → petals → centre disc → label pills → detail arc → +/- buttons

Hit testing walks the same list in reverse, so the topmost shape wins.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from skin_wellness.chart.geometry import (
    ChartDimensions,
    Circle,
    DetailArcGeometry,
    LabelAnchor,
    Point,
    Rect,
    WedgeOutline,
)
from skin_wellness.models.enumerations import ChartTargetKind

DISABLED_OPACITY = 0.3
DETAIL_ARC_TEXT = "ⓘ View Details"
PILL_FILL = "rgba(255, 255, 255, 0.93)"
LABEL_TEXT_COLOR = "#1F2937"

# Alpha channels for the pale background wedges
BG_FILL_ALPHA = 0x12 / 255
BG_FILL_ALPHA_ACTIVE = 0x25 / 255
BG_STROKE_ALPHA = 0x20 / 255
BG_STROKE_ALPHA_ACTIVE = 0x50 / 255


def hex_to_rgba(color: str, alpha: float = 1.0) -> str:
    """'#C13050', 0.5 → 'rgba(193, 48, 80, 0.5)'"""
    value = color.lstrip("#")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {round(alpha, 4)})"


@dataclass(frozen=True)
class ChartTarget:
    kind: ChartTargetKind
    category_id: Optional[str] = None


@dataclass
class SegmentShape:
    """A background wedge or a foreground petal."""
    category_id: str
    kind: ChartTargetKind
    outline: WedgeOutline
    fill: str
    stroke: Optional[str]
    stroke_width: float
    level: Optional[int] = None


@dataclass
class LabelPill:
    category_id: str
    anchor: LabelAnchor
    rect: Rect
    name: str
    score_text: str
    score_color: str


@dataclass
class DetailArc:
    category_id: str
    geometry: DetailArcGeometry
    color: str
    text: str = DETAIL_ARC_TEXT


@dataclass
class AdjustButton:
    category_id: str
    kind: ChartTargetKind
    circle: Circle
    color: str
    enabled: bool

    @property
    def symbol(self) -> str:
        return "+" if self.kind == ChartTargetKind.INCREMENT else "−"

    @property
    def opacity(self) -> float:
        return 1.0 if self.enabled else DISABLED_OPACITY


@dataclass
class ChartScene:
    dimensions: ChartDimensions
    backgrounds: List[SegmentShape] = field(default_factory=list)
    petals: List[SegmentShape] = field(default_factory=list)
    labels: List[LabelPill] = field(default_factory=list)
    detail_arc: Optional[DetailArc] = None
    buttons: List[AdjustButton] = field(default_factory=list)
    active_category_id: Optional[str] = None
    editable: bool = False

    @property
    def category_ids(self) -> List[str]:
        return [p.category_id for p in self.petals]

    def petal_for(self, category_id: str) -> Optional[SegmentShape]:
        return next((p for p in self.petals if p.category_id == category_id), None)

    def button(self, kind: ChartTargetKind) -> Optional[AdjustButton]:
        return next((b for b in self.buttons if b.kind == kind), None)

    def hit_test(self, point: Point) -> ChartTarget:
        """Topmost shape under a point; the canvas when nothing is hit."""
        samples = self.dimensions.curve_samples

        for btn in reversed(self.buttons):
            if btn.circle.contains(point):
                return ChartTarget(btn.kind, btn.category_id)

        if self.detail_arc and self.detail_arc.geometry.outline.contains(point, samples):
            return ChartTarget(ChartTargetKind.DETAIL, self.detail_arc.category_id)

        for pill in reversed(self.labels):
            if pill.rect.contains(point):
                return ChartTarget(ChartTargetKind.LABEL, pill.category_id)

        center = Circle(self.dimensions.center, self.dimensions.center_radius)
        if center.contains(point):
            return ChartTarget(ChartTargetKind.CANVAS)

        for shape in reversed(self.petals):
            if shape.outline.contains(point, samples):
                return ChartTarget(ChartTargetKind.PETAL, shape.category_id)

        for shape in reversed(self.backgrounds):
            if shape.outline.contains(point, samples):
                return ChartTarget(ChartTargetKind.BACKGROUND, shape.category_id)

        return ChartTarget(ChartTargetKind.CANVAS)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form with outlines as SVG path strings."""

        def segment(s: SegmentShape) -> Dict[str, Any]:
            return {
                "category_id": s.category_id,
                "path": s.outline.to_svg_path(),
                "fill": s.fill,
                "stroke": s.stroke,
                "stroke_width": s.stroke_width,
                "level": s.level,
            }

        detail = None
        if self.detail_arc:
            geo = self.detail_arc.geometry
            detail = {
                "category_id": self.detail_arc.category_id,
                "path": geo.outline.to_svg_path(),
                "text_path": geo.text_path.to_svg_path(),
                "text": self.detail_arc.text,
                "color": self.detail_arc.color,
            }

        return {
            "viewbox": self.dimensions.viewbox,
            "active_category_id": self.active_category_id,
            "editable": self.editable,
            "backgrounds": [segment(s) for s in self.backgrounds],
            "petals": [segment(s) for s in self.petals],
            "labels": [
                {
                    "category_id": p.category_id,
                    "x": p.anchor.position.x,
                    "y": p.anchor.position.y,
                    "text_anchor": p.anchor.text_anchor.value,
                    "name": p.name,
                    "score_text": p.score_text,
                    "score_color": p.score_color,
                    "pill": {
                        "x": p.rect.x, "y": p.rect.y,
                        "width": p.rect.width, "height": p.rect.height,
                        "rx": p.rect.rx,
                    },
                }
                for p in self.labels
            ],
            "detail_arc": detail,
            "buttons": [
                {
                    "category_id": b.category_id,
                    "kind": b.kind.value,
                    "cx": b.circle.center.x,
                    "cy": b.circle.center.y,
                    "r": b.circle.radius,
                    "enabled": b.enabled,
                    "opacity": b.opacity,
                }
                for b in self.buttons
            ],
        }


@dataclass
class ClickEvent:
    """A click delivered to the chart; segment handlers stop its propagation."""
    target: ChartTarget
    point: Optional[Point] = None
    propagation_stopped: bool = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True
