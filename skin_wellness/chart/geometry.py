# skin_wellness/chart/geometry.py
"""
Polar Geometry Engine
---------------------
Pure geometry for the radial segmented chart.

Coordinate system (SVG style):
    square view box, centre at (viewbox/2, viewbox/2), y grows downward
    angle 0° points straight up and grows clockwise
    x = cx + r·cos(θ − 90°)
    y = cy + r·sin(θ − 90°)

Every category owns an equal angular span of 360/N degrees. A foreground petal
grows radially with the category's level:

    length_fraction(level) = 0.15 + (level / 10) × (0.92 − 0.15)
    petal_outer_radius     = center_r + (petal_max_r − center_r) × length_fraction

Wedge outlines are sequences of move / line / quadratic / arc commands. They can
be rendered as an SVG path string or sampled into a polygon for hit testing and
for renderers without arc support.
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple, Union

from skin_wellness.core.exceptions import RegistryContractError
from skin_wellness.models.enumerations import TextAnchor
from skin_wellness.scoring.utils import require_level

MIN_LENGTH_FRACTION = Decimal("0.15")
MAX_LENGTH_FRACTION = Decimal("0.92")


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float

    def contains(self, point: Point) -> bool:
        return math.hypot(point.x - self.center.x, point.y - self.center.y) <= self.radius


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    rx: float = 0.0

    def contains(self, point: Point) -> bool:
        return (
            self.x <= point.x <= self.x + self.width
            and self.y <= point.y <= self.y + self.height
        )


@dataclass(frozen=True)
class ChartDimensions:
    """Radii and spacing of the chart, in view box units."""
    viewbox: float = 900.0
    outer_radius: float = 430.0
    petal_max_radius: float = 420.0
    label_radius: float = 280.0
    center_radius: float = 35.0
    segment_gap: float = 5.0
    corner_radius: float = 14.0
    curve_samples: int = 24

    @property
    def center(self) -> Point:
        return Point(self.viewbox / 2, self.viewbox / 2)

    @property
    def wedge_inner_radius(self) -> float:
        return self.center_radius + 2

    @classmethod
    def from_settings(cls, settings) -> "ChartDimensions":
        return cls(
            viewbox=float(settings.CHART_VIEWBOX),
            outer_radius=settings.CHART_OUTER_RADIUS,
            petal_max_radius=settings.CHART_PETAL_MAX_RADIUS,
            label_radius=settings.CHART_LABEL_RADIUS,
            center_radius=settings.CHART_CENTER_RADIUS,
            segment_gap=settings.CHART_SEGMENT_GAP,
            corner_radius=settings.CHART_CORNER_RADIUS,
            curve_samples=settings.CHART_CURVE_SAMPLES,
        )


# ---------------------------------------------------------------------------
# Path commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class QuadTo:
    control: Point
    point: Point


@dataclass(frozen=True)
class ArcTo:
    """Circular arc around `center` from start_angle to end_angle (degrees)."""
    center: Point
    radius: float
    start_angle: float
    end_angle: float
    point: Point

    @property
    def sweep(self) -> int:
        # 1 = clockwise on screen
        return 1 if self.end_angle >= self.start_angle else 0

    @property
    def large_arc(self) -> int:
        return 1 if abs(self.end_angle - self.start_angle) > 180 else 0


PathCommand = Union[MoveTo, LineTo, QuadTo, ArcTo]


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


@dataclass(frozen=True)
class WedgeOutline:
    """An outline built from path commands; closed unless it is a bare arc."""
    commands: Tuple[PathCommand, ...]
    closed: bool = True

    def to_svg_path(self) -> str:
        parts: List[str] = []
        for cmd in self.commands:
            if isinstance(cmd, MoveTo):
                parts.append(f"M {_fmt(cmd.point.x)} {_fmt(cmd.point.y)}")
            elif isinstance(cmd, LineTo):
                parts.append(f"L {_fmt(cmd.point.x)} {_fmt(cmd.point.y)}")
            elif isinstance(cmd, QuadTo):
                parts.append(
                    f"Q {_fmt(cmd.control.x)} {_fmt(cmd.control.y)} "
                    f"{_fmt(cmd.point.x)} {_fmt(cmd.point.y)}"
                )
            else:
                r = _fmt(cmd.radius)
                parts.append(
                    f"A {r} {r} 0 {cmd.large_arc} {cmd.sweep} "
                    f"{_fmt(cmd.point.x)} {_fmt(cmd.point.y)}"
                )
        if self.closed:
            parts.append("Z")
        return " ".join(parts)

    def points(self, samples: int = 24) -> List[Point]:
        """Flatten curves and arcs into a polygon (closing point not repeated)."""
        samples = max(2, samples)
        pts: List[Point] = []
        current: Optional[Point] = None

        for cmd in self.commands:
            if isinstance(cmd, (MoveTo, LineTo)):
                pts.append(cmd.point)
            elif isinstance(cmd, QuadTo):
                p0 = current if current is not None else cmd.control
                for i in range(1, samples + 1):
                    t = i / samples
                    a, b, c = (1 - t) ** 2, 2 * (1 - t) * t, t ** 2
                    pts.append(Point(
                        a * p0.x + b * cmd.control.x + c * cmd.point.x,
                        a * p0.y + b * cmd.control.y + c * cmd.point.y,
                    ))
            else:
                for i in range(1, samples + 1):
                    angle = cmd.start_angle + (cmd.end_angle - cmd.start_angle) * i / samples
                    pts.append(polar_to_xy(cmd.center, cmd.radius, angle))
            current = cmd.point

        return pts

    def contains(self, point: Point, samples: int = 24) -> bool:
        return self.closed and point_in_polygon(point, self.points(samples))


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------

def polar_to_xy(center: Point, radius: float, angle_deg: float) -> Point:
    rad = math.radians(angle_deg - 90)
    return Point(center.x + radius * math.cos(rad), center.y + radius * math.sin(rad))


def segment_angle_span(category_count: int) -> float:
    if category_count < 2:
        raise RegistryContractError(
            f"A radial chart needs at least 2 categories, got {category_count}"
        )
    return 360.0 / category_count


def length_fraction(level: int) -> float:
    """Fraction of the petal track filled at a level; 0.15 at 0, 0.92 at 10."""
    require_level(level)
    fraction = MIN_LENGTH_FRACTION + (
        Decimal(level) / Decimal(10) * (MAX_LENGTH_FRACTION - MIN_LENGTH_FRACTION)
    )
    return float(fraction)


def fillet_arc_bounds(start: float, end: float, offset: float) -> Tuple[float, float]:
    """
    Angles of the arc left between two corner fillets.

    When the fillets meet, float error can leave the trimmed start a hair past
    the trimmed end; the arc then collapses to the midline instead of reversing.
    """
    arc_start = start + offset
    arc_end = end - offset
    if arc_end < arc_start or math.isclose(arc_start, arc_end, abs_tol=1e-9):
        arc_start = arc_end = (start + end) / 2
    return arc_start, arc_end


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting."""
    inside = False
    n = len(polygon)
    if n < 3:
        return False
    j = n - 1
    for i in range(n):
        pi, pj = polygon[i], polygon[j]
        if (pi.y > point.y) != (pj.y > point.y):
            x_cross = (pj.x - pi.x) * (point.y - pi.y) / (pj.y - pi.y) + pi.x
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


# ---------------------------------------------------------------------------
# Label tuning
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LabelTuning:
    anchor: TextAnchor = TextAnchor.MIDDLE
    angle_offset: float = 0.0
    radius_offset: float = 0.0


# Hand-tuned per index so labels clear their neighbours and the +/- buttons.
LABEL_TUNING: Dict[int, LabelTuning] = {
    0: LabelTuning(TextAnchor.START, -8),
    1: LabelTuning(TextAnchor.START, 2),
    2: LabelTuning(TextAnchor.START, 0, -60),
    3: LabelTuning(TextAnchor.START, 4, 15),
    4: LabelTuning(TextAnchor.MIDDLE, 0, 25),
    5: LabelTuning(TextAnchor.END, -12),
    6: LabelTuning(TextAnchor.END, -10),
    7: LabelTuning(TextAnchor.END, -2, -80),
    8: LabelTuning(TextAnchor.END, 0),
    9: LabelTuning(TextAnchor.MIDDLE, 0),
}


@dataclass(frozen=True)
class LabelAnchor:
    position: Point
    text_anchor: TextAnchor


@dataclass(frozen=True)
class DetailArcGeometry:
    outline: WedgeOutline
    text_path: WedgeOutline
    text_radius: float
    label_position: Point


@dataclass(frozen=True)
class AdjustButtons:
    increment: Circle
    decrement: Circle


PILL_HEIGHT = 44.0
PILL_PADDING_X = 10.0
PILL_CORNER = 8.0
NAME_CHAR_WIDTH = 7.0
SCORE_CHAR_WIDTH = 6.2


# ---------------------------------------------------------------------------
# Geometry engine
# ---------------------------------------------------------------------------

@dataclass
class PolarGeometry:
    """
    Computes every shape of the chart for a given set of dimensions.

    Usage:
        geo = PolarGeometry()
        outline = geo.petal(index=2, count=10, level=7)
        outline.to_svg_path()
    """
    dims: ChartDimensions = field(default_factory=ChartDimensions)

    def segment_angles(self, index: int, count: int) -> Tuple[float, float]:
        span = segment_angle_span(count)
        start = index * span
        return start, start + span

    def mid_angle(self, index: int, count: int) -> float:
        start, end = self.segment_angles(index, count)
        return (start + end) / 2

    def petal_outer_radius(self, level: int) -> float:
        d = self.dims
        return d.center_radius + (d.petal_max_radius - d.center_radius) * length_fraction(level)

    def wedge(
        self,
        start_angle: float,
        end_angle: float,
        inner_radius: float,
        outer_radius: float,
        rounded: bool = True,
        corner_radius: Optional[float] = None,
    ) -> WedgeOutline:
        """
        Closed annular sector between two angles, shrunk by the segment gap.

        The gap is a straight-line distance measured at the outer radius and is
        split evenly between both sides. Rounded corners are quadratic fillets
        whose control point is the sharp vertex; the fillet size shrinks to fit
        thin or short wedges.
        """
        c = self.dims.center
        gap_angle = math.degrees(self.dims.segment_gap / outer_radius)
        start = start_angle + gap_angle / 2
        end = end_angle - gap_angle / 2
        if end < start:
            start = end = (start_angle + end_angle) / 2

        inner1 = polar_to_xy(c, inner_radius, start)
        inner2 = polar_to_xy(c, inner_radius, end)
        outer1 = polar_to_xy(c, outer_radius, start)
        outer2 = polar_to_xy(c, outer_radius, end)

        cr = self.dims.corner_radius if corner_radius is None else corner_radius
        cr = min(
            cr,
            (outer_radius - inner_radius) / 2,
            inner_radius * math.radians(end - start) / 2,
        )

        if not rounded or cr <= 0:
            return WedgeOutline((
                MoveTo(inner1),
                LineTo(outer1),
                ArcTo(c, outer_radius, start, end, outer2),
                LineTo(inner2),
                ArcTo(c, inner_radius, end, start, inner1),
            ))

        in_start, in_end = fillet_arc_bounds(start, end, math.degrees(cr / inner_radius))
        out_start, out_end = fillet_arc_bounds(start, end, math.degrees(cr / outer_radius))

        inner1_out = polar_to_xy(c, inner_radius + cr, start)
        inner1_along = polar_to_xy(c, inner_radius, in_start)
        inner2_along = polar_to_xy(c, inner_radius, in_end)
        inner2_out = polar_to_xy(c, inner_radius + cr, end)
        outer2_in = polar_to_xy(c, outer_radius - cr, end)
        outer2_along = polar_to_xy(c, outer_radius, out_end)
        outer1_along = polar_to_xy(c, outer_radius, out_start)
        outer1_in = polar_to_xy(c, outer_radius - cr, start)

        return WedgeOutline((
            MoveTo(inner1_out),
            QuadTo(inner1, inner1_along),
            ArcTo(c, inner_radius, in_start, in_end, inner2_along),
            QuadTo(inner2, inner2_out),
            LineTo(outer2_in),
            QuadTo(outer2, outer2_along),
            ArcTo(c, outer_radius, out_end, out_start, outer1_along),
            QuadTo(outer1, outer1_in),
        ))

    def background(self, index: int, count: int) -> WedgeOutline:
        start, end = self.segment_angles(index, count)
        return self.wedge(start, end, self.dims.wedge_inner_radius, self.dims.outer_radius)

    def petal(self, index: int, count: int, level: int) -> WedgeOutline:
        start, end = self.segment_angles(index, count)
        return self.wedge(
            start, end, self.dims.wedge_inner_radius, self.petal_outer_radius(level)
        )

    def label_anchor(self, index: int, count: int) -> LabelAnchor:
        tuning = LABEL_TUNING.get(index, LabelTuning())
        angle = self.mid_angle(index, count) + tuning.angle_offset
        radius = self.dims.label_radius + tuning.radius_offset
        return LabelAnchor(
            position=polar_to_xy(self.dims.center, radius, angle),
            text_anchor=tuning.anchor,
        )

    def label_pill_rect(self, anchor: LabelAnchor, name: str, score_text: str) -> Rect:
        content_width = max(len(name) * NAME_CHAR_WIDTH, len(score_text) * SCORE_CHAR_WIDTH)
        width = content_width + PILL_PADDING_X * 2
        x = anchor.position.x
        if anchor.text_anchor == TextAnchor.START:
            center_x = x + content_width / 2
        elif anchor.text_anchor == TextAnchor.END:
            center_x = x - content_width / 2
        else:
            center_x = x
        return Rect(
            x=center_x - width / 2,
            y=anchor.position.y - PILL_HEIGHT / 2,
            width=width,
            height=PILL_HEIGHT,
            rx=PILL_CORNER,
        )

    def detail_arc(self, index: int, count: int) -> DetailArcGeometry:
        d = self.dims
        start, end = self.segment_angles(index, count)
        inner = d.outer_radius + 10
        outer = d.outer_radius + 52
        outline = self.wedge(start, end, inner, outer, corner_radius=10)

        text_radius = (inner + outer) / 2 - 4
        gap_angle = math.degrees(d.segment_gap / outer)
        t_start = start + gap_angle / 2
        t_end = end - gap_angle / 2
        text_path = WedgeOutline(
            (
                MoveTo(polar_to_xy(d.center, text_radius, t_start)),
                ArcTo(d.center, text_radius, t_start, t_end,
                      polar_to_xy(d.center, text_radius, t_end)),
            ),
            closed=False,
        )
        return DetailArcGeometry(
            outline=outline,
            text_path=text_path,
            text_radius=text_radius,
            label_position=polar_to_xy(d.center, (inner + outer) / 2, (start + end) / 2),
        )

    def adjust_button_centers(self, index: int, count: int) -> AdjustButtons:
        mid = self.mid_angle(index, count)
        d = self.dims
        return AdjustButtons(
            increment=Circle(polar_to_xy(d.center, d.outer_radius - 28, mid), 22.0),
            decrement=Circle(polar_to_xy(d.center, d.center_radius + 30, mid), 17.0),
        )
