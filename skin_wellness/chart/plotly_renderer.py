"""
chart/plotly_renderer.py - Plotly figure builder for a ChartScene.

Plotly shape paths have no arc command, so wedges are drawn as filled
polygons sampled from their outlines. Every wedge trace carries its category
id in `customdata` so front ends can map click events back to a category.
"""

import plotly.graph_objects as go
from typing import Dict, List

from skin_wellness.chart.geometry import Rect, WedgeOutline
from skin_wellness.chart.scene import (
    LABEL_TEXT_COLOR,
    PILL_FILL,
    ChartScene,
    SegmentShape,
    hex_to_rgba,
)
from skin_wellness.models.enumerations import TextAnchor

FONT_FAMILY = "Inter, system-ui, sans-serif"
OVERFLOW_PAD = 60

_XANCHOR: Dict[TextAnchor, str] = {
    TextAnchor.START: "left",
    TextAnchor.MIDDLE: "center",
    TextAnchor.END: "right",
}


def _polygon(outline: WedgeOutline, samples: int):
    pts = outline.points(samples)
    pts.append(pts[0])
    return [p.x for p in pts], [p.y for p in pts]


def _wedge_trace(shape: SegmentShape, samples: int, name: str) -> go.Scatter:
    xs, ys = _polygon(shape.outline, samples)
    return go.Scatter(
        x=xs, y=ys, mode="lines", fill="toself",
        fillcolor=shape.fill,
        line=dict(color=shape.stroke or "rgba(0,0,0,0)", width=shape.stroke_width),
        customdata=[shape.category_id] * len(xs),
        hoverinfo="skip" if shape.level is None else "text",
        text=name,
        name=shape.category_id,
        showlegend=False,
    )


def _rounded_rect_path(rect: Rect) -> str:
    """SVG path for a rounded rectangle using quadratic corners."""
    x0, y0 = rect.x, rect.y
    x1, y1 = rect.x + rect.width, rect.y + rect.height
    r = min(rect.rx, rect.width / 2, rect.height / 2)
    return (
        f"M {x0 + r} {y0} L {x1 - r} {y0} Q {x1} {y0} {x1} {y0 + r} "
        f"L {x1} {y1 - r} Q {x1} {y1} {x1 - r} {y1} "
        f"L {x0 + r} {y1} Q {x0} {y1} {x0} {y1 - r} "
        f"L {x0} {y0 + r} Q {x0} {y0} {x0 + r} {y0} Z"
    )


def build_figure(scene: ChartScene, size: int = 700) -> go.Figure:
    """Render a ChartScene as an interactive plotly figure."""
    dims = scene.dimensions
    samples = dims.curve_samples
    fig = go.Figure()
    names = {pill.category_id: f"{pill.name}<br>{pill.score_text}" for pill in scene.labels}

    for shape in scene.backgrounds:
        fig.add_trace(_wedge_trace(shape, samples, names.get(shape.category_id, "")))
    for shape in scene.petals:
        fig.add_trace(_wedge_trace(shape, samples, names.get(shape.category_id, "")))

    shapes: List[dict] = [
        dict(
            type="circle", xref="x", yref="y",
            x0=dims.center.x - dims.center_radius, x1=dims.center.x + dims.center_radius,
            y0=dims.center.y - dims.center_radius, y1=dims.center.y + dims.center_radius,
            fillcolor="white", line=dict(width=0), layer="above",
        )
    ]
    annotations: List[dict] = []

    for pill in scene.labels:
        shapes.append(dict(
            type="path", path=_rounded_rect_path(pill.rect),
            fillcolor=PILL_FILL, line=dict(width=0), layer="above",
        ))
        x, y = pill.anchor.position.x, pill.anchor.position.y
        xanchor = _XANCHOR[pill.anchor.text_anchor]
        annotations.append(dict(
            x=x, y=y - 7, text=f"<b>{pill.name}</b>", showarrow=False,
            xanchor=xanchor, yanchor="middle",
            font=dict(size=14, color=LABEL_TEXT_COLOR, family=FONT_FAMILY),
        ))
        annotations.append(dict(
            x=x, y=y + 10, text=f"<i>{pill.score_text}</i>", showarrow=False,
            xanchor=xanchor, yanchor="middle",
            font=dict(size=12, color=pill.score_color, family=FONT_FAMILY),
        ))

    if scene.detail_arc:
        arc = scene.detail_arc
        # shadow first, then the white button
        xs, ys = _polygon(arc.geometry.outline, samples)
        fig.add_trace(go.Scatter(
            x=[v + 2 for v in xs], y=[v + 2 for v in ys], mode="lines", fill="toself",
            fillcolor="rgba(0,0,0,0.1)", line=dict(width=0),
            hoverinfo="skip", showlegend=False,
        ))
        fig.add_trace(go.Scatter(
            x=xs, y=ys, mode="lines", fill="toself", fillcolor="white",
            line=dict(color=arc.color, width=2),
            customdata=[arc.category_id] * len(xs),
            hoverinfo="text", text=arc.text, name="details", showlegend=False,
        ))
        annotations.append(dict(
            x=arc.geometry.label_position.x, y=arc.geometry.label_position.y,
            text=f"<b>{arc.text}</b>", showarrow=False,
            font=dict(size=14, color=arc.color, family=FONT_FAMILY),
        ))

    for btn in scene.buttons:
        c, r = btn.circle.center, btn.circle.radius
        shapes.append(dict(
            type="circle", xref="x", yref="y",
            x0=c.x - r, x1=c.x + r, y0=c.y - r, y1=c.y + r,
            fillcolor=hex_to_rgba(btn.color, btn.opacity),
            line=dict(color="white", width=2), layer="above",
        ))
        annotations.append(dict(
            x=c.x, y=c.y + 1, text=f"<b>{btn.symbol}</b>", showarrow=False,
            font=dict(size=28 if btn.symbol == "+" else 22, color="white"),
            opacity=btn.opacity,
        ))

    # the detail arc reaches past the view box edge
    lo, hi = -OVERFLOW_PAD, dims.viewbox + OVERFLOW_PAD
    fig.update_layout(
        shapes=shapes,
        annotations=annotations,
        width=size, height=size,
        margin=dict(l=10, r=10, t=10, b=10),
        xaxis=dict(range=[lo, hi], visible=False, fixedrange=True),
        yaxis=dict(
            range=[hi, lo], visible=False, fixedrange=True,
            scaleanchor="x", scaleratio=1,
        ),
        showlegend=False, plot_bgcolor="white", paper_bgcolor="white",
        clickmode="event",
    )
    return fig
