"""
routers/chart.py - Radial chart scene, figure and click endpoints

Endpoints:
  POST /api/v1/chart/scene    Renderer-independent scene (SVG paths, pills, buttons)
  POST /api/v1/chart/figure   Plotly figure JSON for the same scene
  POST /api/v1/chart/click    Hit-test a point and apply the resulting action

The chart is stateless over HTTP: the caller sends the active segment and the
editable flag with every request and receives the updated values back.
"""

import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from skin_wellness.chart.geometry import PolarGeometry
from skin_wellness.chart.plotly_renderer import build_figure
from skin_wellness.chart.surface import SegmentedChart
from skin_wellness.core.dependencies import get_category_registry, get_polar_geometry
from skin_wellness.models.category import CategoryAssessment
from skin_wellness.models.enumerations import ChartTargetKind, TextAnchor
from skin_wellness.scoring.category_registry import CategoryRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chart", tags=["Chart"])


# =====================================================================
# Request Models
# =====================================================================

class ChartRequest(BaseModel):
    assessments: List[CategoryAssessment] = Field(default_factory=list)
    active_category_id: Optional[str] = None
    editable: bool = False
    show_details: bool = Field(
        default=False,
        description="Draw the 'View Details' arc on the active segment",
    )


class FigureRequest(ChartRequest):
    size: int = Field(default=700, ge=100, le=4000, description="Figure width/height in px")


class ClickRequest(ChartRequest):
    x: float = Field(..., description="View box x coordinate")
    y: float = Field(..., description="View box y coordinate")


# =====================================================================
# Response Models
# =====================================================================

class SegmentResponse(BaseModel):
    category_id: str
    path: str
    fill: str
    stroke: Optional[str] = None
    stroke_width: float
    level: Optional[int] = None


class PillResponse(BaseModel):
    x: float
    y: float
    width: float
    height: float
    rx: float


class LabelResponse(BaseModel):
    category_id: str
    x: float
    y: float
    text_anchor: TextAnchor
    name: str
    score_text: str
    score_color: str
    pill: PillResponse


class DetailArcResponse(BaseModel):
    category_id: str
    path: str
    text_path: str
    text: str
    color: str


class ButtonResponse(BaseModel):
    category_id: str
    kind: ChartTargetKind
    cx: float
    cy: float
    r: float
    enabled: bool
    opacity: float


class SceneResponse(BaseModel):
    viewbox: float
    active_category_id: Optional[str] = None
    editable: bool
    backgrounds: List[SegmentResponse]
    petals: List[SegmentResponse]
    labels: List[LabelResponse]
    detail_arc: Optional[DetailArcResponse] = None
    buttons: List[ButtonResponse]


class ClickResponse(BaseModel):
    target: ChartTargetKind
    category_id: Optional[str] = None
    propagation_stopped: bool
    active_category_id: Optional[str] = None
    details_requested: Optional[str] = None
    assessments: List[CategoryAssessment]
    level_changed: bool = False


# =====================================================================
# Helpers
# =====================================================================

def _build_chart(
    request: ChartRequest,
    registry: CategoryRegistry,
    geometry: PolarGeometry,
    on_view_details=None,
) -> SegmentedChart:
    if request.active_category_id is not None:
        registry.get(request.active_category_id)

    if on_view_details is None and request.show_details:
        on_view_details = lambda category_id: None  # noqa: E731

    chart = SegmentedChart(
        registry=registry,
        geometry=geometry,
        editable=request.editable,
        on_view_details=on_view_details,
    )
    chart.active_category_id = request.active_category_id
    return chart


# =====================================================================
# POST /api/v1/chart/scene
# =====================================================================

@router.post(
    "/scene",
    response_model=SceneResponse,
    summary="Render the radial chart scene",
    description="""
    One background wedge and one petal per category in registry order, a
    label pill per category, and for the active segment the detail arc and
    +/- buttons. Categories without an assessment are drawn at level 5.
    """,
)
async def render_scene(
    request: ChartRequest,
    registry: CategoryRegistry = Depends(get_category_registry),
    geometry: PolarGeometry = Depends(get_polar_geometry),
):
    chart = _build_chart(request, registry, geometry)
    scene = chart.render(request.assessments)
    return SceneResponse(**scene.to_dict())


# =====================================================================
# POST /api/v1/chart/figure
# =====================================================================

@router.post(
    "/figure",
    summary="Render the radial chart as a Plotly figure",
    description="Returns the Plotly figure JSON (`data` + `layout`).",
)
async def render_figure(
    request: FigureRequest,
    registry: CategoryRegistry = Depends(get_category_registry),
    geometry: PolarGeometry = Depends(get_polar_geometry),
):
    chart = _build_chart(request, registry, geometry)
    fig = build_figure(chart.render(request.assessments), size=request.size)
    return JSONResponse(content=json.loads(fig.to_json()))


# =====================================================================
# POST /api/v1/chart/click
# =====================================================================

@router.post(
    "/click",
    response_model=ClickResponse,
    summary="Dispatch a click on the chart",
    description="""
    Hit-tests the point against the current scene (topmost shape wins) and
    applies the action: segment and label clicks toggle the selection, the
    +/- buttons step the active level, the detail arc requests the editor,
    and anything else clears the selection.
    """,
)
async def click_chart(
    request: ClickRequest,
    registry: CategoryRegistry = Depends(get_category_registry),
    geometry: PolarGeometry = Depends(get_polar_geometry),
):
    updates = {}

    def on_adjust(category_id, assessments):
        updates["assessments"] = assessments

    def on_details(category_id):
        updates["details"] = category_id

    chart = _build_chart(
        request, registry, geometry,
        on_view_details=on_details if request.show_details else None,
    )
    chart.on_adjust_level = on_adjust

    event = chart.click(request.x, request.y, request.assessments)
    logger.info(
        "Chart click at (%.1f, %.1f) hit %s %s",
        request.x, request.y, event.target.kind.value, event.target.category_id or "",
    )
    return ClickResponse(
        target=event.target.kind,
        category_id=event.target.category_id,
        propagation_stopped=event.propagation_stopped,
        active_category_id=chart.active_category_id,
        details_requested=updates.get("details"),
        assessments=updates.get("assessments", request.assessments),
        level_changed="assessments" in updates,
    )
