"""
routers/categories.py - Category registry, parameter templates and bands

Endpoints:
  GET /api/v1/categories                        Ordered category list
  GET /api/v1/categories/{category_id}/template Editable parameters with options
  GET /api/v1/bands/{level}                     Severity band for a 0-10 level
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from skin_wellness.core.dependencies import get_category_registry
from skin_wellness.models.category import Category
from skin_wellness.models.enumerations import ParameterScoreType, SeverityBand
from skin_wellness.scoring.category_registry import CategoryRegistry
from skin_wellness.scoring.parameter_catalog import (
    PARAMETER_LABELS,
    require_parameter_config,
    score_color,
    visible_parameter_keys,
)
from skin_wellness.scoring.severity_scale import band_for, score_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Categories"])


# =====================================================================
# Response Models
# =====================================================================

class CategoryListResponse(BaseModel):
    categories: List[Category]
    total: int


class ScoreOptionResponse(BaseModel):
    value: int
    label: str
    color: str


class ParameterTemplateResponse(BaseModel):
    key: str
    label: str
    type: ParameterScoreType
    max_score: int
    options: List[ScoreOptionResponse]


class CategoryTemplateResponse(BaseModel):
    category: Category
    parameters: List[ParameterTemplateResponse]


class BandResponse(BaseModel):
    level: int
    band: SeverityBand
    label: str
    color: str
    score_text: str = Field(..., description="Label pill text, e.g. 'Focus Area 8/10'")


# =====================================================================
# GET /api/v1/categories
# =====================================================================

@router.get(
    "/categories",
    response_model=CategoryListResponse,
    summary="List chart categories",
    description="Returns every category in its fixed clockwise order (1..N).",
)
async def list_categories(registry: CategoryRegistry = Depends(get_category_registry)):
    categories = list(registry)
    return CategoryListResponse(categories=categories, total=len(categories))


# =====================================================================
# GET /api/v1/categories/{category_id}/template
# =====================================================================

@router.get(
    "/categories/{category_id}/template",
    response_model=CategoryTemplateResponse,
    summary="Parameter template for a category",
    description="""
    Visible parameters for the category in display order, with every score
    option and its colour. Hidden parameters are not listed.
    """,
)
async def get_category_template(
    category_id: str,
    registry: CategoryRegistry = Depends(get_category_registry),
):
    category = registry.get(category_id)
    parameters = []
    for key in visible_parameter_keys(category_id):
        config = require_parameter_config(category_id, key)
        parameters.append(ParameterTemplateResponse(
            key=key,
            label=PARAMETER_LABELS.get(key, key),
            type=config.type,
            max_score=config.max_score,
            options=[
                ScoreOptionResponse(
                    value=option.value,
                    label=option.label,
                    color=score_color(key, option.value),
                )
                for option in config.options
            ],
        ))
    return CategoryTemplateResponse(category=category, parameters=parameters)


# =====================================================================
# GET /api/v1/bands/{level}
# =====================================================================

@router.get(
    "/bands/{level}",
    response_model=BandResponse,
    summary="Severity band for a level",
)
async def get_band(level: int = Path(..., ge=0, le=10)):
    style = band_for(level)
    return BandResponse(
        level=level,
        band=style.band,
        label=style.label,
        color=style.color,
        score_text=score_text(level),
    )
