"""
routers/scoring.py - Category level aggregation

Endpoints:
  POST /api/v1/scoring/aggregate   Reduce parameter scores to a 0-10 level
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from skin_wellness.core.dependencies import get_score_aggregator
from skin_wellness.models.category import ParameterScore
from skin_wellness.models.enumerations import AggregationStrategy, SeverityBand
from skin_wellness.scoring.aggregator import ScoreAggregator
from skin_wellness.scoring.severity_scale import band_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/scoring", tags=["Scoring"])


# =====================================================================
# Request / Response Models
# =====================================================================

class AggregateRequest(BaseModel):
    parameters: List[ParameterScore] = Field(default_factory=list)
    strategy: Optional[AggregationStrategy] = Field(
        default=None,
        description="Overrides the configured AGGREGATION_STRATEGY for this call",
    )


class AggregateResponse(BaseModel):
    level: int = Field(..., ge=0, le=10)
    strategy: AggregationStrategy
    band: SeverityBand
    color: str
    parameter_count: int


# =====================================================================
# POST /api/v1/scoring/aggregate
# =====================================================================

@router.post(
    "/aggregate",
    response_model=AggregateResponse,
    summary="Aggregate parameter scores into a visibility level",
    description="""
    Normalises each parameter to [0, 1] and reduces them with the chosen
    strategy. An empty parameter list yields the neutral level 5.
    """,
)
async def aggregate_parameters(
    request: AggregateRequest,
    default_aggregator: ScoreAggregator = Depends(get_score_aggregator),
):
    aggregator = default_aggregator
    if request.strategy is not None and request.strategy != default_aggregator.strategy:
        aggregator = ScoreAggregator(request.strategy)

    level = aggregator.aggregate(request.parameters)
    style = band_for(level)
    logger.info(
        "Aggregated %d parameters to level %d (%s)",
        len(request.parameters), level, aggregator.strategy.value,
    )
    return AggregateResponse(
        level=level,
        strategy=aggregator.strategy,
        band=style.band,
        color=style.color,
        parameter_count=len(request.parameters),
    )
