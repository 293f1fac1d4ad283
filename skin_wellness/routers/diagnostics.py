"""
routers/diagnostics.py - External diagnostic import and validation diff

Endpoints:
  POST /api/v1/diagnostics/parse           Diagnostic payload -> assessments
  POST /api/v1/diagnostics/modifications   Original vs validated change list
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, HTTPException, status
from pydantic import BaseModel, Field

from skin_wellness.models.category import CategoryAssessment
from skin_wellness.models.diagnostic import ParsedDiagnostic, ValidationModifications
from skin_wellness.services.analysis_mapping import parse_diagnostic_response
from skin_wellness.services.validation_diff import compute_modifications

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/diagnostics", tags=["Diagnostics"])


# =====================================================================
# Request Models
# =====================================================================

class ModificationsRequest(BaseModel):
    original: List[CategoryAssessment] = Field(default_factory=list)
    validated: List[CategoryAssessment] = Field(default_factory=list)


# =====================================================================
# POST /api/v1/diagnostics/parse
# =====================================================================

@router.post(
    "/parse",
    response_model=ParsedDiagnostic,
    summary="Convert a diagnostic payload into chart assessments",
    description="""
    Accepts either `{"diagnostic_id": ..., "diagnostic": {...}}` or the bare
    diagnostic object. Colour-keyed sections are mapped onto categories;
    categories absent from the payload are omitted.
    """,
)
async def parse_diagnostic_payload(payload: Dict[str, Any] = Body(...)):
    try:
        return parse_diagnostic_response(payload)
    except ValueError as e:
        logger.warning(f"Rejected diagnostic payload: {e}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


# =====================================================================
# POST /api/v1/diagnostics/modifications
# =====================================================================

@router.post(
    "/modifications",
    response_model=ValidationModifications,
    summary="List changes made during validation",
)
async def list_modifications(request: ModificationsRequest):
    return compute_modifications(request.original, request.validated)
