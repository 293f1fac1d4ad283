from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from skin_wellness.models.category import CategoryAssessment


class ScoreChange(BaseModel):
    """Category whose aggregate level was changed during validation."""
    category_id: str
    original_level: int = Field(..., ge=0, le=10)
    validated_level: int = Field(..., ge=0, le=10)


class DetailChange(BaseModel):
    """Parameter whose score differs from the originally assessed value."""
    category_id: str
    parameter_key: str
    parameter_name: str
    original_value: int
    validated_value: int


class ValidationModifications(BaseModel):
    score_changes: List[ScoreChange] = Field(default_factory=list)
    detail_changes: List[DetailChange] = Field(default_factory=list)
    total_changes: int = Field(default=0, ge=0)


class ParsedDiagnostic(BaseModel):
    """External diagnostic converted into chart-ready assessments."""
    diagnostic_id: Optional[str] = None
    assessments: List[CategoryAssessment] = Field(default_factory=list)
    parameter_scores: Dict[str, int] = Field(
        default_factory=dict,
        description="Flat parameter key -> analysed score, hidden parameters included"
    )
