from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List


class Category(BaseModel):
    """
    One fixed appearance category of the radial chart.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Stable category key (e.g. 'redness')"
    )

    name: str = Field(
        ...,
        min_length=1,
        description="Display name shown in the label pill"
    )

    color: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex colour token used for the petal"
    )

    order: int = Field(
        ...,
        ge=1,
        description="Fixed clockwise position (1..N), never derived from score"
    )


class ParameterScore(BaseModel):
    """
    Fine-grained, category-scoped sub-assessment (e.g. 'Pustules').
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Stable id within the category")
    label: str = Field(..., description="Display label")
    description: str = Field(default="", description="Free text explanation")

    score_value: int = Field(
        ...,
        ge=1,
        description="Selected severity option, 1..max_scale"
    )

    max_scale: int = Field(
        default=4,
        ge=1,
        description="Highest option value for this parameter"
    )

    baseline_score_value: Optional[int] = Field(
        default=None,
        ge=1,
        description="Originally assessed value, kept for display; never edited"
    )

    @model_validator(mode="after")
    def validate_score_within_scale(self):
        """Ensure score_value and baseline_score_value do not exceed max_scale."""
        if self.score_value > self.max_scale:
            raise ValueError(
                f"score_value {self.score_value} exceeds max_scale {self.max_scale}"
            )
        if self.baseline_score_value is not None and self.baseline_score_value > self.max_scale:
            raise ValueError(
                f"baseline_score_value {self.baseline_score_value} exceeds max_scale {self.max_scale}"
            )
        return self

    def with_score(self, score_value: int) -> "ParameterScore":
        """Return a validated copy carrying a new score_value."""
        return ParameterScore.model_validate(
            {**self.model_dump(), "score_value": score_value}
        )


class CategoryAssessment(BaseModel):
    """
    A category paired with its aggregate visibility level and parameter scores.
    """

    model_config = ConfigDict(frozen=True)

    category_id: str = Field(..., min_length=1)

    visibility_level: int = Field(
        ...,
        ge=0,
        le=10,
        description="Aggregate level on the 0-10 scale; higher is more prominent"
    )

    parameters: List[ParameterScore] = Field(default_factory=list)


class EditorSnapshot(BaseModel):
    """
    Immutable copy of an assessment taken when the detail editor opens.
    """

    model_config = ConfigDict(frozen=True)

    category_id: str
    visibility_level: int = Field(..., ge=0, le=10)
    parameters: List[ParameterScore] = Field(default_factory=list)
