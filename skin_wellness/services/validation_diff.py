"""
Validation Change Tracking
skin_wellness/services/validation_diff.py

Compares the originally assessed assessments with the practitioner-validated
ones and lists what was changed.
"""

import logging
from typing import Dict, List, Sequence

from skin_wellness.models.category import CategoryAssessment
from skin_wellness.models.diagnostic import DetailChange, ScoreChange, ValidationModifications

logger = logging.getLogger(__name__)


def compute_modifications(
    original: Sequence[CategoryAssessment],
    validated: Sequence[CategoryAssessment],
) -> ValidationModifications:
    """
    Score changes: categories present in both lists whose levels differ.

    Detail changes: validated parameters whose score differs from the
    originally assessed value. That value is the parameter's own
    baseline_score_value, or the same key's score in the original assessment
    when no baseline was recorded. Parameters with neither are skipped.
    """
    original_by_id: Dict[str, CategoryAssessment] = {a.category_id: a for a in original}
    score_changes: List[ScoreChange] = []
    detail_changes: List[DetailChange] = []

    for assessment in validated:
        before = original_by_id.get(assessment.category_id)

        if before is not None and before.visibility_level != assessment.visibility_level:
            score_changes.append(ScoreChange(
                category_id=assessment.category_id,
                original_level=before.visibility_level,
                validated_level=assessment.visibility_level,
            ))

        before_params = {p.key: p for p in before.parameters} if before else {}
        for param in assessment.parameters:
            original_value = param.baseline_score_value
            if original_value is None and param.key in before_params:
                original_value = before_params[param.key].score_value
            if original_value is None or original_value == param.score_value:
                continue
            detail_changes.append(DetailChange(
                category_id=assessment.category_id,
                parameter_key=param.key,
                parameter_name=param.label,
                original_value=original_value,
                validated_value=param.score_value,
            ))

    total = len(score_changes) + len(detail_changes)
    logger.info(
        "Validation diff: %d score changes, %d detail changes",
        len(score_changes), len(detail_changes),
    )
    return ValidationModifications(
        score_changes=score_changes,
        detail_changes=detail_changes,
        total_changes=total,
    )
