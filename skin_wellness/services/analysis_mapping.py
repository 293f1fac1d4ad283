"""
Diagnostic Mapping Service
skin_wellness/services/analysis_mapping.py

Converts an external skin-diagnostic payload into CategoryAssessments.

Payload layout (keys are colour codes, not category ids):

    {
      "diagnostic_id": "...",
      "diagnostic": {
        "scores": {"yellow": 3, "red": 6, ...},
        "red": {
          "redness_present": "Noticeable redness ...",
          "redness_present_multichoices": 3,
          ...
        },
        ...
      }
    }

A bare `diagnostic` object is accepted as well. Keys with hyphens
(e.g. 'fine-lines_wrinkles') are normalised to underscores. No network I/O.
"""

import logging
import math
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from skin_wellness.models.category import CategoryAssessment, ParameterScore
from skin_wellness.models.diagnostic import ParsedDiagnostic
from skin_wellness.scoring.aggregator import ScoreAggregator
from skin_wellness.scoring.category_registry import CATEGORY_REGISTRY, CategoryRegistry
from skin_wellness.scoring.parameter_catalog import (
    CATEGORY_PARAMETERS,
    HIDDEN_PARAMETERS,
    PARAMETER_LABELS,
    get_parameter_config,
)
from skin_wellness.scoring.utils import clamp_level, round_half_up

logger = logging.getLogger(__name__)

API_COLOR_TO_CATEGORY_ID: Dict[str, str] = {
    "yellow": "radiance",
    "pink": "smoothness",
    "red": "redness",
    "blue": "hydration",
    "orange": "shine",
    "grey": "texture",
    "green": "blemishes",
    "brown": "tone",
    "eye": "eye-contour",
    "neck": "neck-decollete",
}

CATEGORY_ID_TO_API_COLOR: Dict[str, str] = {v: k for k, v in API_COLOR_TO_CATEGORY_ID.items()}

SCORE_SUFFIX = "_multichoices"


def normalize_api_key(key: str) -> str:
    """'fine-lines_wrinkles' -> 'fine_lines_wrinkles'"""
    return key.replace("-", "_")


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _diagnostic_body(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    body = payload.get("diagnostic", payload)
    if not isinstance(body, Mapping):
        raise ValueError("diagnostic payload must be an object")
    return body


def _normalized(section: Mapping[str, Any]) -> Dict[str, Any]:
    return {normalize_api_key(str(k)): v for k, v in section.items()}


def extract_category_parameters(
    category_id: str, section: Mapping[str, Any]
) -> List[ParameterScore]:
    """Parameters present in one colour section, in display order."""
    data = _normalized(section)
    params: List[ParameterScore] = []

    for key in CATEGORY_PARAMETERS.get(category_id, ()):
        if key in HIDDEN_PARAMETERS:
            continue
        description = data.get(key)
        score = data.get(f"{key}{SCORE_SUFFIX}")
        if not isinstance(description, str) or not _is_number(score):
            continue

        config = get_parameter_config(key)
        max_scale = config.max_score if config else 4
        value = max(1, min(max_scale, int(score)))
        params.append(ParameterScore(
            key=key,
            label=PARAMETER_LABELS.get(key, key),
            description=description,
            score_value=value,
            max_scale=max_scale,
            baseline_score_value=value,
        ))
    return params


def extract_parameter_scores(payload: Mapping[str, Any]) -> Dict[str, int]:
    """Flat key -> score map over every colour section, hidden parameters included."""
    body = _diagnostic_body(payload)
    scores: Dict[str, int] = {}
    for color, category_id in API_COLOR_TO_CATEGORY_ID.items():
        section = body.get(color)
        if not isinstance(section, Mapping):
            continue
        data = _normalized(section)
        for key in CATEGORY_PARAMETERS[category_id]:
            score = data.get(f"{key}{SCORE_SUFFIX}")
            if _is_number(score):
                scores[key] = int(score)
    return scores


def parse_diagnostic(
    payload: Mapping[str, Any],
    registry: CategoryRegistry = CATEGORY_REGISTRY,
    aggregator: Optional[ScoreAggregator] = None,
) -> List[CategoryAssessment]:
    """
    Assessments in registry order for every category present in the payload.

    The level comes from `scores.<colour>` (rounded, clamped to 0-10). When a
    colour has details but no score, the level is aggregated from its
    parameters. Categories absent from the payload are omitted.
    """
    body = _diagnostic_body(payload)
    scores = body.get("scores")
    if scores is None:
        scores = {}
    elif not isinstance(scores, Mapping):
        raise ValueError("diagnostic scores must be an object keyed by colour")
    aggregator = aggregator or ScoreAggregator()
    assessments: List[CategoryAssessment] = []

    for category in registry:
        color = CATEGORY_ID_TO_API_COLOR.get(category.id)
        if color is None:
            continue
        section = body.get(color)
        raw_score = scores.get(color)
        if not isinstance(section, Mapping) and not _is_number(raw_score):
            continue

        params = extract_category_parameters(category.id, section) if isinstance(section, Mapping) else []
        if _is_number(raw_score):
            level = clamp_level(round_half_up(Decimal(str(raw_score))))
        else:
            level = aggregator.aggregate(params)

        assessments.append(CategoryAssessment(
            category_id=category.id,
            visibility_level=level,
            parameters=params,
        ))

    logger.info(
        "Parsed diagnostic: %d categories, %d parameters",
        len(assessments),
        sum(len(a.parameters) for a in assessments),
    )
    return assessments


def parse_diagnostic_response(payload: Mapping[str, Any]) -> ParsedDiagnostic:
    """parse_diagnostic plus the diagnostic id and the flat parameter score map."""
    diagnostic_id = payload.get("diagnostic_id")
    return ParsedDiagnostic(
        diagnostic_id=str(diagnostic_id) if diagnostic_id is not None else None,
        assessments=parse_diagnostic(payload),
        parameter_scores=extract_parameter_scores(payload),
    )
