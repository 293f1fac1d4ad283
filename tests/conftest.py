# tests/conftest.py

"""
Pytest Fixtures - Shared assessments, charts and API client

SAMPLE LEVELS (registry order):
- radiance 2, smoothness 5, redness 8, hydration 0, shine 10,
  texture 3, blemishes 6, tone 4, eye-contour 7, neck-decollete 1
"""

import pytest
from fastapi.testclient import TestClient

from skin_wellness.main import app
from skin_wellness.chart.geometry import PolarGeometry
from skin_wellness.chart.surface import SegmentedChart
from skin_wellness.models.category import CategoryAssessment, ParameterScore
from skin_wellness.scoring.category_registry import CATEGORY_REGISTRY


SAMPLE_LEVELS = {
    "radiance": 2,
    "smoothness": 5,
    "redness": 8,
    "hydration": 0,
    "shine": 10,
    "texture": 3,
    "blemishes": 6,
    "tone": 4,
    "eye-contour": 7,
    "neck-decollete": 1,
}


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# ASSESSMENT FIXTURES
# =============================================================================

@pytest.fixture
def sample_levels():
    return dict(SAMPLE_LEVELS)


@pytest.fixture
def registry():
    return CATEGORY_REGISTRY


@pytest.fixture
def sample_assessments():
    """One assessment per category, no parameter details."""
    return [
        CategoryAssessment(category_id=cid, visibility_level=level)
        for cid, level in SAMPLE_LEVELS.items()
    ]


@pytest.fixture
def blemish_parameters():
    """Five 1..4 parameters scored 3, 1, 2, 1, 1 -> mean 0.2 -> level 2."""
    scores = {"comedones": 3, "pustules": 1, "papules": 2, "nodules": 1, "cysts": 1}
    return [
        ParameterScore(
            key=key,
            label=key.title(),
            description="",
            score_value=value,
            max_scale=4,
            baseline_score_value=value,
        )
        for key, value in scores.items()
    ]


@pytest.fixture
def blemish_assessment(blemish_parameters):
    return CategoryAssessment(
        category_id="blemishes",
        visibility_level=2,
        parameters=blemish_parameters,
    )


# =============================================================================
# CHART FIXTURES
# =============================================================================

@pytest.fixture
def geometry():
    return PolarGeometry()


@pytest.fixture
def editable_chart(geometry):
    return SegmentedChart(geometry=geometry, editable=True)


@pytest.fixture
def readonly_chart(geometry):
    return SegmentedChart(geometry=geometry, editable=False)


# =============================================================================
# SAMPLE DIAGNOSTIC PAYLOAD
# =============================================================================

@pytest.fixture
def diagnostic_payload():
    """External diagnostic keyed by colour codes."""
    return {
        "diagnostic_id": "diag-0001",
        "diagnostic": {
            "scores": {"green": 6, "red": 7.5, "yellow": 2},
            "green": {
                "comedones": "Several open and closed comedones.",
                "comedones_multichoices": 3,
                "pustules": "No pustules.",
                "pustules_multichoices": 1,
            },
            "red": {
                "redness_present": "Noticeable redness on the cheeks.",
                "redness_present_multichoices": 3,
                "is_rosacea": "Redness confirmed due to rosacea.",
                "is_rosacea_multichoices": 3,
                "is_psoriasis": "Redness not attributed to psoriasis.",
                "is_psoriasis_multichoices": 2,
            },
            "eye": {
                "fine-lines_wrinkles": "Fine lines at the outer corners.",
                "fine-lines_wrinkles_multichoices": 2,
                "dark_circles": "Slight dark circles.",
                "dark_circles_multichoices": 9,
            },
        },
    }
