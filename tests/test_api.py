# tests/test_api.py

"""
API Endpoint Tests - Tests for all FastAPI endpoints
"""

import pytest
from fastapi import status

from skin_wellness.chart.geometry import Point, PolarGeometry, polar_to_xy


CENTER = Point(450, 450)


@pytest.fixture
def assessments_json(sample_assessments):
    return [a.model_dump() for a in sample_assessments]


def _param(key, score, max_scale=4):
    return {"key": key, "label": key, "score_value": score, "max_scale": max_scale}



# ROOT AND HEALTH ENDPOINT TESTS


class TestRootEndpoint:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "running"
        assert data["docs"]["swagger"] == "/docs"


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_ok(self, client):
        response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"] == {
            "category_registry": "healthy",
            "plotly_renderer": "healthy",
        }
        assert "timestamp" in data
        assert "version" in data



# CATEGORY ENDPOINT TESTS


class TestCategoriesEndpoint:
    """Tests for GET /api/v1/categories endpoint."""

    def test_list_categories(self, client, registry):
        response = client.get("/api/v1/categories")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 10
        assert [c["id"] for c in data["categories"]] == list(registry.ids)
        assert data["categories"][0]["order"] == 1

    def test_template(self, client):
        response = client.get("/api/v1/categories/redness/template")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["category"]["id"] == "redness"
        keys = [p["key"] for p in data["parameters"]]
        assert "is_psoriasis" not in keys
        assert keys[0] == "redness_present"
        present = data["parameters"][0]
        assert present["type"] == "severity"
        assert present["max_score"] == 5
        assert present["options"][0]["color"] == "#10B981"

    def test_template_conditional_colors(self, client):
        data = client.get("/api/v1/categories/redness/template").json()
        rosacea = next(p for p in data["parameters"] if p["key"] == "is_rosacea")
        assert rosacea["type"] == "conditional"
        assert [o["color"] for o in rosacea["options"]] == ["#9CA3AF", "#3B82F6", "#EF4444"]

    def test_template_unknown_category(self, client):
        response = client.get("/api/v1/categories/moles/template")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        data = response.json()
        assert data["error_code"] == "CATEGORY_NOT_FOUND"
        assert "moles" in data["message"]
        assert "timestamp" in data


class TestBandsEndpoint:
    """Tests for GET /api/v1/bands/{level} endpoint."""

    def test_band(self, client):
        response = client.get("/api/v1/bands/8")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["band"] == "Focus Area"
        assert data["color"] == "#EF4444"
        assert data["score_text"] == "Focus Area 8/10"

    @pytest.mark.parametrize("level", [-1, 11])
    def test_band_out_of_range(self, client, level):
        response = client.get(f"/api/v1/bands/{level}")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["error_code"] == "VALIDATION_ERROR"



# SCORING ENDPOINT TESTS


class TestAggregateEndpoint:
    """Tests for POST /api/v1/scoring/aggregate endpoint."""

    def test_aggregate_mean(self, client):
        payload = {"parameters": [_param("a", 3), _param("b", 1), _param("c", 2)]}
        response = client.post("/api/v1/scoring/aggregate", json=payload)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["level"] == 3
        assert data["strategy"] == "mean"
        assert data["band"] == "Needs Improvement"
        assert data["parameter_count"] == 3

    def test_aggregate_empty(self, client):
        response = client.post("/api/v1/scoring/aggregate", json={"parameters": []})
        assert response.json()["level"] == 5

    def test_aggregate_worst(self, client):
        payload = {"parameters": [_param("oiliness", 1), _param("pores", 3)], "strategy": "worst"}
        data = client.post("/api/v1/scoring/aggregate", json=payload).json()
        assert data["level"] == 7
        assert data["strategy"] == "worst"

    def test_score_value_below_one(self, client):
        payload = {"parameters": [_param("pores", 0)]}
        response = client.post("/api/v1/scoring/aggregate", json=payload)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["message"] == "Score value must be at least 1"

    def test_score_above_scale(self, client):
        payload = {"parameters": [_param("pores", 6)]}
        response = client.post("/api/v1/scoring/aggregate", json=payload)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_unknown_strategy(self, client):
        response = client.post("/api/v1/scoring/aggregate", json={"strategy": "median"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_malformed_json(self, client):
        response = client.post(
            "/api/v1/scoring/aggregate",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error_code"] == "INVALID_REQUEST"



# CHART ENDPOINT TESTS


class TestSceneEndpoint:
    """Tests for POST /api/v1/chart/scene endpoint."""

    def test_scene(self, client, assessments_json, registry):
        response = client.post("/api/v1/chart/scene", json={"assessments": assessments_json})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [p["category_id"] for p in data["petals"]] == list(registry.ids)
        assert data["petals"][2]["level"] == 8
        assert data["labels"][2]["score_text"] == "Focus Area 8/10"
        assert data["detail_arc"] is None
        assert data["buttons"] == []

    def test_scene_missing_categories_default(self, client):
        data = client.post("/api/v1/chart/scene", json={"assessments": []}).json()
        assert all(p["level"] == 5 for p in data["petals"])

    def test_scene_active_editable(self, client, assessments_json):
        payload = {
            "assessments": assessments_json,
            "active_category_id": "shine",
            "editable": True,
            "show_details": True,
        }
        data = client.post("/api/v1/chart/scene", json=payload).json()
        assert data["active_category_id"] == "shine"
        assert data["detail_arc"]["category_id"] == "shine"
        buttons = {b["kind"]: b for b in data["buttons"]}
        assert buttons["increment"]["enabled"] is False
        assert buttons["decrement"]["enabled"] is True

    def test_scene_unknown_active(self, client, assessments_json):
        payload = {"assessments": assessments_json, "active_category_id": "moles"}
        response = client.post("/api/v1/chart/scene", json=payload)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"

    def test_scene_unknown_assessment(self, client):
        payload = {"assessments": [{"category_id": "moles", "visibility_level": 3}]}
        response = client.post("/api/v1/chart/scene", json=payload)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_scene_level_out_of_range(self, client):
        payload = {"assessments": [{"category_id": "tone", "visibility_level": 11}]}
        response = client.post("/api/v1/chart/scene", json=payload)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["message"] == "Visibility level must be between 0 and 10"


class TestFigureEndpoint:
    """Tests for POST /api/v1/chart/figure endpoint."""

    def test_figure(self, client, assessments_json):
        response = client.post("/api/v1/chart/figure", json={"assessments": assessments_json, "size": 600})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data["data"]) == 20
        assert data["layout"]["width"] == 600


class TestClickEndpoint:
    """Tests for POST /api/v1/chart/click endpoint."""

    def test_click_petal_selects(self, client, assessments_json):
        p = polar_to_xy(CENTER, 100, 18)
        payload = {"assessments": assessments_json, "editable": True, "x": p.x, "y": p.y}
        data = client.post("/api/v1/chart/click", json=payload).json()
        assert data["target"] == "petal"
        assert data["category_id"] == "radiance"
        assert data["active_category_id"] == "radiance"
        assert data["propagation_stopped"] is True
        assert data["level_changed"] is False

    def test_click_canvas_clears(self, client, assessments_json):
        payload = {
            "assessments": assessments_json, "editable": True,
            "active_category_id": "tone", "x": 5, "y": 5,
        }
        data = client.post("/api/v1/chart/click", json=payload).json()
        assert data["target"] == "canvas"
        assert data["active_category_id"] is None

    def test_click_increment(self, client, assessments_json):
        btn = PolarGeometry().adjust_button_centers(0, 10).increment.center
        payload = {
            "assessments": assessments_json, "editable": True,
            "active_category_id": "radiance", "x": btn.x, "y": btn.y,
        }
        data = client.post("/api/v1/chart/click", json=payload).json()
        assert data["target"] == "increment"
        assert data["level_changed"] is True
        radiance = next(a for a in data["assessments"] if a["category_id"] == "radiance")
        assert radiance["visibility_level"] == 3

    def test_click_detail_arc(self, client, assessments_json):
        pos = PolarGeometry().detail_arc(0, 10).label_position
        payload = {
            "assessments": assessments_json, "editable": True, "show_details": True,
            "active_category_id": "radiance", "x": pos.x, "y": pos.y,
        }
        data = client.post("/api/v1/chart/click", json=payload).json()
        assert data["target"] == "detail"
        assert data["details_requested"] == "radiance"
        assert data["active_category_id"] == "radiance"



# DIAGNOSTIC ENDPOINT TESTS


class TestDiagnosticsEndpoint:
    """Tests for /api/v1/diagnostics endpoints."""

    def test_parse(self, client, diagnostic_payload):
        response = client.post("/api/v1/diagnostics/parse", json=diagnostic_payload)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["diagnostic_id"] == "diag-0001"
        assert [a["category_id"] for a in data["assessments"]] == [
            "radiance", "redness", "blemishes", "eye-contour",
        ]
        assert data["parameter_scores"]["is_psoriasis"] == 2

    def test_parse_invalid_body(self, client):
        response = client.post("/api/v1/diagnostics/parse", json={"diagnostic": [1, 2]})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_parse_non_object_scores(self, client):
        response = client.post("/api/v1/diagnostics/parse", json={"diagnostic": {"scores": [3]}})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_parse_infinite_parameter_score(self, client):
        body = (
            '{"diagnostic": {"red": {"redness_present": "Noticeable redness.",'
            ' "redness_present_multichoices": Infinity}}}'
        )
        response = client.post(
            "/api/v1/diagnostics/parse",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["assessments"][0]["category_id"] == "redness"
        assert data["assessments"][0]["parameters"] == []
        assert data["assessments"][0]["visibility_level"] == 5
        assert data["parameter_scores"] == {}

    def test_modifications(self, client, assessments_json):
        validated = [dict(a) for a in assessments_json]
        validated[2]["visibility_level"] = 4
        response = client.post(
            "/api/v1/diagnostics/modifications",
            json={"original": assessments_json, "validated": validated},
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_changes"] == 1
        assert data["score_changes"][0] == {
            "category_id": "redness", "original_level": 8, "validated_level": 4,
        }
