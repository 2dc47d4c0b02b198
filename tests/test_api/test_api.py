"""Tests for API endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from chartengine.main import app
from tests.conftest import MONTHS


client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 8


def test_kinds():
    data = client.get("/api/kinds").json()
    assert data["kinds"] == ["pie", "breakdown_pie", "line", "bar"]
    assert "totals" in data["views"]


def test_render_bar_json():
    response = client.post("/api/render", json={"kind": "bar", "metric": "sales", "viewport_width": 1200})
    assert response.status_code == 200
    data = response.json()
    frame = data["frame"]
    assert frame["kind"] == "bar"
    assert frame["title"] == "Monthly Sales Chart"
    assert [p["label"] for p in frame["primitives"]] == MONTHS
    assert "geometry" in data["stages_completed"]
    assert data["processing_time_ms"] >= 0


def test_render_uses_settings_defaults():
    data = client.post("/api/render", json={"kind": "line"}).json()
    frame = data["frame"]
    # Default viewport width is above the breakpoint
    assert frame["viewport"] == {"width": 800, "height": 450}
    assert frame["theme"] == "light"


def test_render_svg():
    response = client.post(
        "/api/render",
        json={"kind": "breakdown_pie", "metric": "revenue", "theme": "dark", "format": "svg"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.count('class="slice"') == 6
    assert "#795d55" in response.text


def test_render_small_viewport():
    data = client.post("/api/render", json={"kind": "pie", "viewport_width": 600}).json()
    assert data["frame"]["viewport"] == {"width": 200, "height": 200}


def test_render_rejects_unknown_kind():
    response = client.post("/api/render", json={"kind": "scatter"})
    assert response.status_code == 422


def test_render_chart_error_is_422():
    response = client.post("/api/render", json={"kind": "bar", "metric": "profit"})
    assert response.status_code == 422
    assert response.json()["error"] == "DatasetError"


def test_render_tiny_viewport_uses_minimum_size():
    response = client.post("/api/render", json={"kind": "bar", "viewport_width": 10})
    assert response.status_code == 200
    # 80px plot area inside the bar margins
    assert response.json()["frame"]["viewport"] == {"width": 200, "height": 200}


def test_hover_bar():
    frame = client.post("/api/render", json={"kind": "bar", "metric": "revenue"}).json()["frame"]
    jan = frame["primitives"][0]
    response = client.post(
        "/api/hover",
        json={
            "kind": "bar",
            "metric": "revenue",
            "x": jan["x"] + jan["width"] / 2,
            "y": jan["y"] + 1,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["visible"] is True
    assert data["content"] == "Jan\nRevenue: $150"
    assert data["target"] == "bar-revenue-0"


def test_hover_miss():
    data = client.post("/api/hover", json={"kind": "bar", "x": 1, "y": 1}).json()
    assert data["visible"] is False
    assert data["target"] is None
