from fastapi.testclient import TestClient

from mortgage_roi import __version__
from mortgage_roi.main import app

client = TestClient(app)


def test_health_returns_200():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__


def test_comparison_no_body_returns_422():
    response = client.post("/api/comparisons/run")
    assert response.status_code == 422
