"""Tests for the health check and route mounting."""

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def test_health_check():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_api_routes_mounted_under_v1():
    paths = app.openapi()["paths"]

    assert "/v1/conversations" in paths
    assert "/v1/knowledge/search" in paths
    assert "/v1/documents" in paths
    assert "/v1/speech" in paths
    assert "/conversations" not in paths
