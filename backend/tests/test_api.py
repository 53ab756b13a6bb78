"""
Tests for FastAPI application setup and the calculator routes.
Each test gets a fresh app with an in-memory history store.
"""

import json

import pytest
from fastapi.testclient import TestClient

from naijacalc.config import Settings
from naijacalc.core.history import InMemoryHistoryStore, JSONFileHistoryStore
from naijacalc.main import build_history_store, create_app


@pytest.fixture
def client():
    return TestClient(create_app(history_store=InMemoryHistoryStore()))


class TestHealthCheck:
    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_openapi_docs(self, client):
        response = client.get("/openapi.json")
        assert response.status_code == 200
        schema = response.json()
        assert schema["info"]["title"] == "NaijaCalc API"

    def test_cors_headers(self, client):
        response = client.options(
            "/health",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code in (200, 204, 400)


class TestRouteRegistration:
    """Verify all API route groups are registered."""

    @pytest.mark.parametrize("prefix", ["/api/v1/bmi", "/api/v1/tax", "/api/v1/inflation", "/api/v1/history"])
    def test_routes_registered(self, client, prefix):
        paths = client.get("/openapi.json").json()["paths"]
        assert any(prefix in p for p in paths)


class TestBMIRoutes:
    def test_calculate(self, client):
        response = client.post("/api/v1/bmi/calculate", json={"weight": 70, "height": 170, "unit": "metric"})
        assert response.status_code == 200
        data = response.json()
        assert data["bmi"] == 24.2
        assert data["category"] == "Normal weight"
        assert len(data["recommendations"]) == 4

    def test_calculate_imperial(self, client):
        response = client.post(
            "/api/v1/bmi/calculate",
            json={"weight": 154, "height_feet": 5, "height_inches": 7, "unit": "imperial"},
        )
        assert response.status_code == 200
        assert response.json()["category"] == "Normal weight"

    def test_calculate_invalid(self, client):
        response = client.post("/api/v1/bmi/calculate", json={"weight": -1, "height": 170})
        assert response.status_code == 400
        assert response.json()["detail"] == ["Weight must be a positive number"]

    def test_validate_reports_all_errors(self, client):
        response = client.post("/api/v1/bmi/validate", json={"weight": 600, "height": 400})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert len(data["errors"]) == 2


class TestTaxRoutes:
    def test_brackets(self, client):
        response = client.get("/api/v1/tax/brackets")
        assert response.status_code == 200
        data = response.json()
        assert data["tax_year"] == "2024"
        assert len(data["brackets"]) == 6
        assert data["brackets"][0]["rate"] == 7

    def test_calculate(self, client):
        response = client.post("/api/v1/tax/calculate", json={"gross_income": 1_000_000})
        assert response.status_code == 200
        data = response.json()
        assert data["result"]["taxable_income"] == pytest.approx(690_250)
        assert data["result"]["final_tax"] == pytest.approx(67_537.5)
        assert data["result"]["marginal_rate"] == 15
        assert data["summary"]["rate"] == 15
        assert data["period"]["frequency"] == "annual"
        assert isinstance(data["suggestions"], list)

    def test_monthly_frequency_is_annualised(self, client):
        annual = client.post("/api/v1/tax/calculate", json={"gross_income": 1_200_000}).json()
        monthly = client.post(
            "/api/v1/tax/calculate",
            json={"gross_income": 100_000, "payment_frequency": "monthly"},
        ).json()
        assert monthly["result"]["final_tax"] == pytest.approx(annual["result"]["final_tax"])
        assert monthly["period"]["frequency"] == "monthly"
        assert monthly["period"]["final_tax"] == pytest.approx(annual["result"]["final_tax"] / 12)

    def test_calculate_invalid(self, client):
        response = client.post(
            "/api/v1/tax/calculate",
            json={"gross_income": 1_000_000, "basic_salary": 2_000_000},
        )
        assert response.status_code == 400
        assert "Basic salary cannot be greater than gross income" in response.json()["detail"]

    def test_validate(self, client):
        response = client.post("/api/v1/tax/validate", json={})
        assert response.json() == {"valid": False, "errors": ["Gross income must be greater than 0"]}


class TestInflationRoutes:
    def test_range(self, client):
        data = client.get("/api/v1/inflation/range").json()
        assert data["min"] == "2009-05"
        assert data["max"] == "2025-05"

    def test_latest(self, client):
        data = client.get("/api/v1/inflation/cpi/latest").json()
        assert data["date"] == "2025-05"

    def test_cpi_between_years(self, client):
        data = client.get("/api/v1/inflation/cpi", params={"start_year": 2020, "end_year": 2020}).json()
        assert data["total"] > 0
        assert all(p["year"] == 2020 for p in data["data"])

    def test_calculate(self, client):
        response = client.post(
            "/api/v1/inflation/calculate",
            json={"amount": 100_000, "start_date": "2020-01", "end_date": "2024-12"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["result"]["start_cpi"] == 271.9
        assert data["result"]["end_cpi"] == 578.2
        assert data["interpretation"]["level"] == "very-high"
        assert data["recommendations"]

    def test_calculate_invalid(self, client):
        response = client.post(
            "/api/v1/inflation/calculate",
            json={"amount": 100, "start_date": "2024-01", "end_date": "2020-01"},
        )
        assert response.status_code == 400
        assert "End date must be after start date" in response.json()["detail"]


class TestHistoryRoutes:
    def test_save_flow(self, client):
        client.post("/api/v1/bmi/calculate", params={"save": True}, json={"weight": 70, "height": 170})
        client.post("/api/v1/tax/calculate", json={"gross_income": 1_000_000})

        data = client.get("/api/v1/history/").json()
        assert data["total"] == 1
        assert data["records"][0]["type"] == "bmi"
        assert data["records"][0]["inputs"]["weight"] == 70

    def test_add_and_favorite(self, client):
        response = client.post(
            "/api/v1/history/",
            json={"type": "tax", "inputs": {"gross_income": 1}, "result": {"final_tax": 0, "effective_rate": 0}},
        )
        assert response.status_code == 201
        record_id = response.json()["id"]

        response = client.post(f"/api/v1/history/{record_id}/favorite")
        assert response.json()["is_favorite"] is True
        favorites = client.get("/api/v1/history/", params={"favorites_only": True}).json()
        assert favorites["total"] == 1

    def test_favorite_unknown_record(self, client):
        assert client.post("/api/v1/history/missing/favorite").status_code == 404

    def test_clear(self, client):
        client.post("/api/v1/bmi/calculate", params={"save": True}, json={"weight": 70, "height": 170})
        assert client.delete("/api/v1/history/").status_code == 204
        assert client.get("/api/v1/history/").json()["total"] == 0

    def test_export_and_import(self, client):
        client.post("/api/v1/bmi/calculate", params={"save": True}, json={"weight": 70, "height": 170})

        exported = client.get("/api/v1/history/export", params={"format": "json"})
        assert exported.status_code == 200
        assert exported.headers["content-type"].startswith("application/json")
        assert len(json.loads(exported.text)) == 1

        client.delete("/api/v1/history/")
        response = client.post("/api/v1/history/import", json={"data": exported.text})
        assert response.json() == {"imported": 1}
        assert client.get("/api/v1/history/").json()["total"] == 1

    def test_export_csv(self, client):
        client.post("/api/v1/bmi/calculate", params={"save": True}, json={"weight": 70, "height": 170})
        response = client.get("/api/v1/history/export", params={"format": "csv"})
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.splitlines()[0] == "Date,Type,Inputs,Result,Summary,Favorite"

    def test_export_unknown_format(self, client):
        assert client.get("/api/v1/history/export", params={"format": "pdf"}).status_code == 422

    def test_import_invalid(self, client):
        response = client.post("/api/v1/history/import", json={"data": "{}"})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Failed to import data")


    def test_csv_export_after_adding_unexpected_result(self, client):
        client.post("/api/v1/history/", json={"type": "bmi", "inputs": {"weight": 70}, "result": {"value": 1}})
        response = client.get("/api/v1/history/export", params={"format": "csv"})
        assert response.status_code == 200
        assert "Unknown calculation" in response.text

    def test_csv_export_after_importing_unexpected_result(self, client):
        data = json.dumps([{"id": "a", "type": "tax", "date": "2025-01-01", "inputs": {}, "result": {"x": 1}}])
        assert client.post("/api/v1/history/import", json={"data": data}).status_code == 200
        response = client.get("/api/v1/history/export", params={"format": "csv"})
        assert response.status_code == 200
        assert "Unknown calculation" in response.text


class TestNonFiniteInputs:
    def test_tax_nan_gross_income(self, client):
        response = client.post("/api/v1/tax/calculate", json={"gross_income": "NaN"})
        assert response.status_code == 400
        assert response.json()["detail"] == ["Gross income must be a finite number"]

    def test_tax_validate_nan(self, client):
        data = client.post("/api/v1/tax/validate", json={"gross_income": "NaN"}).json()
        assert data == {"valid": False, "errors": ["Gross income must be a finite number"]}

    def test_bmi_infinite_weight(self, client):
        response = client.post("/api/v1/bmi/calculate", json={"weight": "inf", "height": 170})
        assert response.status_code == 400
        assert "Weight must be a finite number" in response.json()["detail"]

    def test_inflation_nan_amount(self, client):
        response = client.post(
            "/api/v1/inflation/calculate",
            json={"amount": "NaN", "start_date": "2020-01", "end_date": "2021-01"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == ["Amount must be a finite number"]


class TestHistoryBackendSelection:
    def test_memory_backend(self):
        store = build_history_store(Settings(HISTORY_BACKEND="memory", HISTORY_MAX_RECORDS=3))
        assert isinstance(store, InMemoryHistoryStore)
        assert store.max_records == 3

    def test_file_backend(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        store = build_history_store(Settings(HISTORY_BACKEND="file", HISTORY_FILE=str(path)))
        assert isinstance(store, JSONFileHistoryStore)
        assert path.exists()

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown history backend"):
            build_history_store(Settings(HISTORY_BACKEND="redis"))
