"""Tests for IEC 61724 performance analysis endpoints."""

from __future__ import annotations

import logging

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

HCM = "Hồ Chí Minh"

ACTUAL_CSV = (
    "month,actual_energy_kwh,actual_irradiance_kwh_m2,avg_ambient_temp\n"
    "M1,2700,150,27\n"
    "M2,2500,0,28\n"
    "bad row,,,\n"
)


class TestSimulation:
    async def test_region_indicators(self, client: AsyncClient):
        resp = await client.post("/api/v1/performance/simulation", json={"region": HCM})
        assert resp.status_code == 200
        data = resp.json()
        assert data["source"] == "simulation"
        assert len(data["series"]) == 12
        summary = data["summary"]
        assert 0.0 < summary["capacity_utilization_factor"] < 100.0
        assert 70.0 < summary["avg_performance_ratio"] < 100.0

    async def test_unknown_region(self, client: AsyncClient):
        resp = await client.post("/api/v1/performance/simulation", json={"region": "Atlantis"})
        assert resp.status_code == 404


class TestActualData:
    async def test_upload(self, client: AsyncClient):
        resp = await client.post(
            "/api/v1/performance/actual",
            params={"capacity_kwp": 18.0},
            files={"file": ("actual.csv", ACTUAL_CSV.encode("utf-8"), "text/csv")},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["source"] == "actual"
        assert data["rejected_rows"] == 1
        m1, m2 = data["series"]
        assert m1["performance_ratio"] == pytest.approx(100.0)
        assert m2["performance_ratio"] is None
        assert data["summary"]["valid_periods"] == 1
        assert data["summary"]["total_energy"] == pytest.approx(5200.0)
        assert data["relative_to_simulation"] is None

    async def test_relative_to_region(self, client: AsyncClient):
        resp = await client.post(
            "/api/v1/performance/actual",
            params={"area": 100, "efficiency": 0.18, "region": HCM},
            files={"file": ("actual.csv", ACTUAL_CSV.encode("utf-8"), "text/csv")},
        )
        assert resp.status_code == 200
        relative = resp.json()["relative_to_simulation"]
        assert set(relative) == {"M1", "M2"}
        assert relative["M1"] > 0.0
        assert resp.json()["unmatched_months"] == []

    async def test_vietnamese_template_compared_to_region(self, client: AsyncClient):
        csv_text = (
            "Tháng,Sản lượng AC Thực tế (kWh),Bức xạ GHI Thực tế (kWh/m2/tháng),"
            "Nhiệt độ môi trường TB (°C)\n"
            "T1,5000,150,27\n"
            "T2,5500,160,28\n"
            "T13,100,10,25\n"
        )
        resp = await client.post(
            "/api/v1/performance/actual",
            params={"area": 100, "efficiency": 0.18, "region": HCM},
            files={"file": ("thuc_te.csv", csv_text.encode("utf-8"), "text/csv")},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert set(data["relative_to_simulation"]) == {"T1", "T2"}
        assert all(v > 0.0 for v in data["relative_to_simulation"].values())
        assert data["unmatched_months"] == ["T13"]

    async def test_comparison_logs_region(self, client: AsyncClient, caplog):
        caplog.set_level(logging.INFO, logger="app.api.v1.performance")
        await client.post(
            "/api/v1/performance/actual",
            params={"area": 100, "efficiency": 0.18, "region": HCM},
            files={"file": ("actual.csv", ACTUAL_CSV.encode("utf-8"), "text/csv")},
        )
        assert any(getattr(r, "region", None) == HCM for r in caplog.records)

    async def test_empty_file(self, client: AsyncClient):
        resp = await client.post(
            "/api/v1/performance/actual",
            files={"file": ("actual.csv", b"month,actual_energy_kwh\n", "text/csv")},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["series"] == []
        assert data["summary"]["has_data"] is False

    async def test_template(self, client: AsyncClient):
        resp = await client.get("/api/v1/performance/template")
        assert resp.status_code == 200
        assert resp.text.splitlines()[1].startswith("M1,5000,150")
