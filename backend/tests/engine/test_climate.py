"""Tests for engine.climate: monthly records and CSV import."""

from __future__ import annotations

import pytest

from engine.climate.records import DEFAULT_REGIONAL_DATA, ClimateRecord, MonthlyClimate
from engine.climate.tabular import (
    actual_template_csv,
    climate_template_csv,
    import_climate_csv,
    merge_climate_rows,
    parse_actual_rows,
    parse_climate_rows,
)


# ======================================================================
# Records
# ======================================================================


class TestClimateRecord:
    def test_defaults(self):
        record = ClimateRecord.empty()
        assert record.latitude == 10.0
        assert len(record.months) == 12
        assert all(m == MonthlyClimate(0.0, 25.0) for m in record.months)

    @pytest.mark.parametrize("count", [0, 11, 13])
    def test_wrong_month_count(self, count):
        with pytest.raises(ValueError):
            ClimateRecord(latitude=0.0, months=tuple(MonthlyClimate() for _ in range(count)))

    def test_yearly_statistics(self, hcm_record):
        assert hcm_record.annual_irradiance == pytest.approx(59.0 * 30)
        assert hcm_record.average_daily_irradiance == pytest.approx(59.0 / 12)

    def test_with_month_copies(self, hcm_record):
        updated = hcm_record.with_month(0, MonthlyClimate(1.0, 20.0))
        assert updated.months[0] == MonthlyClimate(1.0, 20.0)
        assert hcm_record.months[0] == MonthlyClimate(5.2, 27.0)

    def test_dict_round_trip_defaults_bad_values(self):
        record = ClimateRecord.from_dict(
            {
                "latitude": 21.0,
                "months": [{"daily_irradiance": "oops", "ambient_temp": None}, {"daily_irradiance": -3}],
            }
        )
        assert len(record.months) == 12
        assert record.months[0] == MonthlyClimate(0.0, 25.0)
        assert record.months[1].daily_irradiance == 0.0
        assert ClimateRecord.from_dict(record.to_dict()) == record

    @pytest.mark.parametrize("months", [5, "abc", [7, None, ["x"]], {"1": {}}])
    def test_malformed_months_defaulted(self, months):
        record = ClimateRecord.from_dict({"latitude": 12.0, "months": months})
        assert record.latitude == 12.0
        assert record.months == ClimateRecord.empty().months


# ======================================================================
# Climate CSV import
# ======================================================================


class TestClimateImport:
    def test_template_parses(self):
        rows, rejected = parse_climate_rows(climate_template_csv())
        assert rejected == 0
        assert [r.month for r in rows] == [1, 2]
        assert rows[0].region == "Hồ Chí Minh"
        assert rows[0].daily_irradiance == 5.2

    def test_vietnamese_headers(self):
        text = (
            "Tên Vùng,Vĩ độ,Tháng (1-12),Bức xạ GHI (kWh/m2/ngày),Nhiệt độ (°C)\n"
            "Đà Nẵng,16.1,6,6.3,30\n"
        )
        rows, rejected = parse_climate_rows(text)
        assert rejected == 0
        assert rows[0].region == "Đà Nẵng"
        assert rows[0].latitude == pytest.approx(16.1)
        assert rows[0].month == 6
        assert rows[0].ambient_temp == 30.0

    def test_malformed_rows(self):
        text = (
            "region,latitude,month,daily_irradiance,ambient_temp\n"
            ",10,1,5,27\n"            # no region
            "A,10,13,5,27\n"          # month out of range
            "A,10,x,5,27\n"           # month not numeric
            "A,10,2.5,5,27\n"         # month not integer
            "A,10,3,,\n"              # defaults
            "A,10,4,-2,nan\n"         # negative / NaN
        )
        rows, rejected = parse_climate_rows(text)
        assert rejected == 4
        assert len(rows) == 2
        assert (rows[0].daily_irradiance, rows[0].ambient_temp) == (0.0, 25.0)
        assert (rows[1].daily_irradiance, rows[1].ambient_temp) == (0.0, 25.0)

    def test_merge_new_region(self):
        text = "region,latitude,month,daily_irradiance,ambient_temp\nHuế,16.5,2,4.0,22\n"
        rows, _ = parse_climate_rows(text)
        merged = merge_climate_rows(DEFAULT_REGIONAL_DATA, rows)
        hue = merged["Huế"]
        assert hue.latitude == pytest.approx(16.5)
        assert hue.months[1] == MonthlyClimate(4.0, 22.0)
        assert hue.months[0] == MonthlyClimate(0.0, 25.0)
        assert "Huế" not in DEFAULT_REGIONAL_DATA

    def test_merge_overwrites_existing_month_keeps_latitude(self):
        text = "region,latitude,month,daily_irradiance,ambient_temp\nHà Nội,99,1,3.0,16\n"
        merged, report = import_climate_csv(DEFAULT_REGIONAL_DATA, text)
        assert report.accepted == 1
        assert report.regions == ["Hà Nội"]
        assert merged["Hà Nội"].latitude == 21.0
        assert merged["Hà Nội"].months[0] == MonthlyClimate(3.0, 16.0)
        assert DEFAULT_REGIONAL_DATA["Hà Nội"].months[0] == MonthlyClimate(2.1, 17.0)

    def test_last_row_wins(self):
        text = (
            "region,latitude,month,daily_irradiance,ambient_temp\n"
            "B,5,1,1.0,20\n"
            "B,5,1,2.0,21\n"
        )
        merged, _ = import_climate_csv({}, text)
        assert merged["B"].months[0] == MonthlyClimate(2.0, 21.0)

    def test_missing_latitude_defaults(self):
        text = "region,month,daily_irradiance,ambient_temp\nC,1,3,20\n"
        merged, _ = import_climate_csv({}, text)
        assert merged["C"].latitude == 10.0

    def test_utf8_bom(self):
        text = "\ufeff" + climate_template_csv()
        rows, rejected = parse_climate_rows(text)
        assert len(rows) == 2
        assert rejected == 0


# ======================================================================
# Actual production CSV import
# ======================================================================


class TestActualImport:
    def test_template_parses(self):
        rows, rejected = parse_actual_rows(actual_template_csv())
        assert rejected == 0
        assert [r.month for r in rows] == ["M1", "M2", "M3"]
        assert rows[0].actual_energy_kwh == 5000.0
        assert rows[0].actual_irradiance_kwh_m2 == 150.0

    def test_vietnamese_headers_and_default_temperature(self):
        text = (
            "Tháng,Sản lượng AC Thực tế (kWh),Bức xạ GHI Thực tế (kWh/m2/tháng),"
            "Nhiệt độ môi trường TB (°C)\n"
            "T1,5000,150,\n"
        )
        rows, rejected = parse_actual_rows(text)
        assert rejected == 0
        assert rows[0].month == "T1"
        assert rows[0].avg_ambient_temp == 25.0

    def test_rows_without_numbers_rejected(self):
        text = "month,actual_energy_kwh,actual_irradiance_kwh_m2\nM1,abc,150\nM2,100,\n,1,1\n"
        rows, rejected = parse_actual_rows(text)
        assert rows == []
        assert rejected == 3
