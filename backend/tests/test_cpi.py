"""
Tests for the Nigerian CPI series and its lookup rules.
Base period: May 2009 = 100.
"""

import pytest

from naijacalc.core.reference_data.nigeria_cpi import (
    NIGERIA_CPI,
    NIGERIA_CPI_DATA,
    CPIDataPoint,
    CPISeries,
    months_between,
    parse_year_month,
)


class TestCPIData:
    def test_base_period(self):
        first = NIGERIA_CPI_DATA[0]
        assert (first.year, first.month, first.cpi) == (2009, 5, 100.0)
        assert first.date == "2009-05"

    def test_table_is_time_ordered(self):
        keys = [(p.year, p.month) for p in NIGERIA_CPI_DATA]
        assert keys == sorted(keys)
        assert len(set(keys)) == len(keys)

    def test_all_cpi_positive(self):
        assert all(p.cpi > 0 for p in NIGERIA_CPI_DATA)


class TestDateParsing:
    def test_year_month(self):
        assert parse_year_month("2020-01") == (2020, 1)

    def test_full_date(self):
        assert parse_year_month("2020-03-15") == (2020, 3)

    @pytest.mark.parametrize("value", ["2020-13", "Jan 2020", "", "2020/01"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_year_month(value)

    def test_months_between(self):
        assert months_between("2020-01", "2024-12") == 59
        assert months_between("2024-12", "2024-01") == -11


class TestCPILookup:
    def test_exact_match(self):
        assert NIGERIA_CPI.get_cpi_for_date("2024-06") == 540.8
        assert NIGERIA_CPI.get_cpi_for_date("2020-01") == 271.9
        assert NIGERIA_CPI.get_cpi_for_date("2024-12") == 578.2

    def test_nearest_month_in_same_year(self):
        # May 2020 is closer to June than March
        assert NIGERIA_CPI.get_cpi_for_date("2020-05") == 281.2

    def test_month_tie_goes_to_first_in_table(self):
        # February 2020 is one month from both January and March
        assert NIGERIA_CPI.get_cpi_for_date("2020-02") == 271.9

    def test_before_series_uses_nearest_year(self):
        assert NIGERIA_CPI.get_cpi_for_date("2005-03") == 100.0

    def test_after_series_uses_nearest_year(self):
        # every 2025 point is equally near; the first one wins
        assert NIGERIA_CPI.get_cpi_for_date("2030-11") == 585.6

    def test_find_point_returns_data_point(self):
        point = NIGERIA_CPI.find_point_for_date("2016-09")
        assert point.inflation_rate == 17.9

    def test_invalid_date_raises(self):
        with pytest.raises(ValueError):
            NIGERIA_CPI.get_cpi_for_date("not-a-date")


class TestCPISeries:
    def test_available_range(self):
        assert NIGERIA_CPI.available_date_range() == ("2009-05", "2025-05")

    def test_range_uses_sorted_copy(self):
        series = CPISeries([CPIDataPoint(2021, 6, 120.0), CPIDataPoint(2020, 1, 100.0)])
        assert series.available_date_range() == ("2020-01", "2021-06")
        assert series.points[0].year == 2021

    def test_points_between(self):
        points = NIGERIA_CPI.points_between(2024, 2024)
        assert len(points) == 12
        assert points[0].date == "2024-01"
        assert points[-1].date == "2024-12"

    def test_latest(self):
        latest = NIGERIA_CPI.latest()
        assert latest.date == "2025-05"
        assert latest.cpi == 614.2

    def test_years(self):
        years = NIGERIA_CPI.years()
        assert years[0] == 2009
        assert years[-1] == 2025
        assert len(years) == 17

    def test_inflation_between(self):
        expected = (578.2 - 271.9) / 271.9 * 100
        assert NIGERIA_CPI.inflation_between("2020-01", "2024-12") == pytest.approx(expected)

    def test_empty_series_rejected(self):
        with pytest.raises(ValueError):
            CPISeries([])
