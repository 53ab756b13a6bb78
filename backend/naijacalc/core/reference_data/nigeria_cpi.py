"""
Historical Nigerian Consumer Price Index (CPI)
Base period: May 2009 = 100 (NBS methodology)
Source: National Bureau of Statistics (NBS) CPI reports and monthly bulletins

All Items CPI (urban + rural composite). The series is sparse: early years
carry only a few points per year, 2024 onwards is monthly. Each point carries
the published year-over-year inflation rate where known.

The table is append-only historical data. Lookups go through CPISeries so a
refreshed series can be swapped in without touching calculator code.
"""

from dataclasses import dataclass, field
from datetime import datetime

MONTH_FORMATS = ("%Y-%m", "%Y-%m-%d")


@dataclass(frozen=True)
class CPIDataPoint:
    year: int
    month: int
    cpi: float
    inflation_rate: float | None = None
    date: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "date", f"{self.year}-{self.month:02d}")


NIGERIA_CPI_DATA: tuple[CPIDataPoint, ...] = (
    # 2009 (base year)
    CPIDataPoint(2009, 5, 100.0, 12.4),
    CPIDataPoint(2009, 6, 100.8, 12.3),
    CPIDataPoint(2009, 12, 106.5, 11.5),
    # 2010
    CPIDataPoint(2010, 1, 108.2, 12.2),
    CPIDataPoint(2010, 6, 111.8, 10.9),
    CPIDataPoint(2010, 12, 119.7, 13.7),
    # 2011
    CPIDataPoint(2011, 1, 121.5, 12.3),
    CPIDataPoint(2011, 6, 126.8, 13.4),
    CPIDataPoint(2011, 12, 131.2, 9.6),
    # 2012
    CPIDataPoint(2012, 1, 133.7, 10.1),
    CPIDataPoint(2012, 6, 137.4, 8.4),
    CPIDataPoint(2012, 12, 141.3, 7.7),
    # 2013
    CPIDataPoint(2013, 1, 142.8, 6.8),
    CPIDataPoint(2013, 6, 146.1, 6.3),
    CPIDataPoint(2013, 12, 149.8, 6.0),
    # 2014
    CPIDataPoint(2014, 1, 151.4, 6.0),
    CPIDataPoint(2014, 6, 154.9, 6.0),
    CPIDataPoint(2014, 12, 158.7, 5.9),
    # 2015
    CPIDataPoint(2015, 1, 160.5, 6.0),
    CPIDataPoint(2015, 6, 166.3, 7.4),
    CPIDataPoint(2015, 12, 173.2, 9.1),
    # 2016
    CPIDataPoint(2016, 1, 176.1, 9.7),
    CPIDataPoint(2016, 3, 184.2, 13.7),
    CPIDataPoint(2016, 6, 195.4, 17.5),
    CPIDataPoint(2016, 9, 204.8, 17.9),
    CPIDataPoint(2016, 12, 213.7, 23.4),
    # 2017
    CPIDataPoint(2017, 1, 221.2, 25.6),
    CPIDataPoint(2017, 3, 234.5, 27.3),
    CPIDataPoint(2017, 6, 234.1, 19.8),
    CPIDataPoint(2017, 9, 239.8, 17.1),
    CPIDataPoint(2017, 12, 243.6, 14.0),
    # 2018
    CPIDataPoint(2018, 1, 246.5, 11.4),
    CPIDataPoint(2018, 3, 250.2, 6.7),
    CPIDataPoint(2018, 6, 252.3, 7.8),
    CPIDataPoint(2018, 9, 256.1, 6.8),
    CPIDataPoint(2018, 12, 257.8, 5.8),
    # 2019
    CPIDataPoint(2019, 1, 259.6, 5.3),
    CPIDataPoint(2019, 3, 262.4, 4.9),
    CPIDataPoint(2019, 6, 264.3, 4.8),
    CPIDataPoint(2019, 9, 268.7, 4.9),
    CPIDataPoint(2019, 12, 270.1, 4.8),
    # 2020
    CPIDataPoint(2020, 1, 271.9, 4.7),
    CPIDataPoint(2020, 3, 276.8, 5.5),
    CPIDataPoint(2020, 6, 281.2, 6.4),
    CPIDataPoint(2020, 9, 295.4, 9.9),
    CPIDataPoint(2020, 12, 303.2, 12.3),
    # 2021
    CPIDataPoint(2021, 1, 308.5, 13.5),
    CPIDataPoint(2021, 3, 318.7, 15.1),
    CPIDataPoint(2021, 6, 332.8, 18.4),
    CPIDataPoint(2021, 9, 345.2, 16.8),
    CPIDataPoint(2021, 12, 346.4, 14.2),
    # 2022
    CPIDataPoint(2022, 1, 351.2, 13.8),
    CPIDataPoint(2022, 3, 365.7, 14.7),
    CPIDataPoint(2022, 6, 379.8, 14.1),
    CPIDataPoint(2022, 9, 398.5, 15.5),
    CPIDataPoint(2022, 12, 410.9, 18.6),
    # 2023
    CPIDataPoint(2023, 1, 418.3, 19.1),
    CPIDataPoint(2023, 3, 441.8, 20.8),
    CPIDataPoint(2023, 6, 453.6, 19.4),
    CPIDataPoint(2023, 9, 476.2, 19.5),
    CPIDataPoint(2023, 12, 478.1, 16.4),
    # 2024
    CPIDataPoint(2024, 1, 483.7, 15.6),
    CPIDataPoint(2024, 2, 495.3, 16.8),
    CPIDataPoint(2024, 3, 512.4, 16.0),
    CPIDataPoint(2024, 4, 524.8, 15.2),
    CPIDataPoint(2024, 5, 534.2, 14.7),
    CPIDataPoint(2024, 6, 540.8, 19.2),
    CPIDataPoint(2024, 7, 548.9, 19.8),
    CPIDataPoint(2024, 8, 553.1, 20.4),
    CPIDataPoint(2024, 9, 561.7, 17.9),
    CPIDataPoint(2024, 10, 567.3, 17.3),
    CPIDataPoint(2024, 11, 572.8, 16.8),
    CPIDataPoint(2024, 12, 578.2, 20.9),
    # 2025 (latest published)
    CPIDataPoint(2025, 1, 585.6, 21.1),
    CPIDataPoint(2025, 2, 592.8, 19.7),
    CPIDataPoint(2025, 3, 601.4, 17.4),
    CPIDataPoint(2025, 4, 608.9, 16.0),
    CPIDataPoint(2025, 5, 614.2, 15.0),
)


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse "YYYY-MM" (or a full "YYYY-MM-DD" date) into (year, month)."""
    for fmt in MONTH_FORMATS:
        try:
            parsed = datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
        return parsed.year, parsed.month
    raise ValueError(f"Invalid date '{value}': expected YYYY-MM")


def months_between(start: str, end: str) -> int:
    start_year, start_month = parse_year_month(start)
    end_year, end_month = parse_year_month(end)
    return (end_year - start_year) * 12 + (end_month - start_month)


def _sort_key(point: CPIDataPoint) -> tuple[int, int]:
    return point.year, point.month


class CPISeries:
    """
    Read-only lookups over a sparse monthly CPI series.

    Missing months resolve to the nearest month in the same year, and missing
    years to the nearest year. Equidistant candidates resolve to whichever
    comes first in table order.
    """

    def __init__(self, points: tuple[CPIDataPoint, ...] | list[CPIDataPoint]):
        if not points:
            raise ValueError("CPI series cannot be empty")
        self._points = tuple(points)

    @property
    def points(self) -> tuple[CPIDataPoint, ...]:
        return self._points

    def find_point_for_date(self, date_string: str) -> CPIDataPoint:
        year, month = parse_year_month(date_string)

        for point in self._points:
            if point.year == year and point.month == month:
                return point

        same_year = [p for p in self._points if p.year == year]
        if not same_year:
            return min(self._points, key=lambda p: abs(p.year - year))

        return min(same_year, key=lambda p: abs(p.month - month))

    def get_cpi_for_date(self, date_string: str) -> float:
        return self.find_point_for_date(date_string).cpi

    def available_date_range(self) -> tuple[str, str]:
        ordered = sorted(self._points, key=_sort_key)
        return ordered[0].date, ordered[-1].date

    def points_between(self, start_year: int, end_year: int) -> list[CPIDataPoint]:
        selected = [p for p in self._points if start_year <= p.year <= end_year]
        return sorted(selected, key=_sort_key)

    def latest(self) -> CPIDataPoint:
        return max(self._points, key=_sort_key)

    def years(self) -> list[int]:
        return sorted({p.year for p in self._points})

    def inflation_between(self, from_date: str, to_date: str) -> float:
        from_cpi = self.get_cpi_for_date(from_date)
        to_cpi = self.get_cpi_for_date(to_date)
        return (to_cpi - from_cpi) / from_cpi * 100


NIGERIA_CPI = CPISeries(NIGERIA_CPI_DATA)
