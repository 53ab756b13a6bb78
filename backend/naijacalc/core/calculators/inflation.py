"""
Inflation Calculator (CPI methodology)
Measures how the naira's purchasing power changed between two months using
the NBS Consumer Price Index.

  total inflation   = (end CPI - start CPI) / start CPI x 100
  adjusted amount   = amount x end CPI / start CPI
  annualized rate   = ((end CPI / start CPI) ^ (1 / years) - 1) x 100
  purchasing power  = (adjusted amount - amount) / amount x 100
"""

import math
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum

from naijacalc.core.errors import CalculationError
from naijacalc.core.reference_data.nigeria_cpi import (
    NIGERIA_CPI,
    CPISeries,
    months_between,
    parse_year_month,
)

MAX_AMOUNT = 999_999_999_999
SUPPORTED_CURRENCY = "NGN"


class InflationLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very-high"


@dataclass
class InflationInputs:
    amount: float | None = None
    start_date: str | None = None
    end_date: str | None = None
    currency: str = SUPPORTED_CURRENCY


@dataclass
class InflationResult:
    inflation_rate: float
    adjusted_amount: float
    total_inflation: float
    annualized_rate: float
    purchasing_power_loss: float
    equivalent_value: float
    period_in_years: float
    start_cpi: float
    end_cpi: float


@dataclass
class InflationInterpretation:
    level: InflationLevel
    description: str
    color: str
    recommendations: list[str] = field(default_factory=list)


# Upper bound (exclusive) of each annualized-rate band, in order
INFLATION_BANDS: list[tuple[float, InflationInterpretation]] = [
    (3.0, InflationInterpretation(
        level=InflationLevel.LOW,
        description="Low inflation - Generally considered healthy for economic growth",
        color="text-green-600",
        recommendations=[
            "Consider investing in growth assets for better returns",
            "Fixed deposits and savings accounts may be suitable",
            "Focus on long-term financial planning",
        ],
    )),
    (6.0, InflationInterpretation(
        level=InflationLevel.MODERATE,
        description="Moderate inflation - Within acceptable range for most economies",
        color="text-yellow-600",
        recommendations=[
            "Diversify investments across different asset classes",
            "Consider inflation-linked bonds or securities",
            "Review and adjust financial goals regularly",
        ],
    )),
    (15.0, InflationInterpretation(
        level=InflationLevel.HIGH,
        description="High inflation - May impact purchasing power significantly",
        color="text-orange-600",
        recommendations=[
            "Prioritize inflation-beating investments",
            "Consider real estate or commodity investments",
            "Avoid holding too much cash for long periods",
            "Review salary and income adjustments regularly",
        ],
    )),
    (float("inf"), InflationInterpretation(
        level=InflationLevel.VERY_HIGH,
        description="Very high inflation - Serious impact on purchasing power and savings",
        color="text-red-600",
        recommendations=[
            "Focus on preserving purchasing power",
            "Consider foreign currency or international investments",
            "Invest in tangible assets like real estate",
            "Negotiate regular salary reviews",
            "Avoid long-term fixed-rate loans as a borrower",
        ],
    )),
]


def _month_label(date_string: str) -> str:
    year, month = parse_year_month(date_string)
    return date(year, month, 1).strftime("%B %Y")


def _try_parse(date_string: str) -> tuple[int, int] | None:
    try:
        return parse_year_month(date_string)
    except ValueError:
        return None


class InflationCalculator:
    """
    Deterministic CPI-based inflation calculator.
    Reads CPI values from the CPISeries it is built with.
    """

    def __init__(self, series: CPISeries = NIGERIA_CPI):
        self.series = series

    def validate_inputs(self, inputs: InflationInputs) -> list[str]:
        errors = []

        if inputs.amount is not None and not math.isfinite(inputs.amount):
            errors.append("Amount must be a finite number")

        if not inputs.amount or inputs.amount <= 0:
            errors.append("Amount must be a positive number")

        if inputs.amount and inputs.amount > MAX_AMOUNT:
            errors.append("Amount is too large")

        if inputs.currency != SUPPORTED_CURRENCY:
            errors.append(f"Only {SUPPORTED_CURRENCY} currency is supported")

        if not inputs.start_date:
            errors.append("Start date is required")
        if not inputs.end_date:
            errors.append("End date is required")
        if not inputs.start_date or not inputs.end_date:
            return errors

        start = _try_parse(inputs.start_date)
        end = _try_parse(inputs.end_date)
        if start is None:
            errors.append("Start date must be in YYYY-MM format")
        if end is None:
            errors.append("End date must be in YYYY-MM format")
        if start is None or end is None:
            return errors

        if start >= end:
            errors.append("End date must be after start date")

        min_date, max_date = self.series.available_date_range()
        if start < parse_year_month(min_date):
            errors.append(f"Start date must be after {_month_label(min_date)}")
        if end > parse_year_month(max_date):
            errors.append(f"End date must be before {_month_label(max_date)}")

        if months_between(inputs.start_date, inputs.end_date) < 1:
            errors.append("Period must be at least 1 month for meaningful inflation calculation")

        return errors

    def calculate(self, inputs: InflationInputs) -> InflationResult:
        errors = self.validate_inputs(inputs)
        if errors:
            raise CalculationError.from_errors(errors)

        amount = inputs.amount
        start_cpi = self.series.get_cpi_for_date(inputs.start_date)
        end_cpi = self.series.get_cpi_for_date(inputs.end_date)

        if start_cpi <= 0 or end_cpi <= 0:
            raise CalculationError("Invalid CPI data for the selected dates")

        period_in_years = months_between(inputs.start_date, inputs.end_date) / 12
        cpi_ratio = end_cpi / start_cpi

        total_inflation = (end_cpi - start_cpi) / start_cpi * 100
        annualized_rate = (cpi_ratio ** (1 / period_in_years) - 1) * 100 if period_in_years > 0 else 0.0
        adjusted_amount = amount * cpi_ratio

        return InflationResult(
            inflation_rate=total_inflation,
            adjusted_amount=adjusted_amount,
            total_inflation=total_inflation,
            annualized_rate=annualized_rate,
            purchasing_power_loss=(adjusted_amount - amount) / amount * 100,
            equivalent_value=adjusted_amount,
            period_in_years=period_in_years,
            start_cpi=start_cpi,
            end_cpi=end_cpi,
        )

    def get_interpretation(self, annualized_rate: float) -> InflationInterpretation:
        for upper_bound, interpretation in INFLATION_BANDS:
            if annualized_rate < upper_bound:
                return replace(interpretation, recommendations=list(interpretation.recommendations))
        raise ValueError(f"Cannot classify inflation rate {annualized_rate}")

    def get_recommendations(self, annualized_rate: float) -> list[str]:
        return list(self.get_interpretation(annualized_rate).recommendations)
