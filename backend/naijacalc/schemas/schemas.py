"""
Pydantic schemas for API request validation.

Calculator request fields are deliberately permissive: range and
cross-field checks belong to the calculators' own validators, which report
every violated rule at once.
"""

from pydantic import BaseModel, Field

from naijacalc.core.calculators.bmi import BMIInputs, MeasurementUnit
from naijacalc.core.calculators.inflation import InflationInputs
from naijacalc.core.calculators.tax import AdditionalReliefs, PaymentFrequency, TaxInputs
from naijacalc.core.history import CalculationType


# ── BMI Schemas ──

class BMICalculateRequest(BaseModel):
    weight: float | None = None
    unit: MeasurementUnit = MeasurementUnit.METRIC
    height: float | None = Field(default=None, description="Height in cm (metric)")
    height_feet: float | None = Field(default=None, description="Feet part of height (imperial)")
    height_inches: float | None = Field(default=None, description="Inches part of height (imperial)")

    def to_inputs(self) -> BMIInputs:
        return BMIInputs(
            weight=self.weight,
            unit=self.unit,
            height=self.height,
            height_feet=self.height_feet,
            height_inches=self.height_inches,
        )


# ── Tax Schemas ──

class AdditionalReliefsRequest(BaseModel):
    disability: bool = False
    old_age: bool = Field(default=False, description="65 years and above")
    dependent_relatives: int = 0


class TaxCalculateRequest(BaseModel):
    gross_income: float | None = Field(default=None, description="Gross income for the payment frequency")
    basic_salary: float | None = Field(default=None, description="Basic salary for the payment frequency")
    monthly_emolument: float | None = None
    life_assurance_premium: float | None = None
    additional_reliefs: AdditionalReliefsRequest | None = None
    payment_frequency: PaymentFrequency = PaymentFrequency.ANNUAL
    include_minimum_tax: bool = False

    def to_inputs(self) -> TaxInputs:
        """Build annual engine inputs, annualising monthly amounts."""
        multiplier = 12 if self.payment_frequency == PaymentFrequency.MONTHLY else 1
        reliefs = None
        if self.additional_reliefs is not None:
            reliefs = AdditionalReliefs(**self.additional_reliefs.model_dump())

        return TaxInputs(
            gross_income=self.gross_income * multiplier if self.gross_income is not None else None,
            basic_salary=self.basic_salary * multiplier if self.basic_salary is not None else None,
            monthly_emolument=self.monthly_emolument,
            life_assurance_premium=self.life_assurance_premium,
            additional_reliefs=reliefs,
            payment_frequency=self.payment_frequency,
            include_minimum_tax=self.include_minimum_tax,
        )


# ── Inflation Schemas ──

class InflationCalculateRequest(BaseModel):
    amount: float | None = None
    start_date: str | None = Field(default=None, description="YYYY-MM")
    end_date: str | None = Field(default=None, description="YYYY-MM")
    currency: str = "NGN"

    def to_inputs(self) -> InflationInputs:
        return InflationInputs(
            amount=self.amount,
            start_date=self.start_date,
            end_date=self.end_date,
            currency=self.currency,
        )


# ── Shared Schemas ──

class ValidationResponse(BaseModel):
    valid: bool
    errors: list[str] = []


# ── History Schemas ──

class HistoryRecordCreate(BaseModel):
    type: CalculationType
    inputs: dict
    result: dict


class HistoryImportRequest(BaseModel):
    data: str = Field(..., description="JSON export produced by /history/export")
