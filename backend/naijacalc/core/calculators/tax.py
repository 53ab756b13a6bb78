"""
Personal Income Tax (PAYE) Calculator
Nigerian Personal Income Tax Act, 2024/2025 tax year

Taxable income = gross income - (consolidated relief + NHF + NHIS + pension
                 + life assurance relief + additional reliefs)

Tax is applied progressively over the bracket table of the configured
PAYERules. When minimum tax is requested the final tax is the higher of the
bracket tax and 0.5% of gross income.

All amounts are annual. Monthly figures are annualised by the caller.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from naijacalc.core.errors import CalculationError
from naijacalc.core.formatting import format_ngn
from naijacalc.core.reference_data.tax_rules import (
    NIGERIA_PAYE_2024,
    PAYERules,
    ReliefType,
    consolidated_relief,
    get_tax_bracket_info,
    life_assurance_relief,
    national_housing_fund,
    nhis_contribution,
    pension_contribution,
)


class PaymentFrequency(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


@dataclass
class AdditionalReliefs:
    disability: bool = False
    old_age: bool = False
    dependent_relatives: int = 0


@dataclass
class TaxInputs:
    gross_income: float | None = None
    basic_salary: float | None = None
    monthly_emolument: float | None = None
    life_assurance_premium: float | None = None
    additional_reliefs: AdditionalReliefs | None = None
    payment_frequency: PaymentFrequency = PaymentFrequency.ANNUAL
    include_minimum_tax: bool = False


@dataclass
class AllowanceBreakdown:
    consolidated_relief: float
    national_housing_fund: float
    nhis: float
    pension: float
    life_assurance: float
    additional_reliefs: float
    total: float


@dataclass
class TaxBracketResult:
    min: float
    max: float | None
    rate: float
    taxable_amount: float
    tax_amount: float
    description: str


@dataclass
class TaxResult:
    gross_income: float
    total_allowances: float
    taxable_income: float
    income_tax: float
    minimum_tax: float
    final_tax: float
    net_income: float
    allowance_breakdown: AllowanceBreakdown
    effective_rate: float
    marginal_rate: float
    tax_brackets: list[TaxBracketResult] = field(default_factory=list)


class PAYECalculator:
    """
    Deterministic PAYE calculator for Nigerian employees.
    Rates, caps and reliefs come from the PAYERules table it is built with.
    """

    def __init__(self, rules: PAYERules = NIGERIA_PAYE_2024):
        self.rules = rules

    def validate_inputs(self, inputs: TaxInputs) -> list[str]:
        errors = []
        gross = inputs.gross_income

        for label, value in (
            ("Gross income", gross),
            ("Basic salary", inputs.basic_salary),
            ("Monthly emolument", inputs.monthly_emolument),
            ("Life assurance premium", inputs.life_assurance_premium),
        ):
            if value is not None and not math.isfinite(value):
                errors.append(f"{label} must be a finite number")

        if not gross or gross <= 0:
            errors.append("Gross income must be greater than 0")

        if gross and gross > self.rules.gross_income_ceiling:
            errors.append("Gross income seems unusually high. Please verify the amount.")

        if inputs.basic_salary and gross is not None and inputs.basic_salary > gross:
            errors.append("Basic salary cannot be greater than gross income")

        if inputs.monthly_emolument and gross is not None and inputs.monthly_emolument * 12 > gross:
            errors.append("Monthly emolument appears inconsistent with annual gross income")

        if inputs.life_assurance_premium and inputs.life_assurance_premium < 0:
            errors.append("Life assurance premium cannot be negative")

        reliefs = inputs.additional_reliefs
        if reliefs and reliefs.dependent_relatives and not (
            0 <= reliefs.dependent_relatives <= self.rules.max_dependent_relatives
        ):
            errors.append(
                f"Number of dependent relatives must be between 0 and {self.rules.max_dependent_relatives}"
            )

        return errors

    def calculate_additional_reliefs(self, reliefs: AdditionalReliefs | None) -> float:
        if reliefs is None:
            return 0.0

        table = self.rules.additional_reliefs
        total = 0.0
        if reliefs.disability:
            total += table[ReliefType.DISABILITY].amount
        if reliefs.old_age:
            total += table[ReliefType.OLD_AGE].amount
        if reliefs.dependent_relatives:
            total += reliefs.dependent_relatives * table[ReliefType.DEPENDENT_RELATIVE].amount
        return total

    def calculate_allowances(self, inputs: TaxInputs) -> AllowanceBreakdown:
        rules = self.rules
        gross = inputs.gross_income
        basic_salary = inputs.basic_salary or gross * rules.default_basic_salary_ratio
        monthly_emolument = inputs.monthly_emolument or gross / 12

        cra = consolidated_relief(gross, rules)
        nhf = national_housing_fund(basic_salary, rules)
        nhis = nhis_contribution(basic_salary, rules)
        pension = pension_contribution(monthly_emolument, rules)

        life_assurance = 0.0
        if inputs.life_assurance_premium and inputs.life_assurance_premium > 0:
            income_after_reliefs = gross - cra - nhf - nhis - pension
            life_assurance = life_assurance_relief(inputs.life_assurance_premium, income_after_reliefs, rules)

        additional = self.calculate_additional_reliefs(inputs.additional_reliefs)

        return AllowanceBreakdown(
            consolidated_relief=cra,
            national_housing_fund=nhf,
            nhis=nhis,
            pension=pension,
            life_assurance=life_assurance,
            additional_reliefs=additional,
            total=cra + nhf + nhis + pension + life_assurance + additional,
        )

    def calculate_income_tax(self, taxable_income: float) -> tuple[float, list[TaxBracketResult]]:
        total_tax = 0.0
        remaining = taxable_income
        bracket_results = []

        for bracket in self.rules.brackets:
            if remaining <= 0:
                break

            bracket_size = bracket.max - bracket.min if bracket.max is not None else float("inf")
            taxable_in_bracket = min(remaining, bracket_size)
            tax_in_bracket = taxable_in_bracket * bracket.rate / 100

            if taxable_in_bracket > 0:
                bracket_results.append(TaxBracketResult(
                    min=bracket.min,
                    max=bracket.max,
                    rate=bracket.rate,
                    taxable_amount=taxable_in_bracket,
                    tax_amount=tax_in_bracket,
                    description=bracket.description,
                ))
                total_tax += tax_in_bracket
                remaining -= taxable_in_bracket

        return total_tax, bracket_results

    def calculate_minimum_tax(self, gross_income: float) -> float:
        return gross_income * self.rules.minimum_tax_rate

    def calculate(self, inputs: TaxInputs) -> TaxResult:
        errors = self.validate_inputs(inputs)
        if errors:
            raise CalculationError.from_errors(errors)

        gross = inputs.gross_income
        allowances = self.calculate_allowances(inputs)
        taxable_income = max(0.0, gross - allowances.total)

        income_tax, tax_brackets = self.calculate_income_tax(taxable_income)
        minimum_tax = self.calculate_minimum_tax(gross) if inputs.include_minimum_tax else 0.0
        final_tax = max(income_tax, minimum_tax)

        marginal_bracket = get_tax_bracket_info(taxable_income, self.rules.brackets)

        return TaxResult(
            gross_income=gross,
            total_allowances=allowances.total,
            taxable_income=taxable_income,
            income_tax=income_tax,
            minimum_tax=minimum_tax,
            final_tax=final_tax,
            net_income=gross - final_tax,
            allowance_breakdown=allowances,
            effective_rate=final_tax / gross * 100,
            marginal_rate=marginal_bracket.rate if marginal_bracket else 0.0,
            tax_brackets=tax_brackets,
        )

    def get_tax_summary(self, taxable_income: float) -> dict:
        bracket = get_tax_bracket_info(taxable_income, self.rules.brackets)

        if bracket is None:
            return {
                "bracket": "No tax bracket applicable",
                "rate": 0.0,
                "description": "Income is below taxable threshold",
            }

        if bracket.max is not None:
            bracket_range = f"{format_ngn(bracket.min, 0)} - {format_ngn(bracket.max, 0)}"
        else:
            bracket_range = f"Above {format_ngn(bracket.min, 0)}"

        return {
            "bracket": bracket_range,
            "rate": bracket.rate,
            "description": bracket.description,
        }

    def get_optimization_suggestions(self, inputs: TaxInputs, result: TaxResult) -> list[str]:
        suggestions = []

        if not inputs.life_assurance_premium:
            suggestions.append("Consider purchasing life insurance to claim life assurance premium relief")

        if result.allowance_breakdown.pension < result.gross_income * self.rules.pension_rate:
            suggestions.append("Maximize your pension contribution (8% of emolument) for additional tax relief")

        reliefs = inputs.additional_reliefs
        if not reliefs or (not reliefs.disability and not reliefs.old_age):
            suggestions.append("Check if you qualify for additional reliefs (disability, old age, dependent relatives)")

        if result.marginal_rate >= 21:
            suggestions.append("Consider income splitting strategies with spouse if applicable")
            suggestions.append("Explore tax-efficient investment options like bonds and mutual funds")

        if result.final_tax == result.minimum_tax and result.minimum_tax > result.income_tax:
            suggestions.append(
                "Your minimum tax is higher than calculated income tax. Consider increasing allowable deductions"
            )

        return suggestions
