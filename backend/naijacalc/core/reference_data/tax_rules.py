"""
Nigerian Personal Income Tax (PAYE) Reference Tables
2024/2025 tax year, Personal Income Tax Act as amended by Finance Act 2024

Tax Brackets (applied to income after reliefs):
  (a) First ₦300,000 at 7%
  (b) Next ₦300,000 at 11%
  (c) Next ₦500,000 at 15%
  (d) Next ₦500,000 at 19%
  (e) Next ₦1,600,000 at 21%
  (f) Above ₦3,200,000 at 24%

Reliefs and allowances:
  - Consolidated Relief: higher of ₦200,000 or 1% of gross income
  - National Housing Fund: 2.5% of basic salary (max ₦100,000)
  - NHIS: 1.75% of basic salary (max ₦80,000)
  - Pension: 8% of annual emolument
  - Life assurance: lower of 15% of premium or 20% of income after reliefs
  - Disability ₦25,000, old age ₦20,000, ₦20,000 per dependent relative

Minimum tax: 0.5% of gross income.

A new tax year is a new PAYERules instance registered in TAX_RULES_BY_YEAR.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


@dataclass(frozen=True)
class TaxBracket:
    min: float
    max: float | None
    rate: float
    description: str


class ReliefType(str, Enum):
    DISABILITY = "disability"
    OLD_AGE = "old_age"
    DEPENDENT_RELATIVE = "dependent_relative"


@dataclass(frozen=True)
class Relief:
    name: str
    amount: float
    description: str


@dataclass(frozen=True)
class PAYERules:
    tax_year: str
    brackets: tuple[TaxBracket, ...]
    additional_reliefs: Mapping[ReliefType, Relief] = field(hash=False)
    consolidated_relief_floor: float = 200_000.0
    consolidated_relief_rate: float = 0.01
    nhf_rate: float = 0.025
    nhf_cap: float = 100_000.0
    nhis_rate: float = 0.0175
    nhis_cap: float = 80_000.0
    pension_rate: float = 0.08
    life_assurance_premium_rate: float = 0.15
    life_assurance_income_rate: float = 0.20
    default_basic_salary_ratio: float = 0.7
    minimum_tax_rate: float = 0.005
    max_dependent_relatives: int = 10
    gross_income_ceiling: float = 1_000_000_000.0

    def __post_init__(self):
        object.__setattr__(self, "additional_reliefs", MappingProxyType(dict(self.additional_reliefs)))


NIGERIA_TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(0.0, 300_000.0, 7.0, "First ₦300,000"),
    TaxBracket(300_000.0, 600_000.0, 11.0, "Next ₦300,000 (₦300,001 - ₦600,000)"),
    TaxBracket(600_000.0, 1_100_000.0, 15.0, "Next ₦500,000 (₦600,001 - ₦1,100,000)"),
    TaxBracket(1_100_000.0, 1_600_000.0, 19.0, "Next ₦500,000 (₦1,100,001 - ₦1,600,000)"),
    TaxBracket(1_600_000.0, 3_200_000.0, 21.0, "Next ₦1,600,000 (₦1,600,001 - ₦3,200,000)"),
    TaxBracket(3_200_000.0, None, 24.0, "Above ₦3,200,000"),
)

ADDITIONAL_RELIEFS: Mapping[ReliefType, Relief] = MappingProxyType({
    ReliefType.DISABILITY: Relief(
        name="Disability Relief",
        amount=25_000.0,
        description="Additional relief for persons with disability",
    ),
    ReliefType.OLD_AGE: Relief(
        name="Old Age Relief",
        amount=20_000.0,
        description="Additional relief for persons 65 years and above",
    ),
    ReliefType.DEPENDENT_RELATIVE: Relief(
        name="Dependent Relative Relief",
        amount=20_000.0,
        description="Relief for maintaining dependent relatives",
    ),
})

NIGERIA_PAYE_2024 = PAYERules(
    tax_year="2024",
    brackets=NIGERIA_TAX_BRACKETS,
    additional_reliefs=ADDITIONAL_RELIEFS,
)

TAX_RULES_BY_YEAR: dict[str, PAYERules] = {
    NIGERIA_PAYE_2024.tax_year: NIGERIA_PAYE_2024,
}


def get_tax_rules(tax_year: str) -> PAYERules:
    try:
        return TAX_RULES_BY_YEAR[tax_year]
    except KeyError:
        raise ValueError(f"No tax rules available for tax year {tax_year}") from None


def higher_of(floor: float, base: float, rate: float) -> float:
    """The larger of a fixed floor and a percentage of base."""
    return max(floor, base * rate)


def capped_percentage(base: float, rate: float, cap: float) -> float:
    """A percentage of base, never more than cap."""
    return min(base * rate, cap)


def consolidated_relief(gross_income: float, rules: PAYERules = NIGERIA_PAYE_2024) -> float:
    return higher_of(rules.consolidated_relief_floor, gross_income, rules.consolidated_relief_rate)


def national_housing_fund(basic_salary: float, rules: PAYERules = NIGERIA_PAYE_2024) -> float:
    return capped_percentage(basic_salary, rules.nhf_rate, rules.nhf_cap)


def nhis_contribution(basic_salary: float, rules: PAYERules = NIGERIA_PAYE_2024) -> float:
    return capped_percentage(basic_salary, rules.nhis_rate, rules.nhis_cap)


def pension_contribution(monthly_emolument: float, rules: PAYERules = NIGERIA_PAYE_2024) -> float:
    return monthly_emolument * 12 * rules.pension_rate


def life_assurance_relief(
    premium: float,
    income_after_reliefs: float,
    rules: PAYERules = NIGERIA_PAYE_2024,
) -> float:
    # income_after_reliefs is gross less CRA, NHF, NHIS and pension only
    return capped_percentage(
        premium,
        rules.life_assurance_premium_rate,
        income_after_reliefs * rules.life_assurance_income_rate,
    )


def get_tax_bracket_info(
    taxable_income: float,
    brackets: tuple[TaxBracket, ...] = NIGERIA_TAX_BRACKETS,
) -> TaxBracket | None:
    for bracket in brackets:
        if bracket.max is None:
            if taxable_income >= bracket.min:
                return bracket
        elif bracket.min <= taxable_income <= bracket.max:
            return bracket
    return None
