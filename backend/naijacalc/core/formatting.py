"""
Display helpers for naira amounts and percentages.
"""

import math

NAIRA_SIGN = "₦"


def format_ngn(amount: float, decimals: int = 2) -> str:
    if not math.isfinite(amount):
        return f"{NAIRA_SIGN}0"
    sign = "-" if amount < 0 else ""
    return f"{sign}{NAIRA_SIGN}{abs(amount):,.{decimals}f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    if not math.isfinite(value):
        return "0%"
    return f"{value:.{decimals}f}%"


def annual_to_monthly(annual_amount: float) -> float:
    return annual_amount / 12


def monthly_to_annual(monthly_amount: float) -> float:
    return monthly_amount * 12
