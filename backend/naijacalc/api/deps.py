"""
Shared API dependencies.
The history store and calculators are built once by the application factory
and read from app.state.
"""

from fastapi import Request

from naijacalc.core.calculators import BMICalculator, InflationCalculator, PAYECalculator
from naijacalc.core.history import HistoryStore


def get_history_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


def get_bmi_calculator(request: Request) -> BMICalculator:
    return request.app.state.bmi_calculator


def get_paye_calculator(request: Request) -> PAYECalculator:
    return request.app.state.paye_calculator


def get_inflation_calculator(request: Request) -> InflationCalculator:
    return request.app.state.inflation_calculator
