"""
Tax calculation API routes.
Exposes the PAYE calculator via REST endpoints.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from naijacalc.api.deps import get_history_store, get_paye_calculator
from naijacalc.core.calculators.tax import PAYECalculator, PaymentFrequency
from naijacalc.core.errors import CalculationError
from naijacalc.core.formatting import annual_to_monthly
from naijacalc.core.history import CalculationType, HistoryStore
from naijacalc.schemas.schemas import TaxCalculateRequest, ValidationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/brackets")
async def get_tax_brackets(calc: PAYECalculator = Depends(get_paye_calculator)):
    """List the PAYE brackets and reliefs of the configured tax year."""
    rules = calc.rules
    return {
        "tax_year": rules.tax_year,
        "brackets": [asdict(b) for b in rules.brackets],
        "additional_reliefs": {k.value: asdict(v) for k, v in rules.additional_reliefs.items()},
        "minimum_tax_rate": rules.minimum_tax_rate * 100,
    }


@router.post("/validate", response_model=ValidationResponse)
async def validate_tax(data: TaxCalculateRequest, calc: PAYECalculator = Depends(get_paye_calculator)):
    """Check PAYE inputs and report every violated rule."""
    errors = calc.validate_inputs(data.to_inputs())
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/calculate")
async def calculate_tax(
    data: TaxCalculateRequest,
    save: bool = False,
    calc: PAYECalculator = Depends(get_paye_calculator),
    history: HistoryStore = Depends(get_history_store),
):
    """Calculate Nigerian PAYE with allowances, bracket breakdown and suggestions."""
    inputs = data.to_inputs()
    try:
        result = calc.calculate(inputs)
    except CalculationError as e:
        logger.info("Rejected tax calculation: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)

    if data.payment_frequency == PaymentFrequency.MONTHLY:
        period = {
            "frequency": data.payment_frequency.value,
            "final_tax": annual_to_monthly(result.final_tax),
            "net_income": annual_to_monthly(result.net_income),
        }
    else:
        period = {
            "frequency": data.payment_frequency.value,
            "final_tax": result.final_tax,
            "net_income": result.net_income,
        }

    payload = jsonable_encoder({
        "result": asdict(result),
        "summary": calc.get_tax_summary(result.taxable_income),
        "suggestions": calc.get_optimization_suggestions(inputs, result),
        "period": period,
    })
    logger.info("Tax calculated for gross income %.2f: final tax %.2f", result.gross_income, result.final_tax)

    if save:
        history.add_record(CalculationType.TAX, data.model_dump(mode="json"), payload["result"])
    return payload
