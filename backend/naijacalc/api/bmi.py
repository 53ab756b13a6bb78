"""
BMI calculation API routes.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from naijacalc.api.deps import get_bmi_calculator, get_history_store
from naijacalc.core.calculators.bmi import BMICalculator
from naijacalc.core.errors import CalculationError
from naijacalc.core.history import CalculationType, HistoryStore
from naijacalc.schemas.schemas import BMICalculateRequest, ValidationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/validate", response_model=ValidationResponse)
async def validate_bmi(data: BMICalculateRequest, calc: BMICalculator = Depends(get_bmi_calculator)):
    """Check BMI inputs and report every violated rule."""
    errors = calc.validate_inputs(data.to_inputs())
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/calculate")
async def calculate_bmi(
    data: BMICalculateRequest,
    save: bool = False,
    calc: BMICalculator = Depends(get_bmi_calculator),
    history: HistoryStore = Depends(get_history_store),
):
    """Calculate Body Mass Index with category, health risk and recommendations."""
    try:
        result = calc.calculate(data.to_inputs())
    except CalculationError as e:
        logger.info("Rejected BMI calculation: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)

    payload = jsonable_encoder(asdict(result))
    logger.info("BMI calculated: %s (%s)", result.bmi, result.category.value)

    if save:
        history.add_record(CalculationType.BMI, data.model_dump(mode="json"), payload)
    return payload
