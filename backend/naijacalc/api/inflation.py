"""
Inflation calculation API routes.
CPI lookups and purchasing-power calculations over the NBS CPI series.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from naijacalc.api.deps import get_history_store, get_inflation_calculator
from naijacalc.core.calculators.inflation import InflationCalculator
from naijacalc.core.errors import CalculationError
from naijacalc.core.history import CalculationType, HistoryStore
from naijacalc.schemas.schemas import InflationCalculateRequest, ValidationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/range")
async def get_cpi_range(calc: InflationCalculator = Depends(get_inflation_calculator)):
    """Earliest and latest months covered by the CPI series."""
    min_date, max_date = calc.series.available_date_range()
    return {"min": min_date, "max": max_date, "years": calc.series.years()}


@router.get("/cpi")
async def get_cpi_data(
    start_year: int | None = None,
    end_year: int | None = None,
    calc: InflationCalculator = Depends(get_inflation_calculator),
):
    """CPI points between two years (inclusive), ordered for charting."""
    years = calc.series.years()
    points = calc.series.points_between(start_year or years[0], end_year or years[-1])
    return {"data": [asdict(p) for p in points], "total": len(points)}


@router.get("/cpi/latest")
async def get_latest_cpi(calc: InflationCalculator = Depends(get_inflation_calculator)):
    """Most recent CPI point."""
    return asdict(calc.series.latest())


@router.post("/validate", response_model=ValidationResponse)
async def validate_inflation(
    data: InflationCalculateRequest,
    calc: InflationCalculator = Depends(get_inflation_calculator),
):
    """Check inflation inputs and report every violated rule."""
    errors = calc.validate_inputs(data.to_inputs())
    return ValidationResponse(valid=not errors, errors=errors)


@router.post("/calculate")
async def calculate_inflation(
    data: InflationCalculateRequest,
    save: bool = False,
    calc: InflationCalculator = Depends(get_inflation_calculator),
    history: HistoryStore = Depends(get_history_store),
):
    """Calculate cumulative and annualized inflation between two months."""
    try:
        result = calc.calculate(data.to_inputs())
    except CalculationError as e:
        logger.info("Rejected inflation calculation: %s", e)
        raise HTTPException(status_code=400, detail=e.errors)

    interpretation = calc.get_interpretation(result.annualized_rate)
    payload = jsonable_encoder({
        "result": asdict(result),
        "interpretation": {
            "level": interpretation.level,
            "description": interpretation.description,
            "color": interpretation.color,
        },
        "recommendations": interpretation.recommendations,
    })
    logger.info(
        "Inflation calculated %s to %s: %.2f%% total",
        data.start_date, data.end_date, result.total_inflation,
    )

    if save:
        history.add_record(CalculationType.INFLATION, data.model_dump(mode="json"), payload["result"])
    return payload
