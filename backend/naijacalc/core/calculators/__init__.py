from naijacalc.core.calculators.bmi import BMICalculator
from naijacalc.core.calculators.tax import PAYECalculator
from naijacalc.core.calculators.inflation import InflationCalculator

__all__ = ["BMICalculator", "PAYECalculator", "InflationCalculator"]
