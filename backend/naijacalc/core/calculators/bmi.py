"""
Body Mass Index (BMI) Calculator
WHO adult BMI classification

BMI = weight (kg) / height (m)^2

Categories (half-open bands):
  - Underweight: below 18.5
  - Normal weight: 18.5 to below 25
  - Overweight: 25 to below 30
  - Obese Class I: 30 to below 35
  - Obese Class II: 35 to below 40
  - Obese Class III: 40 and above

Imperial inputs (pounds, feet and inches) are converted to metric first.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from naijacalc.core.errors import CalculationError

KG_PER_POUND = 0.453592
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12

MAX_WEIGHT_KG = 1000
MAX_HEIGHT_CM = 300
MAX_WEIGHT_LBS = 2200
MAX_HEIGHT_FEET = 10


class MeasurementUnit(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal weight"
    OVERWEIGHT = "Overweight"
    OBESE_I = "Obese Class I"
    OBESE_II = "Obese Class II"
    OBESE_III = "Obese Class III"


# Upper bound (exclusive) of each band, in order
BMI_THRESHOLDS: list[tuple[float, BMICategory]] = [
    (18.5, BMICategory.UNDERWEIGHT),
    (25.0, BMICategory.NORMAL),
    (30.0, BMICategory.OVERWEIGHT),
    (35.0, BMICategory.OBESE_I),
    (40.0, BMICategory.OBESE_II),
    (float("inf"), BMICategory.OBESE_III),
]


@dataclass(frozen=True)
class CategoryProfile:
    color: str
    health_risk: str
    recommendations: tuple[str, ...]


CATEGORY_PROFILES: dict[BMICategory, CategoryProfile] = {
    BMICategory.UNDERWEIGHT: CategoryProfile(
        color="text-blue-600 bg-blue-50 border-blue-200",
        health_risk="May indicate malnutrition, eating disorder, or other health issues",
        recommendations=(
            "Consult with a healthcare provider about healthy weight gain",
            "Focus on nutrient-dense foods and regular meals",
            "Consider strength training to build muscle mass",
            "Monitor for underlying health conditions",
        ),
    ),
    BMICategory.NORMAL: CategoryProfile(
        color="text-green-600 bg-green-50 border-green-200",
        health_risk="Associated with lowest risk of heart disease and diabetes",
        recommendations=(
            "Maintain current healthy lifestyle habits",
            "Continue regular physical activity (150+ minutes/week)",
            "Follow a balanced, nutritious diet",
            "Regular health check-ups for preventive care",
        ),
    ),
    BMICategory.OVERWEIGHT: CategoryProfile(
        color="text-yellow-600 bg-yellow-50 border-yellow-200",
        health_risk="Increased risk of cardiovascular disease and diabetes",
        recommendations=(
            "Aim for gradual weight loss of 1-2 pounds per week",
            "Increase physical activity to 250+ minutes per week",
            "Focus on portion control and balanced nutrition",
            "Consider consulting a nutritionist or healthcare provider",
        ),
    ),
    BMICategory.OBESE_I: CategoryProfile(
        color="text-orange-600 bg-orange-50 border-orange-200",
        health_risk="Moderate risk of cardiovascular disease, diabetes, and other health issues",
        recommendations=(
            "Consult healthcare provider for personalized weight loss plan",
            "Target 5-10% weight loss as initial goal",
            "Combine regular exercise with dietary changes",
            "Monitor blood pressure, cholesterol, and blood sugar regularly",
        ),
    ),
    BMICategory.OBESE_II: CategoryProfile(
        color="text-red-600 bg-red-50 border-red-200",
        health_risk="High risk of cardiovascular disease, diabetes, and other health issues",
        recommendations=(
            "Seek medical supervision for weight management",
            "Consider structured weight loss programs",
            "Regular monitoring of cardiovascular risk factors",
            "Evaluate for sleep apnea and other obesity-related conditions",
        ),
    ),
    BMICategory.OBESE_III: CategoryProfile(
        color="text-red-800 bg-red-100 border-red-300",
        health_risk="Very high risk of cardiovascular disease, diabetes, and other serious health issues",
        recommendations=(
            "Immediate medical consultation recommended",
            "Consider medically supervised weight loss programs",
            "Evaluate for bariatric surgery if appropriate",
            "Comprehensive management of obesity-related health conditions",
        ),
    ),
}


@dataclass
class BMIInputs:
    weight: float | None = None
    unit: MeasurementUnit = MeasurementUnit.METRIC
    height: float | None = None
    height_feet: float | None = None
    height_inches: float | None = None


@dataclass
class BMIResult:
    bmi: float
    category: BMICategory
    category_color: str
    health_risk: str
    recommendations: list[str] = field(default_factory=list)


def convert_imperial_to_metric(weight_lbs: float, height_feet: float, height_inches: float) -> tuple[float, float]:
    weight_kg = weight_lbs * KG_PER_POUND
    height_cm = (height_feet * INCHES_PER_FOOT + height_inches) * CM_PER_INCH
    return weight_kg, height_cm


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    if weight_kg <= 0 or height_cm <= 0:
        raise CalculationError("Weight and height must be positive numbers")
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def round_bmi(bmi: float) -> float:
    """Round to one decimal place, halves away from zero."""
    return math.floor(bmi * 10 + 0.5) / 10


def get_bmi_category(bmi: float) -> BMICategory:
    for upper_bound, category in BMI_THRESHOLDS:
        if bmi < upper_bound:
            return category
    return BMICategory.OBESE_III


class BMICalculator:
    """
    Deterministic BMI calculator supporting metric and imperial units.
    """

    def validate_inputs(self, inputs: BMIInputs) -> list[str]:
        errors = []
        weight = inputs.weight

        for label, value in (
            ("Weight", weight),
            ("Height", inputs.height),
            ("Height in feet", inputs.height_feet),
            ("Height in inches", inputs.height_inches),
        ):
            if value is not None and not math.isfinite(value):
                errors.append(f"{label} must be a finite number")

        if not weight or weight <= 0:
            errors.append("Weight must be a positive number")

        if inputs.unit == MeasurementUnit.METRIC:
            if not inputs.height or inputs.height <= 0:
                errors.append("Height must be a positive number")
            if weight and weight > MAX_WEIGHT_KG:
                errors.append(f"Weight seems unrealistic (max {MAX_WEIGHT_KG} kg)")
            if inputs.height and inputs.height > MAX_HEIGHT_CM:
                errors.append(f"Height seems unrealistic (max {MAX_HEIGHT_CM} cm)")
        elif inputs.unit == MeasurementUnit.IMPERIAL:
            if inputs.height_feet is None or inputs.height_feet < 0:
                errors.append("Height in feet must be a non-negative number")
            if inputs.height_inches is None or not 0 <= inputs.height_inches < INCHES_PER_FOOT:
                errors.append("Height in inches must be between 0 and 11")
            if weight and weight > MAX_WEIGHT_LBS:
                errors.append(f"Weight seems unrealistic (max {MAX_WEIGHT_LBS} lbs)")
            if inputs.height_feet and inputs.height_feet > MAX_HEIGHT_FEET:
                errors.append(f"Height seems unrealistic (max {MAX_HEIGHT_FEET} feet)")

        return errors

    def _to_metric(self, inputs: BMIInputs) -> tuple[float, float]:
        if inputs.unit == MeasurementUnit.IMPERIAL:
            if inputs.height_feet is None:
                raise CalculationError("Height in feet is required for imperial units")
            if inputs.height_inches is None:
                raise CalculationError("Height in inches is required for imperial units")
            return convert_imperial_to_metric(inputs.weight or 0.0, inputs.height_feet, inputs.height_inches)

        if inputs.height is None:
            raise CalculationError("Height is required for metric units")
        return inputs.weight or 0.0, inputs.height

    def calculate(self, inputs: BMIInputs) -> BMIResult:
        weight_kg, height_cm = self._to_metric(inputs)

        errors = self.validate_inputs(inputs)
        if errors:
            raise CalculationError.from_errors(errors)

        bmi = calculate_bmi(weight_kg, height_cm)
        category = get_bmi_category(bmi)
        profile = CATEGORY_PROFILES[category]

        return BMIResult(
            bmi=round_bmi(bmi),
            category=category,
            category_color=profile.color,
            health_risk=profile.health_risk,
            recommendations=list(profile.recommendations),
        )
