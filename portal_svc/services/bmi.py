"""
Body-mass-index helper and the dashboard's short status labels.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

UNDERWEIGHT = "Underweight"
NORMAL_WEIGHT = "Normal weight"
OVERWEIGHT = "Overweight"
OBESE = "Obese"

RECOMMENDATIONS = {
    UNDERWEIGHT: "Consider consulting a nutritionist for a healthy weight gain plan.",
    NORMAL_WEIGHT: "Maintain your healthy lifestyle with balanced diet and regular exercise.",
    OVERWEIGHT: "Focus on portion control and increasing physical activity.",
    OBESE: "Please consult a healthcare provider for personalized weight management advice.",
}

# (exclusive upper bound, category); the last band is open-ended
CATEGORY_BANDS: Tuple[Tuple[float, str], ...] = (
    (18.5, UNDERWEIGHT),
    (25.0, NORMAL_WEIGHT),
    (30.0, OVERWEIGHT),
)


@dataclass(frozen=True)
class BmiResult:
    bmi: float
    category: str
    recommendation: str


def category_for(bmi: float) -> str:
    for upper, category in CATEGORY_BANDS:
        if bmi < upper:
            return category
    return OBESE


def body_mass_index(height_cm: float, weight_kg: float) -> float:
    """Unrounded BMI; raises ValueError unless both inputs are positive."""
    if height_cm is None or weight_kg is None or height_cm <= 0 or weight_kg <= 0:
        raise ValueError("Height and weight must be positive numbers")

    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def calculate_bmi(height_cm: float, weight_kg: float) -> BmiResult:
    """
    Compute BMI from height in centimetres and weight in kilograms.

    The category is taken from the unrounded value; the reported BMI is
    rounded to one decimal.

    Raises:
        ValueError: If height or weight is not positive.
    """
    bmi = body_mass_index(height_cm, weight_kg)
    category = category_for(bmi)
    return BmiResult(bmi=round(bmi, 1), category=category, recommendation=RECOMMENDATIONS[category])


def physical_status(bmi: Optional[float]) -> Optional[str]:
    """Dashboard label for a BMI value."""
    if bmi is None:
        return None
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def mental_status(score: int) -> str:
    """Dashboard label for the latest assessment score."""
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Attention"
