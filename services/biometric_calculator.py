"""Biometric calculation helpers.

Provides BMI, BMI category and BMR (Mifflin-St Jeor) used by onboarding and
profile editing. All functions are pure; input ranges are the validator's
responsibility.
"""

from decimal import Decimal, ROUND_HALF_UP

from core.logger import get_logger
from schemas.biometrics_schema import BiometricDerived, BiometricInput
from schemas.enums import BMICategory, Gender

logger = get_logger("services.biometric_calculator")

# Mifflin-St Jeor sex adjustment; Other is the midpoint of Male and Female.
BMR_OFFSETS = {
    Gender.MALE: 5,
    Gender.FEMALE: -161,
    Gender.OTHER: -78,
}


def _round_half_up(value: float, places: int = 0) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)


class BiometricCalculator:
    """Class-based biometric calculator used across the app."""

    def compute_bmi(self, weight: float, height_cm: float) -> float:
        """Calculate BMI from weight in kg and height in cm, to one decimal."""
        h_m = height_cm / 100.0
        return float(_round_half_up(weight / (h_m * h_m), 1))

    def classify_bmi(self, bmi: float) -> BMICategory:
        """Map a BMI value onto its category; each band includes its lower bound."""
        if bmi < 18.5:
            return BMICategory.UNDERWEIGHT
        if bmi < 25:
            return BMICategory.NORMAL
        if bmi < 30:
            return BMICategory.OVERWEIGHT
        return BMICategory.OBESE

    def compute_bmr(self, weight: float, height_cm: float, age: int, gender: Gender) -> int:
        """Calculate BMR in kcal/day, rounding only the final value."""
        base = 10 * weight + 6.25 * height_cm - 5 * age
        return int(_round_half_up(base + BMR_OFFSETS[Gender(gender)]))

    def derive(self, biometrics: BiometricInput) -> BiometricDerived:
        """Compute every derived value for a validated biometric input."""
        bmi = self.compute_bmi(biometrics.weight, biometrics.height)
        derived = BiometricDerived(
            bmi=bmi,
            bmi_category=self.classify_bmi(bmi),
            bmr=self.compute_bmr(biometrics.weight, biometrics.height, biometrics.age, biometrics.gender),
        )
        logger.debug("Derived biometrics: %s", derived.model_dump())
        return derived


# export singleton
biometric_calculator = BiometricCalculator()
__all__ = ["BiometricCalculator", "biometric_calculator", "BMR_OFFSETS"]
