"""Schemas for biometric input and the values derived from it."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from schemas.enums import ActivityLevel, BMICategory, Gender


class BiometricInput(BaseModel):
    """Raw measurements collected in onboarding step 1.

    Every field is required. Ranges are contractual: the calculator assumes
    them and performs no checks of its own.
    """

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    age: int = Field(..., ge=18, le=100, examples=[28], description="Age in years (18-100)")
    gender: Gender = Field(..., examples=["Male"], description="Male, Female or Other")
    height: float = Field(..., ge=100, le=250, examples=[175.0], description="Height in centimeters (100-250)")
    weight: float = Field(..., ge=30, le=300, examples=[75.0], description="Weight in kilograms (30-300)")
    target_weight: float = Field(..., ge=30, le=300, alias="targetWeight", examples=[70.0], description="Target weight in kilograms (30-300)")
    activity_level: ActivityLevel = Field(..., alias="activityLevel", examples=["Moderate"], description="Sedentary, Light, Moderate, Active or Very Active")


class BiometricUpdate(BaseModel):
    """Partial biometric input submitted from the profile edit form."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    age: Optional[int] = Field(None, ge=18, le=100)
    gender: Optional[Gender] = None
    height: Optional[float] = Field(None, ge=100, le=250)
    weight: Optional[float] = Field(None, ge=30, le=300)
    target_weight: Optional[float] = Field(None, ge=30, le=300, alias="targetWeight")
    activity_level: Optional[ActivityLevel] = Field(None, alias="activityLevel")

    def changes(self) -> dict:
        """Return only the fields that were actually supplied."""
        return self.model_dump(mode="json", exclude_none=True)


class BiometricDerived(BaseModel):
    """Values computed from `BiometricInput`; never edited directly."""

    bmi: float
    bmi_category: BMICategory
    bmr: int


class BiometricsRecord(BiometricDerived):
    """Stored biometrics row: raw measurements plus derived values."""

    age: int
    gender: Gender
    height: float
    weight: float
    target_weight: float
    activity_level: ActivityLevel


class BiometricsUpdateResponse(BaseModel):
    """Recomputed values returned after a profile biometrics edit."""

    bmi: float
    bmi_category: BMICategory
    bmr: int
    weight: float
