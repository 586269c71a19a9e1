"""Schemas for the three-step onboarding wizard."""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from schemas.biometrics_schema import BiometricDerived, BiometricInput
from schemas.enums import OnboardingStep
from schemas.health_schema import HealthConditions
from schemas.preferences_schema import Preferences


class OnboardingSession(BaseModel):
    """In-memory state carried across the wizard steps."""

    current_step: OnboardingStep = OnboardingStep.BIOMETRICS
    biometrics: Optional[BiometricInput] = None
    derived: Optional[BiometricDerived] = None
    health: HealthConditions = Field(default_factory=HealthConditions)
    preferences: Optional[Preferences] = None


class OnboardingResult(BaseModel):
    """Snapshot persisted when onboarding is committed."""

    user_id: int
    biometrics: BiometricInput
    derived: BiometricDerived
    health: HealthConditions
    preferences: Preferences
    onboarding_completed: bool = True


# Form payloads are kept as raw dicts so the validator can report
# field-specific messages for them.

class BiometricsStepRequest(BaseModel):
    session: Optional[OnboardingSession] = None
    biometrics: Dict[str, Any] = Field(..., examples=[{
        "age": 28,
        "gender": "Male",
        "height": 175,
        "weight": 75,
        "targetWeight": 70,
        "activityLevel": "Moderate",
    }])


class HealthStepRequest(BaseModel):
    session: OnboardingSession
    health: Dict[str, Any] = Field(default_factory=dict, examples=[{"hasDiabetes": True}])


class SessionRequest(BaseModel):
    session: OnboardingSession


class CompleteRequest(BaseModel):
    session: OnboardingSession
    preferences: Optional[Dict[str, Any]] = Field(None, examples=[{
        "dietType": "Vegetarian",
        "allergens": ["Peanuts"],
        "customAllergens": ["Prawns"],
        "spiceLevel": 3,
        "dailyBudget": 250,
        "foodPreferences": ["Bengali"],
    }])


class OnboardingOptionsResponse(BaseModel):
    allergens: List[str]
    diet_types: List[str]
    cuisines: List[str]
    min_daily_budget: int
    max_daily_budget: int
