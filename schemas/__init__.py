"""Pydantic schema package for request and response models."""

from .enums import ActivityLevel, BMICategory, Gender, OnboardingStep
from .biometrics_schema import BiometricInput, BiometricUpdate, BiometricDerived, BiometricsRecord, BiometricsUpdateResponse
from .health_schema import HealthConditions
from .preferences_schema import Preferences, PreferencesSubmission
from .onboarding_schema import OnboardingSession, OnboardingResult
from .user_schema import UserCreateRequest, UserResponse, PersonalDetailsUpdate, ProfileResponse

__all__ = [
    "ActivityLevel",
    "BMICategory",
    "Gender",
    "OnboardingStep",
    "BiometricInput",
    "BiometricUpdate",
    "BiometricDerived",
    "BiometricsRecord",
    "BiometricsUpdateResponse",
    "HealthConditions",
    "Preferences",
    "PreferencesSubmission",
    "OnboardingSession",
    "OnboardingResult",
    "UserCreateRequest",
    "UserResponse",
    "PersonalDetailsUpdate",
    "ProfileResponse",
]
