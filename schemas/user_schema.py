"""Schemas for user-related requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from schemas.biometrics_schema import BiometricsRecord
from schemas.health_schema import HealthConditions
from schemas.preferences_schema import Preferences


class UserCreateRequest(BaseModel):
    """Request payload for registering a user record."""

    name: Optional[str] = Field(None, examples=["Rahim Uddin"], description="User's full name")
    email: str = Field(..., min_length=3, examples=["rahim@example.com"], description="Login email")


class PersonalDetailsUpdate(BaseModel):
    """Personal details editable from the profile page."""

    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    location: Optional[str] = None


class UserResponse(BaseModel):
    """Stored user record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    onboarding_completed: bool = False


class ProfileResponse(BaseModel):
    """Full profile; sections that were never saved fall back to defaults."""

    user: UserResponse
    biometrics: Optional[BiometricsRecord] = None
    health_profile: HealthConditions
    preferences: Preferences
