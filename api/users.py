"""User profile API router.

Provides endpoints to register a user, read the full profile and edit it one
section at a time. Biometric edits return the freshly recomputed BMI/BMR.
"""

from fastapi import APIRouter, Body, Depends
from typing import Any, Dict

from core.logger import get_logger
from database.deps import get_profile_reader, get_profile_service
from schemas.biometrics_schema import BiometricsUpdateResponse
from schemas.health_schema import HealthConditions
from schemas.preferences_schema import Preferences
from schemas.user_schema import PersonalDetailsUpdate, ProfileResponse, UserCreateRequest, UserResponse
from services.profile_service import ProfileService

logger = get_logger("api.users")
router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreateRequest, service: ProfileService = Depends(get_profile_service)):
    """Register a user record; onboarding starts out incomplete."""
    logger.info("Creating user: %s", payload.email)
    return service.create_user(payload)


@router.get("/{user_id}/profile", response_model=ProfileResponse)
def get_profile(user_id: int, service: ProfileService = Depends(get_profile_reader)):
    """Return the user with biometrics, health profile and preferences.

    Raises:
        NotFoundError: If the user does not exist.
    """
    return service.get_profile(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_personal_details(user_id: int, payload: PersonalDetailsUpdate, service: ProfileService = Depends(get_profile_service)):
    """Update the personal details shown on the profile page."""
    return service.update_personal_details(user_id, payload)


@router.put("/{user_id}/biometrics", response_model=BiometricsUpdateResponse)
def update_biometrics(
    user_id: int,
    payload: Dict[str, Any] = Body(..., examples=[{"weight": 80}]),
    service: ProfileService = Depends(get_profile_service),
):
    """Update any subset of biometric fields.

    Unspecified fields keep their stored values; BMI and BMR are recomputed
    from the merged values and written in the same update.

    Raises:
        ValidationError: A supplied field is out of range.
        NotFoundError: The user has no stored biometrics yet.
    """
    return service.update_biometrics(user_id, payload)


@router.put("/{user_id}/health-profile", response_model=HealthConditions)
def update_health_profile(
    user_id: int,
    payload: Dict[str, Any] = Body(..., examples=[{"hasDiabetes": True}]),
    service: ProfileService = Depends(get_profile_service),
):
    """Update health condition flags; BMI and BMR are not affected."""
    return service.update_health_profile(user_id, payload)


@router.put("/{user_id}/preferences", response_model=Preferences)
def update_preferences(
    user_id: int,
    payload: Dict[str, Any] = Body(..., examples=[{"spiceLevel": 4, "dailyBudget": 300}]),
    service: ProfileService = Depends(get_profile_service),
):
    """Update dietary preferences; the minimum daily budget is re-checked."""
    return service.update_preferences(user_id, payload)
