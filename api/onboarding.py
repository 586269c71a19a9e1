"""Onboarding API router.

The wizard session lives with the client: each step endpoint takes the
current session, applies one transition and returns the updated session.
Derived values in an incoming session are always recomputed server-side.
"""

from fastapi import APIRouter, Depends

from core.config import MAX_DAILY_BUDGET, MIN_DAILY_BUDGET
from core.logger import get_logger
from core.repository import ProfileRepository
from database.deps import get_profile_repository
from schemas.enums import CUISINES, DIET_TYPES, PREDEFINED_ALLERGENS
from schemas.onboarding_schema import (
    BiometricsStepRequest,
    CompleteRequest,
    HealthStepRequest,
    OnboardingOptionsResponse,
    OnboardingResult,
    OnboardingSession,
    SessionRequest,
)
from services.onboarding import OnboardingWizard

logger = get_logger("api.onboarding")
router = APIRouter(prefix="/api/onboarding", tags=["onboarding"])


@router.get("/options", response_model=OnboardingOptionsResponse)
def get_options():
    """Return the predefined choices shown by the wizard forms."""
    return OnboardingOptionsResponse(
        allergens=PREDEFINED_ALLERGENS,
        diet_types=DIET_TYPES,
        cuisines=CUISINES,
        min_daily_budget=MIN_DAILY_BUDGET,
        max_daily_budget=MAX_DAILY_BUDGET,
    )


@router.post("/biometrics", response_model=OnboardingSession)
def submit_biometrics(payload: BiometricsStepRequest):
    """Step 1: validate biometrics, derive BMI/BMR and move to step 2.

    Raises:
        ValidationError: One or more biometric fields are missing or out of range.
    """
    wizard = OnboardingWizard.resume(payload.session) if payload.session is not None else OnboardingWizard()
    return wizard.submit_biometrics(payload.biometrics)


@router.post("/health", response_model=OnboardingSession)
def submit_health(payload: HealthStepRequest):
    """Step 2: store health condition flags and move to step 3."""
    return OnboardingWizard.resume(payload.session).submit_health(payload.health)


@router.post("/health/skip", response_model=OnboardingSession)
def skip_health(payload: SessionRequest):
    """Step 2: skip, recording every condition as absent."""
    return OnboardingWizard.resume(payload.session).skip_health()


@router.post("/back", response_model=OnboardingSession)
def go_back(payload: SessionRequest):
    """Return to the previous step with entered values preserved."""
    return OnboardingWizard.resume(payload.session).back()


@router.post("/{user_id}/complete", response_model=OnboardingResult)
def complete(user_id: int, payload: CompleteRequest, repository: ProfileRepository = Depends(get_profile_repository)):
    """Step 3: commit the onboarding for a user.

    Raises:
        RangeViolation: Daily budget below the minimum; nothing is written.
        NotFoundError: Unknown user.
        PersistenceError: The write failed; onboarding is not marked complete.
    """
    wizard = OnboardingWizard.resume(payload.session, repository=repository)
    result = wizard.complete(user_id, payload.preferences)
    logger.info("User %s completed onboarding", user_id)
    return result
