"""Router-level tests calling the endpoint functions directly."""

import pytest

from api import onboarding as onboarding_api
from api import users as users_api
from core.exceptions import InvalidTransitionError
from core.repository import ProfileRepository, UserRepository
from main import health
from schemas.enums import OnboardingStep
from schemas.onboarding_schema import (
    BiometricsStepRequest,
    CompleteRequest,
    HealthStepRequest,
    OnboardingSession,
    SessionRequest,
)
from schemas.user_schema import UserCreateRequest
from services.profile_service import ProfileService


def _roundtrip(session):
    # Sessions travel to the client and back as JSON.
    return OnboardingSession.model_validate(session.model_dump(mode="json"))


def test_options_list_predefined_choices():
    """Test that the options endpoint lists the predefined choices."""
    options = onboarding_api.get_options()
    assert "Peanuts" in options.allergens
    assert options.diet_types[0] == "Vegetarian"
    assert (options.min_daily_budget, options.max_daily_budget) == (50, 500)


def test_wizard_over_http(db, biometrics_form):
    """Test the full wizard through the route functions with a JSON-threaded session."""
    service = ProfileService(ProfileRepository(db), UserRepository(db))
    user = users_api.create_user(UserCreateRequest(email="wizard@example.com"), service=service)

    session = onboarding_api.submit_biometrics(BiometricsStepRequest(biometrics=biometrics_form))
    assert session.current_step == OnboardingStep.HEALTH_CONDITIONS

    session = onboarding_api.submit_health(HealthStepRequest(session=_roundtrip(session), health={"hasGastritis": True}))
    session = onboarding_api.go_back(SessionRequest(session=_roundtrip(session)))
    assert session.current_step == OnboardingStep.HEALTH_CONDITIONS
    session = onboarding_api.skip_health(SessionRequest(session=_roundtrip(session)))
    assert not session.health.has_gastritis

    result = onboarding_api.complete(
        user.id,
        CompleteRequest(session=_roundtrip(session), preferences={"dailyBudget": 75}),
        repository=ProfileRepository(db),
    )
    assert result.onboarding_completed
    assert result.derived.bmr == 1709

    profile = users_api.get_profile(user.id, service=service)
    assert profile.user.onboarding_completed is True
    assert profile.preferences.daily_budget == 75

    update = users_api.update_biometrics(user.id, payload={"weight": 80}, service=service)
    assert (update.bmi, update.bmr) == (26.1, 1759)


def test_completing_from_wrong_step_is_rejected(biometrics_form):
    """Test that completing from step 2 is rejected."""
    session = onboarding_api.submit_biometrics(BiometricsStepRequest(biometrics=biometrics_form))
    with pytest.raises(InvalidTransitionError):
        onboarding_api.complete(1, CompleteRequest(session=_roundtrip(session)), repository=None)


def test_health_check(db):
    """Test that the health probe reports a connected database."""
    assert health(db=db) == {"status": "healthy", "database": "connected"}
