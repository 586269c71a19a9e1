"""Tests for profile reads and section-by-section edits."""

import pytest

from core.exceptions import NotFoundError, RangeViolation, ValidationError
from core.repository import ProfileRepository, UserRepository
from database import models
from schemas.enums import ActivityLevel, BMICategory, Gender
from schemas.health_schema import HealthConditions
from schemas.preferences_schema import Preferences
from schemas.user_schema import PersonalDetailsUpdate, UserCreateRequest
from services.biometric_calculator import biometric_calculator
from services.profile_service import BIOMETRIC_FIELDS, ProfileService, merge_biometrics
from services.validator import biometric_validator


STORED = {
    "age": 28,
    "gender": "Male",
    "height": 175.0,
    "weight": 75.0,
    "target_weight": 70.0,
    "activity_level": "Moderate",
}

# A valid replacement value for each biometric field and its parsed form.
EDITS = {
    "age": (45, 45),
    "gender": ("Female", Gender.FEMALE),
    "height": (182.5, 182.5),
    "weight": (80.0, 80.0),
    "target_weight": (65.0, 65.0),
    "activity_level": ("Very Active", ActivityLevel.VERY_ACTIVE),
}

PARSED = {
    "age": 28,
    "gender": Gender.MALE,
    "height": 175.0,
    "weight": 75.0,
    "target_weight": 70.0,
    "activity_level": ActivityLevel.MODERATE,
}


@pytest.fixture
def service(db):
    return ProfileService(ProfileRepository(db), UserRepository(db))


@pytest.fixture
def onboarded_user(db, service):
    user = service.create_user(UserCreateRequest(email="profile@example.com", name="Nila"))
    biometrics = biometric_validator.parse(STORED)
    ProfileRepository(db).save_onboarding(
        user.id,
        biometrics,
        biometric_calculator.derive(biometrics),
        HealthConditions(has_hypertension=True),
        Preferences(diet_type="Vegetarian", allergens=["Soy"], spice_level=4, daily_budget=200),
    )
    return user


def test_edit_table_covers_every_field():
    """Test that the merge cases below cover every biometric field."""
    assert set(EDITS) == set(BIOMETRIC_FIELDS)


@pytest.mark.parametrize("field", BIOMETRIC_FIELDS)
def test_merge_supplied_field_wins(field):
    """Test that a supplied field replaces the stored value and nothing else."""
    value, expected = EDITS[field]
    merged = merge_biometrics(STORED, {field: value})
    assert getattr(merged, field) == expected
    for other in BIOMETRIC_FIELDS:
        if other != field:
            assert getattr(merged, other) == PARSED[other]


@pytest.mark.parametrize("field", BIOMETRIC_FIELDS)
def test_merge_absent_field_falls_back(field):
    """Test that an absent field keeps the stored value."""
    changes = {f: EDITS[f][0] for f in BIOMETRIC_FIELDS if f != field}
    merged = merge_biometrics(STORED, changes)
    assert getattr(merged, field) == PARSED[field]


@pytest.mark.parametrize("field", BIOMETRIC_FIELDS)
def test_merge_explicit_none_falls_back(field):
    """Test that a None change counts as not supplied."""
    merged = merge_biometrics(STORED, {field: None})
    assert getattr(merged, field) == PARSED[field]


def test_weight_edit_recomputes_and_persists(db, service, onboarded_user):
    """Test that a weight edit recomputes and stores BMI and BMR."""
    response = service.update_biometrics(onboarded_user.id, {"weight": 80})
    assert response.bmi == 26.1
    assert response.bmi_category == BMICategory.OVERWEIGHT
    assert response.bmr == 1759
    assert response.weight == 80.0

    db.expire_all()
    row = db.query(models.Biometrics).filter_by(user_id=onboarded_user.id).one()
    assert (row.weight, row.bmi, row.bmr) == (80.0, 26.1, 1759)
    assert row.age == 28
    assert row.target_weight == 70.0


def test_gender_edit_changes_only_bmr(service, onboarded_user):
    """Test that a gender edit shifts BMR by the offset difference."""
    response = service.update_biometrics(onboarded_user.id, {"gender": "Female"})
    assert response.bmi == 24.5
    assert response.bmr == 1709 - 166


def test_age_edit_uses_stored_measurements(service, onboarded_user):
    """Test that an age edit recomputes BMR from stored weight and height."""
    response = service.update_biometrics(onboarded_user.id, {"age": 53})
    assert response.bmr == 1709 - 125


def test_invalid_biometrics_edit_writes_nothing(db, service, onboarded_user):
    """Test that an out-of-range edit is rejected before any write."""
    with pytest.raises(ValidationError) as exc_info:
        service.update_biometrics(onboarded_user.id, {"weight": 500, "targetWeight": 10})
    assert sorted(e["field"] for e in exc_info.value.errors) == ["target_weight", "weight"]
    db.expire_all()
    assert db.query(models.Biometrics).filter_by(user_id=onboarded_user.id).one().weight == 75.0


def test_biometrics_edit_requires_stored_row(service):
    """Test that editing biometrics before onboarding raises NotFoundError."""
    user = service.create_user(UserCreateRequest(email="new@example.com"))
    with pytest.raises(NotFoundError) as exc_info:
        service.update_biometrics(user.id, {"weight": 80})
    assert exc_info.value.details["resource"] == "Biometrics"


def test_biometrics_edit_for_unknown_user(service):
    """Test that editing a missing user's biometrics raises NotFoundError."""
    with pytest.raises(NotFoundError) as exc_info:
        service.update_biometrics(999, {"weight": 80})
    assert exc_info.value.details["resource"] == "User"


def test_health_edit_does_not_touch_derived_values(db, service, onboarded_user):
    """Test that a health edit leaves stored BMI and BMR unchanged."""
    health = service.update_health_profile(onboarded_user.id, {"hasDiabetes": True})
    assert health.has_diabetes
    assert health.has_hypertension

    db.expire_all()
    row = db.query(models.Biometrics).filter_by(user_id=onboarded_user.id).one()
    assert (row.bmi, row.bmr) == (24.5, 1709)


def test_health_flags_can_be_cleared(service, onboarded_user):
    """Test that a flag can be switched back off."""
    health = service.update_health_profile(onboarded_user.id, {"hasHypertension": False})
    assert health == HealthConditions()


def test_preferences_partial_edit(service, onboarded_user):
    """Test that fields left out of a preferences edit keep their values."""
    prefs = service.update_preferences(onboarded_user.id, {"spiceLevel": 2})
    assert prefs.spice_level == 2
    assert prefs.diet_type == "Vegetarian"
    assert prefs.allergens == ["Soy"]
    assert prefs.daily_budget == 200


def test_preferences_custom_allergens_are_merged(service, onboarded_user):
    """Test that custom allergens are added to the stored list."""
    prefs = service.update_preferences(onboarded_user.id, {"customAllergens": ["Prawns", "Soy"]})
    assert prefs.allergens == ["Soy", "Prawns"]


@pytest.mark.parametrize("budget", [10, -5])
def test_preferences_budget_floor(db, service, onboarded_user, budget):
    """Test that a preferences save below the minimum budget is rejected."""
    with pytest.raises(RangeViolation) as exc_info:
        service.update_preferences(onboarded_user.id, {"dailyBudget": budget})
    assert exc_info.value.message == "Daily budget must be at least 50"
    db.expire_all()
    assert db.query(models.Preferences).filter_by(user_id=onboarded_user.id).one().daily_budget == 200


def test_get_profile(service, onboarded_user):
    """Test that the profile returns every stored section."""
    profile = service.get_profile(onboarded_user.id)
    assert profile.user.onboarding_completed is True
    assert profile.biometrics.bmi_category == BMICategory.NORMAL
    assert profile.biometrics.activity_level.value == "Moderate"
    assert profile.health_profile.has_hypertension
    assert profile.preferences.allergens == ["Soy"]


def test_get_profile_defaults_before_onboarding(service):
    """Test section defaults for a user who has not onboarded."""
    user = service.create_user(UserCreateRequest(email="fresh@example.com"))
    profile = service.get_profile(user.id)
    assert profile.biometrics is None
    assert profile.health_profile == HealthConditions()
    assert profile.preferences.spice_level == 3
    assert profile.preferences.daily_budget == 250


def test_get_profile_unknown_user(service):
    """Test that requesting a missing profile raises NotFoundError."""
    with pytest.raises(NotFoundError):
        service.get_profile(12345)


def test_personal_details_update(service, onboarded_user):
    """Test that phone and location are updated and the name is kept."""
    user = service.update_personal_details(
        onboarded_user.id, PersonalDetailsUpdate(phone="+8801700000000", location="Dhaka"),
    )
    assert user.name == "Nila"
    assert user.phone == "+8801700000000"
    assert user.location == "Dhaka"


def test_duplicate_email_is_a_validation_error(service):
    """Test that registering an email twice is rejected."""
    service.create_user(UserCreateRequest(email="dup@example.com"))
    with pytest.raises(ValidationError) as exc_info:
        service.create_user(UserCreateRequest(email=" DUP@example.com "))
    assert exc_info.value.errors == [{"field": "email", "message": "Email is already registered"}]
