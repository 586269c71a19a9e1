"""Profile page operations.

Returning users edit their profile one section at a time. Biometric edits
may carry only the changed fields: they are merged over the stored row and
BMI/BMR are recomputed from the merged view before anything is written.
Health and preference edits have no derived values.
"""

import json
from typing import Any, Dict, Optional

from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import ProfileRepository, UserRepository
from database import models
from schemas.biometrics_schema import BiometricInput, BiometricsRecord, BiometricsUpdateResponse
from schemas.health_schema import HealthConditions
from schemas.preferences_schema import Preferences
from schemas.user_schema import PersonalDetailsUpdate, ProfileResponse, UserCreateRequest, UserResponse
from services.biometric_calculator import BiometricCalculator, biometric_calculator
from services.onboarding import check_budget, to_preferences
from services.validator import BiometricValidator, biometric_validator, clean_form

logger = get_logger("services.profile_service")

BIOMETRIC_FIELDS = ("age", "gender", "height", "weight", "target_weight", "activity_level")


def merge_biometrics(current: Dict[str, Any], changes: Dict[str, Any]) -> BiometricInput:
    """Merge a partial edit over the stored values.

    A field present (not None) in ``changes`` wins; otherwise the stored
    value is kept.
    """
    merged = {}
    for field in BIOMETRIC_FIELDS:
        value = changes.get(field)
        merged[field] = value if value is not None else current.get(field)
    return BiometricInput.model_validate(merged)


def biometrics_to_dict(row: models.Biometrics) -> Dict[str, Any]:
    return {field: getattr(row, field) for field in BIOMETRIC_FIELDS}


def health_from_row(row: Optional[models.HealthProfile]) -> HealthConditions:
    if row is None:
        return HealthConditions()
    return HealthConditions(
        has_diabetes=row.has_diabetes,
        has_hypertension=row.has_hypertension,
        has_high_cholesterol=row.has_high_cholesterol,
        has_gastritis=row.has_gastritis,
    )


def preferences_from_row(row: Optional[models.Preferences]) -> Preferences:
    if row is None:
        return Preferences()
    return Preferences(
        diet_type=row.diet_type,
        allergens=json.loads(row.allergens) if row.allergens else [],
        spice_level=row.spice_level,
        daily_budget=row.daily_budget,
        food_preferences=json.loads(row.food_preferences) if row.food_preferences else [],
    )


class ProfileService:
    """Reads and section-by-section edits of a user's profile."""

    def __init__(
        self,
        repository: ProfileRepository,
        users: UserRepository,
        calculator: BiometricCalculator = biometric_calculator,
        validator: BiometricValidator = biometric_validator,
    ):
        self.repository = repository
        self.users = users
        self.calculator = calculator
        self.validator = validator

    def create_user(self, payload: UserCreateRequest) -> UserResponse:
        """Register a user; onboarding starts out incomplete.

        Raises:
            ValidationError: The email is already registered.
        """
        user = self.users.create_user(payload.email, payload.name)
        logger.info("User created id=%s", user.id)
        return UserResponse.model_validate(user)

    def update_personal_details(self, user_id: int, payload: PersonalDetailsUpdate) -> UserResponse:
        """Update name, phone and location; omitted fields are left unchanged."""
        user = self.users.update_personal_details(user_id, payload.model_dump(exclude_none=True))
        return UserResponse.model_validate(user)

    def biometrics_record(self, row: models.Biometrics) -> BiometricsRecord:
        """Build the response record; the category is re-derived from the stored BMI."""
        return BiometricsRecord(
            **biometrics_to_dict(row),
            bmi=row.bmi,
            bmi_category=self.calculator.classify_bmi(row.bmi),
            bmr=row.bmr,
        )

    def get_profile(self, user_id: int) -> ProfileResponse:
        """Fetch the full profile; missing sections fall back to defaults."""
        user = self.users.require(user_id)
        row = self.repository.fetch_biometrics(user_id)
        return ProfileResponse(
            user=UserResponse.model_validate(user),
            biometrics=self.biometrics_record(row) if row is not None else None,
            health_profile=health_from_row(self.repository.fetch_health_profile(user_id)),
            preferences=preferences_from_row(self.repository.fetch_preferences(user_id)),
        )

    def update_biometrics(self, user_id: int, data: Dict[str, Any]) -> BiometricsUpdateResponse:
        """Apply a partial biometrics edit and persist recomputed BMI/BMR.

        Raises:
            ValidationError: A supplied field is out of range.
            NotFoundError: The user or their stored biometrics do not exist.
            PersistenceError: The update could not be written.
        """
        changes = self.validator.parse_update(data).changes()
        self.users.require(user_id)
        row = self.repository.fetch_biometrics(user_id)
        if row is None:
            raise NotFoundError("Biometrics", user_id)

        merged = merge_biometrics(biometrics_to_dict(row), changes)
        derived = self.calculator.derive(merged)
        self.repository.update_biometrics(user_id, changes, derived)
        logger.info(
            "Biometrics updated for user=%s fields=%s bmi=%s bmr=%s",
            user_id, sorted(changes), derived.bmi, derived.bmr,
        )
        return BiometricsUpdateResponse(
            bmi=derived.bmi,
            bmi_category=derived.bmi_category,
            bmr=derived.bmr,
            weight=merged.weight,
        )

    def update_health_profile(self, user_id: int, data: Dict[str, Any]) -> HealthConditions:
        """Update condition flags; flags not supplied keep their stored value."""
        current = health_from_row(self.repository.fetch_health_profile(user_id)).model_dump()
        health = self.validator.parse_health({**current, **clean_form(data)})
        self.repository.update_health_profile(user_id, health)
        return health

    def update_preferences(self, user_id: int, data: Dict[str, Any]) -> Preferences:
        """Update preferences; fields not supplied keep their stored value."""
        current = preferences_from_row(self.repository.fetch_preferences(user_id)).model_dump()
        preferences = to_preferences(self.validator.parse_preferences({**current, **clean_form(data)}))
        check_budget(preferences)
        self.repository.update_preferences(user_id, preferences)
        return preferences
