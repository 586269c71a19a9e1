"""Repository classes for database operations.

`BaseRepository` covers single-model CRUD. `ProfileRepository` owns the three
per-user profile sections and writes a completed onboarding as a single
transaction: biometrics, health profile, preferences and the
onboarding-complete flag are committed together or not at all.
"""

import json
from contextlib import contextmanager
from typing import TypeVar, Generic, Type, Optional, Any, Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, PersistenceError, ValidationError
from core.logger import get_logger
from database import models
from database.models import Base
from schemas.biometrics_schema import BiometricDerived, BiometricInput
from schemas.health_schema import HealthConditions
from schemas.preferences_schema import Preferences

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    @contextmanager
    def transaction(self, operation: str):
        """Commit on success; roll back and raise `PersistenceError` on failure."""
        try:
            yield
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Database operation '%s' failed: %s", operation, exc, exc_info=True)
            raise PersistenceError(f"Failed to {operation.replace('_', ' ')}", operation=operation) from exc
        except Exception:
            self.session.rollback()
            raise

    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an object by its primary key."""
        return self.session.get(self.model, id)

    def require(self, id: Any) -> T:
        """Retrieve an object by primary key or raise `NotFoundError`."""
        obj = self.get_by_id(id)
        if obj is None:
            raise NotFoundError(self.model.__name__, id)
        return obj

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object."""
        with self.transaction(f"create_{self.model.__tablename__}"):
            self.session.add(obj)
        self.session.refresh(obj)
        return obj


class UserRepository(BaseRepository[models.User]):
    """User records and personal details."""

    def __init__(self, session: Session):
        super().__init__(models.User, session)

    def create_user(self, email: str, name: Optional[str] = None) -> models.User:
        try:
            return self.create(models.User(email=email.strip().lower(), name=name))
        except PersistenceError as exc:
            if isinstance(exc.__cause__, IntegrityError):
                raise ValidationError("Email is already registered", field="email") from exc
            raise

    def update_personal_details(self, user_id: int, changes: Dict[str, Any]) -> models.User:
        user = self.require(user_id)
        with self.transaction("update_personal_details"):
            for key, value in changes.items():
                setattr(user, key, value)
        self.session.refresh(user)
        return user


class ProfileRepository(BaseRepository[models.User]):
    """Biometrics, health profile and preferences rows, one of each per user."""

    def __init__(self, session: Session):
        super().__init__(models.User, session)

    def _fetch(self, model, user_id: int):
        return self.session.query(model).filter(model.user_id == user_id).first()

    def fetch_biometrics(self, user_id: int) -> Optional[models.Biometrics]:
        return self._fetch(models.Biometrics, user_id)

    def fetch_health_profile(self, user_id: int) -> Optional[models.HealthProfile]:
        return self._fetch(models.HealthProfile, user_id)

    def fetch_preferences(self, user_id: int) -> Optional[models.Preferences]:
        return self._fetch(models.Preferences, user_id)

    # The _apply_* helpers stage changes without committing so they can be
    # combined into a single transaction.

    def _apply_biometrics(self, user_id: int, fields: Dict[str, Any], derived: BiometricDerived) -> models.Biometrics:
        row = self.fetch_biometrics(user_id)
        if row is None:
            row = models.Biometrics(user_id=user_id)
            self.session.add(row)
        for key, value in fields.items():
            setattr(row, key, value)
        row.bmi = derived.bmi
        row.bmr = derived.bmr
        return row

    def _apply_health_profile(self, user_id: int, health: HealthConditions) -> models.HealthProfile:
        row = self.fetch_health_profile(user_id)
        if row is None:
            row = models.HealthProfile(user_id=user_id)
            self.session.add(row)
        for key, value in health.model_dump().items():
            setattr(row, key, value)
        return row

    def _apply_preferences(self, user_id: int, preferences: Preferences) -> models.Preferences:
        row = self.fetch_preferences(user_id)
        if row is None:
            row = models.Preferences(user_id=user_id)
            self.session.add(row)
        row.diet_type = preferences.diet_type
        row.allergens = json.dumps(preferences.allergens)
        row.spice_level = preferences.spice_level
        row.daily_budget = preferences.daily_budget
        row.food_preferences = json.dumps(preferences.food_preferences)
        return row

    def _apply_onboarding_complete(self, user_id: int) -> None:
        self.require(user_id).onboarding_completed = True

    def update_biometrics(self, user_id: int, changes: Dict[str, Any], derived: BiometricDerived) -> models.Biometrics:
        """Write changed raw fields together with freshly computed bmi/bmr."""
        self.require(user_id)
        if self.fetch_biometrics(user_id) is None:
            raise NotFoundError("Biometrics", user_id)
        with self.transaction("update_biometrics"):
            row = self._apply_biometrics(user_id, changes, derived)
        self.session.refresh(row)
        return row

    def update_health_profile(self, user_id: int, health: HealthConditions) -> models.HealthProfile:
        self.require(user_id)
        with self.transaction("update_health_profile"):
            row = self._apply_health_profile(user_id, health)
        self.session.refresh(row)
        return row

    def update_preferences(self, user_id: int, preferences: Preferences) -> models.Preferences:
        self.require(user_id)
        with self.transaction("update_preferences"):
            row = self._apply_preferences(user_id, preferences)
        self.session.refresh(row)
        return row

    def mark_onboarding_complete(self, user_id: int) -> None:
        with self.transaction("mark_onboarding_complete"):
            self._apply_onboarding_complete(user_id)

    def save_onboarding(
        self,
        user_id: int,
        biometrics: BiometricInput,
        derived: BiometricDerived,
        health: HealthConditions,
        preferences: Preferences,
    ) -> models.User:
        """Persist a completed onboarding in one transaction; the flag is set last."""
        user = self.require(user_id)
        with self.transaction("save_onboarding"):
            self._apply_biometrics(user_id, biometrics.model_dump(mode="json"), derived)
            self._apply_health_profile(user_id, health)
            self._apply_preferences(user_id, preferences)
            self._apply_onboarding_complete(user_id)
        self.session.refresh(user)
        logger.info("Onboarding saved for user=%s", user_id)
        return user
