"""Onboarding wizard.

Three ordered steps: biometrics, health conditions, dietary preferences,
followed by a commit that persists the whole aggregate. The wizard owns its
`OnboardingSession` exclusively; the HTTP layer threads the session through
request and response bodies and rebuilds a wizard with `resume`.
"""

from typing import Any, Dict, List, Optional

from core.config import MIN_DAILY_BUDGET
from core.exceptions import InvalidTransitionError, NotConfiguredError, RangeViolation
from core.logger import get_logger
from schemas.enums import OnboardingStep
from schemas.health_schema import HealthConditions
from schemas.onboarding_schema import OnboardingResult, OnboardingSession
from schemas.preferences_schema import Preferences, PreferencesSubmission, unique_strings
from services.biometric_calculator import BiometricCalculator, biometric_calculator
from services.validator import BiometricValidator, biometric_validator

logger = get_logger("services.onboarding")


def merge_allergens(selected: List[str], custom: List[str]) -> List[str]:
    """Union of checklist selections and free-text entries, without duplicates."""
    return unique_strings(list(selected) + list(custom))


def to_preferences(submission: PreferencesSubmission) -> Preferences:
    """Fold the free-text allergens of a step 3 form into its checklist selection."""
    return Preferences(
        **submission.model_dump(exclude={"allergens", "custom_allergens"}),
        allergens=merge_allergens(submission.allergens, submission.custom_allergens),
    )


def check_budget(preferences: Preferences) -> None:
    """Re-assert the minimum daily budget before anything is written."""
    if preferences.daily_budget < MIN_DAILY_BUDGET:
        raise RangeViolation(
            "daily_budget",
            f"Daily budget must be at least {MIN_DAILY_BUDGET}",
        )


class OnboardingWizard:
    """Step state machine for first-time onboarding.

    Args:
        repository: Object providing ``save_onboarding``; only needed for
            `complete`.
        calculator: Biometric calculator used to derive BMI/BMR.
        validator: Form validator.
        session: Existing session to continue; a fresh one is created if omitted.
    """

    def __init__(
        self,
        repository=None,
        calculator: BiometricCalculator = biometric_calculator,
        validator: BiometricValidator = biometric_validator,
        session: Optional[OnboardingSession] = None,
    ):
        self.repository = repository
        self.calculator = calculator
        self.validator = validator
        self.session: Optional[OnboardingSession] = session if session is not None else OnboardingSession()

    @classmethod
    def resume(cls, session: OnboardingSession, repository=None) -> "OnboardingWizard":
        """Continue a session received from a client.

        Derived values are recomputed from the raw biometrics rather than
        trusted, and a session claiming to be past step 1 without biometrics
        is sent back to step 1.
        """
        session = session.model_copy(deep=True)
        wizard = cls(repository=repository, session=session)
        if session.biometrics is not None:
            session.derived = wizard.calculator.derive(session.biometrics)
        else:
            session.derived = None
            session.current_step = OnboardingStep.BIOMETRICS
        return wizard

    @property
    def current_step(self) -> OnboardingStep:
        return self._require_session("read step").current_step

    def _require_session(self, action: str) -> OnboardingSession:
        if self.session is None:
            raise InvalidTransitionError(action)
        return self.session

    def _require_step(self, action: str, step: OnboardingStep) -> OnboardingSession:
        session = self._require_session(action)
        if session.current_step != step:
            raise InvalidTransitionError(action, int(session.current_step))
        return session

    def submit_biometrics(self, data: Dict[str, Any]) -> OnboardingSession:
        """Validate step 1, derive BMI/BMR and advance to health conditions."""
        session = self._require_step("submit biometrics", OnboardingStep.BIOMETRICS)
        biometrics = self.validator.parse(data)
        session.biometrics = biometrics
        session.derived = self.calculator.derive(biometrics)
        session.current_step = OnboardingStep.HEALTH_CONDITIONS
        logger.info(
            "Onboarding step 1 complete: bmi=%s category=%s bmr=%s",
            session.derived.bmi, session.derived.bmi_category.value, session.derived.bmr,
        )
        return session

    def submit_health(self, data: Optional[Dict[str, Any]] = None) -> OnboardingSession:
        """Store the toggled condition flags and advance to preferences."""
        session = self._require_step("submit health conditions", OnboardingStep.HEALTH_CONDITIONS)
        session.health = self.validator.parse_health(data)
        session.current_step = OnboardingStep.DIETARY_PREFERENCES
        logger.info("Onboarding step 2 complete")
        return session

    def skip_health(self) -> OnboardingSession:
        """Same as submitting every flag as False."""
        session = self._require_step("skip health conditions", OnboardingStep.HEALTH_CONDITIONS)
        session.health = HealthConditions()
        session.current_step = OnboardingStep.DIETARY_PREFERENCES
        logger.info("Onboarding step 2 skipped")
        return session

    def back(self) -> OnboardingSession:
        """Return to the previous step keeping everything entered so far."""
        session = self._require_session("go back")
        if session.current_step == OnboardingStep.BIOMETRICS:
            raise InvalidTransitionError("go back", int(session.current_step))
        session.current_step = OnboardingStep(session.current_step - 1)
        return session

    def complete(self, user_id: int, data: Optional[Dict[str, Any]] = None) -> OnboardingResult:
        """Commit the onboarding.

        ``data`` is the step 3 form. It may be omitted when retrying after a
        persistence failure, in which case the preferences kept from the
        failed attempt are used.

        Raises:
            ValidationError: Invalid preferences form.
            RangeViolation: Daily budget below the minimum; nothing is written.
            PersistenceError: The write failed; the session is kept for retry.
        """
        session = self._require_step("complete onboarding", OnboardingStep.DIETARY_PREFERENCES)
        if data is not None:
            preferences = to_preferences(self.validator.parse_preferences(data))
        elif session.preferences is not None:
            preferences = session.preferences
        else:
            preferences = Preferences()
        check_budget(preferences)

        if self.repository is None:
            raise NotConfiguredError()

        # Keep the submitted form so a failed write can be retried as-is.
        session.preferences = preferences
        derived = self.calculator.derive(session.biometrics)
        session.derived = derived

        self.repository.save_onboarding(user_id, session.biometrics, derived, session.health, preferences)

        result = OnboardingResult(
            user_id=user_id,
            biometrics=session.biometrics,
            derived=derived,
            health=session.health,
            preferences=preferences,
        )
        self.session = None
        logger.info("Onboarding complete for user=%s", user_id)
        return result


__all__ = ["OnboardingWizard", "merge_allergens", "to_preferences", "check_budget"]
