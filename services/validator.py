"""Form validation for onboarding and profile editing.

Wraps the pydantic schemas with field-specific, human-readable messages.
Every violation is reported, not only the first, as a list of
``{"field": ..., "message": ...}`` dicts. This is the only place where raw
form values (often text) are coerced into typed models.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ValidationError
from core.logger import get_logger
from schemas.biometrics_schema import BiometricInput, BiometricUpdate
from schemas.enums import ActivityLevel, Gender
from schemas.health_schema import HealthConditions
from schemas.preferences_schema import PreferencesSubmission

logger = get_logger("services.validator")

M = TypeVar("M", bound=BaseModel)

# field -> (label, unit suffix for range messages)
FIELD_LABELS = {
    "age": ("Age", ""),
    "gender": ("Gender", ""),
    "height": ("Height", " cm"),
    "weight": ("Weight", " kg"),
    "target_weight": ("Target weight", " kg"),
    "activity_level": ("Activity level", ""),
    "has_diabetes": ("Diabetes", ""),
    "has_hypertension": ("Hypertension", ""),
    "has_high_cholesterol": ("High cholesterol", ""),
    "has_gastritis": ("Gastritis", ""),
    "diet_type": ("Diet type", ""),
    "allergens": ("Allergens", ""),
    "custom_allergens": ("Custom allergens", ""),
    "spice_level": ("Spice level", ""),
    "daily_budget": ("Daily budget", ""),
    "food_preferences": ("Food preferences", ""),
}

ENUM_CHOICES = {
    "gender": [g.value for g in Gender],
    "activity_level": [a.value for a in ActivityLevel],
}

# camelCase form keys -> schema field names
FIELD_ALIASES = {
    "targetWeight": "target_weight",
    "activityLevel": "activity_level",
    "hasDiabetes": "has_diabetes",
    "hasHypertension": "has_hypertension",
    "hasHighCholesterol": "has_high_cholesterol",
    "hasGastritis": "has_gastritis",
    "dietType": "diet_type",
    "customAllergens": "custom_allergens",
    "spiceLevel": "spice_level",
    "dailyBudget": "daily_budget",
    "foodPreferences": "food_preferences",
}

_NUMBER_ERRORS = {"int_parsing", "int_type", "float_parsing", "float_type", "finite_number"}


def _fmt_bound(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def canonical_field(loc: tuple) -> str:
    """Turn a pydantic error location into a schema field name."""
    if not loc:
        return "__root__"
    head = str(loc[0])
    if head in ("body", "query", "path") and len(loc) > 1:
        loc = loc[1:]
        head = str(loc[0])
    return FIELD_ALIASES.get(head, head)


def format_error(error: Dict[str, Any]) -> Dict[str, str]:
    """Build a ``{field, message}`` entry from one pydantic error dict."""
    field = canonical_field(tuple(error.get("loc", ())))
    label, unit = FIELD_LABELS.get(field, (field.replace("_", " ").capitalize(), ""))
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        message = f"{label} is required"
    elif kind == "int_from_float":
        message = f"{label} must be a whole number"
    elif kind in _NUMBER_ERRORS:
        message = f"{label} must be a number"
    elif kind in ("greater_than_equal", "greater_than"):
        message = f"{label} must be at least {_fmt_bound(ctx.get('ge', ctx.get('gt')))}{unit}"
    elif kind in ("less_than_equal", "less_than"):
        message = f"{label} must be at most {_fmt_bound(ctx.get('le', ctx.get('lt')))}{unit}"
    elif kind == "enum" and field in ENUM_CHOICES:
        message = f"{label} must be one of: {', '.join(ENUM_CHOICES[field])}"
    elif kind in ("bool_parsing", "bool_type"):
        message = f"{label} must be true or false"
    else:
        message = f"{label}: {error.get('msg', 'invalid value')}"
    return {"field": field, "message": message}


def format_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Format every pydantic error of one failed validation, keeping their order."""
    return [format_error(e) for e in errors]


def clean_form(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Normalize form keys to field names and drop empty inputs.

    Empty inputs count as absent, not as malformed numbers.
    """
    return {
        FIELD_ALIASES.get(k, k): v for k, v in (data or {}).items()
        if v is not None and not (isinstance(v, str) and not v.strip())
    }


class BiometricValidator:
    """Validator for every form collected by onboarding and the profile page."""

    def _errors(self, model: Type[M], data: Any) -> List[Dict[str, str]]:
        try:
            model.model_validate(clean_form(data))
        except PydanticValidationError as exc:
            return format_errors(exc.errors())
        return []

    def _parse(self, model: Type[M], data: Any, what: str) -> M:
        try:
            return model.model_validate(clean_form(data))
        except PydanticValidationError as exc:
            errors = format_errors(exc.errors())
            logger.info("Rejected %s input: %s", what, errors)
            raise ValidationError(f"Invalid {what}", errors=errors)

    def validate(self, data: Dict[str, Any]) -> List[Dict[str, str]]:
        """Return every current violation of a full biometrics form."""
        return self._errors(BiometricInput, data)

    def validate_field(self, field: str, value: Any, data: Optional[Dict[str, Any]] = None) -> List[Dict[str, str]]:
        """Re-validate one field after it changed, given the rest of the form."""
        form = dict(data or {})
        form[field] = value
        name = FIELD_ALIASES.get(field, field)
        return [e for e in self.validate(form) if e["field"] == name]

    def parse(self, data: Dict[str, Any]) -> BiometricInput:
        """Parse a full biometrics form or raise `ValidationError`."""
        return self._parse(BiometricInput, data, "biometrics")

    def parse_update(self, data: Dict[str, Any]) -> BiometricUpdate:
        """Parse a partial biometrics edit; absent fields are allowed."""
        return self._parse(BiometricUpdate, data, "biometrics update")

    def parse_health(self, data: Optional[Dict[str, Any]]) -> HealthConditions:
        """Parse the step 2 flags; absent flags default to False."""
        return self._parse(HealthConditions, data, "health conditions")

    def parse_preferences(self, data: Optional[Dict[str, Any]]) -> PreferencesSubmission:
        """Parse a step 3 or profile preferences form, including custom allergens."""
        return self._parse(PreferencesSubmission, data, "preferences")


biometric_validator = BiometricValidator()
__all__ = ["BiometricValidator", "biometric_validator", "clean_form", "format_error", "format_errors"]
