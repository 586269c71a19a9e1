"""Custom exception classes for the application.

Defines domain-specific exceptions raised by the validator, the onboarding
flow and the persistence layer. They are turned into JSON error responses by
the handlers in `core.error_handlers`.
"""

from typing import Optional, Any, Dict, List


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'User', 'Biometrics').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class ValidationError(AppException):
    """Exception raised when input validation fails.

    Carries every field violation found, not only the first one. Each entry
    is a ``{"field": ..., "message": ...}`` dict.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, str]]] = None,
        field: Optional[str] = None
    ):
        """Initialize validation error.

        Args:
            message: Summary message.
            errors: Optional list of field errors.
            field: Optional single field name, used when ``errors`` is omitted.
        """
        if errors is None:
            errors = [{"field": field, "message": message}] if field else []
        self.errors = errors
        super().__init__(message, status_code=422, details={"validation_errors": errors})


class RangeViolation(ValidationError):
    """A business range re-asserted at commit time rather than per keystroke."""

    def __init__(self, field: str, message: str):
        super().__init__(message, field=field)


class InvalidTransitionError(AppException):
    """Exception raised when a wizard action is not allowed from the current step."""

    def __init__(self, action: str, step: Optional[int] = None):
        if step is None:
            message = f"Cannot {action}: onboarding session is already complete"
        else:
            message = f"Cannot {action} from onboarding step {step}"
        super().__init__(message, status_code=409, details={"action": action, "step": step})


class PersistenceError(AppException):
    """Exception raised when a write or read against the store fails.

    Derived values are not authoritative until a write has been confirmed,
    so callers must keep their in-memory state when this is raised.
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize persistence error.

        Args:
            message: Error message.
            operation: Optional operation that failed (e.g., 'save_onboarding').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=503, details=details)


class NotConfiguredError(PersistenceError):
    """Exception raised when no database has been configured."""

    def __init__(self, config_key: str = "DATABASE_URL"):
        super().__init__(f"Persistence is not configured (set {config_key})", operation="connect")
        self.details["config_key"] = config_key
