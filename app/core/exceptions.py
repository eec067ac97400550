from typing import Optional, Any


class AppError(Exception):
    """
    Base exception for request-level failures.
    Carries the HTTP status and a machine-readable code.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """
    Raised when a required field is missing or malformed.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)


class AuthenticationError(AppError):
    """
    Raised when the bearer token is missing, malformed, expired or forged.
    """
    def __init__(self, message: str = "Forbidden: Invalid token", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=403, details=details)


class ResourceNotFoundError(AppError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class ConflictError(AppError):
    """
    Raised when a unique username or email is already taken.
    """
    def __init__(self, message: str = "Username or email already exists", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=400, details=details)


class PersistenceError(AppError):
    """
    Raised when the document store fails. The message stays generic.
    """
    def __init__(self, message: str = "Server error", details: Optional[Any] = None):
        super().__init__(message, code="PERSISTENCE_ERROR", status_code=500, details=details)


class ConfigurationError(ValueError):
    """
    Raised at startup when required configuration is missing.
    """
