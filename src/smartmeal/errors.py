"""Errors raised by services and adapters."""


class SmartMealError(Exception):
    """Base class for application errors."""


class NotFoundError(SmartMealError, LookupError):
    """Raised when a referenced record does not exist."""


class ValidationError(SmartMealError, ValueError):
    """Raised when input breaks a business rule."""


class AuthenticationError(SmartMealError):
    """Raised when credentials or access tokens are rejected."""


class RepositoryError(SmartMealError, RuntimeError):
    """Raised when the hosted store rejects or drops a write."""
