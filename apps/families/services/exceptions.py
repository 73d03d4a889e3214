"""
Domain-specific exceptions for families app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class FamiliesServiceError(Exception):
    """Base exception for all families service errors."""
    pass


class NoFamilyError(FamiliesServiceError):
    """Raised when a user's profile does not point at any family."""
    pass
