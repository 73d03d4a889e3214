"""
Domain-specific exceptions for entries app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class EntriesServiceError(Exception):
    """Base exception for all entries service errors."""
    pass


class InvalidScopeError(EntriesServiceError):
    """Raised when an aggregation scope is not mine, family or all."""
    pass
