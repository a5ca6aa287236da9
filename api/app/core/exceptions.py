"""
Custom exceptions for the application.
"""


class LearnifyException(Exception):
    """Base exception for all Learnify application exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LearnifyException):
    """Raised when required input is missing or malformed."""
    pass


class NotFoundError(LearnifyException):
    """Raised when a requested resource is not found."""
    pass


class ConflictError(LearnifyException):
    """Raised when there's a conflict (e.g., duplicate slug)."""
    pass


class ReferentialIntegrityError(LearnifyException):
    """Raised when a delete would orphan dependent documents."""
    pass


class AuthenticationError(LearnifyException):
    """Raised when authentication fails."""
    pass


class AuthorizationError(LearnifyException):
    """Raised when authorization fails."""
    pass
