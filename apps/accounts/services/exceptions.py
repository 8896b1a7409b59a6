"""Domain-specific exceptions for accounts services."""

from apps.common.exceptions import InvalidInputError, NotFoundError


class UserRegistrationError(InvalidInputError):
    """Raised when registration data is unusable."""
    default_detail = 'User id and display name are required.'
    default_code = 'user_registration_error'


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist."""
    default_detail = 'User not found.'
    default_code = 'user_not_found'
