"""Services for accounts business logic."""

from .exceptions import (
    UserRegistrationError,
    UserNotFoundError,
)
from .user_registration import register_user
from .user_lookup import get_user, get_primary_circle

__all__ = [
    # Exceptions
    'UserRegistrationError',
    'UserNotFoundError',
    # Services
    'register_user',
    'get_user',
    'get_primary_circle',
]
