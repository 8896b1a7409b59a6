"""Read-side helpers for users."""

from typing import Optional

from django.contrib.auth import get_user_model

from apps.circles.models import Circle

from .exceptions import UserNotFoundError

User = get_user_model()


def get_user(*, user_id: str) -> User:
    """
    Get a user by id.

    Raises:
        UserNotFoundError: If user doesn't exist
    """
    try:
        return User.objects.select_related('primary_circle').get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_id} not found")


def get_primary_circle(*, user_id: str) -> Optional[Circle]:
    """Return the user's primary circle, or None if unset."""
    return get_user(user_id=user_id).primary_circle
