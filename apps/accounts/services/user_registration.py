"""User registration service."""

import logging

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(*, user_id: str, display_name: str) -> User:
    """
    Register a user on first successful login, or refresh their name.

    The identity bridge has already authenticated ``user_id``; this only
    records the user locally. Users are never deleted.

    Args:
        user_id: Opaque id issued by the identity provider
        display_name: Name shown to other circle members

    Returns:
        Created or updated User instance

    Raises:
        UserRegistrationError: If user_id or display_name is blank
    """
    user_id = (user_id or '').strip()
    display_name = (display_name or '').strip()
    if not user_id or not display_name:
        raise UserRegistrationError()

    user = User.objects.select_for_update().filter(id=user_id).first()
    if user is None:
        try:
            with transaction.atomic():
                user = User.objects.create_user(id=user_id, display_name=display_name)
        except IntegrityError:
            # Registered by a concurrent login
            user = User.objects.select_for_update().get(id=user_id)
        else:
            logger.info("Registered user %s (%s)", user_id, display_name)
            return user

    if user.display_name != display_name:
        user.display_name = display_name
        user.save(update_fields=['display_name', 'updated_at'])
        logger.info("Updated display name of user %s", user_id)

    return user
