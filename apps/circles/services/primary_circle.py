"""
Primary circle service.

The primary circle is a single pointer on the user row. It is only ever
changed with conditional UPDATEs, so two requests racing on the same
user cannot overwrite each other's decision.
"""

import logging

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.circles.models import Circle, MembershipStatus

from .exceptions import CircleNotFoundError, NotCircleMemberError

logger = logging.getLogger(__name__)


def assign_primary_if_unset(*, user_id: str, circle: Circle) -> bool:
    """Point the user's primary at ``circle`` only if it is currently unset."""
    updated = User.objects.filter(
        id=user_id,
        primary_circle__isnull=True,
    ).update(primary_circle=circle, updated_at=timezone.now())
    return bool(updated)


def clear_primary_if(*, user_id: str, circle: Circle) -> bool:
    """Unset the user's primary if it still points at ``circle``."""
    updated = User.objects.filter(
        id=user_id,
        primary_circle=circle,
    ).update(primary_circle=None, updated_at=timezone.now())
    return bool(updated)


@transaction.atomic
def set_primary_circle(*, user_id: str, circle_id: int) -> User:
    """
    Designate a circle as the user's default context.

    Locks the circle row so the membership check and the pointer update
    see the same membership set.

    Args:
        user_id: Id of the user
        circle_id: ID of a circle the user is an active member of

    Returns:
        Updated User instance

    Raises:
        CircleNotFoundError: If circle doesn't exist
        NotCircleMemberError: If user is not an active member
    """
    try:
        circle = Circle.objects.select_for_update().get(id=circle_id)
    except Circle.DoesNotExist:
        raise CircleNotFoundError(f"Circle with ID {circle_id} not found")

    if not circle.memberships.filter(user_id=user_id, status=MembershipStatus.ACTIVE).exists():
        raise NotCircleMemberError(f"User is not a member of {circle.name}")

    User.objects.filter(id=user_id).update(primary_circle=circle, updated_at=timezone.now())
    logger.info("Primary circle set: user=%s, circle=%s", user_id, circle_id)

    return User.objects.select_related('primary_circle').get(id=user_id)
