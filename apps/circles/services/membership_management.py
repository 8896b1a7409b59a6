"""
Membership management service.

Handles circle membership operations with concurrency protection. Every
mutation locks the circle row first, so join/leave/remove on the same
circle are serialized while unrelated circles stay independent.
"""

import logging
from typing import List, Optional

from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.services import get_user
from apps.circles.models import Circle, CircleMembership, MembershipStatus

from .exceptions import (
    AlreadyCircleMemberError,
    AmbiguousCircleNameError,
    CannotRemoveSelfError,
    CircleNotFoundError,
    NotCircleCreatorError,
    NotCircleMemberError,
)
from .primary_circle import assign_primary_if_unset, clear_primary_if

logger = logging.getLogger(__name__)


def _lock_circle(circle_id: int) -> Circle:
    try:
        return Circle.objects.select_for_update().get(id=circle_id)
    except Circle.DoesNotExist:
        raise CircleNotFoundError(f"Circle with ID {circle_id} not found")


def _active_membership(circle: Circle, user_id: str) -> Optional[CircleMembership]:
    return (
        CircleMembership.objects
        .select_for_update()
        .filter(circle=circle, user_id=user_id, status=MembershipStatus.ACTIVE)
        .first()
    )


@transaction.atomic
def join_circle(*, user_id: str, circle_id: int) -> CircleMembership:
    """
    Join a circle by ID.

    Uses row-level locking to prevent race conditions when checking
    and creating memberships. A user who left or was removed earlier gets
    their old membership row reactivated with a fresh join time.

    Args:
        user_id: Id of the user joining
        circle_id: ID of the circle

    Returns:
        Active CircleMembership instance

    Raises:
        CircleNotFoundError: If circle doesn't exist
        UserNotFoundError: If user is not registered
        AlreadyCircleMemberError: If user is already an active member
    """
    circle = _lock_circle(circle_id)
    user = get_user(user_id=user_id)

    membership = (
        CircleMembership.objects
        .select_for_update()
        .filter(circle=circle, user=user)
        .first()
    )

    if membership is not None:
        if membership.is_active:
            raise AlreadyCircleMemberError(f"User is already a member of {circle.name}")

        membership.status = MembershipStatus.ACTIVE
        membership.joined_at = timezone.now()
        membership.left_at = None
        membership.save(update_fields=['status', 'joined_at', 'left_at'])
        logger.info("Rejoined circle: user=%s, circle=%s", user_id, circle.id)
    else:
        try:
            with transaction.atomic():
                membership = CircleMembership.objects.create(
                    user=user,
                    circle=circle,
                    status=MembershipStatus.ACTIVE,
                )
        except IntegrityError:
            # Database constraint caught duplicate membership
            raise AlreadyCircleMemberError(f"User is already a member of {circle.name}")
        logger.info("Joined circle: user=%s, circle=%s", user_id, circle.id)

    assign_primary_if_unset(user_id=user.id, circle=circle)
    return membership


def join_circle_by_name(*, user_id: str, name: str) -> CircleMembership:
    """
    Join the single circle whose name matches exactly.

    Raises:
        CircleNotFoundError: If no circle has that name
        AmbiguousCircleNameError: If several circles share that name
        AlreadyCircleMemberError: If user is already an active member
    """
    name = (name or '').strip()
    matches = list(Circle.objects.filter(name=name).values_list('id', flat=True)[:2])

    if not matches:
        raise CircleNotFoundError(f"Circle not found: {name}")
    if len(matches) > 1:
        raise AmbiguousCircleNameError(f"More than one circle is named {name}")

    return join_circle(user_id=user_id, circle_id=matches[0])


@transaction.atomic
def leave_circle(*, user_id: str, circle_id: int) -> None:
    """
    Leave a circle.

    The circle itself survives even when its last member leaves. If it was
    the user's primary circle, the primary becomes unset; no other circle
    is promoted automatically.

    Raises:
        CircleNotFoundError: If circle doesn't exist
        NotCircleMemberError: If user is not an active member
    """
    circle = _lock_circle(circle_id)

    membership = _active_membership(circle, user_id)
    if membership is None:
        raise NotCircleMemberError(f"User is not a member of {circle.name}")

    membership.status = MembershipStatus.LEFT
    membership.left_at = timezone.now()
    membership.save(update_fields=['status', 'left_at'])

    clear_primary_if(user_id=user_id, circle=circle)
    logger.info("Left circle: user=%s, circle=%s", user_id, circle.id)


@transaction.atomic
def remove_member(
    *,
    acting_user_id: str,
    circle_id: int,
    target_user_id: str
) -> None:
    """
    Remove another member from a circle.

    Only the creator may remove, and only while still an active member;
    a creator who has left regains the right by rejoining.

    Args:
        acting_user_id: User performing the removal (must be the creator)
        circle_id: ID of the circle
        target_user_id: User to remove

    Raises:
        CircleNotFoundError: If circle doesn't exist
        NotCircleCreatorError: If acting user is not the creator
        CannotRemoveSelfError: If the creator targets themselves
        NotCircleMemberError: If the creator has left the circle, or the
            target is not an active member
    """
    circle = _lock_circle(circle_id)

    if not circle.is_creator(acting_user_id):
        raise NotCircleCreatorError()

    if _active_membership(circle, acting_user_id) is None:
        raise NotCircleMemberError("You are no longer a member of this circle")

    if target_user_id == acting_user_id:
        raise CannotRemoveSelfError()

    membership = _active_membership(circle, target_user_id)
    if membership is None:
        raise NotCircleMemberError("User is not a member of this circle")

    membership.status = MembershipStatus.REMOVED
    membership.left_at = timezone.now()
    membership.save(update_fields=['status', 'left_at'])

    clear_primary_if(user_id=target_user_id, circle=circle)
    logger.info(
        "Removed from circle: user=%s, circle=%s, by=%s",
        target_user_id, circle.id, acting_user_id
    )


def list_members(*, circle_id: int, excluding_user_id: Optional[str] = None) -> List[dict]:
    """
    Active members of a circle ordered by name.

    Args:
        circle_id: ID of the circle
        excluding_user_id: Optional user to leave out (usually the caller)

    Returns:
        List of dicts with user_id, name and joined_at

    Raises:
        CircleNotFoundError: If circle doesn't exist
    """
    if not Circle.objects.filter(id=circle_id).exists():
        raise CircleNotFoundError(f"Circle with ID {circle_id} not found")

    memberships = (
        CircleMembership.objects
        .filter(circle_id=circle_id, status=MembershipStatus.ACTIVE)
        .select_related('user')
        .order_by('user__display_name', 'user_id')
    )
    if excluding_user_id:
        memberships = memberships.exclude(user_id=excluding_user_id)

    return [
        {
            'user_id': m.user_id,
            'name': m.user.get_display_name(),
            'joined_at': m.joined_at,
        }
        for m in memberships
    ]


def is_member(*, user_id: str, circle_id: int) -> bool:
    return CircleMembership.objects.filter(
        user_id=user_id,
        circle_id=circle_id,
        status=MembershipStatus.ACTIVE,
    ).exists()


def member_count(*, circle_id: int) -> int:
    return CircleMembership.objects.filter(
        circle_id=circle_id,
        status=MembershipStatus.ACTIVE,
    ).count()
