"""
Circle management service.

Handles circle creation, lookup and search.
"""

import logging
from typing import List

from django.conf import settings
from django.db import transaction

from apps.accounts.services import get_user
from apps.circles.models import Circle, CircleMembership, MembershipStatus

from .exceptions import (
    CircleNotFoundError,
    InvalidCircleNameError,
    InvalidSearchQueryError,
)
from .primary_circle import assign_primary_if_unset

logger = logging.getLogger(__name__)


def create_circle(*, creator_id: str, name: str) -> Circle:
    """
    Create a new circle and add the creator as its first member.

    Names are not unique: a second circle with the same name is a new row.

    This is a multi-step operation wrapped in a transaction:
    1. Create the circle
    2. Create the creator's membership
    3. Make it the creator's primary circle if they have none

    Args:
        creator_id: Id of the user creating the circle
        name: Circle name, surrounding whitespace is stripped

    Returns:
        Created Circle instance

    Raises:
        InvalidCircleNameError: If name is empty or whitespace
        UserNotFoundError: If the creator is not registered
    """
    name = (name or '').strip()
    if not name:
        raise InvalidCircleNameError()

    with transaction.atomic():
        creator = get_user(user_id=creator_id)

        circle = Circle.objects.create(name=name, created_by=creator)

        CircleMembership.objects.create(
            user=creator,
            circle=circle,
            status=MembershipStatus.ACTIVE,
        )

        assign_primary_if_unset(user_id=creator.id, circle=circle)

    logger.info("Circle created: %s (id=%s, creator=%s)", circle.name, circle.id, creator_id)
    return circle


def get_circle(*, circle_id: int) -> Circle:
    """
    Get a circle by ID.

    Raises:
        CircleNotFoundError: If circle doesn't exist
    """
    try:
        return Circle.objects.select_related('created_by').get(id=circle_id)
    except Circle.DoesNotExist:
        raise CircleNotFoundError(f"Circle with ID {circle_id} not found")


def search_circles(*, query: str) -> List[Circle]:
    """
    Case-insensitive substring search on circle names.

    Returns at most CIRCLE_SEARCH_LIMIT circles ordered by name; an empty
    list when nothing matches.

    Raises:
        InvalidSearchQueryError: If query is blank
    """
    query = (query or '').strip()
    if not query:
        raise InvalidSearchQueryError()

    limit = getattr(settings, 'CIRCLE_SEARCH_LIMIT', 20)
    return list(
        Circle.objects
        .filter(name__icontains=query)
        .order_by('name', 'id')[:limit]
    )


def list_user_circles(*, user_id: str) -> List[Circle]:
    """Circles the user is an active member of, most recently joined first."""
    memberships = (
        CircleMembership.objects
        .filter(user_id=user_id, status=MembershipStatus.ACTIVE)
        .select_related('circle', 'circle__created_by')
        .order_by('-joined_at', '-id')
    )
    return [membership.circle for membership in memberships]
