"""
Circles app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    CircleNotFoundError,
    AmbiguousCircleNameError,
    InvalidCircleNameError,
    InvalidSearchQueryError,
    CannotRemoveSelfError,
    NotCircleMemberError,
    AlreadyCircleMemberError,
    NotCircleCreatorError,
)

from .circle_management import (
    create_circle,
    get_circle,
    search_circles,
    list_user_circles,
)

from .membership_management import (
    join_circle,
    join_circle_by_name,
    leave_circle,
    remove_member,
    list_members,
    is_member,
    member_count,
)

from .primary_circle import (
    set_primary_circle,
)


__all__ = [
    # Exceptions
    'CircleNotFoundError',
    'AmbiguousCircleNameError',
    'InvalidCircleNameError',
    'InvalidSearchQueryError',
    'CannotRemoveSelfError',
    'NotCircleMemberError',
    'AlreadyCircleMemberError',
    'NotCircleCreatorError',

    # Circle Management
    'create_circle',
    'get_circle',
    'search_circles',
    'list_user_circles',

    # Membership Management
    'join_circle',
    'join_circle_by_name',
    'leave_circle',
    'remove_member',
    'list_members',
    'is_member',
    'member_count',

    # Primary Circle
    'set_primary_circle',
]
