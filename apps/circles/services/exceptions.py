"""
Domain-specific exceptions for circles app.

Each one specializes a class of the shared taxonomy, so views can let
them propagate and DRF renders the matching HTTP response.
"""

from apps.common.exceptions import (
    AlreadyMemberError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    NotMemberError,
)


class CircleNotFoundError(NotFoundError):
    """Raised when a circle does not exist."""
    default_detail = 'Circle not found.'
    default_code = 'circle_not_found'


class AmbiguousCircleNameError(CircleNotFoundError):
    """Raised when a name lookup matches more than one circle."""
    default_detail = 'More than one circle has this name.'
    default_code = 'ambiguous_circle_name'


class InvalidCircleNameError(InvalidInputError):
    """Raised when a circle name is empty or whitespace."""
    default_detail = 'Circle name cannot be empty.'
    default_code = 'invalid_circle_name'


class InvalidSearchQueryError(InvalidInputError):
    """Raised when a search query is blank."""
    default_detail = 'Search query is required.'
    default_code = 'invalid_search_query'


class CannotRemoveSelfError(InvalidInputError):
    """Raised when the creator tries to remove themselves."""
    default_detail = 'Use leave to leave a circle yourself.'
    default_code = 'cannot_remove_self'


class NotCircleMemberError(NotMemberError):
    """Raised when a user is not an active member of the circle."""
    pass


class AlreadyCircleMemberError(AlreadyMemberError):
    """Raised when a user tries to join a circle they're already in."""
    pass


class NotCircleCreatorError(ForbiddenError):
    """Raised when a non-creator tries a creator-only action."""
    default_detail = 'Only the circle creator can remove members.'
    default_code = 'not_circle_creator'
