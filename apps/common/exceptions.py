"""
Domain exception taxonomy shared by all apps.

Every service-level failure is one of the classes below. They derive from
DRF's APIException so views can let them propagate and DRF renders the
status code and detail. Services never retry; each error is terminal to
the call that raised it.
"""
from rest_framework.exceptions import APIException


class DomainError(APIException):
    """Base exception for all domain service errors."""
    status_code = 400
    default_detail = 'The request could not be processed.'
    default_code = 'domain_error'


class InvalidInputError(DomainError):
    """Malformed or out-of-range caller data."""
    status_code = 400
    default_detail = 'Invalid input.'
    default_code = 'invalid_input'


class NotFoundError(DomainError):
    """A referenced circle, event, participant or user does not exist."""
    status_code = 404
    default_detail = 'Not found.'
    default_code = 'not_found'


class NotMemberError(DomainError):
    """The user is not an active member of the circle."""
    status_code = 403
    default_detail = 'You must be a member of this circle.'
    default_code = 'not_member'


class ForbiddenError(DomainError):
    """The caller is not allowed to perform this action."""
    status_code = 403
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'


class AlreadyMemberError(DomainError):
    """The user is already an active member of the circle."""
    status_code = 409
    default_detail = 'Already a member of this circle.'
    default_code = 'already_member'


class ConflictError(DomainError):
    """A concurrent mutation was detected."""
    status_code = 409
    default_detail = 'The resource was modified concurrently.'
    default_code = 'conflict'
