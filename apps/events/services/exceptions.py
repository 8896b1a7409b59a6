"""
Domain-specific exceptions for events app.

Each one specializes a class of the shared taxonomy, so views can let
them propagate and DRF renders the matching HTTP response.
"""

from apps.common.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    NotMemberError,
)


class EventNotFoundError(NotFoundError):
    """Raised when an event does not exist."""
    default_detail = 'Event not found.'
    default_code = 'event_not_found'


class ParticipantNotFoundError(NotFoundError):
    """Raised when a participant row does not exist."""
    default_detail = 'Participant not found.'
    default_code = 'participant_not_found'


class InvalidEventError(InvalidInputError):
    """Raised when event data is malformed."""
    default_detail = 'Invalid event data.'
    default_code = 'invalid_event'


class InvalidStateTransitionError(InvalidInputError):
    """Raised when an event is not in the state an operation requires."""
    default_detail = 'Invalid state transition for event.'
    default_code = 'invalid_state_transition'


class EmptyApprovalError(InvalidInputError):
    """Raised when approve is called without participant ids."""
    default_detail = 'At least one participant id is required.'
    default_code = 'empty_approval'


class ParticipantNotInCircleError(NotMemberError):
    """Raised when the creator or a participant is not an active circle member."""
    pass


class NotEventOrganizerError(ForbiddenError):
    """Raised when a non-organizer tries an organizer-only action."""
    default_detail = 'Only the event organizer can do this.'
    default_code = 'not_event_organizer'
