"""
Events app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks on the
event (or circle) they touch.
"""

from .exceptions import (
    EventNotFoundError,
    ParticipantNotFoundError,
    InvalidEventError,
    InvalidStateTransitionError,
    EmptyApprovalError,
    ParticipantNotInCircleError,
    NotEventOrganizerError,
)

from .event_ledger import (
    create_event,
    confirm_event,
    report_payment,
    get_event,
    get_event_summary,
    list_events_for_user,
    list_unpaid_events_for_user,
)

from .approval_queue import (
    PendingApproval,
    list_pending,
    approve,
)

from .reminders import (
    send_payment_reminders,
)


__all__ = [
    # Exceptions
    'EventNotFoundError',
    'ParticipantNotFoundError',
    'InvalidEventError',
    'InvalidStateTransitionError',
    'EmptyApprovalError',
    'ParticipantNotInCircleError',
    'NotEventOrganizerError',

    # Event Ledger
    'create_event',
    'confirm_event',
    'report_payment',
    'get_event',
    'get_event_summary',
    'list_events_for_user',
    'list_unpaid_events_for_user',

    # Approval Queue
    'PendingApproval',
    'list_pending',
    'approve',

    # Reminders
    'send_payment_reminders',
]
