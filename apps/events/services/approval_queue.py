"""
Approval queue service.

The queue is not stored anywhere: it is the set of participant rows that
are reported but not yet approved, across every event the organizer runs.
Approving rows may complete their event, which happens exactly once under
the event row lock.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List

from django.db import transaction
from django.utils import timezone

from apps.events.models import Event, EventStatus, Participant
from apps.notifications import messages, notify_on_commit

from .exceptions import (
    EmptyApprovalError,
    InvalidStateTransitionError,
    NotEventOrganizerError,
    ParticipantNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingApproval:
    """A reported payment waiting for the organizer."""

    participant_row_id: int
    event_id: int
    event_name: str
    circle_id: int
    circle_name: str
    user_id: str
    participant_name: str
    amount: int
    reported_at: datetime


def list_pending(*, organizer_id: str) -> List[PendingApproval]:
    """Reported, unapproved rows of the organizer's events, oldest report first."""
    rows = (
        Participant.objects
        .filter(event__organizer_id=organizer_id, reported=True, approved=False)
        .select_related('event', 'event__circle', 'user')
        .order_by('reported_at', 'id')
    )
    return [
        PendingApproval(
            participant_row_id=row.id,
            event_id=row.event_id,
            event_name=row.event.name,
            circle_id=row.event.circle_id,
            circle_name=row.event.circle.name,
            user_id=row.user_id,
            participant_name=row.user.get_display_name(),
            amount=row.event.split_amount,
            reported_at=row.reported_at,
        )
        for row in rows
    ]


def _approve_event_rows(event_id: int, row_ids: List[int], organizer_name: str) -> int:
    with transaction.atomic():
        event = Event.objects.select_for_update().get(id=event_id)

        now = timezone.now()
        newly_approved = list(
            Participant.objects
            .filter(event=event, id__in=row_ids, approved=False)
            .order_by('id')
        )
        if newly_approved:
            Participant.objects.filter(
                id__in=[p.id for p in newly_approved]
            ).update(approved=True, approved_at=now)

        for participant in newly_approved:
            notify_on_commit(
                participant.user_id,
                messages.payment_approved(
                    organizer_name=organizer_name,
                    event_name=event.name,
                    amount=event.split_amount,
                ),
            )

        # Completion check runs under the event lock so it fires once
        if (
            event.status == EventStatus.CONFIRMED
            and not event.participants.filter(approved=False).exists()
        ):
            event.status = EventStatus.COMPLETED
            event.completed_at = now
            event.save(update_fields=['status', 'completed_at', 'updated_at'])

            notify_on_commit(
                event.organizer_id,
                messages.event_completed(
                    event_name=event.name,
                    participant_count=event.participants.count(),
                ),
            )
            logger.info("Event completed: id=%s", event.id)

    if newly_approved:
        logger.info(
            "Payments approved: event=%s, rows=%s",
            event_id, [p.id for p in newly_approved]
        )
    return len(newly_approved)


def approve(*, organizer_id: str, participant_row_ids: Iterable[int]) -> int:
    """
    Approve reported payments.

    Every id is validated before anything is written. Rows are then
    approved one event at a time, in ascending event id order, each in
    its own transaction. Already-approved rows are skipped and neither
    counted nor notified again. Unreported rows may be approved; rows of
    a draft event may not.

    Args:
        organizer_id: Id of the approving organizer
        participant_row_ids: Participant row ids to approve

    Returns:
        Number of rows that were newly approved

    Raises:
        EmptyApprovalError: If no ids are given
        ParticipantNotFoundError: If an id doesn't exist
        NotEventOrganizerError: If a row belongs to someone else's event
        InvalidStateTransitionError: If a row belongs to an event that is
            still selecting participants
    """
    row_ids = sorted(set(participant_row_ids or []))
    if not row_ids:
        raise EmptyApprovalError()

    rows = list(
        Participant.objects
        .filter(id__in=row_ids)
        .select_related('event', 'event__organizer')
    )

    missing = set(row_ids) - {row.id for row in rows}
    if missing:
        raise ParticipantNotFoundError(
            f"Participant rows not found: {', '.join(str(i) for i in sorted(missing))}"
        )

    if any(row.event.organizer_id != organizer_id for row in rows):
        raise NotEventOrganizerError('You can only approve payments of your own events.')

    if any(row.event.status == EventStatus.SELECTING for row in rows):
        raise InvalidStateTransitionError('Payments cannot be approved before the event is confirmed.')

    by_event = {}
    for row in rows:
        by_event.setdefault(row.event_id, []).append(row.id)

    organizer_name = rows[0].event.organizer.get_display_name()

    approved_count = 0
    for event_id in sorted(by_event):
        approved_count += _approve_event_rows(event_id, by_event[event_id], organizer_name)

    return approved_count
