"""
Event ledger service.

Creates shared-expense events, records payment reports and answers
read-side questions about events. Amounts are integers in the smallest
currency unit; every participant owes ``total_amount // participant_count``
and the remainder is not tracked.

Lifecycle: selecting -> confirmed -> completed. Completion happens in the
approval queue; this module only moves events out of ``selecting``.
"""

import logging
from typing import List, Sequence

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.circles.models import Circle, CircleMembership, MembershipStatus
from apps.circles.services import CircleNotFoundError
from apps.events.models import Event, EventStatus, Participant
from apps.notifications import messages, notify_on_commit

from .exceptions import (
    EventNotFoundError,
    InvalidEventError,
    InvalidStateTransitionError,
    NotEventOrganizerError,
    ParticipantNotFoundError,
    ParticipantNotInCircleError,
)

logger = logging.getLogger(__name__)


def _validate_event_input(name, total_amount, participant_ids):
    name = (name or '').strip()
    if not name:
        raise InvalidEventError('Event name cannot be empty.')

    if isinstance(total_amount, bool) or not isinstance(total_amount, int) or total_amount <= 0:
        raise InvalidEventError('Total amount must be a positive integer.')

    participant_ids = list(participant_ids or [])
    if not participant_ids:
        raise InvalidEventError('At least one participant is required.')
    if len(set(participant_ids)) != len(participant_ids):
        raise InvalidEventError('Participants must not repeat.')

    return name, participant_ids


def _notify_participants(event: Event, participant_ids: Sequence[str]) -> None:
    text = messages.event_created(
        organizer_name=event.organizer.get_display_name(),
        event_name=event.name,
        amount=event.split_amount,
    )
    for user_id in participant_ids:
        notify_on_commit(user_id, text)


def create_event(
    *,
    circle_id: int,
    creator_id: str,
    name: str,
    total_amount: int,
    participant_ids: Sequence[str],
    draft: bool = False
) -> Event:
    """
    Create an event and one participant row per id, in the given order.

    The creator becomes the organizer. The creator does not have to be a
    participant, but both the creator and every participant must be
    active members of the circle.

    Args:
        circle_id: Circle the event belongs to
        creator_id: Id of the organizer
        name: Event name, surrounding whitespace is stripped
        total_amount: Positive integer amount
        participant_ids: Ordered, non-empty, duplicate-free user ids
        draft: Start in ``selecting`` and notify nobody until confirmed

    Returns:
        Created Event instance

    Raises:
        InvalidEventError: If name, amount or participants are malformed
        CircleNotFoundError: If circle doesn't exist
        ParticipantNotInCircleError: If creator or a participant isn't a member

    Note:
        Participants are notified after the transaction commits.
    """
    name, participant_ids = _validate_event_input(name, total_amount, participant_ids)

    with transaction.atomic():
        # Lock the circle so membership can't change under the check
        try:
            circle = Circle.objects.select_for_update().get(id=circle_id)
        except Circle.DoesNotExist:
            raise CircleNotFoundError(f"Circle with ID {circle_id} not found")

        active_ids = set(
            CircleMembership.objects.filter(
                circle=circle,
                status=MembershipStatus.ACTIVE,
                user_id__in=[creator_id, *participant_ids],
            ).values_list('user_id', flat=True)
        )

        if creator_id not in active_ids:
            raise ParticipantNotInCircleError(f"User is not a member of {circle.name}")

        outsiders = [uid for uid in participant_ids if uid not in active_ids]
        if outsiders:
            raise ParticipantNotInCircleError(
                f"Not members of {circle.name}: {', '.join(outsiders)}"
            )

        event = Event.objects.create(
            circle=circle,
            organizer_id=creator_id,
            name=name,
            total_amount=total_amount,
            split_amount=total_amount // len(participant_ids),
            status=EventStatus.SELECTING if draft else EventStatus.CONFIRMED,
        )

        Participant.objects.bulk_create([
            Participant(event=event, user_id=user_id, position=position)
            for position, user_id in enumerate(participant_ids)
        ])

        if not draft:
            _notify_participants(event, participant_ids)

    logger.info(
        "Event created: %s (id=%s, circle=%s, total=%s, split=%s, participants=%s, status=%s)",
        event.name, event.id, circle.id, event.total_amount, event.split_amount,
        len(participant_ids), event.status
    )
    return event


@transaction.atomic
def confirm_event(*, event_id: int, organizer_id: str) -> Event:
    """
    Move a draft event from ``selecting`` to ``confirmed``.

    Every participant is notified after commit.

    Raises:
        EventNotFoundError: If event doesn't exist
        NotEventOrganizerError: If caller isn't the organizer
        InvalidStateTransitionError: If event is not selecting
    """
    try:
        event = Event.objects.select_for_update().get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")

    if event.organizer_id != organizer_id:
        raise NotEventOrganizerError()

    if event.status != EventStatus.SELECTING:
        raise InvalidStateTransitionError(f"Event is already {event.status}")

    event.status = EventStatus.CONFIRMED
    event.save(update_fields=['status', 'updated_at'])

    participant_ids = list(event.participants.order_by('position').values_list('user_id', flat=True))
    _notify_participants(event, participant_ids)

    logger.info("Event confirmed: id=%s", event.id)
    return event


@transaction.atomic
def report_payment(*, event_id: int, user_id: str) -> Participant:
    """
    Record a participant's claim that they paid.

    Reporting twice is a no-op: the first ``reported_at`` is kept.

    Raises:
        ParticipantNotFoundError: If the user isn't a participant of the event
        InvalidStateTransitionError: If the event is still selecting
    """
    # Event row lock serializes with approve on the same event
    event = Event.objects.select_for_update().filter(id=event_id).first()
    participant = None
    if event is not None:
        participant = Participant.objects.filter(event=event, user_id=user_id).first()
    if participant is None:
        raise ParticipantNotFoundError(
            f"User {user_id} is not a participant of event {event_id}"
        )

    if event.status == EventStatus.SELECTING:
        raise InvalidStateTransitionError('Event is not confirmed yet.')

    if participant.reported:
        return participant

    participant.reported = True
    participant.reported_at = timezone.now()
    participant.save(update_fields=['reported', 'reported_at'])

    logger.info("Payment reported: event=%s, user=%s", event.id, user_id)
    return participant


def get_event(*, event_id: int) -> Event:
    """
    Get an event by ID.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    try:
        return Event.objects.select_related('circle', 'organizer').get(id=event_id)
    except Event.DoesNotExist:
        raise EventNotFoundError(f"Event with ID {event_id} not found")


def list_events_for_user(*, user_id: str) -> List[Event]:
    """Events the user organizes or participates in, newest first."""
    return list(
        Event.objects
        .filter(Q(organizer_id=user_id) | Q(participants__user_id=user_id))
        .select_related('circle', 'organizer')
        .distinct()
        .order_by('-created_at', '-id')
    )


def list_unpaid_events_for_user(*, user_id: str) -> List[Event]:
    """Confirmed events where the user has not reported a payment yet."""
    return list(
        Event.objects
        .filter(
            status=EventStatus.CONFIRMED,
            participants__user_id=user_id,
            participants__reported=False,
            participants__approved=False,
        )
        .select_related('circle', 'organizer')
        .distinct()
        .order_by('-created_at', '-id')
    )


def get_event_summary(*, event_id: int) -> dict:
    """
    Get a summary of an event and its payment progress.

    Returns:
        dict: A dictionary containing:
            - event (Event): The event object.
            - total_amount (int): Total amount of the event.
            - split_amount (int): Amount owed by each participant.
            - participant_count (int): Number of participant rows.
            - reported_count (int): Rows reported by participants.
            - approved_count (int): Rows approved by the organizer.
            - collected_amount (int): split_amount * approved_count.
            - outstanding_amount (int): split_amount * unapproved rows.
            - participants (list[Participant]): Rows in creation order.

    Raises:
        EventNotFoundError: If event doesn't exist
    """
    event = get_event(event_id=event_id)
    participants = list(event.participants.select_related('user').order_by('position'))

    approved_count = sum(1 for p in participants if p.approved)
    reported_count = sum(1 for p in participants if p.reported)

    return {
        'event': event,
        'total_amount': event.total_amount,
        'split_amount': event.split_amount,
        'participant_count': len(participants),
        'reported_count': reported_count,
        'approved_count': approved_count,
        'collected_amount': event.split_amount * approved_count,
        'outstanding_amount': event.split_amount * (len(participants) - approved_count),
        'participants': participants,
    }
