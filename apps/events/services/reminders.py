"""Daily payment reminders."""

import logging

from django.db.models import QuerySet

from apps.events.models import EventStatus, Participant
from apps.notifications import messages, notify

logger = logging.getLogger(__name__)


def unpaid_participants() -> QuerySet:
    """Rows of confirmed events that are neither reported nor approved."""
    return (
        Participant.objects
        .filter(
            event__status=EventStatus.CONFIRMED,
            reported=False,
            approved=False,
        )
        .select_related('event')
        .order_by('event_id', 'position')
    )


def send_payment_reminders() -> int:
    """
    Remind every unpaid participant, one message per row.

    Returns:
        Number of reminders handed to the notification backend
    """
    participants = list(unpaid_participants())
    if not participants:
        logger.info("No unpaid participants")
        return 0

    logger.info("Sending reminders to %s unpaid participants", len(participants))

    sent = 0
    for participant in participants:
        text = messages.payment_reminder(
            event_name=participant.event.name,
            amount=participant.event.split_amount,
        )
        if notify(participant.user_id, text):
            sent += 1

    logger.info("Reminders sent: %s/%s", sent, len(participants))
    return sent
