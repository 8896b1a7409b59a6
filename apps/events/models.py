# ==========================================
# apps/events/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models


class EventStatus(models.TextChoices):
    SELECTING = 'selecting', 'Selecting participants'
    CONFIRMED = 'confirmed', 'Confirmed'
    COMPLETED = 'completed', 'Completed'


class Event(models.Model):
    """
    Shared expense inside a circle.

    Amounts are integers in the smallest currency unit. The split is the
    floor of total / participant count; the remainder is not tracked.
    """

    circle = models.ForeignKey('circles.Circle', on_delete=models.PROTECT, related_name='events')
    organizer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='organized_events'
    )
    name = models.CharField(max_length=200)
    total_amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    split_amount = models.PositiveIntegerField()
    status = models.CharField(max_length=20, choices=EventStatus.choices, default=EventStatus.CONFIRMED)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'events'
        indexes = [
            models.Index(fields=['organizer', 'status'], name='events_organiz_5b1f0e_idx'),
            models.Index(fields=['circle', 'created_at'], name='events_circle__7d2c44_idx'),
        ]
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.name} ({self.total_amount})"


class Participant(models.Model):
    """
    One user's share of an event.

    Rows are created together with the event and never added or removed
    afterwards. ``reported`` is the participant's claim; ``approved`` is
    the organizer's confirmation.
    """

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='participations')
    position = models.PositiveIntegerField(default=0)

    reported = models.BooleanField(default=False)
    reported_at = models.DateTimeField(null=True, blank=True)
    approved = models.BooleanField(default=False)
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'event_participants'
        unique_together = [['event', 'user']]
        indexes = [
            models.Index(fields=['user', 'reported'], name='event_parti_user_id_2e6a91_idx'),
            models.Index(fields=['event', 'approved'], name='event_parti_event_i_c83f17_idx'),
        ]
        ordering = ['event', 'position']

    def __str__(self):
        return f"{self.user_id} in {self.event_id}"

    @property
    def amount(self):
        return self.event.split_amount
