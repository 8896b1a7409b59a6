"""
Service layer unit tests for events app.

Tests cover:
- Event creation, validation and the floor split
- Draft confirmation and payment reports
- Approval queue, completion and idempotent approval
- Notifications sent only after commit
- Payment reminders
"""

import pytest
from io import StringIO
from unittest.mock import patch
from django.core.management import call_command

from apps.circles.services import CircleNotFoundError, leave_circle
from apps.events.models import Event, EventStatus, Participant
from apps.events.services import (
    create_event,
    confirm_event,
    report_payment,
    get_event,
    get_event_summary,
    list_events_for_user,
    list_unpaid_events_for_user,
    list_pending,
    approve,
    send_payment_reminders,
)
from apps.events.services.exceptions import (
    EventNotFoundError,
    ParticipantNotFoundError,
    InvalidEventError,
    InvalidStateTransitionError,
    EmptyApprovalError,
    ParticipantNotInCircleError,
    NotEventOrganizerError,
)


def _row(event, user):
    return Participant.objects.get(event=event, user=user)


def _recipients(outbox):
    return [user_id for user_id, _ in outbox]


# =============================================================================
# Event Ledger Service Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateEvent:
    """Tests for create_event."""

    def test_create_event_splits_with_floor(self, circle, organizer, bob, carol):
        """10000 split three ways is 3333 each; the remainder is dropped."""
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Dinner',
            total_amount=10000,
            participant_ids=[organizer.id, bob.id, carol.id],
        )

        assert event.split_amount == 3333
        assert event.status == EventStatus.CONFIRMED
        rows = list(event.participants.order_by('position'))
        assert [r.user_id for r in rows] == [organizer.id, bob.id, carol.id]
        assert all(not r.reported and not r.approved for r in rows)

    @pytest.mark.parametrize('total,count,expected', [
        (10000, 3, 3333),
        (100, 2, 50),
        (1, 2, 0),
        (7, 1, 7),
    ])
    def test_split_is_floor_of_total(self, circle, organizer, bob, carol, total, count, expected):
        ids = [organizer.id, bob.id, carol.id][:count]
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Split',
            total_amount=total,
            participant_ids=ids,
        )

        assert event.split_amount == expected
        assert event.split_amount * count <= total

    def test_organizer_need_not_participate(self, circle, organizer, bob):
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Court fee',
            total_amount=3000,
            participant_ids=[bob.id],
        )

        assert event.organizer_id == organizer.id
        assert list(event.participants.values_list('user_id', flat=True)) == [bob.id]

    def test_participants_notified_after_commit(
        self, circle, organizer, bob, carol, outbox, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=10000,
                participant_ids=[organizer.id, bob.id, carol.id],
            )

        assert _recipients(outbox) == [organizer.id, bob.id, carol.id]
        assert 'Dinner' in outbox[0][1]
        assert '3,333' in outbox[0][1]

    def test_nothing_sent_before_commit(self, circle, organizer, bob, outbox, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=1000,
                participant_ids=[bob.id],
            )

        assert len(callbacks) == 1
        assert outbox == []

    def test_draft_starts_selecting_and_notifies_nobody(
        self, circle, organizer, bob, outbox, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            event = create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name='Camp',
                total_amount=9000,
                participant_ids=[bob.id],
                draft=True,
            )

        assert event.status == EventStatus.SELECTING
        assert outbox == []

    @pytest.mark.parametrize('name', ['', '   ', None])
    def test_blank_name_rejected(self, circle, organizer, bob, name):
        with pytest.raises(InvalidEventError):
            create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name=name,
                total_amount=1000,
                participant_ids=[bob.id],
            )

    @pytest.mark.parametrize('total', [0, -5, 10.5, '1000', True, None])
    def test_non_positive_or_non_integer_total_rejected(self, circle, organizer, bob, total):
        with pytest.raises(InvalidEventError):
            create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=total,
                participant_ids=[bob.id],
            )

        assert Event.objects.count() == 0

    def test_empty_participants_rejected(self, circle, organizer):
        with pytest.raises(InvalidEventError):
            create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=1000,
                participant_ids=[],
            )

    def test_duplicate_participants_rejected(self, circle, organizer, bob):
        with pytest.raises(InvalidEventError):
            create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=1000,
                participant_ids=[bob.id, bob.id],
            )

    def test_missing_circle(self, organizer, bob):
        with pytest.raises(CircleNotFoundError):
            create_event(
                circle_id=999999,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=1000,
                participant_ids=[bob.id],
            )

    def test_creator_must_be_member(self, circle, outsider, bob):
        with pytest.raises(ParticipantNotInCircleError):
            create_event(
                circle_id=circle.id,
                creator_id=outsider.id,
                name='Dinner',
                total_amount=1000,
                participant_ids=[bob.id],
            )

    def test_participants_must_be_members(
        self, circle, organizer, bob, outsider, outbox, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(ParticipantNotInCircleError):
                create_event(
                    circle_id=circle.id,
                    creator_id=organizer.id,
                    name='Dinner',
                    total_amount=1000,
                    participant_ids=[bob.id, outsider.id],
                )

        assert Event.objects.count() == 0
        assert outbox == []

    def test_former_member_cannot_participate(self, circle, organizer, bob):
        leave_circle(user_id=bob.id, circle_id=circle.id)

        with pytest.raises(ParticipantNotInCircleError):
            create_event(
                circle_id=circle.id,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=1000,
                participant_ids=[bob.id],
            )


@pytest.mark.django_db
class TestConfirmEvent:
    """Tests for confirm_event."""

    def test_confirm_draft(self, circle, organizer, bob, outbox, django_capture_on_commit_callbacks):
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Camp',
            total_amount=9000,
            participant_ids=[bob.id],
            draft=True,
        )

        with django_capture_on_commit_callbacks(execute=True):
            confirmed = confirm_event(event_id=event.id, organizer_id=organizer.id)

        assert confirmed.status == EventStatus.CONFIRMED
        assert _recipients(outbox) == [bob.id]

    def test_confirm_by_non_organizer(self, circle, organizer, bob):
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Camp',
            total_amount=9000,
            participant_ids=[bob.id],
            draft=True,
        )

        with pytest.raises(NotEventOrganizerError):
            confirm_event(event_id=event.id, organizer_id=bob.id)

    def test_confirm_already_confirmed(self, event, organizer):
        with pytest.raises(InvalidStateTransitionError):
            confirm_event(event_id=event.id, organizer_id=organizer.id)

    def test_confirm_missing_event(self, organizer):
        with pytest.raises(EventNotFoundError):
            confirm_event(event_id=999999, organizer_id=organizer.id)


@pytest.mark.django_db
class TestReportPayment:
    """Tests for report_payment."""

    def test_report_sets_flag_and_timestamp(self, event, bob):
        participant = report_payment(event_id=event.id, user_id=bob.id)

        assert participant.reported is True
        assert participant.reported_at is not None
        assert participant.approved is False

    def test_report_twice_is_noop(self, event, bob):
        first = report_payment(event_id=event.id, user_id=bob.id)
        second = report_payment(event_id=event.id, user_id=bob.id)

        assert second.id == first.id
        assert second.reported_at == first.reported_at

    def test_report_by_non_participant(self, event, outsider):
        with pytest.raises(ParticipantNotFoundError):
            report_payment(event_id=event.id, user_id=outsider.id)

    def test_report_missing_event(self, bob):
        with pytest.raises(ParticipantNotFoundError):
            report_payment(event_id=999999, user_id=bob.id)

    def test_report_on_draft_rejected(self, circle, organizer, bob):
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Camp',
            total_amount=9000,
            participant_ids=[bob.id],
            draft=True,
        )

        with pytest.raises(InvalidStateTransitionError):
            report_payment(event_id=event.id, user_id=bob.id)


@pytest.mark.django_db
class TestEventQueries:
    """Tests for read-side event functions."""

    def test_get_event_missing(self, db):
        with pytest.raises(EventNotFoundError):
            get_event(event_id=999999)

    def test_list_events_for_organizer_and_participant(self, circle, organizer, bob, carol):
        first = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Court fee',
            total_amount=3000,
            participant_ids=[bob.id],
        )
        second = create_event(
            circle_id=circle.id,
            creator_id=bob.id,
            name='Balls',
            total_amount=1200,
            participant_ids=[carol.id],
        )

        assert list_events_for_user(user_id=organizer.id) == [first]
        assert list_events_for_user(user_id=bob.id) == [second, first]
        assert list_events_for_user(user_id=carol.id) == [second]

    def test_list_unpaid_events(self, event, bob, carol):
        report_payment(event_id=event.id, user_id=bob.id)

        assert list_unpaid_events_for_user(user_id=bob.id) == []
        assert list_unpaid_events_for_user(user_id=carol.id) == [event]

    def test_summary_counts(self, reported_event, organizer, bob):
        approve(organizer_id=organizer.id, participant_row_ids=[_row(reported_event, bob).id])

        summary = get_event_summary(event_id=reported_event.id)

        assert summary['participant_count'] == 3
        assert summary['reported_count'] == 2
        assert summary['approved_count'] == 1
        assert summary['collected_amount'] == 3333
        assert summary['outstanding_amount'] == 6666


# =============================================================================
# Approval Queue Service Tests
# =============================================================================

@pytest.mark.django_db
class TestListPending:
    """Tests for list_pending."""

    def test_pending_rows_in_report_order(self, reported_event, organizer, bob, carol):
        pending = list_pending(organizer_id=organizer.id)

        assert [p.user_id for p in pending] == [bob.id, carol.id]
        first = pending[0]
        assert first.participant_row_id == _row(reported_event, bob).id
        assert first.event_id == reported_event.id
        assert first.event_name == 'Dinner'
        assert first.circle_name == 'Tennis'
        assert first.participant_name == 'Bob'
        assert first.amount == 3333
        assert first.reported_at is not None

    def test_pending_excludes_unreported_and_approved(self, reported_event, organizer, bob, carol):
        approve(organizer_id=organizer.id, participant_row_ids=[_row(reported_event, bob).id])

        pending = list_pending(organizer_id=organizer.id)

        assert [p.user_id for p in pending] == [carol.id]

    def test_pending_only_for_own_events(self, reported_event, bob):
        assert list_pending(organizer_id=bob.id) == []


@pytest.mark.django_db
class TestApprove:
    """Tests for approve."""

    def test_approve_counts_new_rows(self, reported_event, organizer, bob, carol):
        ids = [_row(reported_event, bob).id, _row(reported_event, carol).id]

        assert approve(organizer_id=organizer.id, participant_row_ids=ids) == 2

        assert all(_row(reported_event, u).approved for u in (bob, carol))
        assert _row(reported_event, bob).approved_at is not None

    def test_approve_is_idempotent(self, reported_event, organizer, bob, outbox, django_capture_on_commit_callbacks):
        row_id = _row(reported_event, bob).id

        with django_capture_on_commit_callbacks(execute=True):
            assert approve(organizer_id=organizer.id, participant_row_ids=[row_id]) == 1
        with django_capture_on_commit_callbacks(execute=True):
            assert approve(organizer_id=organizer.id, participant_row_ids=[row_id]) == 0

        assert _recipients(outbox) == [bob.id]

    def test_partial_approval_keeps_event_confirmed(self, reported_event, organizer, bob, carol):
        approve(
            organizer_id=organizer.id,
            participant_row_ids=[_row(reported_event, bob).id, _row(reported_event, carol).id],
        )

        reported_event.refresh_from_db()
        assert reported_event.status == EventStatus.CONFIRMED
        assert reported_event.completed_at is None

    def test_completion_when_all_approved(
        self, reported_event, organizer, bob, carol, outbox, django_capture_on_commit_callbacks
    ):
        """Approving the last row (even unreported) completes the event once."""
        ids = list(reported_event.participants.values_list('id', flat=True))

        with django_capture_on_commit_callbacks(execute=True):
            assert approve(organizer_id=organizer.id, participant_row_ids=ids) == 3

        reported_event.refresh_from_db()
        assert reported_event.status == EventStatus.COMPLETED
        assert reported_event.completed_at is not None

        completion = [m for uid, m in outbox if 'Event completed' in m]
        assert len(completion) == 1
        assert sorted(_recipients(outbox)) == sorted([organizer.id, organizer.id, bob.id, carol.id])

    def test_completion_fires_once(self, reported_event, organizer, outbox, django_capture_on_commit_callbacks):
        ids = list(reported_event.participants.values_list('id', flat=True))
        approve(organizer_id=organizer.id, participant_row_ids=ids)
        reported_event.refresh_from_db()
        completed_at = reported_event.completed_at

        with django_capture_on_commit_callbacks(execute=True):
            assert approve(organizer_id=organizer.id, participant_row_ids=ids) == 0

        reported_event.refresh_from_db()
        assert reported_event.completed_at == completed_at
        assert outbox == []

    def test_approve_empty_rejected(self, organizer):
        with pytest.raises(EmptyApprovalError):
            approve(organizer_id=organizer.id, participant_row_ids=[])

    def test_unknown_id_rejects_whole_batch(self, reported_event, organizer, bob):
        with pytest.raises(ParticipantNotFoundError):
            approve(
                organizer_id=organizer.id,
                participant_row_ids=[_row(reported_event, bob).id, 999999],
            )

        assert not _row(reported_event, bob).approved

    def test_foreign_row_rejects_whole_batch(self, reported_event, circle, organizer, bob, carol):
        other = create_event(
            circle_id=circle.id,
            creator_id=bob.id,
            name='Balls',
            total_amount=1200,
            participant_ids=[carol.id],
        )

        with pytest.raises(NotEventOrganizerError):
            approve(
                organizer_id=organizer.id,
                participant_row_ids=[_row(reported_event, bob).id, _row(other, carol).id],
            )

        assert not _row(reported_event, bob).approved
        assert not _row(other, carol).approved

    def test_approve_across_events(self, reported_event, circle, organizer, bob, carol):
        other = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Court fee',
            total_amount=3000,
            participant_ids=[bob.id],
        )
        report_payment(event_id=other.id, user_id=bob.id)

        count = approve(
            organizer_id=organizer.id,
            participant_row_ids=[_row(other, bob).id, _row(reported_event, carol).id],
        )

        assert count == 2
        other.refresh_from_db()
        assert other.status == EventStatus.COMPLETED
        reported_event.refresh_from_db()
        assert reported_event.status == EventStatus.CONFIRMED

    def test_approving_draft_rows_rejected(self, circle, organizer, bob):
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Camp',
            total_amount=9000,
            participant_ids=[bob.id],
            draft=True,
        )

        with pytest.raises(InvalidStateTransitionError):
            approve(organizer_id=organizer.id, participant_row_ids=[_row(event, bob).id])

        assert _row(event, bob).approved is False
        event.refresh_from_db()
        assert event.status == EventStatus.SELECTING

    def test_draft_confirmed_then_approved_completes(self, circle, organizer, bob):
        event = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Camp',
            total_amount=9000,
            participant_ids=[bob.id],
            draft=True,
        )
        row = _row(event, bob)

        with pytest.raises(InvalidStateTransitionError):
            approve(organizer_id=organizer.id, participant_row_ids=[row.id])
        confirm_event(event_id=event.id, organizer_id=organizer.id)
        approve(organizer_id=organizer.id, participant_row_ids=[row.id])

        event.refresh_from_db()
        assert event.status == EventStatus.COMPLETED
        assert not event.participants.filter(approved=False).exists()


@pytest.mark.django_db
class TestTennisScenario:
    """Full walk through a circle's shared dinner."""

    def test_dinner_from_creation_to_completion(
        self, organizer, bob, carol, outbox, django_capture_on_commit_callbacks
    ):
        from apps.circles.services import create_circle, join_circle

        tennis = create_circle(creator_id=organizer.id, name='Tennis')
        join_circle(user_id=bob.id, circle_id=tennis.id)
        join_circle(user_id=carol.id, circle_id=tennis.id)

        with django_capture_on_commit_callbacks(execute=True):
            event = create_event(
                circle_id=tennis.id,
                creator_id=organizer.id,
                name='Dinner',
                total_amount=10000,
                participant_ids=[organizer.id, bob.id, carol.id],
            )
        assert event.split_amount == 3333
        assert len(outbox) == 3

        report_payment(event_id=event.id, user_id=bob.id)
        report_payment(event_id=event.id, user_id=carol.id)
        pending = list_pending(organizer_id=organizer.id)
        assert [p.participant_name for p in pending] == ['Bob', 'Carol']

        approve(
            organizer_id=organizer.id,
            participant_row_ids=[p.participant_row_id for p in pending],
        )
        event.refresh_from_db()
        assert event.status == EventStatus.CONFIRMED

        approve(organizer_id=organizer.id, participant_row_ids=[_row(event, organizer).id])
        event.refresh_from_db()
        assert event.status == EventStatus.COMPLETED
        assert list_pending(organizer_id=organizer.id) == []


# =============================================================================
# Reminder Tests
# =============================================================================

@pytest.mark.django_db
class TestPaymentReminders:
    """Tests for send_payment_reminders and its management command."""

    def test_reminds_unreported_rows_of_confirmed_events(self, event, organizer, bob, carol, outbox):
        report_payment(event_id=event.id, user_id=bob.id)

        sent = send_payment_reminders()

        assert sent == 2
        assert sorted(_recipients(outbox)) == sorted([organizer.id, carol.id])
        assert 'Dinner' in outbox[0][1]

    def test_skips_drafts_and_completed(self, circle, organizer, bob, outbox):
        create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Camp',
            total_amount=9000,
            participant_ids=[bob.id],
            draft=True,
        )
        done = create_event(
            circle_id=circle.id,
            creator_id=organizer.id,
            name='Court fee',
            total_amount=3000,
            participant_ids=[bob.id],
        )
        approve(organizer_id=organizer.id, participant_row_ids=[_row(done, bob).id])

        assert send_payment_reminders() == 0
        assert outbox == []

    def test_failed_delivery_not_counted(self, event):
        with patch(
            'apps.notifications.backends.locmem.LocMemBackend.send',
            side_effect=RuntimeError('boom'),
        ):
            assert send_payment_reminders() == 0

    def test_command_dry_run_sends_nothing(self, event, outbox):
        out = StringIO()
        call_command('send_payment_reminders', '--dry-run', stdout=out)

        assert 'Found 3 unpaid participant(s)' in out.getvalue()
        assert 'dry-run' in out.getvalue()
        assert outbox == []

    def test_command_sends(self, event, outbox):
        out = StringIO()
        call_command('send_payment_reminders', stdout=out)

        assert 'Sent 3 reminder(s).' in out.getvalue()
        assert len(outbox) == 3

    def test_command_nothing_to_do(self, db):
        out = StringIO()
        call_command('send_payment_reminders', stdout=out)

        assert 'No unpaid participants' in out.getvalue()
