import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps import notifications
from apps.accounts.models import User
from apps.circles.models import Circle, CircleMembership, MembershipStatus
from apps.events.models import Event, EventStatus, Participant


@pytest.fixture(autouse=True)
def outbox():
    """Empty locmem notification outbox for every test."""
    notifications.outbox.clear()
    yield notifications.outbox
    notifications.outbox.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def organizer(db):
    """Create and return the event organizer."""
    return User.objects.create_user(id='U-alice', display_name='Alice')


@pytest.fixture
def bob(db):
    return User.objects.create_user(id='U-bob', display_name='Bob')


@pytest.fixture
def carol(db):
    return User.objects.create_user(id='U-carol', display_name='Carol')


@pytest.fixture
def outsider(db):
    """Create and return a user outside the circle."""
    return User.objects.create_user(id='U-dave', display_name='Dave')


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def organizer_client(organizer):
    """Return API client authenticated as the organizer."""
    return _client_for(organizer)


@pytest.fixture
def bob_client(bob):
    """Return API client authenticated as a participant."""
    return _client_for(bob)


@pytest.fixture
def outsider_client(outsider):
    """Return API client authenticated as a non-member."""
    return _client_for(outsider)


@pytest.fixture
def circle(db, organizer, bob, carol):
    """Circle 'Tennis' with Alice (creator), Bob and Carol."""
    circle = Circle.objects.create(name='Tennis', created_by=organizer)
    for user in (organizer, bob, carol):
        CircleMembership.objects.create(
            user=user,
            circle=circle,
            status=MembershipStatus.ACTIVE,
        )
    User.objects.filter(id__in=[organizer.id, bob.id, carol.id]).update(primary_circle=circle)
    return circle


@pytest.fixture
def event(circle, organizer, bob, carol):
    """Confirmed event 'Dinner' of 10000 split between all three members."""
    event = Event.objects.create(
        circle=circle,
        organizer=organizer,
        name='Dinner',
        total_amount=10000,
        split_amount=3333,
        status=EventStatus.CONFIRMED,
    )
    for position, user in enumerate((organizer, bob, carol)):
        Participant.objects.create(event=event, user=user, position=position)
    return event


@pytest.fixture
def reported_event(event):
    """Dinner event where Bob and Carol reported their payments."""
    for participant in event.participants.exclude(user_id=event.organizer_id).order_by('position'):
        participant.reported = True
        participant.reported_at = timezone.now()
        participant.save()
    return event
