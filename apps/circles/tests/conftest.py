import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.circles.models import Circle, CircleMembership, MembershipStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def circle_creator(db):
    """Create and return the user who owns the test circle."""
    return User.objects.create_user(id='U-creator', display_name='Alice')


@pytest.fixture
def member_user(db):
    """Create and return a regular member."""
    return User.objects.create_user(id='U-member', display_name='Bob')


@pytest.fixture
def outsider_user(db):
    """Create and return a user not in any circle."""
    return User.objects.create_user(id='U-outsider', display_name='Carol')


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def creator_client(circle_creator):
    """Return API client authenticated as the circle creator."""
    return _client_for(circle_creator)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as a circle member."""
    return _client_for(member_user)


@pytest.fixture
def outsider_client(outsider_user):
    """Return API client authenticated as a non-member."""
    return _client_for(outsider_user)


@pytest.fixture
def circle(db, circle_creator):
    """Create and return a circle with its creator as the only member."""
    circle = Circle.objects.create(name='Tennis', created_by=circle_creator)
    CircleMembership.objects.create(
        user=circle_creator,
        circle=circle,
        status=MembershipStatus.ACTIVE,
    )
    return circle


@pytest.fixture
def circle_with_member(circle, member_user):
    """Circle with creator and one member."""
    CircleMembership.objects.create(
        user=member_user,
        circle=circle,
        status=MembershipStatus.ACTIVE,
    )
    return circle
