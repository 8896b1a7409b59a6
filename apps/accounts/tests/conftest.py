import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.circles.models import Circle, CircleMembership


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(id='U-test', display_name='Test User')


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(id='U-other', display_name='Other User')


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as test user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def primary_circle(user):
    """Circle that is the test user's primary."""
    circle = Circle.objects.create(name='Tennis', created_by=user)
    CircleMembership.objects.create(user=user, circle=circle)
    user.primary_circle = circle
    user.save(update_fields=['primary_circle'])
    return circle
