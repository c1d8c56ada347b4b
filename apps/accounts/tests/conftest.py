import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.parties.models import Party, PartyParticipant, PartyItem


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        name='Other User',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def user_with_parties(user, other_user):
    """
    User owning one party and attending another.

    Returns (owned_party, joined_party).
    """
    when = timezone.now() + timedelta(days=5)

    owned = Party.objects.create(name='Owned', date=when, location='Home', creator=user)
    PartyParticipant.objects.create(party=owned, user=user)
    PartyParticipant.objects.create(party=owned, user=other_user)
    PartyItem.objects.create(party=owned, user=other_user, name='Wine', quantity=2)

    joined = Party.objects.create(name='Joined', date=when, location='Away', creator=other_user)
    PartyParticipant.objects.create(party=joined, user=other_user)
    PartyParticipant.objects.create(party=joined, user=user)
    PartyItem.objects.create(party=joined, user=user, name='Chips', quantity=1)
    PartyItem.objects.create(party=joined, user=other_user, name='Soda', quantity=6)

    return owned, joined
