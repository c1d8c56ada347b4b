import pytest
from datetime import timedelta
from django.utils import timezone
from apps.accounts.models import User
from apps.parties.models import Party, PartyParticipant


@pytest.fixture
def host(db):
    return User.objects.create_user(
        email='host@example.com',
        password='TestPass123!',
        name='Host',
        push_token='token-host',
    )


@pytest.fixture
def friend(db):
    return User.objects.create_user(
        email='friend@example.com',
        password='TestPass123!',
        name='Friend',
        push_token='token-friend',
    )


@pytest.fixture
def silent_friend(db):
    """Participant without a registered device."""
    return User.objects.create_user(
        email='silent@example.com',
        password='TestPass123!',
        name='Silent',
    )


@pytest.fixture
def party(db, host, friend, silent_friend):
    """Party with the host and two friends."""
    party = Party.objects.create(
        name='Barbecue',
        date=timezone.now() + timedelta(days=3),
        location='Garden',
        creator=host,
    )
    for user in (host, friend, silent_friend):
        PartyParticipant.objects.create(party=party, user=user)
    return party
