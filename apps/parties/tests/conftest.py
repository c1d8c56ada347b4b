import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.parties.models import Party, PartyParticipant, PartyItem, ItemCategory


def client_for(user):
    """Return an API client authenticated as user using JWT."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def next_week():
    return timezone.now() + timedelta(days=7)


@pytest.fixture
def creator(db):
    """Create and return the party creator."""
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        name='Alice',
        push_token='token-alice',
    )


@pytest.fixture
def guest(db):
    """Create and return a user invited to the party."""
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        name='Bob',
        push_token='token-bob',
    )


@pytest.fixture
def outsider(db):
    """Create and return a user not in any party."""
    return User.objects.create_user(
        email='carol@example.com',
        password='TestPass123!',
        name='Carol',
        push_token='token-carol',
    )


@pytest.fixture
def creator_client(creator):
    return client_for(creator)


@pytest.fixture
def guest_client(guest):
    return client_for(guest)


@pytest.fixture
def outsider_client(outsider):
    return client_for(outsider)


@pytest.fixture
def party(db, creator, next_week):
    """Create and return a party with the creator as participant."""
    party = Party.objects.create(
        name='Birthday',
        date=next_week,
        location='Paris',
        description='Surprise party',
        creator=creator,
    )
    PartyParticipant.objects.create(party=party, user=creator)
    return party


@pytest.fixture
def party_with_guest(party, guest):
    """Party with the creator and one guest."""
    PartyParticipant.objects.create(party=party, user=guest)
    return party


@pytest.fixture
def guest_item(party_with_guest, guest):
    """Item brought by the guest."""
    return PartyItem.objects.create(
        party=party_with_guest,
        user=guest,
        name='Cake',
        quantity=1,
        category=ItemCategory.DESSERTS,
    )


@pytest.fixture
def other_party(db, outsider, next_week):
    """A party the creator and guest are not part of."""
    party = Party.objects.create(
        name='Picnic',
        date=next_week,
        location='Lyon',
        creator=outsider,
    )
    PartyParticipant.objects.create(party=party, user=outsider)
    return party
