import pytest
from datetime import timedelta
from uuid import uuid4
from unittest.mock import patch
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.accounts.models import User
from apps.parties.models import Party, PartyParticipant, PartyItem
from .conftest import client_for


def party_url(party_id):
    return reverse('parties:party-detail', kwargs={'pk': party_id})


def participants_url(party_id):
    return reverse('parties:party-participants', kwargs={'pk': party_id})


def participant_url(party_id, user_id):
    return reverse('parties:party-participant-detail', kwargs={'pk': party_id, 'user_id': user_id})


def items_url(party_id):
    return reverse('parties:party-items', kwargs={'pk': party_id})


def item_url(party_id, item_id):
    return reverse('parties:party-item-detail', kwargs={'pk': party_id, 'item_id': item_id})


# =============================================================================
# End-to-end flow
# =============================================================================

@pytest.mark.django_db
class TestPartyFlow:
    """Create a party, invite a guest, and plan what everyone brings."""

    def test_birthday_party_flow(self, api_client, creator_client, next_week):
        """Creator sees the guest's item and both participants."""
        response = creator_client.post(reverse('parties:party-list'), {
            'name': 'Birthday',
            'date': next_week.isoformat(),
            'location': 'Paris',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        party_id = response.data['id']

        response = api_client.post(reverse('users:register'), {
            'email': 'bob@example.com',
            'password': 'Secret123',
            'name': 'Bob',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        bob_id = response.data['user']['id']
        bob_client = client_for(User.objects.get(id=bob_id))

        response = creator_client.post(participants_url(party_id), {'user_id': bob_id}, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        response = bob_client.post(items_url(party_id), {
            'name': 'Cake',
            'quantity': 1,
            'category': 'Desserts',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        response = creator_client.get(party_url(party_id))
        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['items']) == 1
        assert response.data['items'][0]['name'] == 'Cake'
        assert response.data['items'][0]['brought_by'] == 'Bob'
        assert len(response.data['participants']) == 2


# =============================================================================
# Party CRUD Tests
# =============================================================================

@pytest.mark.django_db
class TestPartyList:
    """Tests for GET /api/parties/"""

    def test_list_parties(self, guest_client, party_with_guest, other_party):
        """Only parties the user belongs to are listed."""
        response = guest_client.get(reverse('parties:party-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Birthday']

    def test_list_parties_unauthenticated(self, api_client):
        response = api_client.get(reverse('parties:party-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestPartyCreate:
    """Tests for POST /api/parties/"""

    def test_create_party(self, creator_client, creator, next_week):
        response = creator_client.post(reverse('parties:party-list'), {
            'name': 'Housewarming',
            'date': next_week.isoformat(),
            'location': 'Lille',
            'description': 'New flat',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['creator_id'] == str(creator.id)
        assert response.data['participants'][0]['name'] == 'Alice'

    def test_create_party_past_date(self, creator_client):
        """Past dates are rejected and nothing is stored."""
        response = creator_client.post(reverse('parties:party-list'), {
            'name': 'Yesterday',
            'date': (timezone.now() - timedelta(days=1)).isoformat(),
            'location': 'Lille',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Party.objects.exists()

    def test_create_party_missing_fields(self, creator_client):
        response = creator_client.post(reverse('parties:party-list'), {'name': 'No date'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'date' in response.data
        assert 'location' in response.data


@pytest.mark.django_db
class TestPartyRetrieve:
    """Tests for GET /api/parties/{id}/"""

    def test_retrieve_as_participant(self, guest_client, guest_item):
        response = guest_client.get(party_url(guest_item.party_id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['creator_name'] == 'Alice'
        assert response.data['items'][0]['category'] == 'Desserts'

    def test_retrieve_as_outsider(self, outsider_client, party):
        response = outsider_client.get(party_url(party.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_retrieve_not_found(self, creator_client):
        response = creator_client.get(party_url(uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestPartyUpdate:
    """Tests for PUT/PATCH /api/parties/{id}/"""

    def test_update_by_guest_forbidden(self, guest_client, party_with_guest):
        response = guest_client.put(party_url(party_with_guest.id), {'name': 'Mine now'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        party_with_guest.refresh_from_db()
        assert party_with_guest.name == 'Birthday'

    def test_update_by_creator_notifies_guest(
        self, creator_client, party_with_guest, django_capture_on_commit_callbacks
    ):
        """Creator updates; the guest is notified, the creator is not."""
        with patch('apps.notifications.push.send_push_notification') as mock_send:
            with django_capture_on_commit_callbacks(execute=True):
                response = creator_client.patch(
                    party_url(party_with_guest.id),
                    {'location': 'Berlin'},
                    format='json'
                )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['location'] == 'Berlin'
        assert response.data['name'] == 'Birthday'
        mock_send.assert_called_once()
        assert mock_send.call_args.args[0] == ['token-bob']

    def test_update_past_date(self, creator_client, party):
        response = creator_client.patch(
            party_url(party.id),
            {'date': (timezone.now() - timedelta(hours=1)).isoformat()},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_update_not_found(self, creator_client):
        response = creator_client.patch(party_url(uuid4()), {'name': 'Ghost'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestPartyDelete:
    """Tests for DELETE /api/parties/{id}/"""

    def test_delete_by_creator(self, creator_client, guest_item):
        party_id = guest_item.party_id

        response = creator_client.delete(party_url(party_id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Party.objects.filter(id=party_id).exists()
        assert not PartyItem.objects.filter(party_id=party_id).exists()

    def test_delete_by_guest_forbidden(self, guest_client, party_with_guest):
        response = guest_client.delete(party_url(party_with_guest.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Party.objects.filter(id=party_with_guest.id).exists()


# =============================================================================
# Participant Tests
# =============================================================================

@pytest.mark.django_db
class TestParticipants:
    """Tests for /api/parties/{id}/participants/"""

    def test_list_participants(self, guest_client, party_with_guest):
        response = guest_client.get(participants_url(party_with_guest.id))

        assert response.status_code == status.HTTP_200_OK
        assert {p['name'] for p in response.data} == {'Alice', 'Bob'}
        assert 'joined_at' in response.data[0]

    def test_list_participants_outsider(self, outsider_client, party):
        response = outsider_client.get(participants_url(party.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_add_participant(self, creator_client, party, guest):
        response = creator_client.post(participants_url(party.id), {'user_id': str(guest.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['participant']['email'] == 'bob@example.com'
        assert PartyParticipant.objects.filter(party=party, user=guest).exists()

    def test_add_participant_twice(self, creator_client, party_with_guest, guest):
        """Adding an existing participant is a conflict."""
        response = creator_client.post(
            participants_url(party_with_guest.id),
            {'user_id': str(guest.id)},
            format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert PartyParticipant.objects.filter(party=party_with_guest, user=guest).count() == 1

    def test_add_unknown_user(self, creator_client, party):
        response = creator_client.post(participants_url(party.id), {'user_id': str(uuid4())}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_add_participant_invalid_body(self, creator_client, party):
        response = creator_client.post(participants_url(party.id), {'user_id': 'nope'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_leave_party(self, guest_client, party_with_guest, guest):
        response = guest_client.delete(participant_url(party_with_guest.id, guest.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PartyParticipant.objects.filter(party=party_with_guest, user=guest).exists()

    def test_creator_removes_guest(self, creator_client, party_with_guest, guest):
        response = creator_client.delete(participant_url(party_with_guest.id, guest.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_guest_cannot_remove_creator(self, guest_client, party_with_guest, creator):
        response = guest_client.delete(participant_url(party_with_guest.id, creator.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_remove_non_participant(self, creator_client, party, outsider):
        response = creator_client.delete(participant_url(party.id, outsider.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Item Tests
# =============================================================================

@pytest.mark.django_db
class TestItems:
    """Tests for /api/parties/{id}/items/"""

    def test_add_item(self, guest_client, party_with_guest, guest):
        response = guest_client.post(items_url(party_with_guest.id), {
            'name': 'Juice',
            'quantity': 3,
            'category': 'Boissons',
            'description': 'Orange',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['brought_by'] == 'Bob'
        assert response.data['user_id'] == str(guest.id)
        assert response.data['category'] == 'Boissons'

    def test_add_item_outsider(self, outsider_client, party):
        response = outsider_client.post(items_url(party.id), {'name': 'Chips', 'quantity': 1}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not PartyItem.objects.exists()

    def test_add_item_zero_quantity(self, creator_client, party):
        response = creator_client.post(items_url(party.id), {'name': 'Chips', 'quantity': 0}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_item_unknown_category(self, creator_client, party):
        response = creator_client.post(items_url(party.id), {
            'name': 'Chips',
            'quantity': 1,
            'category': 'Weapons',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_item_description_too_long(self, creator_client, party):
        response = creator_client.post(items_url(party.id), {
            'name': 'Chips',
            'quantity': 1,
            'description': 'x' * 501,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_item_party_not_found(self, creator_client):
        response = creator_client.post(items_url(uuid4()), {'name': 'Chips', 'quantity': 1}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_item_by_bringer(self, guest_client, guest_item):
        response = guest_client.put(
            item_url(guest_item.party_id, guest_item.id),
            {'quantity': 2},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['quantity'] == 2
        assert response.data['name'] == 'Cake'

    def test_update_item_by_creator_forbidden(self, creator_client, guest_item):
        response = creator_client.patch(
            item_url(guest_item.party_id, guest_item.id),
            {'name': 'Pie'},
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        guest_item.refresh_from_db()
        assert guest_item.name == 'Cake'

    def test_delete_item_by_bringer(self, guest_client, guest_item):
        response = guest_client.delete(item_url(guest_item.party_id, guest_item.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PartyItem.objects.filter(id=guest_item.id).exists()

    def test_delete_missing_item(self, guest_client, party_with_guest):
        response = guest_client.delete(item_url(party_with_guest.id, uuid4()))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Identifier Handling Tests
# =============================================================================

@pytest.mark.django_db
class TestMalformedIdentifiers:
    """Ids that are not canonical UUIDs never reach the database."""

    @pytest.mark.parametrize('bad_id', ['a' * 36, '-' * 36, '0' * 32 + '----'])
    def test_malformed_party_id(self, creator_client, bad_id):
        response = creator_client.get(f'/api/parties/{bad_id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_malformed_item_id(self, guest_client, party_with_guest):
        response = guest_client.delete(f'/api/parties/{party_with_guest.id}/items/{"f" * 36}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_malformed_participant_id(self, guest_client, party_with_guest):
        response = guest_client.delete(f'/api/parties/{party_with_guest.id}/participants/{"-" * 36}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_uppercase_party_id(self, guest_client, party_with_guest):
        response = guest_client.get(party_url(str(party_with_guest.id).upper()))

        assert response.status_code == status.HTTP_200_OK

    def test_leave_party_with_uppercase_id(self, guest_client, party_with_guest, guest):
        """Self-removal does not depend on the id's letter case."""
        response = guest_client.delete(participant_url(party_with_guest.id, str(guest.id).upper()))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PartyParticipant.objects.filter(party=party_with_guest, user=guest).exists()


@pytest.mark.django_db
class TestItemCategoryClear:
    """Tests for clearing an item's category."""

    def test_null_category_clears_it(self, guest_client, guest_item):
        response = guest_client.patch(
            item_url(guest_item.party_id, guest_item.id),
            {'category': None},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['category'] is None
        guest_item.refresh_from_db()
        assert guest_item.category is None
        assert guest_item.name == 'Cake'

    def test_omitted_category_is_kept(self, guest_client, guest_item):
        response = guest_client.patch(
            item_url(guest_item.party_id, guest_item.id),
            {'quantity': 4},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['category'] == 'Desserts'
