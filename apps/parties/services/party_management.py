"""
Party management service.

Handles party CRUD operations with proper transaction safety.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch, Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.notifications.dispatcher import notify_party_participants
from apps.parties.models import Party, PartyItem, PartyParticipant

from .exceptions import (
    PartyNotFoundError,
    NotParticipantError,
    InsufficientPermissionsError,
    InvalidPartyDateError,
)

logger = logging.getLogger(__name__)


def _with_details(queryset: QuerySet[Party]) -> QuerySet[Party]:
    return (
        queryset
        .select_related('creator')
        .prefetch_related(
            Prefetch(
                'items',
                queryset=PartyItem.objects.select_related('user')
            ),
            Prefetch(
                'participations',
                queryset=PartyParticipant.objects.select_related('user')
            ),
        )
    )


def _ensure_future(date: datetime) -> None:
    if date <= timezone.now():
        raise InvalidPartyDateError("Party date must be in the future")


@transaction.atomic
def create_party(
    *,
    creator: User,
    name: str,
    date: datetime,
    location: str,
    description: str = ''
) -> Party:
    """
    Create a new party and add the creator as its first participant.

    Both rows are written in the same transaction, so a party is never
    visible without a participant.

    Args:
        creator: User creating the party
        name: Party name
        date: When the party takes place (must be in the future)
        location: Where the party takes place
        description: Optional description

    Returns:
        Created Party instance

    Raises:
        InvalidPartyDateError: If date is not in the future
    """
    _ensure_future(date)

    party = Party.objects.create(
        name=name,
        date=date,
        location=location,
        description=description or '',
        creator=creator,
    )

    PartyParticipant.objects.create(party=party, user=creator)

    logger.info("User %s created party %s", creator.id, party.id)
    return party


def list_parties_for_user(*, user: User) -> QuerySet[Party]:
    """
    Get all parties the user created or participates in, soonest first.

    Items (with their bringer) and participants are prefetched.
    """
    return _with_details(
        Party.objects
        .filter(Q(creator=user) | Q(participations__user=user))
        .distinct()
        .order_by('date')
    )


def get_party_for_user(*, party_id: UUID, user: User) -> Party:
    """
    Get a party the user is allowed to see.

    Existence is checked before authorization, so a missing party is
    reported differently from one the user cannot access.

    Args:
        party_id: UUID of the party
        user: User requesting the party

    Returns:
        Party instance with items and participants prefetched

    Raises:
        PartyNotFoundError: If party doesn't exist
        NotParticipantError: If user is neither creator nor participant
    """
    try:
        party = _with_details(Party.objects).get(id=party_id)
    except Party.DoesNotExist:
        raise PartyNotFoundError(f"Party with ID {party_id} not found")

    if not party.can_view(user):
        raise NotParticipantError("You are not a participant of this party")

    return party


@transaction.atomic
def update_party(
    *,
    party_id: UUID,
    user: User,
    name: Optional[str] = None,
    date: Optional[datetime] = None,
    location: Optional[str] = None,
    description: Optional[str] = None
) -> Party:
    """
    Update party details (creator only).

    Only the provided fields change. There is no version check, so the
    last committed update wins. Other participants are notified once the
    transaction commits.

    Raises:
        PartyNotFoundError: If party doesn't exist
        InsufficientPermissionsError: If user is not the creator
        InvalidPartyDateError: If a new date is not in the future
    """
    try:
        party = (
            Party.objects
            .select_for_update()
            .get(id=party_id)
        )
    except Party.DoesNotExist:
        raise PartyNotFoundError(f"Party with ID {party_id} not found")

    if not party.is_creator(user):
        raise InsufficientPermissionsError("Only the party creator can update the party")

    previous_name = party.name
    update_fields = ['updated_at']

    if name is not None:
        party.name = name
        update_fields.append('name')

    if date is not None:
        _ensure_future(date)
        party.date = date
        update_fields.append('date')

    if location is not None:
        party.location = location
        update_fields.append('location')

    if description is not None:
        party.description = description
        update_fields.append('description')

    party.save(update_fields=update_fields)

    notify_party_participants(
        party_id=party.id,
        actor_id=user.id,
        title="Party updated",
        body=f'The party "{previous_name}" has been updated',
    )

    return party


@transaction.atomic
def delete_party(*, party_id: UUID, user: User) -> None:
    """
    Delete a party (creator only).

    Items and participations are removed with the party in one transaction.

    Raises:
        PartyNotFoundError: If party doesn't exist
        InsufficientPermissionsError: If user is not the creator
    """
    try:
        party = (
            Party.objects
            .select_for_update()
            .get(id=party_id)
        )
    except Party.DoesNotExist:
        raise PartyNotFoundError(f"Party with ID {party_id} not found")

    if not party.is_creator(user):
        raise InsufficientPermissionsError("Only the party creator can delete the party")

    PartyItem.objects.filter(party=party).delete()
    PartyParticipant.objects.filter(party=party).delete()
    party.delete()

    logger.info("User %s deleted party %s", user.id, party_id)
