"""
Item management service.

Any participant may add items; only the bringer may change or remove them.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.notifications.dispatcher import notify_party_participants
from apps.parties.models import Party, PartyItem

from .exceptions import (
    PartyNotFoundError,
    ItemNotFoundError,
    NotParticipantError,
    InsufficientPermissionsError,
    InvalidQuantityError,
)
from .membership_management import is_participant

logger = logging.getLogger(__name__)


def _ensure_positive(quantity: int) -> None:
    if quantity <= 0:
        raise InvalidQuantityError("Quantity must be greater than 0")


def _get_item_for_bringer(*, party_id: UUID, item_id: UUID, user: User) -> PartyItem:
    try:
        item = (
            PartyItem.objects
            .select_for_update()
            .select_related('party')
            .get(id=item_id, party_id=party_id)
        )
    except PartyItem.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found in this party")

    if not item.is_bringer(user):
        raise InsufficientPermissionsError("Only the participant who added this item can change it")

    return item


@transaction.atomic
def add_item(
    *,
    party_id: UUID,
    user: User,
    name: str,
    quantity: int,
    category: Optional[str] = None,
    description: str = ''
) -> PartyItem:
    """
    Add an item the user commits to bring.

    Membership is checked before anything is written.

    Raises:
        PartyNotFoundError: If party doesn't exist
        NotParticipantError: If user is not a participant
        InvalidQuantityError: If quantity is not positive
    """
    try:
        party = Party.objects.get(id=party_id)
    except Party.DoesNotExist:
        raise PartyNotFoundError(f"Party with ID {party_id} not found")

    if not is_participant(party=party, user=user):
        raise NotParticipantError("You must be a participant to add an item")

    _ensure_positive(quantity)

    item = PartyItem.objects.create(
        party=party,
        user=user,
        name=name,
        quantity=quantity,
        category=category or None,
        description=description or '',
    )

    notify_party_participants(
        party_id=party.id,
        actor_id=user.id,
        title="New item added",
        body=f'{user.name} is bringing {quantity} {name} to the party "{party.name}"',
    )

    return item


@transaction.atomic
def update_item(
    *,
    party_id: UUID,
    item_id: UUID,
    user: User,
    name: Optional[str] = None,
    quantity: Optional[int] = None,
    category: Optional[str] = None,
    description: Optional[str] = None
) -> PartyItem:
    """
    Update an item (bringer only).

    Omitted fields are kept; an empty category clears it.

    Raises:
        ItemNotFoundError: If the item doesn't exist in this party
        InsufficientPermissionsError: If user is not the bringer
        InvalidQuantityError: If quantity is not positive
    """
    item = _get_item_for_bringer(party_id=party_id, item_id=item_id, user=user)

    update_fields = ['updated_at']

    if quantity is not None:
        _ensure_positive(quantity)
        item.quantity = quantity
        update_fields.append('quantity')

    if name is not None:
        item.name = name
        update_fields.append('name')

    if category is not None:
        item.category = category or None
        update_fields.append('category')

    if description is not None:
        item.description = description
        update_fields.append('description')

    item.save(update_fields=update_fields)

    notify_party_participants(
        party_id=item.party_id,
        actor_id=user.id,
        title="Item updated",
        body=f'{user.name} changed their item in the party "{item.party.name}"',
    )

    return item


@transaction.atomic
def delete_item(*, party_id: UUID, item_id: UUID, user: User) -> None:
    """
    Delete an item (bringer only).

    Raises:
        ItemNotFoundError: If the item doesn't exist in this party
        InsufficientPermissionsError: If user is not the bringer
    """
    item = _get_item_for_bringer(party_id=party_id, item_id=item_id, user=user)
    party = item.party

    item.delete()
    logger.info("User %s removed item %s from party %s", user.id, item_id, party.id)

    notify_party_participants(
        party_id=party.id,
        actor_id=user.id,
        title="Item removed",
        body=f'An item was removed from the party "{party.name}"',
    )
