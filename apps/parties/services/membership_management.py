"""
Membership management service.

Handles party participant operations with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.notifications.dispatcher import notify_party_participants
from apps.parties.models import Party, PartyParticipant

from .exceptions import (
    PartyNotFoundError,
    UserNotFoundError,
    AlreadyParticipantError,
    ParticipantNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def is_participant(*, party: Party, user: User) -> bool:
    """Check whether user holds a membership in party."""
    return PartyParticipant.objects.filter(party=party, user=user).exists()


@transaction.atomic
def add_participant(
    *,
    party_id: UUID,
    user_id: UUID,
    added_by: User
) -> PartyParticipant:
    """
    Add a user to a party.

    The caller does not have to be a participant themself.

    Args:
        party_id: UUID of the party
        user_id: UUID of the user to add
        added_by: User performing the addition

    Returns:
        Created PartyParticipant instance

    Raises:
        PartyNotFoundError: If party doesn't exist
        UserNotFoundError: If the user to add doesn't exist
        AlreadyParticipantError: If the user is already a participant
    """
    # Lock the party to serialize concurrent additions
    try:
        party = (
            Party.objects
            .select_for_update()
            .get(id=party_id)
        )
    except Party.DoesNotExist:
        raise PartyNotFoundError(f"Party with ID {party_id} not found")

    try:
        new_member = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    if is_participant(party=party, user=new_member):
        raise AlreadyParticipantError(f"{new_member.name} is already a participant of {party.name}")

    try:
        with transaction.atomic():
            participation = PartyParticipant.objects.create(party=party, user=new_member)
    except IntegrityError:
        # Unique constraint caught a concurrent duplicate
        raise AlreadyParticipantError(f"{new_member.name} is already a participant of {party.name}")

    logger.info("User %s added %s to party %s", added_by.id, new_member.id, party.id)

    notify_party_participants(
        party_id=party.id,
        actor_id=added_by.id,
        title="New participant",
        body=f'{new_member.name} joined the party "{party.name}"',
    )

    return participation


@transaction.atomic
def remove_participant(
    *,
    party_id: UUID,
    user_id: UUID,
    removed_by: User
) -> None:
    """
    Remove a user from a party.

    A participant may remove themself; the party creator may remove anyone,
    including themself. Creator rights do not depend on membership.

    Args:
        party_id: UUID of the party
        user_id: UUID of the user to remove
        removed_by: User performing the removal

    Raises:
        PartyNotFoundError: If party doesn't exist
        InsufficientPermissionsError: If removed_by is neither the user
            being removed nor the creator
        ParticipantNotFoundError: If the membership doesn't exist
    """
    try:
        party = Party.objects.get(id=party_id)
    except Party.DoesNotExist:
        raise PartyNotFoundError(f"Party with ID {party_id} not found")

    removing_self = removed_by.id == UUID(str(user_id))
    if not removing_self and not party.is_creator(removed_by):
        raise InsufficientPermissionsError("Only the party creator can remove other participants")

    deleted, _ = (
        PartyParticipant.objects
        .filter(party=party, user_id=user_id)
        .delete()
    )
    if not deleted:
        raise ParticipantNotFoundError("User is not a participant of this party")

    logger.info("User %s removed %s from party %s", removed_by.id, user_id, party.id)


def get_party_participants(*, party_id: UUID) -> QuerySet[PartyParticipant]:
    """
    Get all participants of a party, in joining order.

    Raises:
        PartyNotFoundError: If party doesn't exist
    """
    if not Party.objects.filter(id=party_id).exists():
        raise PartyNotFoundError(f"Party with ID {party_id} not found")

    return (
        PartyParticipant.objects
        .filter(party_id=party_id)
        .select_related('user')
        .order_by('created_at')
    )
