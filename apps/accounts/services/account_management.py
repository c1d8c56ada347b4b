"""Account management service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.parties.models import Party, PartyItem, PartyParticipant

from .exceptions import PasswordConfirmationError, UserNotFoundError

User = get_user_model()

logger = logging.getLogger(__name__)


def _get_user_for_update(user_id: UUID) -> User:
    try:
        return (
            User.objects
            .select_for_update()
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


@transaction.atomic
def update_user_profile(
    *,
    user_id: UUID,
    name: Optional[str] = None,
    current_password: Optional[str] = None,
    new_password: Optional[str] = None
) -> User:
    """
    Update the user's name and/or password.

    A password change requires the current password.

    Raises:
        UserNotFoundError: If user doesn't exist
        PasswordConfirmationError: If current password is missing or wrong
    """
    user = _get_user_for_update(user_id)
    update_fields = ['updated_at']

    if new_password:
        if not current_password or not user.check_password(current_password):
            raise PasswordConfirmationError("Current password is incorrect")
        user.set_password(new_password)
        update_fields.append('password')

    if name:
        user.name = name
        update_fields.append('name')

    user.save(update_fields=update_fields)
    return user


@transaction.atomic
def update_push_token(*, user_id: UUID, token: str) -> User:
    """Register the device token used for push notifications."""
    user = _get_user_for_update(user_id)
    user.push_token = token
    user.save(update_fields=['push_token', 'updated_at'])
    return user


@transaction.atomic
def delete_user_account(*, user_id: UUID, password: str) -> None:
    """
    Permanently delete an account and everything hanging off it.

    Deletion order inside one transaction:
    1. Items the user brings (in any party)
    2. The user's participations
    3. Parties the user created, with their items and participations
    4. The user row

    Args:
        user_id: User's ID
        password: User's password for confirmation

    Raises:
        UserNotFoundError: If user doesn't exist
        PasswordConfirmationError: If password is incorrect
    """
    user = _get_user_for_update(user_id)

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    owned_parties = Party.objects.filter(creator=user)

    items_deleted, _ = PartyItem.objects.filter(user=user).delete()
    PartyParticipant.objects.filter(user=user).delete()

    PartyItem.objects.filter(party__in=owned_parties).delete()
    PartyParticipant.objects.filter(party__in=owned_parties).delete()
    parties_deleted, _ = owned_parties.delete()

    user.delete()

    logger.info(
        "Deleted account %s (%d parties, %d items)",
        user_id, parties_deleted, items_deleted
    )
