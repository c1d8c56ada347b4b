"""
Party notification dispatcher.

After a party mutation commits, notify every other participant that has a
registered device. Delivery is best effort: failures are logged and never
reach the request that triggered them.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction

from apps.parties.models import PartyParticipant

from . import push

logger = logging.getLogger(__name__)


def get_recipient_tokens(*, party_id: UUID, actor_id: UUID) -> List[str]:
    """Push tokens of the party's current participants, excluding the actor."""
    return list(
        PartyParticipant.objects
        .filter(party_id=party_id)
        .exclude(user_id=actor_id)
        .exclude(user__push_token='')
        .values_list('user__push_token', flat=True)
    )


def dispatch(*, party_id: UUID, actor_id: UUID, title: str, body: str) -> None:
    """Compute recipients and deliver; never raises."""
    try:
        tokens = get_recipient_tokens(party_id=party_id, actor_id=actor_id)
        if not tokens:
            logger.debug("No recipients for %r on party %s", title, party_id)
            return

        push.send_push_notification(tokens, title, body)
    except Exception:
        logger.exception("Failed to send %r notification for party %s", title, party_id)


def notify_party_participants(*, party_id: UUID, actor_id: UUID, title: str, body: str) -> None:
    """
    Schedule a notification for when the current transaction commits.

    Nothing is sent if the transaction rolls back.
    """
    transaction.on_commit(
        lambda: dispatch(party_id=party_id, actor_id=actor_id, title=title, body=body)
    )
