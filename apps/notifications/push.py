"""Firebase Cloud Messaging gateway."""

import logging
from functools import lru_cache
from typing import Iterable, Optional

import firebase_admin
from firebase_admin import credentials, messaging
from django.conf import settings

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = 'party-planner'


@lru_cache(maxsize=None)
def get_firebase_app() -> firebase_admin.App:
    """
    Initialize the Firebase app on first use.

    Uses the service account file from settings when configured,
    otherwise application default credentials.
    """
    conf = settings.PUSH_NOTIFICATIONS

    if conf['FIREBASE_CREDENTIALS_FILE']:
        credential = credentials.Certificate(conf['FIREBASE_CREDENTIALS_FILE'])
    else:
        credential = credentials.ApplicationDefault()

    options = {'httpTimeout': conf['TIMEOUT']}
    if conf['FIREBASE_PROJECT_ID']:
        options['projectId'] = conf['FIREBASE_PROJECT_ID']

    return firebase_admin.initialize_app(credential, options, name=FIREBASE_APP_NAME)


def send_push_notification(
    tokens: Iterable[str],
    title: str,
    body: str
) -> Optional[messaging.BatchResponse]:
    """
    Send one notification to a set of device tokens.

    Args:
        tokens: Device registration tokens
        title: Notification title
        body: Notification body

    Returns:
        Per-token BatchResponse, or None when push is disabled

    Raises:
        firebase_admin.exceptions.FirebaseError: If the request fails as a whole
    """
    if not settings.PUSH_NOTIFICATIONS['ENABLED']:
        logger.debug("Push notifications disabled, dropping %r", title)
        return None

    message = messaging.MulticastMessage(
        notification=messaging.Notification(title=title, body=body),
        tokens=list(tokens),
    )
    response = messaging.send_each_for_multicast(message, app=get_firebase_app())

    logger.info(
        "Push %r: %d delivered, %d failed",
        title, response.success_count, response.failure_count
    )
    return response
