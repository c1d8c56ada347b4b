"""Login service for email/password accounts."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check a login attempt and stamp last_login on success.

    Unknown emails and wrong passwords get the same error, so the response
    does not reveal which accounts exist. The password is checked before
    the active flag, so a deactivated account is only reported to someone
    who knows its password.

    Raises:
        InvalidCredentialsError: If no account matches the email/password pair
        InactiveAccountError: If the matching account is deactivated
    """
    account = (
        User.objects
        .select_for_update()
        .filter(email=User.objects.normalize_email(email))
        .first()
    )

    if account is None or not account.check_password(password):
        raise InvalidCredentialsError(INVALID_CREDENTIALS)

    if not account.is_active:
        logger.info("Rejected login for deactivated account %s", account.id)
        raise InactiveAccountError("Account is deactivated")

    account.last_login = timezone.now()
    account.save(update_fields=['last_login'])

    return account
