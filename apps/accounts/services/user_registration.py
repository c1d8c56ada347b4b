"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    name: str
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address (normalized to lowercase)
        password: User's password (will be hashed)
        name: Name shown to other participants

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is already taken
    """
    email = User.objects.normalize_email(email)

    if User.objects.filter(email=email).exists():
        raise UserRegistrationError("This email is already in use")

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            name=name
        )
    except IntegrityError:
        # Concurrent registration with the same email
        raise UserRegistrationError("This email is already in use")

    logger.info("Registered user %s", user.id)
    return user
