"""Password validators plugged into AUTH_PASSWORD_VALIDATORS."""

import re

from django.core.exceptions import ValidationError


class DigitValidator:
    """Password must contain at least one digit."""

    def validate(self, password, user=None):
        if not re.search(r'\d', password):
            raise ValidationError(
                'Password must contain at least one digit.',
                code='password_no_digit',
            )

    def get_help_text(self):
        return 'Your password must contain at least one digit.'


class UppercaseValidator:
    """Password must contain at least one uppercase letter."""

    def validate(self, password, user=None):
        if not re.search(r'[A-Z]', password):
            raise ValidationError(
                'Password must contain at least one uppercase letter.',
                code='password_no_upper',
            )

    def get_help_text(self):
        return 'Your password must contain at least one uppercase letter.'
