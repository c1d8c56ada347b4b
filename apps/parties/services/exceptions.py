"""
Domain-specific exceptions for parties app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PartiesServiceError(Exception):
    """Base exception for all parties service errors."""
    pass


class PartyNotFoundError(PartiesServiceError):
    """Raised when a party does not exist."""
    pass


class ItemNotFoundError(PartiesServiceError):
    """Raised when an item does not exist within the given party."""
    pass


class ParticipantNotFoundError(PartiesServiceError):
    """Raised when removing a membership that does not exist."""
    pass


class UserNotFoundError(PartiesServiceError):
    """Raised when the user being added to a party does not exist."""
    pass


class AlreadyParticipantError(PartiesServiceError):
    """Raised when a user is added to a party they already belong to."""
    pass


class NotParticipantError(PartiesServiceError):
    """Raised when an action requires party membership the user lacks."""
    pass


class InsufficientPermissionsError(PartiesServiceError):
    """Raised when a user is neither the party creator nor the item bringer as required."""
    pass


class InvalidPartyDateError(PartiesServiceError):
    """Raised when a party date is not strictly in the future."""
    pass


class InvalidQuantityError(PartiesServiceError):
    """Raised when an item quantity is not strictly positive."""
    pass
