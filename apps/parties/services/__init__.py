"""
Parties app services layer.

Services contain the membership and ownership rules and orchestrate
operations across models. All state-changing operations use transactions;
rows that are checked and then mutated are locked with select_for_update.
"""

from .exceptions import (
    PartiesServiceError,
    PartyNotFoundError,
    ItemNotFoundError,
    ParticipantNotFoundError,
    UserNotFoundError,
    AlreadyParticipantError,
    NotParticipantError,
    InsufficientPermissionsError,
    InvalidPartyDateError,
    InvalidQuantityError,
)

from .party_management import (
    create_party,
    list_parties_for_user,
    get_party_for_user,
    update_party,
    delete_party,
)

from .membership_management import (
    is_participant,
    add_participant,
    remove_participant,
    get_party_participants,
)

from .item_management import (
    add_item,
    update_item,
    delete_item,
)


__all__ = [
    # Exceptions
    'PartiesServiceError',
    'PartyNotFoundError',
    'ItemNotFoundError',
    'ParticipantNotFoundError',
    'UserNotFoundError',
    'AlreadyParticipantError',
    'NotParticipantError',
    'InsufficientPermissionsError',
    'InvalidPartyDateError',
    'InvalidQuantityError',

    # Party Management
    'create_party',
    'list_parties_for_user',
    'get_party_for_user',
    'update_party',
    'delete_party',

    # Membership Management
    'is_participant',
    'add_participant',
    'remove_participant',
    'get_party_participants',

    # Item Management
    'add_item',
    'update_item',
    'delete_item',
]
