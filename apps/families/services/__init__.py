"""
Families app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    FamiliesServiceError,
    NoFamilyError,
)

from .family_management import (
    create_family,
    join_family,
    get_family_member_ids,
    get_family_members,
    get_family_id_for_user,
)


__all__ = [
    # Exceptions
    'FamiliesServiceError',
    'NoFamilyError',

    # Family Management
    'create_family',
    'join_family',
    'get_family_member_ids',
    'get_family_members',
    'get_family_id_for_user',
]
