"""
Family management service.

Creating and joining a family touches three records: the family row,
the membership row and the member's profile. Each operation runs in a
single transaction.
"""

import logging
from typing import List
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.accounts.services import get_user_profile, set_profile_family
from apps.families.models import Family, FamilyMembership

from .exceptions import NoFamilyError

logger = logging.getLogger(__name__)


@transaction.atomic
def create_family(*, owner: User, name: str = '') -> UUID:
    """
    Create a family owned by ``owner`` and make the owner its first member.

    Steps:
    1. Create the family
    2. Create owner membership
    3. Point the owner's profile at the family

    Args:
        owner: User who will own the family
        name: Optional family name

    Returns:
        ID of the created family
    """
    family = Family.objects.create(owner=owner, name=name)

    FamilyMembership.objects.create(
        family=family,
        user=owner,
        joined_at=timezone.now()
    )

    set_profile_family(user=owner, family_id=family.id)

    logger.info("User %s created family %s", owner.id, family.id)
    return family.id


@transaction.atomic
def join_family(*, user: User, family_id: UUID) -> None:
    """
    Join a family by id.

    Idempotent: joining again refreshes ``joined_at``. The family id is
    not checked against existing families.

    Args:
        user: User joining the family
        family_id: ID taken from the invite link
    """
    FamilyMembership.objects.update_or_create(
        family_id=family_id,
        user=user,
        defaults={'joined_at': timezone.now()}
    )

    set_profile_family(user=user, family_id=family_id)

    logger.info("User %s joined family %s", user.id, family_id)


def get_family_member_ids(*, family_id: UUID) -> List[UUID]:
    """Return ids of every user with a membership in ``family_id``."""
    return list(
        FamilyMembership.objects
        .filter(family_id=family_id)
        .values_list('user_id', flat=True)
    )


def get_family_members(*, family_id: UUID) -> QuerySet[FamilyMembership]:
    """Return memberships of ``family_id`` with their users, oldest first."""
    return (
        FamilyMembership.objects
        .filter(family_id=family_id)
        .select_related('user')
        .order_by('joined_at')
    )


def get_family_id_for_user(*, user_id: UUID) -> UUID:
    """
    Return the family id stored on the user's profile.

    Raises:
        NoFamilyError: If the user has no profile or no family
    """
    profile = get_user_profile(user_id=user_id)
    if profile is None or profile.family_id is None:
        raise NoFamilyError("You are not a member of any family")
    return profile.family_id
