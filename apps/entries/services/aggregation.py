"""
Scope-aware entry aggregation.

``mine`` reads the user's own collection, ``all`` reads the global
collection and ``family`` merges the collections of every family member.
The family scope falls back to ``mine`` when the user has no family, the
family has no members, or the family cannot be resolved.
"""

import logging
from typing import List, Optional, Set
from uuid import UUID

from django.db import DatabaseError

from apps.entries.models import Scope
from apps.families.services import (
    get_family_id_for_user,
    get_family_member_ids,
    NoFamilyError,
)

from .entry_repository import list_user_entries, list_all_entries, sort_newest_first
from .exceptions import InvalidScopeError

logger = logging.getLogger(__name__)


def _family_member_ids(user_id: UUID) -> Optional[List[UUID]]:
    """
    Return the member ids of the user's family.

    Returns None whenever the caller should fall back to the user's own
    entries.
    """
    try:
        family_id = get_family_id_for_user(user_id=user_id)
        member_ids = get_family_member_ids(family_id=family_id)
    except NoFamilyError:
        return None
    except DatabaseError:
        logger.warning(
            "Could not resolve family of user %s, using own entries",
            user_id, exc_info=True
        )
        return None

    return member_ids or None


def _member_entries(member_id: UUID, category: Optional[str]) -> list:
    try:
        return list_user_entries(user_id=member_id, category=category)
    except DatabaseError:
        logger.exception("Could not load entries of family member %s", member_id)
        return []


def resolve_entries(*, user_id: UUID, scope: str, category: Optional[str] = None) -> list:
    """
    Return the entries visible to ``user_id`` under ``scope``, newest first.

    Args:
        user_id: Requesting user
        scope: ``mine``, ``family`` or ``all``
        category: Optional category filter

    Raises:
        InvalidScopeError: If scope is not one of the known scopes
    """
    if scope == Scope.MINE:
        return list_user_entries(user_id=user_id, category=category)

    if scope == Scope.ALL:
        return list_all_entries(category=category)

    if scope == Scope.FAMILY:
        member_ids = _family_member_ids(user_id)
        if member_ids is None:
            return list_user_entries(user_id=user_id, category=category)

        merged = []
        for member_id in member_ids:
            merged.extend(_member_entries(member_id, category))
        return sort_newest_first(merged)

    raise InvalidScopeError(f"Unknown scope: {scope}")


def resolve_scope_user_ids(*, user_id: UUID, scope: str) -> Optional[Set[UUID]]:
    """
    Return the ids of the users whose entries ``scope`` covers.

    None means every user (the ``all`` scope).

    Raises:
        InvalidScopeError: If scope is not one of the known scopes
    """
    if scope == Scope.MINE:
        return {user_id}

    if scope == Scope.ALL:
        return None

    if scope == Scope.FAMILY:
        member_ids = _family_member_ids(user_id)
        return set(member_ids) if member_ids is not None else {user_id}

    raise InvalidScopeError(f"Unknown scope: {scope}")
