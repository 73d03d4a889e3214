"""User profile service."""

from typing import Optional
from uuid import UUID

from apps.accounts.models import User, UserProfile


def ensure_user_profile(user: User) -> UserProfile:
    """
    Return the user's profile, creating it on first use.

    Args:
        user: Authenticated user

    Returns:
        Existing or newly created UserProfile
    """
    profile, _ = UserProfile.objects.get_or_create(
        user=user,
        defaults={'email': user.email or ''}
    )
    return profile


def get_user_profile(*, user_id: UUID) -> Optional[UserProfile]:
    """Return the profile for ``user_id`` or None if it was never created."""
    return UserProfile.objects.filter(user_id=user_id).first()


def set_profile_family(*, user: User, family_id: UUID) -> UserProfile:
    """
    Point the user's profile at ``family_id``.

    Merges into an existing profile, or creates one carrying only the
    email and the family reference.
    """
    profile = ensure_user_profile(user)
    profile.family_id = family_id
    profile.save(update_fields=['family_id'])
    return profile
