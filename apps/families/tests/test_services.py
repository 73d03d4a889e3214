"""
Service layer unit tests for families app.

Tests cover:
- Family creation (family, owner membership, profile reference)
- Joining, including re-joining and unknown family ids
- Member listing
"""

import pytest
from uuid import uuid4
from unittest.mock import patch
from django.db import DatabaseError

from apps.accounts.services import get_user_profile
from apps.families.models import Family, FamilyMembership
from apps.families.services import (
    create_family,
    join_family,
    get_family_member_ids,
    get_family_members,
    get_family_id_for_user,
    NoFamilyError,
)


@pytest.mark.django_db
class TestCreateFamily:
    """Tests for create_family."""

    def test_create_family(self, family_owner):
        """Creates the family, owner membership and profile reference."""
        family_id = create_family(owner=family_owner, name='Home')

        family = Family.objects.get(id=family_id)
        assert family.owner == family_owner
        assert family.name == 'Home'
        assert FamilyMembership.objects.filter(family_id=family_id, user=family_owner).exists()
        assert get_user_profile(user_id=family_owner.id).family_id == family_id

    def test_create_family_rolls_back_on_failure(self, family_owner):
        """Nothing is written when the profile update fails."""
        with patch(
            'apps.families.services.family_management.set_profile_family',
            side_effect=DatabaseError('unavailable')
        ):
            with pytest.raises(DatabaseError):
                create_family(owner=family_owner)

        assert not Family.objects.exists()
        assert not FamilyMembership.objects.exists()


@pytest.mark.django_db
class TestJoinFamily:
    """Tests for join_family."""

    def test_join_family(self, family_id, relative):
        join_family(user=relative, family_id=family_id)

        assert FamilyMembership.objects.filter(family_id=family_id, user=relative).exists()
        assert get_user_profile(user_id=relative.id).family_id == family_id

    def test_join_twice_keeps_one_membership(self, family_id, relative):
        """Re-joining refreshes joined_at instead of adding a row."""
        join_family(user=relative, family_id=family_id)
        first_joined = FamilyMembership.objects.get(family_id=family_id, user=relative).joined_at

        join_family(user=relative, family_id=family_id)

        memberships = FamilyMembership.objects.filter(family_id=family_id, user=relative)
        assert memberships.count() == 1
        assert memberships.get().joined_at >= first_joined

    def test_join_unknown_family_is_recorded(self, relative):
        """The family id is taken as given."""
        unknown_id = uuid4()

        join_family(user=relative, family_id=unknown_id)

        assert get_user_profile(user_id=relative.id).family_id == unknown_id
        assert get_family_member_ids(family_id=unknown_id) == [relative.id]

    def test_join_moves_profile_to_new_family(self, family_id, relative):
        other_family_id = create_family(owner=relative)

        join_family(user=relative, family_id=family_id)

        assert get_user_profile(user_id=relative.id).family_id == family_id
        assert other_family_id != family_id


@pytest.mark.django_db
class TestFamilyMembers:
    """Tests for member listing and family lookup."""

    def test_get_family_member_ids(self, family_id, family_owner, relative):
        join_family(user=relative, family_id=family_id)

        member_ids = get_family_member_ids(family_id=family_id)

        assert set(member_ids) == {family_owner.id, relative.id}

    def test_get_family_member_ids_empty(self, db):
        assert get_family_member_ids(family_id=uuid4()) == []

    def test_get_family_members_ordered_by_join(self, family_id, family_owner, relative):
        join_family(user=relative, family_id=family_id)

        members = list(get_family_members(family_id=family_id))

        assert [m.user for m in members] == [family_owner, relative]

    def test_get_family_id_for_user(self, family_id, family_owner):
        assert get_family_id_for_user(user_id=family_owner.id) == family_id

    def test_get_family_id_for_user_without_family(self, relative):
        with pytest.raises(NoFamilyError):
            get_family_id_for_user(user_id=relative.id)
