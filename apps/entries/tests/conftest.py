import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.entries.models import Category
from apps.entries.services import add_price_entry
from apps.families.services import create_family, join_family


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return the user recording prices."""
    return User.objects.create_user(
        email='shopper@example.com',
        password='TestPass123!',
        display_name='Shopper',
    )


@pytest.fixture
def relative(db):
    """Create and return another member of the user's family."""
    return User.objects.create_user(
        email='relative@example.com',
        password='TestPass123!',
        display_name='Relative',
    )


@pytest.fixture
def stranger(db):
    """Create and return a user outside the family."""
    return User.objects.create_user(
        email='stranger@example.com',
        password='TestPass123!',
        display_name='Stranger',
    )


@pytest.fixture
def family_id(user, relative):
    """Family owned by user with relative as second member."""
    family_id = create_family(owner=user)
    join_family(user=relative, family_id=family_id)
    return family_id


@pytest.fixture
def make_entry(db):
    """Factory recording a price through the repository; returns the entry id."""
    def _make_entry(owner, *, product_name='Heineken', price='2.50', on=date(2024, 6, 1),
                    category=Category.BEER, store='Fantastico', package_size='0.5 l', note=''):
        return add_price_entry(
            owner_id=owner.id,
            category=category,
            product_name=product_name,
            package_size=package_size,
            store=store,
            price=Decimal(price),
            date=on,
            note=note,
        )
    return _make_entry


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
