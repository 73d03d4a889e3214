import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.families.services import create_family


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def family_owner(db):
    """Create and return the user who owns the family."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Family Owner',
    )


@pytest.fixture
def relative(db):
    """Create and return a user who joins the family."""
    return User.objects.create_user(
        email='relative@example.com',
        password='TestPass123!',
        display_name='Relative',
    )


@pytest.fixture
def family_id(family_owner):
    """Create a family owned by family_owner and return its id."""
    return create_family(owner=family_owner, name='Home')


@pytest.fixture
def authenticated_client(api_client, family_owner):
    """Return API client authenticated as the family owner."""
    refresh = RefreshToken.for_user(family_owner)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def relative_client(relative):
    """Return API client authenticated as the relative."""
    client = APIClient()
    refresh = RefreshToken.for_user(relative)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
