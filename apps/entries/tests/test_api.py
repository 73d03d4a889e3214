import pytest
from datetime import date
from unittest.mock import patch
from uuid import uuid4
from django.db import DatabaseError
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.entries.models import UserEntry, GlobalEntry


def entry_payload(**overrides):
    data = {
        'category': 'beer',
        'product_name': 'Heineken',
        'package_size': '0.5 l',
        'store': 'Fantastico',
        'price': '2,50',
        'date': '2024-06-01',
    }
    data.update(overrides)
    return data


# =============================================================================
# Create Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateEntry:
    """Tests for POST /api/entries/"""

    def test_create_entry(self, authenticated_client, user):
        """Heineken at 2,50 is stored as 2.50 under key heineken."""
        url = reverse('entries:entry-list')
        response = authenticated_client.post(url, entry_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['entry']['price'] == '2.50'
        assert response.data['entry']['product_key'] == 'heineken'
        assert response.data['entry']['note'] == ''
        assert response.data['template'] == {
            'category': 'beer',
            'product_name': 'Heineken',
            'package_size': '0.5 l',
            'date': '2024-06-01',
        }
        assert 'Heineken' in response.data['message']

        entry = UserEntry.objects.get(id=response.data['id'])
        assert entry.user == user
        assert GlobalEntry.objects.filter(id=entry.global_entry_id, user_entry_id=entry.id).exists()

    def test_create_remembers_category_and_store(self, authenticated_client, user):
        url = reverse('entries:entry-list')
        authenticated_client.post(url, entry_payload(category='meat', store='Billa'), format='json')

        user.refresh_from_db()
        assert user.preferences['last_category'] == 'meat'
        assert user.preferences['last_store'] == 'Billa'

    @pytest.mark.parametrize('overrides, field', [
        ({'price': '0'}, 'price'),
        ({'price': '-1'}, 'price'),
        ({'product_name': '  '}, 'product_name'),
        ({'date': '2024/06/01'}, 'date'),
        ({'category': 'wine'}, 'category'),
    ])
    def test_invalid_input_never_reaches_repository(self, authenticated_client, overrides, field):
        url = reverse('entries:entry-list')
        with patch('apps.entries.services.entry_form.add_price_entry') as add_price_entry:
            response = authenticated_client.post(url, entry_payload(**overrides), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in response.data
        add_price_entry.assert_not_called()

    def test_create_database_error(self, authenticated_client):
        url = reverse('entries:entry-list')
        with patch('apps.entries.views.submit_price_entry', side_effect=DatabaseError('unavailable')):
            response = authenticated_client.post(url, entry_payload(), format='json')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert 'error' in response.data

    def test_create_unauthenticated(self, api_client):
        url = reverse('entries:entry-list')
        response = api_client.post(url, entry_payload(), format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# List Tests
# =============================================================================

@pytest.mark.django_db
class TestListEntries:
    """Tests for GET /api/entries/"""

    def test_list_mine_by_default(self, authenticated_client, user, stranger, make_entry):
        own = make_entry(user)
        make_entry(stranger)

        response = authenticated_client.get(reverse('entries:entry-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(own)

    def test_list_family(self, authenticated_client, user, relative, stranger, family_id, make_entry):
        make_entry(user)
        make_entry(relative)
        make_entry(stranger)

        response = authenticated_client.get(reverse('entries:entry-list'), {'scope': 'family'})

        assert response.data['count'] == 2
        assert {r['user_id'] for r in response.data['results']} == {str(user.id), str(relative.id)}

    def test_list_all(self, authenticated_client, user, stranger, make_entry):
        make_entry(user)
        make_entry(stranger)

        response = authenticated_client.get(reverse('entries:entry-list'), {'scope': 'all'})

        assert response.data['count'] == 2

    def test_list_by_category_sorted_by_name(self, authenticated_client, user, make_entry):
        make_entry(user, product_name='Zagorka', on=date(2024, 6, 1))
        make_entry(user, product_name='Heineken', on=date(2024, 4, 1))
        make_entry(user, product_name='Heineken', on=date(2024, 5, 1), store='Billa')
        make_entry(user, product_name='Devin', category='water')

        response = authenticated_client.get(
            reverse('entries:entry-list'),
            {'category': 'beer'}
        )

        results = response.data['results']
        assert [(r['product_name'], r['date']) for r in results] == [
            ('Heineken', '2024-05-01'),
            ('Heineken', '2024-04-01'),
            ('Zagorka', '2024-06-01'),
        ]

    def test_list_product_filter(self, authenticated_client, user, make_entry):
        make_entry(user, product_name='Heineken')
        make_entry(user, product_name='Zagorka')

        response = authenticated_client.get(reverse('entries:entry-list'), {'product': 'HEIN'})

        assert [r['product_name'] for r in response.data['results']] == ['Heineken']

    def test_list_store_filter(self, authenticated_client, user, make_entry):
        make_entry(user, store='Billa')
        make_entry(user, store='Lidl')

        response = authenticated_client.get(reverse('entries:entry-list'), {'store': 'lid'})

        assert [r['store'] for r in response.data['results']] == ['Lidl']

    def test_list_invalid_scope(self, authenticated_client):
        response = authenticated_client.get(reverse('entries:entry-list'), {'scope': 'friends'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'scope' in response.data

    def test_list_database_error(self, authenticated_client):
        with patch('apps.entries.views.resolve_entries', side_effect=DatabaseError('unavailable')):
            response = authenticated_client.get(reverse('entries:entry-list'))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    def test_list_unauthenticated(self, api_client):
        response = api_client.get(reverse('entries:entry-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Delete Tests
# =============================================================================

@pytest.mark.django_db
class TestDeleteEntry:
    """Tests for DELETE /api/entries/{id}/"""

    def test_delete_entry(self, authenticated_client, user, make_entry):
        entry_id = make_entry(user)

        response = authenticated_client.delete(reverse('entries:entry-detail', args=[entry_id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not UserEntry.objects.filter(id=entry_id).exists()
        assert not GlobalEntry.objects.filter(user_entry_id=entry_id).exists()

    def test_delete_succeeds_when_global_copy_survives(self, authenticated_client, user, make_entry):
        entry_id = make_entry(user)

        with patch('apps.entries.services.entry_repository.GlobalEntry') as global_model:
            global_model.objects.filter.side_effect = DatabaseError('unavailable')
            response = authenticated_client.delete(reverse('entries:entry-detail', args=[entry_id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not UserEntry.objects.filter(id=entry_id).exists()

    def test_delete_missing_entry(self, authenticated_client):
        response = authenticated_client.delete(reverse('entries:entry-detail', args=[uuid4()]))

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_delete_other_users_entry_keeps_it(self, authenticated_client, stranger, make_entry):
        entry_id = make_entry(stranger)

        response = authenticated_client.delete(reverse('entries:entry-detail', args=[entry_id]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert UserEntry.objects.filter(id=entry_id).exists()

    def test_delete_malformed_id(self, authenticated_client):
        response = authenticated_client.delete(reverse('entries:entry-detail', args=['not-a-uuid']))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Form Defaults Tests
# =============================================================================

@pytest.mark.django_db
class TestFormDefaults:
    """Tests for GET /api/entries/form-defaults/"""

    def test_form_defaults_fresh_user(self, authenticated_client):
        response = authenticated_client.get(reverse('entries:entry-form-defaults'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['category'] == 'beer'
        assert response.data['store'] == ''
        assert response.data['price'] == ''
        assert response.data['date'] == timezone.localdate().isoformat()

    def test_form_defaults_after_entry(self, authenticated_client):
        authenticated_client.post(
            reverse('entries:entry-list'),
            entry_payload(category='dairy', store='Lidl'),
            format='json'
        )

        response = authenticated_client.get(reverse('entries:entry-form-defaults'))

        assert response.data['category'] == 'dairy'
        assert response.data['store'] == 'Lidl'


# =============================================================================
# Product History Tests
# =============================================================================

@pytest.mark.django_db
class TestProductHistory:
    """Tests for GET /api/entries/products/{product_key}/"""

    def url(self, product_key):
        return reverse('entries:entry-product-history', kwargs={'product_key': product_key})

    def test_history_all_scope_oldest_first(self, authenticated_client, user, stranger, make_entry):
        make_entry(user, price='2.50', on=date(2024, 6, 1))
        make_entry(stranger, price='2.20', on=date(2024, 4, 1))
        make_entry(user, price='2.71', on=date(2024, 5, 1))

        response = authenticated_client.get(self.url('heineken'), {'scope': 'all'})

        assert response.status_code == status.HTTP_200_OK
        assert [e['date'] for e in response.data['entries']] == ['2024-04-01', '2024-05-01', '2024-06-01']
        assert response.data['display_name'] == 'Heineken'
        assert response.data['summary']['min_price'] == '2.20'
        assert response.data['summary']['max_price'] == '2.71'
        assert response.data['summary']['avg_price'] == '2.47'
        assert response.data['summary']['entry_count'] == 3
        assert response.data['summary']['latest']['date'] == '2024-06-01'
        assert [p['price'] for p in response.data['chart']] == ['2.20', '2.71', '2.50']

    def test_history_mine_scope(self, authenticated_client, user, stranger, make_entry):
        make_entry(user, on=date(2024, 6, 1))
        make_entry(stranger, on=date(2024, 4, 1))

        response = authenticated_client.get(self.url('heineken'))

        assert response.data['scope'] == 'mine'
        assert [e['user_id'] for e in response.data['entries']] == [str(user.id)]

    def test_history_family_scope(self, authenticated_client, user, relative, stranger, family_id, make_entry):
        make_entry(user)
        make_entry(relative)
        make_entry(stranger)

        response = authenticated_client.get(self.url('heineken'), {'scope': 'family'})

        assert {e['user_id'] for e in response.data['entries']} == {str(user.id), str(relative.id)}

    def test_history_product_key_with_slash(self, authenticated_client, user, make_entry):
        make_entry(user, product_name='Milk 1/2', category='dairy')

        response = authenticated_client.get('/api/entries/products/milk%201%2F2/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['product_key'] == 'milk 1/2'
        assert response.data['display_name'] == 'Milk 1/2'
        assert len(response.data['entries']) == 1

    def test_history_unknown_product(self, authenticated_client):
        response = authenticated_client.get(self.url('fresh milk'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['entries'] == []
        assert response.data['summary'] is None
        assert response.data['display_name'] == 'Fresh milk'

    def test_history_database_error(self, authenticated_client):
        with patch('apps.entries.views.list_entries_by_product_key', side_effect=DatabaseError('unavailable')):
            response = authenticated_client.get(self.url('heineken'))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
