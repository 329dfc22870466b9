"""
Tenant Isolation API Tests - CRITICAL SECURITY TESTS

These tests verify that API endpoints properly filter data by business.
If ANY of these tests fail, there is a CRITICAL DATA LEAK via the API.

Coverage: units, conversions, businesses, locations, profiles
"""
import pytest
from decimal import Decimal
from rest_framework import status

from core_backend.tests.fixtures import make_unit
from measurements.models import Unit, UnitConversion, UnitGroup
from tenant.models import Business, BusinessLocation
from users.models import UserProfile

# Mark all tests in this module as tenant isolation tests
pytestmark = pytest.mark.tenant_isolation


def result_ids(response):
    data = response.data['results'] if 'results' in response.data else response.data
    return [item['id'] for item in data]


@pytest.mark.django_db
class TestUnitsAPIIsolation:
    """Test /api/units/ endpoint tenant isolation"""

    def test_units_list_filtered_by_business(
        self, authenticated_client_business_a, unit_business_a, unit_business_b
    ):
        """
        CRITICAL: Verify GET /api/units/ only returns the caller's units
        """
        response = authenticated_client_business_a.get('/api/units/')

        assert response.status_code == status.HTTP_200_OK
        ids = result_ids(response)
        assert unit_business_a.id in ids
        assert unit_business_b.id not in ids

    def test_unit_detail_cross_business_returns_404(self, authenticated_client_business_a, unit_business_b):
        """
        Should return 404 (not 403) so existence is not leaked
        """
        response = authenticated_client_business_a.get(f'/api/units/{unit_business_b.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_unit_create_assigns_caller_business(
        self, authenticated_client_business_a, business_a, business_b
    ):
        """
        CRITICAL: A business in the payload is overwritten with the caller's
        """
        response = authenticated_client_business_a.post('/api/units/', {
            'name': 'Tray',
            'short_name': 'tray',
            'unit_group': 'COUNT',
            'business': business_b.id,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['business'] == business_a.id
        assert Unit.objects.get(pk=response.data['id']).business_id == business_a.id

    def test_unit_create_with_embedded_business_object(
        self, authenticated_client_business_a, business_a, business_b
    ):
        response = authenticated_client_business_a.post('/api/units/', {
            'name': 'Tray',
            'short_name': 'tray',
            'unit_group': 'COUNT',
            'business': {'id': business_b.id, 'business_name': business_b.business_name},
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['business'] == business_a.id

    def test_unit_update_cross_business_returns_404(self, authenticated_client_business_a, unit_business_b):
        response = authenticated_client_business_a.patch(
            f'/api/units/{unit_business_b.id}/', {'name': 'Hijacked'}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        unit_business_b.refresh_from_db()
        assert unit_business_b.name == 'Pieces'

    def test_unit_update_cannot_move_to_other_business(
        self, authenticated_client_business_a, unit_business_a, business_a, business_b
    ):
        response = authenticated_client_business_a.patch(
            f'/api/units/{unit_business_a.id}/', {'business': business_b.id}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        unit_business_a.refresh_from_db()
        assert unit_business_a.business_id == business_a.id

    def test_unit_delete_cross_business_returns_404(self, authenticated_client_business_a, unit_business_b):
        response = authenticated_client_business_a.delete(f'/api/units/{unit_business_b.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Unit.objects.filter(pk=unit_business_b.id).exists()

    def test_same_short_name_allowed_in_different_businesses(
        self, authenticated_client_business_a, unit_business_b
    ):
        response = authenticated_client_business_a.post('/api/units/', {
            'name': 'Pieces',
            'short_name': 'pcs',
            'unit_group': 'COUNT',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestConversionsAPIIsolation:

    def test_conversions_list_filtered_by_business(
        self, authenticated_client_business_a, mass_units_business_a, business_b
    ):
        kg_b = make_unit(business_b, 'Kilogram', 'kg', UnitGroup.MASS, base=True)
        g_b = make_unit(business_b, 'Gram', 'g', UnitGroup.MASS)
        edge_b = UnitConversion.objects.create(
            business=business_b, from_unit=kg_b, to_unit=g_b, factor=Decimal('1000')
        )

        response = authenticated_client_business_a.get('/api/conversions/')

        assert response.status_code == status.HTTP_200_OK
        ids = result_ids(response)
        assert len(ids) == 1
        assert edge_b.id not in ids

    def test_conversion_with_foreign_unit_rejected(
        self, authenticated_client_business_a, unit_business_a, unit_business_b
    ):
        """
        CRITICAL: An edge may only connect units of the caller's business
        """
        response = authenticated_client_business_a.post('/api/conversions/', {
            'from_unit': unit_business_a.id,
            'to_unit': unit_business_b.id,
            'factor': '1',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert UnitConversion.objects.count() == 0

    def test_convert_cannot_use_other_business_units(
        self, authenticated_client_business_a, mass_units_business_a, unit_business_b
    ):
        response = authenticated_client_business_a.post('/api/conversions/convert/', {
            'from_unit': mass_units_business_a['kg'].id,
            'to_unit': unit_business_b.id,
            'quantity': '1',
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'unit_not_found'


@pytest.mark.django_db
class TestBusinessesAPIIsolation:

    def test_business_list_only_contains_own_business(
        self, authenticated_client_business_a, business_a, business_b
    ):
        response = authenticated_client_business_a.get('/api/businesses/')

        assert response.status_code == status.HTTP_200_OK
        assert result_ids(response) == [business_a.id]

    def test_other_business_detail_returns_404(self, authenticated_client_business_a, business_b):
        response = authenticated_client_business_a.get(f'/api/businesses/{business_b.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_other_business_update_returns_404(self, authenticated_client_business_a, business_b):
        response = authenticated_client_business_a.patch(
            f'/api/businesses/{business_b.id}/', {'business_name': 'Taken Over'}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        business_b.refresh_from_db()
        assert business_b.business_name == 'Burger Joint'

    def test_businesses_cannot_be_deleted(self, authenticated_client_business_a, business_a):
        response = authenticated_client_business_a.delete(f'/api/businesses/{business_a.id}/')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert Business.objects.filter(pk=business_a.id).exists()

    def test_platform_admin_sees_all_businesses(self, platform_admin_client, business_a, business_b):
        response = platform_admin_client.get('/api/businesses/')

        assert response.status_code == status.HTTP_200_OK
        assert sorted(result_ids(response)) == sorted([business_a.id, business_b.id])


@pytest.mark.django_db
class TestLocationsAPIIsolation:

    def test_locations_list_filtered_by_business(
        self, authenticated_client_business_a, location_business_a, location_business_b
    ):
        response = authenticated_client_business_a.get('/api/businesses/locations/')

        assert response.status_code == status.HTTP_200_OK
        assert result_ids(response) == [location_business_a.id]

    def test_location_create_generates_location_id(
        self, authenticated_client_business_a, business_a, location_business_a
    ):
        response = authenticated_client_business_a.post('/api/businesses/locations/', {
            'name': 'Second Store',
            'city': 'Pune',
            'country': 'India',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['business'] == business_a.id
        assert response.data['location_id'] == f'LOC-{business_a.id}-002'

    def test_location_id_must_be_unique(self, authenticated_client_business_a, location_business_b):
        response = authenticated_client_business_a.post('/api/businesses/locations/', {
            'name': 'Copycat',
            'location_id': location_business_b.location_id,
            'city': 'Pune',
            'country': 'India',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_new_default_location_replaces_previous_default(
        self, authenticated_client_business_a, location_business_a
    ):
        response = authenticated_client_business_a.post('/api/businesses/locations/', {
            'name': 'Flagship',
            'city': 'Pune',
            'country': 'India',
            'is_default': True,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        location_business_a.refresh_from_db()
        assert not location_business_a.is_default
        assert BusinessLocation.objects.get(pk=response.data['id']).is_default


@pytest.mark.django_db
class TestProfilesAPIIsolation:

    def test_profile_create_assigns_caller_business(
        self, authenticated_client_business_a, business_a, business_b
    ):
        response = authenticated_client_business_a.post('/api/users/profiles/', {
            'first_name': 'Ravi',
            'username': 'ravi_pizza',
            'role': 'cashier',
            'business': business_b.id,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert UserProfile.objects.get(pk=response.data['id']).business_id == business_a.id

    def test_profile_cannot_link_user_of_other_business(
        self, authenticated_client_business_a, admin_user_business_b
    ):
        response = authenticated_client_business_a.post('/api/users/profiles/', {
            'first_name': 'Spy',
            'username': 'spy',
            'user': admin_user_business_b.id,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_profile_cannot_link_user_without_business(
        self, authenticated_client_business_a, tenantless_user
    ):
        response = authenticated_client_business_a.post('/api/users/profiles/', {
            'first_name': 'Drifter',
            'username': 'drifter',
            'user': tenantless_user.id,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'user' in response.data['details']
        assert not UserProfile.objects.filter(user=tenantless_user).exists()

    def test_profile_links_user_of_own_business(
        self, authenticated_client_business_a, cashier_user_business_a
    ):
        response = authenticated_client_business_a.post('/api/users/profiles/', {
            'first_name': 'Meera',
            'username': 'meera',
            'user': cashier_user_business_a.id,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED

    def test_profiles_list_filtered_by_business(self, authenticated_client_business_a, business_a, business_b):
        own = UserProfile.objects.create(business=business_a, first_name='Own', username='own')
        UserProfile.objects.create(business=business_b, first_name='Other', username='other')

        response = authenticated_client_business_a.get('/api/users/profiles/')

        assert result_ids(response) == [own.id]

    def test_cashier_cannot_create_profiles(self, cashier_client_business_a):
        response = cashier_client_business_a.post('/api/users/profiles/', {
            'first_name': 'Ravi',
            'username': 'ravi_pizza',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestTenantlessCaller:
    """A user without a business sees nothing and writes nothing"""

    def test_list_is_empty(self, tenantless_client, unit_business_a, unit_business_b):
        response = tenantless_client.get('/api/units/')

        assert response.status_code == status.HTTP_200_OK
        assert result_ids(response) == []

    def test_detail_is_404(self, tenantless_client, unit_business_a):
        response = tenantless_client.get(f'/api/units/{unit_business_a.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_is_forbidden(self, tenantless_client, business_a):
        response = tenantless_client.post('/api/units/', {
            'name': 'Tray',
            'short_name': 'tray',
            'unit_group': 'COUNT',
            'business': business_a.id,
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Unit.objects.count() == 0

    def test_anonymous_request_is_401(self, api_client, unit_business_a):
        response = api_client.get('/api/units/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestPlatformAdminAccess:

    def test_platform_admin_sees_every_business_units(
        self, platform_admin_client, unit_business_a, unit_business_b
    ):
        response = platform_admin_client.get('/api/units/')

        assert sorted(result_ids(response)) == sorted([unit_business_a.id, unit_business_b.id])

    def test_platform_admin_creates_unit_for_chosen_business(self, platform_admin_client, business_b):
        response = platform_admin_client.post('/api/units/', {
            'name': 'Crate',
            'short_name': 'crt',
            'unit_group': 'COUNT',
            'business': business_b.id,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['business'] == business_b.id

    def test_platform_admin_must_name_a_business(self, platform_admin_client):
        response = platform_admin_client.post('/api/units/', {
            'name': 'Crate',
            'short_name': 'crt',
            'unit_group': 'COUNT',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'business' in response.data['details']
