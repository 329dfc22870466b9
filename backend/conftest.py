"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from django.conf import settings
from django.core.cache import cache


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def clear_cache_after_test():
    """
    Clear cache after each test to prevent cache pollution.
    """
    yield
    cache.clear()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

def _client_for(user):
    """
    APIClient carrying the user's access token in the auth cookie, the way a
    browser client calls the API after login.
    """
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.cookies[settings.SIMPLE_JWT.get('AUTH_COOKIE', 'access_token')] = str(refresh.access_token)
    return client


@pytest.fixture
def api_client():
    """
    Provide an unauthenticated DRF API client.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/units/')
            assert response.status_code == 401
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def authenticated_client_business_a(admin_user_business_a):
    """
    Provide authenticated API client for the admin of business A.

    Usage:
        def test_protected_endpoint(authenticated_client_business_a):
            response = authenticated_client_business_a.get('/api/units/')
            assert response.status_code == 200
    """
    return _client_for(admin_user_business_a)


@pytest.fixture
def authenticated_client_business_b(admin_user_business_b):
    """Provide authenticated API client for the admin of business B."""
    return _client_for(admin_user_business_b)


@pytest.fixture
def cashier_client_business_a(cashier_user_business_a):
    return _client_for(cashier_user_business_a)


@pytest.fixture
def tenantless_client(tenantless_user):
    """Authenticated client for a user without a business."""
    return _client_for(tenantless_user)


@pytest.fixture
def platform_admin_client(platform_admin_user):
    return _client_for(platform_admin_user)


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *  # noqa: E402,F401,F403
