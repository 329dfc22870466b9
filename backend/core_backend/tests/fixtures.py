"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like businesses, users and units.
"""
import pytest
from decimal import Decimal

from measurements.models import Unit, UnitConversion, UnitGroup
from tenant.models import Business, BusinessLocation
from users.models import PlatformAdmin, User


# ============================================================================
# BUSINESS FIXTURES
# ============================================================================

def make_business(name, city="Pune", country="India"):
    return Business.objects.create(
        business_name=name,
        country=country,
        city=city,
        state="MH",
        zip_code="411001",
        landmark="Near the station",
    )


@pytest.fixture
def business_a(db):
    """Create test business A (Pizza Place)"""
    return make_business("Pizza Place")


@pytest.fixture
def business_b(db):
    """Create test business B (Burger Joint)"""
    return make_business("Burger Joint", city="Mumbai")


@pytest.fixture
def location_business_a(business_a):
    return BusinessLocation.objects.create(
        business=business_a,
        name="Main Store",
        location_id=f"LOC-{business_a.pk}-001",
        city="Pune",
        country="India",
        is_default=True,
    )


@pytest.fixture
def location_business_b(business_b):
    return BusinessLocation.objects.create(
        business=business_b,
        name="Main Store",
        location_id=f"LOC-{business_b.pk}-001",
        city="Mumbai",
        country="India",
        is_default=True,
    )


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def admin_user_business_a(business_a):
    """Create admin user for business A"""
    return User.objects.create_user(
        email='admin@pizza.com',
        password='Password123',
        business=business_a,
        roles=[User.Role.ADMIN],
    )


@pytest.fixture
def admin_user_business_b(business_b):
    """Create admin user for business B"""
    return User.objects.create_user(
        email='admin@burger.com',
        password='Password123',
        business=business_b,
        roles=[User.Role.ADMIN],
    )


@pytest.fixture
def cashier_user_business_a(business_a):
    """Create cashier user for business A"""
    return User.objects.create_user(
        email='cashier@pizza.com',
        password='Password123',
        business=business_a,
        roles=[User.Role.CASHIER],
    )


@pytest.fixture
def tenantless_user(db):
    """Authenticated principal that belongs to no business"""
    return User.objects.create_user(
        email='drifter@example.com',
        password='Password123',
    )


@pytest.fixture
def platform_admin_user(db):
    """User listed in the platform admin allow-list, without a business"""
    user = User.objects.create_user(
        email='root@platform.com',
        password='Password123',
    )
    PlatformAdmin.objects.create(user=user, full_name='Platform Root')
    return user


# ============================================================================
# UNIT FIXTURES
# ============================================================================

def make_unit(business, name, short_name, group, base=False):
    return Unit.objects.create(
        business=business,
        name=name,
        short_name=short_name,
        unit_group=group,
        is_base_unit=base,
        allow_decimal=base,
    )


@pytest.fixture
def mass_units_business_a(business_a):
    """kg and g for business A with the kg → g edge only"""
    kg = make_unit(business_a, 'Kilogram', 'kg', UnitGroup.MASS, base=True)
    g = make_unit(business_a, 'Gram', 'g', UnitGroup.MASS)
    UnitConversion.objects.create(business=business_a, from_unit=kg, to_unit=g, factor=Decimal('1000'))
    return {'kg': kg, 'g': g}


@pytest.fixture
def unit_business_a(business_a):
    return make_unit(business_a, 'Pieces', 'pcs', UnitGroup.COUNT, base=True)


@pytest.fixture
def unit_business_b(business_b):
    return make_unit(business_b, 'Pieces', 'pcs', UnitGroup.COUNT, base=True)
