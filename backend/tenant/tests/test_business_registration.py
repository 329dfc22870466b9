"""
Business Registration Tests

Registration creates the business and its first admin atomically, adds a staff
profile and a default location, and seeds the default units once the
transaction commits.
"""
import pytest
from unittest.mock import patch

from django.db import DatabaseError
from rest_framework import status

from measurements.models import Unit, UnitConversion
from tenant.exceptions import DuplicateRegistrationError, RegistrationValidationError
from tenant.models import Business, BusinessLocation
from tenant.services import BusinessRegistrationService
from users.models import User, UserProfile

REGISTER_URL = '/api/businesses/register/'


def registration_payload(**overrides):
    payload = {
        "businessName": "Chai Point",
        "email": "Owner@Chai.com",
        "password": "Secret123",
        "country": "India",
        "city": "Pune",
        "firstName": "Asha",
        "lastName": "Rao",
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
class TestRegistrationAPI:

    def test_register_creates_business_and_admin(self, api_client):
        response = api_client.post(REGISTER_URL, registration_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["message"] == "Business registered successfully"

        business = Business.objects.get(pk=response.data["businessId"])
        user = User.objects.get(pk=response.data["userId"])

        assert business.business_name == "Chai Point"
        assert user.business_id == business.pk
        assert user.email == "owner@chai.com"
        assert user.roles == ["admin"]
        assert user.check_password("Secret123")

    def test_register_applies_business_defaults(self, api_client):
        response = api_client.post(REGISTER_URL, registration_payload(), format='json')

        business = Business.objects.get(pk=response.data["businessId"])
        assert business.state == "Unknown"
        assert business.zip_code == "000000"
        assert business.landmark == "N/A"
        assert business.currency == "USD"
        assert business.start_date is not None

    def test_register_creates_profile_and_default_location(self, api_client):
        response = api_client.post(REGISTER_URL, registration_payload(), format='json')
        business_id = response.data["businessId"]

        profile = UserProfile.objects.get(business_id=business_id)
        assert profile.role == UserProfile.Role.ADMIN
        assert profile.first_name == "Asha"
        assert profile.username.startswith("owner_")

        location = BusinessLocation.objects.get(business_id=business_id)
        assert location.name == "Main Store"
        assert location.location_id == f"LOC-{business_id}-001"
        assert location.is_default

    def test_register_seeds_default_units_after_commit(self, api_client, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            response = api_client.post(REGISTER_URL, registration_payload(), format='json')

        business_id = response.data["businessId"]
        assert len(callbacks) == 1
        assert Unit.objects.filter(business_id=business_id).count() == 11
        assert UnitConversion.objects.filter(business_id=business_id).count() == 16

    def test_units_are_not_seeded_before_commit(self, api_client, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False):
            response = api_client.post(REGISTER_URL, registration_payload(), format='json')

        assert Unit.objects.filter(business_id=response.data["businessId"]).count() == 0

    def test_seeding_failure_keeps_the_business(self, api_client, django_capture_on_commit_callbacks):
        with patch(
            "measurements.services.seeding.seed_default_units",
            side_effect=RuntimeError("catalog unavailable"),
        ):
            with django_capture_on_commit_callbacks(execute=True):
                response = api_client.post(REGISTER_URL, registration_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        business_id = response.data["businessId"]
        assert Business.objects.filter(pk=business_id).exists()
        assert Unit.objects.filter(business_id=business_id).count() == 0

    def test_duplicate_email_returns_409(self, api_client):
        User.objects.create_user(email="owner@chai.com", password="Secret123")

        response = api_client.post(REGISTER_URL, registration_payload(), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["code"] == "conflict"
        assert "already exists" in response.data["error"]
        assert Business.objects.count() == 0

    def test_missing_fields_returns_400_and_creates_nothing(self, api_client):
        response = api_client.post(REGISTER_URL, {"businessName": "Chai Point"}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "Missing required fields"
        assert response.data["code"] == "validation_failed"
        assert Business.objects.count() == 0
        assert User.objects.count() == 0

    def test_non_string_business_name_returns_400(self, api_client):
        response = api_client.post(REGISTER_URL, registration_payload(businessName=12345), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "businessName must be a string"
        assert response.data["code"] == "validation_failed"
        assert Business.objects.count() == 0

    def test_registration_does_not_require_authentication(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")

        response = api_client.post(REGISTER_URL, registration_payload(), format='json')

        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestRegistrationValidation:

    @pytest.mark.parametrize("password, message", [
        ("Short1", "Password must be at least 8 characters long"),
        ("lowercase123", "Password must contain at least one uppercase letter"),
        ("UPPERCASE123", "Password must contain at least one lowercase letter"),
        ("NoDigitsHere", "Password must contain at least one number"),
    ])
    def test_weak_passwords_are_rejected(self, password, message):
        with pytest.raises(RegistrationValidationError) as exc_info:
            BusinessRegistrationService.register(registration_payload(password=password))

        assert str(exc_info.value) == message
        assert exc_info.value.field == "password"
        assert Business.objects.count() == 0

    @pytest.mark.parametrize("email", ["not-an-email", "owner@chai", "owner chai@x.com"])
    def test_invalid_email(self, email):
        with pytest.raises(RegistrationValidationError, match="Invalid email format"):
            BusinessRegistrationService.register(registration_payload(email=email))

    @pytest.mark.parametrize("field, value", [
        ("email", ["owner@chai.com"]),
        ("password", 12345678),
        ("currency", 356),
    ])
    def test_non_string_fields_are_rejected(self, field, value):
        with pytest.raises(RegistrationValidationError) as exc_info:
            BusinessRegistrationService.register(registration_payload(**{field: value}))

        assert exc_info.value.field == field
        assert Business.objects.count() == 0

    def test_business_name_too_short(self):
        with pytest.raises(RegistrationValidationError, match="at least 2 characters"):
            BusinessRegistrationService.register(registration_payload(businessName=" A "))

    def test_business_name_too_long(self):
        with pytest.raises(RegistrationValidationError, match="must not exceed 100 characters"):
            BusinessRegistrationService.register(registration_payload(businessName="B" * 101))

    def test_duplicate_email_is_case_insensitive(self):
        BusinessRegistrationService.register(registration_payload())

        with pytest.raises(DuplicateRegistrationError):
            BusinessRegistrationService.register(
                registration_payload(email="OWNER@chai.com", businessName="Chai Point Two")
            )

        assert Business.objects.count() == 1

    def test_profile_failure_does_not_abort_registration(self):
        with patch.object(UserProfile.objects, "create", side_effect=DatabaseError("profiles table locked")):
            result = BusinessRegistrationService.register(registration_payload())

        assert result.profile is None
        assert result.location is not None
        assert Business.objects.filter(pk=result.business.pk).exists()
        assert User.objects.filter(pk=result.user.pk).exists()

    def test_optional_address_fields_are_used(self):
        result = BusinessRegistrationService.register(
            registration_payload(state="Karnataka", zipCode="560001", currency="INR")
        )

        assert result.business.state == "Karnataka"
        assert result.business.zip_code == "560001"
        assert result.business.currency == "INR"
        assert result.location.state == "Karnataka"
