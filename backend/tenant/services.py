"""
Business registration.

Creates the tenant and its first admin in one transaction, then adds the
conveniences (staff profile, default location) best effort. Default units are
seeded by measurements.signals once the transaction commits.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from tenant.exceptions import DuplicateRegistrationError, RegistrationValidationError
from tenant.models import Business, BusinessLocation

logger = logging.getLogger(__name__)

User = get_user_model()

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS = ("businessName", "email", "password", "country", "city")

OPTIONAL_TEXT_FIELDS = ("state", "zipCode", "landmark", "currency", "timezone")

DEFAULT_LOCATION_NAME = "Main Store"


@dataclass
class RegistrationResult:
    business: Business
    user: "User"
    profile: Optional[object] = None
    location: Optional[BusinessLocation] = None


def validate_business_name(name):
    if not name or len(name.strip()) < 2:
        raise RegistrationValidationError("Business name must be at least 2 characters", field="businessName")
    if len(name) > 100:
        raise RegistrationValidationError("Business name must not exceed 100 characters", field="businessName")


def validate_email(email):
    if not email or not EMAIL_RE.match(email):
        raise RegistrationValidationError("Invalid email format", field="email")


def validate_password(password):
    if not password or len(password) < 8:
        raise RegistrationValidationError("Password must be at least 8 characters long", field="password")
    if not re.search(r"[A-Z]", password):
        raise RegistrationValidationError("Password must contain at least one uppercase letter", field="password")
    if not re.search(r"[a-z]", password):
        raise RegistrationValidationError("Password must contain at least one lowercase letter", field="password")
    if not re.search(r"[0-9]", password):
        raise RegistrationValidationError("Password must contain at least one number", field="password")


class BusinessRegistrationService:

    @staticmethod
    def validate(data):
        """Raise RegistrationValidationError for the first problem found."""
        if any(not data.get(field) for field in REQUIRED_FIELDS):
            raise RegistrationValidationError("Missing required fields")

        for field in REQUIRED_FIELDS + OPTIONAL_TEXT_FIELDS:
            value = data.get(field)
            if value is not None and not isinstance(value, str):
                raise RegistrationValidationError(f"{field} must be a string", field=field)

        validate_business_name(data["businessName"])
        validate_email(data["email"])
        validate_password(data["password"])

    @staticmethod
    def register(data) -> RegistrationResult:
        """
        Register a new business with its admin user.

        Raises:
            RegistrationValidationError: payload incomplete or malformed; nothing is created
            DuplicateRegistrationError: the email already has an account
        """
        BusinessRegistrationService.validate(data)

        email = data["email"].strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise DuplicateRegistrationError(email)

        defaults = settings.BUSINESS_DEFAULTS

        try:
            with transaction.atomic():
                business = Business.objects.create(
                    business_name=data["businessName"].strip(),
                    country=data["country"],
                    city=data["city"],
                    state=data.get("state") or defaults["state"],
                    zip_code=data.get("zipCode") or defaults["zip_code"],
                    landmark=data.get("landmark") or defaults["landmark"],
                    currency=data.get("currency") or defaults["currency"],
                    timezone=data.get("timezone") or defaults["timezone"],
                    financial_year_start=defaults["financial_year_start"],
                    stock_accounting_method=defaults["stock_accounting_method"],
                    start_date=timezone.now(),
                )

                user = User.objects.create_user(
                    email=email,
                    password=data["password"],
                    business=business,
                    first_name=data.get("firstName") or "",
                    last_name=data.get("lastName") or "",
                    roles=[User.Role.ADMIN],
                )

                result = RegistrationResult(business=business, user=user)
                result.profile = BusinessRegistrationService._create_profile(business, user, data)
                result.location = BusinessRegistrationService._create_default_location(business, data)
        except IntegrityError:
            # Lost a race against a concurrent registration with the same email
            if User.objects.filter(email__iexact=email).exists():
                raise DuplicateRegistrationError(email)
            raise

        logger.info(f"Registered business {business.pk} ({business.business_name}) for {email}")
        return result

    @staticmethod
    def _create_profile(business, user, data):
        from users.models import UserProfile

        try:
            with transaction.atomic():
                return UserProfile.objects.create(
                    business=business,
                    user=user,
                    username=f"{user.email.split('@')[0]}_{int(timezone.now().timestamp() * 1000)}",
                    first_name=data.get("firstName") or "Admin",
                    last_name=data.get("lastName") or "",
                    email=user.email,
                    role=UserProfile.Role.ADMIN,
                )
        except DatabaseError:
            logger.error(f"Profile creation failed for business {business.pk}", exc_info=True)
            return None

    @staticmethod
    def _create_default_location(business, data):
        defaults = settings.BUSINESS_DEFAULTS
        try:
            with transaction.atomic():
                return BusinessLocation.objects.create(
                    business=business,
                    name=DEFAULT_LOCATION_NAME,
                    location_id=f"LOC-{business.pk}-001",
                    city=data["city"],
                    state=data.get("state") or defaults["state"],
                    zip_code=data.get("zipCode") or defaults["zip_code"],
                    country=data["country"],
                    landmark=data.get("landmark") or "",
                    is_active=True,
                    is_default=True,
                )
        except DatabaseError:
            logger.error(f"Default location creation failed for business {business.pk}", exc_info=True)
            return None
