"""
Tenant scoping guard and tenant auto-assignment.

Every read/update/delete of business-scoped data goes through one of the
policies below. A policy never filters rows itself; it returns an
AccessDecision that the query layer applies:

    ALLOW   - platform admin, no filter
    FILTER  - declarative equality filter, e.g. business == <caller's business>
    DENY    - anonymous caller, or caller without a business

Usage:
    decision = filter_by_business(request.user)
    units = Unit.objects.with_access(decision)

    data = assign_business(request.user, dict(payload))
"""
import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from django.db import DatabaseError, models

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


class AccessKind(str, enum.Enum):
    ALLOW = "allow"
    DENY = "deny"
    FILTER = "filter"


@dataclass(frozen=True)
class AccessDecision:
    kind: AccessKind
    lookups: dict = field(default_factory=dict)

    @classmethod
    def allow(cls):
        return cls(AccessKind.ALLOW)

    @classmethod
    def deny(cls):
        return cls(AccessKind.DENY)

    @classmethod
    def filter_by(cls, **lookups):
        return cls(AccessKind.FILTER, dict(lookups))

    @property
    def is_allowed(self):
        return self.kind is AccessKind.ALLOW

    @property
    def is_denied(self):
        return self.kind is AccessKind.DENY

    @property
    def is_filtered(self):
        return self.kind is AccessKind.FILTER

    def apply(self, queryset):
        """Translate the decision into a queryset. DENY yields an empty queryset."""
        if self.is_allowed:
            return queryset
        if self.is_denied:
            return queryset.none()
        return queryset.filter(**self.lookups)

    def permits(self, record):
        """Evaluate the decision against an already loaded record."""
        if self.is_allowed:
            return True
        if self.is_denied:
            return False
        for name, expected in self.lookups.items():
            # Prefer the raw FK column so the related row is not loaded
            actual = getattr(record, f"{name}_id", None)
            if actual is None:
                actual = getattr(record, name, None)
            if not same_tenant(actual, expected):
                return False
        return True


def normalize_tenant_ref(ref):
    """
    Reduce a tenant reference to its id.

    A relation can arrive as a bare id, as an embedded object ({"id": 7, ...})
    or as a model instance. Returns None when no tenant is referenced.
    """
    if ref is None or ref == "":
        return None
    if isinstance(ref, models.Model):
        return ref.pk
    if isinstance(ref, Mapping):
        return normalize_tenant_ref(ref.get("id"))
    return ref


def same_tenant(left, right):
    left_id = normalize_tenant_ref(left)
    right_id = normalize_tenant_ref(right)
    if left_id is None or right_id is None:
        return False
    return str(left_id) == str(right_id)


def _is_authenticated(user):
    return user is not None and bool(getattr(user, "is_authenticated", False))


def principal_business_id(user):
    """Business id of the caller, or None for anonymous/tenantless callers."""
    if not _is_authenticated(user):
        return None
    business_id = getattr(user, "business_id", None)
    if business_id is not None:
        return business_id
    return normalize_tenant_ref(getattr(user, "business", None))


def has_role(user, role):
    return role in (getattr(user, "roles", None) or [])


def is_platform_admin(user):
    """
    True when the caller has an active row in the platform admin allow-list.

    Lookup failures are treated as "not a platform admin".
    """
    if not _is_authenticated(user):
        return False

    from users.models import PlatformAdmin

    try:
        return PlatformAdmin.objects.filter(user_id=user.pk, is_active=True).exists()
    except DatabaseError:
        logger.exception("Platform admin check failed for user %s", user.pk)
        return False


# ============================================================================
# POLICIES
# ============================================================================

def filter_by_business(user):
    """Policy for business-scoped collections: compares record.business."""
    if not _is_authenticated(user):
        return AccessDecision.deny()
    if is_platform_admin(user):
        return AccessDecision.allow()

    business_id = principal_business_id(user)
    if business_id is None:
        return AccessDecision.deny()
    return AccessDecision.filter_by(business=business_id)


def filter_own_business(user):
    """
    Policy for the Business collection itself.

    A business does not reference itself through a ``business`` field, so the
    record's own id is compared instead.
    """
    if not _is_authenticated(user):
        return AccessDecision.deny()
    if is_platform_admin(user):
        return AccessDecision.allow()

    business_id = principal_business_id(user)
    if business_id is None:
        return AccessDecision.deny()
    return AccessDecision.filter_by(id=business_id)


def filter_users(user, action="read"):
    """
    Policy for the Users collection.

    Business admins manage the users of their business; everyone else can only
    see and edit themselves, and cannot delete.
    """
    if not _is_authenticated(user):
        return AccessDecision.deny()
    if is_platform_admin(user):
        return AccessDecision.allow()

    business_id = principal_business_id(user)
    if has_role(user, ADMIN_ROLE) and business_id is not None:
        return AccessDecision.filter_by(business=business_id)
    if action == "delete":
        return AccessDecision.deny()
    return AccessDecision.filter_by(id=user.pk)


def platform_admin_only(user):
    if is_platform_admin(user):
        return AccessDecision.allow()
    return AccessDecision.deny()


# ============================================================================
# AUTO-ASSIGNMENT
# ============================================================================

def assign_business(user, data, *, instance=None, platform_admin=None, field_name="business"):
    """
    Stamp the caller's business onto an incoming payload before it is persisted.

    - A platform admin who supplied a business keeps it.
    - Any other caller with a business gets their own business stamped,
      whatever the payload said.
    - A caller without a business gets the field removed, so a required
      ``business`` fails validation instead of being filled in.
    - Updates that do not mention the business leave it unchanged.

    Returns the (mutated) payload.
    """
    if not _is_authenticated(user):
        return data

    if instance is not None and field_name not in data:
        return data

    if platform_admin is None:
        platform_admin = is_platform_admin(user)

    supplied = normalize_tenant_ref(data.get(field_name))
    if platform_admin and supplied is not None:
        return data

    business_id = principal_business_id(user)
    if business_id is not None:
        data[field_name] = business_id
    else:
        data.pop(field_name, None)
    return data
