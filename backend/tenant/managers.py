from django.db import models


class BusinessScopedQuerySet(models.QuerySet):
    """
    QuerySet for models that carry a ``business`` foreign key.

    FAILS CLOSED: scoping to a missing business returns an empty queryset,
    never the unfiltered table.

    Usage:
        class Unit(models.Model):
            business = models.ForeignKey('tenant.Business', on_delete=models.CASCADE)

            objects = BusinessScopedQuerySet.as_manager()

        Unit.objects.for_business(request.user.business)   # one tenant
        Unit.objects.with_access(filter_by_business(user))  # access decision
    """

    def for_business(self, business):
        """Restrict to one business. Accepts a Business, an id or {'id': ...}."""
        from tenant.access import normalize_tenant_ref

        business_id = normalize_tenant_ref(business)
        if business_id is None:
            return self.none()
        return self.filter(business_id=business_id)

    def with_access(self, decision):
        """Apply an AccessDecision produced by tenant.access."""
        return decision.apply(self)
