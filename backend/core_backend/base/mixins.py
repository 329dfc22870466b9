from rest_framework.viewsets import ViewSetMixin
from django.db.models import Prefetch

from tenant.access import filter_by_business, is_platform_admin


class OptimizedQuerysetMixin(ViewSetMixin):
    """
    A ViewSet mixin that optimizes the queryset by inspecting the associated
    serializer's Meta for `select_related_fields` and `prefetch_related_fields`.
    """

    def _get_optimizations(self, serializer_class):
        select_related = set()
        prefetch_related = set()

        meta = getattr(serializer_class, "Meta", None)
        if meta is None:
            return select_related, prefetch_related

        for field in getattr(meta, "select_related_fields", []):
            select_related.add(field)

        for field in getattr(meta, "prefetch_related_fields", []):
            # Prefetch objects are passed through untouched
            prefetch_related.add(field if isinstance(field, Prefetch) else str(field))

        return select_related, prefetch_related

    def get_queryset(self):
        queryset = super().get_queryset()

        try:
            serializer_class = self.get_serializer_class()
        except (AttributeError, AssertionError):
            return queryset

        select_related, prefetch_related = self._get_optimizations(serializer_class)

        if select_related:
            queryset = queryset.select_related(*select_related)

        if prefetch_related:
            queryset = queryset.prefetch_related(*prefetch_related)

        return queryset


class BusinessScopedQuerysetMixin:
    """
    Filters the queryset through the view's access policy.

    Usage:
        class UnitViewSet(BusinessScopedQuerysetMixin, BaseViewSet):
            # Queryset is filtered by filter_by_business(request.user)

    Collections that are not keyed by ``business`` swap the policy:

        class BusinessViewSet(BusinessScopedQuerysetMixin, BaseViewSet):
            access_policy = staticmethod(filter_own_business)

    FAILS CLOSED: a DENY decision produces an empty queryset, so list
    endpoints return nothing and detail endpoints return 404.
    """

    access_policy = staticmethod(filter_by_business)

    def get_access_decision(self):
        # Decided once per request; the view instance lives for one request
        if not hasattr(self, "_access_decision"):
            self._access_decision = self.access_policy(self.request.user)
        return self._access_decision

    def caller_is_platform_admin(self):
        if not hasattr(self, "_is_platform_admin"):
            self._is_platform_admin = is_platform_admin(self.request.user)
        return self._is_platform_admin

    def get_queryset(self):
        qs = super().get_queryset()
        return self.get_access_decision().apply(qs)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if getattr(self, "request", None) is not None:
            context["is_platform_admin"] = self.caller_is_platform_admin()
        return context
