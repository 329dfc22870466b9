from rest_framework import viewsets, filters
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend

from tenant.permissions import HasBusinessAccess
from .mixins import OptimizedQuerysetMixin, BusinessScopedQuerysetMixin
from ..pagination import StandardPagination


class BaseViewSet(OptimizedQuerysetMixin, viewsets.ModelViewSet):
    """
    Base ViewSet that provides standard configuration for all ModelViewSets.

    Features:
    - Automatic query optimization via OptimizedQuerysetMixin
    - Standard pagination, filtering, and search

    Usage:
        class LocationViewSet(BaseViewSet):
            serializer_class = BusinessLocationSerializer
            # optimization is handled automatically via serializer Meta
    """

    pagination_class = StandardPagination

    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]

    # Default ordering (can be overridden)
    ordering = ['-id']

    def get_queryset(self):
        """
        Re-evaluates the class-level queryset at request time, then passes it
        through the mixin chain.
        """
        if getattr(self, 'queryset', None) is not None:
            model = self.queryset.model
            original_queryset = self.queryset
            self.queryset = model.objects.all()
            try:
                return super().get_queryset()
            finally:
                # Restore original to avoid side effects on other requests
                self.queryset = original_queryset
        return super().get_queryset()


class BusinessScopedViewSet(BusinessScopedQuerysetMixin, BaseViewSet):
    """
    BaseViewSet for business-scoped collections.

    - Reads are filtered by the access policy (empty when denied)
    - Writes are rejected with 403 when the policy denies the caller
    - The serializer context carries ``is_platform_admin`` so
      BusinessSerializerMixin can stamp the caller's business

    MRO: BusinessScopedQuerysetMixin → OptimizedQuerysetMixin → ModelViewSet
    """

    permission_classes = [IsAuthenticated, HasBusinessAccess]
