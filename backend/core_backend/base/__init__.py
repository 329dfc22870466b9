"""
Core backend base components.

Foundational viewsets, serializers, mixins and filters shared by every app.
"""

from .viewsets import BaseViewSet, BusinessScopedViewSet
from .serializers import BaseModelSerializer
from .mixins import OptimizedQuerysetMixin, BusinessScopedQuerysetMixin
from .filters import BaseFilterSet

__all__ = [
    # ViewSets
    'BaseViewSet',
    'BusinessScopedViewSet',

    # Serializers
    'BaseModelSerializer',

    # Mixins
    'OptimizedQuerysetMixin',
    'BusinessScopedQuerysetMixin',

    # Filters
    'BaseFilterSet',
]
