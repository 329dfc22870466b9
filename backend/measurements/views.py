"""
Unit and UnitConversion views.
"""
import logging

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core_backend.base import BusinessScopedViewSet
from measurements.filters import UnitConversionFilterSet, UnitFilterSet
from measurements.models import Unit, UnitConversion
from measurements.serializers import (
    ConvertRequestSerializer,
    UnitConversionSerializer,
    UnitSerializer,
)
from measurements.services import (
    ConversionService,
    get_unit_group_catalog,
    normalize_unit_group,
    seed_default_units,
)
from tenant.access import principal_business_id
from tenant.exceptions import NoBusinessError
from tenant.models import Business

logger = logging.getLogger(__name__)


def get_caller_business(request):
    """The caller's own business, or NoBusinessError (404)."""
    business_id = principal_business_id(request.user)
    if business_id is None:
        raise NoBusinessError(request.user)
    business = Business.objects.filter(pk=business_id).first()
    if business is None:
        raise NoBusinessError(request.user, message="Business not found")
    return business


class UnitViewSet(BusinessScopedViewSet):
    """
    ViewSet for managing the units of the caller's business.

    list: Units of the caller's business (all businesses for platform admins).
    create / update / destroy: Scoped writes; the business is stamped from the caller.
    seed_defaults: Create the default catalog for a business without units.
    groups / groups_in_use / by_group: Unit group listings.
    """
    queryset = Unit.objects.all()
    serializer_class = UnitSerializer
    filterset_class = UnitFilterSet
    search_fields = ['name', 'short_name']
    ordering_fields = ['name', 'short_name', 'unit_group', 'created_at']
    ordering = ['unit_group', 'name']

    @action(
        detail=False,
        methods=['post'],
        url_path='seed-defaults',
        permission_classes=[IsAuthenticated],
    )
    def seed_defaults(self, request):
        business = get_caller_business(request)
        outcome = seed_default_units(business)

        logger.info(f"Default units seeded on request for business {business.pk} by user {request.user.pk}")
        return Response({
            "success": True,
            "message": "Default units and conversions created successfully",
            "data": {
                "unitsCreated": outcome.units_created,
                "conversionsCreated": outcome.conversions_created,
                "units": outcome.unit_short_names,
            },
        })

    @action(detail=False, methods=['get'], url_path='groups')
    def groups(self, request):
        return Response({"success": True, "data": get_unit_group_catalog()})

    @action(detail=False, methods=['get'], url_path='groups/in-use')
    def groups_in_use(self, request):
        groups = (
            self.get_queryset()
            .order_by('unit_group')
            .values_list('unit_group', flat=True)
            .distinct()
        )
        return Response({"success": True, "data": list(groups)})

    @action(detail=False, methods=['get'], url_path=r'by-group/(?P<group>[^/.]+)')
    def by_group(self, request, group=None):
        group = normalize_unit_group(group)
        units = self.get_queryset().filter(unit_group=group).order_by('name')
        return Response({
            "success": True,
            "group": group,
            "data": UnitSerializer(units, many=True).data,
        })


class UnitConversionViewSet(BusinessScopedViewSet):
    """
    ViewSet for managing conversion edges.

    list: Edges of the caller's business.
    create: Create an edge and its reverse (1/factor).
    destroy: Delete one edge.
    convert: Convert a quantity between two units of the caller's business.
    """
    queryset = UnitConversion.objects.all()
    serializer_class = UnitConversionSerializer
    filterset_class = UnitConversionFilterSet
    ordering_fields = ['from_unit__short_name', 'to_unit__short_name', 'created_at']
    ordering = ['from_unit__short_name', 'to_unit__short_name']
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def create(self, request, *args, **kwargs):
        response = super().create(request, *args, **kwargs)
        response.data = {
            "success": True,
            "message": "Conversion created successfully (reverse conversion also created)",
            "data": response.data,
        }
        return response

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated])
    def convert(self, request):
        serializer = ConvertRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        business = get_caller_business(request)
        result = ConversionService(business).convert_with_details(
            params['quantity'],
            params['from_unit'],
            params['to_unit'],
            precision=params.get('precision'),
            strict=params.get('strict', True),
        )

        return Response({
            "success": True,
            "data": {
                "original_value": result.original_value,
                "original_unit": result.original_unit.short_name,
                "converted_value": result.converted_value,
                "converted_unit": result.converted_unit.short_name,
                "factor": result.factor,
            },
        }, status=status.HTTP_200_OK)
