import logging

from rest_framework import filters, mixins, permissions, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from core_backend.base import BusinessScopedViewSet
from core_backend.base.mixins import BusinessScopedQuerysetMixin, OptimizedQuerysetMixin
from core_backend.pagination import StandardPagination
from tenant.access import filter_own_business, principal_business_id
from tenant.exceptions import NoBusinessError
from tenant.models import Business, BusinessLocation
from tenant.permissions import HasBusinessAccess
from tenant.serializers import BusinessLocationSerializer, BusinessSerializer
from tenant.services import BusinessRegistrationService

logger = logging.getLogger(__name__)

# Fields a caller may never change through /me/
PROTECTED_BUSINESS_FIELDS = ("id", "created_at", "updated_at")


class RegisterBusinessView(APIView):
    """
    POST /api/businesses/register/

    Public endpoint creating a business together with its first admin user.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        result = BusinessRegistrationService.register(request.data)
        return Response(
            {
                "message": "Business registered successfully",
                "businessId": result.business.pk,
                "userId": result.user.pk,
            },
            status=status.HTTP_201_CREATED,
        )


class MyBusinessView(APIView):
    """
    GET   /api/businesses/me/  - the caller's business
    PATCH /api/businesses/me/  - partial update of the caller's business
    """
    permission_classes = [permissions.IsAuthenticated]

    def get_business(self, request):
        business_id = principal_business_id(request.user)
        if business_id is None:
            raise NoBusinessError(request.user)
        try:
            return Business.objects.get(pk=business_id)
        except Business.DoesNotExist:
            raise NoBusinessError(request.user, message="Business not found")

    def get(self, request, *args, **kwargs):
        business = self.get_business(request)
        return Response({"success": True, "data": BusinessSerializer(business).data})

    def patch(self, request, *args, **kwargs):
        business = self.get_business(request)

        data = {
            key: value for key, value in request.data.items()
            if key not in PROTECTED_BUSINESS_FIELDS
        }
        serializer = BusinessSerializer(business, data=data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        logger.info(f"Business {business.pk} updated by user {request.user.pk}")
        return Response({
            "success": True,
            "message": "Business updated successfully",
            "data": serializer.data,
        })


class BusinessViewSet(
    BusinessScopedQuerysetMixin,
    OptimizedQuerysetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Businesses visible to the caller: their own, or all of them for platform
    admins. Businesses are created by registration and are never deleted
    through the API.
    """
    queryset = Business.objects.all()
    serializer_class = BusinessSerializer
    access_policy = staticmethod(filter_own_business)
    permission_classes = [permissions.IsAuthenticated, HasBusinessAccess]
    pagination_class = StandardPagination
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["business_name", "city", "country"]
    ordering_fields = ["business_name", "created_at"]
    ordering = ["business_name"]


class BusinessLocationViewSet(BusinessScopedViewSet):
    queryset = BusinessLocation.objects.all()
    serializer_class = BusinessLocationSerializer
    filterset_fields = ["is_active", "is_default"]
    search_fields = ["name", "location_id", "city"]
    ordering_fields = ["name", "created_at"]
    ordering = ["-is_default", "name"]
