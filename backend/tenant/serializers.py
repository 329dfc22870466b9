from rest_framework import serializers

from core_backend.base.serializers import BaseModelSerializer
from tenant.access import assign_business, normalize_tenant_ref
from tenant.models import Business, BusinessLocation


class BusinessSerializerMixin:
    """
    Mixin for serializers of business-scoped models.

    - Stamps the caller's business onto the payload before field validation
      (see tenant.access.assign_business)
    - Accepts the business as an id or as an embedded object {"id": ...}
    - Rejects creates that end up without a business
    - Validates that all related objects belong to the same business

    Usage:
        class UnitConversionSerializer(BusinessSerializerMixin, BaseModelSerializer):
            business = serializers.PrimaryKeyRelatedField(
                queryset=Business.objects.all(), required=False
            )

            class Meta:
                model = UnitConversion
                fields = ['id', 'business', 'from_unit', 'to_unit', 'factor']

            # Mixin automatically:
            # - Sets business from the request user
            # - Validates from_unit.business == to_unit.business == business
    """

    business_field = 'business'

    def to_internal_value(self, data):
        request = self.context.get('request')
        if request is not None:
            data = data.copy() if hasattr(data, 'copy') else dict(data)
            assign_business(
                request.user,
                data,
                instance=self.instance,
                platform_admin=self.context.get('is_platform_admin'),
                field_name=self.business_field,
            )
            if self.business_field in data:
                data[self.business_field] = normalize_tenant_ref(data[self.business_field])
        return super().to_internal_value(data)

    def validate(self, data):
        business = data.get(self.business_field)
        if business is None and self.instance is not None:
            business = getattr(self.instance, self.business_field, None)

        if business is None:
            raise serializers.ValidationError({
                self.business_field: "A business is required for this record."
            })

        # Related objects with a business field must share it; no business is a mismatch
        for field_name, value in data.items():
            if field_name == self.business_field or not hasattr(value, 'business_id'):
                continue
            if value.business_id != business.pk:
                raise serializers.ValidationError({
                    field_name: f"Must belong to business {business.pk}"
                })

        return super().validate(data)


class BusinessSerializer(BaseModelSerializer):
    class Meta:
        model = Business
        fields = [
            'id', 'business_name', 'start_date', 'logo_url', 'business_contact',
            'country', 'city', 'state', 'zip_code', 'landmark',
            'currency', 'timezone', 'website', 'alternate_contact',
            'tax1_name', 'tax1_number', 'tax2_name', 'tax2_number',
            'financial_year_start', 'stock_accounting_method',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_business_name(self, value):
        value = value.strip()
        if len(value) < 2 or len(value) > 100:
            raise serializers.ValidationError("Business name must be between 2 and 100 characters")
        return value


class BusinessLocationSerializer(BusinessSerializerMixin, BaseModelSerializer):
    business = serializers.PrimaryKeyRelatedField(
        queryset=Business.objects.all(), required=False
    )
    location_id = serializers.CharField(max_length=50, required=False)

    class Meta:
        model = BusinessLocation
        fields = [
            'id', 'business', 'name', 'location_id', 'city', 'state',
            'zip_code', 'country', 'landmark', 'is_active', 'is_default',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        select_related_fields = ['business']

    def validate_location_id(self, value):
        queryset = BusinessLocation.objects.filter(location_id=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("A location with this location_id already exists")
        return value

    def create(self, validated_data):
        if not validated_data.get('location_id'):
            business = validated_data['business']
            sequence = BusinessLocation.objects.for_business(business).count() + 1
            validated_data['location_id'] = next_location_id(business, sequence)
        return super().create(validated_data)


def next_location_id(business, sequence):
    """LOC-<business id>-<nnn>, skipping ids already taken."""
    while True:
        candidate = f"LOC-{business.pk}-{sequence:03d}"
        if not BusinessLocation.objects.filter(location_id=candidate).exists():
            return candidate
        sequence += 1
