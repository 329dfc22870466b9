"""
Unit and UnitConversion serializers.
"""
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.db.models import Q
from rest_framework import serializers

from core_backend.base.serializers import BaseModelSerializer
from core_backend.exceptions import Conflict
from measurements.models import Unit, UnitConversion
from tenant.models import Business
from tenant.serializers import BusinessSerializerMixin

FACTOR_QUANTUM = Decimal("0.000000000001")


class UnitSerializer(BusinessSerializerMixin, BaseModelSerializer):
    business = serializers.PrimaryKeyRelatedField(
        queryset=Business.objects.all(), required=False
    )

    class Meta:
        model = Unit
        fields = [
            'id', 'business', 'name', 'short_name', 'unit_group',
            'is_base_unit', 'allow_decimal', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        # Uniqueness is reported as 409 from validate()
        validators = []

    def validate_name(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError("Unit name must be at least 2 characters")
        if len(value) > 50:
            raise serializers.ValidationError("Unit name must not exceed 50 characters")
        return value

    def validate_short_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Short name is required")
        if len(value) > 10:
            raise serializers.ValidationError("Short name must not exceed 10 characters")
        return value

    def validate(self, data):
        data = super().validate(data)

        business = data.get('business') or getattr(self.instance, 'business', None)
        name = data.get('name', getattr(self.instance, 'name', None))
        short_name = data.get('short_name', getattr(self.instance, 'short_name', None))

        duplicates = Unit.objects.for_business(business).filter(
            Q(name=name) | Q(short_name=short_name)
        )
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise Conflict("Unit with this name or short name already exists")

        return data


class UnitConversionSerializer(BusinessSerializerMixin, BaseModelSerializer):
    """
    Read and create conversion edges.

    Creating A → B with factor f also creates B → A with factor 1/f unless
    that edge already exists.
    """
    business = serializers.PrimaryKeyRelatedField(
        queryset=Business.objects.all(), required=False
    )
    from_unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.all())
    to_unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.all())
    factor = serializers.DecimalField(max_digits=24, decimal_places=12, rounding=ROUND_HALF_UP)
    from_unit_short_name = serializers.CharField(source='from_unit.short_name', read_only=True)
    from_unit_name = serializers.CharField(source='from_unit.name', read_only=True)
    to_unit_short_name = serializers.CharField(source='to_unit.short_name', read_only=True)
    to_unit_name = serializers.CharField(source='to_unit.name', read_only=True)

    class Meta:
        model = UnitConversion
        fields = [
            'id', 'business',
            'from_unit', 'from_unit_short_name', 'from_unit_name',
            'to_unit', 'to_unit_short_name', 'to_unit_name',
            'factor', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        select_related_fields = ['from_unit', 'to_unit']
        validators = []

    def validate_factor(self, value):
        if value <= 0:
            raise serializers.ValidationError("factor must be a positive number")
        return value

    def validate(self, data):
        from_unit = data.get('from_unit', getattr(self.instance, 'from_unit', None))
        to_unit = data.get('to_unit', getattr(self.instance, 'to_unit', None))
        if from_unit is not None and from_unit == to_unit:
            raise serializers.ValidationError("from_unit and to_unit cannot be the same")

        data = super().validate(data)

        existing = UnitConversion.objects.filter(from_unit=from_unit, to_unit=to_unit)
        if self.instance is not None:
            existing = existing.exclude(pk=self.instance.pk)
        if existing.exists():
            raise Conflict("Conversion between these units already exists")

        return data

    def create(self, validated_data):
        with transaction.atomic():
            conversion = super().create(validated_data)

            reverse_factor = (Decimal("1") / conversion.factor).quantize(
                FACTOR_QUANTUM, rounding=ROUND_HALF_UP
            )
            reverse_exists = UnitConversion.objects.filter(
                from_unit=conversion.to_unit, to_unit=conversion.from_unit
            ).exists()
            if not reverse_exists and reverse_factor > 0:
                UnitConversion.objects.create(
                    business=conversion.business,
                    from_unit=conversion.to_unit,
                    to_unit=conversion.from_unit,
                    factor=reverse_factor,
                )
        return conversion


class ConvertRequestSerializer(serializers.Serializer):
    """
    Payload of POST /api/conversions/convert/.

    Accepts {fromUnit, toUnit, quantity} as well as the snake_case
    {from_unit, to_unit, value}. Units may be given by id or short name.
    """
    ALIASES = {
        'fromUnit': 'from_unit',
        'toUnit': 'to_unit',
        'value': 'quantity',
    }

    from_unit = serializers.CharField()
    to_unit = serializers.CharField()
    quantity = serializers.DecimalField(max_digits=30, decimal_places=12)
    precision = serializers.IntegerField(required=False, min_value=0, max_value=12)
    strict = serializers.BooleanField(required=False, default=True)

    def to_internal_value(self, data):
        normalized = dict(data.items()) if hasattr(data, 'items') else {}
        for alias, name in self.ALIASES.items():
            if alias in normalized and name not in normalized:
                normalized[name] = normalized.pop(alias)
        return super().to_internal_value(normalized)
