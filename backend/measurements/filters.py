import django_filters

from core_backend.base.filters import BaseFilterSet
from measurements.models import Unit, UnitConversion, UnitGroup


class UnitFilterSet(BaseFilterSet):
    unit_group = django_filters.ChoiceFilter(choices=UnitGroup.choices)

    class Meta:
        model = Unit
        fields = ['unit_group', 'is_base_unit', 'allow_decimal']


class UnitConversionFilterSet(BaseFilterSet):
    unit = django_filters.NumberFilter(method='filter_unit')

    class Meta:
        model = UnitConversion
        fields = ['from_unit', 'to_unit']

    def filter_unit(self, queryset, name, value):
        """Edges touching the unit in either direction."""
        return queryset.filter(from_unit_id=value) | queryset.filter(to_unit_id=value)
