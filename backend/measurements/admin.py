"""
Django admin configuration for measurements models.
"""
from django.contrib import admin
from measurements.models import Unit, UnitConversion


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    """
    Admin for Unit model.
    Shows the units of every business.
    """
    list_display = ['short_name', 'name', 'unit_group', 'is_base_unit', 'allow_decimal', 'business']
    list_filter = ['unit_group', 'is_base_unit']
    search_fields = ['short_name', 'name', 'business__business_name']
    ordering = ['business', 'unit_group', 'name']
    list_select_related = ['business']


@admin.register(UnitConversion)
class UnitConversionAdmin(admin.ModelAdmin):
    list_display = ['from_unit', 'to_unit', 'factor', 'business']
    search_fields = ['from_unit__short_name', 'to_unit__short_name', 'business__business_name']
    autocomplete_fields = ['from_unit', 'to_unit']
    ordering = ['business', 'from_unit__short_name', 'to_unit__short_name']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('business', 'from_unit', 'to_unit')
