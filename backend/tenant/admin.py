from django.contrib import admin
from .models import Business, BusinessLocation


class BusinessLocationInline(admin.TabularInline):
    """Inline editor for locations within Business admin."""
    model = BusinessLocation
    extra = 0
    fields = ['name', 'location_id', 'city', 'country', 'is_active', 'is_default']


@admin.register(Business)
class BusinessAdmin(admin.ModelAdmin):
    list_display = ['business_name', 'city', 'country', 'currency', 'created_at']
    list_filter = ['country', 'currency', 'created_at']
    search_fields = ['business_name', 'city', 'business_contact']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [BusinessLocationInline]

    fieldsets = (
        ('Basic Info', {
            'fields': ('id', 'business_name', 'start_date', 'logo_url', 'business_contact', 'alternate_contact', 'website')
        }),
        ('Address', {
            'fields': ('country', 'city', 'state', 'zip_code', 'landmark')
        }),
        ('Regional Settings', {
            'fields': ('currency', 'timezone')
        }),
        ('Tax & Accounting', {
            'fields': ('tax1_name', 'tax1_number', 'tax2_name', 'tax2_number',
                       'financial_year_start', 'stock_accounting_method')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )

    def has_delete_permission(self, request, obj=None):
        # Businesses are never deleted, only edited
        return False


@admin.register(BusinessLocation)
class BusinessLocationAdmin(admin.ModelAdmin):
    list_display = ['name', 'location_id', 'business', 'city', 'is_active', 'is_default']
    list_filter = ['is_active', 'is_default']
    search_fields = ['name', 'location_id', 'business__business_name']
    list_select_related = ['business']
