from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import PlatformAdmin, User, UserProfile
from .forms import UserAdminChangeForm, UserAdminCreationForm


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserAdminChangeForm
    add_form = UserAdminCreationForm

    list_display = (
        "email",
        "first_name",
        "last_name",
        "get_business_name",
        "roles",
        "is_staff",
        "is_active",
    )
    list_filter = (
        "business",
        "is_staff",
        "is_superuser",
        "is_active",
    )
    search_fields = ("email", "first_name", "last_name", "business__business_name")
    ordering = ("email",)
    list_select_related = ("business",)

    def get_business_name(self, obj):
        return obj.business.business_name if obj.business else "⚠️ NO BUSINESS"
    get_business_name.short_description = "Business"
    get_business_name.admin_order_field = "business__business_name"

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Personal Info", {"fields": ("first_name", "last_name")}),
        ("Business", {"fields": ("business",)}),
        (
            "Permissions & Roles",
            {
                "fields": (
                    "roles",
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password", "password2", "business", "roles"),
            },
        ),
    )


@admin.register(PlatformAdmin)
class PlatformAdminAdmin(admin.ModelAdmin):
    list_display = ["email", "full_name", "is_active", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["email", "full_name"]
    autocomplete_fields = ["user"]


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ["username", "first_name", "last_name", "role", "business", "is_active"]
    list_filter = ["role", "is_active", "allow_login"]
    search_fields = ["username", "email", "business__business_name"]
    list_select_related = ["business"]
