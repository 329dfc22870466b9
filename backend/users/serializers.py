from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from core_backend.base import BaseModelSerializer
from tenant.access import is_platform_admin
from tenant.models import Business
from tenant.serializers import BusinessSerializerMixin
from .models import PlatformAdmin, User, UserProfile


class UserSerializer(BaseModelSerializer):
    """
    Users collection representation.

    The business is read-only here: users change business only through the
    Django admin.
    """
    roles = serializers.ListField(
        child=serializers.ChoiceField(choices=User.Role.choices),
        required=False,
    )

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "roles",
            "business",
            "is_active",
            "date_joined",
            "updated_at",
        ]
        read_only_fields = ["id", "email", "business", "date_joined", "updated_at"]
        select_related_fields = ["business"]

    def validate_roles(self, value):
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if user is not None and not (user.has_role(User.Role.ADMIN) or self.context.get("is_platform_admin")):
            raise serializers.ValidationError("Only administrators can change roles")
        # Keep order, drop duplicates
        return list(dict.fromkeys(value))


class CurrentUserSerializer(UserSerializer):
    business_name = serializers.CharField(source="business.business_name", read_only=True, default=None)
    is_platform_admin = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ["business_name", "is_platform_admin"]

    def get_is_platform_admin(self, obj):
        return is_platform_admin(obj)


class UserProfileSerializer(BusinessSerializerMixin, BaseModelSerializer):
    business = serializers.PrimaryKeyRelatedField(
        queryset=Business.objects.all(), required=False
    )

    class Meta:
        model = UserProfile
        fields = [
            "id",
            "business",
            "user",
            "prefix",
            "first_name",
            "last_name",
            "username",
            "email",
            "phone",
            "role",
            "is_active",
            "allow_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        select_related_fields = ["business", "user"]


class PlatformAdminSerializer(BaseModelSerializer):
    email = serializers.EmailField(required=False)

    class Meta:
        model = PlatformAdmin
        fields = ["id", "user", "email", "full_name", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
        select_related_fields = ["user"]

    def validate(self, data):
        user = data.get("user") or getattr(self.instance, "user", None)
        if not data.get("email") and self.instance is None and user is not None:
            data["email"] = user.email
        return super().validate(data)


class LoginSerializer(TokenObtainPairSerializer):
    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = CurrentUserSerializer(self.user).data
        return data
