import logging

from rest_framework import permissions, status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.views import TokenObtainPairView
from django.conf import settings

from core_backend.base import BaseViewSet, BusinessScopedViewSet
from core_backend.base.mixins import BusinessScopedQuerysetMixin
from tenant.access import filter_users, platform_admin_only
from tenant.permissions import HasBusinessAccess
from .auth_cookie_service import AuthCookieService
from .models import PlatformAdmin, User, UserProfile
from .permissions import IsBusinessAdminOrReadOnly, IsPlatformAdmin
from .serializers import (
    CurrentUserSerializer,
    LoginSerializer,
    PlatformAdminSerializer,
    UserProfileSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class LoginView(TokenObtainPairView):
    """
    POST /api/users/token/

    Returns the token pair and the user, and mirrors the tokens in HttpOnly
    cookies for browser clients.
    """
    serializer_class = LoginSerializer
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == 200 and "access" in response.data:
            AuthCookieService.set_auth_cookies(
                response, response.data["access"], response.data.get("refresh")
            )
        return response


class TokenRefreshView(APIView):
    """
    POST /api/users/token/refresh/

    Accepts the refresh token in the body or, failing that, in the refresh cookie.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        refresh = request.data.get("refresh") or request.COOKIES.get(
            settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"]
        )
        if not refresh:
            return Response(
                {"error": "Refresh token not found.", "code": "not_authenticated"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        try:
            serializer.is_valid(raise_exception=True)
        except (TokenError, AuthenticationFailed) as e:
            return Response(
                {"error": str(e), "code": "token_not_valid"},
                status=status.HTTP_401_UNAUTHORIZED,
            )

        data = serializer.validated_data
        response = Response(data)
        AuthCookieService.set_auth_cookies(response, data["access"], data.get("refresh"))
        return response


class LogoutView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        response = Response({"message": "Successfully logged out."}, status=status.HTTP_200_OK)
        AuthCookieService.clear_auth_cookies(response)
        return response


class CurrentUserView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({"success": True, "data": CurrentUserSerializer(request.user).data})


class UserViewSet(BusinessScopedQuerysetMixin, BaseViewSet):
    """
    Users collection.

    - Platform admins see every user
    - Business admins see the users of their business
    - Everyone else only sees (and edits) themselves, and cannot delete
    """
    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated, HasBusinessAccess]
    http_method_names = ["get", "patch", "put", "delete", "head", "options"]

    search_fields = ["email", "first_name", "last_name"]
    filterset_fields = ["is_active", "business"]
    ordering_fields = ["email", "first_name", "last_name", "date_joined"]
    ordering = ["-date_joined"]

    def get_access_decision(self):
        if not hasattr(self, "_access_decision"):
            action = "delete" if self.request.method == "DELETE" else "read"
            self._access_decision = filter_users(self.request.user, action=action)
        return self._access_decision

    def perform_destroy(self, instance):
        logger.info(f"User {instance.pk} deleted by user {self.request.user.pk}")
        instance.delete()


class UserProfileViewSet(BusinessScopedViewSet):
    queryset = UserProfile.objects.all()
    serializer_class = UserProfileSerializer
    permission_classes = [permissions.IsAuthenticated, HasBusinessAccess, IsBusinessAdminOrReadOnly]

    search_fields = ["username", "first_name", "last_name", "email"]
    filterset_fields = ["role", "is_active", "allow_login"]
    ordering_fields = ["username", "first_name", "created_at"]
    ordering = ["username"]


class PlatformAdminViewSet(BusinessScopedQuerysetMixin, BaseViewSet):
    """Allow-list of platform administrators. Only platform admins may use it."""
    queryset = PlatformAdmin.objects.all()
    serializer_class = PlatformAdminSerializer
    access_policy = staticmethod(platform_admin_only)
    permission_classes = [permissions.IsAuthenticated, IsPlatformAdmin]

    search_fields = ["email", "full_name"]
    filterset_fields = ["is_active"]
    ordering = ["email"]
