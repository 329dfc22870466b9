from django.urls import path
from .views import (
    CurrentUserView,
    LoginView,
    LogoutView,
    PlatformAdminViewSet,
    TokenRefreshView,
    UserProfileViewSet,
    UserViewSet,
)

# No router needed - using explicit path mapping like products app

app_name = "users"

urlpatterns = [
    # Auth
    path("token/", LoginView.as_view(), name="token"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", CurrentUserView.as_view(), name="me"),

    # Profiles
    path("profiles/", UserProfileViewSet.as_view({'get': 'list', 'post': 'create'}), name="profile-list"),
    path("profiles/<int:pk>/", UserProfileViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name="profile-detail"),

    # Platform admins
    path("platform-admins/", PlatformAdminViewSet.as_view({'get': 'list', 'post': 'create'}), name="platform-admin-list"),
    path("platform-admins/<int:pk>/", PlatformAdminViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name="platform-admin-detail"),

    # User Management
    path("", UserViewSet.as_view({'get': 'list'}), name="user-list"),
    path("<int:pk>/", UserViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name="user-detail"),
]
