from rest_framework import permissions

from tenant.access import ADMIN_ROLE, has_role, is_platform_admin


class IsPlatformAdmin(permissions.BasePermission):
    message = "Only platform administrators can access this resource."

    def has_permission(self, request, view):
        return is_platform_admin(request.user)


class IsBusinessAdminOrReadOnly(permissions.BasePermission):
    """
    Read access for every authenticated user, writes for business admins
    (users with the ``admin`` role) and platform admins.
    """
    message = "Only business administrators can modify this resource."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return has_role(request.user, ADMIN_ROLE) or is_platform_admin(request.user)
