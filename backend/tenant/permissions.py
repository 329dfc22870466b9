from rest_framework.permissions import SAFE_METHODS, BasePermission


class HasBusinessAccess(BasePermission):
    """
    Enforces the view's access decision on writes.

    Reads never fail here: a DENY decision turns into an empty queryset in
    ``get_queryset``. Writes (POST/PUT/PATCH/DELETE) under a DENY decision are
    rejected with 403.

    The view must expose ``get_access_decision()`` (see BusinessScopedViewSet).
    """

    message = "You are not associated with a business that can modify this resource."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return not view.get_access_decision().is_denied

    def has_object_permission(self, request, view, obj):
        return view.get_access_decision().permits(obj)
