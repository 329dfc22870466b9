from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import (
    BusinessLocationViewSet,
    BusinessViewSet,
    MyBusinessView,
    RegisterBusinessView,
)

app_name = "tenant"

router = SimpleRouter()
router.register(r"locations", BusinessLocationViewSet, basename="business-location")
router.register(r"", BusinessViewSet, basename="business")

urlpatterns = [
    path("register/", RegisterBusinessView.as_view(), name="register"),
    path("me/", MyBusinessView.as_view(), name="my-business"),
    path("", include(router.urls)),
]
