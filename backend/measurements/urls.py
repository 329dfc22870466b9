from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import UnitConversionViewSet, UnitViewSet

app_name = "measurements"

router = DefaultRouter()
router.register(r"units", UnitViewSet, basename="unit")
router.register(r"conversions", UnitConversionViewSet, basename="unit-conversion")

urlpatterns = [
    path("", include(router.urls)),
]
