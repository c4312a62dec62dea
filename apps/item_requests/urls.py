"""URL routing for the request board."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import ItemRequestViewSet

router = SimpleRouter()
router.register(r"", ItemRequestViewSet, basename="item-request")

urlpatterns = [
    path("", include(router.urls)),
]
