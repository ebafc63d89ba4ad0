"""URL configuration for the marketplace back office."""

from django.contrib import admin
from django.shortcuts import redirect
from django.urls import include, path

api_v1 = [
    path("", include("customers.urls")),
    path("", include("catalog.urls")),
    path("", include("order_cycles.urls")),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/", include(api_v1)),
    path("shops/", include("shopfront.urls")),
    path("", lambda request: redirect("shopfront:shops")),  # root → shop list
]
