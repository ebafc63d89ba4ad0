from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    path("variants/search", views.variant_search, name="variant_search"),
]
