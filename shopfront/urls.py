from django.urls import path

from . import views

app_name = "shopfront"

urlpatterns = [
    path("", views.shops, name="shops"),
    path("<slug:permalink>/", views.enterprise_shop, name="enterprise_shop"),
]
