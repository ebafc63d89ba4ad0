from django.urls import path

from . import views

app_name = "customers"

urlpatterns = [
    path("customers", views.customer_list, name="list"),
    path("customers/<int:pk>", views.customer_detail, name="detail"),
    path("schemas/customers", views.customer_schema, name="schema"),
]
