from django.urls import path

from . import views

app_name = "order_cycles"

urlpatterns = [
    path("order_cycles", views.order_cycle_list, name="list"),
    path("order_cycles/<int:pk>", views.order_cycle_detail, name="detail"),
]
