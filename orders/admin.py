from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import Order, OrderStateChange


class OrderStateChangeInline(TabularInline):
    model = OrderStateChange
    extra = 0
    readonly_fields = ("from_state", "to_state", "changed_by", "note", "changed_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(ModelAdmin):
    list_display = (
        "number", "customer", "distributor", "order_cycle", "state",
        "payment_state", "total", "payment_total", "completed_at",
    )
    list_filter = ("state", "payment_state", "distributor")
    search_fields = ("number", "email", "customer__email")
    readonly_fields = ("number", "payment_total", "payment_state", "completed_at", "created_at", "updated_at")
    date_hierarchy = "created_at"
    inlines = [OrderStateChangeInline]


@admin.register(OrderStateChange)
class OrderStateChangeAdmin(ModelAdmin):
    list_display = ("order", "from_state", "to_state", "changed_by", "changed_at")
    readonly_fields = ("order", "from_state", "to_state", "changed_by", "note", "changed_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
