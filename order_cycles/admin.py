from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import Exchange, OrderCycle, Schedule


class ExchangeInline(TabularInline):
    model = Exchange
    extra = 0
    fields = ("sender", "receiver", "incoming", "variants", "pickup_instructions")


@admin.register(OrderCycle)
class OrderCycleAdmin(ModelAdmin):
    list_display = ("name", "coordinator", "orders_open_at", "orders_close_at", "is_open")
    list_filter = ("coordinator",)
    search_fields = ("name", "coordinator__name")
    readonly_fields = ("created_at", "updated_at")
    inlines = [ExchangeInline]

    @admin.display(boolean=True, description="open")
    def is_open(self, obj):
        return obj.is_open


@admin.register(Schedule)
class ScheduleAdmin(ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)
    filter_horizontal = ("order_cycles",)
