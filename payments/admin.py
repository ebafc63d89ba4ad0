from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(ModelAdmin):
    list_display = ("order", "amount", "method", "state", "received_by", "received_at")
    list_filter = ("method", "state")
    search_fields = ("order__number", "reference_number")
    readonly_fields = ("received_at",)
    date_hierarchy = "received_at"
