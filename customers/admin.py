from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Address, Customer


@admin.register(Customer)
class CustomerAdmin(ModelAdmin):
    list_display = ("email", "full_name", "code", "enterprise", "balance", "created_at")
    list_filter = ("enterprise",)
    search_fields = ("email", "first_name", "last_name", "code")
    readonly_fields = ("created_at", "updated_at", "balance")
    raw_id_fields = ("user", "bill_address", "ship_address")

    fieldsets = (
        ("Customer", {"fields": ("enterprise", "email", "code", "first_name", "last_name", "user")}),
        ("Addresses", {"fields": ("bill_address", "ship_address"), "classes": ["collapse"]}),
        ("Tags & status", {"fields": ("tags", "balance", "created_at", "updated_at")}),
    )

    def get_queryset(self, request):
        from .queries import CustomersWithBalance

        qs = super().get_queryset(request)
        return CustomersWithBalance(customers=qs).query().select_related("enterprise")

    @admin.display(description="balance")
    def balance(self, obj):
        return f"{obj.balance:,.2f}"


@admin.register(Address)
class AddressAdmin(ModelAdmin):
    list_display = ("street_address_1", "locality", "postal_code", "country_code")
    search_fields = ("street_address_1", "locality", "postal_code")
