from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import Product, Variant


class VariantInline(TabularInline):
    model = Variant
    extra = 0
    fields = ("display_name", "sku", "unit_description", "price")


@admin.register(Product)
class ProductAdmin(ModelAdmin):
    list_display = ("name", "supplier", "created_at")
    list_filter = ("supplier",)
    search_fields = ("name", "variants__sku")
    readonly_fields = ("created_at", "updated_at")
    inlines = [VariantInline]
