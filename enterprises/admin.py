from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Enterprise


@admin.register(Enterprise)
class EnterpriseAdmin(ModelAdmin):
    list_display = ("name", "permalink", "owner", "sells", "is_primary_producer", "created_at")
    list_filter = ("sells", "is_primary_producer")
    search_fields = ("name", "permalink")
    prepopulated_fields = {"permalink": ("name",)}
    readonly_fields = ("created_at", "updated_at")
