# inventory/admin.py

from django.contrib import admin

from inventory.models import InventoryItem


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ("item_code", "name", "business_unit", "standard_cost", "is_active")
    list_filter = ("is_active", "business_unit")
    search_fields = ("item_code", "name")
    readonly_fields = ("created_at", "updated_at")
