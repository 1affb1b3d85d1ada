# pos/admin.py

from django.contrib import admin

from pos.models import (
    Discount,
    MenuItem,
    MenuItemGlMapping,
    Order,
    OrderItem,
    Payment,
    PaymentMethod,
    PaymentMethodGlMapping,
    PosConfiguration,
    Recipe,
    RecipeItem,
)

# =====================================================
# CONFIGURATION
# =====================================================


@admin.register(PosConfiguration)
class PosConfigurationAdmin(admin.ModelAdmin):
    list_display = (
        "business_unit",
        "auto_post_to_gl",
        "auto_create_ar_invoice",
        "journal_entry_series",
        "ar_invoice_series",
    )
    list_filter = ("auto_post_to_gl", "auto_create_ar_invoice")
    readonly_fields = ("created_at", "updated_at")


# =====================================================
# MENU + MAPPINGS
# =====================================================


class MenuItemGlMappingInline(admin.StackedInline):
    model = MenuItemGlMapping
    extra = 0


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ("name", "business_unit", "price", "is_active")
    list_filter = ("is_active", "business_unit")
    search_fields = ("name",)
    inlines = [MenuItemGlMappingInline]


class RecipeItemInline(admin.TabularInline):
    model = RecipeItem
    extra = 0


@admin.register(Recipe)
class RecipeAdmin(admin.ModelAdmin):
    list_display = ("menu_item", "name")
    inlines = [RecipeItemInline]


@admin.register(PaymentMethod)
class PaymentMethodAdmin(admin.ModelAdmin):
    list_display = ("name", "is_active")


@admin.register(PaymentMethodGlMapping)
class PaymentMethodGlMappingAdmin(admin.ModelAdmin):
    list_display = ("payment_method", "business_unit", "gl_account")
    list_filter = ("business_unit",)


@admin.register(Discount)
class DiscountAdmin(admin.ModelAdmin):
    list_display = ("name", "business_unit", "discount_value", "gl_account", "is_active")
    list_filter = ("is_active", "business_unit")


# =====================================================
# ORDERS (READ-ONLY)
# =====================================================


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("menu_item", "quantity", "price_at_sale")

    def has_add_permission(self, request, obj=None):
        return False


class PaymentInline(admin.TabularInline):
    model = Payment
    extra = 0
    can_delete = False
    readonly_fields = ("payment_method", "amount", "reference", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "business_unit",
        "status",
        "total_amount",
        "is_paid",
        "journal_entry",
        "created_at",
    )
    list_filter = ("status", "is_paid", "business_unit")
    search_fields = ("id",)
    ordering = ("-created_at",)
    inlines = [OrderItemInline, PaymentInline]
    readonly_fields = (
        "status",
        "is_paid",
        "paid_at",
        "subtotal",
        "tax",
        "discount_value",
        "total_amount",
        "amount_paid",
        "ar_invoice",
        "journal_entry",
        "created_at",
        "updated_at",
    )

    def has_delete_permission(self, request, obj=None):
        return False
