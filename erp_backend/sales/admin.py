# sales/admin.py

from django.contrib import admin

from sales.models import ARInvoice, ARInvoiceLine, BusinessPartner


@admin.register(BusinessPartner)
class BusinessPartnerAdmin(admin.ModelAdmin):
    list_display = ("bp_code", "name", "bp_type", "business_unit", "is_active")
    list_filter = ("bp_type", "is_active", "business_unit")
    search_fields = ("bp_code", "name")


class ARInvoiceLineInline(admin.TabularInline):
    model = ARInvoiceLine
    extra = 0
    can_delete = False
    readonly_fields = ("line_no", "description", "quantity", "unit_price", "line_total", "gl_account")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(ARInvoice)
class ARInvoiceAdmin(admin.ModelAdmin):
    list_display = (
        "doc_num",
        "business_partner",
        "posting_date",
        "total_amount",
        "status",
        "settlement_status",
    )
    list_filter = ("status", "settlement_status", "business_unit")
    search_fields = ("doc_num", "business_partner__bp_code")
    inlines = [ARInvoiceLineInline]
    readonly_fields = ("journal_entry", "created_at")
