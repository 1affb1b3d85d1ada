# accounting/admin.py

from django.contrib import admin

from accounting.models import (
    AccountingPeriod,
    GlAccount,
    JournalEntry,
    JournalEntryLine,
    NumberingSeries,
)

# ============================================================
# GL ACCOUNT
# ============================================================


@admin.register(GlAccount)
class GlAccountAdmin(admin.ModelAdmin):
    list_display = (
        "account_code",
        "name",
        "account_type",
        "normal_balance",
        "business_unit",
        "is_active",
    )
    list_filter = ("account_type", "is_active", "business_unit")
    search_fields = ("account_code", "name")
    ordering = ("business_unit", "account_code")
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("business_unit", "account_code", "name", "account_type", "normal_balance"),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_active",),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )


# ============================================================
# NUMBERING SERIES
# ============================================================


@admin.register(NumberingSeries)
class NumberingSeriesAdmin(admin.ModelAdmin):
    list_display = ("name", "document_type", "prefix", "next_number", "business_unit")
    list_filter = ("document_type", "business_unit")
    search_fields = ("name", "prefix")
    readonly_fields = ("created_at", "updated_at")


# ============================================================
# ACCOUNTING PERIOD
# ============================================================


@admin.register(AccountingPeriod)
class AccountingPeriodAdmin(admin.ModelAdmin):
    list_display = ("name", "business_unit", "start_date", "end_date", "status")
    list_filter = ("status", "business_unit")
    ordering = ("-start_date",)
    readonly_fields = ("created_at", "updated_at")


# ============================================================
# JOURNAL ENTRY (READ-ONLY)
# ============================================================


class JournalEntryLineInline(admin.TabularInline):
    model = JournalEntryLine
    extra = 0
    can_delete = False
    readonly_fields = ("line_no", "gl_account", "debit", "credit", "description", "created_at")

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = (
        "doc_num",
        "business_unit",
        "posting_date",
        "is_posted",
        "author",
        "created_at",
    )
    list_filter = ("is_posted", "posting_date", "business_unit")
    search_fields = ("doc_num", "remarks")
    ordering = ("-posting_date", "-created_at")
    inlines = [JournalEntryLineInline]

    readonly_fields = (
        "business_unit",
        "doc_num",
        "posting_date",
        "remarks",
        "author",
        "is_posted",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
