# accounting/services/pos_configuration_validator.py

"""
POS CONFIGURATION VALIDATOR

Answers: "is it safe to auto-post this business unit's POS orders?"

- issues   => block auto-posting (is_valid = False)
- warnings => informational only (a default account will be used)

Read-only and idempotent: never writes, never raises for configuration
problems. Safe to call repeatedly and concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from accounting.services.period_lock import find_open_period


@dataclass
class ConfigurationValidationResult:
    issues: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    def as_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "issues": list(self.issues),
            "warnings": list(self.warnings),
        }


def _count_unmapped_menu_items(business_unit_id) -> int:
    from pos.models import MenuItem

    return MenuItem.objects.filter(
        business_unit_id=business_unit_id,
        is_active=True,
        gl_mapping__isnull=True,
    ).count()


def _count_unmapped_payment_methods(business_unit_id) -> int:
    from pos.models import PaymentMethod

    return (
        PaymentMethod.objects.filter(is_active=True)
        .exclude(gl_mappings__business_unit_id=business_unit_id)
        .count()
    )


def validate_pos_configuration(business_unit_id) -> ConfigurationValidationResult:
    from pos.models import PosConfiguration

    result = ConfigurationValidationResult()

    config = PosConfiguration.objects.filter(business_unit_id=business_unit_id).first()
    if config is None:
        result.issues.append("POS configuration not found")
        return result

    auto_post = config.auto_post_to_gl

    # --------------------------------------------------
    # REQUIRED ACCOUNTS / SERIES
    # --------------------------------------------------
    if auto_post:
        if not config.sales_revenue_account_id:
            result.issues.append("Default sales revenue account not configured")
        if not config.sales_tax_account_id:
            result.issues.append("Sales tax account not configured")
        if not config.journal_entry_series_id:
            result.issues.append("Journal entry numbering series not configured")
        if not config.cash_account_id:
            result.warnings.append(
                "Default cash account not configured (payment method mappings will be used)"
            )

    if config.auto_create_ar_invoice and not config.ar_invoice_series_id:
        result.issues.append("AR invoice numbering series not configured")

    # --------------------------------------------------
    # MAPPINGS
    # --------------------------------------------------
    unmapped_items = _count_unmapped_menu_items(business_unit_id)
    if unmapped_items:
        if auto_post and not config.sales_revenue_account_id:
            result.issues.append(f"{unmapped_items} menu items missing GL mappings")
        else:
            result.warnings.append(
                f"{unmapped_items} menu items missing GL mappings (will use default)"
            )

    unmapped_methods = _count_unmapped_payment_methods(business_unit_id)
    if unmapped_methods:
        if auto_post and not config.cash_account_id:
            result.issues.append(f"{unmapped_methods} payment methods missing GL mappings")
        else:
            result.warnings.append(
                f"{unmapped_methods} payment methods missing GL mappings (will use default)"
            )

    # --------------------------------------------------
    # OPEN PERIOD
    # --------------------------------------------------
    if auto_post and find_open_period(business_unit_id=business_unit_id) is None:
        result.issues.append("No open accounting period found")

    return result
