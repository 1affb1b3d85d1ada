# accounting/apps.py

"""
ACCOUNTING APP CONFIG

General ledger core:
- GL accounts, numbering series, accounting periods
- Journal entry engine (balanced, immutable)
- POS → GL posting engine and its readers
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
    verbose_name = "Accounting"
