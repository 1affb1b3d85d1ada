# business_units/apps.py

"""
BUSINESS UNITS APP CONFIG

Tenant boundary for every accounting and POS record:
- GL accounts, numbering series and periods are scoped per business unit
- POS configuration is one row per business unit
"""

from django.apps import AppConfig


class BusinessUnitsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "business_units"
    verbose_name = "Business Units"
