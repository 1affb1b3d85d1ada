# business_units/models/__init__.py

from business_units.models.business_unit import BusinessUnit

__all__ = ["BusinessUnit"]
