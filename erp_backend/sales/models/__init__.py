# sales/models/__init__.py

"""
SALES MODELS PACKAGE EXPORTS

Purpose:
- Central export surface for sales app models.
"""

from .ar_invoice import ARInvoice
from .ar_invoice_line import ARInvoiceLine
from .business_partner import BusinessPartner

__all__ = [
    "BusinessPartner",
    "ARInvoice",
    "ARInvoiceLine",
]
