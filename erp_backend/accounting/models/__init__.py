# accounting/models/__init__.py

"""
ACCOUNTING MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models anywhere (models must stay pure).
"""

from accounting.models.accounting_period import AccountingPeriod
from accounting.models.gl_account import GlAccount
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine
from accounting.models.numbering_series import NumberingSeries

__all__ = [
    "GlAccount",
    "NumberingSeries",
    "AccountingPeriod",
    "JournalEntry",
    "JournalEntryLine",
]
