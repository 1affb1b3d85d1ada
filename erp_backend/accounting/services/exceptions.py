# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting + POS posting services.

Each error carries a stable `code` used by the API error envelope:
    {"error": {"code": ..., "message": ...}}
"""

from __future__ import annotations

from decimal import Decimal


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""

    code = "ACCOUNTING_ERROR"


class NotFoundError(AccountingServiceError):
    """Referenced order, numbering series or GL account does not exist."""

    code = "NOT_FOUND"


class InvalidStateError(AccountingServiceError):
    """Operation attempted on an order in the wrong lifecycle state."""

    code = "INVALID_STATE"


class AlreadyPostedError(InvalidStateError):
    code = "ALREADY_POSTED"


class AlreadyPaidError(InvalidStateError):
    code = "ALREADY_PAID"


class NotPaidError(InvalidStateError):
    code = "NOT_PAID"


class PaymentMismatchError(AccountingServiceError):
    """Recorded payments do not sum to the order total."""

    code = "PAYMENT_MISMATCH"

    def __init__(self, *, paid: Decimal, total: Decimal):
        self.paid = paid
        self.total = total
        super().__init__(
            f"Payment amount ({paid}) does not match order total ({total})"
        )


class ConfigurationError(AccountingServiceError):
    """Required POS/accounting configuration is missing."""

    code = "CONFIGURATION_ERROR"


class MissingGLMappingError(AccountingServiceError):
    """A menu item or payment method has no resolvable GL account."""

    code = "MISSING_GL_MAPPING"


class JournalEntryCreationError(AccountingServiceError):
    """Raised when a journal entry cannot be created."""

    code = "JOURNAL_ENTRY_ERROR"


class UnbalancedEntryError(JournalEntryCreationError):
    """Debits and credits disagree and cannot be adjusted."""

    code = "UNBALANCED_ENTRY"

    def __init__(self, *, total_debits: Decimal, total_credits: Decimal):
        self.total_debits = total_debits
        self.total_credits = total_credits
        super().__init__(
            f"Journal entry is unbalanced. Debits: {total_debits}, Credits: {total_credits}"
        )
