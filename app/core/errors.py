"""
Ledger errors.

Every error carries a machine-readable ``code`` next to its message so the
HTTP layer can map it without parsing text:

    LedgerError
    +-- ValidationError   (400) invalid_amount | invalid_field
    +-- NotFoundError     (404) not_found
    +-- ConflictError     (409) exceeds_outstanding_balance
                                exceeds_available_balance
                                has_settlements
                                concurrent_modification
"""

from typing import Optional


class LedgerError(Exception):
    """Base class for all ledger errors."""

    code: str = "ledger_error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(LedgerError):
    """Malformed or out-of-range input."""

    code = "invalid_field"


class NotFoundError(LedgerError):
    """A referenced record does not exist."""

    code = "not_found"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(LedgerError):
    """The request is well formed but clashes with current balances."""

    code = "conflict"


INVALID_AMOUNT = "invalid_amount"
INVALID_FIELD = "invalid_field"
EXCEEDS_OUTSTANDING = "exceeds_outstanding_balance"
EXCEEDS_AVAILABLE = "exceeds_available_balance"
HAS_SETTLEMENTS = "has_settlements"
CONCURRENT_MODIFICATION = "concurrent_modification"
