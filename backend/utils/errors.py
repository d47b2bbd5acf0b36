"""
Ledger service errors.

Every error carries the HTTP status it is reported with and an optional
``details`` payload that is returned in the ``data`` field of the response
envelope (e.g. the totals of an unbalanced entry).
"""
from typing import Any, Dict, List, Optional


class LedgerError(Exception):
    """Base exception for all ledger failures."""
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class LedgerValidationError(LedgerError):
    """Missing or malformed input. Detected before any write."""
    status_code = 400


class MissingHeaderFieldError(LedgerValidationError):
    pass


class InsufficientLinesError(LedgerValidationError):
    pass


class MalformedLineError(LedgerValidationError):
    pass


class InvalidAmountError(LedgerValidationError):
    pass


class UnbalancedEntryError(LedgerValidationError):
    def __init__(self, total_debet, total_kredit):
        super().__init__(
            f"Total Debet ({total_debet}) does not equal Total Kredit ({total_kredit}).",
            details={"total_debet": float(total_debet), "total_kredit": float(total_kredit)},
        )
        self.total_debet = total_debet
        self.total_kredit = total_kredit


class UnknownReferenceError(LedgerError):
    """A referenced account or evidence document does not exist."""
    status_code = 400


class UnknownAccountError(UnknownReferenceError):
    def __init__(self, missing_accounts: List[str]):
        super().__init__(
            f"Account numbers not found: {', '.join(missing_accounts)}.",
            details={"missing_accounts": list(missing_accounts)},
        )
        self.missing_accounts = list(missing_accounts)


class UnknownEvidenceError(UnknownReferenceError):
    def __init__(self, evidence_ref: str):
        super().__init__(
            f"Transaction evidence with number '{evidence_ref}' not found.",
            details={"evidence_ref": evidence_ref},
        )
        self.evidence_ref = evidence_ref


class NotFoundError(LedgerError):
    status_code = 404


class ConflictError(LedgerError):
    """Duplicate key, stale version, or a record still referenced elsewhere."""
    status_code = 409


class PersistenceError(LedgerError):
    """The store failed in a way not covered by the other errors."""
    status_code = 500


class ConstraintViolationError(PersistenceError):
    """The store rejected a write with an integrity or foreign-key violation."""
    status_code = 400
