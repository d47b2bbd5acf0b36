"""
Journal balance validation.

Pure checks over a proposed set of journal lines, run before anything is
written. The checks run in a fixed order and stop at the first failure:

1. at least two lines
2. every line names an account and carries a debet or a kredit
3. debet and kredit are non-negative numbers in whole cents that fit the
   stored column (at most 16 integer digits)
4. total debet equals total kredit within ``BALANCE_TOLERANCE``

Whether the named accounts exist is decided by the caller, which looks the
collected account numbers up in the account registry and hands the result
to :func:`ensure_accounts_exist`.
"""
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Set

from utils.errors import (
    InsufficientLinesError,
    InvalidAmountError,
    MalformedLineError,
    UnbalancedEntryError,
    UnknownAccountError,
)

BALANCE_TOLERANCE = Decimal("0.01")
MIN_LINES = 2
# Line amounts are stored as NUMERIC(18, 2).
AMOUNT_QUANTUM = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999999999.99")


@dataclass(frozen=True)
class ValidatedLine:
    account_id: str
    debet: Decimal
    kredit: Decimal


@dataclass
class ValidatedBatch:
    lines: List[ValidatedLine]
    total_debet: Decimal
    total_kredit: Decimal
    # Distinct account numbers in order of first appearance.
    account_ids: List[str] = field(default_factory=list)


def _normalize_account_id(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def to_amount(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a Decimal, or None when it is not a finite number.

    Floats go through their shortest repr so 100.01 stays 100.01 and sums
    are exact.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return Decimal(repr(value))
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    return None


def fits_amount_column(amount: Decimal) -> bool:
    """True when ``amount`` is stored exactly: no fraction of a cent, within column range."""
    return amount <= MAX_AMOUNT and amount == amount.quantize(AMOUNT_QUANTUM)


def validate_journal_lines(line_inputs: Optional[Sequence[Mapping[str, Any]]]) -> ValidatedBatch:
    """Validate requested lines and return them normalized with their totals.

    Each input is a mapping holding only the keys the caller supplied, so a
    missing ``debet`` is told apart from an explicit null.
    """
    if line_inputs is None or len(line_inputs) < MIN_LINES:
        raise InsufficientLinesError(f"At least {MIN_LINES} journal lines are required.")

    account_ids = []
    for index, line in enumerate(line_inputs, start=1):
        account_id = _normalize_account_id(line.get("account_id"))
        if account_id is None or ("debet" not in line and "kredit" not in line):
            raise MalformedLineError(
                f"Line {index}: each journal line must have account_id and either debet or kredit.",
                details={"line": index},
            )
        account_ids.append(account_id)

    lines = []
    total_debet = Decimal("0")
    total_kredit = Decimal("0")
    for index, (line, account_id) in enumerate(zip(line_inputs, account_ids), start=1):
        debet = to_amount(line.get("debet"))
        kredit = to_amount(line.get("kredit"))
        if debet is None or kredit is None or debet < 0 or kredit < 0:
            raise InvalidAmountError(
                f"Line {index}: debet and kredit amounts must be non-negative numbers.",
                details={"line": index},
            )
        if not (fits_amount_column(debet) and fits_amount_column(kredit)):
            raise InvalidAmountError(
                f"Line {index}: amounts must be whole cents (at most 2 decimal places) "
                f"and no larger than {MAX_AMOUNT}.",
                details={"line": index},
            )
        lines.append(ValidatedLine(account_id=account_id, debet=debet, kredit=kredit))
        total_debet += debet
        total_kredit += kredit

    if abs(total_debet - total_kredit) > BALANCE_TOLERANCE:
        raise UnbalancedEntryError(total_debet, total_kredit)

    return ValidatedBatch(
        lines=lines,
        total_debet=total_debet,
        total_kredit=total_kredit,
        account_ids=list(dict.fromkeys(account_ids)),
    )


def ensure_accounts_exist(batch: ValidatedBatch, resolve_existing: Callable[[Iterable[str]], Set[str]]) -> None:
    """Raise UnknownAccountError listing every account number the registry does not know."""
    found = resolve_existing(batch.account_ids)
    missing = [account_id for account_id in batch.account_ids if account_id not in found]
    if missing:
        raise UnknownAccountError(missing)
