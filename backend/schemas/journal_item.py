from decimal import Decimal
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field

from schemas.accounts import AccountSummary


class JournalLineInput(BaseModel):
    """One requested journal line.

    Types are left open on purpose: amounts and account numbers are checked by
    the journal balance validator, which reports the first offending line
    with a ledger error instead of a schema error.
    """
    account_id: Any = Field(default=None, validation_alias=AliasChoices('account_id', 'nomor_akun'))
    debet: Any = None
    kredit: Any = None

    class Config:
        populate_by_name = True

    def supplied_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)


class JournalLine(BaseModel):
    id: int
    journal_id: int
    account_id: str
    debet: Decimal
    kredit: Decimal
    account: Optional[AccountSummary] = None

    class Config:
        from_attributes = True
