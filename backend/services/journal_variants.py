"""
The two journal variants served by the same coordinator and store.

General and Adjusting journal entries are structurally identical; they
differ only in their tables and in the optional side reference the header
carries (a transaction evidence number that must exist, or a free-form
adjustment voucher number).
"""
from dataclasses import dataclass

from models.adjusting_journal import AdjustingJournal, AdjustingJournalLine
from models.general_journal import GeneralJournal, GeneralJournalLine
from schemas.journal_entry import AdjustingJournal as AdjustingJournalSchema
from schemas.journal_entry import GeneralJournal as GeneralJournalSchema


@dataclass(frozen=True)
class JournalVariant:
    name: str
    label: str
    header_model: type
    line_model: type
    response_schema: type
    reference_field: str
    reference_must_resolve: bool
    item_key: str
    list_key: str


GENERAL_JOURNAL = JournalVariant(
    name="general",
    label="General Journal entry",
    header_model=GeneralJournal,
    line_model=GeneralJournalLine,
    response_schema=GeneralJournalSchema,
    reference_field="evidence_ref",
    reference_must_resolve=True,
    item_key="journal_entry",
    list_key="journal_entries",
)

ADJUSTING_JOURNAL = JournalVariant(
    name="adjusting",
    label="Adjusting Journal entry",
    header_model=AdjustingJournal,
    line_model=AdjustingJournalLine,
    response_schema=AdjustingJournalSchema,
    reference_field="no_bukti_penyesuaian",
    reference_must_resolve=False,
    item_key="adjusting_journal_entry",
    list_key="adjusting_journal_entries",
)
