from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from schemas.journal_item import JournalLineInput, JournalLine
from schemas.transaction_evidence import TransactionEvidence


class JournalEntryWrite(BaseModel):
    """Body of a create or update request.

    The same model serves both: on update only the header fields present in
    the request body are changed (an explicit null clears a nullable field),
    while ``lines`` always replaces the whole line set.
    """
    tanggal: Optional[date] = None
    deskripsi_transaksi: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices('deskripsi_transaksi', 'deskripsi_penyesuaian'),
    )
    lines: Optional[List[JournalLineInput]] = None
    version: Optional[int] = None

    class Config:
        populate_by_name = True

    def header_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={'lines', 'version'})

    def line_inputs(self) -> Optional[List[dict]]:
        if self.lines is None:
            return None
        return [line.supplied_fields() for line in self.lines]


class GeneralJournalWrite(JournalEntryWrite):
    lines: Optional[List[JournalLineInput]] = Field(
        default=None,
        validation_alias=AliasChoices('lines', 'detail_jurnal'),
    )
    evidence_ref: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices('evidence_ref', 'BuktiTransaksinoBukti'),
    )


class AdjustingJournalWrite(JournalEntryWrite):
    lines: Optional[List[JournalLineInput]] = Field(
        default=None,
        validation_alias=AliasChoices('lines', 'detail_jurnal_penyesuaian'),
    )
    no_bukti_penyesuaian: Optional[str] = None


class JournalEntryBase(BaseModel):
    id: int
    tanggal: date
    deskripsi_transaksi: str
    version: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    lines: List[JournalLine] = []

    class Config:
        from_attributes = True


class GeneralJournal(JournalEntryBase):
    evidence_ref: Optional[str] = None
    evidence: Optional[TransactionEvidence] = None


class AdjustingJournal(JournalEntryBase):
    no_bukti_penyesuaian: Optional[str] = None
