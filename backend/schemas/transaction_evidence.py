from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class TransactionEvidenceBase(BaseModel):
    no_bukti: str
    tanggal_transaksi: date
    deskripsi: Optional[str] = None
    referensi: Optional[str] = None

    @field_validator('no_bukti')
    @classmethod
    def validate_no_bukti(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("no_bukti must not be empty")
        return v


class TransactionEvidenceCreate(TransactionEvidenceBase):
    pass


class TransactionEvidenceUpdate(BaseModel):
    tanggal_transaksi: Optional[date] = None
    deskripsi: Optional[str] = None
    referensi: Optional[str] = None


class TransactionEvidence(TransactionEvidenceBase):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
