import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator


class NormalBalance(str, enum.Enum):
    DEBIT = "debit"
    CREDIT = "credit"


# Legacy payloads spell the sides the Indonesian way.
NORMAL_BALANCE_ALIASES = {"debet": "debit", "kredit": "credit"}


def normalize_normal_balance(value):
    if isinstance(value, str):
        value = value.strip().lower()
        return NORMAL_BALANCE_ALIASES.get(value, value)
    return value


def require_text(value):
    if value is None:
        raise ValueError("must not be null")
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class AccountBase(BaseModel):
    nomor_akun: str
    nama_akun: str
    kelompok_akun: str  # Asset, Liability, Equity, Revenue, Expense
    posisi_saldo_normal: NormalBalance

    normalize_side = field_validator('posisi_saldo_normal', mode='before')(normalize_normal_balance)
    check_text = field_validator('nomor_akun', 'nama_akun', 'kelompok_akun')(require_text)

    class Config:
        use_enum_values = True


class AccountCreate(AccountBase):
    pass


class AccountUpdate(BaseModel):
    nama_akun: Optional[str] = None
    kelompok_akun: Optional[str] = None
    posisi_saldo_normal: Optional[NormalBalance] = None

    normalize_side = field_validator('posisi_saldo_normal', mode='before')(normalize_normal_balance)
    check_text = field_validator('nama_akun', 'kelompok_akun')(require_text)

    class Config:
        use_enum_values = True


class AccountSummary(BaseModel):
    nomor_akun: str
    nama_akun: str
    kelompok_akun: str
    posisi_saldo_normal: str

    class Config:
        from_attributes = True


class Account(AccountSummary):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
