from sqlalchemy import Column, Integer, String
from database import Base
from models.audit_mixin import TimestampMixin


class Account(Base, TimestampMixin):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    nomor_akun = Column(String(20), nullable=False, unique=True, index=True)
    nama_akun = Column(String(100), nullable=False)
    kelompok_akun = Column(String(50), nullable=False)  # Asset, Liability, Equity, Revenue, Expense
    posisi_saldo_normal = Column(String(10), nullable=False)  # debit | credit
