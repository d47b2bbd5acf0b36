from sqlalchemy import Column, Date, Integer, String, Text
from database import Base
from models.audit_mixin import TimestampMixin


class TransactionEvidence(Base, TimestampMixin):
    __tablename__ = "transaction_evidence"

    id = Column(Integer, primary_key=True, index=True)
    no_bukti = Column(String(50), nullable=False, unique=True, index=True)
    tanggal_transaksi = Column(Date, nullable=False)
    deskripsi = Column(Text, nullable=True)
    referensi = Column(String(255), nullable=True)
