from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.journal_entry import JournalHeaderMixin, JournalLineMixin


class GeneralJournal(Base, JournalHeaderMixin):
    __tablename__ = "general_journals"

    evidence_ref = Column(String(50), ForeignKey("transaction_evidence.no_bukti"), nullable=True, index=True)

    # Relationships
    evidence = relationship("TransactionEvidence", lazy="joined")
    lines = relationship(
        "GeneralJournalLine",
        back_populates="journal",
        cascade="all, delete-orphan",
        order_by="GeneralJournalLine.id",
    )


class GeneralJournalLine(Base, JournalLineMixin):
    __tablename__ = "general_journal_lines"
    __header_table__ = "general_journals"

    journal = relationship("GeneralJournal", back_populates="lines")
