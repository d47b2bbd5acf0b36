from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from database import Base
from models.journal_entry import JournalHeaderMixin, JournalLineMixin


class AdjustingJournal(Base, JournalHeaderMixin):
    __tablename__ = "adjusting_journals"

    no_bukti_penyesuaian = Column(String(50), nullable=True, index=True)

    # Relationships
    lines = relationship(
        "AdjustingJournalLine",
        back_populates="journal",
        cascade="all, delete-orphan",
        order_by="AdjustingJournalLine.id",
    )


class AdjustingJournalLine(Base, JournalLineMixin):
    __tablename__ = "adjusting_journal_lines"
    __header_table__ = "adjusting_journals"

    journal = relationship("AdjustingJournal", back_populates="lines")
