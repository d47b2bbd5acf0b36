import logging
from datetime import date
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.general_journal import GeneralJournal
from models.transaction_evidence import TransactionEvidence
from schemas.transaction_evidence import (
    TransactionEvidence as TransactionEvidenceSchema,
    TransactionEvidenceCreate,
    TransactionEvidenceUpdate,
)
from utils.errors import ConflictError, LedgerValidationError, NotFoundError

logger = logging.getLogger("transaction_evidence")


def get_evidence_by_number(db: Session, no_bukti: str) -> Optional[TransactionEvidence]:
    return db.query(TransactionEvidence).filter(TransactionEvidence.no_bukti == no_bukti).first()


def evidence_exists(db: Session, no_bukti: str) -> bool:
    return db.query(TransactionEvidence.id).filter(TransactionEvidence.no_bukti == no_bukti).first() is not None


def get_evidence_list(
    db: Session,
    search: str = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 10,
):
    """Return (evidence, total), newest transaction date first."""
    query = db.query(TransactionEvidence)

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            TransactionEvidence.no_bukti.ilike(pattern),
            TransactionEvidence.deskripsi.ilike(pattern),
            TransactionEvidence.referensi.ilike(pattern),
        ))
    if start_date:
        query = query.filter(TransactionEvidence.tanggal_transaksi >= start_date)
    if end_date:
        query = query.filter(TransactionEvidence.tanggal_transaksi <= end_date)

    total = query.count()
    rows = query.order_by(
        TransactionEvidence.tanggal_transaksi.desc(),
        TransactionEvidence.no_bukti.asc(),
    ).offset(skip).limit(limit).all()
    return rows, total


def create_evidence(db: Session, evidence: TransactionEvidenceCreate) -> TransactionEvidence:
    if get_evidence_by_number(db, evidence.no_bukti):
        raise ConflictError(f"Transaction evidence number {evidence.no_bukti} already exists.")

    db_evidence = TransactionEvidence(**evidence.model_dump())
    db.add(db_evidence)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Transaction evidence number {evidence.no_bukti} already exists.")
    db.refresh(db_evidence)
    logger.info(f"Transaction evidence {db_evidence.no_bukti} created")
    return db_evidence


def update_evidence(db: Session, no_bukti: str, evidence_update: TransactionEvidenceUpdate) -> TransactionEvidence:
    db_evidence = get_evidence_by_number(db, no_bukti)
    if not db_evidence:
        raise NotFoundError("Transaction evidence not found")

    update_data = evidence_update.model_dump(exclude_unset=True)
    if "tanggal_transaksi" in update_data and update_data["tanggal_transaksi"] is None:
        raise LedgerValidationError("tanggal_transaksi cannot be cleared.")
    for key, value in update_data.items():
        setattr(db_evidence, key, value)

    db.commit()
    db.refresh(db_evidence)
    logger.info(f"Transaction evidence {no_bukti} updated: {sorted(update_data)}")
    return db_evidence


def delete_evidence(db: Session, no_bukti: str) -> TransactionEvidenceSchema:
    db_evidence = get_evidence_by_number(db, no_bukti)
    if not db_evidence:
        raise NotFoundError("Transaction evidence not found")

    in_use = db.query(GeneralJournal.id).filter(GeneralJournal.evidence_ref == no_bukti).first()
    if in_use:
        raise ConflictError(
            f"Transaction evidence {no_bukti} is referenced by a general journal entry and cannot be deleted."
        )

    snapshot = TransactionEvidenceSchema.model_validate(db_evidence)
    db.delete(db_evidence)
    db.commit()
    logger.info(f"Transaction evidence {no_bukti} deleted")
    return snapshot
