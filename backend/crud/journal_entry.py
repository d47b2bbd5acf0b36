"""
Journal entry store.

Persistence of journal headers and their ordered lines for either journal
variant. None of these functions commit: they only flush, so that every call
made for one logical operation lands in the caller's unit of work.
"""
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from models.audit_mixin import now_in_app_timezone


def create_header(db: Session, variant, fields: dict):
    """Insert a header row and flush to obtain its id."""
    db_entry = variant.header_model(**fields)
    db.add(db_entry)
    db.flush()
    return db_entry


def bulk_insert_lines(db: Session, variant, db_entry, lines) -> int:
    """Insert ``lines`` (validated journal lines) for ``db_entry``, keeping their order."""
    db.add_all([
        variant.line_model(
            journal_id=db_entry.id,
            account_id=line.account_id,
            debet=line.debet,
            kredit=line.kredit,
        )
        for line in lines
    ])
    db.flush()
    db.expire(db_entry, ["lines"])
    return len(lines)


def destroy_lines_for_header(db: Session, variant, db_entry) -> int:
    line_model = variant.line_model
    deleted = db.query(line_model).filter(
        line_model.journal_id == db_entry.id
    ).delete(synchronize_session="fetch")
    db.expire(db_entry, ["lines"])
    return deleted


def find_with_lines(db: Session, variant, entry_id: int):
    """Load one header with its lines (by line id) and their accounts, or None."""
    header_model = variant.header_model
    return (
        db.query(header_model)
        .options(selectinload(header_model.lines))
        .filter(header_model.id == entry_id)
        .populate_existing()
        .first()
    )


def find_all_with_lines(
    db: Session,
    variant,
    search: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    account_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 10,
):
    """
    Return (entries, total) matching the filters.

    ``account_id`` keeps entries having at least one line on that account;
    their full line sets are still returned. ``total`` counts headers.
    """
    header_model = variant.header_model
    line_model = variant.line_model
    query = db.query(header_model)

    if start_date:
        query = query.filter(header_model.tanggal >= start_date)
    if end_date:
        query = query.filter(header_model.tanggal <= end_date)
    if search:
        query = query.filter(header_model.deskripsi_transaksi.ilike(f"%{search}%"))
    if account_id:
        query = query.filter(header_model.lines.any(line_model.account_id == account_id))

    total = query.count()
    entries: List = (
        query.options(selectinload(header_model.lines))
        .order_by(header_model.tanggal.desc(), header_model.created_at.desc(), header_model.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return entries, total


def update_header(db: Session, variant, db_entry, fields: dict):
    """Apply ``fields`` to the header. Always touches updated_at so the version moves."""
    for key, value in fields.items():
        setattr(db_entry, key, value)
    db_entry.updated_at = now_in_app_timezone()
    db.flush()
    return db_entry


def destroy_header(db: Session, variant, db_entry) -> None:
    db.delete(db_entry)
    db.flush()
