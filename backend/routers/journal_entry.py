from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from database import get_db
from schemas.journal_entry import AdjustingJournalWrite, GeneralJournalWrite
from services.journal_coordinator import JournalCoordinator
from services.journal_variants import ADJUSTING_JOURNAL, GENERAL_JOURNAL, JournalVariant
from utils.query import parse_query_date, resolve_page
from utils.responses import pagination_meta, send_response


def build_journal_router(variant: JournalVariant, prefix: str, tag: str, write_schema) -> APIRouter:
    """Create the CRUD router of one journal variant. Both variants share every handler."""
    router = APIRouter(prefix=prefix, tags=[tag])
    coordinator = JournalCoordinator(variant)

    @router.post("", status_code=status.HTTP_201_CREATED)
    def create_journal_entry(entry: write_schema, db: Session = Depends(get_db)):
        """
        Create a journal entry with its lines.
        Lines must balance (total debet == total kredit within 0.01) and reference existing accounts.
        """
        created = coordinator.create(db, entry.header_fields(), entry.line_inputs())
        return send_response(
            status.HTTP_201_CREATED,
            f"{variant.label} created successfully",
            {variant.item_key: created},
        )

    @router.get("")
    def get_journal_entries(
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        startDate: Optional[str] = None,
        endDate: Optional[str] = None,
        account_id: Optional[str] = None,
        db: Session = Depends(get_db),
    ):
        """
        Retrieve a page of journal entries, newest first.
        """
        page, limit, offset = resolve_page(page, limit)
        entries, total = coordinator.list(
            db,
            search=search,
            start_date=parse_query_date(startDate, "startDate"),
            end_date=parse_query_date(endDate, "endDate"),
            account_id=account_id,
            skip=offset,
            limit=limit,
        )
        return send_response(
            status.HTTP_200_OK,
            f"{variant.label}s retrieved successfully",
            {variant.list_key: entries, "pagination": pagination_meta(page, limit, total)},
        )

    @router.get("/{entry_id}")
    def get_journal_entry(entry_id: int, db: Session = Depends(get_db)):
        entry = coordinator.get(db, entry_id)
        return send_response(status.HTTP_200_OK, f"{variant.label} retrieved successfully", {variant.item_key: entry})

    @router.put("/{entry_id}")
    def update_journal_entry(entry_id: int, entry: write_schema, db: Session = Depends(get_db)):
        """
        Update a journal entry. Header fields left out of the body are kept;
        the line set is always replaced as a whole.
        """
        updated = coordinator.update(
            db,
            entry_id,
            entry.header_fields(),
            entry.line_inputs(),
            expected_version=entry.version,
        )
        return send_response(status.HTTP_200_OK, f"{variant.label} updated successfully", {variant.item_key: updated})

    @router.delete("/{entry_id}")
    def delete_journal_entry(entry_id: int, db: Session = Depends(get_db)):
        deleted = coordinator.delete(db, entry_id)
        return send_response(
            status.HTTP_200_OK,
            f"{variant.label} deleted successfully",
            {f"deleted_{variant.item_key}": deleted},
        )

    return router


router = build_journal_router(GENERAL_JOURNAL, "/journal-entries", "Journal Entries", GeneralJournalWrite)
adjusting_router = build_journal_router(
    ADJUSTING_JOURNAL, "/adjusting-journal-entries", "Adjusting Journal Entries", AdjustingJournalWrite
)
