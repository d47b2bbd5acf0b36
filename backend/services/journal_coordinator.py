"""
Journal transaction coordinator.

Runs create / update / delete of a journal entry (header plus lines) as one
all-or-nothing unit of work, for either journal variant. Every check runs
before the first write; any failure, including one raised by the database at
flush or commit time, rolls the whole unit back.
"""
import logging
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from crud import accounts as accounts_crud
from crud import journal_entry as journal_store
from crud import transaction_evidence as evidence_crud
from database import UnitOfWork
from services.journal_validator import ValidatedBatch, ensure_accounts_exist, validate_journal_lines
from services.journal_variants import JournalVariant
from utils.errors import (
    ConflictError,
    ConstraintViolationError,
    LedgerError,
    MissingHeaderFieldError,
    NotFoundError,
    PersistenceError,
    UnknownEvidenceError,
)

logger = logging.getLogger("journal_entries")

REQUIRED_HEADER_FIELDS = ("tanggal", "deskripsi_transaksi")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class JournalCoordinator:
    """Create, read, update and delete journal entries of one variant."""

    def __init__(self, variant: JournalVariant):
        self.variant = variant

    # -- reads --------------------------------------------------------------

    def get(self, db: Session, entry_id: int):
        db_entry = journal_store.find_with_lines(db, self.variant, entry_id)
        if db_entry is None:
            raise NotFoundError(f"{self.variant.label} not found")
        return self.variant.response_schema.model_validate(db_entry)

    def list(self, db: Session, **filters):
        entries, total = journal_store.find_all_with_lines(db, self.variant, **filters)
        return [self.variant.response_schema.model_validate(entry) for entry in entries], total

    # -- writes -------------------------------------------------------------

    def create(self, db: Session, header_fields: dict, line_inputs: Optional[Sequence[dict]]):
        """Validate and persist a new entry with its lines; return it with lines and references loaded."""
        missing = [name for name in REQUIRED_HEADER_FIELDS if _is_blank(header_fields.get(name))]
        if missing:
            raise MissingHeaderFieldError(
                f"Missing required field(s) for a {self.variant.label}: {', '.join(missing)}.",
                details={"missing_fields": missing},
            )

        def run():
            with UnitOfWork(db) as uow:
                fields = self._header_values(uow.session, header_fields, current_reference=None)
                batch = self._validate_lines(uow.session, line_inputs)

                db_entry = journal_store.create_header(uow.session, self.variant, fields)
                journal_store.bulk_insert_lines(uow.session, self.variant, db_entry, batch.lines)
                entry_id = db_entry.id
            logger.info(
                f"{self.variant.label} {entry_id} created with {len(batch.lines)} lines "
                f"(total {batch.total_debet})"
            )
            return entry_id

        entry_id = self._guard("create", run)
        return self.get(db, entry_id)

    def update(
        self,
        db: Session,
        entry_id: int,
        header_fields: dict,
        line_inputs: Optional[Sequence[dict]],
        expected_version: Optional[int] = None,
    ):
        """
        Patch the header and replace the whole line set of an existing entry.

        Only keys present in ``header_fields`` are changed. A null or empty
        side reference clears it; the required header fields cannot be
        cleared. When ``expected_version`` is given it must match the stored
        version.
        """
        def run():
            with UnitOfWork(db) as uow:
                db_entry = journal_store.find_with_lines(uow.session, self.variant, entry_id)
                if db_entry is None:
                    raise NotFoundError(f"{self.variant.label} not found")
                if expected_version is not None and expected_version != db_entry.version:
                    raise ConflictError(
                        f"{self.variant.label} {entry_id} was modified by another request "
                        f"(version {db_entry.version}, expected {expected_version}).",
                        details={"current_version": db_entry.version},
                    )

                cleared = [
                    name for name in REQUIRED_HEADER_FIELDS
                    if name in header_fields and _is_blank(header_fields[name])
                ]
                if cleared:
                    raise MissingHeaderFieldError(
                        f"{', '.join(cleared)} cannot be empty.",
                        details={"missing_fields": cleared},
                    )

                fields = self._header_values(
                    uow.session,
                    header_fields,
                    current_reference=getattr(db_entry, self.variant.reference_field),
                )
                batch = self._validate_lines(uow.session, line_inputs)

                journal_store.update_header(uow.session, self.variant, db_entry, fields)
                replaced = journal_store.destroy_lines_for_header(uow.session, self.variant, db_entry)
                journal_store.bulk_insert_lines(uow.session, self.variant, db_entry, batch.lines)
            logger.info(
                f"{self.variant.label} {entry_id} updated: header {sorted(fields)}, "
                f"{replaced} lines replaced by {len(batch.lines)}"
            )

        self._guard("update", run)
        return self.get(db, entry_id)

    def delete(self, db: Session, entry_id: int):
        """Delete the lines, then the header. Returns the entry as it was before deletion."""
        def run():
            with UnitOfWork(db) as uow:
                db_entry = journal_store.find_with_lines(uow.session, self.variant, entry_id)
                if db_entry is None:
                    raise NotFoundError(f"{self.variant.label} not found")
                snapshot = self.variant.response_schema.model_validate(db_entry)

                deleted_lines = journal_store.destroy_lines_for_header(uow.session, self.variant, db_entry)
                journal_store.destroy_header(uow.session, self.variant, db_entry)
            logger.info(f"{self.variant.label} {entry_id} deleted with {deleted_lines} lines")
            return snapshot

        return self._guard("delete", run)

    # -- helpers ------------------------------------------------------------

    def _header_values(self, session: Session, header_fields: dict, current_reference: Optional[str]) -> dict:
        """Return the header columns to write, resolving the side reference when it changes."""
        fields = {name: header_fields[name] for name in REQUIRED_HEADER_FIELDS if name in header_fields}
        if "deskripsi_transaksi" in fields:
            fields["deskripsi_transaksi"] = fields["deskripsi_transaksi"].strip()

        reference_field = self.variant.reference_field
        if reference_field in header_fields:
            reference = header_fields[reference_field]
            reference = None if _is_blank(reference) else reference.strip()
            if (
                reference is not None
                and reference != current_reference
                and self.variant.reference_must_resolve
                and not evidence_crud.evidence_exists(session, reference)
            ):
                raise UnknownEvidenceError(reference)
            fields[reference_field] = reference
        return fields

    def _validate_lines(self, session: Session, line_inputs: Optional[Sequence[dict]]) -> ValidatedBatch:
        batch = validate_journal_lines(line_inputs)
        ensure_accounts_exist(batch, lambda account_ids: accounts_crud.resolve_existing(session, account_ids))
        return batch

    def _guard(self, operation: str, run):
        """Run one unit of work, translating database failures into ledger errors."""
        try:
            return run()
        except LedgerError as e:
            logger.warning(f"{self.variant.label} {operation} rejected: {e.message}")
            raise
        except StaleDataError:
            logger.warning(f"{self.variant.label} {operation} lost a concurrent edit race")
            raise ConflictError(f"{self.variant.label} was modified by another request. Reload and retry.")
        except IntegrityError as e:
            logger.error(f"{self.variant.label} {operation} rolled back", exc_info=True)
            raise ConstraintViolationError(str(e.orig))
        except SQLAlchemyError as e:
            logger.error(f"{self.variant.label} {operation} rolled back", exc_info=True)
            raise PersistenceError(str(e))

