from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from crud import accounts as accounts_crud
from crud import journal_entry as journal_store
from models.adjusting_journal import AdjustingJournal, AdjustingJournalLine
from models.general_journal import GeneralJournal, GeneralJournalLine
from services.journal_coordinator import JournalCoordinator
from services.journal_variants import ADJUSTING_JOURNAL, GENERAL_JOURNAL
from utils.errors import (
    ConflictError,
    ConstraintViolationError,
    InsufficientLinesError,
    MissingHeaderFieldError,
    NotFoundError,
    PersistenceError,
    UnbalancedEntryError,
    UnknownAccountError,
    UnknownEvidenceError,
)
from conftest import balanced_lines


@pytest.fixture
def general():
    return JournalCoordinator(GENERAL_JOURNAL)


@pytest.fixture
def adjusting():
    return JournalCoordinator(ADJUSTING_JOURNAL)


def header(**overrides):
    fields = {"tanggal": date(2025, 6, 19), "deskripsi_transaksi": "Pendapatan jasa tunai"}
    fields.update(overrides)
    return fields


def row_counts(db, header_model, line_model):
    db.expire_all()
    return db.query(header_model).count(), db.query(line_model).count()


def test_create_persists_header_and_lines_in_order(db, general, accounts, evidence):
    lines = [
        {"account_id": "101", "debet": 60000, "kredit": 0},
        {"account_id": "102", "debet": 40000, "kredit": 0},
        {"account_id": "401", "debet": 0, "kredit": 100000},
    ]
    entry = general.create(db, header(evidence_ref=evidence), lines)

    assert entry.id is not None
    assert entry.version == 1
    assert entry.evidence_ref == "BT001"
    assert entry.evidence.no_bukti == "BT001"
    assert [(line.account_id, line.debet, line.kredit) for line in entry.lines] == [
        ("101", Decimal("60000"), Decimal("0")),
        ("102", Decimal("40000"), Decimal("0")),
        ("401", Decimal("0"), Decimal("100000")),
    ]
    assert entry.lines[0].account.nama_akun == "Kas"
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (1, 3)


def test_create_requires_date_and_description(db, general, accounts):
    with pytest.raises(MissingHeaderFieldError) as excinfo:
        general.create(db, {"deskripsi_transaksi": "  "}, balanced_lines())
    assert excinfo.value.details == {"missing_fields": ["tanggal", "deskripsi_transaksi"]}
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (0, 0)


def test_create_rejects_unknown_evidence(db, general, accounts):
    with pytest.raises(UnknownEvidenceError):
        general.create(db, header(evidence_ref="BT404"), balanced_lines())
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (0, 0)


def test_blank_evidence_is_stored_as_null(db, general, accounts):
    entry = general.create(db, header(evidence_ref=""), balanced_lines())
    assert entry.evidence_ref is None


def test_create_unbalanced_writes_nothing(db, general, accounts):
    lines = [
        {"account_id": "101", "debet": 100000, "kredit": 0},
        {"account_id": "401", "debet": 0, "kredit": 99000},
    ]
    with pytest.raises(UnbalancedEntryError):
        general.create(db, header(), lines)
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (0, 0)


def test_create_unknown_accounts_lists_exactly_the_missing_ones(db, general, accounts):
    lines = [
        {"account_id": "101", "debet": 100, "kredit": 0},
        {"account_id": "999", "debet": 0, "kredit": 50},
        {"account_id": "888", "debet": 0, "kredit": 50},
    ]
    with pytest.raises(UnknownAccountError) as excinfo:
        general.create(db, header(), lines)
    assert excinfo.value.missing_accounts == ["999", "888"]
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (0, 0)


def test_failure_after_header_insert_rolls_back_everything(db, general, accounts, monkeypatch):
    def failing_insert(*args, **kwargs):
        raise OperationalError("INSERT INTO general_journal_lines", {}, Exception("disk I/O error"))

    monkeypatch.setattr(journal_store, "bulk_insert_lines", failing_insert)

    with pytest.raises(PersistenceError) as excinfo:
        general.create(db, header(), balanced_lines())
    assert "disk I/O error" in excinfo.value.message
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (0, 0)


def test_account_removed_after_validation_is_a_constraint_violation(db, general, accounts, monkeypatch):
    # The registry claims every account exists; the database foreign key disagrees.
    monkeypatch.setattr(accounts_crud, "resolve_existing", lambda session, ids: set(ids))

    with pytest.raises(ConstraintViolationError):
        general.create(db, header(), balanced_lines(credit_account="777"))
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (0, 0)


def test_get_missing_entry(db, general):
    with pytest.raises(NotFoundError):
        general.get(db, 12345)


def test_update_replaces_lines_wholesale(db, general, accounts):
    created = general.create(db, header(), balanced_lines())
    old_line_ids = {line.id for line in created.lines}

    new_lines = [
        {"account_id": "601", "debet": 25000, "kredit": 0},
        {"account_id": "602", "debet": 25000, "kredit": 0},
        {"account_id": "101", "debet": 0, "kredit": 50000},
    ]
    updated = general.update(db, created.id, {}, new_lines)

    assert [(line.account_id, line.debet, line.kredit) for line in updated.lines] == [
        ("601", Decimal("25000"), Decimal("0")),
        ("602", Decimal("25000"), Decimal("0")),
        ("101", Decimal("0"), Decimal("50000")),
    ]
    assert old_line_ids.isdisjoint({line.id for line in updated.lines})
    db.expire_all()
    assert db.query(GeneralJournalLine).filter(GeneralJournalLine.id.in_(old_line_ids)).count() == 0
    assert updated.version == 2
    # Header fields that were not supplied are unchanged.
    assert updated.tanggal == created.tanggal
    assert updated.deskripsi_transaksi == created.deskripsi_transaksi


def test_update_patches_only_supplied_header_fields(db, general, accounts, evidence):
    created = general.create(db, header(evidence_ref=evidence), balanced_lines())

    updated = general.update(db, created.id, {"deskripsi_transaksi": "Koreksi deskripsi"}, balanced_lines(5000))
    assert updated.deskripsi_transaksi == "Koreksi deskripsi"
    assert updated.evidence_ref == "BT001"

    cleared = general.update(db, created.id, {"evidence_ref": None}, balanced_lines(5000))
    assert cleared.evidence_ref is None
    assert cleared.evidence is None


def test_update_cannot_clear_required_fields(db, general, accounts):
    created = general.create(db, header(), balanced_lines())
    with pytest.raises(MissingHeaderFieldError):
        general.update(db, created.id, {"tanggal": None}, balanced_lines())


def test_update_requires_a_full_line_set(db, general, accounts):
    created = general.create(db, header(), balanced_lines())
    with pytest.raises(InsufficientLinesError):
        general.update(db, created.id, {"deskripsi_transaksi": "x"}, None)

    unchanged = general.get(db, created.id)
    assert unchanged.deskripsi_transaksi == created.deskripsi_transaksi
    assert [line.id for line in unchanged.lines] == [line.id for line in created.lines]


def test_failed_update_keeps_previous_lines(db, general, accounts):
    created = general.create(db, header(), balanced_lines())
    with pytest.raises(UnbalancedEntryError):
        general.update(db, created.id, {"deskripsi_transaksi": "should not stick"}, [
            {"account_id": "101", "debet": 10, "kredit": 0},
            {"account_id": "401", "debet": 0, "kredit": 20},
        ])

    current = general.get(db, created.id)
    assert current.deskripsi_transaksi == "Pendapatan jasa tunai"
    assert [line.id for line in current.lines] == [line.id for line in created.lines]
    assert current.version == 1


def test_update_unknown_entry(db, general, accounts):
    with pytest.raises(NotFoundError):
        general.update(db, 999, {}, balanced_lines())


def test_update_rechecks_changed_evidence_only(db, general, accounts, evidence):
    created = general.create(db, header(evidence_ref=evidence), balanced_lines())

    # Same reference: not looked up again.
    general.update(db, created.id, {"evidence_ref": evidence}, balanced_lines())

    with pytest.raises(UnknownEvidenceError):
        general.update(db, created.id, {"evidence_ref": "BT999"}, balanced_lines())


def test_update_with_stale_version_is_a_conflict(db, general, accounts):
    created = general.create(db, header(), balanced_lines())
    general.update(db, created.id, {}, balanced_lines(200), expected_version=1)

    with pytest.raises(ConflictError) as excinfo:
        general.update(db, created.id, {}, balanced_lines(300), expected_version=1)
    assert excinfo.value.details == {"current_version": 2}
    assert general.get(db, created.id).lines[0].debet == Decimal("200")


def test_concurrent_edit_between_read_and_write_is_a_conflict(db, general, accounts, monkeypatch):
    created = general.create(db, header(), balanced_lines())
    real_update_header = journal_store.update_header

    def racing_update_header(session, variant, db_entry, fields):
        # Another writer commits a new version after this request read the row.
        session.execute(
            text("UPDATE general_journals SET version = version + 1 WHERE id = :id"),
            {"id": db_entry.id},
        )
        return real_update_header(session, variant, db_entry, fields)

    monkeypatch.setattr(journal_store, "update_header", racing_update_header)

    with pytest.raises(ConflictError):
        general.update(db, created.id, {"deskripsi_transaksi": "lost update"}, balanced_lines(1))

    monkeypatch.undo()
    current = general.get(db, created.id)
    assert current.deskripsi_transaksi == "Pendapatan jasa tunai"
    assert len(current.lines) == 2


def test_delete_returns_snapshot_and_removes_everything(db, general, accounts):
    created = general.create(db, header(), balanced_lines())

    deleted = general.delete(db, created.id)
    assert deleted.id == created.id
    assert [line.id for line in deleted.lines] == [line.id for line in created.lines]

    with pytest.raises(NotFoundError):
        general.get(db, created.id)
    db.expire_all()
    assert db.query(GeneralJournalLine).filter(GeneralJournalLine.journal_id == created.id).count() == 0


def test_delete_unknown_entry(db, general):
    with pytest.raises(NotFoundError):
        general.delete(db, 42)


def test_adjusting_voucher_number_is_not_resolved(db, adjusting, accounts):
    entry = adjusting.create(
        db,
        header(deskripsi_transaksi="Penyesuaian perlengkapan", no_bukti_penyesuaian="ADJ001"),
        [
            {"account_id": "601", "debet": 50000, "kredit": 0},
            {"account_id": "105", "debet": 0, "kredit": 50000},
        ],
    )
    assert entry.no_bukti_penyesuaian == "ADJ001"
    assert row_counts(db, AdjustingJournal, AdjustingJournalLine) == (1, 2)
    # The variants keep separate stores.
    assert row_counts(db, GeneralJournal, GeneralJournalLine) == (0, 0)


def test_list_filters_and_orders(db, general, accounts):
    first = general.create(db, header(tanggal=date(2025, 6, 1), deskripsi_transaksi="Setoran modal"),
                           balanced_lines(credit_account="301"))
    second = general.create(db, header(tanggal=date(2025, 6, 15), deskripsi_transaksi="Pendapatan jasa"),
                            balanced_lines())
    general.create(db, header(tanggal=date(2025, 7, 2), deskripsi_transaksi="Bayar gaji"),
                   balanced_lines(debit_account="602", credit_account="101"))

    entries, total = general.list(db, start_date=date(2025, 6, 1), end_date=date(2025, 6, 30))
    assert total == 2
    assert [entry.id for entry in entries] == [second.id, first.id]

    entries, total = general.list(db, account_id="301")
    assert total == 1
    assert entries[0].id == first.id
    assert len(entries[0].lines) == 2

    entries, total = general.list(db, search="JASA")
    assert [entry.id for entry in entries] == [second.id]

    entries, total = general.list(db, skip=2, limit=2)
    assert total == 3
    assert [entry.id for entry in entries] == [first.id]
