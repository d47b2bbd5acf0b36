import logging
from typing import Iterable, Optional, Set

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.accounts import Account
from models.general_journal import GeneralJournalLine
from models.adjusting_journal import AdjustingJournalLine
from schemas.accounts import Account as AccountSchema, AccountCreate, AccountUpdate
from utils.errors import ConflictError, LedgerValidationError, NotFoundError

logger = logging.getLogger("accounts")

DEFAULT_ACCOUNTS = [
    {"nomor_akun": "101", "nama_akun": "Kas", "kelompok_akun": "Asset", "posisi_saldo_normal": "debit"},
    {"nomor_akun": "102", "nama_akun": "Piutang Usaha", "kelompok_akun": "Asset", "posisi_saldo_normal": "debit"},
    {"nomor_akun": "105", "nama_akun": "Perlengkapan", "kelompok_akun": "Asset", "posisi_saldo_normal": "debit"},
    {"nomor_akun": "201", "nama_akun": "Utang Usaha", "kelompok_akun": "Liability", "posisi_saldo_normal": "credit"},
    {"nomor_akun": "301", "nama_akun": "Modal Pemilik", "kelompok_akun": "Equity", "posisi_saldo_normal": "credit"},
    {"nomor_akun": "401", "nama_akun": "Pendapatan Jasa", "kelompok_akun": "Revenue", "posisi_saldo_normal": "credit"},
    {"nomor_akun": "601", "nama_akun": "Beban Perlengkapan", "kelompok_akun": "Expense", "posisi_saldo_normal": "debit"},
    {"nomor_akun": "602", "nama_akun": "Beban Gaji", "kelompok_akun": "Expense", "posisi_saldo_normal": "debit"},
]


def get_account_by_number(db: Session, nomor_akun: str) -> Optional[Account]:
    return db.query(Account).filter(Account.nomor_akun == nomor_akun).first()


def resolve_existing(db: Session, account_ids: Iterable[str]) -> Set[str]:
    """Return the subset of ``account_ids`` present in the chart of accounts."""
    account_ids = list(account_ids)
    if not account_ids:
        return set()
    rows = db.query(Account.nomor_akun).filter(Account.nomor_akun.in_(account_ids)).all()
    return {row[0] for row in rows}


def account_exists(db: Session, nomor_akun: str) -> bool:
    return bool(resolve_existing(db, [nomor_akun]))


def get_accounts(db: Session, search: str = None, kelompok_akun: str = None, skip: int = 0, limit: int = 10):
    """Return (accounts, total) ordered by account number."""
    query = db.query(Account)

    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Account.nomor_akun.ilike(pattern), Account.nama_akun.ilike(pattern)))
    if kelompok_akun:
        query = query.filter(Account.kelompok_akun == kelompok_akun)

    total = query.count()
    return query.order_by(Account.nomor_akun.asc()).offset(skip).limit(limit).all(), total


def create_account(db: Session, account: AccountCreate) -> Account:
    if account_exists(db, account.nomor_akun):
        raise ConflictError(f"Account number {account.nomor_akun} already exists.")

    db_account = Account(**account.model_dump())
    db.add(db_account)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Account number {account.nomor_akun} already exists.")
    db.refresh(db_account)
    logger.info(f"Account {db_account.nomor_akun} ({db_account.nama_akun}) created")
    return db_account


def update_account(db: Session, nomor_akun: str, account_update: AccountUpdate) -> Account:
    db_account = get_account_by_number(db, nomor_akun)
    if not db_account:
        raise NotFoundError("Account not found")

    update_data = account_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is None:
            raise LedgerValidationError(f"{key} cannot be cleared.")
        setattr(db_account, key, value)

    db.commit()
    db.refresh(db_account)
    logger.info(f"Account {nomor_akun} updated: {sorted(update_data)}")
    return db_account


def is_account_in_use(db: Session, nomor_akun: str) -> bool:
    for line_model in (GeneralJournalLine, AdjustingJournalLine):
        if db.query(line_model.id).filter(line_model.account_id == nomor_akun).first():
            return True
    return False


def delete_account(db: Session, nomor_akun: str) -> AccountSchema:
    db_account = get_account_by_number(db, nomor_akun)
    if not db_account:
        raise NotFoundError("Account not found")

    # Journal lines keep referencing the account; they are never cascaded.
    if is_account_in_use(db, nomor_akun):
        raise ConflictError(f"Account {nomor_akun} is referenced by journal lines and cannot be deleted.")

    snapshot = AccountSchema.model_validate(db_account)
    db.delete(db_account)
    db.commit()
    logger.info(f"Account {nomor_akun} deleted")
    return snapshot


def initialize_default_accounts(db: Session) -> int:
    """Seed the default chart of accounts. Existing account numbers are left alone."""
    created = 0
    for account_data in DEFAULT_ACCOUNTS:
        existing = get_account_by_number(db, account_data["nomor_akun"])
        if not existing:
            create_account(db, AccountCreate(**account_data))
            created += 1

    return created
