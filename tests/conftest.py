"""
Shared fixtures.

The app is imported against an in-memory SQLite database; the schema is
dropped and recreated around every test.
"""
import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="ledger-logs-"))

from datetime import date

import pytest
from fastapi.testclient import TestClient

from crud.accounts import initialize_default_accounts
from crud.transaction_evidence import create_evidence
from database import Base, SessionLocal, engine
from main import app
from schemas.transaction_evidence import TransactionEvidenceCreate


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def accounts(db):
    """Default chart of accounts: 101 Kas, 102, 105, 201, 301, 401, 601, 602."""
    initialize_default_accounts(db)
    return ["101", "102", "105", "201", "301", "401", "601", "602"]


@pytest.fixture
def evidence(db):
    return create_evidence(db, TransactionEvidenceCreate(
        no_bukti="BT001",
        tanggal_transaksi=date(2025, 6, 19),
        deskripsi="Kuitansi jasa",
        referensi="INV-7781",
    )).no_bukti


def balanced_lines(amount=100000, debit_account="101", credit_account="401"):
    return [
        {"account_id": debit_account, "debet": amount, "kredit": 0},
        {"account_id": credit_account, "debet": 0, "kredit": amount},
    ]
