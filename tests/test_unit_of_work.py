import pytest
from sqlalchemy.exc import IntegrityError

from database import UnitOfWork
from models.accounts import Account


def make_account(nomor_akun):
    return Account(nomor_akun=nomor_akun, nama_akun="Kas Kecil", kelompok_akun="Asset", posisi_saldo_normal="debit")


def test_leaving_the_block_commits(db):
    with UnitOfWork(db) as uow:
        uow.session.add(make_account("103"))

    db.expire_all()
    assert db.query(Account).filter(Account.nomor_akun == "103").count() == 1


def test_exception_rolls_back_and_propagates(db):
    with pytest.raises(RuntimeError):
        with UnitOfWork(db) as uow:
            uow.session.add(make_account("104"))
            uow.session.flush()
            raise RuntimeError("boom")

    assert db.query(Account).count() == 0


def test_failing_commit_is_rolled_back(db):
    with UnitOfWork(db) as uow:
        uow.session.add(make_account("105"))

    with pytest.raises(IntegrityError):
        with UnitOfWork(db) as uow:
            uow.session.add(make_account("105"))

    assert db.query(Account).filter(Account.nomor_akun == "105").count() == 1
