from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from database import get_db
from schemas.accounts import Account, AccountCreate, AccountUpdate
from crud import accounts as accounts_crud
from utils.errors import NotFoundError
from utils.query import resolve_page
from utils.responses import pagination_meta, send_response

router = APIRouter(
    prefix="/accounts",
    tags=["Accounts"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_account(account: AccountCreate, db: Session = Depends(get_db)):
    db_account = accounts_crud.create_account(db, account)
    return send_response(status.HTTP_201_CREATED, "Account created successfully", {"account": Account.model_validate(db_account)})


@router.get("")
def get_accounts(
    page: int = 1,
    limit: Optional[int] = None,
    search: Optional[str] = None,
    kelompok_akun: Optional[str] = None,
    db: Session = Depends(get_db),
):
    page, limit, offset = resolve_page(page, limit)
    accounts, total = accounts_crud.get_accounts(db, search=search, kelompok_akun=kelompok_akun, skip=offset, limit=limit)
    return send_response(status.HTTP_200_OK, "Accounts retrieved successfully", {
        "accounts": [Account.model_validate(account) for account in accounts],
        "pagination": pagination_meta(page, limit, total),
    })


@router.get("/{nomor_akun}")
def get_account(nomor_akun: str, db: Session = Depends(get_db)):
    db_account = accounts_crud.get_account_by_number(db, nomor_akun)
    if not db_account:
        raise NotFoundError("Account not found")
    return send_response(status.HTTP_200_OK, "Account retrieved successfully", {"account": Account.model_validate(db_account)})


@router.put("/{nomor_akun}")
def update_account(nomor_akun: str, account_update: AccountUpdate, db: Session = Depends(get_db)):
    db_account = accounts_crud.update_account(db, nomor_akun, account_update)
    return send_response(status.HTTP_200_OK, "Account updated successfully", {"account": Account.model_validate(db_account)})


@router.delete("/{nomor_akun}")
def delete_account(nomor_akun: str, db: Session = Depends(get_db)):
    deleted = accounts_crud.delete_account(db, nomor_akun)
    return send_response(status.HTTP_200_OK, "Account deleted successfully", {"deleted_account": deleted})
