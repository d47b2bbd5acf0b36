from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional
from database import get_db
from schemas.transaction_evidence import TransactionEvidence, TransactionEvidenceCreate, TransactionEvidenceUpdate
from crud import transaction_evidence as evidence_crud
from utils.errors import NotFoundError
from utils.query import parse_query_date, resolve_page
from utils.responses import pagination_meta, send_response

router = APIRouter(
    prefix="/transaction-evidence",
    tags=["Transaction Evidence"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_transaction_evidence(evidence: TransactionEvidenceCreate, db: Session = Depends(get_db)):
    db_evidence = evidence_crud.create_evidence(db, evidence)
    return send_response(
        status.HTTP_201_CREATED,
        "Transaction evidence created successfully",
        {"transaction_evidence": TransactionEvidence.model_validate(db_evidence)},
    )


@router.get("")
def get_transaction_evidence_list(
    page: int = 1,
    limit: Optional[int] = None,
    search: Optional[str] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Retrieve a page of transaction evidence, newest transaction date first."""
    page, limit, offset = resolve_page(page, limit)
    rows, total = evidence_crud.get_evidence_list(
        db,
        search=search,
        start_date=parse_query_date(startDate, "startDate"),
        end_date=parse_query_date(endDate, "endDate"),
        skip=offset,
        limit=limit,
    )
    return send_response(status.HTTP_200_OK, "Transaction evidence retrieved successfully", {
        "transaction_evidence": [TransactionEvidence.model_validate(row) for row in rows],
        "pagination": pagination_meta(page, limit, total),
    })


@router.get("/{no_bukti}")
def get_transaction_evidence(no_bukti: str, db: Session = Depends(get_db)):
    db_evidence = evidence_crud.get_evidence_by_number(db, no_bukti)
    if not db_evidence:
        raise NotFoundError("Transaction evidence not found")
    return send_response(
        status.HTTP_200_OK,
        "Transaction evidence retrieved successfully",
        {"transaction_evidence": TransactionEvidence.model_validate(db_evidence)},
    )


@router.put("/{no_bukti}")
def update_transaction_evidence(no_bukti: str, evidence_update: TransactionEvidenceUpdate, db: Session = Depends(get_db)):
    db_evidence = evidence_crud.update_evidence(db, no_bukti, evidence_update)
    return send_response(
        status.HTTP_200_OK,
        "Transaction evidence updated successfully",
        {"transaction_evidence": TransactionEvidence.model_validate(db_evidence)},
    )


@router.delete("/{no_bukti}")
def delete_transaction_evidence(no_bukti: str, db: Session = Depends(get_db)):
    deleted = evidence_crud.delete_evidence(db, no_bukti)
    return send_response(
        status.HTTP_200_OK,
        "Transaction evidence deleted successfully",
        {"deleted_transaction_evidence": deleted},
    )
