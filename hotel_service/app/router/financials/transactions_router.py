from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_role, validate_current_token
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.financials import transactions_crud as crud
from ...schemas.financials.transactions_schemas import (
    TransactionCreate, TransactionListResponse, TransactionOut, TransactionRequest
)

# append-only ledger: no update or delete routes
router = APIRouter(prefix="/api/transactions", tags=["Transactions"],
                   dependencies=[Depends(validate_current_token)])


@router.get("", response_model=TransactionListResponse)
def get_transactions_endpoint(
    params: TransactionRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_transactions(db, current_user, params)


@router.post("", response_model=TransactionOut)
def create_transaction_endpoint(
    transaction: TransactionCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.RECEPTIONIST))
):
    return crud.create_transaction(db, current_user, transaction)
