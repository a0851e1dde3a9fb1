import logging
from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from shared.core.auth import can_access_hotel, hotel_scope_filters, resolve_target_hotel
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import forbidden, not_found
from ...enum.revenue_enum import TransactionType
from ...models.financials.transactions import Transaction
from ...models.hospitality import Reservation
from ...schemas.financials.transactions_schemas import (
    TransactionCreate, TransactionOut, TransactionRequest
)

logger = logging.getLogger(__name__)


def _transaction_out(txn: Transaction) -> TransactionOut:
    out = TransactionOut.model_validate(txn)
    out.reservation_code = txn.reservation.code if txn.reservation else None
    out.processed_by_name = txn.processed_by.full_name if txn.processed_by else None
    return out


# ----------------- Build Filters -----------------
def build_transaction_filters(current_user: UserToken, params: TransactionRequest):
    filters = hotel_scope_filters(Transaction.hotel_id, current_user, params.hotel_id)

    if params.type and params.type.lower() != "all":
        filters.append(Transaction.type == params.type.upper())

    if params.reservation_id:
        filters.append(Transaction.reservation_id == params.reservation_id)

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(Transaction.reference.ilike(search_term) | Transaction.description.ilike(search_term))
    return filters


# ----------------- Get All Transactions -----------------
def get_transactions(db: Session, current_user: UserToken, params: TransactionRequest):
    filters = build_transaction_filters(current_user, params)
    base_query = db.query(Transaction).filter(*filters)
    total = base_query.with_entities(func.count(Transaction.id)).scalar()

    transactions = (
        base_query
        .options(joinedload(Transaction.reservation), joinedload(Transaction.processed_by))
        .order_by(Transaction.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"transactions": [_transaction_out(t) for t in transactions], "total": total}


# ----------------- Create Transaction -----------------
def create_transaction(db: Session, current_user: UserToken, data: TransactionCreate):
    """Append a ledger entry and move the linked reservation's paid amount."""
    reservation = None
    if data.reservation_id:
        reservation = db.query(Reservation).filter(Reservation.id == data.reservation_id).first()
        if not reservation:
            return not_found("Reservation")
        hotel_id = reservation.hotel_id
    else:
        hotel_id = resolve_target_hotel(current_user, data.hotel_id)

    if not can_access_hotel(current_user, hotel_id):
        return forbidden()

    amount = Decimal(str(data.amount))
    txn = Transaction(
        hotel_id=hotel_id,
        reservation_id=reservation.id if reservation else None,
        processed_by_id=current_user.user_id,
        type=data.type.value,
        amount=amount,
        payment_method=data.payment_method.value,
        payment_status=data.payment_status.value,
        reference=data.reference,
        description=data.description,
    )
    db.add(txn)

    if reservation is not None and data.type != TransactionType.ADJUSTMENT:
        delta = amount if data.type == TransactionType.PAYMENT else -amount
        db.query(Reservation).filter(Reservation.id == reservation.id).update(
            {Reservation.paid_amount: Reservation.paid_amount + delta},
            synchronize_session=False
        )

    db.commit()
    db.refresh(txn)
    logger.info("Transaction %s %s recorded for hotel %s", data.type.value, amount, hotel_id)
    return _transaction_out(txn)
