"""Read-side aggregates over reservations, rooms, charges and the ledger.

Every generator is a pure function of stored rows for the closed period
[start_date, end_date]. Timestamps are compared against
[start 00:00, end+1 00:00) so the whole end day counts.
"""
import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session, selectinload

from shared.core.auth import can_access_hotel, hotel_scope_filters, resolve_hotel_scope
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, forbidden, not_found
from shared.helpers.stats_helper import (
    day_window, iter_days, money, month_bounds, percent, round_int, round_one
)
from shared.utils.app_status_code import AppStatusCode
from ...enum.hospitality_enum import ReservationStatus
from ...enum.revenue_enum import PaymentStatus, ReportType, TransactionType
from ...models.financials.transactions import Transaction
from ...models.hospitality import Charge, Hotel, Reservation, Room
from ...models.overview.reports import Report
from ...schemas.overview.reports_schemas import ReportRequest, ReportSaveRequest, SavedReportOut

logger = logging.getLogger(__name__)

MAX_REPORT_DAYS = 366

OCCUPYING_STATUSES = [
    ReservationStatus.CONFIRMED.value,
    ReservationStatus.CHECKED_IN.value,
    ReservationStatus.CHECKED_OUT.value,
]


def _sum(values) -> Decimal:
    return sum((Decimal(str(v)) for v in values), Decimal("0"))


def _period(start_date: date, end_date: date) -> Dict[str, str]:
    return {"start_date": start_date.isoformat(), "end_date": end_date.isoformat()}


# ------------------- Occupancy -------------------
def generate_occupancy_report(db: Session, current_user: UserToken, hotel_id: Optional[UUID],
                              start_date: date, end_date: date) -> Dict[str, Any]:
    total_rooms = db.query(Room).filter(
        *hotel_scope_filters(Room.hotel_id, current_user, hotel_id),
        Room.is_active == True
    ).count()

    reservations = (
        db.query(Reservation)
        .options(selectinload(Reservation.rooms))
        .filter(
            *hotel_scope_filters(Reservation.hotel_id, current_user, hotel_id),
            Reservation.status.in_(OCCUPYING_STATUSES),
            Reservation.check_in_date <= end_date,
            Reservation.check_out_date > start_date,
        )
        .all()
    )
    stays = [(r.check_in_date, r.check_out_date, len(r.rooms)) for r in reservations]

    daily = []
    weekday_totals = [0] * 7
    weekday_counts = [0] * 7
    for day in iter_days(start_date, end_date):
        # the check-out night is not occupied
        rooms_occupied = sum(n for check_in, check_out, n in stays if check_in <= day < check_out)
        occupancy = percent(rooms_occupied, total_rooms)
        daily.append({"date": day.isoformat(), "occupancy": occupancy, "rooms_occupied": rooms_occupied})

        weekday = (day.weekday() + 1) % 7  # 0 = Sunday
        weekday_totals[weekday] += occupancy
        weekday_counts[weekday] += 1

    values = [d["occupancy"] for d in daily]
    return {
        "type": ReportType.OCCUPANCY.value,
        "period": _period(start_date, end_date),
        "total_rooms": total_rooms,
        "average_occupancy": round_int(Decimal(sum(values)) / len(values)) if values else 0,
        "daily_occupancy": daily,
        "occupancy_by_day_of_week": [
            round_int(Decimal(total) / count) if count else 0
            for total, count in zip(weekday_totals, weekday_counts)
        ],
        "peak_occupancy": max(values) if values else 0,
        "lowest_occupancy": min(values) if values else 0,
    }


# ------------------- Revenue -------------------
def generate_revenue_report(db: Session, current_user: UserToken, hotel_id: Optional[UUID],
                            start_date: date, end_date: date) -> Dict[str, Any]:
    window_start, window_end = day_window(start_date, end_date)
    transactions = db.query(Transaction).filter(
        *hotel_scope_filters(Transaction.hotel_id, current_user, hotel_id),
        Transaction.created_at >= window_start,
        Transaction.created_at < window_end,
    ).all()

    payments = [t for t in transactions if t.type == TransactionType.PAYMENT.value]
    refunds = [t for t in transactions if t.type == TransactionType.REFUND.value]
    total_revenue = _sum(t.amount for t in payments)
    total_refunds = _sum(t.amount for t in refunds)

    by_method = defaultdict(Decimal)
    by_day = defaultdict(Decimal)
    by_hotel = defaultdict(Decimal)
    for t in payments:
        amount = Decimal(str(t.amount))
        by_method[t.payment_method] += amount
        by_day[t.created_at.date()] += amount
        by_hotel[t.hotel_id] += amount

    revenue_by_hotel = []
    if resolve_hotel_scope(current_user, hotel_id) is None and by_hotel:
        names = dict(db.query(Hotel.id, Hotel.name).filter(Hotel.id.in_(list(by_hotel))).all())
        revenue_by_hotel = [
            {"hotel_id": str(hid), "hotel_name": names.get(hid, "Unknown"), "revenue": money(amount)}
            for hid, amount in sorted(by_hotel.items(), key=lambda item: -item[1])
        ]

    return {
        "type": ReportType.REVENUE.value,
        "period": _period(start_date, end_date),
        "total_revenue": money(total_revenue),
        "total_refunds": money(total_refunds),
        "net_revenue": money(total_revenue - total_refunds),
        "transaction_count": len(transactions),
        "average_transaction": round_int(total_revenue / len(payments)) if payments else 0,
        "revenue_by_method": {method: money(amount) for method, amount in sorted(by_method.items())},
        "daily_revenue": [
            {"date": day.isoformat(), "revenue": money(by_day.get(day, 0))}
            for day in iter_days(start_date, end_date)
        ],
        "revenue_by_hotel": revenue_by_hotel,
    }


# ------------------- Reservations -------------------
def generate_reservations_report(db: Session, current_user: UserToken, hotel_id: Optional[UUID],
                                 start_date: date, end_date: date) -> Dict[str, Any]:
    window_start, window_end = day_window(start_date, end_date)
    reservations = db.query(Reservation).filter(
        *hotel_scope_filters(Reservation.hotel_id, current_user, hotel_id),
        Reservation.created_at >= window_start,
        Reservation.created_at < window_end,
    ).all()
    count = len(reservations)

    status_counts = {status.value: 0 for status in ReservationStatus}
    by_day = defaultdict(int)
    for r in reservations:
        status_counts[r.status] = status_counts.get(r.status, 0) + 1
        by_day[r.created_at.date()] += 1

    completed = [r for r in reservations if r.status == ReservationStatus.CHECKED_OUT.value]
    average_stay = round_one(Decimal(sum(r.nights for r in completed)) / len(completed)) if completed else 0

    total_amount = _sum(r.total_amount for r in reservations)
    paid_amount = _sum(r.paid_amount for r in reservations)

    return {
        "type": ReportType.RESERVATIONS.value,
        "period": _period(start_date, end_date),
        "total_reservations": count,
        "status_breakdown": status_counts,
        "average_stay": average_stay,
        "total_amount": money(total_amount),
        "paid_amount": money(paid_amount),
        "outstanding_amount": money(total_amount - paid_amount),
        "average_reservation_value": round_int(total_amount / count) if count else 0,
        "cancellation_rate": percent(status_counts[ReservationStatus.CANCELLED.value], count),
        "no_show_rate": percent(status_counts[ReservationStatus.NO_SHOW.value], count),
        "daily_reservations": [
            {"date": day.isoformat(), "count": by_day.get(day, 0)}
            for day in iter_days(start_date, end_date)
        ],
    }


# ------------------- Financial -------------------
def reservation_payment_status(total_amount, paid_amount) -> str:
    total = Decimal(str(total_amount or 0))
    paid = Decimal(str(paid_amount or 0))
    if paid >= total:
        return PaymentStatus.PAID.value
    if paid > 0:
        return PaymentStatus.PARTIAL.value
    return PaymentStatus.PENDING.value


def generate_financial_report(db: Session, current_user: UserToken, hotel_id: Optional[UUID],
                              start_date: date, end_date: date) -> Dict[str, Any]:
    window_start, window_end = day_window(start_date, end_date)

    transactions = db.query(Transaction).filter(
        *hotel_scope_filters(Transaction.hotel_id, current_user, hotel_id),
        Transaction.created_at >= window_start,
        Transaction.created_at < window_end,
    ).all()

    reservations = db.query(Reservation).filter(
        *hotel_scope_filters(Reservation.hotel_id, current_user, hotel_id),
        Reservation.created_at >= window_start,
        Reservation.created_at < window_end,
    ).all()

    charges = (
        db.query(Charge)
        .join(Reservation, Reservation.id == Charge.reservation_id)
        .filter(
            *hotel_scope_filters(Reservation.hotel_id, current_user, hotel_id),
            Charge.created_at >= window_start,
            Charge.created_at < window_end,
        )
        .all()
    )

    grouped: Dict[str, List[Transaction]] = {t.value: [] for t in TransactionType}
    for t in transactions:
        grouped.setdefault(t.type, []).append(t)
    payments = _sum(t.amount for t in grouped[TransactionType.PAYMENT.value])
    refunds = _sum(t.amount for t in grouped[TransactionType.REFUND.value])
    adjustments = _sum(t.amount for t in grouped[TransactionType.ADJUSTMENT.value])
    payment_count = len(grouped[TransactionType.PAYMENT.value])

    by_category = defaultdict(Decimal)
    for c in charges:
        by_category[c.category] += Decimal(str(c.amount)) * c.quantity

    payment_status_counts = defaultdict(int)
    for r in reservations:
        payment_status_counts[reservation_payment_status(r.total_amount, r.paid_amount)] += 1

    billed = _sum(r.total_amount for r in reservations)
    collected = _sum(r.paid_amount for r in reservations)

    return {
        "type": ReportType.FINANCIAL.value,
        "period": _period(start_date, end_date),
        "summary": {
            "total_payments": money(payments),
            "total_refunds": money(refunds),
            "total_adjustments": money(adjustments),
            "net_revenue": money(payments - refunds),
        },
        "transaction_counts": {
            "payments": payment_count,
            "refunds": len(grouped[TransactionType.REFUND.value]),
            "adjustments": len(grouped[TransactionType.ADJUSTMENT.value]),
        },
        "reservation_financials": {
            "total_billed": money(billed),
            "total_collected": money(collected),
            "outstanding": money(billed - collected),
        },
        "payment_status_breakdown": dict(payment_status_counts),
        "charges_by_category": {cat: money(amount) for cat, amount in sorted(by_category.items())},
        "average_payment_amount": round_int(payments / payment_count) if payment_count else 0,
    }


GENERATORS = {
    ReportType.OCCUPANCY: generate_occupancy_report,
    ReportType.REVENUE: generate_revenue_report,
    ReportType.RESERVATIONS: generate_reservations_report,
    ReportType.FINANCIAL: generate_financial_report,
}


def _parse_report_type(value: str) -> ReportType:
    try:
        return ReportType((value or "").lower())
    except ValueError:
        return error_response(
            message="Invalid report type",
            status_code=str(AppStatusCode.INVALID_INPUT),
            http_status=400
        )


def _ensure_period(start_date: date, end_date: date):
    if start_date > end_date:
        return error_response(
            message="Start date must not be after end date",
            status_code=str(AppStatusCode.INVALID_INPUT),
            http_status=400
        )
    if (end_date - start_date).days + 1 > MAX_REPORT_DAYS:
        return error_response(
            message=f"Report period cannot exceed {MAX_REPORT_DAYS} days",
            status_code=str(AppStatusCode.INVALID_INPUT),
            http_status=400
        )


def build_report(db: Session, current_user: UserToken, report_type: ReportType,
                 start_date: date, end_date: date, hotel_id: Optional[UUID]) -> Dict[str, Any]:
    hotel_id = resolve_hotel_scope(current_user, hotel_id)
    return GENERATORS[report_type](db, current_user, hotel_id, start_date, end_date)


# ------------------- Get Report -------------------
def get_report(db: Session, current_user: UserToken, params: ReportRequest):
    report_type = _parse_report_type(params.type)
    default_start, default_end = month_bounds()
    start_date = params.start_date or default_start
    end_date = params.end_date or default_end
    _ensure_period(start_date, end_date)

    hotel_id = resolve_hotel_scope(current_user, params.hotel_id)
    return {
        "type": report_type,
        "start_date": start_date,
        "end_date": end_date,
        "hotel_id": hotel_id,
        "data": build_report(db, current_user, report_type, start_date, end_date, hotel_id),
    }


# ------------------- Save Snapshot -------------------
def save_report(db: Session, current_user: UserToken, request: ReportSaveRequest):
    _ensure_period(request.start_date, request.end_date)
    if request.hotel_id and not can_access_hotel(current_user, request.hotel_id):
        return forbidden()

    hotel_id = resolve_hotel_scope(current_user, request.hotel_id)
    data = build_report(db, current_user, request.type, request.start_date, request.end_date, hotel_id)

    report = Report(
        name=request.name,
        type=request.type.value,
        start_date=request.start_date,
        end_date=request.end_date,
        hotel_id=hotel_id,
        created_by_id=current_user.user_id,
        data=data,
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    logger.info("Saved %s report %s", report.type, report.id)
    return SavedReportOut.model_validate(report)


# ------------------- Saved Snapshots -------------------
def get_saved_reports(db: Session, current_user: UserToken, hotel_id: UUID = None,
                      report_type: str = None, skip: int = 0, limit: int = 100):
    query = db.query(Report).filter(*hotel_scope_filters(Report.hotel_id, current_user, hotel_id))
    if report_type:
        query = query.filter(Report.type == _parse_report_type(report_type).value)

    total = query.count()
    reports = query.order_by(Report.created_at.desc()).offset(skip).limit(limit).all()
    return {"reports": [SavedReportOut.model_validate(r) for r in reports], "total": total}


def get_saved_report(db: Session, current_user: UserToken, report_id: UUID):
    report = db.query(Report).filter(Report.id == report_id).first()
    if not report:
        return not_found("Report")
    # chain-wide snapshots belong to SUPER_ADMIN
    if not can_access_hotel(current_user, report.hotel_id):
        return forbidden()
    return SavedReportOut.model_validate(report)
