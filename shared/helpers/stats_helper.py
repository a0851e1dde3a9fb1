from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Tuple

from dateutil.relativedelta import relativedelta


def percent(part, whole) -> int:
    """Whole-number percentage, rounded half up. 0 when `whole` is empty."""
    if not whole:
        return 0
    value = Decimal(str(part)) * 100 / Decimal(str(whole))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_one(value) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def money(value) -> float:
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def month_bounds(today: date = None) -> Tuple[date, date]:
    today = today or date.today()
    start = today.replace(day=1)
    end = start + relativedelta(months=1) - timedelta(days=1)
    return start, end


def day_window(start: date, end: date) -> Tuple[datetime, datetime]:
    """[start 00:00, end+1 00:00) so timestamps on the end day are included."""
    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def round_int(value) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
