"""
Time calculations.

Pure functions without database access; every datetime is expected to be
timezone aware (UTC).
"""

import calendar
import datetime
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

DEFAULT_ROUNDING_INTERVAL = 15

ROUNDING_NONE = 'none'
ROUNDING_UP = 'up'
ROUNDING_DOWN = 'down'
ROUNDING_NEAREST = 'nearest'


def calculate_duration(start: datetime.datetime, end: datetime.datetime) -> int:
    """Whole minutes between start and end (seconds are dropped, never negative)."""
    seconds = (end - start).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // 60)


def round_duration(minutes: int, method: str, interval: int = DEFAULT_ROUNDING_INTERVAL) -> int:
    """
    Round minutes to a multiple of ``interval``.

    >>> round_duration(17, 'up', 15)
    30
    >>> round_duration(8, 'nearest', 15)
    15
    """
    if method == ROUNDING_NONE or not interval or interval <= 0:
        return minutes

    if method == ROUNDING_UP:
        return math.ceil(minutes / interval) * interval
    if method == ROUNDING_DOWN:
        return math.floor(minutes / interval) * interval
    if method == ROUNDING_NEAREST:
        steps = (Decimal(minutes) / Decimal(interval)).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
        return int(steps) * interval
    return minutes


def calculate_amount(minutes: int, rate) -> Optional[Decimal]:
    """Amount for ``minutes`` at an hourly ``rate``, rounded to 0.01."""
    if rate is None:
        return None
    amount = Decimal(minutes) / Decimal(60) * Decimal(str(rate))
    return amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def effective_hourly_rate(entry_rate, settings_rate):
    return entry_rate if entry_rate is not None else settings_rate


def format_duration(minutes: int) -> str:
    """``HH:MM``"""
    minutes = minutes or 0
    return f'{minutes // 60:02d}:{minutes % 60:02d}'


def format_duration_human(minutes: int) -> str:
    """``1h 30m``, ``2h``, ``30m``, ``0m``"""
    minutes = minutes or 0
    hours, rest = divmod(minutes, 60)
    if hours and rest:
        return f'{hours}h {rest}m'
    if hours:
        return f'{hours}h'
    return f'{rest}m'


def ranges_overlap(a_start, a_end, b_start, b_end) -> bool:
    """
    True if two time ranges overlap.

    An end of None means the range is still open. Ranges that only touch
    (a_end == b_start) do not overlap.
    """
    a_before_b_ends = b_end is None or a_start < b_end
    b_before_a_ends = a_end is None or b_start < a_end
    return a_before_b_ends and b_before_a_ends


def day_bounds(date: datetime.date) -> Tuple[datetime.datetime, datetime.datetime]:
    """[start, end) of the UTC day."""
    start = datetime.datetime.combine(date, datetime.time.min, tzinfo=datetime.timezone.utc)
    return start, start + datetime.timedelta(days=1)


def week_bounds(date: datetime.date, week_start_day: int = 1) -> Tuple[datetime.date, datetime.date]:
    """
    First and last day of the week containing ``date``.

    week_start_day uses ISO numbering: 1 = Monday ... 7 = Sunday.
    """
    offset = (date.isoweekday() - week_start_day) % 7
    first = date - datetime.timedelta(days=offset)
    return first, first + datetime.timedelta(days=6)


def month_bounds(date: datetime.date) -> Tuple[datetime.date, datetime.date]:
    """First and last day of the month containing ``date``."""
    last_day = calendar.monthrange(date.year, date.month)[1]
    return date.replace(day=1), date.replace(day=last_day)
