"""
Calendar rules shared by the knowledge base and the prediction model.
Days of week follow the 1=Sunday .. 7=Saturday convention.
"""
from datetime import datetime, tzinfo
from typing import Optional

SUNDAY = 1
MONDAY = 2
SATURDAY = 7
WEEKEND_DAYS = (SUNDAY, SATURDAY)

MORNING_RUSH = range(7, 10)   # 07:00-09:59
EVENING_RUSH = range(17, 20)  # 17:00-19:59


def to_local(ts: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Moves ts into tz. Naive datetimes are taken as wall time in tz."""
    if tz is None:
        return ts
    if ts.tzinfo is None:
        return ts.replace(tzinfo=tz)
    return ts.astimezone(tz)


def elapsed_days(reference: datetime, ts: datetime) -> float:
    """Days from ts to reference. Mixed naive/aware pairs compare by wall time."""
    if (reference.tzinfo is None) != (ts.tzinfo is None):
        reference = reference.replace(tzinfo=None)
        ts = ts.replace(tzinfo=None)
    return (reference - ts).total_seconds() / 86400.0


def day_of_week(ts: datetime) -> int:
    # isoweekday: Monday=1 .. Sunday=7
    return ts.isoweekday() % 7 + 1


def is_weekend(ts: datetime) -> bool:
    return day_of_week(ts) in WEEKEND_DAYS


def is_weekend_day(day: int) -> bool:
    return day in WEEKEND_DAYS


def is_rush_hour(hour: int) -> bool:
    return hour in MORNING_RUSH or hour in EVENING_RUSH
