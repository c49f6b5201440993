"""Date manipulation utilities"""

import calendar
from datetime import date, datetime
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def add_months(from_date: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping to the last day of the target month"""
    month_index = from_date.month - 1 + months
    year = from_date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(from_date.day, calendar.monthrange(year, month)[1])
    return from_date.replace(year=year, month=month, day=day)


def today_in(timezone_name: str) -> date:
    """Current calendar date in the given IANA timezone"""
    try:
        tz = ZoneInfo(timezone_name)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown timezone: {timezone_name}") from e
    return datetime.now(tz).date()


def as_datetime(value: Union[date, datetime], like: Union[date, datetime]) -> datetime:
    """Promote a date to midnight, borrowing tzinfo from `like` when it is aware"""
    if isinstance(value, datetime):
        return value
    tzinfo = like.tzinfo if isinstance(like, datetime) else None
    return datetime(value.year, value.month, value.day, tzinfo=tzinfo)
