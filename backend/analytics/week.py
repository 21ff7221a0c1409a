from datetime import date, datetime, time, timedelta
from typing import List, Optional

from config import WEEK_START_DAY, WEEK_OFFSET_FLOOR
from models import WeekWindow
from analytics.errors import ValidationError

WEEK_LENGTH = timedelta(days=7)
# 窗口结束时间精确到毫秒（MongoDB日期精度）
WINDOW_SPAN = WEEK_LENGTH - timedelta(milliseconds=1)


def week_start_for(day: date, week_start_day: int = WEEK_START_DAY) -> datetime:
    """找到包含该日期的那一周的起始日零点"""
    delta = (day.weekday() - week_start_day) % 7
    return datetime.combine(day - timedelta(days=delta), time.min)


def window_starting(start: datetime) -> WeekWindow:
    return WeekWindow(start=start, end=start + WINDOW_SPAN)


def resolve_offset(
    now: datetime,
    week_offset: int = 0,
    floor: int = WEEK_OFFSET_FLOOR,
    week_start_day: int = WEEK_START_DAY,
) -> WeekWindow:
    """按周偏移量计算周窗口，0表示本周，-1表示上周"""
    if week_offset > 0:
        raise ValidationError("weekOffset", "Week offset cannot point to a future week")
    if week_offset < floor:
        raise ValidationError("weekOffset", f"Week offset must be between {floor} and 0")

    start = week_start_for(now.date(), week_start_day) + timedelta(weeks=week_offset)
    return window_starting(start)


def parse_date(value: str, field: str) -> date:
    """解析ISO-8601日期（也接受带时间的格式）"""
    value = (value or "").strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(field, f"{field} must be a valid ISO date")


def resolve_range(
    now: datetime,
    start_date: str,
    end_date: str,
    week_start_day: int = WEEK_START_DAY,
) -> WeekWindow:
    """按显式日期计算周窗口，统一对齐到所在周的起始日"""
    start_day = parse_date(start_date, "startDate")
    end_day = parse_date(end_date, "endDate")
    if end_day < start_day:
        raise ValidationError("endDate", "End date must not be before start date")

    window = window_starting(week_start_for(start_day, week_start_day))
    if end_day > window.end.date():
        raise ValidationError("endDate", "Date range must fall within a single week")
    if window.start > now:
        raise ValidationError("startDate", "Start date cannot be in the future")
    return window


def resolve_window(
    now: datetime,
    week_offset: Optional[int] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    week_start_day: int = WEEK_START_DAY,
) -> WeekWindow:
    if start_date or end_date:
        if not start_date:
            raise ValidationError("startDate", "startDate is required when endDate is given")
        if not end_date:
            raise ValidationError("endDate", "endDate is required when startDate is given")
        return resolve_range(now, start_date, end_date, week_start_day)
    return resolve_offset(now, week_offset or 0, week_start_day=week_start_day)


def offset_of(window: WeekWindow, now: datetime, week_start_day: int = WEEK_START_DAY) -> int:
    current = week_start_for(now.date(), week_start_day)
    return (window.start - current).days // 7


def previous_window(window: WeekWindow) -> WeekWindow:
    return window_starting(window.start - WEEK_LENGTH)


def window_days(window: WeekWindow) -> List[date]:
    first = window.start.date()
    return [first + timedelta(days=i) for i in range(7)]


def period_label(window: WeekWindow) -> str:
    """例如 "Oct 6 - Oct 12, 2025" """
    start, end = window.start, window.end
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
