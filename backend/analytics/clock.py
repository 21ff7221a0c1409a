from datetime import datetime, timezone
from typing import Protocol
from zoneinfo import ZoneInfo

from config import TIMEZONE


class Clock(Protocol):
    def now(self) -> datetime: ...


def local_zone(name: str = None) -> ZoneInfo:
    return ZoneInfo(name or TIMEZONE)


def to_utc(local: datetime, zone: ZoneInfo) -> datetime:
    """本地时间（无时区） -> 库内 UTC 时间（无时区）"""
    return local.replace(tzinfo=zone).astimezone(timezone.utc).replace(tzinfo=None)


def from_utc(stored: datetime, zone: ZoneInfo) -> datetime:
    """库内时间 -> 本地时间（无时区），无时区的值按 UTC 处理"""
    if stored.tzinfo is None:
        stored = stored.replace(tzinfo=timezone.utc)
    return stored.astimezone(zone).replace(tzinfo=None)


class SystemClock:
    """配置时区下的当前本地时间（无时区）"""

    def __init__(self, zone_name: str = None):
        self.zone = local_zone(zone_name)

    def now(self) -> datetime:
        return datetime.now(self.zone).replace(tzinfo=None)


class FixedClock:
    """固定时间，用于测试"""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant
