from datetime import date, timedelta
from typing import Callable, Mapping

from config import STREAK_CHUNK_DAYS, STREAK_MAX_LOOKBACK_DAYS
from analytics.sources import FactSource

# (first_day, last_day) -> {日期: 完成数}，闭区间，没有完成的日期可以缺省
DailyCounter = Callable[[date, date], Mapping[date, int]]


def current_streak(
    count_days: DailyCounter,
    today: date,
    chunk_days: int = STREAK_CHUNK_DAYS,
    max_lookback: int = STREAK_MAX_LOOKBACK_DAYS,
) -> int:
    """从今天往前逐日检查，遇到第一个没有完成任务的日子就停止

    今天还没结束，今天没有完成不算中断，直接从昨天开始算。
    按 chunk_days 分段查询，最多回看 max_lookback 天。
    """
    if max_lookback <= 0:
        return 0

    oldest = today - timedelta(days=max_lookback - 1)
    cursor = today
    streak = 0

    while cursor >= oldest:
        chunk_start = max(cursor - timedelta(days=chunk_days - 1), oldest)
        counts = count_days(chunk_start, cursor)

        day = cursor
        while day >= chunk_start:
            if counts.get(day, 0) > 0:
                streak += 1
            elif day != today:
                return streak
            day -= timedelta(days=1)

        cursor = chunk_start - timedelta(days=1)

    return streak


def calculate_streak(source: FactSource, user_id: str, today: date, previous_longest: int = 0) -> tuple:
    """计算连续完成天数，返回 (当前连续, 历史最长)"""
    current = current_streak(lambda first, last: source.daily_counts(user_id, first, last), today)
    return current, max(previous_longest, current)
