from collections import Counter
from typing import Dict, Iterable, Mapping, Optional

from config import WEEKLY_GOAL_TASKS
from models import (
    CompletionFact, DailyBucket, GroupBucket, GroupInfo, Priority, ProductiveDay,
    WeeklySnapshot, WeekWindow,
)
from analytics.rounding import round_half_up, safe_ratio
from analytics.week import window_days

NO_GROUP_KEY = "none"
NO_GROUP = GroupInfo(name="No Group", color="#6B7280", icon="📋")
PRIORITY_ORDER = [Priority.HIGH.value, Priority.MEDIUM.value, Priority.LOW.value]


def aggregate_week(
    window: WeekWindow,
    facts: Iterable[CompletionFact],
    groups: Optional[Mapping[str, GroupInfo]] = None,
    weekly_goal: int = WEEKLY_GOAL_TASKS,
) -> WeeklySnapshot:
    """按天、优先级、分组汇总一周的完成记录

    单次遍历，不保留记录本身；窗口外的记录直接忽略。
    相同的窗口和记录总是得到相同的结果。
    """
    groups = groups or {}
    days = window_days(window)
    day_counts = {day: 0 for day in days}
    day_minutes = {day: 0 for day in days}
    priority_counts: Counter = Counter()
    group_buckets: Dict[str, GroupBucket] = {}
    total = 0
    total_minutes = 0

    for fact in facts:
        if not window.start <= fact.completed_at <= window.end:
            continue
        minutes = fact.estimated_minutes or 0
        day = fact.completed_at.date()

        total += 1
        total_minutes += minutes
        day_counts[day] += 1
        day_minutes[day] += minutes
        priority_counts[fact.priority.value] += 1

        # 没有分组或分组已删除的任务归入"无分组"
        key = fact.group_id if fact.group_id in groups else NO_GROUP_KEY
        info = groups.get(key, NO_GROUP)
        bucket = group_buckets.get(key)
        if bucket is None:
            bucket = group_buckets[key] = GroupBucket(name=info.name, color=info.color, icon=info.icon)
        bucket.count += 1

    daily_pattern = [
        DailyBucket(date=day, day_name=f"{day:%a}", count=day_counts[day], total_minutes=day_minutes[day])
        for day in days
    ]

    most_productive = None
    if total:
        # max() 取第一个最大值，即并列时较早的一天
        best = max(daily_pattern, key=lambda b: b.count)
        most_productive = ProductiveDay(day=f"{best.date:%A}", count=best.count)

    goal_progress = min(safe_ratio(total, weekly_goal) * 100, 100)

    return WeeklySnapshot(
        window=window,
        total_completed=total,
        priority_breakdown={p: priority_counts[p] for p in PRIORITY_ORDER if priority_counts[p]},
        group_breakdown=group_buckets,
        daily_pattern=daily_pattern,
        total_time_minutes=total_minutes,
        average_time_per_task=round_half_up(safe_ratio(total_minutes, total)),
        daily_average=round_half_up(total / 7, 1),
        most_productive_day=most_productive,
        goal_progress=round_half_up(goal_progress, 1),
    )


def top_priority(priority_breakdown: Mapping[str, int]) -> str:
    """完成数最多的优先级，并列时按 high / medium / low 顺序，无数据时为 medium"""
    best, best_count = Priority.MEDIUM.value, 0
    for priority in PRIORITY_ORDER:
        count = priority_breakdown.get(priority, 0)
        if count > best_count:
            best, best_count = priority, count
    return best
