import logging
from datetime import datetime, timedelta

from models import UserStatsSnapshot
from analytics.rounding import round_half_up, safe_ratio
from analytics.scoring import ScoringConfig, calculate_productivity_score
from analytics.streak import calculate_streak

logger = logging.getLogger(__name__)


def build_snapshot(
    tasks,
    groups,
    user_id: str,
    now: datetime,
    previous_longest: int = 0,
    scoring: ScoringConfig = None,
) -> UserStatsSnapshot:
    """只计算不写入"""
    counts = tasks.task_counts(user_id)
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)
    current, longest = calculate_streak(tasks, user_id, now.date(), previous_longest)

    snapshot = UserStatsSnapshot(
        user_id=user_id,
        total_tasks=counts["total"],
        completed_tasks=counts["completed"],
        pending_tasks=counts["pending"],
        in_progress_tasks=counts["in_progress"],
        completion_rate=round_half_up(safe_ratio(counts["completed"], counts["total"]) * 100, 1),
        current_streak_days=current,
        longest_streak_days=longest,
        weekly_completed=tasks.count_completed(user_id, week_ago, now),
        monthly_completed=tasks.count_completed(user_id, month_ago, now),
        weekly_high_priority_completed=tasks.count_completed(user_id, week_ago, now, priority="high"),
        overdue_tasks=tasks.count_overdue(user_id, now),
        high_priority_tasks=counts["high"],
        medium_priority_tasks=counts["medium"],
        low_priority_tasks=counts["low"],
        total_groups=groups.count(user_id),
        average_completion_time=round_half_up(tasks.average_completion_hours(user_id), 2),
        last_updated=now,
    )
    snapshot.productivity_score = calculate_productivity_score(snapshot, scoring)
    return snapshot


def materialize_user_stats(tasks, groups, stats, user_id: str, now: datetime, scoring: ScoringConfig = None) -> UserStatsSnapshot:
    """重新计算并保存用户统计快照

    先完成全部计算再一次性原子写入，计算中途出错不会留下半更新的快照。
    """
    existing = stats.get(user_id)
    previous_longest = existing.longest_streak_days if existing else 0
    snapshot = build_snapshot(tasks, groups, user_id, now, previous_longest, scoring)
    saved = stats.save(snapshot)
    logger.info(
        "用户 %s 统计已更新: score=%s streak=%s/%s",
        user_id, saved.productivity_score, saved.current_streak_days, saved.longest_streak_days,
    )
    return saved


def reset_user_stats(tasks, groups, stats, user_id: str, now: datetime, scoring: ScoringConfig = None) -> UserStatsSnapshot:
    """删除快照后从头计算，最长连续天数也重新统计"""
    removed = stats.delete(user_id)
    logger.info("用户 %s 统计已重置 (removed=%s)", user_id, removed)
    return materialize_user_stats(tasks, groups, stats, user_id, now, scoring)
