from datetime import date, datetime, timedelta
from typing import List

from config import DEFAULT_TREND_WEEKS, HISTORY_DAYS, MAX_TREND_WEEKS
from models import StatsHistoryPoint, TrendPoint, TrendReport, TrendSummary
from analytics.aggregation import aggregate_week
from analytics.errors import ValidationError
from analytics.rounding import round_half_up
from analytics.sources import FactSource
from analytics.week import resolve_offset


def week_label(weeks_ago: int) -> str:
    if weeks_ago == 0:
        return "Current week"
    if weeks_ago == 1:
        return "Last week"
    return f"{weeks_ago} weeks ago"


def validate_weeks(weeks: int, max_weeks: int = MAX_TREND_WEEKS):
    if weeks < 1 or weeks > max_weeks:
        raise ValidationError("weeks", f"Weeks must be between 1 and {max_weeks}")


def summarize_trends(points: List[TrendPoint]) -> TrendSummary:
    """points 按时间正序，最佳周并列时取最近的一周"""
    best = points[0]
    for point in points:
        if point.completed >= best.completed:
            best = point
    total = sum(p.completed for p in points)
    return TrendSummary(
        average_completion=round_half_up(total / len(points), 1),
        best_week=best,
        total_completed=total,
        total_weeks=len(points),
    )


def analyze_trends(
    source: FactSource,
    user_id: str,
    now: datetime,
    weeks: int = DEFAULT_TREND_WEEKS,
    max_weeks: int = MAX_TREND_WEEKS,
) -> TrendReport:
    """统计最近几周的完成趋势，最早的一周在前，本周在最后"""
    validate_weeks(weeks, max_weeks)

    points = []
    for weeks_ago in range(weeks):
        window = resolve_offset(now, -weeks_ago, floor=-max_weeks)
        snapshot = aggregate_week(window, source.iter_facts(user_id, window.start, window.end))
        breakdown = snapshot.priority_breakdown
        points.append(TrendPoint(
            week_label=week_label(weeks_ago),
            week_start=window.start,
            week_end=window.end,
            completed=snapshot.total_completed,
            total_time=snapshot.total_time_minutes,
            high_priority=breakdown.get("high", 0),
            medium_priority=breakdown.get("medium", 0),
            low_priority=breakdown.get("low", 0),
        ))

    points.reverse()
    return TrendReport(trends=points, summary=summarize_trends(points))


def daily_history(source: FactSource, user_id: str, today: date, days: int = HISTORY_DAYS) -> List[StatsHistoryPoint]:
    """最近 days 天（含今天）每天的完成数，按日期正序"""
    first_day = today - timedelta(days=days - 1)
    counts = source.daily_counts(user_id, first_day, today)
    history = []
    for i in range(days):
        day = first_day + timedelta(days=i)
        history.append(StatsHistoryPoint(date=day, completed_tasks=counts.get(day, 0)))
    return history
