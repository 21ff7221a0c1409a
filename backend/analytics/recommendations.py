from collections import Counter
from typing import Iterable, List, Optional, Sequence

from config import MAX_RECOMMENDATIONS
from models import (
    CompletionFact, Insights, Patterns, ProductivityComparison, Recommendation, WeeklySnapshot,
)
from analytics.aggregation import top_priority
from analytics.rounding import round_half_up, safe_ratio

AFFIRMATION = "You're on track this week. Keep doing what works!"


def compare_weeks(current: WeeklySnapshot, previous: WeeklySnapshot) -> ProductivityComparison:
    delta = current.total_completed - previous.total_completed
    trend = "up" if delta > 0 else "down" if delta < 0 else "stable"
    return ProductivityComparison(
        current_week=current.total_completed,
        previous_week=previous.total_completed,
        trend=trend,
        improvement=delta,
    )


def high_priority_share(snapshots: Iterable[WeeklySnapshot]) -> float:
    high = total = 0
    for snapshot in snapshots:
        high += snapshot.priority_breakdown.get("high", 0)
        total += snapshot.total_completed
    return safe_ratio(high, total)


def most_productive_weekday(snapshots: Sequence[WeeklySnapshot]) -> Optional[str]:
    """多周合计完成数最多的星期几，并列时取一周中靠前的一天"""
    counts: Counter = Counter()
    order: List[str] = []
    for snapshot in snapshots:
        for bucket in snapshot.daily_pattern:
            name = f"{bucket.date:%A}"
            if name not in order:
                order.append(name)
            counts[name] += bucket.count
    best = None
    for name in order:
        if counts[name] > 0 and (best is None or counts[name] > counts[best]):
            best = name
    return best


def detect_patterns(
    current: WeeklySnapshot,
    history: Sequence[WeeklySnapshot],
    current_facts: Iterable[CompletionFact],
) -> Patterns:
    hours = [fact.completed_at.hour for fact in current_facts]
    average_time = None
    if hours:
        average_time = f"{round_half_up(sum(hours) / len(hours))}:00"
    return Patterns(
        most_productive_day=most_productive_weekday([current, *history]),
        preferred_priority=top_priority(current.priority_breakdown),
        average_completion_time=average_time,
    )


def generate_recommendations(
    current: WeeklySnapshot,
    previous: WeeklySnapshot,
    history: Sequence[WeeklySnapshot],
    current_streak_days: int,
    longest_streak_days: int,
    limit: int = MAX_RECOMMENDATIONS,
) -> List[Recommendation]:
    """生成智能建议，每条规则独立判断，可能一条都没有"""
    recs = []
    completed = current.total_completed

    # 本周完成量
    if completed >= 8:
        recs.append(Recommendation(
            type="achievement",
            icon="🎉",
            title="Outstanding Performance!",
            message=f"You completed {completed} tasks this week. You're crushing your goals!",
            action="Consider setting more challenging targets or taking on bigger projects.",
        ))
    elif completed >= 5:
        recs.append(Recommendation(
            type="positive",
            icon="👍",
            title="Great Progress",
            message=f"{completed} completed tasks shows solid productivity.",
            action="Try to maintain this momentum and aim for 7-8 tasks next week.",
        ))

    # 与上周对比
    delta = completed - previous.total_completed
    if delta > 0:
        recs.append(Recommendation(
            type="trend-up",
            icon="⬆️",
            title="Upward Trend",
            message=f"{delta} more tasks completed than last week!",
            action="Keep up the excellent momentum!",
        ))
    elif delta < 0:
        recs.append(Recommendation(
            type="trend-down",
            icon="💡",
            title="Productivity Dipped",
            message=f"{-delta} fewer tasks completed than last week. That's normal!",
            action="Review what worked well last week and apply those strategies again.",
        ))

    # 高优先级占比
    if completed > 0:
        current_share = high_priority_share([current])
        history_share = high_priority_share(history)
        if current_share == 0 or current_share < history_share / 2:
            if current_share == 0:
                message = "No high-priority tasks completed this week."
            else:
                message = (
                    f"Only {round_half_up(current_share * 100)}% of this week's completions were high priority, "
                    f"down from {round_half_up(history_share * 100)}% in recent weeks."
                )
            recs.append(Recommendation(
                type="priority",
                icon="🚀",
                title="Tackle Important Work",
                message=message,
                action="Consider tackling at least one high-impact task next week.",
            ))

    # 连续天数中断
    if current_streak_days == 0 and longest_streak_days > 3:
        recs.append(Recommendation(
            type="streak",
            icon="🔥",
            title="Restart Your Streak",
            message=f"Your best streak was {longest_streak_days} days. Complete one task today to start a new one.",
            action="Pick a quick win to get back on track.",
        ))

    return recs[:limit]


def build_insights(
    current: WeeklySnapshot,
    previous: WeeklySnapshot,
    history: Sequence[WeeklySnapshot],
    current_facts: Iterable[CompletionFact],
    current_streak_days: int,
    longest_streak_days: int,
) -> Insights:
    recommendations = generate_recommendations(
        current, previous, history, current_streak_days, longest_streak_days
    )
    return Insights(
        productivity=compare_weeks(current, previous),
        patterns=detect_patterns(current, history, current_facts),
        recommendations=recommendations,
        affirmation=None if recommendations else AFFIRMATION,
    )
