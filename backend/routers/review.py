from fastapi import APIRouter, Depends, Query
from typing import Optional

from config import DEFAULT_TREND_WEEKS, INSIGHT_HISTORY_WEEKS
from models import Envelope, Insights, QuickStats, TrendReport, WeeklyReview, WeeklyReviewStats, WeekSummary
from repositories import TaskRepository, GroupRepository, StatsRepository
from analytics.aggregation import aggregate_week, top_priority
from analytics.clock import Clock
from analytics.errors import NotFoundError
from analytics.leaderboard import rank_of, rank_users
from analytics.recommendations import build_insights
from analytics.rounding import round_half_up, safe_ratio
from analytics.streak import calculate_streak
from analytics.trends import analyze_trends
from analytics.week import offset_of, period_label, previous_window, resolve_offset, resolve_window
from routers.auth import get_user_id
from routers.deps import get_clock, get_tasks, get_groups, get_stats_store

router = APIRouter(prefix="/review", tags=["周回顾"])


@router.get("/weekly", response_model=Envelope[WeeklyReview])
def get_weekly_review(
    user_id: str = Depends(get_user_id),
    week_offset: Optional[int] = Query(default=None, alias="weekOffset", description="周偏移量，0表示本周，-1表示上周"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    groups: GroupRepository = Depends(get_groups),
):
    """获取周回顾数据"""
    now = clock.now()
    window = resolve_window(now, week_offset, start_date, end_date)

    # 一周内的完成记录有上限，直接取出同时用于汇总和返回列表
    facts = list(tasks.iter_facts(user_id, window.start, window.end))
    snapshot = aggregate_week(window, facts, groups.for_user(user_id))

    total_created = tasks.count_created(user_id, window.start, window.end)
    stats = WeeklyReviewStats(
        **snapshot.model_dump(),
        total_created=total_created,
        completion_rate=round_half_up(safe_ratio(snapshot.total_completed, total_created) * 100, 1),
    )

    offset = offset_of(window, now)
    review = WeeklyReview(
        stats=stats,
        tasks=facts,
        week_summary=WeekSummary(period=period_label(window), is_current_week=offset == 0, week_offset=offset),
    )
    return {"success": True, "data": review}


@router.get("/insights", response_model=Envelope[Insights])
def get_insights(
    user_id: str = Depends(get_user_id),
    week_offset: int = Query(default=0, alias="weekOffset"),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    stats_store: StatsRepository = Depends(get_stats_store),
):
    """获取效率分析和建议"""
    now = clock.now()
    window = resolve_offset(now, week_offset)

    current_facts = list(tasks.iter_facts(user_id, window.start, window.end))
    current = aggregate_week(window, current_facts)

    # 之前几周用于对比和习惯分析，第一项即上周
    history = []
    earlier = window
    for _ in range(max(INSIGHT_HISTORY_WEEKS, 1)):
        earlier = previous_window(earlier)
        history.append(aggregate_week(earlier, tasks.iter_facts(user_id, earlier.start, earlier.end)))

    existing = stats_store.get(user_id)
    current_streak, longest_streak = calculate_streak(
        tasks, user_id, now.date(), existing.longest_streak_days if existing else 0
    )

    insights = build_insights(current, history[0], history, current_facts, current_streak, longest_streak)
    return {"success": True, "data": insights}


@router.get("/trends", response_model=Envelope[TrendReport])
def get_trends(
    user_id: str = Depends(get_user_id),
    weeks: int = Query(default=DEFAULT_TREND_WEEKS),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
):
    """获取多周完成趋势"""
    report = analyze_trends(tasks, user_id, clock.now(), weeks)
    return {"success": True, "data": report}


@router.get("/quick-stats", response_model=Envelope[QuickStats])
def get_quick_stats(
    user_id: str = Depends(get_user_id),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    stats_store: StatsRepository = Depends(get_stats_store),
):
    """获取本周概览（小组件用）"""
    now = clock.now()
    window = resolve_offset(now, 0)
    snapshot = aggregate_week(window, tasks.iter_facts(user_id, window.start, window.end))
    streak, _ = calculate_streak(tasks, user_id, now.date())

    try:
        weekly_rank = rank_of(rank_users(stats_store.all()), user_id)
    except NotFoundError:
        weekly_rank = None

    quick_stats = QuickStats(
        completed_this_week=snapshot.total_completed,
        daily_average=snapshot.daily_average,
        goal_progress=snapshot.goal_progress,
        streak=streak,
        total_time=snapshot.total_time_minutes,
        top_priority=top_priority(snapshot.priority_breakdown),
        weekly_rank=weekly_rank,
    )
    return {"success": True, "data": quick_stats}
