from fastapi import APIRouter, Depends
from typing import List

from models import Envelope, MessageEnvelope, RankInfo, StatsHistoryPoint, UserStatsSnapshot
from repositories import TaskRepository, GroupRepository, StatsRepository
from analytics.clock import Clock
from analytics.leaderboard import rank_of, rank_users
from analytics.materializer import materialize_user_stats, reset_user_stats
from analytics.trends import daily_history
from routers.auth import get_user_id
from routers.deps import get_clock, get_tasks, get_groups, get_stats_store

router = APIRouter(prefix="/stats", tags=["统计"])


@router.get("", response_model=Envelope[UserStatsSnapshot])
def get_stats(
    user_id: str = Depends(get_user_id),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    groups: GroupRepository = Depends(get_groups),
    stats_store: StatsRepository = Depends(get_stats_store),
):
    """获取用户统计，首次访问时生成"""
    stats = stats_store.get(user_id)
    if stats is None:
        stats = materialize_user_stats(tasks, groups, stats_store, user_id, clock.now())
    return {"success": True, "data": stats}


@router.post("/update", response_model=MessageEnvelope[UserStatsSnapshot])
def update_stats(
    user_id: str = Depends(get_user_id),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    groups: GroupRepository = Depends(get_groups),
    stats_store: StatsRepository = Depends(get_stats_store),
):
    """手动触发重新计算"""
    stats = materialize_user_stats(tasks, groups, stats_store, user_id, clock.now())
    return {"success": True, "message": "Statistics updated successfully", "data": stats}


@router.post("/reset", response_model=MessageEnvelope[UserStatsSnapshot])
def reset_stats(
    user_id: str = Depends(get_user_id),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    groups: GroupRepository = Depends(get_groups),
    stats_store: StatsRepository = Depends(get_stats_store),
):
    """清空快照后重新计算（最长连续天数也会重算）"""
    stats = reset_user_stats(tasks, groups, stats_store, user_id, clock.now())
    return {"success": True, "message": "Statistics reset successfully", "data": stats}


@router.get("/history", response_model=Envelope[List[StatsHistoryPoint]])
def get_history(
    user_id: str = Depends(get_user_id),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
):
    """最近7天每天的完成数"""
    history = daily_history(tasks, user_id, clock.now().date())
    return {"success": True, "data": history}


@router.get("/rank", response_model=Envelope[RankInfo])
def get_rank(
    user_id: str = Depends(get_user_id),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    groups: GroupRepository = Depends(get_groups),
    stats_store: StatsRepository = Depends(get_stats_store),
):
    """获取用户排名"""
    if stats_store.get(user_id) is None:
        materialize_user_stats(tasks, groups, stats_store, user_id, clock.now())
    rank = rank_of(rank_users(stats_store.all()), user_id)
    return {"success": True, "data": rank}
