from fastapi import APIRouter, Depends, Query

from config import LEADERBOARD_LIMIT
from models import Envelope, Leaderboard
from repositories import TaskRepository, GroupRepository, UserRepository, StatsRepository
from analytics.clock import Clock
from analytics.errors import NotFoundError
from analytics.leaderboard import rank_of, rank_users
from analytics.materializer import materialize_user_stats
from routers.auth import get_user_id
from routers.deps import get_clock, get_tasks, get_groups, get_users, get_stats_store

router = APIRouter(prefix="/leaderboard", tags=["排行榜"])


@router.get("", response_model=Envelope[Leaderboard])
def get_leaderboard(
    user_id: str = Depends(get_user_id),
    limit: int = Query(default=LEADERBOARD_LIMIT, ge=1, le=100),
    clock: Clock = Depends(get_clock),
    tasks: TaskRepository = Depends(get_tasks),
    groups: GroupRepository = Depends(get_groups),
    users: UserRepository = Depends(get_users),
    stats_store: StatsRepository = Depends(get_stats_store),
):
    """获取排行榜和自己的排名"""
    if not users.exists(user_id):
        raise NotFoundError("User not found")

    if stats_store.get(user_id) is None:
        materialize_user_stats(tasks, groups, stats_store, user_id, clock.now())

    entries = rank_users(stats_store.all())
    me = rank_of(entries, user_id)

    top = entries[:limit]
    names = users.display_names(e.user_id for e in top)
    for entry in top:
        entry.name = names.get(entry.user_id)

    return {"success": True, "data": Leaderboard(entries=top, me=me)}
