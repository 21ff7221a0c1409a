from typing import Iterable, List

from models import LeaderboardEntry, RankInfo, UserStatsSnapshot
from analytics.errors import NotFoundError
from analytics.rounding import round_half_up


def percentile_for(rank: int, total_users: int) -> int:
    """第1名为100，越往后越小"""
    if total_users <= 0:
        return 0
    return round_half_up(100 * (1 - (rank - 1) / total_users))


def rank_users(snapshots: Iterable[UserStatsSnapshot]) -> List[LeaderboardEntry]:
    """按效率分降序排名，分数相同按完成数降序，再按用户ID升序"""
    ordered = sorted(snapshots, key=lambda s: (-s.productivity_score, -s.completed_tasks, s.user_id))
    total = len(ordered)
    return [
        LeaderboardEntry(
            user_id=s.user_id,
            completed_tasks=s.completed_tasks,
            productivity_score=s.productivity_score,
            rank=position,
            percentile=percentile_for(position, total),
        )
        for position, s in enumerate(ordered, start=1)
    ]


def rank_of(entries: List[LeaderboardEntry], user_id: str) -> RankInfo:
    for entry in entries:
        if entry.user_id == user_id:
            return RankInfo(rank=entry.rank, total_users=len(entries), percentile=entry.percentile)
    raise NotFoundError("User is not on the leaderboard")
