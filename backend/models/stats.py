from pydantic import Field, computed_field
from typing import List, Optional
from datetime import date, datetime

from .base import CamelModel
from .review import RankInfo


class UserStatsSnapshot(CamelModel):
    """用户统计快照（每个用户一条，重新计算时整体覆盖）"""
    user_id: str
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completion_rate: float = 0.0  # 百分比
    current_streak_days: int = 0
    longest_streak_days: int = 0
    weekly_completed: int = 0  # 最近7天
    monthly_completed: int = 0  # 最近30天
    weekly_high_priority_completed: int = 0
    overdue_tasks: int = 0
    high_priority_tasks: int = 0
    medium_priority_tasks: int = 0
    low_priority_tasks: int = 0
    total_groups: int = 0
    average_completion_time: float = 0.0  # 小时，从创建到完成
    productivity_score: float = Field(default=0.0, ge=0, le=100)
    last_updated: Optional[datetime] = None

    @computed_field(alias="productivityLevel")
    @property
    def productivity_level(self) -> str:
        if self.productivity_score >= 80:
            return "excellent"
        if self.productivity_score >= 60:
            return "good"
        if self.productivity_score >= 40:
            return "average"
        return "needs-improvement"


class StatsHistoryPoint(CamelModel):
    date: date
    completed_tasks: int


class LeaderboardEntry(CamelModel):
    user_id: str
    name: Optional[str] = None
    completed_tasks: int
    productivity_score: float
    rank: int
    percentile: int


class Leaderboard(CamelModel):
    entries: List[LeaderboardEntry]
    me: RankInfo
