from pydantic import Field
from typing import Dict, List, Optional
from datetime import date, datetime

from .base import CamelModel
from .fact import CompletionFact


class WeekWindow(CamelModel):
    start: datetime  # 周起始日 00:00:00.000
    end: datetime  # start + 6天 23:59:59.999


class DailyBucket(CamelModel):
    date: date
    day_name: str
    count: int = 0
    total_minutes: int = 0


class GroupBucket(CamelModel):
    name: str
    count: int = 0
    color: str
    icon: str


class ProductiveDay(CamelModel):
    day: str
    count: int


class WeeklySnapshot(CamelModel):
    window: WeekWindow
    total_completed: int
    priority_breakdown: Dict[str, int]
    group_breakdown: Dict[str, GroupBucket]
    daily_pattern: List[DailyBucket]  # 固定7天，按日期排序
    total_time_minutes: int
    average_time_per_task: int
    daily_average: float
    most_productive_day: Optional[ProductiveDay] = None
    goal_progress: float


class WeeklyReviewStats(WeeklySnapshot):
    total_created: int
    completion_rate: float  # 本周完成数 / 本周新建数，百分比


class WeekSummary(CamelModel):
    period: str
    is_current_week: bool
    week_offset: Optional[int] = None


class WeeklyReview(CamelModel):
    stats: WeeklyReviewStats
    tasks: List[CompletionFact]
    week_summary: WeekSummary


class TrendPoint(CamelModel):
    week_label: str
    week_start: datetime
    week_end: datetime
    completed: int
    total_time: int
    high_priority: int
    medium_priority: int
    low_priority: int


class TrendSummary(CamelModel):
    average_completion: float
    best_week: TrendPoint
    total_completed: int
    total_weeks: int


class TrendReport(CamelModel):
    trends: List[TrendPoint]
    summary: TrendSummary


class Recommendation(CamelModel):
    type: str
    icon: str
    title: str
    message: str
    action: Optional[str] = None


class ProductivityComparison(CamelModel):
    current_week: int
    previous_week: int
    trend: str  # up / down / stable
    improvement: int


class Patterns(CamelModel):
    most_productive_day: Optional[str] = None
    preferred_priority: str = "medium"
    average_completion_time: Optional[str] = None


class Insights(CamelModel):
    productivity: ProductivityComparison
    patterns: Patterns
    recommendations: List[Recommendation] = Field(default_factory=list)
    affirmation: Optional[str] = None  # 没有任何建议时的鼓励语


class RankInfo(CamelModel):
    rank: int
    total_users: int
    percentile: int


class QuickStats(CamelModel):
    completed_this_week: int
    daily_average: float
    goal_progress: float
    streak: int
    total_time: int
    top_priority: str
    weekly_rank: Optional[RankInfo] = None
