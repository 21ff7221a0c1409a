from pydantic import BaseModel, Field

from config import (
    SCORE_WEIGHT_COMPLETION, SCORE_WEIGHT_STREAK, SCORE_WEIGHT_ACTIVITY, SCORE_WEIGHT_PRIORITY,
    SCORE_STREAK_CAP_DAYS, SCORE_TARGET_WEEKLY,
)
from models import UserStatsSnapshot
from analytics.rounding import round_half_up, safe_ratio


class ScoringConfig(BaseModel):
    """效率分参数，默认值来自环境变量"""
    completion_weight: float = Field(default=SCORE_WEIGHT_COMPLETION, ge=0)
    streak_weight: float = Field(default=SCORE_WEIGHT_STREAK, ge=0)
    activity_weight: float = Field(default=SCORE_WEIGHT_ACTIVITY, ge=0)
    priority_weight: float = Field(default=SCORE_WEIGHT_PRIORITY, ge=0)
    streak_cap_days: int = Field(default=SCORE_STREAK_CAP_DAYS, gt=0)
    target_weekly_goal: int = Field(default=SCORE_TARGET_WEEKLY, gt=0)


def score_terms(stats: UserStatsSnapshot, config: ScoringConfig) -> dict:
    """各项归一化到 [0, 1]"""
    return {
        "completion": safe_ratio(stats.completed_tasks, max(stats.total_tasks, 1)),
        "streak": min(stats.current_streak_days / config.streak_cap_days, 1.0),
        "activity": min(stats.weekly_completed / config.target_weekly_goal, 1.0),
        "priority": min(safe_ratio(stats.weekly_high_priority_completed, stats.weekly_completed), 1.0),
    }


def calculate_productivity_score(stats: UserStatsSnapshot, config: ScoringConfig = None) -> float:
    """效率分 = 100 * Σ(权重 * 归一化项)，限制在 [0, 100]"""
    config = config or ScoringConfig()
    terms = score_terms(stats, config)
    weighted = (
        config.completion_weight * terms["completion"]
        + config.streak_weight * terms["streak"]
        + config.activity_weight * terms["activity"]
        + config.priority_weight * terms["priority"]
    )
    return round_half_up(min(max(100 * weighted, 0.0), 100.0), 1)
