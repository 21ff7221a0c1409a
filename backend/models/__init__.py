# Models package
from .base import CamelModel, Envelope, MessageEnvelope
from .fact import Priority, CompletionFact, GroupInfo
from .review import (
    WeekWindow, DailyBucket, GroupBucket, ProductiveDay, WeeklySnapshot, WeeklyReviewStats,
    WeekSummary, WeeklyReview, TrendPoint, TrendSummary, TrendReport, Recommendation,
    ProductivityComparison, Patterns, Insights, RankInfo, QuickStats,
)
from .stats import UserStatsSnapshot, StatsHistoryPoint, LeaderboardEntry, Leaderboard
