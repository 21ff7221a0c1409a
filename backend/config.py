import os
from dotenv import load_dotenv

load_dotenv()

# MongoDB配置
MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "task_manager")

# JWT配置（令牌由认证服务签发，这里只做校验）
JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_HOURS = 24 * 7  # 7天过期

# 服务器配置
API_PREFIX = "/api"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# 时区：按天/按周统计都以该时区的本地日期为准，库内时间按 UTC 存储
TIMEZONE = os.getenv("TIMEZONE", "UTC")

# 周统计配置
WEEK_START_DAY = int(os.getenv("WEEK_START_DAY", "0"))  # 0=周一 ... 6=周日
WEEK_OFFSET_FLOOR = int(os.getenv("WEEK_OFFSET_FLOOR", "-52"))
MAX_TREND_WEEKS = int(os.getenv("MAX_TREND_WEEKS", "12"))
DEFAULT_TREND_WEEKS = int(os.getenv("DEFAULT_TREND_WEEKS", "4"))
WEEKLY_GOAL_TASKS = int(os.getenv("WEEKLY_GOAL_TASKS", "10"))

# 连续天数配置
STREAK_MAX_LOOKBACK_DAYS = int(os.getenv("STREAK_MAX_LOOKBACK_DAYS", "365"))
STREAK_CHUNK_DAYS = int(os.getenv("STREAK_CHUNK_DAYS", "28"))

# 建议与排行榜
INSIGHT_HISTORY_WEEKS = int(os.getenv("INSIGHT_HISTORY_WEEKS", "4"))
MAX_RECOMMENDATIONS = int(os.getenv("MAX_RECOMMENDATIONS", "4"))
LEADERBOARD_LIMIT = int(os.getenv("LEADERBOARD_LIMIT", "10"))
HISTORY_DAYS = int(os.getenv("HISTORY_DAYS", "7"))

# 效率分权重（可调参数，不是固定常量）
SCORE_WEIGHT_COMPLETION = float(os.getenv("SCORE_WEIGHT_COMPLETION", "0.4"))
SCORE_WEIGHT_STREAK = float(os.getenv("SCORE_WEIGHT_STREAK", "0.25"))
SCORE_WEIGHT_ACTIVITY = float(os.getenv("SCORE_WEIGHT_ACTIVITY", "0.2"))
SCORE_WEIGHT_PRIORITY = float(os.getenv("SCORE_WEIGHT_PRIORITY", "0.15"))
SCORE_STREAK_CAP_DAYS = int(os.getenv("SCORE_STREAK_CAP_DAYS", "14"))
SCORE_TARGET_WEEKLY = int(os.getenv("SCORE_TARGET_WEEKLY", "7"))
