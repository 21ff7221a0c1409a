# Routers package
from .review import router as review_router
from .stats import router as stats_router
from .leaderboard import router as leaderboard_router
