from functools import lru_cache

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from config import MONGODB_URL, DATABASE_NAME

# 集合名称（tasks/groups/users 由任务服务维护，本服务只读；stats 由本服务写入）
USERS = "users"
TASKS = "tasks"
GROUPS = "groups"
STATS = "stats"


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    return MongoClient(MONGODB_URL)


def get_database() -> Database:
    """获取数据库（FastAPI依赖）"""
    return get_client()[DATABASE_NAME]


def ensure_indexes(db: Database):
    """创建索引"""
    db[TASKS].create_index([("user_id", ASCENDING), ("status", ASCENDING), ("completed_at", DESCENDING)])
    db[TASKS].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    db[GROUPS].create_index([("user_id", ASCENDING)])
    db[STATS].create_index("user_id", unique=True)
    db[STATS].create_index([("productivity_score", DESCENDING)])
