from fastapi import Depends
from pymongo.database import Database

from database import get_database
from repositories import TaskRepository, GroupRepository, UserRepository, StatsRepository
from analytics.clock import Clock, SystemClock

_system_clock = SystemClock()


def get_clock() -> Clock:
    """当前时间来源（测试中替换为固定时间）"""
    return _system_clock


def get_tasks(db: Database = Depends(get_database)) -> TaskRepository:
    return TaskRepository(db)


def get_groups(db: Database = Depends(get_database)) -> GroupRepository:
    return GroupRepository(db)


def get_users(db: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(db)


def get_stats_store(db: Database = Depends(get_database)) -> StatsRepository:
    return StatsRepository(db)
