from datetime import date, datetime, timedelta
from typing import Dict, List

import mongomock
import pytest
from fastapi.testclient import TestClient

from database import get_database, TASKS, GROUPS, USERS
from main import app
from models import CompletionFact
from repositories import TaskRepository
from routers.auth import create_token
from routers.deps import get_clock
from analytics.clock import FixedClock

# 2025-10-09 是周四，本周为 2025-10-06(周一) ~ 2025-10-12(周日)
NOW = datetime(2025, 10, 9, 15, 0)


class InMemoryFacts:
    """内存版完成记录数据源"""

    def __init__(self, facts: List[CompletionFact] = None):
        self.facts = list(facts or [])
        self.daily_queries = []

    def iter_facts(self, user_id, start, end):
        matched = [f for f in self.facts if f.user_id == user_id and start <= f.completed_at <= end]
        return iter(sorted(matched, key=lambda f: f.completed_at, reverse=True))

    def daily_counts(self, user_id, first_day: date, last_day: date) -> Dict[date, int]:
        self.daily_queries.append((first_day, last_day))
        counts: Dict[date, int] = {}
        for f in self.facts:
            day = f.completed_at.date()
            if f.user_id == user_id and first_day <= day <= last_day:
                counts[day] = counts.get(day, 0) + 1
        return counts


def make_fact(completed_at: datetime, priority="medium", group_id=None, minutes=None, user_id="u1", task_id=None):
    return CompletionFact(
        task_id=task_id or f"t-{completed_at.isoformat()}-{priority}",
        user_id=user_id,
        group_id=group_id,
        priority=priority,
        completed_at=completed_at,
        estimated_minutes=minutes,
    )


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def db():
    return mongomock.MongoClient()["task_manager_test"]


@pytest.fixture
def tasks(db):
    return TaskRepository(db)


@pytest.fixture
def user_id(db):
    return str(db[USERS].insert_one({"name": "Alice"}).inserted_id)


@pytest.fixture
def auth_headers(user_id):
    return {"Authorization": f"Bearer {create_token(user_id)}"}


@pytest.fixture
def add_task(db):
    """直接写入任务文档（任务的增删改由任务服务负责）"""
    def _add(user_id, status="completed", completed_at=None, priority="medium", group_id=None,
             estimated_minutes=None, created_at=None, due_at=None, title="Task"):
        doc = {
            "user_id": user_id,
            "title": title,
            "status": status,
            "priority": priority,
            "group_id": group_id,
            "estimated_minutes": estimated_minutes,
            "created_at": created_at or NOW - timedelta(days=30),
        }
        if due_at:
            doc["due_at"] = due_at
        if status == "completed":
            doc["completed_at"] = completed_at or NOW
        return str(db[TASKS].insert_one(doc).inserted_id)
    return _add


@pytest.fixture
def add_group(db):
    def _add(user_id, name, color="#10B981", icon="💼"):
        return str(db[GROUPS].insert_one({"user_id": user_id, "name": name, "color": color, "icon": icon}).inserted_id)
    return _add


@pytest.fixture
def client(db, clock):
    """FastAPI test client，数据库和时间都替换掉"""
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
