import logging
from collections import Counter
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Dict, Iterable, Iterator, List, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from database import USERS, TASKS, GROUPS, STATS
from models import CompletionFact, GroupInfo, Priority, UserStatsSnapshot
from analytics.clock import from_utc, local_zone, to_utc
from analytics.errors import ComputationError

logger = logging.getLogger(__name__)

COMPLETED = "completed"
PRIORITIES = {p.value for p in Priority}
FACT_FIELDS = {
    "_id": 1, "user_id": 1, "title": 1, "group_id": 1,
    "priority": 1, "completed_at": 1, "estimated_minutes": 1,
}


@contextmanager
def source_errors(action: str):
    """数据库异常统一转换为 ComputationError"""
    try:
        yield
    except PyMongoError as exc:
        logger.exception("读取%s失败", action)
        raise ComputationError("Task data is temporarily unavailable, please retry") from exc


def to_object_ids(ids: Iterable[str]) -> List[ObjectId]:
    return [ObjectId(i) for i in ids if ObjectId.is_valid(i)]


def to_fact(doc: dict, zone=None) -> CompletionFact:
    """任务文档 -> 完成记录（缺省优先级按 medium 处理，完成时间转为本地时间）"""
    priority = doc.get("priority")
    if priority not in PRIORITIES:
        priority = Priority.MEDIUM.value
    minutes = doc.get("estimated_minutes")
    if not isinstance(minutes, (int, float)) or minutes < 0:
        minutes = None
    group_id = doc.get("group_id")
    return CompletionFact(
        task_id=str(doc["_id"]),
        user_id=str(doc["user_id"]),
        title=doc.get("title"),
        group_id=str(group_id) if group_id else None,
        priority=priority,
        completed_at=from_utc(doc["completed_at"], zone or local_zone()),
        estimated_minutes=int(minutes) if minutes is not None else None,
    )


class TaskRepository:
    """任务集合（只读）：完成记录和计数

    参数和返回值都是配置时区下的本地时间，库内时间按 UTC 比较。
    """

    def __init__(self, db: Database, zone_name: str = None):
        self.collection = db[TASKS]
        self.zone = local_zone(zone_name)

    def _range(self, start: datetime, end: datetime) -> dict:
        return {"$gte": to_utc(start, self.zone), "$lte": to_utc(end, self.zone)}

    def _completed_query(self, user_id: str, start: datetime, end: datetime) -> dict:
        return {
            "user_id": user_id,
            "status": COMPLETED,
            "completed_at": self._range(start, end),
        }

    def iter_facts(self, user_id: str, start: datetime, end: datetime) -> Iterator[CompletionFact]:
        with source_errors("完成记录"):
            cursor = self.collection.find(
                self._completed_query(user_id, start, end), FACT_FIELDS
            ).sort("completed_at", DESCENDING)
            for doc in cursor:
                yield to_fact(doc, self.zone)

    def daily_counts(self, user_id: str, first_day: date, last_day: date) -> Dict[date, int]:
        start = datetime.combine(first_day, time.min)
        end = datetime.combine(last_day, time.max)
        counts: Counter = Counter()
        with source_errors("每日完成数"):
            for doc in self.collection.find(self._completed_query(user_id, start, end), {"completed_at": 1}):
                counts[from_utc(doc["completed_at"], self.zone).date()] += 1
        return dict(counts)

    def count(self, user_id: str, **filters) -> int:
        with source_errors("任务计数"):
            return self.collection.count_documents({"user_id": user_id, **filters})

    def task_counts(self, user_id: str) -> Dict[str, int]:
        """按状态和优先级统计任务数"""
        return {
            "total": self.count(user_id),
            "completed": self.count(user_id, status=COMPLETED),
            "pending": self.count(user_id, status="pending"),
            "in_progress": self.count(user_id, status="in-progress"),
            "high": self.count(user_id, priority="high"),
            "medium": self.count(user_id, priority={"$nin": ["high", "low"]}),
            "low": self.count(user_id, priority="low"),
        }

    def count_overdue(self, user_id: str, now: datetime) -> int:
        return self.count(user_id, due_at={"$lt": to_utc(now, self.zone)}, status={"$ne": COMPLETED})

    def count_created(self, user_id: str, start: datetime, end: datetime) -> int:
        return self.count(user_id, created_at=self._range(start, end))

    def count_completed(self, user_id: str, since: datetime, until: datetime, priority: Optional[str] = None) -> int:
        filters = {"status": COMPLETED, "completed_at": self._range(since, until)}
        if priority:
            filters["priority"] = priority
        return self.count(user_id, **filters)

    def average_completion_hours(self, user_id: str) -> float:
        """已完成任务从创建到完成的平均小时数，没有可用记录时为0"""
        hours = []
        with source_errors("完成耗时"):
            for doc in self.collection.find(
                {"user_id": user_id, "status": COMPLETED}, {"created_at": 1, "completed_at": 1}
            ):
                created, completed = doc.get("created_at"), doc.get("completed_at")
                if not isinstance(created, datetime) or not isinstance(completed, datetime):
                    continue
                elapsed = (completed - created).total_seconds()
                if elapsed >= 0:
                    hours.append(elapsed / 3600)
        return sum(hours) / len(hours) if hours else 0.0


class GroupRepository:
    """分组目录（只读）"""

    def __init__(self, db: Database):
        self.collection = db[GROUPS]

    def for_user(self, user_id: str) -> Dict[str, GroupInfo]:
        groups = {}
        with source_errors("分组"):
            for doc in self.collection.find({"user_id": user_id}, {"name": 1, "color": 1, "icon": 1}):
                fields = {k: doc[k] for k in ("color", "icon") if doc.get(k)}
                groups[str(doc["_id"])] = GroupInfo(name=doc.get("name") or "Untitled", **fields)
        return groups

    def count(self, user_id: str) -> int:
        with source_errors("分组计数"):
            return self.collection.count_documents({"user_id": user_id})


class UserRepository:
    """用户目录（只读）"""

    def __init__(self, db: Database):
        self.collection = db[USERS]

    def exists(self, user_id: str) -> bool:
        if not ObjectId.is_valid(user_id):
            return False
        return self.collection.find_one({"_id": ObjectId(user_id)}, {"_id": 1}) is not None

    def display_names(self, user_ids: Iterable[str]) -> Dict[str, str]:
        names = {}
        for doc in self.collection.find({"_id": {"$in": to_object_ids(user_ids)}}, {"name": 1}):
            if doc.get("name"):
                names[str(doc["_id"])] = doc["name"]
        return names


class StatsRepository:
    """统计快照集合（本服务唯一写入的集合），lastUpdated 按 UTC 存储"""

    def __init__(self, db: Database, zone_name: str = None):
        self.collection = db[STATS]
        self.zone = local_zone(zone_name)

    def _to_snapshot(self, doc: dict) -> UserStatsSnapshot:
        if doc.get("last_updated"):
            doc["last_updated"] = from_utc(doc["last_updated"], self.zone)
        return UserStatsSnapshot.model_validate(doc)

    def get(self, user_id: str) -> Optional[UserStatsSnapshot]:
        doc = self.collection.find_one({"user_id": user_id}, {"_id": 0})
        return self._to_snapshot(doc) if doc else None

    def all(self) -> List[UserStatsSnapshot]:
        return [self._to_snapshot(doc) for doc in self.collection.find({}, {"_id": 0})]

    def save(self, snapshot: UserStatsSnapshot) -> UserStatsSnapshot:
        """单条原子更新：整体覆盖各字段，最长连续天数只增不减"""
        fields = snapshot.model_dump(exclude={"user_id", "longest_streak_days", "productivity_level"})
        if fields["last_updated"]:
            fields["last_updated"] = to_utc(fields["last_updated"], self.zone)
        doc = self.collection.find_one_and_update(
            {"user_id": snapshot.user_id},
            {
                "$set": fields,
                "$max": {"longest_streak_days": snapshot.longest_streak_days},
            },
            projection={"_id": 0},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_snapshot(doc)

    def delete(self, user_id: str) -> bool:
        return self.collection.delete_one({"user_id": user_id}).deleted_count > 0
