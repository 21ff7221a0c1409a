from enum import Enum
from typing import Optional
from datetime import datetime

from pydantic import Field

from .base import CamelModel


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CompletionFact(CamelModel):
    """任务完成记录（只读，撤销完成时整条记录消失）"""
    task_id: str
    user_id: str
    title: Optional[str] = None
    group_id: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    completed_at: datetime
    estimated_minutes: Optional[int] = Field(default=None, ge=0)


class GroupInfo(CamelModel):
    name: str
    color: str = "#3B82F6"
    icon: str = "📁"
