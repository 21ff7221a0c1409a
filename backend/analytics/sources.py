from datetime import date, datetime
from typing import Dict, Iterator, Protocol

from models import CompletionFact


class FactSource(Protocol):
    """完成记录数据源（任务服务提供，只读）"""

    def iter_facts(self, user_id: str, start: datetime, end: datetime) -> Iterator[CompletionFact]:
        """按完成时间倒序流式返回 [start, end] 内的完成记录"""
        ...

    def daily_counts(self, user_id: str, first_day: date, last_day: date) -> Dict[date, int]:
        """按天统计完成数，闭区间"""
        ...
