from datetime import date, datetime, timedelta

from analytics.streak import calculate_streak, current_streak
from conftest import InMemoryFacts, make_fact

TODAY = date(2025, 10, 9)


def counter_for(days):
    """给定有完成记录的日期，返回按区间计数的查询函数"""
    completed = set(days)

    def count_days(first, last):
        return {d: 1 for d in completed if first <= d <= last}
    return count_days


def days_ago(*offsets):
    return [TODAY - timedelta(days=n) for n in offsets]


def test_three_day_run_stops_at_gap():
    count_days = counter_for(days_ago(0, 1, 2, 4, 5))
    assert current_streak(count_days, TODAY) == 3


def test_today_without_completions_does_not_break_streak():
    count_days = counter_for(days_ago(1, 2, 3, 4))
    assert current_streak(count_days, TODAY) == 4


def test_yesterday_gap_breaks_streak():
    count_days = counter_for(days_ago(2, 3, 4))
    assert current_streak(count_days, TODAY) == 0


def test_no_history():
    assert current_streak(counter_for([]), TODAY) == 0


def test_streak_spans_query_chunks():
    queries = []
    inner = counter_for(days_ago(*range(0, 10)))

    def count_days(first, last):
        queries.append((first, last))
        return inner(first, last)

    assert current_streak(count_days, TODAY, chunk_days=3) == 10
    assert queries[0] == (TODAY - timedelta(days=2), TODAY)
    assert len(queries) == 4


def test_lookback_is_capped():
    count_days = counter_for(days_ago(*range(0, 500)))
    assert current_streak(count_days, TODAY, chunk_days=30, max_lookback=365) == 365


def test_calculate_streak_keeps_longest():
    source = InMemoryFacts([
        make_fact(datetime(2025, 10, 9, 9, 0)),
        make_fact(datetime(2025, 10, 8, 9, 0)),
        make_fact(datetime(2025, 10, 8, 17, 0)),
    ])
    assert calculate_streak(source, "u1", TODAY, previous_longest=7) == (2, 7)
    assert calculate_streak(source, "u1", TODAY, previous_longest=1) == (2, 2)
    assert calculate_streak(source, "someone-else", TODAY, previous_longest=0) == (0, 0)
