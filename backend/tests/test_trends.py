from datetime import datetime, timedelta

import pytest

from analytics.errors import ValidationError
from analytics.trends import analyze_trends, daily_history, summarize_trends
from conftest import NOW, InMemoryFacts, make_fact

THIS_MONDAY = datetime(2025, 10, 6, 10, 0)


def facts_per_week(counts_by_weeks_ago):
    facts = []
    for weeks_ago, count in counts_by_weeks_ago.items():
        for i in range(count):
            when = THIS_MONDAY - timedelta(weeks=weeks_ago) + timedelta(hours=i)
            facts.append(make_fact(when, "high" if i == 0 else "low", minutes=10))
    return InMemoryFacts(facts)


def test_four_weeks_oldest_first():
    source = facts_per_week({0: 2, 1: 5, 2: 1, 3: 4})
    report = analyze_trends(source, "u1", NOW, weeks=4)

    assert [p.completed for p in report.trends] == [4, 1, 5, 2]
    assert [p.week_label for p in report.trends] == ["3 weeks ago", "2 weeks ago", "Last week", "Current week"]
    assert report.trends[-1].week_start == datetime(2025, 10, 6)
    starts = [p.week_start for p in report.trends]
    assert starts == sorted(starts)

    last_week = report.trends[2]
    assert (last_week.high_priority, last_week.low_priority, last_week.medium_priority) == (1, 4, 0)
    assert last_week.total_time == 50


def test_summary():
    source = facts_per_week({0: 2, 1: 5, 2: 1, 3: 4})
    summary = analyze_trends(source, "u1", NOW, weeks=4).summary

    assert summary.total_weeks == 4
    assert summary.total_completed == 12
    assert summary.average_completion == 3.0
    assert summary.best_week.week_label == "Last week"


def test_best_week_tie_prefers_most_recent():
    source = facts_per_week({0: 3, 1: 1, 2: 3})
    summary = analyze_trends(source, "u1", NOW, weeks=3).summary
    assert summary.best_week.week_label == "Current week"


def test_average_rounds_to_one_decimal():
    source = facts_per_week({0: 1, 1: 1, 2: 0})
    assert analyze_trends(source, "u1", NOW, weeks=3).summary.average_completion == 0.7


def test_sparse_history_is_not_an_error():
    report = analyze_trends(InMemoryFacts(), "u1", NOW, weeks=12)
    assert len(report.trends) == 12
    assert report.summary.total_completed == 0
    assert report.summary.average_completion == 0
    assert report.summary.best_week.week_label == "Current week"


@pytest.mark.parametrize("weeks", [0, 13, 20, -1])
def test_weeks_outside_range_rejected(weeks):
    with pytest.raises(ValidationError) as exc:
        analyze_trends(InMemoryFacts(), "u1", NOW, weeks=weeks)
    assert exc.value.errors[0]["field"] == "weeks"


def test_single_week():
    report = analyze_trends(facts_per_week({0: 2}), "u1", NOW, weeks=1)
    assert len(report.trends) == 1
    assert summarize_trends(report.trends).best_week.completed == 2


def test_daily_history_covers_last_seven_days():
    source = InMemoryFacts([
        make_fact(datetime(2025, 10, 9, 9, 0)),
        make_fact(datetime(2025, 10, 8, 9, 0), "high"),
        make_fact(datetime(2025, 10, 8, 10, 0), "low"),
        make_fact(datetime(2025, 10, 2, 9, 0)),
    ])

    history = daily_history(source, "u1", NOW.date())

    assert [p.date.day for p in history] == [3, 4, 5, 6, 7, 8, 9]
    assert [p.completed_tasks for p in history] == [0, 0, 0, 0, 0, 2, 1]
