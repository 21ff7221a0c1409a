import pytest

from models import UserStatsSnapshot
from analytics.errors import NotFoundError
from analytics.leaderboard import percentile_for, rank_of, rank_users


def snap(user_id, score, completed=0):
    return UserStatsSnapshot(user_id=user_id, productivity_score=score, completed_tasks=completed)


def test_sorted_by_score_then_completed_then_user_id():
    entries = rank_users([
        snap("carol", 50, 3),
        snap("alice", 70, 1),
        snap("dave", 50, 8),
        snap("bob", 50, 3),
    ])
    assert [e.user_id for e in entries] == ["alice", "dave", "bob", "carol"]
    assert [e.rank for e in entries] == [1, 2, 3, 4]


def test_ties_still_get_distinct_ranks():
    entries = rank_users([snap("b", 40, 2), snap("a", 40, 2)])
    assert [(e.user_id, e.rank) for e in entries] == [("a", 1), ("b", 2)]


def test_percentile_formula():
    assert [percentile_for(rank, 8) for rank in range(1, 9)] == [100, 88, 75, 63, 50, 38, 25, 13]
    assert percentile_for(1, 1) == 100
    assert percentile_for(1, 0) == 0


def test_well_ordering():
    scores = [12.5, 88, 40, 40, 99.9, 0, 55, 40, 71]
    entries = rank_users([snap(f"user{i}", s, i) for i, s in enumerate(scores)])
    for upper, lower in zip(entries, entries[1:]):
        assert upper.productivity_score >= lower.productivity_score
        assert upper.rank < lower.rank
        assert upper.percentile >= lower.percentile


def test_rank_of():
    entries = rank_users([snap("a", 90), snap("b", 60), snap("c", 30), snap("d", 10)])
    me = rank_of(entries, "b")
    assert (me.rank, me.total_users, me.percentile) == (2, 4, 75)

    with pytest.raises(NotFoundError):
        rank_of(entries, "zed")


def test_empty_leaderboard():
    assert rank_users([]) == []
