"""Tests for candidate ranking and the history store."""

from compflow.application.history import HistoryStore
from compflow.application.ranking import compare_candidates, rank_candidates
from compflow.domain.types import Candidate


def words(items):
    return [item.original_word for item in items]


class TestHistoryStore:
    def test_record_counts_up_from_zero(self):
        history = HistoryStore()
        assert history.count("foo") == 0

        history.record("foo")
        assert history.record("foo") == 2
        assert history["foo"] == 2
        assert "foo" in history
        assert "bar" not in history

    def test_snapshot_is_a_copy(self):
        history = HistoryStore()
        history.record("foo")
        snapshot = history.snapshot()
        snapshot["foo"] = 99

        assert history.count("foo") == 1
        assert len(history) == 1


class TestDefaultComparator:
    def test_exact_before_score(self):
        exact = Candidate("foo", exact=True, score=1)
        better = Candidate("foobar", score=3)
        assert compare_candidates(exact, better) < 0

    def test_score_then_priority_then_sort_text(self):
        assert compare_candidates(Candidate("a", score=2), Candidate("b", score=1)) < 0
        assert compare_candidates(Candidate("a", priority=1), Candidate("b", priority=5)) > 0
        assert compare_candidates(Candidate("a", sort_text="b"), Candidate("b", sort_text="a")) > 0
        assert compare_candidates(Candidate("a"), Candidate("b")) == 0


def test_history_breaks_comparator_ties():
    history = HistoryStore()
    history.record("beta")
    items = [Candidate("alpha"), Candidate("beta"), Candidate("gamma")]

    ranked = rank_candidates(items, history)

    assert words(ranked) == ["beta", "alpha", "gamma"]


def test_history_does_not_override_comparator():
    history = HistoryStore()
    for _ in range(10):
        history.record("weak")
    items = [Candidate("weak", score=1), Candidate("strong", score=2)]

    assert words(rank_candidates(items, history)) == ["strong", "weak"]


def test_sort_is_stable_for_full_ties():
    items = [Candidate(word) for word in ("c", "a", "b")]
    assert words(rank_candidates(items, HistoryStore())) == ["c", "a", "b"]


def test_custom_comparator():
    items = [Candidate("bb"), Candidate("a"), Candidate("ccc")]

    ranked = rank_candidates(items, HistoryStore(), lambda a, b: len(a.original_word) - len(b.original_word))

    assert words(ranked) == ["a", "bb", "ccc"]
