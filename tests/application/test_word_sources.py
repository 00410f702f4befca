"""Tests for the bundled word sources and their shared base class."""

import pytest

from compflow.application import CompletionEngine
from compflow.application.sources import BufferWordsSource, WordListSource
from compflow.application.sources.base import BaseSource, match_score
from compflow.core.config import CompletionConfig
from compflow.domain.types import Candidate, Context, SourceStatus
from compflow.infrastructure.clock import VirtualClock
from compflow.presentation import ScriptedHost


def ctx(before_line: str, manual: bool = False) -> Context:
    return Context(lnum=1, col=len(before_line) + 1, before_line=before_line, changedtick=1, manual=manual)


class Updates:
    """Counts async update notifications."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def words(clock):
    return WordListSource("words", clock, ["import", "impress", "simple", "import"], priority=5, menu="[W]")


class TestMatchScore:
    @pytest.mark.parametrize(
        "word, query, expected",
        [
            ("import", "imp", 3.0),
            ("Import", "imp", 2.0),
            ("simple", "imp", 1.0),
            ("foo", "bar", None),
            ("foo", "", 0.0),
        ],
    )
    def test_scores(self, word, query, expected):
        assert match_score(word, query) == expected


class TestWordListSource:
    def test_trigger_delivers_synchronously(self, words):
        updates = Updates()

        assert words.trigger(ctx("imp"), updates) is True

        assert words.status == SourceStatus.COMPLETED
        assert words.get_start_offset() == 1
        assert updates.calls == 1

    def test_filtered_items_are_scored_and_normalized(self, words):
        words.trigger(ctx("imp"), Updates())

        items = {item.original_word: item for item in words.get_filtered_items(ctx("imp"))}

        assert list(items) == ["import", "impress", "simple"]
        assert items["import"].score == 3.0
        assert items["simple"].score == 1.0
        assert items["import"].original_menu == "[W]"
        assert items["import"].priority == 5
        assert items["impress"].index == 1
        assert all(item.source_id == words.id for item in items.values())

    def test_exact_match_flagged(self, words):
        words.trigger(ctx("import"), Updates())

        exact = [item.original_word for item in words.get_filtered_items(ctx("import")) if item.exact]

        assert exact == ["import"]

    def test_same_word_is_not_requested_again(self, words):
        updates = Updates()
        words.trigger(ctx("im"), updates)

        assert words.trigger(ctx("imp"), updates) is False
        assert updates.calls == 1
        assert [item.original_word for item in words.get_filtered_items(ctx("imp"))][:2] == ["import", "impress"]

    def test_manual_request_always_restarts(self, words):
        updates = Updates()
        words.trigger(ctx("im"), updates)

        assert words.trigger(ctx("im", manual=True), updates) is True
        assert updates.calls == 2

    def test_no_keyword_clears(self, words):
        words.trigger(ctx("imp"), Updates())

        assert words.trigger(ctx("imp "), Updates()) is False
        assert words.status == SourceStatus.IDLE
        assert words.get_filtered_items(ctx("imp ")) == []

    def test_manual_without_keyword_completes_at_cursor(self, words):
        assert words.trigger(ctx("x = ", manual=True), Updates()) is True
        assert words.get_start_offset() == 5

    def test_min_length(self, clock):
        source = WordListSource("words", clock, ["abc"], min_length=3)

        assert source.trigger(ctx("ab"), Updates()) is False
        assert source.status == SourceStatus.IDLE
        assert source.trigger(ctx("abc"), Updates()) is True

    def test_trigger_character(self, clock):
        source = WordListSource("members", clock, ["append", "pop"], trigger_characters=(".",))

        assert source.trigger(ctx("items."), Updates()) is True

        assert source.is_triggered_by_character
        assert source.get_start_offset() == 7
        assert [item.original_word for item in source.get_filtered_items(ctx("items."))] == ["append", "pop"]

    def test_clear_resets(self, words):
        words.trigger(ctx("imp"), Updates())

        words.clear()

        assert words.status == SourceStatus.IDLE
        assert words.get_start_offset() == 0
        assert words.get_processing_time() == 0.0

    def test_sources_get_distinct_ids(self, clock):
        first = WordListSource("a", clock, [])
        second = WordListSource("b", clock, [])

        assert first.id != second.id

    def test_candidate_items_keep_their_fields(self, clock):
        item = Candidate(original_word="fmt", original_kind="function", documentation="Format a value.")
        shown = []
        source = WordListSource("words", clock, [item], documentation_handler=lambda item, text: shown.append(text))

        source.trigger(ctx("fm"), Updates())
        (result,) = source.get_filtered_items(ctx("fm"))
        source.documentation(result)

        assert result.original_kind == "function"
        assert shown == ["Format a value."]


class TestBufferWordsSource:
    def test_harvest_skips_word_being_typed(self, clock):
        source = BufferWordsSource("buffer", clock, lambda: "alpha beta alpha al x")

        source.trigger(ctx("al"), Updates())

        assert [item.original_word for item in source.get_filtered_items(ctx("al"))] == ["alpha"]

    def test_latency_keeps_source_processing(self, clock):
        updates = Updates()
        source = BufferWordsSource("buffer", clock, lambda: "abacus", latency_ms=30)

        source.trigger(ctx("ab"), updates)
        clock.advance(10)

        assert source.status == SourceStatus.PROCESSING
        assert source.get_processing_time() == 10

        clock.advance(20)

        assert source.status == SourceStatus.COMPLETED
        assert updates.calls == 1

    def test_stale_delivery_is_dropped(self, clock):
        updates = Updates()
        source = BufferWordsSource("buffer", clock, lambda: "abacus", latency_ms=30)

        source.trigger(ctx("ab"), updates)
        source.clear()
        clock.advance(30)

        assert source.status == SourceStatus.IDLE
        assert updates.calls == 0


class FailingSource(BaseSource):
    def complete(self, context, deliver):
        raise ConnectionError("server down")


def test_failing_production_marks_error(clock):
    source = FailingSource("broken", clock)

    with pytest.raises(ConnectionError):
        source.trigger(ctx("ab"), Updates())

    assert source.status == SourceStatus.ERROR


def test_slow_source_joins_after_timeout():
    clock = VirtualClock()
    host = ScriptedHost()
    engine = CompletionEngine(host, config=CompletionConfig(source={"buffer": True, "words": True}), clock=clock)
    engine.register_source(WordListSource("words", clock, ["able"], priority=5))
    engine.register_source(BufferWordsSource("buffer", clock, lambda: "abacus", latency_ms=300, priority=10))

    host.type_text("ab")
    engine.complete()

    clock.advance(290)
    assert [item.original_word for item in host.last_render.items] == ["able"]

    clock.advance(100)
    assert [item.original_word for item in host.last_render.items] == ["abacus", "able"]
