"""Shared fixtures and fakes for engine tests."""

from __future__ import annotations

import dataclasses
from typing import Callable, Optional

import pytest

from compflow.application import CompletionEngine
from compflow.core.config import CompletionConfig
from compflow.domain.types import Candidate, Context, SourceMetadata, SourceStatus
from compflow.infrastructure.clock import VirtualClock
from compflow.presentation import ScriptedHost


def make_candidate(word: str, **kwargs) -> Candidate:
    return Candidate(original_word=word, **kwargs)


class StubSource:
    """Fully scriptable completion source."""

    def __init__(
        self,
        source_id: int,
        name: str,
        *,
        priority: int = 0,
        words: tuple[str, ...] = (),
        items: Optional[list[Candidate]] = None,
        start_offset: int = 1,
        status: SourceStatus = SourceStatus.COMPLETED,
        processing_time: float = 0.0,
        starts: bool = False,
        triggered_by_character: bool = False,
    ):
        self.id = source_id
        self.name = name
        self.status = status
        self.is_triggered_by_character = triggered_by_character
        self.priority = priority
        self.start_offset = start_offset
        self.processing_time = processing_time
        self.starts = starts
        self.items = [dataclasses.replace(item, source_id=source_id) for item in (items or [])]
        self.items.extend(make_candidate(word, source_id=source_id) for word in words)

        self.trigger_error: Optional[Exception] = None
        self.trigger_contexts: list[Context] = []
        self.on_async_update: Optional[Callable[[], None]] = None
        self.clear_calls = 0
        self.confirmed: list[Candidate] = []
        self.documented: list[Candidate] = []

    def trigger(self, context, on_async_update):
        self.trigger_contexts.append(context)
        self.on_async_update = on_async_update
        if self.trigger_error is not None:
            raise self.trigger_error
        return self.starts

    def get_filtered_items(self, context):
        return list(self.items) if self.status == SourceStatus.COMPLETED else []

    def get_start_offset(self):
        return self.start_offset

    def get_processing_time(self):
        return self.processing_time

    def confirm(self, item):
        self.confirmed.append(item)

    def clear(self):
        self.clear_calls += 1

    def documentation(self, item):
        self.documented.append(item)

    def get_metadata(self):
        return SourceMetadata(priority=self.priority)


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def host() -> ScriptedHost:
    return ScriptedHost()


@pytest.fixture
def config() -> CompletionConfig:
    return CompletionConfig(
        throttle_time=80,
        source_timeout=200,
        source={"alpha": True, "beta": True, "gamma": True},
    )


@pytest.fixture
def engine(host, config, clock) -> CompletionEngine:
    return CompletionEngine(host, config=config, clock=clock)


@pytest.fixture
def stub_source() -> Callable[..., StubSource]:
    """Factory for StubSource instances."""
    return StubSource
