"""
Merge step of the display pipeline.

Folds the filtered candidates of completed sources into one list aligned on
a shared start offset.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Optional

from compflow.core.config import CompletionConfig
from compflow.domain.protocols import CompletionSource
from compflow.domain.types import Candidate, Context
from compflow.logger import get_logger
from compflow.utils import trim_to_width

logger = get_logger("merge")


def compute_gap(before_line: str, start_offset: int, source_offset: int) -> str:
    """Text between the merged start offset and a source's own start offset.

    Both offsets are 1-based columns. A source starting later than the
    merged offset gets its candidates prefixed with this text so every row
    replaces the same span.
    """
    if start_offset <= 0 or source_offset <= start_offset:
        return ""
    return before_line[start_offset - 1 : source_offset - 1]


def render_candidate(
    item: Candidate,
    gap: str,
    config: CompletionConfig,
    menu: Optional[str] = None,
) -> Candidate:
    """Return a copy of ``item`` with the rendered fields filled in.

    ``menu``, when given, replaces the menu text the source attached.
    """
    return dataclasses.replace(
        item,
        word=gap + item.original_word,
        abbr=trim_to_width(" " * len(gap) + item.original_abbr, config.max_abbr_width),
        kind=trim_to_width(item.original_kind or "", config.max_kind_width),
        menu=trim_to_width((item.original_menu or "") if menu is None else menu, config.max_menu_width),
    )


def merge_candidates(
    context: Context,
    start_offset: int,
    sources: Iterable[CompletionSource],
    config: CompletionConfig,
) -> list[Candidate]:
    """Merge filtered candidates of ``sources`` (already in priority order).

    Candidates are deduplicated by original word unless they set
    ``original_dup``. A source triggered by a trigger character that
    contributed items hides every source after it.
    """
    items: list[Candidate] = []
    seen: set[str] = set()

    for source in sources:
        source_items = source.get_filtered_items(context)
        if not source_items:
            continue

        gap = compute_gap(context.before_line, start_offset, source.get_start_offset())
        override = config.source_config(source.name)
        menu = override.menu if override is not None else None
        for item in source_items:
            if item.original_word in seen and not item.original_dup:
                continue
            seen.add(item.original_word)
            items.append(render_candidate(item, gap, config, menu))

        if source.is_triggered_by_character:
            logger.debug(f"Source {source.name!r} was character-triggered, skipping lower priorities")
            break

    return items
