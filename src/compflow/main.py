"""Command line entry point for compflow."""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from compflow.application import CompletionEngine
from compflow.application.sources import BufferWordsSource, WordListSource
from compflow.core.config import CompletionConfig, load_completion_config
from compflow.infrastructure.clock import VirtualClock
from compflow.logger import get_logger, setup_logger
from compflow.presentation import ScriptedHost

load_dotenv()

DEFAULT_SOURCES = {"buffer": True, "words": True}

cli = typer.Typer(
    name="compflow",
    help="Autocomplete orchestration engine: replay keystrokes or try it interactively",
    epilog="""
    Examples:
    $ compflow replay "imp" --word import --word impress --word simple
    $ compflow demo --words-file /usr/share/dict/words
    """,
    add_completion=False,
)

console = Console()


def _load_config(config: Optional[Path]) -> CompletionConfig:
    if config is None:
        return CompletionConfig(source=DEFAULT_SOURCES)
    return load_completion_config(config)


def _read_words(words: list[str], words_file: Optional[Path]) -> list[str]:
    collected = list(words)
    if words_file is not None:
        collected.extend(
            line.strip() for line in words_file.read_text(encoding="utf-8").splitlines() if line.strip()
        )
    return collected


def _configure_logging(debug: bool) -> None:
    setup_logger(log_level="DEBUG" if debug else None)


@cli.command()
def replay(
    text: str = typer.Argument(..., help="Text typed one keystroke at a time"),
    word: list[str] = typer.Option([], "--word", "-w", help="Vocabulary word (repeatable)"),
    words_file: Optional[Path] = typer.Option(None, "--words-file", exists=True, dir_okay=False, help="File with one word per line"),
    buffer_text: Optional[str] = typer.Option(None, "--buffer-text", help="Text the buffer source harvests words from"),
    config: Optional[Path] = typer.Option(None, "--config", envvar="COMPFLOW_CONFIG", help="JSON configuration file"),
    manual: bool = typer.Option(False, "--manual", help="Request completion explicitly after typing"),
    interval: float = typer.Option(50.0, "--interval", help="Milliseconds between keystrokes"),
    latency: float = typer.Option(0.0, "--latency", help="Simulated buffer source latency in milliseconds"),
    debug: bool = typer.Option(os.getenv("DEBUG", "false").lower() == "true", "--debug", help="Enable debug logging"),
):
    """Type TEXT into a headless editor and print the resulting popup."""
    settings = _load_config(config)
    _configure_logging(debug or settings.debug)
    logger = get_logger("main")

    clock = VirtualClock()
    host = ScriptedHost()
    engine = CompletionEngine(host, config=settings, clock=clock)

    vocabulary = _read_words(word, words_file)
    engine.register_source(
        WordListSource("words", clock, vocabulary, priority=5, menu="[W]", min_length=settings.min_length)
    )
    if buffer_text is not None:
        engine.register_source(
            BufferWordsSource(
                "buffer",
                clock,
                lambda: buffer_text,
                latency_ms=latency,
                priority=10,
                menu="[B]",
                min_length=settings.min_length,
            )
        )

    logger.info(f"Replaying {len(text)} keystroke(s) against {len(vocabulary)} word(s)")
    engine.enter_insert()
    clock.run_pending()
    for char in text:
        host.type_text(char)
        engine.complete()
        clock.advance(interval)
    if manual:
        engine.complete(manual=True)

    clock.advance(settings.source_timeout + settings.throttle_time + latency + 1)

    if not host.popup_visible:
        console.print("[yellow]No candidates[/yellow]")
        return

    table = Table(title=f"Candidates from column {host.popup_offset}")
    table.add_column("#", justify="right")
    table.add_column("Word")
    table.add_column("Label")
    table.add_column("Kind")
    table.add_column("Menu")
    for index, item in enumerate(host.popup_items):
        table.add_row(str(index), item.word, item.abbr, item.kind, item.menu)
    console.print(table)
    if host.preselected:
        console.print("[dim]First candidate preselected[/dim]")


@cli.command()
def demo(
    word: list[str] = typer.Option([], "--word", "-w", help="Vocabulary word (repeatable)"),
    words_file: Optional[Path] = typer.Option(None, "--words-file", exists=True, dir_okay=False, help="File with one word per line"),
    config: Optional[Path] = typer.Option(None, "--config", envvar="COMPFLOW_CONFIG", help="JSON configuration file"),
    debug: bool = typer.Option(os.getenv("DEBUG", "false").lower() == "true", "--debug", help="Enable debug logging"),
):
    """Open the interactive Textual playground."""
    from compflow.presentation.tui import CompletionDemoApp

    settings = _load_config(config)
    _configure_logging(debug or settings.debug)
    CompletionDemoApp(words=_read_words(word, words_file), config=settings).run()


if __name__ == "__main__":
    cli()
