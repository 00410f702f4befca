"""Completion engine configuration.

Parses JSON configuration files into a frozen snapshot the engine reads on
every cycle. Swapping the snapshot is the only way configuration changes.
"""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from compflow.logger import get_logger

logger = get_logger("config")

PreselectPolicy = Literal["enable", "always", "disable"]


class SourceConfig(BaseModel):
    """Per-source configuration entry."""

    enabled: bool = Field(default=True, description="Whether the source takes part in completion")
    priority: Optional[int] = Field(default=None, description="Overrides the source's own priority")
    menu: Optional[str] = Field(default=None, description="Replaces the menu text shown for the source's candidates")

    class Config:
        """Pydantic configuration."""

        frozen = True


class CompletionConfig(BaseModel):
    """Read-only settings snapshot consulted by the engine."""

    enabled: bool = Field(default=True, description="Master switch for completion")
    autocomplete: bool = Field(default=True, description="Complete while typing, not only on request")
    documentation: bool = Field(default=True, description="Ask sources for documentation of the selected item")
    debug: bool = Field(default=False, description="Verbose engine logging")
    min_length: int = Field(default=1, ge=0, description="Keyword length sources wait for before producing")
    preselect: PreselectPolicy = Field(default="enable", description="Highlight the first candidate")
    throttle_time: int = Field(default=80, ge=0, description="Milliseconds between popup refreshes")
    source_timeout: int = Field(default=200, ge=0, description="Milliseconds to wait for a processing source")
    max_abbr_width: int = Field(default=100, ge=0, description="Display width of labels (0 = unlimited)")
    max_kind_width: int = Field(default=100, ge=0, description="Display width of kinds (0 = unlimited)")
    max_menu_width: int = Field(default=100, ge=0, description="Display width of menus (0 = unlimited)")
    source: dict[str, SourceConfig] = Field(
        default_factory=dict, description="Source configurations keyed by source name"
    )

    class Config:
        """Pydantic configuration."""

        frozen = True

    @field_validator("source", mode="before")
    @classmethod
    def _coerce_source_flags(cls, value: Any) -> Any:
        """Accept ``{"buffer": true}`` as shorthand for ``{"buffer": {"enabled": true}}``."""
        if not isinstance(value, dict):
            return value
        return {
            name: {"enabled": entry} if isinstance(entry, bool) else entry
            for name, entry in value.items()
        }

    def is_source_enabled(self, name: str) -> bool:
        """
        Check whether the source called ``name`` should be used.

        A source is enabled only when completion is enabled and the source is
        listed in ``source`` without ``enabled: false``.
        """
        if not self.enabled:
            return False
        entry = self.source.get(name)
        return entry is not None and entry.enabled

    def source_config(self, name: str) -> Optional[SourceConfig]:
        return self.source.get(name)


def load_completion_config(config_path: Optional[str | Path] = None) -> CompletionConfig:
    """
    Load completion configuration from a JSON file.

    Args:
        config_path: Path to the JSON configuration file. If None, returns
            the default configuration.

    Returns:
        CompletionConfig: Parsed configuration object

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If the configuration structure is invalid
    """
    if config_path is None:
        logger.info("No completion configuration file given, using defaults")
        return CompletionConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        error_msg = f"Completion configuration file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.info(f"Loading completion configuration from: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in configuration file {config_path}: {e}")
        raise

    try:
        config = CompletionConfig(**data)
    except ValidationError as e:
        logger.error(f"Invalid configuration structure in {config_path}: {e}")
        raise

    logger.info(f"Loaded completion configuration with {len(config.source)} source(s)")
    for name, entry in config.source.items():
        logger.debug(f"  - {name}: enabled={entry.enabled} priority={entry.priority}")
    return config
