"""Host editor bridge protocol."""

from enum import Enum
from typing import Protocol, Sequence, runtime_checkable

from compflow.domain.types import Candidate, LineState

__all__ = ["HostBridge", "RenderMode"]


class RenderMode(str, Enum):
    """Popup selection behaviour while rendering."""

    PREVIEW_INSERT = "menuone,noinsert"
    """Highlight the first item without inserting it."""
    NO_AUTO_SELECT = "menuone,noselect"
    """Show the popup with nothing highlighted."""


@runtime_checkable
class HostBridge(Protocol):
    """Everything the engine needs from the editor it runs in."""

    def is_popup_visible(self) -> bool:
        ...

    def render(self, start_offset: int, items: Sequence[Candidate]) -> None:
        """Show ``items`` replacing text from the 1-based ``start_offset``.

        An empty ``items`` closes the popup.
        """
        ...

    def get_render_mode(self) -> str:
        ...

    def set_render_mode(self, mode: str) -> None:
        ...

    def close_documentation_panel(self) -> None:
        ...

    def current_mode(self) -> str:
        """Editor mode name; insert-like modes start with ``"i"``."""
        ...

    def current_buffer_type(self) -> str:
        ...

    def is_manual_selection_active(self) -> bool:
        """True while the user is stepping through the popup by hand."""
        ...

    def line_state(self) -> LineState:
        ...
