"""
Utility functions for compflow.
"""

import os

from rich.cells import cell_len

ELLIPSIS = "…"


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/compflow).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def trim_to_width(text: str, width: int) -> str:
    """
    Trim ``text`` so it occupies at most ``width`` terminal cells.

    Wide characters (CJK, emoji) count as two cells. Trimmed text ends with
    an ellipsis that is included in the width budget.

    Args:
        text: Text to trim
        width: Maximum display width in cells; ``0`` or less disables trimming

    Returns:
        The original text when it fits, otherwise a shortened copy
    """
    if width <= 0 or cell_len(text) <= width:
        return text

    budget = width - cell_len(ELLIPSIS)
    kept: list[str] = []
    used = 0
    for char in text:
        size = cell_len(char)
        if used + size > budget:
            break
        kept.append(char)
        used += size
    return "".join(kept) + ELLIPSIS
