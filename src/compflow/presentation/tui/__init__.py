"""Textual front-end for trying the engine interactively."""

from .app import CompletionDemoApp
from .host import TextualHost

__all__ = ["CompletionDemoApp", "TextualHost"]
