"""Presentation layer - host bridges the engine renders through."""

from .headless import ScriptedHost

__all__ = ["ScriptedHost"]
