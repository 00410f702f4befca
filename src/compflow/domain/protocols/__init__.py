"""Domain protocols - interfaces for all implementations.

This module defines protocols (structural types) that describe the contracts
that sources, hosts, clocks and caches must satisfy. Using protocols keeps
the engine independent from any concrete editor and makes every
collaborator easy to fake in tests.
"""

from compflow.domain.protocols.cache import Cache, K, V
from compflow.domain.protocols.clock import Clock, TimerHandle
from compflow.domain.protocols.host import HostBridge, RenderMode
from compflow.domain.protocols.ranking import Comparator
from compflow.domain.protocols.source import AsyncUpdateCallback, CompletionSource

__all__ = [
    "AsyncUpdateCallback",
    "Cache",
    "Clock",
    "Comparator",
    "CompletionSource",
    "HostBridge",
    "K",
    "RenderMode",
    "TimerHandle",
    "V",
]
