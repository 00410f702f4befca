"""Event bus implementation for decoupled event-driven communication.

The EventBus allows components to publish and subscribe to events without
direct coupling. Sources post updates, the display pipeline reacts; hosts
observe what the engine shows and confirms.

Event Handler Contract:
    Event handlers MUST be synchronous (non-async) functions. This is enforced
    at subscription time. The engine runs on a single cooperative loop, so
    handlers should only schedule work through the timer scheduler.
"""

import inspect
from typing import Callable, Type, TypeVar

from compflow.logger import get_logger

from .types import Event

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

# Type alias for event handlers - must be synchronous
EventHandler = Callable[[Event], None]


class EventBus:
    """Event bus for publishing and subscribing to events.

    The EventBus provides a simple publish-subscribe mechanism where:
    - Publishers create event instances and call `publish(event)`
    - Subscribers register handlers for specific event types using `subscribe()`

    Example:
        ```python
        event_bus = EventBus()
        event_bus.subscribe(CompletionShown, lambda e: print(e.count))
        event_bus.publish(CompletionShown(start_offset=3, count=12))
        ```

    Thread safety:
        This implementation is NOT thread-safe. It assumes all operations
        happen on the host's event loop.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: dict[Type[Event], list[Callable[[Event], None]]] = {}
        """Registry of event handlers by event type."""

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: The type of event to subscribe to (e.g., SourceUpdated)
            handler: Callback called with the event instance. MUST be synchronous.

        Raises:
            TypeError: If handler is an async function (coroutine function)
        """
        if inspect.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous functions. "
                f"Handler {handler.__name__} is an async function (coroutine function)."
            )

        if event_type not in self._handlers:
            self._handlers[event_type] = []

        # Avoid duplicate subscriptions of the same handler
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)
            logger.debug(f"Subscribed handler for {event_type.__name__}")
        else:
            logger.debug(f"Handler already subscribed for {event_type.__name__}, skipping")

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Unsubscribe a handler from events of a specific type.

        Note:
            If the handler was not subscribed, this is a no-op.
        """
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Unsubscribed handler for {event_type.__name__}")
            except ValueError:
                logger.debug(f"Handler not found in subscriptions for {event_type.__name__}")

    def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribed handlers.

        Handlers are called synchronously in the order they were subscribed.
        If a handler raises an exception, it is logged and does not prevent
        other handlers from being called.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(f"No handlers subscribed for {event_type.__name__}")
            return

        logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.opt(exception=True).error(
                    f"Error in event handler for {event_type.__name__}: {e}"
                )

    def clear(self) -> None:
        """Clear all event subscriptions."""
        self._handlers.clear()
        logger.debug("Event bus cleared")

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        """Check if there are any subscribers for a specific event type."""
        return event_type in self._handlers and len(self._handlers[event_type]) > 0
