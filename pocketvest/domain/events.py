"""
In-process change notification shared by the stateful domain services.

Each service owns one ChangeNotifier and publishes an event after every
successful mutation. Observers (the UI layer, other services) subscribe
with a plain callable and get back a function that removes the subscription.

No framework imports allowed.
"""

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class ChangeNotifier(Generic[T]):
    """Synchronous publish/subscribe channel for one event type.

    Callbacks run in subscription order on the publishing thread.
    A failing callback is logged and does not stop delivery to the others,
    nor does it undo the mutation that triggered the event.
    """

    def __init__(self) -> None:
        self._callbacks: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """Register a callback and return a function that unregisters it."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def publish(self, event: T) -> None:
        """Deliver an event to every current subscriber."""
        for callback in list(self._callbacks):
            try:
                callback(event)
            except Exception:
                logger.exception("Change observer %r failed", callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)
