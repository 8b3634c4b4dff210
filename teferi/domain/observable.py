"""
Synchronous change notification used by calendar state holders.
"""

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class Observable(Generic[T]):
    """
    Minimal observer list.

    Callbacks run synchronously on the emitting thread, in subscription order.
    A callback subscribed during an emission is first called on the next one.
    """

    def __init__(self) -> None:
        self._callbacks: List[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """Register a callback and return a function that removes it again."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def emit(self, value: T) -> None:
        for callback in list(self._callbacks):
            callback(value)
