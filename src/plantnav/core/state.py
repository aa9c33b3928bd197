"""Observable single-slot state cells for plantnav."""

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Disposer = Callable[[], None]

logger = logging.getLogger(__name__)


class StateCell(Generic[T]):
    """Mutable cell that always holds a value and replays it to new subscribers.

    Notifications are delivered synchronously in the order ``set`` was called.
    A ``set`` made from inside a subscriber callback is queued and delivered
    once the current round finishes, so every subscriber sees the same order.
    A subscriber that raises is logged and skipped; the others still get the
    value.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._version = 0
        self._subscribers: list[Callable[[T], None]] = []
        self._pending: deque[T] = deque()
        self._notifying = False
        self._delivering: T = initial

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    @property
    def version(self) -> int:
        """Number of times the cell has been set."""
        return self._version

    def get(self) -> T:
        """Return the current value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the current value and notify subscribers."""
        self._value = value
        self._version += 1
        self._pending.append(value)
        if self._notifying:
            return

        self._notifying = True
        try:
            while self._pending:
                current = self._pending.popleft()
                self._delivering = current
                # Copy so callbacks may unsubscribe while we iterate
                for callback in list(self._subscribers):
                    self._deliver(callback, current)
        finally:
            self._notifying = False
            self._pending.clear()

    def subscribe(self, callback: Callable[[T], None], replay: bool = True) -> Disposer:
        """Register a callback. Returns a function that removes it.

        With ``replay`` the callback is invoked with the current value first.
        During a notification round that is the value being delivered, so the
        values still queued follow it in order.
        """
        self._subscribers.append(callback)
        if replay:
            callback(self._delivering if self._notifying else self._value)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("State subscriber %r failed on %r", callback, value)

    async def observe(self) -> AsyncIterator[T]:
        """Yield the current value, then every later one, in order."""
        queue: asyncio.Queue[T] = asyncio.Queue()
        dispose = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            dispose()

    def read_only(self) -> "ReadOnlyState[T]":
        """Return a view of this cell without ``set``."""
        return ReadOnlyState(self)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r}, version={self._version})"


class ReadOnlyState(Generic[T]):
    """Read-only view over a StateCell."""

    def __init__(self, cell: StateCell[T]) -> None:
        self._cell = cell

    @property
    def value(self) -> T:
        return self._cell.value

    @property
    def version(self) -> int:
        return self._cell.version

    def get(self) -> T:
        return self._cell.get()

    def subscribe(self, callback: Callable[[T], None], replay: bool = True) -> Disposer:
        return self._cell.subscribe(callback, replay=replay)

    def observe(self) -> AsyncIterator[T]:
        return self._cell.observe()

    def __repr__(self) -> str:
        return f"ReadOnlyState({self._cell.value!r})"
