"""Cancellation tokens and derivation handles."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class CancellationToken:
    """Advisory cancellation flag handed to every derivation.

    Work that cannot be interrupted by ``Task.cancel`` (threads, blocking I/O)
    should check ``cancelled`` before producing output or side effects.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Cancel the token and run its callbacks once."""
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if the token has been cancelled."""
        if self._cancelled:
            raise asyncio.CancelledError()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run callback on cancel, or now if already cancelled."""
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)


@dataclass
class Derivation:
    """In-flight work bound to one filter value and generation."""

    generation: int
    value: Any
    token: CancellationToken = field(default_factory=CancellationToken)
    task: "asyncio.Task[None] | None" = None
    settled: bool = False

    @property
    def active(self) -> bool:
        return not self.settled and not self.token.cancelled

    def cancel(self) -> None:
        """Cancel the token and the task backing this derivation."""
        self.token.cancel()
        if self.task is not None and not self.task.done():
            self.task.cancel()
