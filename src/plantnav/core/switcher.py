"""Switch-to-latest runner for filter-driven derivations.

Each filter value starts a derivation tagged with a new generation. Starting
one cancels the previous one, and anything a derivation produces is checked
against the current generation before it is applied. The generation check is
what keeps a late result from an old filter from overwriting a newer one;
cancellation alone is only advisory.
"""

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Generic, TypeVar

from plantnav.core.cancellation import CancellationToken, Derivation
from plantnav.core.state import Disposer, StateCell

F = TypeVar("F")
R = TypeVar("R")

DeriveFn = Callable[[F, CancellationToken], AsyncIterator[R] | Awaitable[R]]

logger = logging.getLogger(__name__)


class LatestSwitcher(Generic[F, R]):
    """Runs at most one derivation at a time, always for the latest value.

    Callbacks, all invoked on the event loop:
    - ``on_start(generation, value)``: synchronously when a derivation starts
    - ``on_result(generation, result)``: for each item of the current generation
    - ``on_settle(generation, error)``: when the current generation's source
      completes (``error`` is None) or fails, including a ``derive`` that
      raises before returning a source

    Cancelled and superseded derivations never reach any callback.
    """

    def __init__(
        self,
        derive: DeriveFn,
        on_start: Callable[[int, F], None] | None = None,
        on_result: Callable[[int, R], None] | None = None,
        on_settle: Callable[[int, BaseException | None], None] | None = None,
        name: str = "derivation",
    ) -> None:
        self._derive = derive
        self._on_start = on_start
        self._on_result = on_result
        self._on_settle = on_settle
        self.name = name
        self._generation = 0
        self._active: Derivation | None = None
        self._unfollow: Disposer | None = None
        self._closed = False

    @property
    def current_generation(self) -> int:
        return self._generation

    @property
    def active(self) -> Derivation | None:
        """The derivation currently running, if any."""
        if self._active is not None and not self._active.active:
            return None
        return self._active

    @property
    def closed(self) -> bool:
        return self._closed

    def is_current(self, generation: int) -> bool:
        """True if work tagged with ``generation`` may still be applied."""
        return not self._closed and generation == self._generation

    def follow(self, source: StateCell[F]) -> Disposer:
        """Switch to every value of ``source``, starting with its current one."""
        if self._unfollow is not None:
            self._unfollow()
        self._unfollow = source.subscribe(self.switch_to)
        return self._unfollow

    def switch_to(self, value: F) -> Derivation | None:
        """Cancel the running derivation and start one for ``value``."""
        if self._closed:
            logger.debug("%s: ignoring %r, switcher is closed", self.name, value)
            return None

        self._generation += 1
        generation = self._generation
        previous = self._active
        if previous is not None and previous.active:
            logger.debug(
                "%s: generation %d superseded by %d",
                self.name,
                previous.generation,
                generation,
            )
            previous.cancel()

        derivation = Derivation(generation=generation, value=value)
        self._active = derivation
        logger.debug("%s: starting generation %d for %r", self.name, generation, value)

        if self._on_start is not None:
            self._on_start(generation, value)
            if not self.is_current(generation):
                # on_start switched again or closed us
                derivation.cancel()
                return derivation

        try:
            source = self._derive(value, derivation.token)
        except Exception as e:
            self._finish(derivation, e)
            return derivation

        loop = asyncio.get_running_loop()
        derivation.task = loop.create_task(
            self._run(derivation, source), name=f"{self.name}-{generation}"
        )
        if inspect.iscoroutine(source):
            # A task cancelled before its first step never awaits the source
            derivation.task.add_done_callback(lambda _: source.close())
        return derivation

    def close(self) -> None:
        """Stop following the source and cancel the running derivation."""
        if self._closed:
            return
        self._closed = True
        if self._unfollow is not None:
            self._unfollow()
            self._unfollow = None
        if self._active is not None:
            self._active.cancel()
            self._active = None

    async def _run(self, derivation: Derivation, source: Any) -> None:
        generation = derivation.generation
        try:
            if inspect.isawaitable(source):
                result = await source
                if self._accepts(derivation):
                    self._emit(generation, result)
            else:
                async for result in source:
                    if not self._accepts(derivation):
                        logger.debug(
                            "%s: dropping output of stale generation %d",
                            self.name,
                            generation,
                        )
                        break
                    self._emit(generation, result)
        except Exception as e:
            self._finish(derivation, e)
            return
        finally:
            await _close_source(source)

        self._finish(derivation, None)

    def _accepts(self, derivation: Derivation) -> bool:
        return self.is_current(derivation.generation) and not derivation.token.cancelled

    def _emit(self, generation: int, result: R) -> None:
        if self._on_result is not None:
            self._on_result(generation, result)

    def _finish(self, derivation: Derivation, error: BaseException | None) -> None:
        derivation.settled = True
        if self._active is derivation:
            self._active = None

        if not self._accepts(derivation):
            if error is not None:
                logger.debug(
                    "%s: discarding failure of stale generation %d: %r",
                    self.name,
                    derivation.generation,
                    error,
                )
            return

        if error is not None:
            logger.debug(
                "%s: generation %d failed: %r", self.name, derivation.generation, error
            )
        if self._on_settle is not None:
            self._on_settle(derivation.generation, error)


async def _close_source(source: Any) -> None:
    """Close an async generator source that was left before exhaustion."""
    aclose = getattr(source, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("Error closing derivation source", exc_info=True)
