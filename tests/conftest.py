"""Shared fixtures for plantnav tests."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator

import pytest

from plantnav.core.cancellation import CancellationToken
from plantnav.core.filter import GrowZone
from plantnav.repository import Plant

ALL = "all"


class GatedStream:
    """One opened plant stream whose output the test controls."""

    def __init__(self, key: int | str, token: CancellationToken | None) -> None:
        self.key = key
        self.token = token
        self.closed = False
        self._queue: asyncio.Queue[tuple[str, object]] = asyncio.Queue()

    def emit(self, plants: list[Plant]) -> None:
        self._queue.put_nowait(("item", plants))

    def fail(self, error: Exception) -> None:
        self._queue.put_nowait(("error", error))

    def complete(self) -> None:
        self._queue.put_nowait(("done", None))

    async def run(self) -> AsyncIterator[list[Plant]]:
        try:
            while True:
                kind, payload = await self._queue.get()
                if kind == "item":
                    yield payload  # type: ignore[misc]
                elif kind == "error":
                    raise payload  # type: ignore[misc]
                else:
                    return
        finally:
            self.closed = True


class GatedRepository:
    """Repository whose streams only produce what the test pushes into them."""

    def __init__(self) -> None:
        self.streams: dict[int | str, list[GatedStream]] = defaultdict(list)
        self.refreshes: list[int | str] = []
        self.refresh_error: Exception | None = None
        self.call_error: Exception | None = None

    def stream(self, key: int | str) -> GatedStream:
        """The most recently opened stream for a zone number or ``ALL``."""
        return self.streams[key][-1]

    def opened(self, key: int | str) -> int:
        return len(self.streams[key])

    def stream_all(self, token: CancellationToken | None = None) -> AsyncIterator[list[Plant]]:
        return self._open(ALL, token)

    def stream_filtered(
        self, zone: GrowZone, token: CancellationToken | None = None
    ) -> AsyncIterator[list[Plant]]:
        if self.call_error is not None:
            raise self.call_error
        return self._open(zone.number, token)

    async def refresh_cache_all(self, token: CancellationToken | None = None) -> None:
        self.refreshes.append(ALL)
        if self.refresh_error is not None:
            raise self.refresh_error

    async def refresh_cache_filtered(
        self, zone: GrowZone, token: CancellationToken | None = None
    ) -> None:
        self.refreshes.append(zone.number)
        if self.refresh_error is not None:
            raise self.refresh_error

    def _open(self, key: int | str, token: CancellationToken | None) -> AsyncIterator[list[Plant]]:
        stream = GatedStream(key, token)
        self.streams[key].append(stream)
        return stream.run()


def make_plant(plant_id: str, zone: int, name: str | None = None) -> Plant:
    return Plant(
        plant_id=plant_id,
        name=name or plant_id.title(),
        description=f"{plant_id} description",
        grow_zone_number=zone,
    )


@pytest.fixture
def repository() -> GatedRepository:
    return GatedRepository()


@pytest.fixture
def plant_factory() -> Callable[..., Plant]:
    return make_plant


@pytest.fixture
def drain() -> Callable[[int], Awaitable[None]]:
    """Let pending event loop callbacks and tasks run."""

    async def _drain(rounds: int = 10) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)

    return _drain


@pytest.fixture(autouse=True)
def restore_plantnav_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps seeing plantnav records."""
    logger = logging.getLogger("plantnav")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
