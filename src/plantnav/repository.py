"""Plant model and plant repositories."""

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import aclosing
from dataclasses import dataclass
from typing import Protocol

from plantnav.core.cancellation import CancellationToken
from plantnav.core.errors import RepositoryError
from plantnav.core.filter import GrowZone
from plantnav.core.state import StateCell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Plant:
    """A plant that can be grown in a given zone."""

    plant_id: str
    name: str
    description: str
    grow_zone_number: int
    watering_interval: int = 7  # days
    image_url: str = ""


class PlantRepository(Protocol):
    """Data source the controller loads plants from.

    Streams are live: they emit the current list and again on every change.
    Cache refreshes are best-effort; the controller ignores their failures.
    """

    def stream_all(
        self, token: CancellationToken | None = None
    ) -> AsyncIterator[list[Plant]]: ...

    def stream_filtered(
        self, zone: GrowZone, token: CancellationToken | None = None
    ) -> AsyncIterator[list[Plant]]: ...

    async def refresh_cache_all(self, token: CancellationToken | None = None) -> None: ...

    async def refresh_cache_filtered(
        self, zone: GrowZone, token: CancellationToken | None = None
    ) -> None: ...


class InMemoryPlantRepository:
    """Repository backed by an in-memory "remote" plant list and a local cache.

    The cache starts empty. Refreshing copies plants from the remote list into
    the cache after ``latency`` seconds, and the live streams re-emit.
    """

    def __init__(
        self,
        plants: Iterable[Plant],
        latency: float = 0.0,
        failing_zones: Iterable[int] = (),
        fail_refresh: bool = False,
    ) -> None:
        self._remote = list(plants)
        self.latency = latency
        self.failing_zones = set(failing_zones)
        self.fail_refresh = fail_refresh
        self._cache: StateCell[list[Plant]] = StateCell([])

    @property
    def cached(self) -> list[Plant]:
        """Plants currently in the local cache."""
        return list(self._cache.value)

    async def stream_all(
        self, token: CancellationToken | None = None
    ) -> AsyncIterator[list[Plant]]:
        """Yield all cached plants sorted by name, live."""
        await self._simulate_network()
        async with aclosing(self._cache.observe()) as updates:
            async for plants in updates:
                if token is not None and token.cancelled:
                    return
                yield sorted(plants, key=lambda p: p.name)

    async def stream_filtered(
        self, zone: GrowZone, token: CancellationToken | None = None
    ) -> AsyncIterator[list[Plant]]:
        """Yield cached plants of one grow zone sorted by name, live."""
        await self._simulate_network()
        if zone.number in self.failing_zones:
            raise RepositoryError("network error")
        async with aclosing(self._cache.observe()) as updates:
            async for plants in updates:
                if token is not None and token.cancelled:
                    return
                yield sorted(
                    (p for p in plants if p.grow_zone_number == zone.number),
                    key=lambda p: p.name,
                )

    async def refresh_cache_all(self, token: CancellationToken | None = None) -> None:
        """Replace the cache with every remote plant."""
        await self._simulate_network()
        if self.fail_refresh:
            raise RepositoryError("cache refresh failed")
        if token is not None:
            token.raise_if_cancelled()
        self._cache.set(list(self._remote))
        logger.debug("Cache refreshed with %d plants", len(self._remote))

    async def refresh_cache_filtered(
        self, zone: GrowZone, token: CancellationToken | None = None
    ) -> None:
        """Merge the remote plants of ``zone`` into the cache."""
        await self._simulate_network()
        if self.fail_refresh:
            raise RepositoryError("cache refresh failed")
        if token is not None:
            token.raise_if_cancelled()

        fresh = [p for p in self._remote if p.grow_zone_number == zone.number]
        merged = {p.plant_id: p for p in self._cache.value}
        for plant in fresh:
            merged[plant.plant_id] = plant
        self._cache.set(list(merged.values()))
        logger.debug("Cache refreshed with %d plants for %s", len(fresh), zone)

    async def _simulate_network(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
