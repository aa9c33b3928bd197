"""Plant list controller: the grow zone filter wired to loading and errors."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import aclosing
from types import TracebackType
from typing import TYPE_CHECKING

from plantnav.core.cancellation import CancellationToken
from plantnav.core.errors import ErrorSurface, describe
from plantnav.core.filter import NO_GROW_ZONE, FilterState, GrowZone
from plantnav.core.loading import LoadingTracker
from plantnav.core.state import Disposer, ReadOnlyState, StateCell
from plantnav.core.switcher import LatestSwitcher

if TYPE_CHECKING:
    from plantnav.repository import Plant, PlantRepository

logger = logging.getLogger(__name__)


class PlantListController:
    """Loads the plant list for the current grow zone.

    One filter channel feeds two reactions:
    - a cache refresh, fired on every filter change, whose failures are
      logged and otherwise ignored
    - the plant stream, which drives ``results``, ``loading`` and ``message``

    Both cancel their previous run when the filter changes. Only output of the
    latest filter value is ever applied. Must be created inside a running
    event loop; the initial refresh and load start immediately.

    A repository stream that never emits keeps ``loading`` set for that
    filter value. No timeout is applied here.
    """

    def __init__(
        self,
        repository: "PlantRepository",
        refresh_on_repeat: bool = True,
    ) -> None:
        self._repository = repository
        self._refresh_on_repeat = refresh_on_repeat
        self._last_refreshed: GrowZone | None = None
        self._closed = False

        self._filter = FilterState(NO_GROW_ZONE)
        self._results: "StateCell[list[Plant]]" = StateCell([])

        self._plants: "LatestSwitcher[GrowZone, list[Plant]]" = LatestSwitcher(
            self._stream_plants,
            on_start=self._on_load_start,
            on_result=self._on_plants,
            on_settle=self._on_load_settle,
            name="plants",
        )
        self._loading = LoadingTracker(self._plants.is_current)
        self._errors = ErrorSurface(self._plants.is_current, self._loading)
        self._refresh: LatestSwitcher[GrowZone, None] = LatestSwitcher(
            self._refresh_cache, name="refresh"
        )

        self.results: "ReadOnlyState[list[Plant]]" = self._results.read_only()
        self.loading: ReadOnlyState[bool] = self._loading.loading.read_only()
        self.message: ReadOnlyState[str | None] = self._errors.message.read_only()

        self._unsubscribe: list[Disposer] = [
            self._filter.subscribe(self._on_filter_for_refresh),
        ]
        self._plants.follow(self._filter)

    @property
    def filter(self) -> GrowZone:
        """The current grow zone."""
        return self._filter.value

    @property
    def closed(self) -> bool:
        return self._closed

    def set_filter(self, value: GrowZone | int) -> None:
        """Filter the list to a grow zone.

        Raises:
            InvalidFilterError: If ``value`` is not a grow zone or zone number
        """
        zone = GrowZone.of(value)
        logger.info("Filter set to %s", zone)
        self._filter.set(zone)

    def clear_filter(self) -> None:
        """Show plants of every grow zone."""
        self.set_filter(NO_GROW_ZONE)

    def is_filtered(self) -> bool:
        """Return True if the list is filtered to a grow zone."""
        return self._filter.is_filtered

    def acknowledge_message(self) -> None:
        """Call once the current message has been shown."""
        self._errors.acknowledge()

    async def wait_until_loaded(self, timeout: float | None = None) -> None:
        """Wait until ``loading`` is False.

        Raises:
            TimeoutError: If ``timeout`` seconds pass first
        """

        async def _wait() -> None:
            async with aclosing(self._loading.loading.observe()) as values:
                async for loading in values:
                    if not loading:
                        return

        await asyncio.wait_for(_wait(), timeout)

    async def wait_for_refresh(self) -> None:
        """Wait for the running cache refresh, if any, to finish or be cancelled."""
        derivation = self._refresh.active
        if derivation is None or derivation.task is None:
            return
        await asyncio.wait({derivation.task})

    def close(self) -> None:
        """Cancel all work and stop reacting to the filter."""
        if self._closed:
            return
        self._closed = True
        for dispose in self._unsubscribe:
            dispose()
        self._unsubscribe.clear()
        self._plants.close()
        self._refresh.close()
        logger.debug("Controller closed")

    async def __aenter__(self) -> "PlantListController":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _stream_plants(
        self, zone: GrowZone, token: CancellationToken
    ) -> AsyncIterator[list["Plant"]]:
        if zone.is_sentinel:
            return self._repository.stream_all(token=token)
        return self._repository.stream_filtered(zone, token=token)

    def _on_load_start(self, generation: int, zone: GrowZone) -> None:
        self._loading.begin(generation)

    def _on_plants(self, generation: int, plants: list["Plant"]) -> None:
        self._results.set(list(plants))
        self._loading.settle(generation)

    def _on_load_settle(self, generation: int, error: BaseException | None) -> None:
        if error is not None:
            self._errors.capture(generation, error)
        else:
            # Stream ended, possibly without emitting
            self._loading.settle(generation)

    def _on_filter_for_refresh(self, zone: GrowZone) -> None:
        if not self._refresh_on_repeat and zone == self._last_refreshed:
            logger.debug("Skipping refresh, %s already refreshed", zone)
            return
        self._last_refreshed = zone
        self._refresh.switch_to(zone)

    async def _refresh_cache(self, zone: GrowZone, token: CancellationToken) -> None:
        try:
            if zone.is_sentinel:
                await self._repository.refresh_cache_all(token=token)
            else:
                await self._repository.refresh_cache_filtered(zone, token=token)
        except Exception as e:
            # Refreshes are best-effort; the plant stream reports real failures
            logger.warning("Cache refresh for %s failed: %s", zone, describe(e))
