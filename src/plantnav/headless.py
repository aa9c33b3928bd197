"""Headless mode for plantnav - load and export without TUI."""

import asyncio
import logging
from pathlib import Path

from plantnav.core.controller import PlantListController
from plantnav.core.filter import GrowZone
from plantnav.plants import export_plants
from plantnav.repository import Plant, PlantRepository

logger = logging.getLogger(__name__)


async def load_zone(
    repository: PlantRepository,
    zone: GrowZone,
    refresh_on_repeat: bool = True,
    timeout: float | None = None,
) -> tuple[list[Plant], str | None]:
    """Load the plant list for ``zone`` and return it with any error message."""
    async with PlantListController(repository, refresh_on_repeat=refresh_on_repeat) as controller:
        controller.set_filter(zone)
        await controller.wait_until_loaded(timeout)
        # Let the live stream pick up whatever the refresh wrote to the cache
        await controller.wait_for_refresh()
        await asyncio.sleep(0)
        return controller.results.value, controller.message.value


def run_headless(
    repository: PlantRepository,
    zone: GrowZone,
    export_file: Path,
    export_format: str,
    refresh_on_repeat: bool = True,
    timeout: float | None = None,
) -> bool:
    """Run plantnav in headless mode - load, export. Returns False on error."""
    print(f"Loading plants for {zone}")
    try:
        plants, message = asyncio.run(
            load_zone(repository, zone, refresh_on_repeat=refresh_on_repeat, timeout=timeout)
        )
    except TimeoutError:
        logger.error("Loading %s timed out after %ss", zone, timeout)
        print(f"Error: timed out after {timeout}s")
        return False

    if message:
        logger.error("Loading %s failed: %s", zone, message)
        print(f"Error: {message}")
        return False

    print(f"Loaded {len(plants)} plants")
    export_plants(plants, export_file, export_format)
    print(f"Exported to {export_file}")
    return True
