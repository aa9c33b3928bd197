"""Error types and the one-shot error message surface."""

import logging
from collections.abc import Callable

from plantnav.core.loading import LoadingTracker
from plantnav.core.state import StateCell

logger = logging.getLogger(__name__)


class PlantNavError(Exception):
    """Base class for plantnav errors."""


class InvalidFilterError(PlantNavError, ValueError):
    """Raised synchronously when a caller passes something that is not a grow zone."""


class RepositoryError(PlantNavError):
    """Raised by a plant repository when a stream or cache refresh fails."""


def describe(error: BaseException) -> str:
    """Turn an exception into a message fit for display."""
    text = str(error).strip()
    return text or type(error).__name__


class ErrorSurface:
    """Holds the latest failure of the current generation as a one-shot message.

    A message stays visible until ``acknowledge`` is called. A newer failure
    replaces an unacknowledged one; nothing is queued.
    """

    def __init__(
        self,
        is_current: Callable[[int], bool],
        loading: LoadingTracker,
    ) -> None:
        self._is_current = is_current
        self._loading = loading
        self.message: StateCell[str | None] = StateCell(None)

    def capture(self, generation: int, error: BaseException) -> bool:
        """Record a failure. Returns False if it came from a stale generation."""
        if not self._is_current(generation):
            logger.debug("Dropping failure from stale generation %d: %r", generation, error)
            return False

        logger.info("Derivation %d failed: %s", generation, describe(error))
        self.message.set(describe(error))
        self._loading.settle(generation)
        return True

    def acknowledge(self) -> None:
        """Clear the message. Does nothing if none is set."""
        if self.message.value is not None:
            self.message.set(None)
