"""Loading flag driven by derivation lifecycles."""

import logging
from collections.abc import Callable

from plantnav.core.state import StateCell

logger = logging.getLogger(__name__)


class LoadingTracker:
    """Owns the loading flag.

    ``begin`` raises the flag for a generation. ``settle`` lowers it only when
    that generation is still current, and at most once per generation, so a
    superseded load can never clear the flag a newer load has set.
    """

    def __init__(self, is_current: Callable[[int], bool]) -> None:
        self._is_current = is_current
        self._settled: int | None = None
        self.loading: StateCell[bool] = StateCell(False)

    def begin(self, generation: int) -> None:
        """Mark a generation as loading."""
        self._settled = None
        if not self.loading.value:
            self.loading.set(True)

    def settle(self, generation: int) -> bool:
        """Mark a generation as done. Returns True if the flag was lowered."""
        if not self._is_current(generation):
            logger.debug("Ignoring settle of stale generation %d", generation)
            return False
        if self._settled == generation:
            return False

        self._settled = generation
        self.loading.set(False)
        return True

    @property
    def is_loading(self) -> bool:
        return self.loading.value
