"""Core business logic modules for plantnav."""

from plantnav.core.cancellation import CancellationToken, Derivation
from plantnav.core.controller import PlantListController
from plantnav.core.errors import (
    ErrorSurface,
    InvalidFilterError,
    PlantNavError,
    RepositoryError,
)
from plantnav.core.filter import NO_GROW_ZONE, FilterState, GrowZone
from plantnav.core.loading import LoadingTracker
from plantnav.core.state import ReadOnlyState, StateCell
from plantnav.core.switcher import LatestSwitcher

__all__ = [
    "CancellationToken",
    "Derivation",
    "ErrorSurface",
    "FilterState",
    "GrowZone",
    "InvalidFilterError",
    "LatestSwitcher",
    "LoadingTracker",
    "NO_GROW_ZONE",
    "PlantListController",
    "PlantNavError",
    "ReadOnlyState",
    "RepositoryError",
    "StateCell",
]
