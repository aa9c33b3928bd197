"""plantnav - Plant Navigator."""

from plantnav.core import (
    NO_GROW_ZONE,
    GrowZone,
    InvalidFilterError,
    PlantListController,
    RepositoryError,
)
from plantnav.repository import InMemoryPlantRepository, Plant, PlantRepository

__version__ = "0.1.0"

__all__ = [
    "GrowZone",
    "InMemoryPlantRepository",
    "InvalidFilterError",
    "NO_GROW_ZONE",
    "Plant",
    "PlantListController",
    "PlantRepository",
    "RepositoryError",
]
