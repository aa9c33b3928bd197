"""Grow zone filter values and the filter state cell."""

from dataclasses import dataclass

from plantnav.core.errors import InvalidFilterError
from plantnav.core.state import StateCell

SENTINEL_ZONE_NUMBER = -1


@dataclass(frozen=True)
class GrowZone:
    """A grow zone to filter plants by.

    ``GrowZone(-1)`` is the "no filter" sentinel, exported as ``NO_GROW_ZONE``.
    """

    number: int

    def __post_init__(self) -> None:
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise InvalidFilterError(
                f"Grow zone number must be an int, got {type(self.number).__name__}"
            )
        if self.number < SENTINEL_ZONE_NUMBER:
            raise InvalidFilterError(f"Invalid grow zone number: {self.number}")

    @property
    def is_sentinel(self) -> bool:
        """True if this value means "no filter"."""
        return self.number == SENTINEL_ZONE_NUMBER

    @classmethod
    def of(cls, value: "GrowZone | int") -> "GrowZone":
        """Coerce an int to a GrowZone; pass GrowZones through."""
        if isinstance(value, GrowZone):
            return value
        return cls(value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return "all" if self.is_sentinel else f"zone {self.number}"


NO_GROW_ZONE = GrowZone(SENTINEL_ZONE_NUMBER)


class FilterState(StateCell[GrowZone]):
    """Holds the current grow zone. Starts at ``NO_GROW_ZONE``.

    Setting the same zone twice notifies subscribers both times.
    """

    def __init__(self, initial: GrowZone = NO_GROW_ZONE) -> None:
        if not isinstance(initial, GrowZone):
            raise InvalidFilterError(f"Not a grow zone: {initial!r}")
        super().__init__(initial)

    def set(self, value: GrowZone) -> None:
        if not isinstance(value, GrowZone):
            raise InvalidFilterError(f"Not a grow zone: {value!r}")
        super().set(value)

    @property
    def is_filtered(self) -> bool:
        return not self.value.is_sentinel
