"""Warehouse space availability per floor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from warehouse_tariffs.models.enums import SpaceType
from warehouse_tariffs.models.warehouse import WarehouseAvailability

if TYPE_CHECKING:
    from collections.abc import Iterable

    from warehouse_tariffs.models.occupant import OccupantInput
    from warehouse_tariffs.models.warehouse import Warehouse


def _availability(total: float, occupied: float) -> WarehouseAvailability:
    return WarehouseAvailability(
        total_space=total,
        occupied_space=occupied,
        available_space=max(total - occupied, 0.0),
        utilization_percentage=occupied / total * 100 if total > 0 else 0.0,
    )


def floor_capacity(warehouse: Warehouse, space_type: SpaceType) -> float:
    """Bookable area of one floor: ground floor space or the mezzanine.

    Office space is counted against the mezzanine, as the store's
    availability procedure does.
    """
    if space_type is SpaceType.GROUND_FLOOR:
        return warehouse.total_space
    return warehouse.mezzanine_space


def compute_availability(
    warehouse: Warehouse,
    occupants: Iterable[OccupantInput],
    space_type: SpaceType = SpaceType.GROUND_FLOOR,
) -> WarehouseAvailability:
    """Availability of one floor from the occupants holding space on it."""
    occupied = sum(
        occupant.area_occupied
        for occupant in occupants
        if occupant.has_space and occupant.space_type == space_type
    )
    return _availability(floor_capacity(warehouse, space_type), occupied)


def availability_from_warehouse_row(
    warehouse: Warehouse,
    space_type: SpaceType = SpaceType.GROUND_FLOOR,
) -> WarehouseAvailability:
    """Fallback using the warehouse row's own occupancy counters.

    The ground floor reads ``occupied_space``; other floors read
    ``mezzanine_occupied``.
    """
    if space_type is SpaceType.GROUND_FLOOR:
        occupied = warehouse.occupied_space
    else:
        occupied = warehouse.mezzanine_occupied
    return _availability(floor_capacity(warehouse, space_type), occupied)
