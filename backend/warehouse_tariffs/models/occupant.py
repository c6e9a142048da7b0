"""Occupant input model: the normalized shape every cost calculation takes."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, field_validator

from warehouse_tariffs.models.enums import FloorType, SpaceType, Tenure

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class OccupantInput(BaseModel):
    """A booked (or empty) space to be priced.

    ``area_occupied`` of zero or less means the occupant currently holds no
    space. ``tenure`` of None lets the resolver choose between tenures.
    """

    occupant_id: str | None = None
    name: str | None = None
    email: str | None = None
    area_occupied: float = 0.0
    floor_type: FloorType = FloorType.GROUND
    tenure: Tenure | None = None

    @field_validator("area_occupied", mode="before")
    @classmethod
    def null_area_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None or v == "" else v

    @field_validator("floor_type", mode="before")
    @classmethod
    def normalize_floor_type(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return FloorType.parse(v)
        return v

    @field_validator("tenure", mode="before")
    @classmethod
    def normalize_tenure(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return Tenure.parse(v)
        return v

    @property
    def space_type(self) -> SpaceType:
        return self.floor_type.space_type

    @property
    def has_space(self) -> bool:
        return self.area_occupied > 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> OccupantInput:
        """Build an input from a raw ``warehouse_occupants``/``unified_users`` row.

        Area is read from ``area_occupied`` or ``space_occupied``. Tenure is
        taken from a ``tenure`` column when present, otherwise derived from
        ``entry_date`` and ``expected_exit_date`` when both are set.
        """
        from warehouse_tariffs.lease import tenure_for_lease

        area = record.get("area_occupied")
        if area is None:
            area = record.get("space_occupied")
        area = _parse_area(area, record.get("id"))

        tenure: Tenure | None = None
        raw_tenure = record.get("tenure")
        if raw_tenure:
            try:
                tenure = Tenure.parse(str(raw_tenure))
            except ValueError:
                logger.warning("Ignoring unknown tenure %r on record %s", raw_tenure, record.get("id"))
        if tenure is None:
            entry = _parse_date(record.get("entry_date"))
            exit_ = _parse_date(record.get("expected_exit_date"))
            if entry is not None and exit_ is not None and exit_ > entry:
                tenure = tenure_for_lease(entry, exit_)

        occupant_id = record.get("id")
        return cls(
            occupant_id=str(occupant_id) if occupant_id is not None else None,
            name=_text(record.get("name")),
            email=_text(record.get("email")),
            area_occupied=area,
            floor_type=_text(record.get("floor_type")),
            tenure=tenure,
        )


def _text(value: Any) -> str | None:
    return str(value) if value is not None else None


def _parse_area(value: Any, record_id: Any) -> float:
    """Read a stored area; missing or non-numeric values count as no space."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Treating unparsable area %r on record %s as 0", value, record_id)
        return 0.0


def _parse_date(value: Any) -> date | None:
    """Parse an ISO date or timestamp string; unparsable values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning("Ignoring unparsable lease date %r", value)
        return None
