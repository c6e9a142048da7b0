"""Warehouse and space availability models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator


class Warehouse(BaseModel):
    """A warehouse building with ground-floor and optional mezzanine space."""

    id: str
    name: str = ""
    location: str | None = None
    total_space: float = 0.0
    has_mezzanine: bool = False
    mezzanine_space: float = 0.0
    occupied_space: float = 0.0
    mezzanine_occupied: float = 0.0
    status: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        return str(v) if v is not None else v

    @field_validator(
        "total_space",
        "mezzanine_space",
        "occupied_space",
        "mezzanine_occupied",
        mode="before",
    )
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator("has_mezzanine", mode="before")
    @classmethod
    def null_as_false(cls, v: Any) -> Any:
        return False if v is None else v


class WarehouseAvailability(BaseModel):
    """Occupancy of one floor of a warehouse."""

    total_space: float
    occupied_space: float
    available_space: float
    utilization_percentage: float
