"""Enums for the warehouse tariff domain models.

String values match what the hosted data store holds in its rows, so the
enums can be validated straight from fetched records. The ``parse``
helpers accept the looser spellings found in older rows (``'ground'``,
``'GROUND FLOOR'``, ``'very_short'``) and are the only place that
normalization happens.
"""

from __future__ import annotations

from enum import StrEnum


def _key(value: str) -> str:
    return " ".join(value.replace("_", " ").replace("-", " ").lower().split())


class SpaceType(StrEnum):
    """Space types as named in the ``pricing_rates`` table."""

    GROUND_FLOOR = "Ground Floor"
    MEZZANINE = "Mezzanine"
    OFFICE = "Office"

    @classmethod
    def parse(cls, value: str) -> SpaceType:
        """Parse a space type, also accepting floor-type spellings.

        Raises ValueError for anything unrecognized.
        """
        space = _SPACE_ALIASES.get(_key(value))
        if space is None:
            msg = f"Unknown space type '{value}'"
            raise ValueError(msg)
        return space


class FloorType(StrEnum):
    """Floor type recorded against an occupant or user booking."""

    GROUND = "ground"
    MEZZANINE = "mezzanine"
    OFFICE = "office"

    @property
    def space_type(self) -> SpaceType:
        return _FLOOR_TO_SPACE[self]

    @classmethod
    def parse(cls, value: str | None) -> FloorType:
        """Parse a floor type; missing or unrecognized values mean ground floor."""
        if not value:
            return cls.GROUND
        space = _SPACE_ALIASES.get(_key(value))
        if space is None:
            return cls.GROUND
        return _SPACE_TO_FLOOR[space]


class Tenure(StrEnum):
    """Lease tenure classes used by the price list."""

    SHORT = "Short"
    LONG = "Long"
    VERY_SHORT = "Very Short"

    @property
    def priority(self) -> int:
        """Preference when tenure is unknown: Long > Short > Very Short."""
        return _TENURE_PRIORITY[self]

    @classmethod
    def parse(cls, value: str) -> Tenure:
        """Parse a tenure case-insensitively. Raises ValueError if unknown."""
        for tenure in cls:
            if _key(tenure.value) == _key(value):
                return tenure
        msg = f"Unknown tenure '{value}'"
        raise ValueError(msg)


_SPACE_ALIASES: dict[str, SpaceType] = {
    "ground": SpaceType.GROUND_FLOOR,
    "ground floor": SpaceType.GROUND_FLOOR,
    "mezzanine": SpaceType.MEZZANINE,
    "mezzanine floor": SpaceType.MEZZANINE,
    "office": SpaceType.OFFICE,
}

_FLOOR_TO_SPACE: dict[FloorType, SpaceType] = {
    FloorType.GROUND: SpaceType.GROUND_FLOOR,
    FloorType.MEZZANINE: SpaceType.MEZZANINE,
    FloorType.OFFICE: SpaceType.OFFICE,
}

_SPACE_TO_FLOOR: dict[SpaceType, FloorType] = {
    space: floor for floor, space in _FLOOR_TO_SPACE.items()
}

_TENURE_PRIORITY: dict[Tenure, int] = {
    Tenure.LONG: 3,
    Tenure.SHORT: 2,
    Tenure.VERY_SHORT: 1,
}


class UserRole(StrEnum):
    """Account roles stored on the ``users`` table."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    SUPPORT = "SUPPORT"
    USER = "USER"


class EwaMode(StrEnum):
    """How electricity & water (EWA) is supplied to a booked space."""

    HOUSE_LOAD = "house_load"
    DEDICATED_METER = "dedicated_meter"


class ServicePricingType(StrEnum):
    """Billing basis of an optional service."""

    FIXED = "fixed"
    HOURLY = "hourly"
    ON_REQUEST = "on_request"
