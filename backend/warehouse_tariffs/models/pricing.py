"""Pricing table models: banded rates, EWA settings, system settings, services."""

from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from warehouse_tariffs.models.enums import ServicePricingType, SpaceType, Tenure

logger = logging.getLogger(__name__)

DEFAULT_EWA_MONTHLY = 15.0
DEFAULT_MINIMUM_CHARGE = 100.0
DEFAULT_DAYS_PER_MONTH = 30
DEFAULT_VAT_RATE = 10.0
DEFAULT_QUOTE_VALIDITY_DAYS = 30


class PricingRate(BaseModel):
    """One row of the price list: a (space type, area band, tenure) tariff.

    ``area_band_max`` of None marks the open-ended top band.
    """

    id: str | None = None
    space_type: SpaceType
    area_band_name: str = ""
    area_band_min: float = Field(default=0.0, ge=0)
    area_band_max: float | None = None
    tenure: Tenure
    tenure_description: str | None = None
    monthly_rate_per_sqm: float = Field(ge=0)
    daily_rate_per_sqm: float = Field(default=0.0, ge=0)
    min_chargeable_area: float = Field(default=0.0, ge=0)
    package_starting_bhd: float | None = None
    active: bool = True

    @field_validator("space_type", mode="before")
    @classmethod
    def normalize_space_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return SpaceType.parse(v)
        return v

    @field_validator("tenure", mode="before")
    @classmethod
    def normalize_tenure(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Tenure.parse(v)
        return v

    @field_validator("area_band_min", "min_chargeable_area", "daily_rate_per_sqm", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @model_validator(mode="after")
    def band_is_ordered(self) -> PricingRate:
        if self.area_band_max is not None and self.area_band_max < self.area_band_min:
            msg = (
                f"area_band_max ({self.area_band_max}) must not be below "
                f"area_band_min ({self.area_band_min})"
            )
            raise ValueError(msg)
        return self

    @property
    def band_width(self) -> float:
        """Width of the area band; the open-ended band is infinitely wide."""
        if self.area_band_max is None:
            return math.inf
        return self.area_band_max - self.area_band_min

    def covers(self, area: float) -> bool:
        """True if ``area`` falls inside this band (both bounds inclusive)."""
        if area < self.area_band_min:
            return False
        return self.area_band_max is None or area <= self.area_band_max


class EwaSettings(BaseModel):
    """Electricity & water (EWA) settings, a single row in the store."""

    id: str | None = None
    estimated_fixed_monthly_charges: float | None = None
    government_tariff_per_kwh: float | None = None
    estimated_setup_deposit: float = 0.0
    estimated_installation_fee: float = 0.0
    house_load_description: str | None = None
    dedicated_meter_description: str | None = None

    @field_validator("estimated_setup_deposit", "estimated_installation_fee", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @property
    def monthly_estimate(self) -> float:
        """Flat monthly EWA charge, falling back to the default when unset."""
        return self.estimated_fixed_monthly_charges or DEFAULT_EWA_MONTHLY


class SystemSettings(BaseModel):
    """Operator-wide settings from the ``system_settings`` key/value table."""

    minimum_charge: float = Field(default=DEFAULT_MINIMUM_CHARGE, ge=0)
    days_per_month: int = Field(default=DEFAULT_DAYS_PER_MONTH, gt=0)
    vat_rate: float = Field(default=DEFAULT_VAT_RATE, ge=0)
    quote_validity_days: int = Field(default=DEFAULT_QUOTE_VALIDITY_DAYS, ge=0)
    company_name: str = "Sitra Warehouse"

    @classmethod
    def from_rows(cls, rows: list[dict[str, Any]]) -> SystemSettings:
        """Build settings from ``{setting_key, setting_value}`` rows.

        Unknown keys are ignored. Values that do not parse for their field
        are logged and the default is kept.
        """
        values: dict[str, Any] = {}
        for row in rows:
            key = row.get("setting_key")
            if key not in cls.model_fields:
                continue
            values[key] = row.get("setting_value")

        settings = cls()
        for key, raw in values.items():
            try:
                parsed = cls.model_validate({key: raw})
            except ValidationError:
                logger.warning("Ignoring invalid system setting %s=%r", key, raw)
                continue
            settings = settings.model_copy(update={key: getattr(parsed, key)})
        return settings


class OptionalService(BaseModel):
    """An add-on service offered with a booking (goods movement, customs, ...)."""

    id: str | None = None
    name: str
    description: str = ""
    category: str = "other"
    pricing_type: ServicePricingType = ServicePricingType.ON_REQUEST
    rate: float | None = Field(default=None, ge=0)
    unit: str = ""
    time_restriction: str | None = None
    is_free: bool = False
    active: bool = True
