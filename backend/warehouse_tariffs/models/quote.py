"""Rental quote request and result models."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import Field, field_validator, model_validator

from warehouse_tariffs.models.base import CamelModel
from warehouse_tariffs.models.cost import PricingDetails
from warehouse_tariffs.models.enums import (
    EwaMode,
    FloorType,
    ServicePricingType,
    SpaceType,
    Tenure,
)


class ServiceSelection(CamelModel):
    """An optional service requested with the booking, by service name."""

    name: str
    quantity: float = Field(default=1.0, ge=0)


class QuoteRequest(CamelModel):
    """Input to the quote calculator.

    ``tenure`` may be omitted, in which case it is derived from the lease
    dates.
    """

    client_name: str
    client_email: str | None = None
    warehouse_id: str | None = None
    area: float = Field(gt=0)
    floor_type: FloorType = FloorType.GROUND
    tenure: Tenure | None = None
    lease_start: date
    lease_end: date
    ewa_mode: EwaMode = EwaMode.HOUSE_LOAD
    services: list[ServiceSelection] = Field(default_factory=list)
    discount_percent: float = Field(default=0.0, ge=0, le=100)

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

    @model_validator(mode="after")
    def lease_end_after_start(self) -> QuoteRequest:
        if self.lease_end <= self.lease_start:
            msg = (
                f"lease_end ({self.lease_end}) must be after "
                f"lease_start ({self.lease_start})"
            )
            raise ValueError(msg)
        return self


class ServiceLine(CamelModel):
    """A priced optional service on a quote."""

    name: str
    pricing_type: ServicePricingType
    unit: str
    rate: float | None
    quantity: float
    amount: float
    on_request: bool = False


class Quote(CamelModel):
    """A full rental quote for a lease period, VAT inclusive."""

    client_name: str
    client_email: str | None = None
    warehouse_id: str | None = None
    space_type: SpaceType
    area_input: float
    chargeable_area: float
    tenure: Tenure
    lease_start: date
    lease_end: date
    months_full: int
    days_extra: int
    monthly_rent: float
    base_rent: float
    ewa_mode: EwaMode
    ewa_cost: float
    service_lines: list[ServiceLine] = Field(default_factory=list)
    services_total: float = 0.0
    subtotal: float
    discount_percent: float = 0.0
    discount_amount: float = 0.0
    vat_rate: float
    vat_amount: float
    grand_total: float
    issued_on: date
    valid_until: date
    pricing_details: PricingDetails

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat summary dict with display strings for the quote sheet."""
        from warehouse_tariffs.formatting import format_area, format_bhd, format_rate

        return {
            "client_name": self.client_name,
            "space_type": str(self.space_type),
            "tenure": str(self.tenure),
            "area_formatted": format_area(self.area_input),
            "chargeable_area_formatted": format_area(self.chargeable_area),
            "rate_formatted": format_rate(self.pricing_details.monthly_rate_per_sqm),
            "period": f"{self.months_full} months, {self.days_extra} days",
            "monthly_rent_formatted": format_bhd(self.monthly_rent),
            "base_rent_formatted": format_bhd(self.base_rent),
            "ewa_cost_formatted": format_bhd(self.ewa_cost),
            "services_total_formatted": format_bhd(self.services_total),
            "discount_formatted": format_bhd(self.discount_amount),
            "vat_formatted": format_bhd(self.vat_amount),
            "grand_total_formatted": format_bhd(self.grand_total),
            "valid_until": self.valid_until.isoformat(),
        }
