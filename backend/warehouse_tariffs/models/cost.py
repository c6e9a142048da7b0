"""Cost calculation output models.

Attributes are snake_case in Python; ``model_dump(by_alias=True)`` produces
the camelCase keys the admin and supporter dashboards consume.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from warehouse_tariffs.models.base import CamelModel
from warehouse_tariffs.models.enums import FloorType, SpaceType, Tenure

NO_RATE_ERROR = "No pricing rate found"


class PricingDetails(CamelModel):
    """The price-list row a cost was computed from."""

    area_band: str
    tenure: Tenure
    monthly_rate_per_sqm: float
    min_chargeable_area: float
    package_starting_bhd: float | None = None


class CostResult(CamelModel):
    """Monthly and annual cost of one occupant's space, plus the EWA estimate.

    When ``error`` is set the cost fields are all zero: the space exists but
    could not be priced.
    """

    has_warehouse: bool
    chargeable_area: float = 0.0
    rate_per_sqm: float = 0.0
    monthly_cost: float = 0.0
    annual_cost: float = 0.0
    ewa_monthly: float = 0.0
    ewa_annual: float = 0.0
    total_monthly: float = 0.0
    total_annual: float = 0.0
    floor_type: FloorType = FloorType.GROUND
    space_type: SpaceType | None = None
    tenure: Tenure | None = None
    pricing_details: PricingDetails | None = None
    error: str | None = None


class OccupantCost(CamelModel):
    """An occupant row of a cost report."""

    occupant_id: str | None = None
    name: str | None = None
    email: str | None = None
    area_occupied: float
    floor_type: FloorType
    cost_calculation: CostResult


class PortfolioSummary(CamelModel):
    """Revenue totals over every occupant that currently holds space."""

    total_occupants: int = 0
    active_occupants: int = 0
    total_monthly_revenue: float = 0.0
    total_annual_revenue: float = 0.0
    total_warehouse_revenue: float = 0.0
    total_ewa_revenue: float = 0.0
    average_monthly_cost: float = 0.0
    average_rate_per_sqm: float = 0.0
    total_area_occupied: float = 0.0
    pricing_errors: int = 0

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat dict of display strings for the revenue cards."""
        from warehouse_tariffs.formatting import format_area, format_bhd, format_rate

        return {
            "active_occupants": self.active_occupants,
            "total_occupants": self.total_occupants,
            "total_monthly_revenue_formatted": format_bhd(self.total_monthly_revenue),
            "total_annual_revenue_formatted": format_bhd(self.total_annual_revenue),
            "total_ewa_revenue_formatted": format_bhd(self.total_ewa_revenue),
            "average_monthly_cost_formatted": format_bhd(self.average_monthly_cost),
            "average_rate_formatted": format_rate(self.average_rate_per_sqm),
            "total_area_formatted": format_area(self.total_area_occupied),
            "pricing_errors": self.pricing_errors,
        }


class CostReport(CamelModel):
    """Per-occupant costs together with the portfolio summary."""

    per_occupant: list[OccupantCost] = Field(default_factory=list)
    revenue_summary: PortfolioSummary = Field(default_factory=PortfolioSummary)
