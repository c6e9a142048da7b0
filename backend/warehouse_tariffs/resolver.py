"""Rate resolver: the single place warehouse space is priced.

Pricing an occupant follows these steps:

1. **No space**: an occupant with no area (``<= 0``) costs nothing and is
   not an error.
2. **Rate lookup**: find the active price-list row for the occupant's
   space type whose area band covers the occupied area (and whose tenure
   matches, when known). See ``PricingRepository.get_best_match`` for the
   tie-break between overlapping bands.
3. **Chargeable area**: bill at least the band's minimum chargeable area.
4. **Minimum charge**: a monthly rent below the minimum charge (100 BHD)
   is raised to it. This applies after the area floor; both may apply.
5. **EWA estimate**: add the flat monthly electricity & water estimate.

A missing rate never raises: the result carries ``error`` and zero costs so
that a report over many occupants still renders.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from warehouse_tariffs.models.cost import (
    NO_RATE_ERROR,
    CostReport,
    CostResult,
    OccupantCost,
    PortfolioSummary,
    PricingDetails,
)
from warehouse_tariffs.models.pricing import (
    DEFAULT_EWA_MONTHLY,
    DEFAULT_MINIMUM_CHARGE,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from warehouse_tariffs.data.repository import PricingRepository
    from warehouse_tariffs.models.enums import SpaceType, Tenure
    from warehouse_tariffs.models.occupant import OccupantInput
    from warehouse_tariffs.models.pricing import EwaSettings, PricingRate

logger = logging.getLogger(__name__)

MINIMUM_CHARGE = DEFAULT_MINIMUM_CHARGE
MONTHS_PER_YEAR = 12


class RateResolver:
    """Prices occupants against a snapshot of the price list.

    Args:
        repository: The pricing repository holding the active rate rows.
        ewa_settings: The EWA settings row, or None to use the 15 BHD default.
        minimum_charge: Floor on the monthly rent of any priced space.

    Example::

        from warehouse_tariffs.data.repository import PricingRepository
        from warehouse_tariffs.data.seed import SEED_PRICING_RATES

        resolver = RateResolver(PricingRepository(SEED_PRICING_RATES))
        result = resolver.resolve_cost(OccupantInput(area_occupied=100))
    """

    def __init__(
        self,
        repository: PricingRepository,
        ewa_settings: EwaSettings | None = None,
        minimum_charge: float = MINIMUM_CHARGE,
    ) -> None:
        self._repository = repository
        self._ewa_settings = ewa_settings
        self._minimum_charge = minimum_charge

    @property
    def repository(self) -> PricingRepository:
        return self._repository

    @property
    def minimum_charge(self) -> float:
        return self._minimum_charge

    @property
    def ewa_monthly(self) -> float:
        """Flat monthly EWA estimate applied to every priced occupant."""
        if self._ewa_settings is None:
            return DEFAULT_EWA_MONTHLY
        return self._ewa_settings.monthly_estimate

    def find_rate(
        self,
        area: float,
        space_type: SpaceType,
        tenure: Tenure | None = None,
    ) -> PricingRate | None:
        """Return the price-list row governing ``area``, or None."""
        return self._repository.get_best_match(area, space_type, tenure)

    def monthly_rent(self, area: float, rate: PricingRate) -> tuple[float, float]:
        """Return ``(chargeable_area, monthly_cost)`` with both floors applied."""
        chargeable_area = max(area, rate.min_chargeable_area)
        monthly_cost = chargeable_area * rate.monthly_rate_per_sqm
        if monthly_cost < self._minimum_charge:
            monthly_cost = self._minimum_charge
        return chargeable_area, monthly_cost

    def resolve_cost(self, occupant: OccupantInput) -> CostResult:
        """Price a single occupant.

        Returns:
            A CostResult. ``has_warehouse`` is False when the occupant holds
            no space; ``error`` is set when no active rate covers the space.
        """
        # 1. No active space
        if not occupant.has_space:
            return CostResult(has_warehouse=False, floor_type=occupant.floor_type)

        # 2. Rate lookup
        space_type = occupant.space_type
        rate = self.find_rate(occupant.area_occupied, space_type, occupant.tenure)
        if rate is None:
            logger.warning(
                "No pricing rate for %s m² %s (tenure=%s, occupant=%s)",
                occupant.area_occupied,
                space_type,
                occupant.tenure,
                occupant.occupant_id,
            )
            return CostResult(
                has_warehouse=True,
                chargeable_area=occupant.area_occupied,
                floor_type=occupant.floor_type,
                space_type=space_type,
                tenure=occupant.tenure,
                error=NO_RATE_ERROR,
            )

        # 3-4. Chargeable area and minimum charge
        chargeable_area, monthly_cost = self.monthly_rent(occupant.area_occupied, rate)
        annual_cost = monthly_cost * MONTHS_PER_YEAR

        # 5. EWA estimate
        ewa_monthly = self.ewa_monthly
        ewa_annual = ewa_monthly * MONTHS_PER_YEAR

        return CostResult(
            has_warehouse=True,
            chargeable_area=chargeable_area,
            rate_per_sqm=rate.monthly_rate_per_sqm,
            monthly_cost=monthly_cost,
            annual_cost=annual_cost,
            ewa_monthly=ewa_monthly,
            ewa_annual=ewa_annual,
            total_monthly=monthly_cost + ewa_monthly,
            total_annual=annual_cost + ewa_annual,
            floor_type=occupant.floor_type,
            space_type=rate.space_type,
            tenure=rate.tenure,
            pricing_details=pricing_details(rate),
        )

    def summarize(self, occupants: Iterable[OccupantInput]) -> CostReport:
        """Price every occupant and total the revenue of those holding space.

        Occupants whose space could not be priced stay in the report with
        zero costs and are counted in ``pricing_errors``.
        """
        per_occupant = [
            OccupantCost(
                occupant_id=occupant.occupant_id,
                name=occupant.name,
                email=occupant.email,
                area_occupied=occupant.area_occupied,
                floor_type=occupant.floor_type,
                cost_calculation=self.resolve_cost(occupant),
            )
            for occupant in occupants
        ]
        return CostReport(
            per_occupant=per_occupant,
            revenue_summary=self._revenue_summary(per_occupant),
        )

    @staticmethod
    def _revenue_summary(rows: list[OccupantCost]) -> PortfolioSummary:
        active = [row for row in rows if row.cost_calculation.has_warehouse]
        count = len(active)

        total_monthly = sum(row.cost_calculation.total_monthly for row in active)
        total_annual = sum(row.cost_calculation.total_annual for row in active)
        total_rate = sum(row.cost_calculation.rate_per_sqm for row in active)

        return PortfolioSummary(
            total_occupants=len(rows),
            active_occupants=count,
            total_monthly_revenue=total_monthly,
            total_annual_revenue=total_annual,
            total_warehouse_revenue=sum(row.cost_calculation.monthly_cost for row in active),
            total_ewa_revenue=sum(row.cost_calculation.ewa_monthly for row in active),
            average_monthly_cost=total_monthly / count if count > 0 else 0.0,
            average_rate_per_sqm=total_rate / count if count > 0 else 0.0,
            total_area_occupied=sum(row.area_occupied for row in active),
            pricing_errors=sum(1 for row in active if row.cost_calculation.error),
        )


def pricing_details(rate: PricingRate) -> PricingDetails:
    """Describe the price-list row a cost was computed from."""
    return PricingDetails(
        area_band=rate.area_band_name,
        tenure=rate.tenure,
        monthly_rate_per_sqm=rate.monthly_rate_per_sqm,
        min_chargeable_area=rate.min_chargeable_area,
        package_starting_bhd=rate.package_starting_bhd,
    )
