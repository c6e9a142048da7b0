"""Pricing repository: in-memory price list with band matching."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from warehouse_tariffs.models.enums import SpaceType, Tenure
    from warehouse_tariffs.models.pricing import PricingRate


def _specificity_key(rate: PricingRate) -> tuple[float, int, float]:
    """Sort key: narrowest band, then highest tenure priority, then highest band start."""
    return (rate.band_width, -rate.tenure.priority, -rate.area_band_min)


class PricingRepository:
    """Repository over a snapshot of the ``pricing_rates`` table.

    Inactive rows are dropped on construction and can never be matched.
    """

    def __init__(self, rates: Iterable[PricingRate]) -> None:
        self._rates = [rate for rate in rates if rate.active]

    def __len__(self) -> int:
        return len(self._rates)

    @property
    def rates(self) -> list[PricingRate]:
        return list(self._rates)

    def space_types(self) -> set[SpaceType]:
        return {rate.space_type for rate in self._rates}

    def get_candidates(
        self,
        area: float,
        space_type: SpaceType,
        tenure: Tenure | None = None,
    ) -> list[PricingRate]:
        """All active rows whose band covers ``area`` for the space type.

        When ``tenure`` is given only rows with exactly that tenure qualify.
        """
        return [
            rate
            for rate in self._rates
            if rate.space_type == space_type
            and rate.covers(area)
            and (tenure is None or rate.tenure == tenure)
        ]

    def get_best_match(
        self,
        area: float,
        space_type: SpaceType,
        tenure: Tenure | None = None,
    ) -> PricingRate | None:
        """The single row that governs ``area``, or None if nothing covers it.

        Ties between candidates are broken, in order, by:
        1. Narrowest band (an open-ended band counts as infinitely wide)
        2. Tenure priority, Long > Short > Very Short (only matters when
           ``tenure`` is None)
        3. Higher ``area_band_min``

        Remaining ties keep price-list order.
        """
        candidates = self.get_candidates(area, space_type, tenure)
        if not candidates:
            return None
        return min(candidates, key=_specificity_key)
