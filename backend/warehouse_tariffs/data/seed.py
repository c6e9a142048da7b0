"""Seed price list and settings for the warehouse tariff service.

Rates are in BHD per m² for the Sitra warehouse. Mezzanine space is priced
20% below the ground floor for every band and tenure; the mezzanine rows
are derived from the ground-floor rows rather than typed out, so the two
tables cannot drift apart.
"""

from __future__ import annotations

from warehouse_tariffs.models.enums import ServicePricingType, SpaceType, Tenure
from warehouse_tariffs.models.pricing import (
    EwaSettings,
    OptionalService,
    PricingRate,
    SystemSettings,
)

MEZZANINE_DISCOUNT = 0.20

_TENURE_DESCRIPTIONS: dict[Tenure, str] = {
    Tenure.SHORT: "Less than One Year",
    Tenure.LONG: "More or equal to 1 Year",
    Tenure.VERY_SHORT: "Special Rate",
}


def _ground(
    band: str,
    band_min: float,
    band_max: float | None,
    tenure: Tenure,
    monthly: float,
    daily: float,
    min_area: float,
    package: float,
) -> PricingRate:
    return PricingRate(
        space_type=SpaceType.GROUND_FLOOR,
        area_band_name=band,
        area_band_min=band_min,
        area_band_max=band_max,
        tenure=tenure,
        tenure_description=_TENURE_DESCRIPTIONS[tenure],
        monthly_rate_per_sqm=monthly,
        daily_rate_per_sqm=daily,
        min_chargeable_area=min_area,
        package_starting_bhd=package,
    )


GROUND_FLOOR_RATES: list[PricingRate] = [
    # --- Small units ---
    _ground("Small units", 1, 999, Tenure.SHORT, 3.500, 0.117, 30, 105.00),
    _ground("Small units", 1, 999, Tenure.LONG, 3.000, 0.100, 35, 105.00),
    _ground("Very Short Special", 1, 999, Tenure.VERY_SHORT, 4.500, 0.150, 25, 112.50),
    # --- 1,000–1,499 m² ---
    _ground("1,000–1,499 m²", 1000, 1499, Tenure.SHORT, 3.000, 0.100, 1000, 3000.00),
    _ground("1,000–1,499 m²", 1000, 1499, Tenure.LONG, 2.800, 0.093, 1000, 2800.00),
    # --- 1,500 m² and above (open-ended) ---
    _ground("1,500 m² and above", 1500, None, Tenure.SHORT, 2.800, 0.093, 1500, 4200.00),
    _ground("1,500 m² and above", 1500, None, Tenure.LONG, 2.600, 0.087, 1500, 3900.00),
]


def mezzanine_rates_from(ground_rates: list[PricingRate]) -> list[PricingRate]:
    """Derive mezzanine rows from ground-floor rows at the mezzanine discount.

    Per-m² rates are rounded to 3 decimals (fils), package prices to 2.
    """
    factor = 1 - MEZZANINE_DISCOUNT
    return [
        rate.model_copy(
            update={
                "space_type": SpaceType.MEZZANINE,
                "monthly_rate_per_sqm": round(rate.monthly_rate_per_sqm * factor, 3),
                "daily_rate_per_sqm": round(rate.daily_rate_per_sqm * factor, 3),
                "package_starting_bhd": (
                    round(rate.package_starting_bhd * factor, 2)
                    if rate.package_starting_bhd is not None
                    else None
                ),
            },
        )
        for rate in ground_rates
    ]


MEZZANINE_RATES: list[PricingRate] = mezzanine_rates_from(GROUND_FLOOR_RATES)

SEED_PRICING_RATES: list[PricingRate] = GROUND_FLOOR_RATES + MEZZANINE_RATES

DEFAULT_EWA_SETTINGS = EwaSettings(
    estimated_fixed_monthly_charges=15.0,
    government_tariff_per_kwh=0.045,
    estimated_setup_deposit=50.0,
    estimated_installation_fee=100.0,
    house_load_description=(
        "House-load for lighting and low-power office devices (phones, "
        "laptops/PCs). No EWA application or connection needed."
    ),
    dedicated_meter_description=(
        "Heavy usage / Dedicated meter: EWA billed separately at government "
        "tariff (per kWh) plus fixed monthly charges and one-off fees/deposit."
    ),
)

DEFAULT_SYSTEM_SETTINGS = SystemSettings()

SEED_OPTIONAL_SERVICES: list[OptionalService] = [
    OptionalService(
        name="Goods Movement (Day)",
        description="Free access for moving goods during business hours",
        category="movement",
        pricing_type=ServicePricingType.FIXED,
        rate=0,
        unit="per movement",
        time_restriction="07:00–18:00",
        is_free=True,
    ),
    OptionalService(
        name="Goods Movement (Night)",
        description="After-hours movement service",
        category="movement",
        pricing_type=ServicePricingType.HOURLY,
        rate=50,
        unit="per hour",
        time_restriction="18:00–06:30",
    ),
    OptionalService(
        name="Loading & Unloading",
        description="Professional loading and unloading service",
        category="loading",
        unit="on request",
    ),
    OptionalService(
        name="Transportation",
        description="Transportation services",
        category="transportation",
        unit="on request",
    ),
    OptionalService(
        name="Last-mile Delivery",
        description="Final delivery to customer location",
        category="transportation",
        unit="on request",
    ),
    OptionalService(
        name="Freight Forwarding",
        description="Freight forwarding services",
        category="customs",
        unit="on request",
    ),
    OptionalService(
        name="Customs Clearance",
        description="Import/export customs processing",
        category="customs",
        unit="on request",
    ),
    OptionalService(
        name="Warehouse Handling",
        description="Warehouse handling and value-added services",
        category="handling",
        unit="on request",
    ),
]
