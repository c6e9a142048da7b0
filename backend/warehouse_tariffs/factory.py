"""Factory functions for creating pre-configured resolvers and quote calculators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from warehouse_tariffs.data.repository import PricingRepository
from warehouse_tariffs.data.seed import (
    DEFAULT_EWA_SETTINGS,
    DEFAULT_SYSTEM_SETTINGS,
    SEED_OPTIONAL_SERVICES,
    SEED_PRICING_RATES,
)
from warehouse_tariffs.quotes import QuoteCalculator
from warehouse_tariffs.resolver import RateResolver

if TYPE_CHECKING:
    from warehouse_tariffs.api.deps import TariffStore
    from warehouse_tariffs.models.pricing import SystemSettings


def create_default_resolver() -> RateResolver:
    """Create a RateResolver wired up with the seed price list.

    Example::

        from warehouse_tariffs import OccupantInput, create_default_resolver

        resolver = create_default_resolver()
        result = resolver.resolve_cost(OccupantInput(area_occupied=100))
    """
    return RateResolver(
        PricingRepository(SEED_PRICING_RATES),
        DEFAULT_EWA_SETTINGS,
        minimum_charge=DEFAULT_SYSTEM_SETTINGS.minimum_charge,
    )


def create_default_quote_calculator() -> QuoteCalculator:
    """Create a QuoteCalculator over the seed price list, settings and services."""
    return QuoteCalculator(
        create_default_resolver(),
        DEFAULT_SYSTEM_SETTINGS,
        DEFAULT_EWA_SETTINGS,
        SEED_OPTIONAL_SERVICES,
    )


def create_resolver_from_store(
    store: TariffStore,
    system_settings: SystemSettings | None = None,
) -> RateResolver:
    """Snapshot the store's active rates and EWA settings into a resolver.

    Reads once; the resolver never goes back to the store.
    """
    settings = system_settings or store.fetch_system_settings()
    return RateResolver(
        PricingRepository(store.fetch_active_pricing_rates()),
        store.fetch_ewa_settings(),
        minimum_charge=settings.minimum_charge,
    )


def create_quote_calculator_from_store(store: TariffStore) -> QuoteCalculator:
    """Snapshot rates, settings and services from the store into a calculator."""
    settings = store.fetch_system_settings()
    ewa_settings = store.fetch_ewa_settings()
    resolver = RateResolver(
        PricingRepository(store.fetch_active_pricing_rates()),
        ewa_settings,
        minimum_charge=settings.minimum_charge,
    )
    return QuoteCalculator(
        resolver,
        settings,
        ewa_settings,
        store.fetch_optional_services(),
    )
