"""Warehouse tariff resolver.

Usage::

    from warehouse_tariffs import OccupantInput, create_default_resolver

    resolver = create_default_resolver()
    result = resolver.resolve_cost(OccupantInput(area_occupied=250, floor_type="mezzanine"))
"""

from warehouse_tariffs.data.repository import PricingRepository
from warehouse_tariffs.exceptions import (
    ConfigurationError,
    DataStoreError,
    InvalidQuoteError,
    NoApplicableRateError,
    QuoteError,
    WarehouseTariffsError,
)
from warehouse_tariffs.factory import (
    create_default_quote_calculator,
    create_default_resolver,
    create_quote_calculator_from_store,
    create_resolver_from_store,
)
from warehouse_tariffs.models.cost import (
    CostReport,
    CostResult,
    OccupantCost,
    PortfolioSummary,
    PricingDetails,
)
from warehouse_tariffs.models.enums import EwaMode, FloorType, SpaceType, Tenure
from warehouse_tariffs.models.occupant import OccupantInput
from warehouse_tariffs.models.pricing import EwaSettings, PricingRate, SystemSettings
from warehouse_tariffs.models.quote import Quote, QuoteRequest, ServiceSelection
from warehouse_tariffs.quotes import QuoteCalculator
from warehouse_tariffs.resolver import RateResolver

__all__ = [
    "ConfigurationError",
    "CostReport",
    "CostResult",
    "DataStoreError",
    "EwaMode",
    "EwaSettings",
    "FloorType",
    "InvalidQuoteError",
    "NoApplicableRateError",
    "OccupantCost",
    "OccupantInput",
    "PortfolioSummary",
    "PricingDetails",
    "PricingRate",
    "PricingRepository",
    "Quote",
    "QuoteCalculator",
    "QuoteError",
    "QuoteRequest",
    "RateResolver",
    "ServiceSelection",
    "SpaceType",
    "SystemSettings",
    "Tenure",
    "WarehouseTariffsError",
    "create_default_quote_calculator",
    "create_default_resolver",
    "create_quote_calculator_from_store",
    "create_resolver_from_store",
]
