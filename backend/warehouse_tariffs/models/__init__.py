"""Domain models for the warehouse tariff service."""

from warehouse_tariffs.models.account import SessionUser
from warehouse_tariffs.models.cost import (
    NO_RATE_ERROR,
    CostReport,
    CostResult,
    OccupantCost,
    PortfolioSummary,
    PricingDetails,
)
from warehouse_tariffs.models.enums import (
    EwaMode,
    FloorType,
    ServicePricingType,
    SpaceType,
    Tenure,
    UserRole,
)
from warehouse_tariffs.models.occupant import OccupantInput
from warehouse_tariffs.models.pricing import (
    EwaSettings,
    OptionalService,
    PricingRate,
    SystemSettings,
)
from warehouse_tariffs.models.quote import (
    Quote,
    QuoteRequest,
    ServiceLine,
    ServiceSelection,
)
from warehouse_tariffs.models.warehouse import Warehouse, WarehouseAvailability

__all__ = [
    "NO_RATE_ERROR",
    "CostReport",
    "CostResult",
    "EwaMode",
    "EwaSettings",
    "FloorType",
    "OccupantCost",
    "OccupantInput",
    "OptionalService",
    "PortfolioSummary",
    "PricingDetails",
    "PricingRate",
    "Quote",
    "QuoteRequest",
    "ServiceLine",
    "ServiceSelection",
    "ServicePricingType",
    "SessionUser",
    "SpaceType",
    "SystemSettings",
    "Tenure",
    "UserRole",
    "Warehouse",
    "WarehouseAvailability",
]
