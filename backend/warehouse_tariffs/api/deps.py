"""Dependency wiring for FastAPI endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from warehouse_tariffs.config import Settings
from warehouse_tariffs.data.store import SupabaseStore

if TYPE_CHECKING:
    from warehouse_tariffs.models.account import SessionUser
    from warehouse_tariffs.models.enums import SpaceType
    from warehouse_tariffs.models.pricing import (
        EwaSettings,
        OptionalService,
        PricingRate,
        SystemSettings,
    )
    from warehouse_tariffs.models.warehouse import Warehouse, WarehouseAvailability

logger = logging.getLogger(__name__)


class TariffStore(Protocol):
    """Read interface the API needs from a data store."""

    def fetch_active_pricing_rates(self) -> list[PricingRate]: ...

    def fetch_ewa_settings(self) -> EwaSettings | None: ...

    def fetch_system_settings(self) -> SystemSettings: ...

    def fetch_optional_services(self) -> list[OptionalService]: ...

    def fetch_occupants(self) -> list[dict[str, Any]]: ...

    def fetch_users_with_space(self) -> list[dict[str, Any]]: ...

    def fetch_warehouse(self, warehouse_id: str) -> Warehouse | None: ...

    def fetch_warehouse_availability(
        self,
        warehouse_id: str,
        space_type: SpaceType,
    ) -> WarehouseAvailability | None: ...

    def fetch_session_user(self, token: str) -> SessionUser | None: ...


def create_store(settings: Settings | None = None) -> SupabaseStore:
    """Create a SupabaseStore from settings (default: the environment).

    Raises ConfigurationError if the store URL or key is not set.
    """
    settings = settings or Settings.from_env()
    store = SupabaseStore.from_settings(settings)
    logger.info("Using hosted store at %s", settings.supabase_url)
    return store
