"""In-memory store with the same read interface as ``SupabaseStore``.

Defaults to the seed price list and settings, which makes it usable for
local runs of the API without a hosted project.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from warehouse_tariffs.availability import compute_availability
from warehouse_tariffs.data.seed import (
    DEFAULT_EWA_SETTINGS,
    DEFAULT_SYSTEM_SETTINGS,
    SEED_OPTIONAL_SERVICES,
    SEED_PRICING_RATES,
)
from warehouse_tariffs.models.occupant import OccupantInput

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from warehouse_tariffs.models.account import SessionUser
    from warehouse_tariffs.models.enums import SpaceType
    from warehouse_tariffs.models.pricing import (
        EwaSettings,
        OptionalService,
        PricingRate,
        SystemSettings,
    )
    from warehouse_tariffs.models.warehouse import Warehouse, WarehouseAvailability


class InMemoryStore:
    """Store backed by plain Python collections."""

    def __init__(
        self,
        *,
        pricing_rates: Iterable[PricingRate] = SEED_PRICING_RATES,
        ewa_settings: EwaSettings | None = DEFAULT_EWA_SETTINGS,
        system_settings: SystemSettings = DEFAULT_SYSTEM_SETTINGS,
        optional_services: Iterable[OptionalService] = SEED_OPTIONAL_SERVICES,
        occupants: Iterable[Mapping[str, Any]] = (),
        users: Iterable[Mapping[str, Any]] = (),
        warehouses: Iterable[Warehouse] = (),
        sessions: Mapping[str, SessionUser] | None = None,
    ) -> None:
        self._pricing_rates = list(pricing_rates)
        self._ewa_settings = ewa_settings
        self._system_settings = system_settings
        self._optional_services = list(optional_services)
        self._occupants = [dict(row) for row in occupants]
        self._users = [dict(row) for row in users]
        self._warehouses = {warehouse.id: warehouse for warehouse in warehouses}
        self._sessions = dict(sessions or {})

    def fetch_active_pricing_rates(self) -> list[PricingRate]:
        return [rate for rate in self._pricing_rates if rate.active]

    def fetch_ewa_settings(self) -> EwaSettings | None:
        return self._ewa_settings

    def fetch_system_settings(self) -> SystemSettings:
        return self._system_settings

    def fetch_optional_services(self) -> list[OptionalService]:
        return [service for service in self._optional_services if service.active]

    def fetch_occupants(self) -> list[dict[str, Any]]:
        return [dict(row) for row in self._occupants]

    def fetch_users_with_space(self) -> list[dict[str, Any]]:
        return [dict(row) for row in self._users]

    def fetch_warehouse(self, warehouse_id: str) -> Warehouse | None:
        return self._warehouses.get(warehouse_id)

    def fetch_warehouse_availability(
        self,
        warehouse_id: str,
        space_type: SpaceType,
    ) -> WarehouseAvailability | None:
        warehouse = self._warehouses.get(warehouse_id)
        if warehouse is None:
            return None
        occupants = [
            OccupantInput.from_record(row)
            for row in self._occupants
            if str(row.get("warehouse_id")) == warehouse_id
        ]
        return compute_availability(warehouse, occupants, space_type)

    def fetch_session_user(self, token: str) -> SessionUser | None:
        return self._sessions.get(token)
