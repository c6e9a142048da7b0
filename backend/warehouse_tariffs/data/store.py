"""Client for the hosted data store (Supabase PostgREST API).

Only the reads the tariff service needs are implemented. Transport and HTTP
failures surface as ``DataStoreError``, as does a malformed row from a
single-row read. The resolver itself never talks to the store.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import ValidationError

from warehouse_tariffs.exceptions import DataStoreError
from warehouse_tariffs.models.account import SessionUser
from warehouse_tariffs.models.pricing import (
    EwaSettings,
    OptionalService,
    PricingRate,
    SystemSettings,
)
from warehouse_tariffs.models.warehouse import Warehouse, WarehouseAvailability

if TYPE_CHECKING:
    from pydantic import BaseModel

    from warehouse_tariffs.config import Settings
    from warehouse_tariffs.models.enums import SpaceType

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound="BaseModel")

AVAILABILITY_RPC = "calculate_warehouse_availability_for_user"

_USER_COLUMNS = (
    "id,email,name,role,is_active,warehouse_id,space_occupied,floor_type,"
    "entry_date,expected_exit_date,warehouse_status,created_at"
)


class SupabaseStore:
    """Synchronous PostgREST client over ``httpx``.

    Args:
        base_url: Project URL, e.g. ``https://<ref>.supabase.co``.
        api_key: Service-role (or anon) key, sent as ``apikey`` and bearer token.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> SupabaseStore:
        settings.require_store()
        return cls(
            settings.supabase_url,
            settings.supabase_key,
            timeout=settings.timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> SupabaseStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        try:
            response = self._client.get(f"/{table}", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            msg = f"Reading '{table}' failed with HTTP {exc.response.status_code}"
            raise DataStoreError(msg) from exc
        except (httpx.HTTPError, ValueError) as exc:
            msg = f"Reading '{table}' failed: {exc}"
            raise DataStoreError(msg) from exc
        if not isinstance(data, list):
            msg = f"Reading '{table}' returned {type(data).__name__}, expected a list"
            raise DataStoreError(msg)
        return data

    def _rpc(self, function: str, payload: dict[str, Any]) -> Any:
        try:
            response = self._client.post(f"/rpc/{function}", json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            msg = f"RPC '{function}' failed with HTTP {exc.response.status_code}"
            raise DataStoreError(msg) from exc
        except (httpx.HTTPError, ValueError) as exc:
            msg = f"RPC '{function}' failed: {exc}"
            raise DataStoreError(msg) from exc

    @staticmethod
    def _parse_rows(model: type[BaseModel], rows: list[dict[str, Any]], table: str) -> list[Any]:
        """Validate rows into ``model``, skipping (and logging) malformed ones."""
        parsed = []
        for row in rows:
            try:
                parsed.append(model.model_validate(row))
            except ValidationError as exc:
                logger.warning(
                    "Skipping malformed %s row %s: %s",
                    table,
                    row.get("id"),
                    exc.errors(include_url=False),
                )
        return parsed

    # ------------------------------------------------------------------
    # Pricing data
    # ------------------------------------------------------------------

    def fetch_active_pricing_rates(self) -> list[PricingRate]:
        rows = self._select(
            "pricing_rates",
            {"select": "*", "active": "eq.true", "order": "area_band_min.asc"},
        )
        return self._parse_rows(PricingRate, rows, "pricing_rates")

    def fetch_ewa_settings(self) -> EwaSettings | None:
        rows = self._select("ewa_settings", {"select": "*", "limit": "1"})
        if not rows:
            logger.warning("No EWA settings row found; using defaults")
            return None
        return _validate_row(EwaSettings, rows[0], "ewa_settings")

    def fetch_system_settings(self) -> SystemSettings:
        rows = self._select("system_settings", {"select": "setting_key,setting_value"})
        return SystemSettings.from_rows(rows)

    def fetch_optional_services(self) -> list[OptionalService]:
        rows = self._select(
            "optional_services",
            {"select": "*", "active": "eq.true", "order": "name.asc"},
        )
        return self._parse_rows(OptionalService, rows, "optional_services")

    # ------------------------------------------------------------------
    # Occupants and warehouses
    # ------------------------------------------------------------------

    def fetch_occupants(self) -> list[dict[str, Any]]:
        """Active ``warehouse_occupants`` rows, newest first."""
        return self._select(
            "warehouse_occupants",
            {"select": "*", "status": "eq.active", "order": "created_at.desc"},
        )

    def fetch_users_with_space(self) -> list[dict[str, Any]]:
        """Active USER accounts with their booked space, by name."""
        return self._select(
            "unified_users",
            {
                "select": _USER_COLUMNS,
                "role": "eq.USER",
                "is_active": "eq.true",
                "order": "name.asc",
            },
        )

    def fetch_warehouse(self, warehouse_id: str) -> Warehouse | None:
        rows = self._select("warehouses", {"select": "*", "id": f"eq.{warehouse_id}", "limit": "1"})
        if not rows:
            return None
        return _validate_row(Warehouse, rows[0], "warehouses")

    def fetch_warehouse_availability(
        self,
        warehouse_id: str,
        space_type: SpaceType,
    ) -> WarehouseAvailability | None:
        """Availability from the store's stored procedure, or None if it returned nothing."""
        data = self._rpc(
            AVAILABILITY_RPC,
            {"warehouse_uuid": warehouse_id, "space_type_param": str(space_type)},
        )
        if not data:
            return None
        row = data[0] if isinstance(data, list) else data
        return _validate_row(WarehouseAvailability, row, f"rpc/{AVAILABILITY_RPC}")

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def fetch_session_user(self, token: str) -> SessionUser | None:
        """The user owning an unexpired session token, or None."""
        rows = self._select(
            "user_sessions",
            {
                "select": "expires_at,users(id,email,name,role,is_active)",
                "session_token": f"eq.{token}",
                "limit": "1",
            },
        )
        if not rows:
            return None
        session = rows[0]
        if _is_expired(session.get("expires_at")):
            return None
        user = session.get("users")
        if not user:
            return None
        try:
            return SessionUser.model_validate(user)
        except ValidationError:
            logger.warning("Session user %s has an unusable record", user.get("id"))
            return None


def _validate_row(model: type[ModelT], row: Any, source: str) -> ModelT:
    """Validate a single-row read; a malformed row is a store failure."""
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        msg = f"Malformed row from '{source}': {exc.errors(include_url=False)}"
        raise DataStoreError(msg) from exc


def _is_expired(expires_at: Any) -> bool:
    if not expires_at:
        return False
    try:
        expiry = datetime.fromisoformat(str(expires_at))
    except ValueError:
        logger.warning("Treating session with unparsable expiry %r as expired", expires_at)
        return True
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=UTC)
    return expiry <= datetime.now(UTC)
