"""Tests for SupabaseStore: HTTP is served by httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from warehouse_tariffs.config import Settings
from warehouse_tariffs.data.store import AVAILABILITY_RPC, SupabaseStore
from warehouse_tariffs.exceptions import ConfigurationError, DataStoreError
from warehouse_tariffs.models.enums import SpaceType, Tenure, UserRole

BASE_URL = "https://example.supabase.co"

Handler = Callable[[httpx.Request], httpx.Response]


def _store(handler: Handler) -> SupabaseStore:
    return SupabaseStore(BASE_URL, "test-key", transport=httpx.MockTransport(handler))


def _tables(tables: dict[str, list[dict]]) -> Handler:
    """Serve ``GET /rest/v1/<table>`` from a dict of rows."""

    def handler(request: httpx.Request) -> httpx.Response:
        table = request.url.path.removeprefix("/rest/v1/")
        if table not in tables:
            return httpx.Response(404, json={"message": "not found"})
        return httpx.Response(200, json=tables[table])

    return handler


_RATE_ROW = {
    "id": "r1",
    "space_type": "Ground Floor",
    "area_band_name": "Small units",
    "area_band_min": 1,
    "area_band_max": 999,
    "tenure": "Short",
    "monthly_rate_per_sqm": 3.5,
    "daily_rate_per_sqm": 0.117,
    "min_chargeable_area": 30,
    "active": True,
}


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_sends_api_key_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        _store(handler).fetch_occupants()
        [request] = seen
        assert request.headers["apikey"] == "test-key"
        assert request.headers["Authorization"] == "Bearer test-key"
        assert str(request.url).startswith(f"{BASE_URL}/rest/v1/warehouse_occupants")

    def test_from_settings_requires_credentials(self) -> None:
        with pytest.raises(ConfigurationError):
            SupabaseStore.from_settings(Settings())

    def test_context_manager_closes(self) -> None:
        with _store(_tables({})) as store:
            assert isinstance(store, SupabaseStore)


# ---------------------------------------------------------------------------
# Pricing data
# ---------------------------------------------------------------------------


class TestPricingData:
    def test_active_rates_parsed(self) -> None:
        store = _store(_tables({"pricing_rates": [_RATE_ROW]}))
        [rate] = store.fetch_active_pricing_rates()
        assert rate.space_type is SpaceType.GROUND_FLOOR
        assert rate.tenure is Tenure.SHORT
        assert rate.monthly_rate_per_sqm == 3.5

    def test_rate_query_filters_active(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        _store(handler).fetch_active_pricing_rates()
        assert seen[0].url.params["active"] == "eq.true"

    def test_malformed_rows_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        bad = {**_RATE_ROW, "id": "r2", "tenure": "Forever"}
        store = _store(_tables({"pricing_rates": [_RATE_ROW, bad]}))
        rates = store.fetch_active_pricing_rates()
        assert [rate.id for rate in rates] == ["r1"]
        assert "Skipping malformed pricing_rates row r2" in caplog.text

    def test_ewa_settings(self) -> None:
        store = _store(_tables({"ewa_settings": [{"estimated_fixed_monthly_charges": 18}]}))
        settings = store.fetch_ewa_settings()
        assert settings is not None
        assert settings.monthly_estimate == 18

    def test_missing_ewa_settings_is_none(self) -> None:
        store = _store(_tables({"ewa_settings": []}))
        assert store.fetch_ewa_settings() is None

    def test_malformed_ewa_settings_raises(self) -> None:
        rows = [{"estimated_fixed_monthly_charges": "plenty"}]
        with pytest.raises(DataStoreError, match="ewa_settings"):
            _store(_tables({"ewa_settings": rows})).fetch_ewa_settings()

    def test_system_settings(self) -> None:
        rows = [{"setting_key": "minimum_charge", "setting_value": "125"}]
        store = _store(_tables({"system_settings": rows}))
        assert store.fetch_system_settings().minimum_charge == 125

    def test_optional_services(self) -> None:
        rows = [{"name": "Customs Clearance", "pricing_type": "on_request"}]
        store = _store(_tables({"optional_services": rows}))
        [service] = store.fetch_optional_services()
        assert service.name == "Customs Clearance"


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_http_error_raises_data_store_error(self) -> None:
        store = _store(lambda request: httpx.Response(500, json={"message": "boom"}))
        with pytest.raises(DataStoreError, match="HTTP 500"):
            store.fetch_occupants()

    def test_transport_error_raises_data_store_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DataStoreError, match="connection refused"):
            _store(handler).fetch_active_pricing_rates()

    def test_invalid_json_raises_data_store_error(self) -> None:
        store = _store(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(DataStoreError):
            store.fetch_occupants()

    def test_non_list_payload_raises(self) -> None:
        store = _store(lambda request: httpx.Response(200, json={"rows": []}))
        with pytest.raises(DataStoreError, match="expected a list"):
            store.fetch_occupants()


# ---------------------------------------------------------------------------
# Warehouses
# ---------------------------------------------------------------------------


class TestWarehouses:
    def test_fetch_warehouse(self) -> None:
        rows = [{"id": "wh-1", "name": "Sitra A", "total_space": 2000}]
        warehouse = _store(_tables({"warehouses": rows})).fetch_warehouse("wh-1")
        assert warehouse is not None
        assert warehouse.total_space == 2000

    def test_unknown_warehouse_is_none(self) -> None:
        assert _store(_tables({"warehouses": []})).fetch_warehouse("nope") is None

    def test_availability_rpc(self) -> None:
        payloads: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == f"/rest/v1/rpc/{AVAILABILITY_RPC}"
            payloads.append(json.loads(request.content))
            return httpx.Response(
                200,
                json=[
                    {
                        "total_space": 500,
                        "occupied_space": 100,
                        "available_space": 400,
                        "utilization_percentage": 20,
                    }
                ],
            )

        result = _store(handler).fetch_warehouse_availability("wh-1", SpaceType.MEZZANINE)
        assert result is not None
        assert result.available_space == 400
        assert payloads == [{"warehouse_uuid": "wh-1", "space_type_param": "Mezzanine"}]

    def test_empty_availability_is_none(self) -> None:
        store = _store(lambda request: httpx.Response(200, json=[]))
        assert store.fetch_warehouse_availability("wh-1", SpaceType.GROUND_FLOOR) is None

    def test_availability_without_warehouse_raises(self) -> None:
        row = {
            "total_space": None,
            "occupied_space": 0,
            "available_space": None,
            "utilization_percentage": 0,
        }
        store = _store(lambda request: httpx.Response(200, json=[row]))
        with pytest.raises(DataStoreError, match="Malformed row"):
            store.fetch_warehouse_availability("nope", SpaceType.GROUND_FLOOR)

    def test_malformed_warehouse_raises(self) -> None:
        rows = [{"id": "wh-1", "total_space": "lots"}]
        with pytest.raises(DataStoreError, match="warehouses"):
            _store(_tables({"warehouses": rows})).fetch_warehouse("wh-1")

    def test_mezzanine_occupied_read(self) -> None:
        rows = [{"id": "wh-1", "mezzanine_space": 500, "mezzanine_occupied": 120}]
        warehouse = _store(_tables({"warehouses": rows})).fetch_warehouse("wh-1")
        assert warehouse is not None
        assert warehouse.mezzanine_occupied == 120


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def _session_row(expires_at: datetime | None, **user: object) -> dict:
    return {
        "expires_at": expires_at.isoformat() if expires_at else None,
        "users": {
            "id": "u1",
            "email": "admin@sitra.bh",
            "name": "Admin",
            "role": "ADMIN",
            "is_active": True,
            **user,
        },
    }


class TestSessions:
    def test_valid_session(self) -> None:
        row = _session_row(datetime.now(UTC) + timedelta(hours=1))
        user = _store(_tables({"user_sessions": [row]})).fetch_session_user("tok")
        assert user is not None
        assert user.role is UserRole.ADMIN

    def test_session_without_expiry(self) -> None:
        user = _store(_tables({"user_sessions": [_session_row(None)]})).fetch_session_user("tok")
        assert user is not None

    def test_expired_session(self) -> None:
        row = _session_row(datetime.now(UTC) - timedelta(minutes=1))
        assert _store(_tables({"user_sessions": [row]})).fetch_session_user("tok") is None

    def test_unknown_token(self) -> None:
        assert _store(_tables({"user_sessions": []})).fetch_session_user("tok") is None

    def test_unusable_user_record(self) -> None:
        row = _session_row(None, role="SUPERUSER")
        assert _store(_tables({"user_sessions": [row]})).fetch_session_user("tok") is None

    def test_token_sent_as_filter(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        _store(handler).fetch_session_user("abc123")
        assert seen[0].url.params["session_token"] == "eq.abc123"
