"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from warehouse_tariffs.config import Settings, load_environment

load_environment()

from warehouse_tariffs.availability import availability_from_warehouse_row
from warehouse_tariffs.exceptions import (
    ConfigurationError,
    DataStoreError,
    QuoteError,
    WarehouseTariffsError,
)
from warehouse_tariffs.factory import (
    create_quote_calculator_from_store,
    create_resolver_from_store,
)
from warehouse_tariffs.models.account import SessionUser  # noqa: TCH001 (FastAPI resolves at runtime)
from warehouse_tariffs.models.enums import SpaceType, UserRole
from warehouse_tariffs.models.occupant import OccupantInput
from warehouse_tariffs.models.quote import QuoteRequest  # noqa: TCH001

if TYPE_CHECKING:
    from warehouse_tariffs.api.deps import TariffStore

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"
SESSION_COOKIE = "sessionToken"

_ADMIN_ROLES = (UserRole.ADMIN, UserRole.MANAGER)
_SUPPORT_ROLES = (UserRole.SUPPORT, UserRole.MANAGER, UserRole.ADMIN)


def _session_token(request: Request) -> str | None:
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def _require_role(user: SessionUser, roles: tuple[UserRole, ...]) -> None:
    if not user.has_role(*roles):
        logger.info("User %s with role %s denied access", user.id, user.role)
        raise HTTPException(status_code=403, detail="Access denied")


def create_app(
    *,
    store: TariffStore | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    store
        Optional pre-built data store for dependency injection (e.g. tests
        pass an ``InMemoryStore``). If not provided, a ``SupabaseStore`` is
        created from the environment on first request.
    settings
        Optional settings; defaults to ``Settings.from_env()``.
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="Warehouse Tariffs", version=API_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject fakes
    app.state.store = store

    def _get_store() -> TariffStore:
        current: TariffStore | None = app.state.store
        if current is not None:
            return current
        from warehouse_tariffs.api.deps import create_store

        try:
            current = create_store(settings)
        except ConfigurationError as exc:
            logger.error("Data store is not configured: %s", exc)
            raise HTTPException(
                status_code=503,
                detail="Pricing data store is not configured.",
            ) from exc
        app.state.store = current
        return current

    def _current_user(request: Request) -> SessionUser:
        token = _session_token(request)
        if not token:
            raise HTTPException(status_code=401, detail="No session token")
        try:
            user = _get_store().fetch_session_user(token)
        except DataStoreError as exc:
            logger.exception("Session validation failed")
            raise HTTPException(status_code=500, detail="Session validation failed") from exc
        if user is None:
            raise HTTPException(status_code=401, detail="Invalid session")
        if not user.is_active:
            raise HTTPException(status_code=401, detail="Account not active")
        return user

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": API_VERSION}

    # ------------------------------------------------------------------
    # GET /api/admin/occupant-costs
    # ------------------------------------------------------------------

    @app.get("/api/admin/occupant-costs")
    def occupant_costs(user: SessionUser = Depends(_current_user)) -> dict[str, Any]:
        _require_role(user, _ADMIN_ROLES)
        current = _get_store()
        try:
            resolver = create_resolver_from_store(current)
            occupants = [OccupantInput.from_record(row) for row in current.fetch_occupants()]
        except WarehouseTariffsError as exc:
            logger.exception("Occupant costs failed")
            raise HTTPException(
                status_code=500,
                detail="Failed to calculate occupant costs",
            ) from exc

        report = resolver.summarize(occupants)
        logger.info(
            "Priced %d occupants (%d active, %d without a rate)",
            report.revenue_summary.total_occupants,
            report.revenue_summary.active_occupants,
            report.revenue_summary.pricing_errors,
        )
        dumped = report.model_dump(mode="json", by_alias=True)
        return {
            "occupants": dumped["perOccupant"],
            "revenueSummary": dumped["revenueSummary"],
            "revenueDisplay": report.revenue_summary.to_summary_dict(),
            "pricingRates": [
                rate.model_dump(mode="json") for rate in resolver.repository.rates
            ],
            "ewaMonthly": resolver.ewa_monthly,
            "minimumCharge": resolver.minimum_charge,
        }

    # ------------------------------------------------------------------
    # GET /api/supporter/users-costs
    # ------------------------------------------------------------------

    @app.get("/api/supporter/users-costs")
    def users_costs(user: SessionUser = Depends(_current_user)) -> dict[str, Any]:
        _require_role(user, _SUPPORT_ROLES)
        current = _get_store()
        try:
            resolver = create_resolver_from_store(current)
            users = [OccupantInput.from_record(row) for row in current.fetch_users_with_space()]
        except WarehouseTariffsError as exc:
            logger.exception("User costs failed")
            raise HTTPException(status_code=500, detail="Internal server error") from exc

        report = resolver.summarize(users)
        logger.info("Calculated costs for %d users", len(report.per_occupant))
        dumped = report.model_dump(mode="json", by_alias=True)
        return {
            "users": dumped["perOccupant"],
            "summary": dumped["revenueSummary"],
            "pricingInfo": {
                "ratesLoaded": len(resolver.repository),
                "ewaMonthly": resolver.ewa_monthly,
            },
        }

    # ------------------------------------------------------------------
    # POST /api/costs/resolve
    # ------------------------------------------------------------------

    @app.post("/api/costs/resolve")
    def resolve_cost(
        occupant: OccupantInput,
        user: SessionUser = Depends(_current_user),
    ) -> dict[str, Any]:
        try:
            resolver = create_resolver_from_store(_get_store())
        except WarehouseTariffsError as exc:
            logger.exception("Loading pricing data failed")
            raise HTTPException(status_code=500, detail="Failed to load pricing data") from exc
        result = resolver.resolve_cost(occupant)
        return result.model_dump(mode="json", by_alias=True)

    # ------------------------------------------------------------------
    # POST /api/quotes
    # ------------------------------------------------------------------

    @app.post("/api/quotes")
    def create_quote(
        request: QuoteRequest,
        user: SessionUser = Depends(_current_user),
    ) -> dict[str, Any]:
        try:
            calculator = create_quote_calculator_from_store(_get_store())
        except WarehouseTariffsError as exc:
            logger.exception("Loading pricing data failed")
            raise HTTPException(status_code=500, detail="Failed to load pricing data") from exc
        try:
            quote = calculator.quote(request)
        except QuoteError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {
            **quote.model_dump(mode="json", by_alias=True),
            "summary": quote.to_summary_dict(),
        }

    # ------------------------------------------------------------------
    # GET /api/warehouses/{warehouse_id}/availability
    # ------------------------------------------------------------------

    @app.get("/api/warehouses/{warehouse_id}/availability")
    def warehouse_availability(
        warehouse_id: str,
        space_type: str = "Ground Floor",
        user: SessionUser = Depends(_current_user),
    ) -> dict[str, Any]:
        try:
            parsed_space = SpaceType.parse(space_type)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        current = _get_store()
        try:
            availability = current.fetch_warehouse_availability(warehouse_id, parsed_space)
        except DataStoreError:
            logger.warning(
                "Availability RPC failed for warehouse %s, using warehouse row",
                warehouse_id,
                exc_info=True,
            )
            availability = None

        if availability is None:
            try:
                warehouse = current.fetch_warehouse(warehouse_id)
            except DataStoreError as exc:
                logger.exception("Reading warehouse %s failed", warehouse_id)
                raise HTTPException(
                    status_code=500,
                    detail="Failed to calculate availability",
                ) from exc
            if warehouse is None:
                raise HTTPException(status_code=404, detail="Warehouse not found")
            availability = availability_from_warehouse_row(warehouse, parsed_space)

        return {
            "warehouseId": warehouse_id,
            "spaceType": str(parsed_space),
            **availability.model_dump(mode="json"),
        }

    return app
