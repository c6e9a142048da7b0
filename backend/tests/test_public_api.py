"""Tests for the public API surface of the warehouse_tariffs package.

Verifies that consumers can import everything they need from the top-level
package, use the default factories for quick setup, and build resolvers
from any store exposing the read interface.
"""

from __future__ import annotations

import json
from datetime import date

from warehouse_tariffs import (
    CostResult,
    OccupantInput,
    PricingRepository,
    Quote,
    QuoteCalculator,
    QuoteRequest,
    RateResolver,
    create_default_quote_calculator,
    create_default_resolver,
    create_quote_calculator_from_store,
    create_resolver_from_store,
)
from warehouse_tariffs.data.memory import InMemoryStore
from warehouse_tariffs.models.pricing import EwaSettings, SystemSettings

# ---------------------------------------------------------------------------
# Factory tests
# ---------------------------------------------------------------------------


class TestDefaultFactories:
    def test_returns_resolver(self) -> None:
        resolver = create_default_resolver()
        assert isinstance(resolver, RateResolver)
        assert isinstance(resolver.repository, PricingRepository)
        assert len(resolver.repository) == 14

    def test_resolver_prices_occupant(self) -> None:
        result = create_default_resolver().resolve_cost(OccupantInput(area_occupied=100))
        assert isinstance(result, CostResult)
        assert result.monthly_cost > 0

    def test_returns_quote_calculator(self) -> None:
        calculator = create_default_quote_calculator()
        assert isinstance(calculator, QuoteCalculator)
        quote = calculator.quote(
            QuoteRequest(
                client_name="Public API",
                area=50,
                lease_start=date(2025, 1, 1),
                lease_end=date(2025, 3, 2),
            )
        )
        assert isinstance(quote, Quote)
        assert quote.grand_total > 0


class TestStoreFactories:
    def test_resolver_uses_store_settings(self) -> None:
        store = InMemoryStore(
            ewa_settings=EwaSettings(estimated_fixed_monthly_charges=25),
            system_settings=SystemSettings(minimum_charge=200),
        )
        resolver = create_resolver_from_store(store)
        assert resolver.ewa_monthly == 25
        assert resolver.minimum_charge == 200
        result = resolver.resolve_cost(OccupantInput(area_occupied=10))
        assert result.monthly_cost == 200

    def test_resolver_without_ewa_row(self) -> None:
        resolver = create_resolver_from_store(InMemoryStore(ewa_settings=None))
        assert resolver.ewa_monthly == 15.0

    def test_quote_calculator_uses_store_vat(self) -> None:
        store = InMemoryStore(system_settings=SystemSettings(vat_rate=0))
        quote = create_quote_calculator_from_store(store).quote(
            QuoteRequest(
                client_name="Zero VAT",
                area=100,
                lease_start=date(2025, 1, 1),
                lease_end=date(2025, 2, 1),
            )
        )
        assert quote.vat_amount == 0
        assert quote.grand_total == quote.subtotal


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


class TestJsonOutput:
    def test_cost_result_json_is_consumable(self) -> None:
        result = create_default_resolver().resolve_cost(OccupantInput(area_occupied=100))
        data = json.loads(result.model_dump_json(by_alias=True))
        for key in (
            "hasWarehouse",
            "chargeableArea",
            "ratePerSqm",
            "monthlyCost",
            "annualCost",
            "ewaMonthly",
            "ewaAnnual",
            "totalMonthly",
            "totalAnnual",
            "floorType",
            "pricingDetails",
            "error",
        ):
            assert key in data

    def test_cost_result_round_trip(self) -> None:
        original = create_default_resolver().resolve_cost(OccupantInput(area_occupied=640))
        restored = CostResult.model_validate_json(original.model_dump_json(by_alias=True))
        assert restored == original
