"""Quote calculator: prices a whole lease, including EWA, services and VAT."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING

from warehouse_tariffs.exceptions import InvalidQuoteError, NoApplicableRateError
from warehouse_tariffs.lease import lease_period, tenure_for_lease
from warehouse_tariffs.models.enums import EwaMode, ServicePricingType
from warehouse_tariffs.models.quote import Quote, ServiceLine
from warehouse_tariffs.resolver import pricing_details

if TYPE_CHECKING:
    from collections.abc import Iterable

    from warehouse_tariffs.models.pricing import EwaSettings, OptionalService, SystemSettings
    from warehouse_tariffs.models.quote import QuoteRequest, ServiceSelection
    from warehouse_tariffs.resolver import RateResolver

logger = logging.getLogger(__name__)

_MONEY_DECIMALS = 3


def _money(amount: float) -> float:
    """Round to fils (1/1000 BHD)."""
    return round(amount, _MONEY_DECIMALS)


class QuoteCalculator:
    """Builds rental quotes on top of a RateResolver.

    Args:
        resolver: Resolver used for rate lookup and the monthly rent floors.
        system_settings: VAT rate, days per month and quote validity.
        ewa_settings: Deposit and installation fee for dedicated meters.
        services: The optional-service catalogue; inactive entries are ignored.
    """

    def __init__(
        self,
        resolver: RateResolver,
        system_settings: SystemSettings,
        ewa_settings: EwaSettings | None = None,
        services: Iterable[OptionalService] = (),
    ) -> None:
        self._resolver = resolver
        self._settings = system_settings
        self._ewa_settings = ewa_settings
        self._services = {
            service.name.casefold(): service for service in services if service.active
        }

    def quote(self, request: QuoteRequest, issued_on: date | None = None) -> Quote:
        """Price a lease from ``lease_start`` (inclusive) to ``lease_end``.

        Raises:
            InvalidQuoteError: If the lease period is empty or a requested
                service is unknown.
            NoApplicableRateError: If no active rate covers the space.
        """
        issued_on = issued_on or date.today()

        try:
            period = lease_period(
                request.lease_start,
                request.lease_end,
                self._settings.days_per_month,
            )
        except ValueError as exc:
            raise InvalidQuoteError(str(exc)) from exc

        tenure = request.tenure or tenure_for_lease(request.lease_start, request.lease_end)
        space_type = request.floor_type.space_type

        rate = self._resolver.find_rate(request.area, space_type, tenure)
        if rate is None:
            msg = f"No pricing rate for {request.area} m² {space_type} ({tenure})"
            raise NoApplicableRateError(msg)

        # Rent: whole months at the floored monthly rent, leftover days at
        # the daily rate, never less than one minimum charge in total.
        chargeable_area, monthly_rent = self._resolver.monthly_rent(request.area, rate)
        base_rent = (
            monthly_rent * period.months_full
            + chargeable_area * rate.daily_rate_per_sqm * period.days_extra
        )
        base_rent = max(base_rent, self._resolver.minimum_charge)

        ewa_cost = self._ewa_cost(request.ewa_mode, period.billable_months)

        service_lines = [self._service_line(selection) for selection in request.services]
        services_total = sum(line.amount for line in service_lines)

        subtotal = base_rent + ewa_cost + services_total
        discount_amount = subtotal * request.discount_percent / 100
        vat_amount = (subtotal - discount_amount) * self._settings.vat_rate / 100
        grand_total = subtotal - discount_amount + vat_amount

        logger.info(
            "Quote for %s: %s m² %s %s, %d months + %d days, total %.3f",
            request.client_name,
            request.area,
            space_type,
            tenure,
            period.months_full,
            period.days_extra,
            grand_total,
        )

        return Quote(
            client_name=request.client_name,
            client_email=request.client_email,
            warehouse_id=request.warehouse_id,
            space_type=space_type,
            area_input=request.area,
            chargeable_area=chargeable_area,
            tenure=rate.tenure,
            lease_start=request.lease_start,
            lease_end=request.lease_end,
            months_full=period.months_full,
            days_extra=period.days_extra,
            monthly_rent=_money(monthly_rent),
            base_rent=_money(base_rent),
            ewa_mode=request.ewa_mode,
            ewa_cost=_money(ewa_cost),
            service_lines=service_lines,
            services_total=_money(services_total),
            subtotal=_money(subtotal),
            discount_percent=request.discount_percent,
            discount_amount=_money(discount_amount),
            vat_rate=self._settings.vat_rate,
            vat_amount=_money(vat_amount),
            grand_total=_money(grand_total),
            issued_on=issued_on,
            valid_until=issued_on + timedelta(days=self._settings.quote_validity_days),
            pricing_details=pricing_details(rate),
        )

    def _ewa_cost(self, mode: EwaMode, billable_months: float) -> float:
        """Recurring flat EWA charges, plus one-off fees for a dedicated meter.

        Metered consumption on a dedicated meter is billed separately and is
        not part of the quote.
        """
        cost = self._resolver.ewa_monthly * billable_months
        if mode is EwaMode.DEDICATED_METER and self._ewa_settings is not None:
            cost += (
                self._ewa_settings.estimated_setup_deposit
                + self._ewa_settings.estimated_installation_fee
            )
        return cost

    def _service_line(self, selection: ServiceSelection) -> ServiceLine:
        service = self._services.get(selection.name.casefold())
        if service is None:
            msg = f"Unknown or inactive service '{selection.name}'"
            raise InvalidQuoteError(msg)

        on_request = service.pricing_type is ServicePricingType.ON_REQUEST or (
            service.rate is None and not service.is_free
        )
        if service.is_free or on_request:
            amount = 0.0
        else:
            amount = (service.rate or 0.0) * selection.quantity

        return ServiceLine(
            name=service.name,
            pricing_type=service.pricing_type,
            unit=service.unit,
            rate=service.rate,
            quantity=selection.quantity,
            amount=_money(amount),
            on_request=on_request,
        )
