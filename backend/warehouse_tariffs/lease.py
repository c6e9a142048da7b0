"""Lease period arithmetic: billable months/days and tenure classification."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from warehouse_tariffs.models.enums import Tenure

if TYPE_CHECKING:
    from datetime import date

# Tenure classification always uses a 30-day month, independent of the
# operator's billing ``days_per_month`` setting.
_TENURE_MONTH_DAYS = 30
_LONG_TENURE_MONTHS = 12


@dataclass(frozen=True)
class LeasePeriod:
    """A lease split into whole billing months plus leftover days."""

    total_days: int
    months_full: int
    days_extra: int
    days_per_month: int = 30

    @property
    def billable_months(self) -> float:
        """Fractional month count, used to prorate monthly charges."""
        return self.months_full + self.days_extra / self.days_per_month


def lease_period(start: date, end: date, days_per_month: int = 30) -> LeasePeriod:
    """Split ``[start, end)`` into full months and extra days.

    Raises:
        ValueError: If ``end`` is not after ``start`` or ``days_per_month``
            is not positive.
    """
    if days_per_month <= 0:
        msg = f"days_per_month must be positive, got {days_per_month}"
        raise ValueError(msg)
    total_days = (end - start).days
    if total_days <= 0:
        msg = f"Lease end {end} must be after lease start {start}"
        raise ValueError(msg)
    months_full, days_extra = divmod(total_days, days_per_month)
    return LeasePeriod(
        total_days=total_days,
        months_full=months_full,
        days_extra=days_extra,
        days_per_month=days_per_month,
    )


def tenure_for_lease(entry: date, exit_: date) -> Tenure:
    """Classify a lease by duration.

    Under 30 days is Very Short; twelve or more (30-day, rounded up)
    months is Long; anything in between is Short.
    """
    days = (exit_ - entry).days
    if days < _TENURE_MONTH_DAYS:
        return Tenure.VERY_SHORT
    months = math.ceil(days / _TENURE_MONTH_DAYS)
    if months >= _LONG_TENURE_MONTHS:
        return Tenure.LONG
    return Tenure.SHORT
