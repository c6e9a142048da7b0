"""Custom exception hierarchy for the warehouse tariff service."""

from __future__ import annotations


class WarehouseTariffsError(Exception):
    """Base exception for all warehouse tariff errors."""


class ConfigurationError(WarehouseTariffsError):
    """Raised when required settings are missing or malformed."""


class DataStoreError(WarehouseTariffsError):
    """Raised when the hosted data store cannot be read."""


class QuoteError(WarehouseTariffsError):
    """Raised when a rental quote cannot be produced."""


class InvalidQuoteError(QuoteError):
    """Raised when a quote request is inconsistent (dates, services, discount)."""


class NoApplicableRateError(QuoteError):
    """Raised when no active pricing row covers the requested space."""
