"""Pricing data layer: seed price list, repository and store clients."""

from warehouse_tariffs.data.memory import InMemoryStore
from warehouse_tariffs.data.repository import PricingRepository
from warehouse_tariffs.data.store import SupabaseStore

__all__ = [
    "InMemoryStore",
    "PricingRepository",
    "SupabaseStore",
]
