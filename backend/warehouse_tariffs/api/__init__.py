"""HTTP API for the warehouse tariff service."""
