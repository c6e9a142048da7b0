"""Formatting helpers for cost and quote output.

Amounts are Bahraini dinars, which carry three decimal places (fils), so
every money string keeps all three (e.g. 'BHD 1,234.500').
"""

from __future__ import annotations


def format_bhd(amount: float) -> str:
    """Format an amount as 'BHD 1,234.500'."""
    return f"BHD {amount:,.3f}"


def format_area(area: float) -> str:
    """Format an area in square metres.

    Whole areas drop the decimals ('1,200 m²'); fractional areas keep two
    ('87.50 m²').
    """
    if float(area).is_integer():
        return f"{area:,.0f} m²"
    return f"{area:,.2f} m²"


def format_rate(rate_per_sqm: float) -> str:
    """Format a monthly rate as 'BHD 3.500 / m² / month'."""
    return f"{format_bhd(rate_per_sqm)} / m² / month"
