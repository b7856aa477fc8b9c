"""
Formatting Utilities for EstateHub Frontends

Helper functions for formatting data display.
"""
from datetime import datetime
from typing import Optional, Union

CRORE = 10_000_000
LAKH = 100_000

Number = Union[int, float, str]


def _to_float(value: Number) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_price(price: Optional[Number]) -> str:
    """
    Format a rupee amount using crore and lakh units.

    Args:
        price: Amount in rupees; numeric strings are accepted

    Returns:
        Formatted price (e.g., "₹1.2 Cr", "₹45.0 L", "₹85,000")
    """
    amount = _to_float(price)
    if amount is None:
        return "N/A"
    if amount >= CRORE:
        return f"₹{amount / CRORE:.1f} Cr"
    if amount >= LAKH:
        return f"₹{amount / LAKH:.1f} L"
    return f"₹{amount:,.0f}"


def format_price_per_sqft(price_per_sqft: Optional[Number]) -> str:
    """
    Format a rate per square foot.

    Returns:
        Formatted rate (e.g., "₹12,500/sq ft")
    """
    amount = _to_float(price_per_sqft)
    if amount is None:
        return "N/A"
    return f"₹{amount:,.0f}/sq ft"


def format_area(area: Optional[int]) -> str:
    """
    Format built-up area.

    Returns:
        Formatted area (e.g., "1,200 sq ft")
    """
    if area is None:
        return "N/A"
    return f"{area:,} sq ft"


def format_location(location: Optional[str], city: Optional[str], state: Optional[str] = None) -> str:
    """
    Join locality, city, and state, skipping blanks.

    Returns:
        Location string (e.g., "Andheri West, Mumbai, Maharashtra")
    """
    parts = [part for part in (location, city, state) if part]
    return ", ".join(parts) if parts else "N/A"


def format_datetime(datetime_value: Optional[Union[datetime, str]]) -> str:
    """
    Format datetime as DD MMM YYYY, HH:MM AM/PM.

    Args:
        datetime_value: Datetime object or ISO 8601 string

    Returns:
        Formatted datetime string
    """
    if datetime_value is None:
        return "N/A"
    if isinstance(datetime_value, str):
        try:
            datetime_value = datetime.fromisoformat(datetime_value.replace("Z", "+00:00"))
        except ValueError:
            return datetime_value
    return datetime_value.strftime("%d %b %Y, %I:%M %p")
