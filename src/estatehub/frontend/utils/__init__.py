"""
Frontend Utilities

Helper modules for API client and formatting.
"""
from src.estatehub.frontend.utils.api_client import APIClient, APIError, AuthContext
from src.estatehub.frontend.utils.formatting import (
    format_area,
    format_datetime,
    format_location,
    format_price,
    format_price_per_sqft,
)

__all__ = [
    "APIClient",
    "APIError",
    "AuthContext",
    "format_area",
    "format_datetime",
    "format_location",
    "format_price",
    "format_price_per_sqft",
]
