"""
Tests for display formatting helpers.
"""
from datetime import datetime

from src.estatehub.frontend.utils.formatting import (
    format_area,
    format_datetime,
    format_location,
    format_price,
    format_price_per_sqft,
)


class TestFormatPrice:
    """Tests for format_price."""

    def test_crore(self):
        assert format_price(12500000) == "₹1.2 Cr"
        assert format_price(10000000) == "₹1.0 Cr"

    def test_lakh(self):
        assert format_price(4500000) == "₹45.0 L"
        assert format_price("100000") == "₹1.0 L"

    def test_small_amounts(self):
        assert format_price(85000) == "₹85,000"

    def test_missing(self):
        assert format_price(None) == "N/A"
        assert format_price("abc") == "N/A"


def test_format_price_per_sqft():
    assert format_price_per_sqft(12500) == "₹12,500/sq ft"
    assert format_price_per_sqft(None) == "N/A"


def test_format_area():
    assert format_area(1200) == "1,200 sq ft"
    assert format_area(None) == "N/A"


def test_format_location():
    assert format_location("Andheri West", "Mumbai", "Maharashtra") == "Andheri West, Mumbai, Maharashtra"
    assert format_location("Andheri West", "Mumbai") == "Andheri West, Mumbai"
    assert format_location(None, None) == "N/A"


def test_format_datetime():
    assert format_datetime(datetime(2026, 3, 5, 14, 30)) == "05 Mar 2026, 02:30 PM"
    assert format_datetime("2026-03-05T14:30:00Z") == "05 Mar 2026, 02:30 PM"
    assert format_datetime("yesterday") == "yesterday"
    assert format_datetime(None) == "N/A"
