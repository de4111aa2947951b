"""
Utility modules for the driver update monitor.
"""

from .date_converter import format_listing_date, from_iso, parse_listing_date, to_iso

__all__ = ['parse_listing_date', 'format_listing_date', 'to_iso', 'from_iso']
