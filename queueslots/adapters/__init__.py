"""
Adapters layer - Booking data sources.
"""

from .json_busy_source import JsonBusySource

__all__ = ["JsonBusySource"]
