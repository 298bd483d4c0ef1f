"""Delivery Order Filter.

A local CLI that:
- resolves run settings from CLI flags or a JSON config file
- loads delivery orders from a JSON file
- keeps orders for a city district due within a 30-minute delivery window
- writes the result and an audit log
"""

__version__ = "0.1.0"

from order_filter.config import Settings
from order_filter.models import Order

__all__ = ["__version__", "Order", "Settings"]
