"""
Purpose: Package entry + stable exports.
What it does:

Marks orders as a Python package and re-exports the public API so other
modules can do:

from orders import Order, PickupSite

Should not contain business logic.
"""
from .models import Order, PickupSite

__all__ = ["Order",
           "PickupSite",
           ]
