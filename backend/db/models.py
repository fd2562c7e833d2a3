"""Import every model so Base.metadata knows all tables."""
from .party import Party
from .feature import Feature
from .inventory.item import Item
from .inventory.stock import Stock
from .inventory.adjustment import Adjustment

__all__ = ["Party", "Feature", "Item", "Stock", "Adjustment"]
