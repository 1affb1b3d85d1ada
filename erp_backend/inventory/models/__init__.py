# inventory/models/__init__.py

from inventory.models.inventory_item import InventoryItem

__all__ = ["InventoryItem"]
