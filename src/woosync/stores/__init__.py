"""Action processors that reconcile remote data into local storage."""

from __future__ import annotations

from .app_settings import AppSettingsStore
from .base import Store
from .orders import OrderStore
from .products import ProductStore
from .refunds import RefundStore
from .shipments import ShipmentStore
from .shipping_labels import ShippingLabelStore

__all__ = [
    "AppSettingsStore",
    "OrderStore",
    "ProductStore",
    "RefundStore",
    "ShipmentStore",
    "ShippingLabelStore",
    "Store",
]
