"""WooCommerce REST remotes."""

from __future__ import annotations

from .orders import OrdersRemote
from .products import ProductsRemote
from .refunds import RefundsRemote
from .remote import Remote
from .shipments import ShipmentsRemote
from .shipping_labels import ShippingLabelRemote

__all__ = [
    "OrdersRemote",
    "ProductsRemote",
    "RefundsRemote",
    "Remote",
    "ShipmentsRemote",
    "ShippingLabelRemote",
]
