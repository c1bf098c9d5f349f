"""Order values."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from .enums import OrderStatus

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class OrderItem:
    item_id: int
    name: str
    product_id: int
    variation_id: int
    quantity: Decimal
    price: Decimal
    subtotal: Decimal
    total: Decimal
    sku: str | None = None


@dataclass(frozen=True, slots=True)
class OrderRefundCondensed:
    refund_id: int
    reason: str
    total: Decimal


@dataclass(frozen=True, slots=True)
class Order:
    site_id: int
    order_id: int
    number: str
    status: OrderStatus
    currency: str
    date_created: datetime
    total: Decimal
    items: tuple[OrderItem, ...] = ()
    refunds: tuple[OrderRefundCondensed, ...] = ()
