"""Order refund values."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class OrderItemRefund:
    """A refunded line. ``quantity`` and money fields are negative on the wire."""

    item_id: int
    name: str
    product_id: int
    variation_id: int
    quantity: Decimal
    price: Decimal
    subtotal: Decimal
    total: Decimal
    sku: str | None = None
    refunded_item_id: int | None = None


@dataclass(frozen=True, slots=True)
class Refund:
    site_id: int
    order_id: int
    refund_id: int
    date_created: datetime
    amount: Decimal
    reason: str = ""
    refunded_by_user_id: int = 0
    is_automated: bool | None = None
    items: tuple[OrderItemRefund, ...] = ()
