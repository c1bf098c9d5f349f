"""Combine order items with refunds and shipping labels without double counting.

Refund line items carry negative quantities and totals on the wire; everything
here works on absolute values. Each refunded or label-claimed unit is taken from
exactly one order item.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from woosync.domain.model import (
        OrderItem,
        OrderItemRefund,
        Product,
        ProductVariation,
        Refund,
        ShippingLabel,
    )

ZERO = Decimal(0)

type ItemKey = tuple[int, int]


@dataclass(frozen=True, slots=True)
class AggregateOrderItem:
    """One displayable row: a product (or variation) with its effective quantity."""

    product_id: int
    variation_id: int
    name: str
    price: Decimal
    quantity: Decimal
    total: Decimal
    sku: str | None = None
    image_url: str | None = None
    item_id: int | None = None

    @property
    def key(self) -> ItemKey:
        return (self.product_id, self.variation_id)

    def with_quantity(self, quantity: Decimal) -> AggregateOrderItem:
        return replace(self, quantity=quantity, total=self.price * quantity)


def _from_order_item(item: OrderItem, quantity: Decimal) -> AggregateOrderItem:
    return AggregateOrderItem(
        product_id=item.product_id,
        variation_id=item.variation_id,
        name=item.name,
        price=item.price,
        quantity=quantity,
        total=item.price * quantity,
        sku=item.sku,
        item_id=item.item_id,
    )


def _refunded_items(refunds: Iterable[Refund]) -> list[OrderItemRefund]:
    return [item for refund in refunds for item in refund.items]


def combine_order_items(
    items: Sequence[OrderItem], refunds: Iterable[Refund]
) -> list[AggregateOrderItem]:
    """Order items with refunded quantities removed; fully refunded items are dropped."""
    remaining = {item.item_id: abs(item.quantity) for item in items}
    by_id = {item.item_id: item for item in items}

    for refunded in _refunded_items(refunds):
        quantity = abs(refunded.quantity)
        target = by_id.get(refunded.refunded_item_id) if refunded.refunded_item_id else None
        candidates = [target] if target is not None else [
            item
            for item in items
            if (item.product_id, item.variation_id)
            == (refunded.product_id, refunded.variation_id)
        ]
        for item in candidates:
            if quantity <= ZERO:
                break
            taken = min(quantity, remaining[item.item_id])
            remaining[item.item_id] -= taken
            quantity -= taken

    return [
        _from_order_item(item, remaining[item.item_id])
        for item in items
        if remaining[item.item_id] > ZERO
    ]


def combine_refunded_products(refunds: Iterable[Refund]) -> list[AggregateOrderItem]:
    """Refunded line items grouped by product and variation, in first-seen order."""
    grouped: dict[ItemKey, AggregateOrderItem] = {}
    for refunded in _refunded_items(refunds):
        key = (refunded.product_id, refunded.variation_id)
        quantity = abs(refunded.quantity)
        existing = grouped.get(key)
        if existing is None:
            grouped[key] = AggregateOrderItem(
                product_id=refunded.product_id,
                variation_id=refunded.variation_id,
                name=refunded.name,
                price=abs(refunded.price),
                quantity=quantity,
                total=abs(refunded.total),
                sku=refunded.sku,
            )
        else:
            grouped[key] = replace(
                existing,
                quantity=existing.quantity + quantity,
                total=existing.total + abs(refunded.total),
            )
    return list(grouped.values())


def refunded_products_count(refunds: Iterable[Refund]) -> Decimal:
    return sum((abs(item.quantity) for item in _refunded_items(refunds)), ZERO)


def combine_aggregated_order_items(
    items: Iterable[AggregateOrderItem], label_items: Iterable[AggregateOrderItem]
) -> list[AggregateOrderItem]:
    """Remove quantities already packed in shipping labels and drop emptied rows."""
    claimed: Counter[ItemKey] = Counter()
    for label_item in label_items:
        claimed[label_item.key] += label_item.quantity

    combined: list[AggregateOrderItem] = []
    for item in items:
        taken = min(claimed[item.key], item.quantity)
        claimed[item.key] -= taken
        quantity = item.quantity - taken
        if quantity > ZERO:
            combined.append(item.with_quantity(quantity))
    return combined


class AggregatedShippingLabelOrderItems:
    """Resolves the products packed in each shipping label to order items.

    A label only lists product (or variation) ids, repeated once per unit, and
    their names. Each id is matched to an order item first, then to a stored
    variation or product, and finally falls back to the name the label carries.
    """

    def __init__(
        self,
        shipping_labels: Iterable[ShippingLabel],
        order_items: Sequence[OrderItem],
        products: Iterable[Product] = (),
        product_variations: Iterable[ProductVariation] = (),
    ) -> None:
        self._order_items = tuple(order_items)
        self._products = {product.product_id: product for product in products}
        self._variations = {variation.variation_id: variation for variation in product_variations}
        self._items_by_label: dict[int, list[AggregateOrderItem]] = {
            label.shipping_label_id: self._resolve(label) for label in shipping_labels
        }

    def order_items(self, shipping_label: ShippingLabel) -> list[AggregateOrderItem]:
        return list(self._items_by_label.get(shipping_label.shipping_label_id, ()))

    def order_item(self, shipping_label: ShippingLabel, index: int) -> AggregateOrderItem | None:
        items = self._items_by_label.get(shipping_label.shipping_label_id, [])
        if 0 <= index < len(items):
            return items[index]
        return None

    def order_items_of_non_refunded_shipping_labels(
        self, shipping_labels: Iterable[ShippingLabel]
    ) -> list[AggregateOrderItem]:
        return [
            item
            for label in shipping_labels
            if not label.is_refunded
            for item in self.order_items(label)
        ]

    def _resolve(self, label: ShippingLabel) -> list[AggregateOrderItem]:
        counts = Counter(label.product_ids)
        first_index = {}
        for index, product_id in enumerate(label.product_ids):
            first_index.setdefault(product_id, index)

        resolved = []
        for product_id, count in counts.items():
            index = first_index[product_id]
            label_name = label.product_names[index] if index < len(label.product_names) else ""
            resolved.append(self._resolve_one(product_id, Decimal(count), label_name))
        return resolved

    def _resolve_one(self, product_id: int, quantity: Decimal, label_name: str) -> AggregateOrderItem:
        order_item = next(
            (item for item in self._order_items if item.variation_id == product_id), None
        ) or next((item for item in self._order_items if item.product_id == product_id), None)
        if order_item is not None:
            return _from_order_item(order_item, quantity)

        variation = self._variations.get(product_id)
        if variation is not None:
            return AggregateOrderItem(
                product_id=variation.product_id,
                variation_id=variation.variation_id,
                name=label_name,
                price=variation.price,
                quantity=quantity,
                total=variation.price * quantity,
                sku=variation.sku,
                image_url=variation.image_url,
            )

        product = self._products.get(product_id)
        if product is not None:
            return AggregateOrderItem(
                product_id=product.product_id,
                variation_id=0,
                name=product.name,
                price=ZERO,
                quantity=quantity,
                total=ZERO,
                sku=product.sku,
                image_url=product.image_urls[0] if product.image_urls else None,
            )

        return AggregateOrderItem(
            product_id=product_id,
            variation_id=0,
            name=label_name,
            price=ZERO,
            quantity=quantity,
            total=ZERO,
        )
