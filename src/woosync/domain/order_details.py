"""Read model for one order: items, refunds, shipping labels and tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from woosync.domain.aggregation import (
    AggregatedShippingLabelOrderItems,
    AggregateOrderItem,
    combine_aggregated_order_items,
    combine_order_items,
    combine_refunded_products,
    refunded_products_count,
)
from woosync.domain.model import OrderStatus

if TYPE_CHECKING:
    from decimal import Decimal

    from woosync.domain.model import (
        Order,
        OrderRefundCondensed,
        Product,
        ProductVariation,
        Refund,
        ShipmentTracking,
        ShippingLabel,
    )
    from woosync.domain.ports import Storage


@dataclass(frozen=True, slots=True)
class ShippingLabelGroup:
    """A shipping label with the order items packed in it.

    Refunded labels carry no items; only their refund details are shown.
    """

    index: int
    shipping_label: ShippingLabel
    order_items: tuple[AggregateOrderItem, ...]

    @property
    def is_refunded(self) -> bool:
        return self.shipping_label.is_refunded


@dataclass(frozen=True)
class OrderDetails:
    order: Order
    refunds: tuple[Refund, ...] = ()
    shipping_labels: tuple[ShippingLabel, ...] = ()
    products: tuple[Product, ...] = ()
    product_variations: tuple[ProductVariation, ...] = ()
    trackings: tuple[ShipmentTracking, ...] = ()

    @property
    def is_refunded_status(self) -> bool:
        return self.order.status is OrderStatus.REFUNDED

    @property
    def label_items(self) -> AggregatedShippingLabelOrderItems:
        return AggregatedShippingLabelOrderItems(
            self.shipping_labels, self.order.items, self.products, self.product_variations
        )

    @property
    def non_refunded_shipping_labels(self) -> list[ShippingLabel]:
        return [label for label in self.shipping_labels if not label.is_refunded]

    @property
    def aggregate_order_items(self) -> list[AggregateOrderItem]:
        """Order items after refunds, minus whatever non-refunded labels already packed."""
        after_refunds = combine_order_items(self.order.items, self.refunds)
        packed = self.label_items.order_items_of_non_refunded_shipping_labels(
            self.shipping_labels
        )
        return combine_aggregated_order_items(after_refunds, packed)

    @property
    def refunded_products(self) -> list[AggregateOrderItem]:
        return combine_refunded_products(self.refunds)

    @property
    def refunded_products_count(self) -> Decimal:
        return refunded_products_count(self.refunds)

    @property
    def shipping_label_groups(self) -> list[ShippingLabelGroup]:
        label_items = self.label_items
        return [
            ShippingLabelGroup(
                index=index,
                shipping_label=label,
                order_items=() if label.is_refunded else tuple(label_items.order_items(label)),
            )
            for index, label in enumerate(self.shipping_labels, start=1)
        ]

    @property
    def shows_tracking(self) -> bool:
        return not self.non_refunded_shipping_labels and bool(self.trackings)

    def shows_add_tracking(self, tracking_reachable: bool) -> bool:
        return not self.non_refunded_shipping_labels and tracking_reachable

    @property
    def condensed_refunds(self) -> list[OrderRefundCondensed]:
        return sorted(self.order.refunds, key=lambda refund: refund.refund_id, reverse=True)

    @property
    def contains_only_virtual_products(self) -> bool:
        ordered = {item.product_id for item in self.order.items}
        known = [product for product in self.products if product.product_id in ordered]
        return bool(known) and all(product.virtual for product in known)

    def look_up_product(self, product_id: int) -> Product | None:
        return next((p for p in self.products if p.product_id == product_id), None)

    def look_up_product_variation(
        self, product_id: int, variation_id: int
    ) -> ProductVariation | None:
        return next(
            (
                v
                for v in self.product_variations
                if v.product_id == product_id and v.variation_id == variation_id
            ),
            None,
        )

    def look_up_refund(self, refund_id: int) -> Refund | None:
        return next((r for r in self.refunds if r.refund_id == refund_id), None)


def load_order_details(storage: Storage, site_id: int, order_id: int) -> OrderDetails | None:
    """Assemble the read model from stored records, or ``None`` if the order is unknown."""
    order_record = storage.load_order(site_id, order_id)
    if order_record is None:
        return None
    order = order_record.to_read_only()

    product_ids = sorted({item.product_id for item in order.items})
    variation_parents = sorted({item.product_id for item in order.items if item.variation_id})
    variations = [
        record.to_read_only()
        for product_id in variation_parents
        for record in storage.load_product_variations(site_id, product_id)
    ]
    return OrderDetails(
        order=order,
        refunds=tuple(r.to_read_only() for r in storage.load_refunds(site_id, order_id)),
        shipping_labels=tuple(
            r.to_read_only() for r in storage.load_shipping_labels(site_id, order_id)
        ),
        products=tuple(r.to_read_only() for r in storage.load_products(site_id, product_ids)),
        product_variations=tuple(variations),
        trackings=tuple(
            r.to_read_only() for r in storage.load_shipment_tracking_list(site_id, order_id)
        ),
    )
