"""Mutable stored counterparts of the immutable domain values.

Records are plain classes; ``woosync.adapters.sqlalchemy.mappings`` maps them onto
tables imperatively. Each record is identified by the columns named in
``NATURAL_KEY`` and never holds a reference to another record: related rows are
found again through their key columns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from woosync.domain.model import (
    Order,
    Product,
    ProductVariation,
    Refund,
    ShipmentTracking,
    ShipmentTrackingProvider,
    ShipmentTrackingProviderGroup,
    ShippingLabel,
    ShippingLabelRefund,
    ShippingLabelSettings,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime
    from decimal import Decimal

    from woosync.domain.model import (
        OrderItem,
        OrderItemRefund,
        OrderRefundCondensed,
        OrderStatus,
        ProductVariationAttribute,
        ShippingLabelAddress,
        ShippingLabelPaperSize,
        ShippingLabelRefundStatus,
        ShippingLabelStatus,
    )

type NaturalKey = tuple[object, ...]


class StoredRecord[TEntity]:
    NATURAL_KEY: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def natural_key_of(cls, entity: TEntity) -> NaturalKey:
        return tuple(getattr(entity, name) for name in cls.NATURAL_KEY)

    @property
    def natural_key(self) -> NaturalKey:
        return tuple(getattr(self, name) for name in self.NATURAL_KEY)

    def update(self, entity: TEntity) -> None:
        raise NotImplementedError

    def to_read_only(self) -> TEntity:
        raise NotImplementedError


class ShipmentTrackingRecord(StoredRecord[ShipmentTracking]):
    NATURAL_KEY = ("site_id", "order_id", "tracking_id")

    site_id: int
    order_id: int
    tracking_id: str
    tracking_number: str
    tracking_provider: str | None
    tracking_url: str | None
    date_shipped: date | None

    def update(self, entity: ShipmentTracking) -> None:
        self.site_id = entity.site_id
        self.order_id = entity.order_id
        self.tracking_id = entity.tracking_id
        self.tracking_number = entity.tracking_number
        self.tracking_provider = entity.tracking_provider
        self.tracking_url = entity.tracking_url
        self.date_shipped = entity.date_shipped

    def to_read_only(self) -> ShipmentTracking:
        return ShipmentTracking(
            site_id=self.site_id,
            order_id=self.order_id,
            tracking_id=self.tracking_id,
            tracking_number=self.tracking_number,
            tracking_provider=self.tracking_provider,
            tracking_url=self.tracking_url,
            date_shipped=self.date_shipped,
        )


class ShipmentTrackingProviderGroupRecord(StoredRecord[ShipmentTrackingProviderGroup]):
    NATURAL_KEY = ("site_id", "name")

    site_id: int
    name: str

    def update(self, entity: ShipmentTrackingProviderGroup) -> None:
        self.site_id = entity.site_id
        self.name = entity.name

    def to_read_only(
        self, providers: Iterable[ShipmentTrackingProviderRecord] = ()
    ) -> ShipmentTrackingProviderGroup:
        return ShipmentTrackingProviderGroup(
            site_id=self.site_id,
            name=self.name,
            providers=tuple(provider.to_read_only() for provider in providers),
        )


class ShipmentTrackingProviderRecord(StoredRecord[ShipmentTrackingProvider]):
    NATURAL_KEY = ("site_id", "group_name", "name")

    site_id: int
    group_name: str
    name: str
    url: str

    def update(self, entity: ShipmentTrackingProvider) -> None:
        self.site_id = entity.site_id
        self.group_name = entity.group_name
        self.name = entity.name
        self.url = entity.url

    def to_read_only(self) -> ShipmentTrackingProvider:
        return ShipmentTrackingProvider(
            site_id=self.site_id, group_name=self.group_name, name=self.name, url=self.url
        )


class ShippingLabelRecord(StoredRecord[ShippingLabel]):
    NATURAL_KEY = ("site_id", "order_id", "shipping_label_id")

    site_id: int
    order_id: int
    shipping_label_id: int
    tracking_number: str
    carrier_id: str
    service_name: str
    status: ShippingLabelStatus
    date_created: datetime
    refundable_amount: Decimal
    currency: str
    package_name: str
    product_ids: tuple[int, ...]
    product_names: tuple[str, ...]
    origin_address: ShippingLabelAddress
    destination_address: ShippingLabelAddress
    refund_date_requested: datetime | None
    refund_status: ShippingLabelRefundStatus | None

    def update(self, entity: ShippingLabel) -> None:
        self.site_id = entity.site_id
        self.order_id = entity.order_id
        self.shipping_label_id = entity.shipping_label_id
        self.tracking_number = entity.tracking_number
        self.carrier_id = entity.carrier_id
        self.service_name = entity.service_name
        self.status = entity.status
        self.date_created = entity.date_created
        self.refundable_amount = entity.refundable_amount
        self.currency = entity.currency
        self.package_name = entity.package_name
        self.product_ids = entity.product_ids
        self.product_names = entity.product_names
        self.origin_address = entity.origin_address
        self.destination_address = entity.destination_address
        self.update_refund(entity.refund)

    def update_refund(self, refund: ShippingLabelRefund | None) -> None:
        self.refund_date_requested = refund.date_requested if refund else None
        self.refund_status = refund.status if refund else None

    def to_read_only(self) -> ShippingLabel:
        refund = None
        if self.refund_date_requested is not None and self.refund_status is not None:
            refund = ShippingLabelRefund(
                date_requested=self.refund_date_requested, status=self.refund_status
            )
        return ShippingLabel(
            site_id=self.site_id,
            order_id=self.order_id,
            shipping_label_id=self.shipping_label_id,
            tracking_number=self.tracking_number,
            carrier_id=self.carrier_id,
            service_name=self.service_name,
            status=self.status,
            date_created=self.date_created,
            refundable_amount=self.refundable_amount,
            currency=self.currency,
            package_name=self.package_name,
            product_ids=tuple(self.product_ids),
            product_names=tuple(self.product_names),
            origin_address=self.origin_address,
            destination_address=self.destination_address,
            refund=refund,
        )


class ShippingLabelSettingsRecord(StoredRecord[ShippingLabelSettings]):
    NATURAL_KEY = ("site_id", "order_id")

    site_id: int
    order_id: int
    paper_size: ShippingLabelPaperSize

    def update(self, entity: ShippingLabelSettings) -> None:
        self.site_id = entity.site_id
        self.order_id = entity.order_id
        self.paper_size = entity.paper_size

    def to_read_only(self) -> ShippingLabelSettings:
        return ShippingLabelSettings(
            site_id=self.site_id, order_id=self.order_id, paper_size=self.paper_size
        )


class RefundRecord(StoredRecord[Refund]):
    NATURAL_KEY = ("site_id", "order_id", "refund_id")

    site_id: int
    order_id: int
    refund_id: int
    date_created: datetime
    amount: Decimal
    reason: str
    refunded_by_user_id: int
    is_automated: bool | None
    items: tuple[OrderItemRefund, ...]

    def update(self, entity: Refund) -> None:
        self.site_id = entity.site_id
        self.order_id = entity.order_id
        self.refund_id = entity.refund_id
        self.date_created = entity.date_created
        self.amount = entity.amount
        self.reason = entity.reason
        self.refunded_by_user_id = entity.refunded_by_user_id
        self.is_automated = entity.is_automated
        self.items = entity.items

    def to_read_only(self) -> Refund:
        return Refund(
            site_id=self.site_id,
            order_id=self.order_id,
            refund_id=self.refund_id,
            date_created=self.date_created,
            amount=self.amount,
            reason=self.reason,
            refunded_by_user_id=self.refunded_by_user_id,
            is_automated=self.is_automated,
            items=tuple(self.items),
        )


class OrderRecord(StoredRecord[Order]):
    NATURAL_KEY = ("site_id", "order_id")

    site_id: int
    order_id: int
    number: str
    status: OrderStatus
    currency: str
    date_created: datetime
    total: Decimal
    items: tuple[OrderItem, ...]
    refunds: tuple[OrderRefundCondensed, ...]

    def update(self, entity: Order) -> None:
        self.site_id = entity.site_id
        self.order_id = entity.order_id
        self.number = entity.number
        self.status = entity.status
        self.currency = entity.currency
        self.date_created = entity.date_created
        self.total = entity.total
        self.items = entity.items
        self.refunds = entity.refunds

    def to_read_only(self) -> Order:
        return Order(
            site_id=self.site_id,
            order_id=self.order_id,
            number=self.number,
            status=self.status,
            currency=self.currency,
            date_created=self.date_created,
            total=self.total,
            items=tuple(self.items),
            refunds=tuple(self.refunds),
        )


class ProductRecord(StoredRecord[Product]):
    NATURAL_KEY = ("site_id", "product_id")

    site_id: int
    product_id: int
    name: str
    sku: str | None
    virtual: bool
    image_urls: tuple[str, ...]

    def update(self, entity: Product) -> None:
        self.site_id = entity.site_id
        self.product_id = entity.product_id
        self.name = entity.name
        self.sku = entity.sku
        self.virtual = entity.virtual
        self.image_urls = entity.image_urls

    def to_read_only(self) -> Product:
        return Product(
            site_id=self.site_id,
            product_id=self.product_id,
            name=self.name,
            sku=self.sku,
            virtual=self.virtual,
            image_urls=tuple(self.image_urls),
        )


class ProductVariationRecord(StoredRecord[ProductVariation]):
    NATURAL_KEY = ("site_id", "product_id", "variation_id")

    site_id: int
    product_id: int
    variation_id: int
    price: Decimal
    sku: str | None
    image_url: str | None
    attributes: tuple[ProductVariationAttribute, ...]

    def update(self, entity: ProductVariation) -> None:
        self.site_id = entity.site_id
        self.product_id = entity.product_id
        self.variation_id = entity.variation_id
        self.price = entity.price
        self.sku = entity.sku
        self.image_url = entity.image_url
        self.attributes = entity.attributes

    def to_read_only(self) -> ProductVariation:
        return ProductVariation(
            site_id=self.site_id,
            product_id=self.product_id,
            variation_id=self.variation_id,
            price=self.price,
            sku=self.sku,
            image_url=self.image_url,
            attributes=tuple(self.attributes),
        )
