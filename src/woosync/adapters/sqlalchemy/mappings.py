"""SQLAlchemy mapping metadata for the stored records."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from decimal import Decimal
from functools import cache
from typing import TYPE_CHECKING

from pydantic import TypeAdapter
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers

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
from woosync.domain.records import (
    OrderRecord,
    ProductRecord,
    ProductVariationRecord,
    RefundRecord,
    ShipmentTrackingProviderGroupRecord,
    ShipmentTrackingProviderRecord,
    ShipmentTrackingRecord,
    ShippingLabelRecord,
    ShippingLabelSettingsRecord,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class DecimalString(TypeDecorator[Decimal]):
    """Exact decimals stored as text; SQLite has no fixed-point type."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> str | None:
        _ = dialect
        return None if value is None else str(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Decimal | None:
        _ = dialect
        return None if value is None else Decimal(value)


class JSONValue(TypeDecorator[object]):
    """Value objects embedded in a record, serialized with pydantic."""

    impl = Text
    cache_ok = True

    def __init__(self, value_type: object) -> None:
        super().__init__()
        self.value_type = value_type
        self._adapter: TypeAdapter[object] = TypeAdapter(value_type)

    def process_bind_param(self, value: object, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return self._adapter.dump_json(value).decode("utf-8")

    def process_result_value(self, value: str | None, dialect: Dialect) -> object:
        _ = dialect
        if value is None:
            return None
        return self._adapter.validate_json(value)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}

# Shipment tracking -----------------------------------------------------------

shipment_tracking_table = Table(
    "shipment_tracking",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("order_id", Integer, nullable=False),
    Column("tracking_id", String, nullable=False),
    Column("tracking_number", String, nullable=False),
    Column("tracking_provider", String, nullable=True),
    Column("tracking_url", String, nullable=True),
    Column("date_shipped", Date, nullable=True),
    UniqueConstraint("site_id", "order_id", "tracking_id"),
    Index("ix_shipment_tracking_scope", "site_id", "order_id"),
)

shipment_tracking_provider_group_table = Table(
    "shipment_tracking_provider_group",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("name", String, nullable=False),
    UniqueConstraint("site_id", "name"),
)

shipment_tracking_provider_table = Table(
    "shipment_tracking_provider",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("group_name", String, nullable=False),
    Column("name", String, nullable=False),
    Column("url", String, nullable=False),
    UniqueConstraint("site_id", "group_name", "name"),
    Index("ix_shipment_tracking_provider_name", "site_id", "name"),
)

# Shipping labels -------------------------------------------------------------

shipping_label_table = Table(
    "shipping_label",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("order_id", Integer, nullable=False),
    Column("shipping_label_id", Integer, nullable=False),
    Column("tracking_number", String, nullable=False),
    Column("carrier_id", String, nullable=False),
    Column("service_name", String, nullable=False),
    Column("status", Enum(ShippingLabelStatus, native_enum=False), nullable=False),
    Column("date_created", UTCDateTime(), nullable=False),
    Column("refundable_amount", DecimalString(), nullable=False),
    Column("currency", String(3), nullable=False),
    Column("package_name", String, nullable=False, default=""),
    Column("product_ids", JSONValue(tuple[int, ...]), nullable=False),
    Column("product_names", JSONValue(tuple[str, ...]), nullable=False),
    Column("origin_address", JSONValue(ShippingLabelAddress), nullable=False),
    Column("destination_address", JSONValue(ShippingLabelAddress), nullable=False),
    Column("refund_date_requested", UTCDateTime(), nullable=True),
    Column("refund_status", Enum(ShippingLabelRefundStatus, native_enum=False), nullable=True),
    UniqueConstraint("site_id", "order_id", "shipping_label_id"),
    Index("ix_shipping_label_scope", "site_id", "order_id"),
)

shipping_label_settings_table = Table(
    "shipping_label_settings",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("order_id", Integer, nullable=False),
    Column("paper_size", Enum(ShippingLabelPaperSize, native_enum=False), nullable=False),
    UniqueConstraint("site_id", "order_id"),
)

# Orders, refunds, products ---------------------------------------------------

refund_table = Table(
    "refund",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("order_id", Integer, nullable=False),
    Column("refund_id", Integer, nullable=False),
    Column("date_created", UTCDateTime(), nullable=False),
    Column("amount", DecimalString(), nullable=False),
    Column("reason", String, nullable=False, default=""),
    Column("refunded_by_user_id", Integer, nullable=False, default=0),
    Column("is_automated", Boolean, nullable=True),
    Column("items", JSONValue(tuple[OrderItemRefund, ...]), nullable=False),
    UniqueConstraint("site_id", "order_id", "refund_id"),
    Index("ix_refund_scope", "site_id", "order_id"),
)

order_table = Table(
    "sales_order",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("order_id", Integer, nullable=False),
    Column("number", String, nullable=False),
    Column("status", Enum(OrderStatus, native_enum=False), nullable=False),
    Column("currency", String(3), nullable=False),
    Column("date_created", UTCDateTime(), nullable=False),
    Column("total", DecimalString(), nullable=False),
    Column("items", JSONValue(tuple[OrderItem, ...]), nullable=False),
    Column("refunds", JSONValue(tuple[OrderRefundCondensed, ...]), nullable=False),
    UniqueConstraint("site_id", "order_id"),
)

product_table = Table(
    "product",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("product_id", Integer, nullable=False),
    Column("name", String, nullable=False),
    Column("sku", String, nullable=True),
    Column("virtual", Boolean, nullable=False, default=False),
    Column("image_urls", JSONValue(tuple[str, ...]), nullable=False),
    UniqueConstraint("site_id", "product_id"),
)

product_variation_table = Table(
    "product_variation",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("site_id", Integer, nullable=False),
    Column("product_id", Integer, nullable=False),
    Column("variation_id", Integer, nullable=False),
    Column("price", DecimalString(), nullable=False),
    Column("sku", String, nullable=True),
    Column("image_url", String, nullable=True),
    Column("attributes", JSONValue(tuple[ProductVariationAttribute, ...]), nullable=False),
    UniqueConstraint("site_id", "product_id", "variation_id"),
    Index("ix_product_variation_scope", "site_id", "product_id"),
)


@cache
def start_mappers() -> orm.registry:
    """Map every record class onto its table (idempotent)."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(ShipmentTrackingRecord, shipment_tracking_table)
    mapper_registry.map_imperatively(
        ShipmentTrackingProviderGroupRecord, shipment_tracking_provider_group_table
    )
    mapper_registry.map_imperatively(
        ShipmentTrackingProviderRecord, shipment_tracking_provider_table
    )
    mapper_registry.map_imperatively(ShippingLabelRecord, shipping_label_table)
    mapper_registry.map_imperatively(ShippingLabelSettingsRecord, shipping_label_settings_table)
    mapper_registry.map_imperatively(RefundRecord, refund_table)
    mapper_registry.map_imperatively(OrderRecord, order_table)
    mapper_registry.map_imperatively(ProductRecord, product_table)
    mapper_registry.map_imperatively(ProductVariationRecord, product_variation_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)


def drop_all_tables(engine: Engine) -> None:
    log.info("Dropping all tables")
    mapper_registry.metadata.drop_all(engine)
