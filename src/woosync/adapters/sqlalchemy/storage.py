"""Session-bound record storage."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, inspect, select

from woosync.adapters.sqlalchemy.mappings import product_table
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
    StoredRecord,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Session


class SqlAlchemyStorage:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find[R: StoredRecord[object]](self, record_cls: type[R], **key: object) -> R | None:
        stmt = select(record_cls).filter_by(**key)
        return self.session.scalars(stmt).one_or_none()

    def insert_new[R: StoredRecord[object]](self, record_cls: type[R]) -> R:
        record = record_cls()
        self.session.add(record)
        return record

    def delete(self, record: StoredRecord[object]) -> None:
        self.session.delete(record)

    def delete_where(self, record_cls: type[StoredRecord[object]], **criteria: object) -> int:
        records = self.all(record_cls, **criteria)
        for record in records:
            self.session.delete(record)
        return len(records)

    def count(self, record_cls: type[StoredRecord[object]], **criteria: object) -> int:
        stmt = select(func.count()).select_from(record_cls).filter_by(**criteria)
        return self.session.scalar(stmt) or 0

    def all[R: StoredRecord[object]](self, record_cls: type[R], **criteria: object) -> list[R]:
        stmt = (
            select(record_cls)
            .filter_by(**criteria)
            .order_by(*inspect(record_cls).primary_key)
        )
        return list(self.session.scalars(stmt))

    def save(self) -> None:
        self.session.commit()

    # Typed read helpers --------------------------------------------------

    def load_shipment_tracking(
        self, site_id: int, order_id: int, tracking_id: str
    ) -> ShipmentTrackingRecord | None:
        return self.find(
            ShipmentTrackingRecord, site_id=site_id, order_id=order_id, tracking_id=tracking_id
        )

    def load_shipment_tracking_list(
        self, site_id: int, order_id: int
    ) -> Sequence[ShipmentTrackingRecord]:
        return self.all(ShipmentTrackingRecord, site_id=site_id, order_id=order_id)

    def load_shipment_tracking_provider_group(
        self, site_id: int, name: str
    ) -> ShipmentTrackingProviderGroupRecord | None:
        return self.find(ShipmentTrackingProviderGroupRecord, site_id=site_id, name=name)

    def load_shipment_tracking_provider_group_list(
        self, site_id: int
    ) -> Sequence[ShipmentTrackingProviderGroupRecord]:
        return self.all(ShipmentTrackingProviderGroupRecord, site_id=site_id)

    def load_shipment_tracking_providers(
        self, site_id: int, group_name: str
    ) -> Sequence[ShipmentTrackingProviderRecord]:
        return self.all(ShipmentTrackingProviderRecord, site_id=site_id, group_name=group_name)

    def load_shipment_tracking_provider(
        self, site_id: int, name: str
    ) -> ShipmentTrackingProviderRecord | None:
        matches = self.all(ShipmentTrackingProviderRecord, site_id=site_id, name=name)
        return matches[0] if matches else None

    def load_shipping_label(
        self, site_id: int, order_id: int, shipping_label_id: int
    ) -> ShippingLabelRecord | None:
        return self.find(
            ShippingLabelRecord,
            site_id=site_id,
            order_id=order_id,
            shipping_label_id=shipping_label_id,
        )

    def load_shipping_labels(self, site_id: int, order_id: int) -> Sequence[ShippingLabelRecord]:
        return self.all(ShippingLabelRecord, site_id=site_id, order_id=order_id)

    def load_shipping_label_settings(
        self, site_id: int, order_id: int
    ) -> ShippingLabelSettingsRecord | None:
        return self.find(ShippingLabelSettingsRecord, site_id=site_id, order_id=order_id)

    def load_refunds(self, site_id: int, order_id: int) -> Sequence[RefundRecord]:
        return self.all(RefundRecord, site_id=site_id, order_id=order_id)

    def load_order(self, site_id: int, order_id: int) -> OrderRecord | None:
        return self.find(OrderRecord, site_id=site_id, order_id=order_id)

    def load_products(self, site_id: int, product_ids: Sequence[int]) -> Sequence[ProductRecord]:
        if not product_ids:
            return []
        stmt = (
            select(ProductRecord)
            .filter_by(site_id=site_id)
            .where(product_table.c.product_id.in_(list(product_ids)))
            .order_by(product_table.c.id)
        )
        return list(self.session.scalars(stmt))

    def load_product_variations(
        self, site_id: int, product_id: int
    ) -> Sequence[ProductVariationRecord]:
        return self.all(ProductVariationRecord, site_id=site_id, product_id=product_id)


if TYPE_CHECKING:
    from woosync.domain.ports.storage import Storage

    def _storage_check(session: Session) -> Storage:
        return SqlAlchemyStorage(session)
