"""Ports for the local record store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from contextlib import AbstractContextManager

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


@runtime_checkable
class Storage(Protocol):
    """Session-bound view over stored records.

    ``find`` and ``insert_new`` are the only way records come into being; callers
    never construct a record and add it themselves.
    """

    def find[R: StoredRecord[object]](self, record_cls: type[R], **key: object) -> R | None: ...

    def insert_new[R: StoredRecord[object]](self, record_cls: type[R]) -> R: ...

    def delete(self, record: StoredRecord[object]) -> None: ...

    def delete_where(self, record_cls: type[StoredRecord[object]], **criteria: object) -> int: ...

    def count(self, record_cls: type[StoredRecord[object]], **criteria: object) -> int: ...

    def all[R: StoredRecord[object]](self, record_cls: type[R], **criteria: object) -> list[R]: ...

    def save(self) -> None: ...

    # Typed read helpers --------------------------------------------------

    def load_shipment_tracking(
        self, site_id: int, order_id: int, tracking_id: str
    ) -> ShipmentTrackingRecord | None: ...

    def load_shipment_tracking_list(
        self, site_id: int, order_id: int
    ) -> Sequence[ShipmentTrackingRecord]: ...

    def load_shipment_tracking_provider_group(
        self, site_id: int, name: str
    ) -> ShipmentTrackingProviderGroupRecord | None: ...

    def load_shipment_tracking_provider_group_list(
        self, site_id: int
    ) -> Sequence[ShipmentTrackingProviderGroupRecord]: ...

    def load_shipment_tracking_providers(
        self, site_id: int, group_name: str
    ) -> Sequence[ShipmentTrackingProviderRecord]: ...

    def load_shipment_tracking_provider(
        self, site_id: int, name: str
    ) -> ShipmentTrackingProviderRecord | None: ...

    def load_shipping_label(
        self, site_id: int, order_id: int, shipping_label_id: int
    ) -> ShippingLabelRecord | None: ...

    def load_shipping_labels(self, site_id: int, order_id: int) -> Sequence[ShippingLabelRecord]: ...

    def load_shipping_label_settings(
        self, site_id: int, order_id: int
    ) -> ShippingLabelSettingsRecord | None: ...

    def load_refunds(self, site_id: int, order_id: int) -> Sequence[RefundRecord]: ...

    def load_order(self, site_id: int, order_id: int) -> OrderRecord | None: ...

    def load_products(self, site_id: int, product_ids: Sequence[int]) -> Sequence[ProductRecord]: ...

    def load_product_variations(
        self, site_id: int, product_id: int
    ) -> Sequence[ProductVariationRecord]: ...


@runtime_checkable
class StorageManager(Protocol):
    """Owns the store and serializes every write through one commit path."""

    def perform_write[T](self, operation: Callable[[Storage], T]) -> T: ...

    def reading(self) -> AbstractContextManager[Storage]: ...

    def reset(self) -> None: ...

    def shutdown(self) -> None: ...
