from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from woosync.adapters.sqlalchemy import StartupError, create_storage_manager
from woosync.domain.errors import StorageError
from woosync.domain.model import ShippingLabelPaperSize, ShippingLabelSettings
from woosync.domain.records import (
    OrderRecord,
    ProductRecord,
    ShipmentTrackingRecord,
    ShippingLabelRecord,
    ShippingLabelSettingsRecord,
)
from tests.helpers.samples import (
    ORDER_ID,
    SITE_ID,
    make_item,
    make_label,
    make_order,
    make_product,
    make_tracking,
)

if TYPE_CHECKING:
    from woosync.adapters.sqlalchemy import SqlAlchemyStorageManager
    from woosync.domain.ports import Storage


def _insert_tracking(storage: Storage, tracking_id: str, number: str = "1Z999") -> None:
    storage.insert_new(ShipmentTrackingRecord).update(make_tracking(tracking_id, number))


def test_perform_write_commits_once(storage_manager: SqlAlchemyStorageManager) -> None:
    storage_manager.perform_write(lambda storage: _insert_tracking(storage, "a"))

    with storage_manager.reading() as storage:
        records = storage.load_shipment_tracking_list(SITE_ID, ORDER_ID)
        assert [record.tracking_id for record in records] == ["a"]
        assert records[0].to_read_only() == make_tracking("a")


def test_perform_write_returns_operation_result(storage_manager: SqlAlchemyStorageManager) -> None:
    def operation(storage: Storage) -> int:
        _insert_tracking(storage, "a")
        _insert_tracking(storage, "b")
        return 2

    assert storage_manager.perform_write(operation) == 2


def test_failed_operation_leaves_storage_untouched(
    storage_manager: SqlAlchemyStorageManager,
) -> None:
    def operation(storage: Storage) -> None:
        _insert_tracking(storage, "a")
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        storage_manager.perform_write(operation)

    with storage_manager.reading() as storage:
        assert storage.count(ShipmentTrackingRecord) == 0


def test_natural_key_violation_is_rolled_back(storage_manager: SqlAlchemyStorageManager) -> None:
    storage_manager.perform_write(lambda storage: _insert_tracking(storage, "a"))

    def duplicate(storage: Storage) -> None:
        _insert_tracking(storage, "b")
        _insert_tracking(storage, "a", "other")

    with pytest.raises(StorageError):
        storage_manager.perform_write(duplicate)

    with storage_manager.reading() as storage:
        records = storage.load_shipment_tracking_list(SITE_ID, ORDER_ID)
        assert [(record.tracking_id, record.tracking_number) for record in records] == [
            ("a", "1Z999")
        ]


def test_find_and_delete_where(storage_manager: SqlAlchemyStorageManager) -> None:
    def seed(storage: Storage) -> None:
        _insert_tracking(storage, "a")
        _insert_tracking(storage, "b")
        storage.insert_new(ShipmentTrackingRecord).update(
            make_tracking("c", order_id=ORDER_ID + 1)
        )

    storage_manager.perform_write(seed)

    deleted = storage_manager.perform_write(
        lambda storage: storage.delete_where(
            ShipmentTrackingRecord, site_id=SITE_ID, order_id=ORDER_ID
        )
    )

    assert deleted == 2
    with storage_manager.reading() as storage:
        assert storage.load_shipment_tracking(SITE_ID, ORDER_ID, "a") is None
        assert storage.load_shipment_tracking(SITE_ID, ORDER_ID + 1, "c") is not None
        assert storage.count(ShipmentTrackingRecord) == 1


def test_value_columns_round_trip(storage_manager: SqlAlchemyStorageManager) -> None:
    order = make_order((make_item(1, 52, 2, "12.50", variation_id=1201),))
    label = make_label(1825, (1201, 61), product_names=("Hoodie", "Beanie"), refunded=True)
    settings = ShippingLabelSettings(SITE_ID, ORDER_ID, ShippingLabelPaperSize.LETTER)

    def seed(storage: Storage) -> None:
        storage.insert_new(OrderRecord).update(order)
        storage.insert_new(ShippingLabelRecord).update(label)
        storage.insert_new(ShippingLabelSettingsRecord).update(settings)

    storage_manager.perform_write(seed)

    with storage_manager.reading() as storage:
        stored_order = storage.load_order(SITE_ID, ORDER_ID)
        stored_label = storage.load_shipping_label(SITE_ID, ORDER_ID, 1825)
        stored_settings = storage.load_shipping_label_settings(SITE_ID, ORDER_ID)
        assert stored_order is not None
        assert stored_label is not None
        assert stored_settings is not None
        assert stored_order.to_read_only() == order
        assert stored_order.to_read_only().items[0].price == Decimal("12.50")
        assert stored_label.to_read_only() == label
        assert stored_settings.to_read_only() == settings


def test_load_products_filters_by_id(storage_manager: SqlAlchemyStorageManager) -> None:
    def seed(storage: Storage) -> None:
        for product_id, name in ((52, "Hoodie"), (61, "Beanie"), (70, "Cap")):
            storage.insert_new(ProductRecord).update(make_product(product_id, name))

    storage_manager.perform_write(seed)

    with storage_manager.reading() as storage:
        names = [record.name for record in storage.load_products(SITE_ID, [61, 70])]
        assert names == ["Beanie", "Cap"]
        assert storage.load_products(SITE_ID, []) == []


def test_reset_drops_every_record(storage_manager: SqlAlchemyStorageManager) -> None:
    storage_manager.perform_write(lambda storage: _insert_tracking(storage, "a"))

    storage_manager.reset()

    with storage_manager.reading() as storage:
        assert storage.count(ShipmentTrackingRecord) == 0


def test_shutdown_manager_refuses_work() -> None:
    manager = create_storage_manager()
    manager.shutdown()

    with pytest.raises(StartupError):
        manager.perform_write(lambda storage: None)
    with pytest.raises(StartupError), manager.reading():
        pass
