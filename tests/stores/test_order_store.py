from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from woosync.adapters.woocommerce import OrdersRemote
from woosync.domain.actions import DeleteOrder, RetrieveOrder
from woosync.domain.errors import MappingError
from woosync.domain.records import (
    OrderRecord,
    RefundRecord,
    ShipmentTrackingRecord,
    ShippingLabelRecord,
)
from woosync.domain.result import Failure, Success
from woosync.stores import OrderStore
from tests.helpers.completions import ErrorRecorder, ResultRecorder
from tests.helpers.samples import (
    ORDER_ID,
    SITE_ID,
    make_label,
    make_order,
    make_refund,
    make_tracking,
)

if TYPE_CHECKING:
    from woosync.adapters.network import MockTransport
    from woosync.adapters.sqlalchemy import SqlAlchemyStorageManager
    from woosync.domain.ports import Storage


def test_retrieve_order_stores_and_returns_it(
    network: MockTransport, storage_manager: SqlAlchemyStorageManager
) -> None:
    network.simulate_response(f"orders/{ORDER_ID}", filename="order")
    store = OrderStore(OrdersRemote(network), storage_manager)
    recorder: ResultRecorder = ResultRecorder()

    asyncio.run(store.on_action(RetrieveOrder(SITE_ID, ORDER_ID, on_completion=recorder)))

    result = recorder.result
    assert isinstance(result, Success)
    with storage_manager.reading() as storage:
        record = storage.load_order(SITE_ID, ORDER_ID)
        assert record is not None
        assert record.to_read_only() == result.value


def test_retrieving_twice_keeps_one_record(
    network: MockTransport, storage_manager: SqlAlchemyStorageManager
) -> None:
    network.simulate_response(f"orders/{ORDER_ID}", filename="order")
    store = OrderStore(OrdersRemote(network), storage_manager)

    asyncio.run(store.on_action(RetrieveOrder(SITE_ID, ORDER_ID)))
    asyncio.run(store.on_action(RetrieveOrder(SITE_ID, ORDER_ID)))

    with storage_manager.reading() as storage:
        assert storage.count(OrderRecord) == 1


def test_malformed_order_fails_with_field(
    network: MockTransport, storage_manager: SqlAlchemyStorageManager
) -> None:
    network.simulate_response(f"orders/{ORDER_ID}", filename="order-malformed")
    store = OrderStore(OrdersRemote(network), storage_manager)
    recorder: ResultRecorder = ResultRecorder()

    asyncio.run(store.on_action(RetrieveOrder(SITE_ID, ORDER_ID, on_completion=recorder)))

    result = recorder.result
    assert isinstance(result, Failure)
    assert isinstance(result.error, MappingError)
    with storage_manager.reading() as storage:
        assert storage.count(OrderRecord) == 0


def test_delete_order_removes_its_whole_scope(
    network: MockTransport, storage_manager: SqlAlchemyStorageManager
) -> None:
    other = ORDER_ID + 1

    def seed(storage: Storage) -> None:
        for order_id in (ORDER_ID, other):
            storage.insert_new(OrderRecord).update(make_order(order_id=order_id))
            storage.insert_new(RefundRecord).update(make_refund(1, order_id=order_id))
            storage.insert_new(ShippingLabelRecord).update(make_label(1, (61,), order_id=order_id))
            storage.insert_new(ShipmentTrackingRecord).update(make_tracking("a", order_id=order_id))

    storage_manager.perform_write(seed)
    store = OrderStore(OrdersRemote(network), storage_manager)
    recorder = ErrorRecorder()

    asyncio.run(store.on_action(DeleteOrder(SITE_ID, ORDER_ID, on_completion=recorder)))

    assert recorder.error is None
    assert network.requests == []
    with storage_manager.reading() as storage:
        assert storage.load_order(SITE_ID, ORDER_ID) is None
        assert storage.load_refunds(SITE_ID, ORDER_ID) == []
        assert storage.load_shipping_labels(SITE_ID, ORDER_ID) == []
        assert storage.load_shipment_tracking_list(SITE_ID, ORDER_ID) == []
        assert storage.load_order(SITE_ID, other) is not None
        assert storage.count(RefundRecord) == 1


def test_deleting_unknown_order_succeeds(
    network: MockTransport, storage_manager: SqlAlchemyStorageManager
) -> None:
    store = OrderStore(OrdersRemote(network), storage_manager)
    recorder = ErrorRecorder()

    asyncio.run(store.on_action(DeleteOrder(SITE_ID, ORDER_ID, on_completion=recorder)))

    assert recorder.error is None
