"""Order store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from woosync.domain.actions import DeleteOrder, OrderAction, RetrieveOrder
from woosync.domain.errors import WooSyncError
from woosync.domain.records import (
    OrderRecord,
    RefundRecord,
    ShipmentTrackingRecord,
    ShippingLabelRecord,
    ShippingLabelSettingsRecord,
)
from woosync.stores.base import complete, fail, report, route, succeed
from woosync.stores.reconcile import upsert_records

if TYPE_CHECKING:
    from woosync.adapters.woocommerce import OrdersRemote
    from woosync.domain.actions import Action
    from woosync.domain.dispatcher import Dispatcher
    from woosync.domain.ports import Storage, StorageManager

log = getLogger(__name__)

# Records stored under the scope of a single order.
ORDER_SCOPED_RECORDS = (
    ShipmentTrackingRecord,
    ShippingLabelRecord,
    ShippingLabelSettingsRecord,
    RefundRecord,
    OrderRecord,
)


class OrderStore:
    def __init__(self, remote: OrdersRemote, storage_manager: StorageManager) -> None:
        self.remote = remote
        self.storage_manager = storage_manager
        self._handlers = {
            RetrieveOrder: self._retrieve_order,
            DeleteOrder: self._delete_order,
        }

    def register_supported_actions(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(self, OrderAction)

    async def on_action(self, action: Action) -> None:
        await route(self._handlers, action)

    async def _retrieve_order(self, action: RetrieveOrder) -> None:
        try:
            order = await self.remote.load_order(action.site_id, action.order_id)
            self.storage_manager.perform_write(
                lambda storage: upsert_records(storage, OrderRecord, [order])
            )
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, order)

    async def _delete_order(self, action: DeleteOrder) -> None:
        try:
            removed = self.storage_manager.perform_write(
                lambda storage: _delete_order_scope(storage, action.site_id, action.order_id)
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        log.debug("Deleted %d records of order %s", removed, action.order_id)
        complete(action.on_completion)


def _delete_order_scope(storage: Storage, site_id: int, order_id: int) -> int:
    return sum(
        storage.delete_where(record_cls, site_id=site_id, order_id=order_id)
        for record_cls in ORDER_SCOPED_RECORDS
    )
