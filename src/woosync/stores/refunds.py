"""Order refunds store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.actions import RefundAction, SynchronizeRefunds
from woosync.domain.errors import WooSyncError
from woosync.domain.records import RefundRecord
from woosync.stores.base import complete, report, route
from woosync.stores.reconcile import upsert_and_prune

if TYPE_CHECKING:
    from woosync.adapters.woocommerce import RefundsRemote
    from woosync.domain.actions import Action
    from woosync.domain.dispatcher import Dispatcher
    from woosync.domain.ports import StorageManager


class RefundStore:
    def __init__(self, remote: RefundsRemote, storage_manager: StorageManager) -> None:
        self.remote = remote
        self.storage_manager = storage_manager
        self._handlers = {SynchronizeRefunds: self._synchronize_refunds}

    def register_supported_actions(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(self, RefundAction)

    async def on_action(self, action: Action) -> None:
        await route(self._handlers, action)

    async def _synchronize_refunds(self, action: SynchronizeRefunds) -> None:
        try:
            refunds = await self.remote.load_all_refunds(action.site_id, action.order_id)
            self.storage_manager.perform_write(
                lambda storage: upsert_and_prune(
                    storage,
                    RefundRecord,
                    refunds,
                    {"site_id": action.site_id, "order_id": action.order_id},
                )
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)
