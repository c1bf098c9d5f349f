"""Shipment tracking store."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from woosync.domain.actions import (
    AddCustomTracking,
    AddTracking,
    DeleteTracking,
    ShipmentAction,
    SynchronizeShipmentTrackingData,
    SynchronizeShipmentTrackingProviders,
)
from woosync.domain.errors import WooSyncError
from woosync.domain.records import (
    ShipmentTrackingProviderGroupRecord,
    ShipmentTrackingProviderRecord,
    ShipmentTrackingRecord,
)
from woosync.stores.base import complete, report, route
from woosync.stores.reconcile import prune_records, upsert_and_prune, upsert_records

if TYPE_CHECKING:
    from woosync.adapters.woocommerce import ShipmentsRemote
    from woosync.domain.actions import Action
    from woosync.domain.dispatcher import Dispatcher
    from woosync.domain.model import ShipmentTracking, ShipmentTrackingProviderGroup
    from woosync.domain.ports import Storage, StorageManager

log = getLogger(__name__)


class ShipmentStore:
    def __init__(self, remote: ShipmentsRemote, storage_manager: StorageManager) -> None:
        self.remote = remote
        self.storage_manager = storage_manager
        self._handlers = {
            SynchronizeShipmentTrackingData: self._synchronize_trackings,
            SynchronizeShipmentTrackingProviders: self._synchronize_providers,
            AddTracking: self._add_tracking,
            AddCustomTracking: self._add_custom_tracking,
            DeleteTracking: self._delete_tracking,
        }

    def register_supported_actions(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(self, ShipmentAction)

    async def on_action(self, action: Action) -> None:
        await route(self._handlers, action)

    async def _synchronize_trackings(self, action: SynchronizeShipmentTrackingData) -> None:
        try:
            trackings = await self.remote.load_shipment_trackings(action.site_id, action.order_id)
            self.storage_manager.perform_write(
                lambda storage: upsert_and_prune(
                    storage,
                    ShipmentTrackingRecord,
                    trackings,
                    {"site_id": action.site_id, "order_id": action.order_id},
                )
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        log.debug("Stored %d trackings for order %s", len(trackings), action.order_id)
        complete(action.on_completion)

    async def _synchronize_providers(self, action: SynchronizeShipmentTrackingProviders) -> None:
        try:
            groups = await self.remote.load_shipment_tracking_provider_groups(
                action.site_id, action.order_id
            )
            self.storage_manager.perform_write(
                lambda storage: _store_provider_groups(storage, action.site_id, groups)
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _add_tracking(self, action: AddTracking) -> None:
        try:
            tracking = await self.remote.create_shipment_tracking(
                action.site_id,
                action.order_id,
                action.provider_name,
                action.tracking_number,
                action.date_shipped,
            )
            self._store_tracking(tracking)
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _add_custom_tracking(self, action: AddCustomTracking) -> None:
        try:
            tracking = await self.remote.create_shipment_tracking_with_custom_provider(
                action.site_id,
                action.order_id,
                action.tracking_provider,
                action.tracking_number,
                action.tracking_url,
                action.date_shipped,
            )
            self._store_tracking(tracking)
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _delete_tracking(self, action: DeleteTracking) -> None:
        try:
            await self.remote.delete_shipment_tracking(
                action.site_id, action.order_id, action.tracking_id
            )
            self.storage_manager.perform_write(
                lambda storage: storage.delete_where(
                    ShipmentTrackingRecord,
                    site_id=action.site_id,
                    order_id=action.order_id,
                    tracking_id=action.tracking_id,
                )
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    def _store_tracking(self, tracking: ShipmentTracking) -> None:
        self.storage_manager.perform_write(
            lambda storage: upsert_records(storage, ShipmentTrackingRecord, [tracking])
        )


def _store_provider_groups(
    storage: Storage, site_id: int, groups: list[ShipmentTrackingProviderGroup]
) -> None:
    scope = {"site_id": site_id}
    upsert_and_prune(storage, ShipmentTrackingProviderGroupRecord, groups, scope)
    providers = [provider for group in groups for provider in group.providers]
    records = upsert_records(storage, ShipmentTrackingProviderRecord, providers)
    prune_records(
        storage,
        ShipmentTrackingProviderRecord,
        scope,
        (record.natural_key for record in records),
    )
