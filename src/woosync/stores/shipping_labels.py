"""Shipping label store.

Only label lists and label refunds touch local storage; printing, address
validation, packages and eligibility checks are pass-through remote calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.actions import (
    CheckCreationEligibility,
    CreatePackage,
    PrintShippingLabel,
    RefundShippingLabel,
    ShippingLabelAction,
    SynchronizeShippingLabels,
    ValidateAddress,
)
from woosync.domain.errors import WooSyncError
from woosync.domain.records import ShippingLabelRecord, ShippingLabelSettingsRecord
from woosync.stores.base import complete, fail, report, route, succeed
from woosync.stores.reconcile import upsert_and_prune, upsert_records

if TYPE_CHECKING:
    from woosync.adapters.woocommerce import ShippingLabelRemote
    from woosync.domain.actions import Action
    from woosync.domain.dispatcher import Dispatcher
    from woosync.domain.model import OrderShippingLabels, ShippingLabel, ShippingLabelRefund
    from woosync.domain.ports import Storage, StorageManager


class ShippingLabelStore:
    def __init__(self, remote: ShippingLabelRemote, storage_manager: StorageManager) -> None:
        self.remote = remote
        self.storage_manager = storage_manager
        self._handlers = {
            SynchronizeShippingLabels: self._synchronize_shipping_labels,
            PrintShippingLabel: self._print_shipping_label,
            RefundShippingLabel: self._refund_shipping_label,
            ValidateAddress: self._validate_address,
            CreatePackage: self._create_package,
            CheckCreationEligibility: self._check_creation_eligibility,
        }

    def register_supported_actions(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(self, ShippingLabelAction)

    async def on_action(self, action: Action) -> None:
        await route(self._handlers, action)

    async def _synchronize_shipping_labels(self, action: SynchronizeShippingLabels) -> None:
        try:
            response = await self.remote.load_shipping_labels(action.site_id, action.order_id)
            self.storage_manager.perform_write(
                lambda storage: _store_order_labels(storage, action.site_id, action.order_id, response)
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _print_shipping_label(self, action: PrintShippingLabel) -> None:
        try:
            print_data = await self.remote.print_shipping_label(
                action.site_id, action.shipping_label_id, action.paper_size
            )
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, print_data)

    async def _refund_shipping_label(self, action: RefundShippingLabel) -> None:
        label = action.shipping_label
        try:
            refund = await self.remote.refund_shipping_label(
                label.site_id, label.order_id, label.shipping_label_id
            )
            self.storage_manager.perform_write(
                lambda storage: _store_label_refund(storage, label, refund)
            )
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, refund)

    async def _validate_address(self, action: ValidateAddress) -> None:
        try:
            validated = await self.remote.address_validation(action.site_id, action.address)
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, validated)

    async def _create_package(self, action: CreatePackage) -> None:
        try:
            created = await self.remote.create_package(action.site_id, action.custom_package)
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, created)

    async def _check_creation_eligibility(self, action: CheckCreationEligibility) -> None:
        try:
            eligibility = await self.remote.check_creation_eligibility(
                action.site_id,
                action.order_id,
                can_create_payment_method=action.can_create_payment_method,
                can_create_customs_form=action.can_create_customs_form,
                can_create_package=action.can_create_package,
            )
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, eligibility)


def _store_order_labels(
    storage: Storage, site_id: int, order_id: int, response: OrderShippingLabels
) -> None:
    upsert_and_prune(
        storage,
        ShippingLabelRecord,
        response.labels,
        {"site_id": site_id, "order_id": order_id},
    )
    upsert_records(storage, ShippingLabelSettingsRecord, [response.settings])


def _store_label_refund(storage: Storage, label: ShippingLabel, refund: ShippingLabelRefund) -> None:
    record = storage.load_shipping_label(label.site_id, label.order_id, label.shipping_label_id)
    if record is not None:
        record.update_refund(refund)
