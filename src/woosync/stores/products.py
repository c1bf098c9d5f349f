"""Product catalog store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.actions import ProductAction, RetrieveProducts, SynchronizeProductVariations
from woosync.domain.errors import WooSyncError
from woosync.domain.records import ProductRecord, ProductVariationRecord
from woosync.stores.base import complete, report, route
from woosync.stores.reconcile import upsert_and_prune, upsert_records

if TYPE_CHECKING:
    from woosync.adapters.woocommerce import ProductsRemote
    from woosync.domain.actions import Action
    from woosync.domain.dispatcher import Dispatcher
    from woosync.domain.ports import StorageManager


class ProductStore:
    def __init__(self, remote: ProductsRemote, storage_manager: StorageManager) -> None:
        self.remote = remote
        self.storage_manager = storage_manager
        self._handlers = {
            RetrieveProducts: self._retrieve_products,
            SynchronizeProductVariations: self._synchronize_variations,
        }

    def register_supported_actions(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(self, ProductAction)

    async def on_action(self, action: Action) -> None:
        await route(self._handlers, action)

    async def _retrieve_products(self, action: RetrieveProducts) -> None:
        # a partial product list says nothing about the rest of the catalog
        try:
            products = await self.remote.load_products(action.site_id, action.product_ids)
            if products:
                self.storage_manager.perform_write(
                    lambda storage: upsert_records(storage, ProductRecord, products)
                )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _synchronize_variations(self, action: SynchronizeProductVariations) -> None:
        try:
            variations = await self.remote.load_product_variations(action.site_id, action.product_id)
            self.storage_manager.perform_write(
                lambda storage: upsert_and_prune(
                    storage,
                    ProductVariationRecord,
                    variations,
                    {"site_id": action.site_id, "product_id": action.product_id},
                )
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)
