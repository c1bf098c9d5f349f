"""Application wiring and orchestration entry points."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from woosync.adapters.file_storage import JsonFileStorage
from woosync.adapters.network import HttpTransport
from woosync.adapters.sqlalchemy import create_storage_manager
from woosync.adapters.woocommerce import (
    OrdersRemote,
    ProductsRemote,
    RefundsRemote,
    ShipmentsRemote,
    ShippingLabelRemote,
)
from woosync.config import get_database_config, get_storage_config, get_woocommerce_config
from woosync.domain.actions import (
    ResetFeatureSwitches,
    ResetProductsSettings,
    ResetStatsVersionStates,
    ResetStoredProviders,
    RetrieveOrder,
    RetrieveProducts,
    SynchronizeProductVariations,
    SynchronizeRefunds,
    SynchronizeShipmentTrackingData,
    SynchronizeShippingLabels,
)
from woosync.domain.dispatcher import Dispatcher
from woosync.domain.order_details import OrderDetails, load_order_details
from woosync.stores import (
    AppSettingsStore,
    OrderStore,
    ProductStore,
    RefundStore,
    ShipmentStore,
    ShippingLabelStore,
)

if TYPE_CHECKING:
    from pathlib import Path

    from woosync.config import StorageConfig, WooCommerceConfig
    from woosync.domain.actions import Action
    from woosync.domain.ports import FileStorage, StorageManager, Transport
    from woosync.domain.result import Result
    from woosync.stores import Store

log = getLogger(__name__)


@dataclass
class AppContext:
    """Everything a caller needs: one frozen dispatcher and the storage it feeds."""

    dispatcher: Dispatcher
    storage_manager: StorageManager
    transport: Transport
    stores: tuple[Store, ...] = ()

    async def dispatch(self, action: Action) -> None:
        await self.dispatcher.dispatch(action)


def create_app_context(
    transport: Transport,
    storage_manager: StorageManager,
    settings_dir: Path,
    *,
    file_storage: FileStorage | None = None,
    strict: bool = True,
) -> AppContext:
    dispatcher = Dispatcher(strict=strict)
    stores: tuple[Store, ...] = (
        ShipmentStore(ShipmentsRemote(transport), storage_manager),
        ShippingLabelStore(ShippingLabelRemote(transport), storage_manager),
        RefundStore(RefundsRemote(transport), storage_manager),
        OrderStore(OrdersRemote(transport), storage_manager),
        ProductStore(ProductsRemote(transport), storage_manager),
        AppSettingsStore(file_storage or JsonFileStorage(), storage_manager, settings_dir),
    )
    for store in stores:
        store.register_supported_actions(dispatcher)
    dispatcher.freeze()
    return AppContext(
        dispatcher=dispatcher,
        storage_manager=storage_manager,
        transport=transport,
        stores=stores,
    )


def build_http_app_context(
    config: WooCommerceConfig | None = None,
    storage_config: StorageConfig | None = None,
) -> AppContext:
    """Context talking to a real site, persisting under the configured data dir."""
    woo_config = config or get_woocommerce_config()
    storage = storage_config or get_storage_config()
    database = get_database_config(storage=storage)
    log.info("Using database %s for site %s", database.uri, woo_config.site_id)
    return create_app_context(
        HttpTransport(woo_config),
        create_storage_manager(database.uri),
        storage.settings_dir(),
    )


@dataclass
class SyncOrderResult:
    details: OrderDetails | None
    errors: list[Exception] = field(default_factory=list)


class _Collector:
    def __init__(self) -> None:
        self.errors: list[Exception] = []

    def on_error(self, error: Exception | None) -> None:
        if error is not None:
            self.errors.append(error)

    def on_result(self, result: Result[object]) -> None:
        if not result.is_success:
            self.errors.append(result.error)


async def sync_order(context: AppContext, site_id: int, order_id: int) -> SyncOrderResult:
    """Refresh one order with its refunds, labels, trackings and products.

    The order-scoped syncs run concurrently; products are fetched once the order
    says which ones it contains. Failures are collected rather than raised so a
    partial refresh still yields a read model.
    """
    collector = _Collector()
    log.info("Starting sync of order %s on site %s", order_id, site_id)
    await asyncio.gather(
        context.dispatch(RetrieveOrder(site_id, order_id, collector.on_result)),
        context.dispatch(SynchronizeRefunds(site_id, order_id, collector.on_error)),
        context.dispatch(SynchronizeShippingLabels(site_id, order_id, collector.on_error)),
        context.dispatch(SynchronizeShipmentTrackingData(site_id, order_id, collector.on_error)),
    )

    with context.storage_manager.reading() as storage:
        order = storage.load_order(site_id, order_id)
        items = order.to_read_only().items if order is not None else ()

    product_ids = sorted({item.product_id for item in items})
    variation_parents = sorted({item.product_id for item in items if item.variation_id})
    if product_ids:
        await asyncio.gather(
            context.dispatch(RetrieveProducts(site_id, product_ids, collector.on_error)),
            *(
                context.dispatch(
                    SynchronizeProductVariations(site_id, product_id, collector.on_error)
                )
                for product_id in variation_parents
            ),
        )

    with context.storage_manager.reading() as storage:
        details = load_order_details(storage, site_id, order_id)

    log.info(
        f"Finished sync of order {order_id}: found={details is not None}, "
        f"errors={len(collector.errors)}"
    )
    return SyncOrderResult(details=details, errors=collector.errors)


async def reset_settings(context: AppContext) -> list[Exception]:
    """Forget every per-device setting and return the failures, if any."""
    collector = _Collector()
    for action in (
        ResetStoredProviders(collector.on_error),
        ResetStatsVersionStates(collector.on_error),
        ResetFeatureSwitches(collector.on_error),
        ResetProductsSettings(collector.on_error),
    ):
        await context.dispatch(action)
    return collector.errors
