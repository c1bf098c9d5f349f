"""Typed actions routed by the dispatcher.

Every action belongs to exactly one family; the family base class is the kind a
store registers for. Completion callbacks are excluded from equality so actions
compare by their parameters.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from woosync.domain.model import (
    FeedbackStatus,
    FeedbackType,
    Order,
    ProductSettings,
    ShipmentTrackingProvider,
    ShipmentTrackingProviderGroup,
    ShippingLabel,
    ShippingLabelAddressValidationSuccess,
    ShippingLabelAddressVerification,
    ShippingLabelCreationEligibility,
    ShippingLabelCustomPackage,
    ShippingLabelPaperSize,
    ShippingLabelPrintData,
    ShippingLabelRefund,
    StatsVersion,
    StatsVersionBanner,
)
from woosync.domain.result import ErrorCompletion, ResultCompletion


@dataclass(frozen=True, slots=True)
class Action:
    """Root of every action."""


def _completion() -> Any:
    return field(default=None, compare=False, repr=False)


# Shipment tracking -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ShipmentAction(Action):
    pass


@dataclass(frozen=True, slots=True)
class SynchronizeShipmentTrackingData(ShipmentAction):
    site_id: int
    order_id: int
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class SynchronizeShipmentTrackingProviders(ShipmentAction):
    site_id: int
    order_id: int
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class AddTracking(ShipmentAction):
    site_id: int
    order_id: int
    provider_group_name: str
    provider_name: str
    tracking_number: str
    date_shipped: date
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class AddCustomTracking(ShipmentAction):
    site_id: int
    order_id: int
    tracking_provider: str
    tracking_number: str
    tracking_url: str
    date_shipped: date
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class DeleteTracking(ShipmentAction):
    site_id: int
    order_id: int
    tracking_id: str
    on_completion: ErrorCompletion | None = _completion()


# Shipping labels -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ShippingLabelAction(Action):
    pass


@dataclass(frozen=True, slots=True)
class SynchronizeShippingLabels(ShippingLabelAction):
    site_id: int
    order_id: int
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class PrintShippingLabel(ShippingLabelAction):
    site_id: int
    shipping_label_id: int
    paper_size: ShippingLabelPaperSize
    on_completion: ResultCompletion[ShippingLabelPrintData] | None = _completion()


@dataclass(frozen=True, slots=True)
class RefundShippingLabel(ShippingLabelAction):
    shipping_label: ShippingLabel
    on_completion: ResultCompletion[ShippingLabelRefund] | None = _completion()


@dataclass(frozen=True, slots=True)
class ValidateAddress(ShippingLabelAction):
    site_id: int
    address: ShippingLabelAddressVerification
    on_completion: ResultCompletion[ShippingLabelAddressValidationSuccess] | None = _completion()


@dataclass(frozen=True, slots=True)
class CreatePackage(ShippingLabelAction):
    site_id: int
    custom_package: ShippingLabelCustomPackage
    on_completion: ResultCompletion[bool] | None = _completion()


@dataclass(frozen=True, slots=True)
class CheckCreationEligibility(ShippingLabelAction):
    site_id: int
    order_id: int
    can_create_payment_method: bool = False
    can_create_customs_form: bool = False
    can_create_package: bool = False
    on_completion: ResultCompletion[ShippingLabelCreationEligibility] | None = _completion()


# Refunds, orders, products -----------------------------------------------------


@dataclass(frozen=True, slots=True)
class RefundAction(Action):
    pass


@dataclass(frozen=True, slots=True)
class SynchronizeRefunds(RefundAction):
    site_id: int
    order_id: int
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class OrderAction(Action):
    pass


@dataclass(frozen=True, slots=True)
class RetrieveOrder(OrderAction):
    site_id: int
    order_id: int
    on_completion: ResultCompletion[Order] | None = _completion()


@dataclass(frozen=True, slots=True)
class DeleteOrder(OrderAction):
    """Drop an order and everything stored under its scope."""

    site_id: int
    order_id: int
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class ProductAction(Action):
    pass


@dataclass(frozen=True, slots=True)
class RetrieveProducts(ProductAction):
    site_id: int
    product_ids: Sequence[int]
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class SynchronizeProductVariations(ProductAction):
    site_id: int
    product_id: int
    on_completion: ErrorCompletion | None = _completion()


# App settings ------------------------------------------------------------------

type StoredTrackingProvider = tuple[
    ShipmentTrackingProvider | None, ShipmentTrackingProviderGroup | None
]


@dataclass(frozen=True, slots=True)
class AppSettingsAction(Action):
    pass


@dataclass(frozen=True, slots=True)
class AddTrackingProvider(AppSettingsAction):
    site_id: int
    provider_name: str
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadTrackingProvider(AppSettingsAction):
    site_id: int
    on_completion: ResultCompletion[StoredTrackingProvider] | None = _completion()


@dataclass(frozen=True, slots=True)
class AddCustomTrackingProvider(AppSettingsAction):
    site_id: int
    provider_name: str
    provider_url: str | None = None
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadCustomTrackingProvider(AppSettingsAction):
    site_id: int
    on_completion: ResultCompletion[ShipmentTrackingProvider] | None = _completion()


@dataclass(frozen=True, slots=True)
class ResetStoredProviders(AppSettingsAction):
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class SetStatsVersionLastShown(AppSettingsAction):
    site_id: int
    stats_version: StatsVersion
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadInitialStatsVersionToShow(AppSettingsAction):
    site_id: int
    on_completion: ResultCompletion[StatsVersion | None] | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadStatsVersionBannerVisibility(AppSettingsAction):
    banner: StatsVersionBanner
    on_completion: ResultCompletion[bool] | None = _completion()


@dataclass(frozen=True, slots=True)
class SetStatsVersionBannerVisibility(AppSettingsAction):
    banner: StatsVersionBanner
    should_show_banner: bool
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class ResetStatsVersionStates(AppSettingsAction):
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadProductsFeatureSwitch(AppSettingsAction):
    on_completion: Callable[[bool], None] | None = _completion()


@dataclass(frozen=True, slots=True)
class SetProductsFeatureSwitch(AppSettingsAction):
    is_enabled: bool
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class ResetFeatureSwitches(AppSettingsAction):
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class SetInstallationDateIfNecessary(AppSettingsAction):
    installation_date: datetime
    on_completion: ResultCompletion[bool] | None = _completion()


@dataclass(frozen=True, slots=True)
class UpdateFeedbackStatus(AppSettingsAction):
    feedback_type: FeedbackType
    status: FeedbackStatus
    status_date: datetime | None = None
    on_completion: ResultCompletion[None] | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadFeedbackVisibility(AppSettingsAction):
    feedback_type: FeedbackType
    on_completion: ResultCompletion[bool] | None = _completion()


@dataclass(frozen=True, slots=True)
class SetOrderAddOnsFeatureSwitchState(AppSettingsAction):
    is_enabled: bool
    on_completion: ResultCompletion[None] | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadOrderAddOnsSwitchState(AppSettingsAction):
    on_completion: ResultCompletion[bool] | None = _completion()


@dataclass(frozen=True, slots=True)
class LoadProductsSettings(AppSettingsAction):
    site_id: int
    on_completion: ResultCompletion[ProductSettings] | None = _completion()


@dataclass(frozen=True, slots=True)
class UpsertProductsSettings(AppSettingsAction):
    site_id: int
    sort: str | None = None
    stock_status_filter: str | None = None
    product_status_filter: str | None = None
    product_type_filter: str | None = None
    on_completion: ErrorCompletion | None = _completion()


@dataclass(frozen=True, slots=True)
class ResetProductsSettings(AppSettingsAction):
    on_completion: ErrorCompletion | None = _completion()
