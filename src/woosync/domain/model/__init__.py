"""Public domain model surface."""

from __future__ import annotations

from woosync.domain.model.enums import (
    FeedbackStatus,
    FeedbackType,
    OrderStatus,
    ShippingLabelAddressType,
    ShippingLabelPaperSize,
    ShippingLabelRefundStatus,
    ShippingLabelStatus,
    StatsVersion,
    StatsVersionBanner,
)
from woosync.domain.model.orders import Order, OrderItem, OrderRefundCondensed
from woosync.domain.model.products import Product, ProductVariation, ProductVariationAttribute
from woosync.domain.model.refunds import OrderItemRefund, Refund
from woosync.domain.model.settings import (
    FeedbackSettings,
    GeneralAppSettings,
    PreselectedProvider,
    ProductSettings,
    ProductsFeatureSwitch,
    StatsVersionBannerVisibility,
    StatsVersionBySite,
    StoredProductSettings,
)
from woosync.domain.model.shipments import (
    ShipmentTracking,
    ShipmentTrackingProvider,
    ShipmentTrackingProviderGroup,
)
from woosync.domain.model.shipping_labels import (
    OrderShippingLabels,
    ShippingLabel,
    ShippingLabelAddress,
    ShippingLabelAddressValidationSuccess,
    ShippingLabelAddressVerification,
    ShippingLabelCreationEligibility,
    ShippingLabelCustomPackage,
    ShippingLabelPredefinedOption,
    ShippingLabelPrintData,
    ShippingLabelRefund,
    ShippingLabelSettings,
)

__all__ = [
    "FeedbackSettings",
    "FeedbackStatus",
    "FeedbackType",
    "GeneralAppSettings",
    "Order",
    "OrderItem",
    "OrderItemRefund",
    "OrderRefundCondensed",
    "OrderShippingLabels",
    "OrderStatus",
    "PreselectedProvider",
    "Product",
    "ProductSettings",
    "ProductVariation",
    "ProductVariationAttribute",
    "ProductsFeatureSwitch",
    "Refund",
    "ShipmentTracking",
    "ShipmentTrackingProvider",
    "ShipmentTrackingProviderGroup",
    "ShippingLabel",
    "ShippingLabelAddress",
    "ShippingLabelAddressType",
    "ShippingLabelAddressValidationSuccess",
    "ShippingLabelAddressVerification",
    "ShippingLabelCreationEligibility",
    "ShippingLabelCustomPackage",
    "ShippingLabelPaperSize",
    "ShippingLabelPredefinedOption",
    "ShippingLabelPrintData",
    "ShippingLabelRefund",
    "ShippingLabelRefundStatus",
    "ShippingLabelSettings",
    "ShippingLabelStatus",
    "StatsVersion",
    "StatsVersionBanner",
    "StatsVersionBannerVisibility",
    "StatsVersionBySite",
    "StoredProductSettings",
]
