"""Shipping label values produced by the WooCommerce Shipping extension."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from .enums import (
    ShippingLabelAddressType,
    ShippingLabelPaperSize,
    ShippingLabelRefundStatus,
    ShippingLabelStatus,
)

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True)
class ShippingLabelAddress:
    company: str = ""
    name: str = ""
    phone: str = ""
    country: str = ""
    state: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    postcode: str = ""


@dataclass(frozen=True, slots=True)
class ShippingLabelRefund:
    date_requested: datetime
    status: ShippingLabelRefundStatus


@dataclass(frozen=True, slots=True)
class ShippingLabel:
    site_id: int
    order_id: int
    shipping_label_id: int
    tracking_number: str
    carrier_id: str
    service_name: str
    status: ShippingLabelStatus
    date_created: datetime
    refundable_amount: Decimal
    currency: str
    package_name: str = ""
    product_ids: tuple[int, ...] = ()
    product_names: tuple[str, ...] = ()
    origin_address: ShippingLabelAddress = field(default_factory=ShippingLabelAddress)
    destination_address: ShippingLabelAddress = field(default_factory=ShippingLabelAddress)
    refund: ShippingLabelRefund | None = None

    @property
    def is_refunded(self) -> bool:
        return self.refund is not None


@dataclass(frozen=True, slots=True)
class ShippingLabelSettings:
    site_id: int
    order_id: int
    paper_size: ShippingLabelPaperSize


@dataclass(frozen=True, slots=True)
class OrderShippingLabels:
    """Everything the label endpoint returns for one order."""

    settings: ShippingLabelSettings
    labels: tuple[ShippingLabel, ...] = ()


@dataclass(frozen=True, slots=True)
class ShippingLabelPrintData:
    mime_type: str
    base64_content: str


@dataclass(frozen=True, slots=True)
class ShippingLabelAddressVerification:
    address: ShippingLabelAddress
    type: ShippingLabelAddressType


@dataclass(frozen=True, slots=True)
class ShippingLabelAddressValidationSuccess:
    address: ShippingLabelAddress
    is_trivial_normalization: bool


@dataclass(frozen=True, slots=True)
class ShippingLabelCustomPackage:
    title: str
    dimensions: str
    box_weight: Decimal
    max_weight: Decimal = Decimal(0)
    is_user_defined: bool = True
    is_letter: bool = False


@dataclass(frozen=True, slots=True)
class ShippingLabelPredefinedOption:
    carrier_id: str
    package_ids: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ShippingLabelCreationEligibility:
    is_eligible: bool
    reason: str | None = None
