"""Pydantic models describing WooCommerce REST payloads."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationInfo, field_validator

from woosync.domain.model import ShippingLabelPaperSize, ShippingLabelRefundStatus


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _false_to_none(value: object) -> object:
    if value is False or value == []:
        return None
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _from_epoch_millis(value: object) -> object:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=UTC)
    return value


class WooBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# Shipment tracking -----------------------------------------------------------


class ShipmentTrackingPayload(WooBaseModel):
    tracking_id: str
    tracking_number: str
    tracking_provider: str | None = None
    tracking_link: str | None = None
    date_shipped: str | None = None

    _normalize_date = field_validator("date_shipped", mode="before")(_blank_to_none)


class ShipmentTrackingProvidersPayload(RootModel[dict[str, dict[str, str]]]):
    """``{"Country": {"Provider name": "tracking url template"}}``."""


# Refunds ---------------------------------------------------------------------


REFUNDED_ITEM_ID_KEY = "_refunded_item_id"


class MetaDataPayload(WooBaseModel):
    key: str
    value: Any = None

    @field_validator("value")
    @classmethod
    def _coerce_refunded_item_id(cls, value: Any, info: ValidationInfo) -> Any:
        if info.data.get("key") != REFUNDED_ITEM_ID_KEY or value is None or value == "":
            return value
        if isinstance(value, bool) or not isinstance(value, int | str):
            raise ValueError("refunded item id must be an integer")
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"refunded item id must be an integer, got {value!r}") from None


class RefundLineItemPayload(WooBaseModel):
    id: int
    name: str
    product_id: int
    variation_id: int = 0
    quantity: Decimal
    price: Decimal
    subtotal: Decimal
    total: Decimal
    sku: str | None = None
    meta_data: list[MetaDataPayload] = Field(default_factory=list)

    _normalize_sku = field_validator("sku", mode="before")(_blank_to_none)

    @property
    def refunded_item_id(self) -> int | None:
        for meta in self.meta_data:
            if meta.key == REFUNDED_ITEM_ID_KEY and isinstance(meta.value, int):
                return meta.value
        return None


class RefundPayload(WooBaseModel):
    id: int
    date_created_gmt: datetime
    amount: Decimal
    reason: str = ""
    refunded_by: int = 0
    refunded_payment: bool | None = None
    line_items: list[RefundLineItemPayload] = Field(default_factory=list)

    _utc_created = field_validator("date_created_gmt")(_as_utc)


# Orders ----------------------------------------------------------------------


class OrderLineItemPayload(WooBaseModel):
    id: int
    name: str
    product_id: int
    variation_id: int = 0
    quantity: Decimal
    price: Decimal
    subtotal: Decimal
    total: Decimal
    sku: str | None = None

    _normalize_sku = field_validator("sku", mode="before")(_blank_to_none)


class OrderRefundPayload(WooBaseModel):
    id: int
    reason: str = ""
    total: Decimal


class OrderPayload(WooBaseModel):
    id: int
    number: str
    status: str
    currency: str
    date_created_gmt: datetime
    total: Decimal
    line_items: list[OrderLineItemPayload] = Field(default_factory=list)
    refunds: list[OrderRefundPayload] = Field(default_factory=list)

    _utc_created = field_validator("date_created_gmt")(_as_utc)

    @field_validator("number", mode="before")
    @classmethod
    def _coerce_number(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value


# Products --------------------------------------------------------------------


class ImagePayload(WooBaseModel):
    src: str


class ProductPayload(WooBaseModel):
    id: int
    name: str
    sku: str | None = None
    virtual: bool = False
    images: list[ImagePayload] = Field(default_factory=list)

    _normalize_sku = field_validator("sku", mode="before")(_blank_to_none)


class VariationAttributePayload(WooBaseModel):
    name: str
    option: str


class ProductVariationPayload(WooBaseModel):
    id: int
    price: Decimal
    sku: str | None = None
    image: ImagePayload | None = None
    attributes: list[VariationAttributePayload] = Field(default_factory=list)

    _normalize_sku = field_validator("sku", mode="before")(_blank_to_none)
    _normalize_image = field_validator("image", mode="before")(_false_to_none)

    @field_validator("price", mode="before")
    @classmethod
    def _blank_price(cls, value: object) -> object:
        return "0" if value in ("", None) else value


# Shipping labels -------------------------------------------------------------


class AddressPayload(WooBaseModel):
    company: str = ""
    name: str = ""
    phone: str = ""
    country: str = ""
    state: str = ""
    address_1: str = ""
    address_2: str = ""
    city: str = ""
    postcode: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_blank(cls, value: object) -> object:
        return "" if value is None else value


class LabelRefundPayload(WooBaseModel):
    request_date: datetime
    status: ShippingLabelRefundStatus

    _from_millis = field_validator("request_date", mode="before")(_from_epoch_millis)


class ShippingLabelPayload(WooBaseModel):
    label_id: int
    tracking: str | None = None
    refundable_amount: Decimal
    created: datetime
    carrier_id: str
    service_name: str
    status: str
    package_name: str = ""
    product_names: list[str] = Field(default_factory=list)
    product_ids: list[int] = Field(default_factory=list)
    currency: str
    refund: LabelRefundPayload | None = None

    _from_millis = field_validator("created", mode="before")(_from_epoch_millis)
    _normalize_refund = field_validator("refund", mode="before")(_false_to_none)


class FormDataPayload(WooBaseModel):
    origin: AddressPayload = Field(default_factory=AddressPayload)
    destination: AddressPayload = Field(default_factory=AddressPayload)


class OrderShippingLabelsPayload(WooBaseModel):
    paper_size: ShippingLabelPaperSize
    labels: list[ShippingLabelPayload] = Field(default_factory=list)
    form_data: FormDataPayload = Field(default_factory=FormDataPayload, alias="formData")


class PrintDataPayload(WooBaseModel):
    mime_type: str = Field(alias="mimeType")
    b64_content: str = Field(alias="b64Content")


class LabelRefundResponsePayload(WooBaseModel):
    refund: LabelRefundPayload


class AddressFieldErrorsPayload(WooBaseModel):
    address: str | None = None
    general: str | None = None


class AddressValidationPayload(WooBaseModel):
    success: bool
    normalized: AddressPayload | None = None
    is_trivial_normalization: bool = False
    field_errors: AddressFieldErrorsPayload | None = None


class SuccessPayload(WooBaseModel):
    success: bool


class CreationEligibilityPayload(WooBaseModel):
    is_eligible: bool
    reason: str | None = None
