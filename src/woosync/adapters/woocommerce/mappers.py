"""Mappers turning raw response bodies into domain values.

Mappers are pure: they decode JSON, unwrap the ``{"data": ...}`` envelope added
by the Jetpack tunnel, validate the payload and translate it. Any mismatch is
reported as a ``MappingError`` naming the offending field.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError

from woosync.domain.errors import MappingError, ShippingLabelAddressValidationError

from .schema import (
    AddressValidationPayload,
    CreationEligibilityPayload,
    LabelRefundResponsePayload,
    OrderPayload,
    OrderShippingLabelsPayload,
    PrintDataPayload,
    ProductPayload,
    ProductVariationPayload,
    RefundPayload,
    ShipmentTrackingPayload,
    ShipmentTrackingProvidersPayload,
    SuccessPayload,
)
from .translator import (
    parse_address_validation,
    parse_creation_eligibility,
    parse_label_refund,
    parse_order,
    parse_order_shipping_labels,
    parse_print_data,
    parse_product,
    parse_product_variation,
    parse_provider_groups,
    parse_refund,
    parse_shipment_tracking,
)

if TYPE_CHECKING:
    from woosync.domain.model import (
        Order,
        OrderShippingLabels,
        Product,
        ProductVariation,
        Refund,
        ShipmentTracking,
        ShipmentTrackingProviderGroup,
        ShippingLabelAddressValidationSuccess,
        ShippingLabelCreationEligibility,
        ShippingLabelPrintData,
        ShippingLabelRefund,
    )

ROOT_FIELD = "<root>"


@runtime_checkable
class Mapper[T](Protocol):
    def map(self, response: bytes) -> T: ...


def decode_json(response: bytes) -> object:
    if not response.strip():
        raise MappingError(ROOT_FIELD, "empty response body")
    try:
        return json.loads(response)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MappingError(ROOT_FIELD, f"invalid JSON: {exc}") from exc


def unwrap_envelope(payload: object) -> object:
    """Strip the Jetpack ``{"data": ...}`` wrapper when it is the only key."""

    if isinstance(payload, dict) and set(payload) == {"data"}:
        return payload["data"]
    return payload


def validate[P](adapter: TypeAdapter[P], response: bytes) -> P:
    payload = unwrap_envelope(decode_json(response))
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        raise _mapping_error(exc) from exc


def validate_model[M: BaseModel](model: type[M], response: bytes) -> M:
    payload = unwrap_envelope(decode_json(response))
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise _mapping_error(exc) from exc


def _mapping_error(exc: ValidationError) -> MappingError:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or ROOT_FIELD
    return MappingError(location, first["msg"])


_TRACKING_LIST = TypeAdapter(list[ShipmentTrackingPayload])
_REFUND_LIST = TypeAdapter(list[RefundPayload])
_PRODUCT_LIST = TypeAdapter(list[ProductPayload])
_VARIATION_LIST = TypeAdapter(list[ProductVariationPayload])


# Shipment tracking -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ShipmentTrackingListMapper:
    site_id: int
    order_id: int

    def map(self, response: bytes) -> list[ShipmentTracking]:
        return [
            parse_shipment_tracking(payload, site_id=self.site_id, order_id=self.order_id)
            for payload in validate(_TRACKING_LIST, response)
        ]


@dataclass(frozen=True, slots=True)
class NewShipmentTrackingMapper:
    site_id: int
    order_id: int

    def map(self, response: bytes) -> ShipmentTracking:
        payload = validate_model(ShipmentTrackingPayload, response)
        return parse_shipment_tracking(payload, site_id=self.site_id, order_id=self.order_id)


@dataclass(frozen=True, slots=True)
class ShipmentTrackingProviderListMapper:
    site_id: int

    def map(self, response: bytes) -> list[ShipmentTrackingProviderGroup]:
        payload = validate_model(ShipmentTrackingProvidersPayload, response)
        return parse_provider_groups(payload, site_id=self.site_id)


class AcknowledgementMapper:
    """Accepts any JSON body; used for endpoints whose reply carries no data we keep."""

    def map(self, response: bytes) -> None:
        decode_json(response)


# Refunds, orders, products -----------------------------------------------------


@dataclass(frozen=True, slots=True)
class RefundListMapper:
    site_id: int
    order_id: int

    def map(self, response: bytes) -> list[Refund]:
        return [
            parse_refund(payload, site_id=self.site_id, order_id=self.order_id)
            for payload in validate(_REFUND_LIST, response)
        ]


@dataclass(frozen=True, slots=True)
class OrderMapper:
    site_id: int

    def map(self, response: bytes) -> Order:
        return parse_order(validate_model(OrderPayload, response), site_id=self.site_id)


@dataclass(frozen=True, slots=True)
class ProductListMapper:
    site_id: int

    def map(self, response: bytes) -> list[Product]:
        return [
            parse_product(payload, site_id=self.site_id)
            for payload in validate(_PRODUCT_LIST, response)
        ]


@dataclass(frozen=True, slots=True)
class ProductVariationListMapper:
    site_id: int
    product_id: int

    def map(self, response: bytes) -> list[ProductVariation]:
        return [
            parse_product_variation(payload, site_id=self.site_id, product_id=self.product_id)
            for payload in validate(_VARIATION_LIST, response)
        ]


# Shipping labels -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class OrderShippingLabelListMapper:
    site_id: int
    order_id: int

    def map(self, response: bytes) -> OrderShippingLabels:
        payload = validate_model(OrderShippingLabelsPayload, response)
        return parse_order_shipping_labels(payload, site_id=self.site_id, order_id=self.order_id)


class ShippingLabelPrintDataMapper:
    def map(self, response: bytes) -> ShippingLabelPrintData:
        return parse_print_data(validate_model(PrintDataPayload, response))


class ShippingLabelRefundMapper:
    def map(self, response: bytes) -> ShippingLabelRefund:
        return parse_label_refund(validate_model(LabelRefundResponsePayload, response).refund)


class ShippingLabelAddressValidationMapper:
    """Maps a normalization reply, raising when the server rejected the address."""

    def map(self, response: bytes) -> ShippingLabelAddressValidationSuccess:
        payload = validate_model(AddressValidationPayload, response)
        if not payload.success or payload.normalized is None:
            errors = payload.field_errors
            raise ShippingLabelAddressValidationError(
                address_error=errors.address if errors else None,
                general_error=errors.general if errors else None,
            )
        return parse_address_validation(
            payload.normalized, is_trivial_normalization=payload.is_trivial_normalization
        )


class SuccessDataResultMapper:
    def map(self, response: bytes) -> bool:
        return validate_model(SuccessPayload, response).success


class ShippingLabelCreationEligibilityMapper:
    def map(self, response: bytes) -> ShippingLabelCreationEligibility:
        return parse_creation_eligibility(validate_model(CreationEligibilityPayload, response))


if TYPE_CHECKING:
    _tracking_check: Mapper[list[ShipmentTracking]] = ShipmentTrackingListMapper(0, 0)
    _labels_check: Mapper[OrderShippingLabels] = OrderShippingLabelListMapper(0, 0)
    _order_check: Mapper[Order] = OrderMapper(0)
