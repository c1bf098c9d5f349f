"""Translate WooCommerce payloads into domain values (and back for request bodies)."""

from __future__ import annotations

from datetime import date
from logging import getLogger
from typing import TYPE_CHECKING

from woosync.domain.errors import SerializationError
from woosync.domain.model import (
    Order,
    OrderItem,
    OrderItemRefund,
    OrderRefundCondensed,
    OrderShippingLabels,
    OrderStatus,
    Product,
    ProductVariation,
    ProductVariationAttribute,
    Refund,
    ShipmentTracking,
    ShipmentTrackingProvider,
    ShipmentTrackingProviderGroup,
    ShippingLabel,
    ShippingLabelAddress,
    ShippingLabelAddressValidationSuccess,
    ShippingLabelCreationEligibility,
    ShippingLabelPrintData,
    ShippingLabelRefund,
    ShippingLabelSettings,
    ShippingLabelStatus,
)

if TYPE_CHECKING:
    from woosync.domain.model import ShippingLabelCustomPackage

    from .schema import (
        AddressPayload,
        CreationEligibilityPayload,
        LabelRefundPayload,
        OrderPayload,
        OrderShippingLabelsPayload,
        PrintDataPayload,
        ProductPayload,
        ProductVariationPayload,
        RefundPayload,
        ShipmentTrackingPayload,
        ShipmentTrackingProvidersPayload,
    )

log = getLogger(__name__)


def parse_shipment_tracking(
    payload: ShipmentTrackingPayload, *, site_id: int, order_id: int
) -> ShipmentTracking:
    return ShipmentTracking(
        site_id=site_id,
        order_id=order_id,
        tracking_id=payload.tracking_id,
        tracking_number=payload.tracking_number,
        tracking_provider=payload.tracking_provider,
        tracking_url=payload.tracking_link,
        date_shipped=_parse_day(payload.date_shipped),
    )


def parse_provider_groups(
    payload: ShipmentTrackingProvidersPayload, *, site_id: int
) -> list[ShipmentTrackingProviderGroup]:
    return [
        ShipmentTrackingProviderGroup(
            site_id=site_id,
            name=group_name,
            providers=tuple(
                ShipmentTrackingProvider(site_id=site_id, group_name=group_name, name=name, url=url)
                for name, url in providers.items()
            ),
        )
        for group_name, providers in payload.root.items()
    ]


def parse_refund(payload: RefundPayload, *, site_id: int, order_id: int) -> Refund:
    items = tuple(
        OrderItemRefund(
            item_id=item.id,
            name=item.name,
            product_id=item.product_id,
            variation_id=item.variation_id,
            quantity=item.quantity,
            price=item.price,
            subtotal=item.subtotal,
            total=item.total,
            sku=item.sku,
            refunded_item_id=item.refunded_item_id,
        )
        for item in payload.line_items
    )
    return Refund(
        site_id=site_id,
        order_id=order_id,
        refund_id=payload.id,
        date_created=payload.date_created_gmt,
        amount=payload.amount,
        reason=payload.reason,
        refunded_by_user_id=payload.refunded_by,
        is_automated=payload.refunded_payment,
        items=items,
    )


def parse_order(payload: OrderPayload, *, site_id: int) -> Order:
    return Order(
        site_id=site_id,
        order_id=payload.id,
        number=payload.number,
        status=OrderStatus.from_raw(payload.status),
        currency=payload.currency,
        date_created=payload.date_created_gmt,
        total=payload.total,
        items=tuple(
            OrderItem(
                item_id=item.id,
                name=item.name,
                product_id=item.product_id,
                variation_id=item.variation_id,
                quantity=item.quantity,
                price=item.price,
                subtotal=item.subtotal,
                total=item.total,
                sku=item.sku,
            )
            for item in payload.line_items
        ),
        refunds=tuple(
            OrderRefundCondensed(refund_id=refund.id, reason=refund.reason, total=refund.total)
            for refund in payload.refunds
        ),
    )


def parse_product(payload: ProductPayload, *, site_id: int) -> Product:
    return Product(
        site_id=site_id,
        product_id=payload.id,
        name=payload.name,
        sku=payload.sku,
        virtual=payload.virtual,
        image_urls=tuple(image.src for image in payload.images),
    )


def parse_product_variation(
    payload: ProductVariationPayload, *, site_id: int, product_id: int
) -> ProductVariation:
    return ProductVariation(
        site_id=site_id,
        product_id=product_id,
        variation_id=payload.id,
        price=payload.price,
        sku=payload.sku,
        image_url=payload.image.src if payload.image else None,
        attributes=tuple(
            ProductVariationAttribute(name=attribute.name, option=attribute.option)
            for attribute in payload.attributes
        ),
    )


# Shipping labels -------------------------------------------------------------


def parse_address(payload: AddressPayload) -> ShippingLabelAddress:
    return ShippingLabelAddress(
        company=payload.company,
        name=payload.name,
        phone=payload.phone,
        country=payload.country,
        state=payload.state,
        address1=payload.address_1,
        address2=payload.address_2,
        city=payload.city,
        postcode=payload.postcode,
    )


def address_to_parameters(address: ShippingLabelAddress) -> dict[str, str]:
    return {
        "company": address.company,
        "name": address.name,
        "phone": address.phone,
        "country": address.country,
        "state": address.state,
        "address_1": address.address1,
        "address_2": address.address2,
        "city": address.city,
        "postcode": address.postcode,
    }


def custom_package_to_parameters(package: ShippingLabelCustomPackage) -> dict[str, object]:
    for name, weight in (("box_weight", package.box_weight), ("max_weight", package.max_weight)):
        if not weight.is_finite():
            raise SerializationError(f"{name} must be a finite number, got {weight}")
    return {
        "is_user_defined": package.is_user_defined,
        "name": package.title,
        "is_letter": package.is_letter,
        "inner_dimensions": package.dimensions,
        "box_weight": float(package.box_weight),
        "max_weight": float(package.max_weight),
    }


def parse_label_refund(payload: LabelRefundPayload) -> ShippingLabelRefund:
    return ShippingLabelRefund(
        date_requested=payload.request_date,
        status=payload.status,
    )


def parse_order_shipping_labels(
    payload: OrderShippingLabelsPayload, *, site_id: int, order_id: int
) -> OrderShippingLabels:
    origin = parse_address(payload.form_data.origin)
    destination = parse_address(payload.form_data.destination)
    labels = tuple(
        ShippingLabel(
            site_id=site_id,
            order_id=order_id,
            shipping_label_id=label.label_id,
            tracking_number=label.tracking or "",
            carrier_id=label.carrier_id,
            service_name=label.service_name,
            status=ShippingLabelStatus.from_raw(label.status),
            date_created=label.created,
            refundable_amount=label.refundable_amount,
            currency=label.currency,
            package_name=label.package_name,
            product_ids=tuple(label.product_ids),
            product_names=tuple(label.product_names),
            origin_address=origin,
            destination_address=destination,
            refund=parse_label_refund(label.refund) if label.refund else None,
        )
        for label in payload.labels
    )
    settings = ShippingLabelSettings(
        site_id=site_id, order_id=order_id, paper_size=payload.paper_size
    )
    return OrderShippingLabels(settings=settings, labels=labels)


def parse_print_data(payload: PrintDataPayload) -> ShippingLabelPrintData:
    return ShippingLabelPrintData(mime_type=payload.mime_type, base64_content=payload.b64_content)


def parse_address_validation(
    address: AddressPayload, *, is_trivial_normalization: bool
) -> ShippingLabelAddressValidationSuccess:
    return ShippingLabelAddressValidationSuccess(
        address=parse_address(address), is_trivial_normalization=is_trivial_normalization
    )


def parse_creation_eligibility(
    payload: CreationEligibilityPayload,
) -> ShippingLabelCreationEligibility:
    return ShippingLabelCreationEligibility(is_eligible=payload.is_eligible, reason=payload.reason)


def _parse_day(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        log.debug("Ignoring unparseable shipping date %r", value)
        return None
