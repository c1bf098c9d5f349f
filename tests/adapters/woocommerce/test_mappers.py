from __future__ import annotations

import json
from datetime import UTC, date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from woosync.adapters.woocommerce.mappers import (
    AcknowledgementMapper,
    OrderMapper,
    OrderShippingLabelListMapper,
    ProductVariationListMapper,
    RefundListMapper,
    ShipmentTrackingListMapper,
    ShipmentTrackingProviderListMapper,
    ShippingLabelAddressValidationMapper,
    ShippingLabelPrintDataMapper,
    unwrap_envelope,
)
from woosync.domain.errors import MappingError, ShippingLabelAddressValidationError
from woosync.domain.model import (
    OrderStatus,
    ShippingLabelPaperSize,
    ShippingLabelRefundStatus,
    ShippingLabelStatus,
)

FIXTURES = Path("tests/data/responses")


def _load(name: str) -> bytes:
    return (FIXTURES / f"{name}.json").read_bytes()


def test_tracking_list_mapper_parses_all_entries() -> None:
    trackings = ShipmentTrackingListMapper(1234, 963).map(_load("shipment_tracking_multiple"))

    assert len(trackings) == 4
    first = trackings[0]
    assert first.tracking_id == "b1b94eecb1eb1c1edf3fa041efffd015"
    assert first.tracking_provider == "USPS"
    assert first.date_shipped == date(2019, 2, 15)
    assert (first.site_id, first.order_id) == (1234, 963)
    last = trackings[-1]
    assert last.tracking_provider is None
    assert last.tracking_url is None
    assert last.date_shipped is None


def test_provider_mapper_groups_by_country() -> None:
    groups = ShipmentTrackingProviderListMapper(1234).map(_load("shipment_tracking_providers"))

    by_name = {group.name: group for group in groups}
    assert set(by_name) == {"Australia", "Sweden", "United States"}
    australia = by_name["Australia"]
    assert [provider.name for provider in australia.providers] == [
        "Australia Post",
        "Fastway Couriers",
    ]
    assert all(provider.group_name == "Australia" for provider in australia.providers)


def test_refund_mapper_keeps_refunded_item_reference() -> None:
    refunds = RefundListMapper(1234, 963).map(_load("refunds-all"))

    assert [refund.refund_id for refund in refunds] == [622, 623]
    beanie = refunds[0].items[0]
    assert beanie.refunded_item_id == 891
    assert beanie.quantity == Decimal(-1)
    assert beanie.sku is None
    assert refunds[0].date_created == datetime(2019, 10, 9, 16, 18, 23, tzinfo=UTC)
    assert refunds[1].items[0].refunded_item_id is None


def _refund_with_meta(value: object) -> bytes:
    refund = {
        "id": 700,
        "date_created_gmt": "2019-10-09T16:18:23",
        "amount": "10.00",
        "line_items": [
            {
                "id": 1,
                "name": "Beanie",
                "product_id": 52,
                "quantity": -1,
                "price": "10.00",
                "subtotal": "-10.00",
                "total": "-10.00",
                "meta_data": [{"key": "_refunded_item_id", "value": value}],
            }
        ],
    }
    return json.dumps([refund]).encode()


@pytest.mark.parametrize("value", ["n/a", {"id": 891}, [891], True, "1.5"])
def test_refund_mapper_rejects_unreadable_refunded_item_id(value: object) -> None:
    with pytest.raises(MappingError) as exc:
        RefundListMapper(1234, 963).map(_refund_with_meta(value))

    assert exc.value.field == "0.line_items.0.meta_data.0.value"


@pytest.mark.parametrize(("value", "expected"), [(891, 891), (" 891 ", 891), ("", None)])
def test_refund_mapper_reads_refunded_item_id(value: object, expected: int | None) -> None:
    refunds = RefundListMapper(1234, 963).map(_refund_with_meta(value))

    assert refunds[0].items[0].refunded_item_id == expected


def test_order_mapper_coerces_number_and_status() -> None:
    order = OrderMapper(1234).map(_load("order"))

    assert order.number == "963"
    assert order.status is OrderStatus.PROCESSING
    assert [item.item_id for item in order.items] == [890, 891]
    assert order.items[0].variation_id == 1201
    assert [refund.refund_id for refund in order.refunds] == [622, 623]


def test_order_mapper_names_the_bad_field() -> None:
    with pytest.raises(MappingError) as exc:
        OrderMapper(1234).map(_load("order-malformed"))

    assert exc.value.field == "date_created_gmt"


def test_variation_mapper_defaults_blank_price() -> None:
    variations = ProductVariationListMapper(1234, 52).map(_load("product-variations"))

    assert variations[0].image_url is not None
    assert variations[0].attributes[0].option == "Blue"
    assert variations[1].price == Decimal(0)
    assert variations[1].image_url is None


def test_shipping_label_mapper_reads_labels_and_settings() -> None:
    response = OrderShippingLabelListMapper(1234, 963).map(_load("order-shipping-labels"))

    assert response.settings.paper_size is ShippingLabelPaperSize.LABEL
    assert [label.shipping_label_id for label in response.labels] == [1825, 1824]
    first, second = response.labels
    assert first.status is ShippingLabelStatus.PURCHASED
    assert first.refund is None
    assert first.product_ids == (1201, 61)
    assert first.refundable_amount == Decimal("7.05")
    assert first.origin_address.address2 == "#343"
    assert first.destination_address.phone == ""
    assert second.refund is not None
    assert second.refund.status is ShippingLabelRefundStatus.PENDING


def test_shipping_label_mapper_treats_false_refund_as_missing() -> None:
    response = OrderShippingLabelListMapper(1234, 963).map(
        _load("order-shipping-labels-single")
    )

    assert response.labels[0].refund is None
    assert response.settings.paper_size is ShippingLabelPaperSize.LETTER


def test_print_data_mapper() -> None:
    data = ShippingLabelPrintDataMapper().map(_load("shipping-label-print"))

    assert data.mime_type == "application/pdf"
    assert data.base64_content.startswith("JVBERi0")


def test_address_validation_mapper_success() -> None:
    result = ShippingLabelAddressValidationMapper().map(
        _load("shipping-label-address-validation-success")
    )

    assert result.address.name == "Anitaa"
    assert result.address.address1 == "60 29TH ST # 343"
    assert result.address.city == "SAN FRANCISCO"
    assert result.is_trivial_normalization is False


def test_address_validation_mapper_raises_field_errors() -> None:
    with pytest.raises(ShippingLabelAddressValidationError) as exc:
        ShippingLabelAddressValidationMapper().map(
            _load("shipping-label-address-validation-error")
        )

    assert exc.value.address_error == "Address not found"
    assert exc.value.general_error == "House number is missing"


@pytest.mark.parametrize("body", [b"", b"   ", b"<html>", b"{"])
def test_unreadable_bodies_are_mapping_errors(body: bytes) -> None:
    with pytest.raises(MappingError) as exc:
        OrderMapper(1234).map(body)

    assert exc.value.field == "<root>"


def test_acknowledgement_mapper_accepts_any_json() -> None:
    AcknowledgementMapper().map(_load("shipment_tracking_delete"))


def test_unwrap_envelope_only_strips_lone_data_key() -> None:
    assert unwrap_envelope({"data": [1]}) == [1]
    assert unwrap_envelope({"data": [1], "code": "x"}) == {"data": [1], "code": "x"}
    assert unwrap_envelope([1]) == [1]
