from __future__ import annotations

import asyncio
import json
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest

from woosync.adapters.network import MockTransport, NetworkError
from woosync.adapters.woocommerce import (
    OrdersRemote,
    ProductsRemote,
    RefundsRemote,
    ShipmentsRemote,
    ShippingLabelRemote,
)
from woosync.adapters.woocommerce.remote import encode_parameters, raise_for_error_envelope
from woosync.domain.errors import (
    DotcomError,
    SerializationError,
    ShippingLabelAddressValidationError,
)
from woosync.domain.model import (
    ShippingLabelAddress,
    ShippingLabelAddressType,
    ShippingLabelAddressVerification,
    ShippingLabelCustomPackage,
    ShippingLabelPaperSize,
    ShippingLabelRefundStatus,
)
from woosync.domain.ports import HTTPMethod, WooApiVersion

SITE_ID = 1234
ORDER_ID = 963


def _package(box_weight: str = "1.5") -> ShippingLabelCustomPackage:
    return ShippingLabelCustomPackage(
        title="Test Package",
        dimensions="10 x 10 x 10",
        box_weight=Decimal(box_weight),
        max_weight=Decimal(0),
    )


# Shipment tracking ---------------------------------------------------------


def test_load_shipment_trackings_targets_v2(network: MockTransport) -> None:
    network.simulate_response("shipment-trackings/", filename="shipment_tracking_multiple")

    trackings = asyncio.run(ShipmentsRemote(network).load_shipment_trackings(SITE_ID, ORDER_ID))

    assert len(trackings) == 4
    request = network.requests[0]
    assert request.api_version is WooApiVersion.MARK2
    assert request.path == f"orders/{ORDER_ID}/shipment-trackings/"


def test_load_trackings_plugin_not_active(network: MockTransport) -> None:
    network.simulate_response("shipment-trackings/", filename="shipment_tracking_plugin_not_active")

    with pytest.raises(DotcomError) as exc:
        asyncio.run(ShipmentsRemote(network).load_shipment_trackings(SITE_ID, ORDER_ID))

    assert exc.value.code == "rest_no_route"


def test_create_tracking_echoes_the_created_tracking(network: MockTransport) -> None:
    network.simulate_response("shipment-trackings/", filename="shipment_tracking_new")

    tracking = asyncio.run(
        ShipmentsRemote(network).create_shipment_tracking(
            SITE_ID, ORDER_ID, "Australia Post", "123456781234567812345678", date(2019, 4, 18)
        )
    )

    assert tracking.tracking_number == "123456781234567812345678"
    assert tracking.tracking_provider == "Australia Post"
    request = network.requests[0]
    assert request.method is HTTPMethod.POST
    assert request.parameters == {
        "tracking_provider": "Australia Post",
        "tracking_number": "123456781234567812345678",
        "date_shipped": "2019-04-18",
    }


def test_create_tracking_with_custom_provider_parameters(network: MockTransport) -> None:
    network.simulate_response("shipment-trackings/", filename="shipment_tracking_new_custom_provider")

    tracking = asyncio.run(
        ShipmentsRemote(network).create_shipment_tracking_with_custom_provider(
            SITE_ID,
            ORDER_ID,
            "HK Post",
            "1111222",
            "https://www.hongkongpost.hk/track?number=1111222",
            date(2019, 4, 18),
        )
    )

    assert tracking.tracking_provider == "HK Post"
    parameters = network.requests[0].parameters or {}
    assert parameters["custom_tracking_provider"] == "HK Post"
    assert parameters["custom_tracking_link"] == "https://www.hongkongpost.hk/track?number=1111222"


def test_delete_tracking_uses_tracking_path(network: MockTransport) -> None:
    network.simulate_response("shipment-trackings/abc", filename="shipment_tracking_delete")

    asyncio.run(ShipmentsRemote(network).delete_shipment_tracking(SITE_ID, ORDER_ID, "abc"))

    assert network.requests[0].method is HTTPMethod.DELETE


def test_load_provider_groups(network: MockTransport) -> None:
    network.simulate_response("providers", filename="shipment_tracking_providers")

    groups = asyncio.run(
        ShipmentsRemote(network).load_shipment_tracking_provider_groups(SITE_ID, ORDER_ID)
    )

    assert len(groups) == 3


def test_transport_errors_pass_through(network: MockTransport) -> None:
    network.simulate_error("shipment-trackings/", NetworkError("offline"))

    with pytest.raises(NetworkError):
        asyncio.run(ShipmentsRemote(network).load_shipment_trackings(SITE_ID, ORDER_ID))


# Shipping labels -----------------------------------------------------------


def test_load_shipping_labels(network: MockTransport) -> None:
    network.simulate_response(f"label/{ORDER_ID}", filename="order-shipping-labels")

    response = asyncio.run(ShippingLabelRemote(network).load_shipping_labels(SITE_ID, ORDER_ID))

    assert len(response.labels) == 2
    assert network.requests[0].api_version is WooApiVersion.CONNECT


def test_print_shipping_label_parameters(network: MockTransport) -> None:
    network.simulate_response("label/print", filename="shipping-label-print")

    data = asyncio.run(
        ShippingLabelRemote(network).print_shipping_label(
            SITE_ID, 123, ShippingLabelPaperSize.LABEL
        )
    )

    assert data.mime_type == "application/pdf"
    parameters = network.requests[0].parameters or {}
    assert parameters["paper_size"] == "label"
    assert parameters["label_id_csv"] == "123"


def test_refund_shipping_label_success(network: MockTransport) -> None:
    network.simulate_response("refund", filename="shipping-label-refund-success")

    refund = asyncio.run(
        ShippingLabelRemote(network).refund_shipping_label(SITE_ID, ORDER_ID, 1825)
    )

    assert refund.status is ShippingLabelRefundStatus.PENDING
    assert refund.date_requested == datetime.fromtimestamp(1607331363.627, tz=UTC)
    assert network.requests[0].path == f"label/{ORDER_ID}/1825/refund"


def test_refund_shipping_label_error(network: MockTransport) -> None:
    network.simulate_response("refund", filename="shipping-label-refund-error")

    with pytest.raises(DotcomError) as exc:
        asyncio.run(ShippingLabelRemote(network).refund_shipping_label(SITE_ID, ORDER_ID, 1825))

    assert exc.value.code == "wcc_server_error_response"


def test_address_validation_round_trip(network: MockTransport) -> None:
    network.simulate_response("normalize-address", filename="shipping-label-address-validation-success")
    address = ShippingLabelAddress(
        name="Anitaa", phone="41535032", country="US", state="CA",
        address1="60 29th Street #343", city="San Francisco", postcode="94110",
    )

    result = asyncio.run(
        ShippingLabelRemote(network).address_validation(
            SITE_ID,
            ShippingLabelAddressVerification(address, ShippingLabelAddressType.DESTINATION),
        )
    )

    assert result.address.address1 == "60 29TH ST # 343"
    parameters = network.requests[0].parameters or {}
    assert parameters["type"] == "destination"
    assert parameters["address"]["address_1"] == "60 29th Street #343"  # type: ignore[index]


def test_address_validation_failure(network: MockTransport) -> None:
    network.simulate_response("normalize-address", filename="shipping-label-address-validation-error")
    verification = ShippingLabelAddressVerification(
        ShippingLabelAddress(name="Nobody"), ShippingLabelAddressType.ORIGIN
    )

    with pytest.raises(ShippingLabelAddressValidationError):
        asyncio.run(ShippingLabelRemote(network).address_validation(SITE_ID, verification))


def test_create_package_success(network: MockTransport) -> None:
    network.simulate_response("packages", filename="generic_success_data")

    created = asyncio.run(ShippingLabelRemote(network).create_package(SITE_ID, _package()))

    assert created is True
    parameters = network.requests[0].parameters or {}
    assert parameters["predefined"] == {}
    assert parameters["custom"][0]["name"] == "Test Package"  # type: ignore[index]


def test_create_package_error(network: MockTransport) -> None:
    network.simulate_response("packages", filename="shipping-label-create-package-error")

    with pytest.raises(DotcomError) as exc:
        asyncio.run(ShippingLabelRemote(network).create_package(SITE_ID, _package()))

    assert exc.value.code == "duplicate_custom_package_names_of_existing_packages"


def test_create_package_rejects_non_finite_weight_before_sending(network: MockTransport) -> None:
    network.simulate_response("packages", filename="generic_success_data")

    with pytest.raises(SerializationError):
        asyncio.run(ShippingLabelRemote(network).create_package(SITE_ID, _package("NaN")))

    assert network.requests == []


def test_check_creation_eligibility(network: MockTransport) -> None:
    network.simulate_response("creation_eligibility", filename="shipping-label-eligibility-failure")

    eligibility = asyncio.run(
        ShippingLabelRemote(network).check_creation_eligibility(
            SITE_ID,
            ORDER_ID,
            can_create_payment_method=False,
            can_create_customs_form=False,
            can_create_package=False,
        )
    )

    assert eligibility.is_eligible is False
    assert eligibility.reason == "no_selected_payment_method_and_user_cannot_manage_payment_methods"
    assert "can_create_package=false" in network.requests[0].query_string


# Refunds, orders, products -------------------------------------------------


def test_load_all_refunds(network: MockTransport) -> None:
    network.simulate_response("refunds", filename="refunds-all")

    refunds = asyncio.run(RefundsRemote(network).load_all_refunds(SITE_ID, ORDER_ID))

    assert [refund.refund_id for refund in refunds] == [622, 623]


def test_load_order(network: MockTransport) -> None:
    network.simulate_response(f"orders/{ORDER_ID}", filename="order")

    order = asyncio.run(OrdersRemote(network).load_order(SITE_ID, ORDER_ID))

    assert order.order_id == ORDER_ID
    assert order.site_id == SITE_ID


def test_load_products_sends_include_list(network: MockTransport) -> None:
    network.simulate_response("products", filename="products")

    products = asyncio.run(ProductsRemote(network).load_products(SITE_ID, [52, 61]))

    assert [product.product_id for product in products] == [52, 61]
    assert (network.requests[0].parameters or {})["include"] == "52,61"


def test_load_products_without_ids_skips_request(network: MockTransport) -> None:
    products = asyncio.run(ProductsRemote(network).load_products(SITE_ID, []))

    assert products == []
    assert network.requests == []


def test_load_product_variations(network: MockTransport) -> None:
    network.simulate_response("variations", filename="product-variations")

    variations = asyncio.run(ProductsRemote(network).load_product_variations(SITE_ID, 52))

    assert [variation.variation_id for variation in variations] == [1201, 1202]
    assert all(variation.product_id == 52 for variation in variations)


# Envelope and parameter helpers ---------------------------------------------


def test_error_envelope_variants() -> None:
    with pytest.raises(DotcomError):
        raise_for_error_envelope(b'{"error": "unauthorized", "message": "nope"}')
    with pytest.raises(DotcomError):
        raise_for_error_envelope(
            b'{"data": {"code": "x", "message": "y", "data": {"status": 404}}}'
        )

    raise_for_error_envelope(b'{"code": "x", "message": "y", "data": {"status": 200}}')
    raise_for_error_envelope(b"[]")
    raise_for_error_envelope(b"not json")


def test_encode_parameters_rejects_unencodable_values() -> None:
    with pytest.raises(SerializationError):
        encode_parameters({"payload": object()})


def test_encode_parameters_is_json_safe() -> None:
    encoded = encode_parameters({"date": date(2019, 4, 18), "nested": {"n": 1}})

    assert json.loads(json.dumps(encoded)) == {"date": "2019-04-18", "nested": {"n": 1}}
