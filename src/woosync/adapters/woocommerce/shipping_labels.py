"""WooCommerce Shipping (``wc/v1/connect``) endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.ports.transport import HTTPMethod, RemoteRequest, WooApiVersion

from .mappers import (
    OrderShippingLabelListMapper,
    ShippingLabelAddressValidationMapper,
    ShippingLabelCreationEligibilityMapper,
    ShippingLabelPrintDataMapper,
    ShippingLabelRefundMapper,
    SuccessDataResultMapper,
)
from .remote import Remote, encode_parameters
from .translator import address_to_parameters, custom_package_to_parameters

if TYPE_CHECKING:
    from woosync.domain.model import (
        OrderShippingLabels,
        ShippingLabelAddressValidationSuccess,
        ShippingLabelAddressVerification,
        ShippingLabelCreationEligibility,
        ShippingLabelCustomPackage,
        ShippingLabelPaperSize,
        ShippingLabelPrintData,
        ShippingLabelRefund,
    )

LABEL_PATH = "label"
NORMALIZE_ADDRESS_PATH = "normalize-address"
PACKAGES_PATH = "packages"


class ShippingLabelRemote(Remote):
    async def load_shipping_labels(self, site_id: int, order_id: int) -> OrderShippingLabels:
        request = _request(site_id, HTTPMethod.GET, f"{LABEL_PATH}/{order_id}")
        return await self.enqueue(request, OrderShippingLabelListMapper(site_id, order_id))

    async def print_shipping_label(
        self, site_id: int, shipping_label_id: int, paper_size: ShippingLabelPaperSize
    ) -> ShippingLabelPrintData:
        parameters = {
            "paper_size": paper_size.value,
            "label_id_csv": str(shipping_label_id),
            "caption_csv": "",
            # the endpoint answers 500 "no_response_body" without it
            "json": "true",
        }
        request = _request(site_id, HTTPMethod.GET, f"{LABEL_PATH}/print", parameters)
        return await self.enqueue(request, ShippingLabelPrintDataMapper())

    async def refund_shipping_label(
        self, site_id: int, order_id: int, shipping_label_id: int
    ) -> ShippingLabelRefund:
        path = f"{LABEL_PATH}/{order_id}/{shipping_label_id}/refund"
        return await self.enqueue(
            _request(site_id, HTTPMethod.POST, path), ShippingLabelRefundMapper()
        )

    async def address_validation(
        self, site_id: int, address: ShippingLabelAddressVerification
    ) -> ShippingLabelAddressValidationSuccess:
        parameters = encode_parameters(
            {"address": address_to_parameters(address.address), "type": address.type.value}
        )
        request = _request(site_id, HTTPMethod.POST, NORMALIZE_ADDRESS_PATH, parameters)
        return await self.enqueue(request, ShippingLabelAddressValidationMapper())

    async def create_package(self, site_id: int, custom_package: ShippingLabelCustomPackage) -> bool:
        parameters = encode_parameters(
            {"custom": [custom_package_to_parameters(custom_package)], "predefined": {}}
        )
        request = _request(site_id, HTTPMethod.POST, PACKAGES_PATH, parameters)
        return await self.enqueue(request, SuccessDataResultMapper())

    async def check_creation_eligibility(
        self,
        site_id: int,
        order_id: int,
        *,
        can_create_payment_method: bool,
        can_create_customs_form: bool,
        can_create_package: bool,
    ) -> ShippingLabelCreationEligibility:
        parameters = {
            "can_create_payment_method": can_create_payment_method,
            "can_create_customs_form": can_create_customs_form,
            "can_create_package": can_create_package,
        }
        path = f"{LABEL_PATH}/{order_id}/creation_eligibility"
        request = _request(site_id, HTTPMethod.GET, path, parameters)
        return await self.enqueue(request, ShippingLabelCreationEligibilityMapper())


def _request(
    site_id: int,
    method: HTTPMethod,
    path: str,
    parameters: dict[str, object] | None = None,
) -> RemoteRequest:
    return RemoteRequest(
        site_id=site_id,
        method=method,
        path=path,
        api_version=WooApiVersion.CONNECT,
        parameters=parameters,
    )
