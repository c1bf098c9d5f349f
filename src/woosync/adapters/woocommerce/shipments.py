"""Shipment Tracking extension endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.ports.transport import HTTPMethod, RemoteRequest, WooApiVersion

from .mappers import (
    AcknowledgementMapper,
    NewShipmentTrackingMapper,
    ShipmentTrackingListMapper,
    ShipmentTrackingProviderListMapper,
)
from .remote import Remote, encode_parameters

if TYPE_CHECKING:
    from datetime import date

    from woosync.domain.model import ShipmentTracking, ShipmentTrackingProviderGroup


class ShipmentsRemote(Remote):
    async def load_shipment_trackings(self, site_id: int, order_id: int) -> list[ShipmentTracking]:
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.GET,
            path=_trackings_path(order_id),
            api_version=WooApiVersion.MARK2,
        )
        return await self.enqueue(request, ShipmentTrackingListMapper(site_id, order_id))

    async def load_shipment_tracking_provider_groups(
        self, site_id: int, order_id: int
    ) -> list[ShipmentTrackingProviderGroup]:
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.GET,
            path=f"{_trackings_path(order_id)}providers",
            api_version=WooApiVersion.MARK2,
        )
        return await self.enqueue(request, ShipmentTrackingProviderListMapper(site_id))

    async def create_shipment_tracking(
        self,
        site_id: int,
        order_id: int,
        tracking_provider: str,
        tracking_number: str,
        date_shipped: date,
    ) -> ShipmentTracking:
        parameters = encode_parameters(
            {
                "tracking_provider": tracking_provider,
                "tracking_number": tracking_number,
                "date_shipped": date_shipped.isoformat(),
            }
        )
        return await self._create(site_id, order_id, parameters)

    async def create_shipment_tracking_with_custom_provider(
        self,
        site_id: int,
        order_id: int,
        tracking_provider: str,
        tracking_number: str,
        tracking_url: str,
        date_shipped: date,
    ) -> ShipmentTracking:
        parameters = encode_parameters(
            {
                "custom_tracking_provider": tracking_provider,
                "custom_tracking_link": tracking_url,
                "tracking_number": tracking_number,
                "date_shipped": date_shipped.isoformat(),
            }
        )
        return await self._create(site_id, order_id, parameters)

    async def delete_shipment_tracking(self, site_id: int, order_id: int, tracking_id: str) -> None:
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.DELETE,
            path=f"{_trackings_path(order_id)}{tracking_id}",
            api_version=WooApiVersion.MARK2,
        )
        await self.enqueue(request, AcknowledgementMapper())

    async def _create(
        self, site_id: int, order_id: int, parameters: dict[str, object]
    ) -> ShipmentTracking:
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.POST,
            path=_trackings_path(order_id),
            api_version=WooApiVersion.MARK2,
            parameters=parameters,
        )
        return await self.enqueue(request, NewShipmentTrackingMapper(site_id, order_id))


def _trackings_path(order_id: int) -> str:
    return f"orders/{order_id}/shipment-trackings/"
