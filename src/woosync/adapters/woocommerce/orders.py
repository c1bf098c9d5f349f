from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.ports.transport import HTTPMethod, RemoteRequest, WooApiVersion

from .mappers import OrderMapper
from .remote import Remote

if TYPE_CHECKING:
    from woosync.domain.model import Order


class OrdersRemote(Remote):
    async def load_order(self, site_id: int, order_id: int) -> Order:
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.GET,
            path=f"orders/{order_id}",
            api_version=WooApiVersion.MARK3,
        )
        return await self.enqueue(request, OrderMapper(site_id))
