from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.ports.transport import HTTPMethod, RemoteRequest, WooApiVersion

from .mappers import RefundListMapper
from .remote import Remote

if TYPE_CHECKING:
    from woosync.domain.model import Refund

_PAGE_SIZE = 100


class RefundsRemote(Remote):
    async def load_all_refunds(self, site_id: int, order_id: int) -> list[Refund]:
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.GET,
            path=f"orders/{order_id}/refunds",
            api_version=WooApiVersion.MARK3,
            parameters={"per_page": _PAGE_SIZE},
        )
        return await self.enqueue(request, RefundListMapper(site_id, order_id))
