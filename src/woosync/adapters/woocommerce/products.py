from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.ports.transport import HTTPMethod, RemoteRequest, WooApiVersion

from .mappers import ProductListMapper, ProductVariationListMapper
from .remote import Remote

if TYPE_CHECKING:
    from collections.abc import Sequence

    from woosync.domain.model import Product, ProductVariation

_PAGE_SIZE = 100


class ProductsRemote(Remote):
    async def load_products(self, site_id: int, product_ids: Sequence[int]) -> list[Product]:
        """Load the given products; an empty id list short-circuits to no request."""

        if not product_ids:
            return []
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.GET,
            path="products",
            api_version=WooApiVersion.MARK3,
            parameters={
                "include": ",".join(str(product_id) for product_id in product_ids),
                "per_page": _PAGE_SIZE,
            },
        )
        return await self.enqueue(request, ProductListMapper(site_id))

    async def load_product_variations(
        self, site_id: int, product_id: int
    ) -> list[ProductVariation]:
        request = RemoteRequest(
            site_id=site_id,
            method=HTTPMethod.GET,
            path=f"products/{product_id}/variations",
            api_version=WooApiVersion.MARK3,
            parameters={"per_page": _PAGE_SIZE},
        )
        return await self.enqueue(request, ProductVariationListMapper(site_id, product_id))
