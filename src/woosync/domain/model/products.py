"""Product catalog values used to resolve order line items."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Product:
    site_id: int
    product_id: int
    name: str
    sku: str | None = None
    virtual: bool = False
    image_urls: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProductVariationAttribute:
    name: str
    option: str


@dataclass(frozen=True, slots=True)
class ProductVariation:
    site_id: int
    product_id: int
    variation_id: int
    price: Decimal
    sku: str | None = None
    image_url: str | None = None
    attributes: tuple[ProductVariationAttribute, ...] = ()
