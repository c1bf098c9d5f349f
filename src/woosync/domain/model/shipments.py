"""Shipment tracking values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True, slots=True)
class ShipmentTracking:
    site_id: int
    order_id: int
    tracking_id: str
    tracking_number: str
    tracking_provider: str | None = None
    tracking_url: str | None = None
    date_shipped: date | None = None


@dataclass(frozen=True, slots=True)
class ShipmentTrackingProvider:
    site_id: int
    group_name: str
    name: str
    url: str


@dataclass(frozen=True, slots=True)
class ShipmentTrackingProviderGroup:
    """Providers offered for one country (or the "Custom" group)."""

    site_id: int
    name: str
    providers: tuple[ShipmentTrackingProvider, ...] = ()
