"""Per-device settings persisted as files rather than in the record store."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from .enums import FeedbackStatus, FeedbackType, StatsVersion, StatsVersionBanner


@dataclass(frozen=True, slots=True)
class PreselectedProvider:
    """The tracking provider last picked for a site."""

    site_id: int
    provider_name: str
    provider_url: str | None = None


@dataclass(frozen=True, slots=True)
class FeedbackSettings:
    name: FeedbackType
    status: FeedbackStatus
    status_date: datetime | None = None


@dataclass(frozen=True, slots=True)
class GeneralAppSettings:
    installation_date: datetime | None = None
    feedbacks: dict[FeedbackType, FeedbackSettings] = field(default_factory=dict)
    is_view_add_ons_switch_enabled: bool = False

    def with_installation_date(self, value: datetime) -> GeneralAppSettings:
        return replace(self, installation_date=value)

    def with_add_ons_switch(self, *, enabled: bool) -> GeneralAppSettings:
        return replace(self, is_view_add_ons_switch_enabled=enabled)

    def replacing_feedback(self, feedback: FeedbackSettings) -> GeneralAppSettings:
        feedbacks = dict(self.feedbacks)
        feedbacks[feedback.name] = feedback
        return replace(self, feedbacks=feedbacks)


@dataclass(frozen=True, slots=True)
class StatsVersionBySite:
    stats_version_by_site: dict[int, StatsVersion] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class StatsVersionBannerVisibility:
    visibility_by_banner: dict[StatsVersionBanner, bool] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ProductsFeatureSwitch:
    is_enabled: bool = False


@dataclass(frozen=True, slots=True)
class ProductSettings:
    """Sort order and list filters chosen on the products screen of one site."""

    site_id: int
    sort: str | None = None
    stock_status_filter: str | None = None
    product_status_filter: str | None = None
    product_type_filter: str | None = None


@dataclass(frozen=True, slots=True)
class StoredProductSettings:
    settings: dict[int, ProductSettings] = field(default_factory=dict)
