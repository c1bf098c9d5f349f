"""File-backed per-device settings.

Every settings value lives in its own JSON file under one settings directory.
Reads follow load-or-create: a missing file yields the default value, a corrupt
one raises ``FileStorageDecodeError``. The products feature switch is the one
exception: an unreadable switch reads as disabled and the failure is logged.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from woosync.domain.actions import (
    AddCustomTrackingProvider,
    AddTrackingProvider,
    AppSettingsAction,
    LoadCustomTrackingProvider,
    LoadFeedbackVisibility,
    LoadInitialStatsVersionToShow,
    LoadOrderAddOnsSwitchState,
    LoadProductsFeatureSwitch,
    LoadProductsSettings,
    LoadStatsVersionBannerVisibility,
    LoadTrackingProvider,
    ResetFeatureSwitches,
    ResetProductsSettings,
    ResetStatsVersionStates,
    ResetStoredProviders,
    SetInstallationDateIfNecessary,
    SetOrderAddOnsFeatureSwitchState,
    SetProductsFeatureSwitch,
    SetStatsVersionBannerVisibility,
    SetStatsVersionLastShown,
    UpdateFeedbackStatus,
    UpsertProductsSettings,
)
from woosync.domain.errors import (
    AppSettingsStoreError,
    AppSettingsStoreErrorKind,
    FileStorageError,
    WooSyncError,
)
from woosync.domain.feedback import feedback_card_visible
from woosync.domain.model import (
    FeedbackSettings,
    FeedbackStatus,
    GeneralAppSettings,
    PreselectedProvider,
    ProductSettings,
    ProductsFeatureSwitch,
    ShipmentTrackingProvider,
    StatsVersionBannerVisibility,
    StatsVersionBySite,
    StoredProductSettings,
)
from woosync.stores.base import complete, fail, report, route, succeed

if TYPE_CHECKING:
    from pathlib import Path

    from woosync.domain.actions import Action, StoredTrackingProvider
    from woosync.domain.dispatcher import Dispatcher
    from woosync.domain.ports import FileStorage, StorageManager

log = getLogger(__name__)

SHIPMENT_PROVIDERS_FILE: Final[str] = "shipment-providers.json"
CUSTOM_SHIPMENT_PROVIDERS_FILE: Final[str] = "custom-shipment-providers.json"
STATS_VERSION_BANNER_VISIBILITY_FILE: Final[str] = "stats-version-banner-visibility.json"
STATS_VERSION_LAST_SHOWN_FILE: Final[str] = "stats-version-last-shown.json"
PRODUCTS_FEATURE_SWITCH_FILE: Final[str] = "products-feature-switch.json"
GENERAL_APP_SETTINGS_FILE: Final[str] = "general-app-settings.json"
PRODUCTS_SETTINGS_FILE: Final[str] = "products-settings.json"

CUSTOM_PROVIDER_GROUP: Final[str] = "Custom"


class AppSettingsStore:
    def __init__(
        self,
        file_storage: FileStorage,
        storage_manager: StorageManager,
        settings_dir: Path,
    ) -> None:
        self.file_storage = file_storage
        self.storage_manager = storage_manager
        self.settings_dir = settings_dir
        self._handlers = {
            AddTrackingProvider: self._add_tracking_provider,
            LoadTrackingProvider: self._load_tracking_provider,
            AddCustomTrackingProvider: self._add_custom_tracking_provider,
            LoadCustomTrackingProvider: self._load_custom_tracking_provider,
            ResetStoredProviders: self._reset_stored_providers,
            SetStatsVersionLastShown: self._set_stats_version_last_shown,
            LoadInitialStatsVersionToShow: self._load_initial_stats_version,
            LoadStatsVersionBannerVisibility: self._load_banner_visibility,
            SetStatsVersionBannerVisibility: self._set_banner_visibility,
            ResetStatsVersionStates: self._reset_stats_version_states,
            LoadProductsFeatureSwitch: self._load_products_feature_switch,
            SetProductsFeatureSwitch: self._set_products_feature_switch,
            ResetFeatureSwitches: self._reset_feature_switches,
            SetInstallationDateIfNecessary: self._set_installation_date,
            UpdateFeedbackStatus: self._update_feedback_status,
            LoadFeedbackVisibility: self._load_feedback_visibility,
            SetOrderAddOnsFeatureSwitchState: self._set_add_ons_switch,
            LoadOrderAddOnsSwitchState: self._load_add_ons_switch,
            LoadProductsSettings: self._load_products_settings,
            UpsertProductsSettings: self._upsert_products_settings,
            ResetProductsSettings: self._reset_products_settings,
        }

    def register_supported_actions(self, dispatcher: Dispatcher) -> None:
        dispatcher.register(self, AppSettingsAction)

    async def on_action(self, action: Action) -> None:
        await route(self._handlers, action)

    def _path(self, filename: str) -> Path:
        return self.settings_dir / filename

    # Tracking providers ----------------------------------------------------

    async def _add_tracking_provider(self, action: AddTrackingProvider) -> None:
        try:
            self._upsert_provider(
                SHIPMENT_PROVIDERS_FILE, PreselectedProvider(action.site_id, action.provider_name)
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _add_custom_tracking_provider(self, action: AddCustomTrackingProvider) -> None:
        try:
            self._upsert_provider(
                CUSTOM_SHIPMENT_PROVIDERS_FILE,
                PreselectedProvider(action.site_id, action.provider_name, action.provider_url),
            )
        except WooSyncError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _load_tracking_provider(self, action: LoadTrackingProvider) -> None:
        try:
            preselected = self._preselected_provider(SHIPMENT_PROVIDERS_FILE, action.site_id)
            stored = self._stored_provider(action.site_id, preselected.provider_name)
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, stored)

    async def _load_custom_tracking_provider(self, action: LoadCustomTrackingProvider) -> None:
        try:
            preselected = self._preselected_provider(CUSTOM_SHIPMENT_PROVIDERS_FILE, action.site_id)
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        provider = ShipmentTrackingProvider(
            site_id=action.site_id,
            group_name=CUSTOM_PROVIDER_GROUP,
            name=preselected.provider_name,
            url=preselected.provider_url or "",
        )
        succeed(action.on_completion, provider)

    async def _reset_stored_providers(self, action: ResetStoredProviders) -> None:
        try:
            self.file_storage.delete(self._path(SHIPMENT_PROVIDERS_FILE))
            self.file_storage.delete(self._path(CUSTOM_SHIPMENT_PROVIDERS_FILE))
        except FileStorageError as exc:
            error = AppSettingsStoreError(
                AppSettingsStoreErrorKind.DELETE_PRESELECTED_PROVIDER, str(exc)
            )
            report(action.on_completion, error, action)
            return
        complete(action.on_completion)

    def _upsert_provider(self, filename: str, provider: PreselectedProvider) -> None:
        path = self._path(filename)
        providers = self.file_storage.read(path, list[PreselectedProvider]) or []
        # one preselected provider per site
        providers = [p for p in providers if p.site_id != provider.site_id]
        providers.append(provider)
        try:
            self.file_storage.write(providers, path)
        except FileStorageError as exc:
            raise AppSettingsStoreError(
                AppSettingsStoreErrorKind.WRITE_PRESELECTED_PROVIDER, str(exc)
            ) from exc

    def _preselected_provider(self, filename: str, site_id: int) -> PreselectedProvider:
        providers = self.file_storage.read(self._path(filename), list[PreselectedProvider])
        for provider in providers or []:
            if provider.site_id == site_id:
                return provider
        raise AppSettingsStoreError(
            AppSettingsStoreErrorKind.READ_PRESELECTED_PROVIDER,
            f"no provider selected for site {site_id}",
        )

    def _stored_provider(self, site_id: int, name: str) -> StoredTrackingProvider:
        with self.storage_manager.reading() as storage:
            provider = storage.load_shipment_tracking_provider(site_id, name)
            if provider is None:
                return (None, None)
            group = storage.load_shipment_tracking_provider_group(site_id, provider.group_name)
            if group is None:
                return (provider.to_read_only(), None)
            members = storage.load_shipment_tracking_providers(site_id, group.name)
            return (provider.to_read_only(), group.to_read_only(members))

    # Stats version ---------------------------------------------------------

    async def _set_stats_version_last_shown(self, action: SetStatsVersionLastShown) -> None:
        path = self._path(STATS_VERSION_LAST_SHOWN_FILE)
        try:
            existing = self.file_storage.read(path, StatsVersionBySite) or StatsVersionBySite()
            versions = {**existing.stats_version_by_site, action.site_id: action.stats_version}
            self.file_storage.write(StatsVersionBySite(versions), path)
        except FileStorageError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _load_initial_stats_version(self, action: LoadInitialStatsVersionToShow) -> None:
        try:
            existing = self.file_storage.read(
                self._path(STATS_VERSION_LAST_SHOWN_FILE), StatsVersionBySite
            )
        except FileStorageError as exc:
            fail(action.on_completion, exc, action)
            return
        version = existing.stats_version_by_site.get(action.site_id) if existing else None
        succeed(action.on_completion, version)

    async def _load_banner_visibility(self, action: LoadStatsVersionBannerVisibility) -> None:
        try:
            existing = self.file_storage.read(
                self._path(STATS_VERSION_BANNER_VISIBILITY_FILE), StatsVersionBannerVisibility
            )
        except FileStorageError as exc:
            fail(action.on_completion, exc, action)
            return
        visible = existing.visibility_by_banner.get(action.banner, True) if existing else True
        succeed(action.on_completion, visible)

    async def _set_banner_visibility(self, action: SetStatsVersionBannerVisibility) -> None:
        path = self._path(STATS_VERSION_BANNER_VISIBILITY_FILE)
        try:
            existing = self.file_storage.read(path, StatsVersionBannerVisibility)
            visibility = dict(existing.visibility_by_banner) if existing else {}
            visibility[action.banner] = action.should_show_banner
            self.file_storage.write(StatsVersionBannerVisibility(visibility), path)
        except FileStorageError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _reset_stats_version_states(self, action: ResetStatsVersionStates) -> None:
        try:
            self.file_storage.delete(self._path(STATS_VERSION_BANNER_VISIBILITY_FILE))
            self.file_storage.delete(self._path(STATS_VERSION_LAST_SHOWN_FILE))
        except FileStorageError as exc:
            error = AppSettingsStoreError(
                AppSettingsStoreErrorKind.DELETE_STATS_VERSION_STATES, str(exc)
            )
            report(action.on_completion, error, action)
            return
        complete(action.on_completion)

    # Feature switches ------------------------------------------------------

    async def _load_products_feature_switch(self, action: LoadProductsFeatureSwitch) -> None:
        try:
            switch = self.file_storage.read(
                self._path(PRODUCTS_FEATURE_SWITCH_FILE), ProductsFeatureSwitch
            )
        except FileStorageError as exc:
            log.warning("Could not read products feature switch: %s", exc)
            switch = None
        if action.on_completion is not None:
            action.on_completion(switch.is_enabled if switch else False)

    async def _set_products_feature_switch(self, action: SetProductsFeatureSwitch) -> None:
        try:
            self.file_storage.write(
                ProductsFeatureSwitch(action.is_enabled), self._path(PRODUCTS_FEATURE_SWITCH_FILE)
            )
        except FileStorageError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    async def _reset_feature_switches(self, action: ResetFeatureSwitches) -> None:
        try:
            self.file_storage.delete(self._path(PRODUCTS_FEATURE_SWITCH_FILE))
        except FileStorageError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)

    # General settings ------------------------------------------------------

    def _load_or_create_general_settings(self) -> GeneralAppSettings:
        path = self._path(GENERAL_APP_SETTINGS_FILE)
        return self.file_storage.read(path, GeneralAppSettings) or GeneralAppSettings()

    def _save_general_settings(self, settings: GeneralAppSettings) -> None:
        self.file_storage.write(settings, self._path(GENERAL_APP_SETTINGS_FILE))

    async def _set_installation_date(self, action: SetInstallationDateIfNecessary) -> None:
        """Keep the earliest installation date ever reported."""
        try:
            settings = self._load_or_create_general_settings()
            current = settings.installation_date
            changed = current is None or action.installation_date < current
            if changed:
                self._save_general_settings(
                    settings.with_installation_date(action.installation_date)
                )
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, changed)

    async def _update_feedback_status(self, action: UpdateFeedbackStatus) -> None:
        try:
            settings = self._load_or_create_general_settings()
            feedback = FeedbackSettings(
                name=action.feedback_type,
                status=action.status,
                status_date=_status_date(action),
            )
            self._save_general_settings(settings.replacing_feedback(feedback))
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, None)

    async def _load_feedback_visibility(self, action: LoadFeedbackVisibility) -> None:
        try:
            settings = self._load_or_create_general_settings()
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, feedback_card_visible(settings, action.feedback_type))

    async def _set_add_ons_switch(self, action: SetOrderAddOnsFeatureSwitchState) -> None:
        try:
            settings = self._load_or_create_general_settings()
            self._save_general_settings(settings.with_add_ons_switch(enabled=action.is_enabled))
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, None)

    async def _load_add_ons_switch(self, action: LoadOrderAddOnsSwitchState) -> None:
        try:
            settings = self._load_or_create_general_settings()
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, settings.is_view_add_ons_switch_enabled)

    # Product list settings -------------------------------------------------

    async def _load_products_settings(self, action: LoadProductsSettings) -> None:
        try:
            stored = self.file_storage.read(
                self._path(PRODUCTS_SETTINGS_FILE), StoredProductSettings
            )
            settings = stored.settings.get(action.site_id) if stored else None
            if settings is None:
                raise AppSettingsStoreError(
                    AppSettingsStoreErrorKind.NO_PRODUCTS_SETTINGS, f"site {action.site_id}"
                )
        except WooSyncError as exc:
            fail(action.on_completion, exc, action)
            return
        succeed(action.on_completion, settings)

    async def _upsert_products_settings(self, action: UpsertProductsSettings) -> None:
        path = self._path(PRODUCTS_SETTINGS_FILE)
        setting = ProductSettings(
            site_id=action.site_id,
            sort=action.sort,
            stock_status_filter=action.stock_status_filter,
            product_status_filter=action.product_status_filter,
            product_type_filter=action.product_type_filter,
        )
        try:
            stored = self.file_storage.read(path, StoredProductSettings) or StoredProductSettings()
        except FileStorageError as exc:
            report(action.on_completion, exc, action)
            return
        stored = replace(stored, settings={**stored.settings, action.site_id: setting})
        try:
            self.file_storage.write(stored, path)
        except FileStorageError as exc:
            error = AppSettingsStoreError(
                AppSettingsStoreErrorKind.WRITE_PRODUCTS_SETTINGS, str(exc)
            )
            report(action.on_completion, error, action)
            return
        complete(action.on_completion)

    async def _reset_products_settings(self, action: ResetProductsSettings) -> None:
        try:
            self.file_storage.delete(self._path(PRODUCTS_SETTINGS_FILE))
        except FileStorageError as exc:
            report(action.on_completion, exc, action)
            return
        complete(action.on_completion)


def _status_date(action: UpdateFeedbackStatus) -> datetime | None:
    if action.status is FeedbackStatus.PENDING:
        return None
    return action.status_date or datetime.now(UTC)
