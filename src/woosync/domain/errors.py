"""Error taxonomy shared by remotes, stores and adapters."""

from __future__ import annotations

from enum import StrEnum


class WooSyncError(RuntimeError):
    """Root of every error raised by woosync."""


class TransportError(WooSyncError):
    """Raised when a request could not produce a usable response body."""


class DotcomError(WooSyncError):
    """Error envelope returned inside an otherwise successful response."""

    def __init__(self, code: str, message: str = "") -> None:
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DotcomError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))


class MappingError(WooSyncError):
    """Raised when a payload does not match the expected schema."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class SerializationError(WooSyncError):
    """Raised when request parameters cannot be encoded."""


class StorageError(WooSyncError):
    """Raised when a local write could not be committed."""


class FileStorageError(WooSyncError):
    """Raised by file-backed settings storage."""


class FileStorageDecodeError(FileStorageError):
    def __init__(self, path: object, message: str) -> None:
        super().__init__(f"Could not decode {path}: {message}")
        self.path = path


class FileStorageWriteError(FileStorageError):
    pass


class ShippingLabelAddressValidationError(WooSyncError):
    """Address normalization failed with field-level feedback."""

    def __init__(self, address_error: str | None, general_error: str | None) -> None:
        super().__init__(general_error or address_error or "Address validation failed")
        self.address_error = address_error
        self.general_error = general_error


class AppSettingsStoreErrorKind(StrEnum):
    WRITE_PRESELECTED_PROVIDER = "write_preselected_provider"
    READ_PRESELECTED_PROVIDER = "read_preselected_provider"
    DELETE_PRESELECTED_PROVIDER = "delete_preselected_provider"
    DELETE_STATS_VERSION_STATES = "delete_stats_version_states"
    NO_PRODUCTS_SETTINGS = "no_products_settings"
    WRITE_PRODUCTS_SETTINGS = "write_products_settings"


class AppSettingsStoreError(WooSyncError):
    def __init__(self, kind: AppSettingsStoreErrorKind, detail: str | None = None) -> None:
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
        self.kind = kind


class DispatcherError(WooSyncError):
    """Raised on dispatcher misuse."""


class ProcessorAlreadyRegisteredError(DispatcherError):
    pass


class UnhandledActionError(DispatcherError):
    pass


class DispatcherFrozenError(DispatcherError):
    pass
