"""JSON files holding per-device settings."""

from __future__ import annotations

import os
from functools import cache
from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from woosync.domain.errors import FileStorageDecodeError, FileStorageError, FileStorageWriteError

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


@cache
def _adapter(value_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(value_type)


class JsonFileStorage:
    """Reads and writes settings values as JSON, validated with pydantic.

    A missing file reads as ``None``; a file that exists but does not decode into
    the requested type raises ``FileStorageDecodeError``. Deleting a missing file
    is a no-op.
    """

    def read[T](self, path: Path, value_type: type[T]) -> T | None:
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise FileStorageError(f"Could not read {path}: {exc}") from exc

        try:
            return _adapter(value_type).validate_json(raw)
        except ValidationError as exc:
            log.warning("Settings file %s is corrupt", path)
            raise FileStorageDecodeError(path, str(exc)) from exc

    def write(self, value: object, path: Path) -> None:
        try:
            payload = to_json(value, indent=2)
        except PydanticSerializationError as exc:
            raise FileStorageWriteError(f"Could not encode {type(value).__name__}: {exc}") from exc

        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(payload)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise FileStorageWriteError(f"Could not write {path}: {exc}") from exc

    def delete(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise FileStorageError(f"Could not delete {path}: {exc}") from exc


if TYPE_CHECKING:
    from woosync.domain.ports.file_storage import FileStorage

    _file_storage_check: FileStorage = JsonFileStorage()
