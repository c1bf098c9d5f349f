from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from woosync.adapters.file_storage import JsonFileStorage
from woosync.adapters.network import MockTransport
from woosync.adapters.sqlalchemy import create_storage_manager
from woosync.app import create_app_context

if TYPE_CHECKING:
    from collections.abc import Iterator

    from woosync.adapters.sqlalchemy import SqlAlchemyStorageManager
    from woosync.app import AppContext

RESPONSES_DIR = Path(__file__).resolve().parent / "data" / "responses"


@pytest.fixture
def network() -> MockTransport:
    return MockTransport(RESPONSES_DIR)


@pytest.fixture
def storage_manager() -> Iterator[SqlAlchemyStorageManager]:
    manager = create_storage_manager()
    try:
        yield manager
    finally:
        manager.shutdown()


@pytest.fixture
def file_storage() -> JsonFileStorage:
    return JsonFileStorage()


@pytest.fixture
def settings_dir(tmp_path: Path) -> Path:
    path = tmp_path / "settings"
    path.mkdir()
    return path


@pytest.fixture
def app_context(
    network: MockTransport,
    storage_manager: SqlAlchemyStorageManager,
    settings_dir: Path,
    file_storage: JsonFileStorage,
) -> AppContext:
    return create_app_context(network, storage_manager, settings_dir, file_storage=file_storage)
