"""Port for small settings files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path


@runtime_checkable
class FileStorage(Protocol):
    def read[T](self, path: Path, value_type: type[T]) -> T | None:
        """Return the decoded file, ``None`` when it does not exist."""
        ...

    def write(self, value: object, path: Path) -> None: ...

    def delete(self, path: Path) -> None: ...
