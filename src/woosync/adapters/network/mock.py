"""Deterministic transport serving registered fixtures."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import MissingFixtureError

if TYPE_CHECKING:
    from pathlib import Path

    from woosync.domain.ports.transport import RemoteRequest

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Fixture:
    filename: str | None = None
    content: bytes | None = None
    error: Exception | None = None


class MockTransport:
    """Maps request suffixes onto canned responses.

    A suffix matches when the request path, or the path plus its query string,
    ends with it. When several suffixes match, the longest one wins. Fixtures
    registered with ``once=True`` are consumed in order and, once used up, stop
    matching. Any request left without a match raises ``MissingFixtureError``.
    """

    def __init__(self, fixtures_dir: Path | None = None) -> None:
        self.fixtures_dir = fixtures_dir
        self.requests: list[RemoteRequest] = []
        self._always: dict[str, _Fixture] = {}
        self._once: dict[str, deque[_Fixture]] = {}

    def simulate_response(
        self,
        suffix: str,
        *,
        filename: str | None = None,
        content: bytes | str | None = None,
        once: bool = False,
    ) -> None:
        if (filename is None) == (content is None):
            raise ValueError("Pass exactly one of filename or content")
        body = content.encode("utf-8") if isinstance(content, str) else content
        self._register(suffix, _Fixture(filename=filename, content=body), once=once)

    def simulate_error(self, suffix: str, error: Exception, *, once: bool = False) -> None:
        self._register(suffix, _Fixture(error=error), once=once)

    def remove_all_simulated_responses(self) -> None:
        self._always.clear()
        self._once.clear()
        self.requests.clear()

    async def execute(self, request: RemoteRequest) -> bytes:
        self.requests.append(request)
        fixture = self._take(request)
        if fixture.error is not None:
            raise fixture.error
        if fixture.content is not None:
            return fixture.content
        return self._load(request, fixture.filename or "")

    def _register(self, suffix: str, fixture: _Fixture, *, once: bool) -> None:
        if once:
            self._once.setdefault(suffix, deque()).append(fixture)
        else:
            self._always[suffix] = fixture

    def _take(self, request: RemoteRequest) -> _Fixture:
        candidates = (request.path, request.path_with_query)
        matching_once = [
            suffix
            for suffix, queue in self._once.items()
            if queue and any(candidate.endswith(suffix) for candidate in candidates)
        ]
        if matching_once:
            suffix = max(matching_once, key=len)
            return self._once[suffix].popleft()

        matching = [
            suffix
            for suffix in self._always
            if any(candidate.endswith(suffix) for candidate in candidates)
        ]
        if not matching:
            log.error("Unexpected request %s %s", request.method, request.path_with_query)
            raise MissingFixtureError(request)
        return self._always[max(matching, key=len)]

    def _load(self, request: RemoteRequest, filename: str) -> bytes:
        if self.fixtures_dir is None:
            raise MissingFixtureError(request, "no fixtures directory configured")
        name = filename if filename.endswith(".json") else f"{filename}.json"
        path = self.fixtures_dir / name
        if not path.is_file():
            raise MissingFixtureError(request, f"fixture file {name} not found")
        return path.read_bytes()
