"""Transport-level failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from woosync.domain.errors import TransportError

if TYPE_CHECKING:
    from woosync.domain.ports.transport import RemoteRequest


class NetworkError(TransportError):
    """The request never produced a response (DNS, connect, timeout, ...)."""


class HTTPStatusError(TransportError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, body: bytes = b"") -> None:
        super().__init__(f"Unacceptable status code {status_code}")
        self.status_code = status_code
        self.body = body


class MissingFixtureError(TransportError):
    """No simulated response was registered for a request."""

    def __init__(self, request: RemoteRequest, detail: str | None = None) -> None:
        message = f"No fixture registered for {request.method} {request.path_with_query}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.request = request
