"""Port for executing remote requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from urllib.parse import urlencode

if TYPE_CHECKING:
    from collections.abc import Mapping


class HTTPMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class WooApiVersion(StrEnum):
    """REST namespace a request is addressed to."""

    NONE = ""
    MARK1 = "wc/v1"
    MARK2 = "wc/v2"
    MARK3 = "wc/v3"
    CONNECT = "wc/v1/connect"


@dataclass(frozen=True, slots=True)
class RemoteRequest:
    site_id: int
    method: HTTPMethod
    path: str
    api_version: WooApiVersion = WooApiVersion.MARK3
    parameters: Mapping[str, object] | None = field(default=None)

    @property
    def sends_body(self) -> bool:
        return self.method in {HTTPMethod.POST, HTTPMethod.PUT}

    @property
    def query_string(self) -> str:
        """URL-encoded parameters, or an empty string when they travel in the body."""

        if self.sends_body or not self.parameters:
            return ""
        return urlencode({key: _query_value(value) for key, value in self.parameters.items()})

    @property
    def path_with_query(self) -> str:
        query = self.query_string
        return f"{self.path}?{query}" if query else self.path


def _query_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@runtime_checkable
class Transport(Protocol):
    """Executes one request and returns the raw response body."""

    async def execute(self, request: RemoteRequest) -> bytes: ...


__all__ = ["HTTPMethod", "RemoteRequest", "Transport", "WooApiVersion"]
