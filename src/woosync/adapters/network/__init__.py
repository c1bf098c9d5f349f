"""Transports executing remote requests."""

from __future__ import annotations

from .errors import HTTPStatusError, MissingFixtureError, NetworkError
from .mock import MockTransport
from .transport import HttpTransport

__all__ = [
    "HTTPStatusError",
    "HttpTransport",
    "MissingFixtureError",
    "MockTransport",
    "NetworkError",
]
