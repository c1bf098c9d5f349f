"""Base class binding a transport to mappers."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from woosync.domain.errors import DotcomError, SerializationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from woosync.domain.ports.transport import RemoteRequest, Transport

    from .mappers import Mapper

log = getLogger(__name__)

_PARAMETERS = TypeAdapter(dict[str, object])


class Remote:
    """One coroutine per backend operation lives on subclasses.

    ``enqueue`` executes the request once, rejects error envelopes and hands the
    body to the mapper. Remotes never retry and never touch storage.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    async def enqueue[T](self, request: RemoteRequest, mapper: Mapper[T]) -> T:
        body = await self.transport.execute(request)
        raise_for_error_envelope(body)
        return mapper.map(body)


def encode_parameters(parameters: Mapping[str, object]) -> dict[str, object]:
    """Return JSON-safe request parameters or raise ``SerializationError``.

    Called while building a request, so a failure surfaces before anything is sent.
    """

    try:
        encoded = _PARAMETERS.dump_python(dict(parameters), mode="json")
        json.dumps(encoded, allow_nan=False)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot encode request parameters: {exc}") from exc
    return encoded


def raise_for_error_envelope(body: bytes) -> None:
    """Raise ``DotcomError`` when a 2xx body actually describes a failure."""

    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return
    if isinstance(payload, dict) and set(payload) == {"data"}:
        payload = payload["data"]
    if not isinstance(payload, dict):
        return

    error = payload.get("error")
    if isinstance(error, str) and "message" in payload:
        log.warning("Remote error %s: %s", error, payload["message"])
        raise DotcomError(error, str(payload["message"]))

    code = payload.get("code")
    data = payload.get("data")
    if isinstance(code, str) and "message" in payload and isinstance(data, dict):
        status = data.get("status")
        if isinstance(status, int) and status >= 400:
            log.warning("Remote error %s (%s): %s", code, status, payload["message"])
            raise DotcomError(code, str(payload["message"]))
