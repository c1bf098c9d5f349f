"""httpx-backed transport talking to a WooCommerce site."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from woosync.config.woocommerce import DotcomCredentials, SiteCredentials
from woosync.domain.errors import SerializationError
from woosync.domain.ports.transport import HTTPMethod

from .client import ThrottledClient
from .errors import HTTPStatusError, NetworkError

if TYPE_CHECKING:
    from woosync.config.woocommerce import WooCommerceConfig
    from woosync.domain.ports.transport import RemoteRequest

    from .client import RequestOptions

log = getLogger(__name__)

JETPACK_TUNNEL_PATH = "rest/v1.1/jetpack-blogs/{site_id}/rest-api/"


class HttpTransport:
    """Executes requests either directly against ``wp-json`` or through the Jetpack tunnel.

    Credentials are attached here; remotes never see them. A failed request is
    reported once and never retried.
    """

    def __init__(
        self,
        config: WooCommerceConfig,
        *,
        client: ThrottledClient | None = None,
    ) -> None:
        self.config = config
        self._client = client or ThrottledClient(config.transport)

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(self, request: RemoteRequest) -> bytes:
        method, url, options = self._build(request)
        log.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, **options)
        except httpx.TransportError as exc:
            raise NetworkError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            log.warning(
                "%s %s answered %s", request.method, request.path, response.status_code
            )
            raise HTTPStatusError(response.status_code, response.content)
        return response.content

    def _build(self, request: RemoteRequest) -> tuple[str, str, RequestOptions]:
        credentials = self.config.credentials
        if isinstance(credentials, SiteCredentials):
            return _build_site_request(request, credentials)
        return _build_tunnel_request(request, credentials)


def _namespaced_path(request: RemoteRequest) -> str:
    path = request.path.lstrip("/")
    if request.api_version.value:
        return f"{request.api_version.value}/{path}"
    return path


def _build_site_request(
    request: RemoteRequest, credentials: SiteCredentials
) -> tuple[str, str, RequestOptions]:
    url = f"{credentials.site_url}/wp-json/{_namespaced_path(request)}"
    options: RequestOptions = {
        "auth": httpx.BasicAuth(credentials.consumer_key, credentials.consumer_secret)
    }
    if request.parameters:
        if request.sends_body:
            options["json"] = dict(request.parameters)
        else:
            options["params"] = request.query_string
    return request.method.value, url, options


def _build_tunnel_request(
    request: RemoteRequest, credentials: DotcomCredentials
) -> tuple[str, str, RequestOptions]:
    url = credentials.base_url + JETPACK_TUNNEL_PATH.format(site_id=request.site_id)
    params: dict[str, str] = {
        "json": "true",
        "path": f"/{_namespaced_path(request)}&_method={request.method.value.lower()}",
    }
    if request.parameters:
        try:
            encoded = json.dumps(dict(request.parameters))
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Cannot encode parameters for {request.path}") from exc
        params["body" if request.sends_body else "query"] = encoded

    options: RequestOptions = {"headers": {"Authorization": f"Bearer {credentials.auth_token}"}}
    if request.method is HTTPMethod.GET:
        options["params"] = params
        return HTTPMethod.GET.value, url, options
    options["data"] = params
    return HTTPMethod.POST.value, url, options
