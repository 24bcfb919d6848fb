"""
HTTP transport for the CredHub API.

Builds an httpx.Client from ClientOptions (timeouts, trust material, mTLS
identity or bearer token) and exposes one call, ``send()``, that returns the
status code and decoded JSON body. HTTP/2 is used when the optional ``h2``
package is installed.

Usage:
    from credhub.transport import CredHubTransport

    with CredHubTransport() as transport:
        status, body = transport.send("GET", "/data", params={"name": "/example"})
"""

from __future__ import annotations

import importlib.util
import json
import logging
import ssl
from typing import Any

import httpx

from credhub.config import ClientOptions, Config, get_config
from credhub.errors import CredHubHTTPError, InvalidResponseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _http2_available() -> bool:
    return importlib.util.find_spec("h2") is not None


def _timeout(options: ClientOptions) -> httpx.Timeout:
    connect = options.connection_timeout
    read = options.read_timeout
    return httpx.Timeout(
        DEFAULT_TIMEOUT,
        connect=DEFAULT_TIMEOUT if connect is None else connect,
        read=DEFAULT_TIMEOUT if read is None else read,
    )


def create_ssl_context(options: ClientOptions) -> ssl.SSLContext:
    """Trust store plus optional client identity for the connection.

    With ``ca_cert_files`` set, only those CAs are trusted.
    """
    try:
        if options.using_custom_certs:
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
            for ca_file in options.ca_cert_files or ():
                context.load_verify_locations(cafile=str(ca_file))
        else:
            context = ssl.create_default_context()
        if options.client_cert:
            key = str(options.client_key) if options.client_key else None
            context.load_cert_chain(str(options.client_cert), key)
    except (OSError, ssl.SSLError) as e:
        logger.warning("Error configuring trust material for HTTP connections: %s", e)
        raise TransportError(f"could not load TLS material: {e}") from e
    return context


def create_http_client(
    config: Config | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an httpx.Client for the configured CredHub server.

    ``transport`` replaces the network layer (e.g. httpx.MockTransport); TLS
    settings are not built in that case.
    """
    cfg = config or get_config()
    options = cfg.options

    headers = {"Accept": "application/json"}
    if options.token:
        headers["Authorization"] = f"Bearer {options.token}"

    if transport is not None:
        return httpx.Client(
            base_url=cfg.api_url,
            headers=headers,
            timeout=_timeout(options),
            transport=transport,
        )

    http2 = _http2_available()
    if http2:
        logger.info("Using HTTP/2 for CredHub connections")
    else:
        logger.info("Using HTTP/1.1 for CredHub connections")

    return httpx.Client(
        base_url=cfg.api_url,
        headers=headers,
        timeout=_timeout(options),
        verify=create_ssl_context(options),
        http2=http2,
    )


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return str(body.get("error") or body.get("error_description") or body)
    return str(body)


class CredHubTransport:
    """Sends JSON requests to the CredHub API and returns decoded replies."""

    def __init__(
        self,
        config: Config | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._client = client or create_http_client(config)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> CredHubTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def send(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> tuple[int, Any]:
        """Issue one request. Returns (status_code, body or None).

        Raises TransportError when the request cannot complete and
        CredHubHTTPError for non-2xx replies.
        """
        logger.debug("%s %s %s", method, path, params or "")
        try:
            resp = self._client.request(method, path, json=json_body, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.debug("%s %s -> %d %s", method, path, resp.status_code, message)
            raise CredHubHTTPError(resp.status_code, message)

        if not resp.content:
            return resp.status_code, None
        try:
            return resp.status_code, resp.json()
        except json.JSONDecodeError as e:
            raise InvalidResponseError(f"{method} {path} returned non-JSON body") from e
