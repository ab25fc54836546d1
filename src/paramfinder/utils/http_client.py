"""
httpx-backed transport for probe requests.

The engine only needs something with ``async send(request)``; this module
provides the default one. Requests go out exactly as synthesized: header
multimap, raw query string and body are passed through untouched. There is
no retry here.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from paramfinder.config.settings import HTTPConfig
from paramfinder.core.models import Request
from paramfinder.core.requester import Transport

logger = structlog.get_logger(__name__)


@dataclass
class HTTPResponse:
    """Response to a probe request."""

    status_code: int
    headers: dict[str, str]
    content: bytes
    text: str
    url: str
    elapsed_ms: float
    request_id: str

    @property
    def ok(self) -> bool:
        """Check if response status is 2xx."""
        return 200 <= self.status_code < 300

    @property
    def length(self) -> int:
        return len(self.content)


@dataclass(eq=False)
class TransportError(Exception):
    """Sending a probe failed at the network level."""

    error_type: str  # "timeout", "connection", "unknown"
    message: str
    url: str
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.error_type}: {self.message} ({self.url})"


class HttpxTransport(Transport):
    """
    Send probe requests with a pooled httpx.AsyncClient.

    Usage:
        async with HttpxTransport(HTTPConfig(proxy="http://127.0.0.1:8080")) as transport:
            requester = Requester(config, transport)
            ...
    """

    def __init__(
        self,
        config: HTTPConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Optional configuration. Uses defaults if not provided.
            client: Pre-built client (tests inject one with a MockTransport).
        """
        self._config = config or HTTPConfig()
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> HttpxTransport:
        self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            kwargs: dict[str, Any] = {}
            if self._config.proxy:
                kwargs["proxy"] = self._config.proxy
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout),
                follow_redirects=self._config.follow_redirects,
                verify=self._config.verify_ssl,
                **kwargs,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self, request: Request) -> list[tuple[str, str]]:
        headers = [
            (name, value) for name, values in request.headers.items() for value in values
        ]
        if self._config.user_agent and request.get_header("User-Agent") is None:
            headers.append(("User-Agent", self._config.user_agent))
        return headers

    async def send(self, request: Request) -> HTTPResponse:
        """
        Send a request.

        Raises:
            TransportError: On timeouts, connection failures and other
                httpx transport errors.
        """
        client = self._ensure_client()
        url = request.full_url
        outbound = client.build_request(
            request.method,
            url,
            headers=self._headers(request),
            content=request.body.encode("utf-8") if request.body else None,
        )

        start = time.perf_counter()
        try:
            response = await client.send(outbound)
        except httpx.TimeoutException as e:
            logger.warning("http_timeout", url=url, request_id=request.id)
            raise TransportError("timeout", str(e) or "Request timed out", url) from e
        except httpx.ConnectError as e:
            logger.warning("http_connection_error", url=url, error=str(e))
            raise TransportError("connection", str(e), url) from e
        except httpx.HTTPError as e:
            logger.error("http_error", url=url, error=str(e), error_type=type(e).__name__)
            raise TransportError(
                "unknown", str(e), url, details={"exception": type(e).__name__}
            ) from e
        elapsed_ms = (time.perf_counter() - start) * 1000

        return HTTPResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            text=response.text,
            url=str(response.url),
            elapsed_ms=elapsed_ms,
            request_id=request.id,
        )
