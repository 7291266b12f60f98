"""
Transport executor.

Sends one RequestDescriptor over a pooled httpx.AsyncClient and hands back the
raw status code and body. Status codes are not interpreted here; that is the
decoder's job.

Patterns Applied:
- Connection pooling (one httpx.AsyncClient per transport, not per request)
- No retries: every call is exactly one HTTP exchange
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from metaphor_client.clients.builder import RequestDescriptor
from metaphor_client.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from metaphor_client.core.exceptions import TransportError
from metaphor_client.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Status code and fully-read body of one HTTP exchange."""

    status_code: int
    body: bytes


class HttpTransport:
    """HTTP executor for the Metaphor API.

    Attributes:
        base_url: Service root every request path is appended to
        timeout: Default request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            api_key: Value for the x-api-key header
            base_url: Service root
            timeout: Default timeout in seconds for each call
            transport: Optional httpx transport (httpx.MockTransport in tests)
        """
        self.base_url = base_url
        self.timeout = timeout
        self._api_key = api_key

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

    async def send(
        self,
        request: RequestDescriptor,
        timeout: float | None = None,
    ) -> RawResponse:
        """Issue ``request`` and read the whole response body.

        Args:
            request: Descriptor produced by the builder
            timeout: Deadline for this call in seconds; defaults to self.timeout

        Returns:
            RawResponse with status code and body bytes

        Raises:
            TransportError: On any network, timeout or protocol failure
        """
        url = request.path
        if request.query is not None:
            url = f"{url}?{request.query}"

        call_timeout: Any = httpx.USE_CLIENT_DEFAULT
        if timeout is not None:
            call_timeout = httpx.Timeout(timeout)

        logger.debug(
            "metaphor_request_sent",
            operation=request.operation.value,
            method=request.method,
            path=request.path,
            url=request.url(self.base_url),
        )

        try:
            response = await self._client.request(
                request.method,
                url,
                content=request.body,
                headers=self._headers(),
                timeout=call_timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning(
                "metaphor_transport_failed",
                operation=request.operation.value,
                reason="timeout",
            )
            raise TransportError(
                f"{request.operation.value} timed out: {e}",
                operation=request.operation.value,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "metaphor_transport_failed",
                operation=request.operation.value,
                reason=type(e).__name__,
            )
            raise TransportError(
                f"{request.operation.value} request failed: {e}",
                operation=request.operation.value,
            ) from e

        logger.debug(
            "metaphor_response_received",
            operation=request.operation.value,
            status_code=response.status_code,
            bytes=len(response.content),
        )
        return RawResponse(status_code=response.status_code, body=response.content)

    async def aclose(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()
