"""
Metaphor API client.

Pipeline for every call:
    options -> parameters -> RequestDescriptor -> HttpTransport -> decoder

The client never mutates its own state after construction. Parameters are
built fresh per call: client-level default options are applied first, then
the per-call options on top, so a per-call option wins over a client default
for the same field. Sharing one client between concurrent tasks is safe.

Patterns Applied:
- Connection pooling (single httpx.AsyncClient inside HttpTransport)
- Repository Pattern: Protocol for duck typing, FakeMetaphorClient for tests
- Custom namespaced exceptions (metaphor_client.core.exceptions)
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import ValidationError

from metaphor_client.clients.builder import (
    Operation,
    RequestDescriptor,
    build_find_similar,
    build_get_contents,
    build_search,
)
from metaphor_client.clients.decoder import (
    EMPTY_RESULT_KINDS,
    decode_contents_response,
    decode_search_response,
)
from metaphor_client.clients.transport import HttpTransport, RawResponse
from metaphor_client.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    EndpointConfig,
    MetaphorSettings,
)
from metaphor_client.core.exceptions import (
    ConfigurationError,
    EmptyResultError,
    RequestBuildError,
)
from metaphor_client.core.logging import get_logger
from metaphor_client.core.tracing import get_tracer
from metaphor_client.models.parameters import (
    ContentsParameters,
    RequestParameters,
    SearchParameters,
    SimilarityParameters,
)
from metaphor_client.models.responses import ContentRecord, ContentsResponse, SearchResponse, SearchResult
from metaphor_client.options import Option, apply_defaults, apply_options

logger = get_logger(__name__)
tracer = get_tracer(__name__)

P = TypeVar("P", bound=RequestParameters)
R = TypeVar("R", SearchResponse, ContentsResponse)


def _base_parameters(model: type[P], **fields: Any) -> P:
    try:
        return model(**fields)
    except ValidationError as e:
        raise RequestBuildError(f"invalid {model.__name__}: {e}") from e


def _result_count(response: SearchResponse | ContentsResponse) -> int:
    if isinstance(response, SearchResponse):
        return len(response.results)
    return len(response.contents)


# =============================================================================
# Protocol for Duck Typing (Repository Pattern)
# =============================================================================


class MetaphorClientProtocol(Protocol):
    """Protocol for MetaphorClient duck typing.

    Enables FakeMetaphorClient for testing without real HTTP calls.
    """

    async def search(
        self, query: str, *options: Option, timeout: float | None = None
    ) -> SearchResponse:
        """Search for pages matching a query."""
        ...

    async def find_similar(
        self, url: str, *options: Option, timeout: float | None = None
    ) -> SearchResponse:
        """Find pages similar to a URL."""
        ...

    async def get_contents(
        self, ids: Sequence[str], *, timeout: float | None = None
    ) -> ContentsResponse:
        """Retrieve extracted contents for result identifiers."""
        ...


# =============================================================================
# MetaphorClient Implementation
# =============================================================================


class MetaphorClient:
    """Async client for the Metaphor search API.

    Attributes:
        endpoint: Immutable EndpointConfig (api key, base URL, timeout)
        options: Client-level default options, applied before per-call options
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        options: Iterable[Option] = (),
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Metaphor API key, sent as x-api-key
            base_url: Service root
            timeout: Default per-call timeout in seconds
            options: Default options applied to every search / find_similar;
                a default naming a field the operation lacks is skipped
            transport: Optional httpx transport (httpx.MockTransport in tests)

        Raises:
            ConfigurationError: If api_key is empty
        """
        if not api_key:
            raise ConfigurationError(
                "missing the Metaphor API key, set it as the METAPHOR_API_KEY environment variable"
            )

        self.endpoint = EndpointConfig(api_key=api_key, base_url=base_url, timeout=timeout)
        self.options: tuple[Option, ...] = tuple(options)
        self._transport = transport
        self._http = HttpTransport(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: MetaphorSettings | None = None,
        **kwargs: Any,
    ) -> MetaphorClient:
        """Build a client from MetaphorSettings (environment / .env by default).

        Raises:
            ConfigurationError: If no API key is configured
        """
        settings = settings or MetaphorSettings()
        return cls(
            settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self.endpoint.base_url

    @property
    def timeout(self) -> float:
        return self.endpoint.timeout

    def with_endpoint(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> MetaphorClient:
        """Return a new client pointed at another base URL and/or timeout.

        The current client is left unchanged and keeps its own connection pool.
        """
        return MetaphorClient(
            self.endpoint.api_key,
            base_url=base_url if base_url is not None else self.endpoint.base_url,
            timeout=timeout if timeout is not None else self.endpoint.timeout,
            options=self.options,
            transport=self._transport,
        )

    def with_options(self, *options: Option) -> MetaphorClient:
        """Return a new client whose default options are extended by ``options``."""
        return MetaphorClient(
            self.endpoint.api_key,
            base_url=self.endpoint.base_url,
            timeout=self.endpoint.timeout,
            options=self.options + options,
            transport=self._transport,
        )

    def merge_options(self, params: P, options: Sequence[Option]) -> P:
        """Layer client defaults and then per-call options over ``params``."""
        return apply_options(apply_defaults(params, self.options), options)

    async def search(
        self,
        query: str,
        *options: Option,
        timeout: float | None = None,
    ) -> SearchResponse:
        """Search for pages matching ``query``.

        Args:
            query: Free-text query
            *options: Per-call options (with_num_results, with_type, ...)
            timeout: Deadline for this call in seconds

        Returns:
            SearchResponse with at least one result

        Raises:
            RequestBuildError: Options or parameters are invalid
            TransportError: Network failure or timeout
            ServerError: Service answered with an error
            MalformedErrorResponse: Error body could not be parsed
            DecodeError: Success body could not be parsed
            EmptyResultError: No results (kind NO_SEARCH_RESULTS)
        """
        params = self.merge_options(_base_parameters(SearchParameters, query=query), options)
        request = build_search(params)
        return await self._execute(
            request,
            timeout,
            lambda raw: decode_search_response(raw, Operation.SEARCH),
        )

    async def find_similar(
        self,
        url: str,
        *options: Option,
        timeout: float | None = None,
    ) -> SearchResponse:
        """Find pages similar to ``url``.

        Same failure modes as search(); an empty result raises
        EmptyResultError with kind NO_SIMILAR_LINKS.
        """
        params = self.merge_options(_base_parameters(SimilarityParameters, url=url), options)
        request = build_find_similar(params)
        return await self._execute(
            request,
            timeout,
            lambda raw: decode_search_response(raw, Operation.FIND_SIMILAR),
        )

    async def get_contents(
        self,
        ids: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> ContentsResponse:
        """Retrieve extracted contents for result identifiers.

        An empty result raises EmptyResultError with kind NO_CONTENTS.
        """
        if isinstance(ids, str):
            ids = [ids]
        params = _base_parameters(ContentsParameters, ids=tuple(ids))
        request = build_get_contents(params)
        return await self._execute(request, timeout, decode_contents_response)

    async def _execute(
        self,
        request: RequestDescriptor,
        timeout: float | None,
        decode: Callable[[RawResponse], R],
    ) -> R:
        operation = request.operation.value
        with tracer.start_as_current_span(f"metaphor.{operation}") as span:
            span.set_attribute("metaphor.operation", operation)
            span.set_attribute("http.method", request.method)

            raw = await self._http.send(request, timeout=timeout)
            span.set_attribute("http.status_code", raw.status_code)

            response = decode(raw)
            count = _result_count(response)
            span.set_attribute("metaphor.result_count", count)

        logger.debug("metaphor_call_completed", operation=operation, result_count=count)
        return response

    async def aclose(self) -> None:
        """Close the HTTP client connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> MetaphorClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()


# =============================================================================
# FakeMetaphorClient for Testing
# =============================================================================


class FakeMetaphorClient:
    """Fake client for unit testing code that depends on MetaphorClient.

    Implements MetaphorClientProtocol without HTTP. Options are merged exactly
    like the real client, and the empty-result policy is the same: an empty
    answer raises EmptyResultError.

    Attributes:
        calls: (operation, parameters) for every call made, in order
    """

    def __init__(
        self,
        results: list[SearchResult] | None = None,
        contents: list[ContentRecord] | None = None,
        options: Iterable[Option] = (),
    ) -> None:
        """Initialize fake client with optional preset data.

        Args:
            results: Preset results for search() and find_similar()
            contents: Preset records for get_contents(), matched by id
            options: Client-level default options
        """
        self._results = results or []
        self._contents = contents or []
        self.options: tuple[Option, ...] = tuple(options)
        self.calls: list[tuple[Operation, RequestParameters]] = []

    def set_results(self, results: list[SearchResult]) -> None:
        self._results = results

    def set_contents(self, contents: list[ContentRecord]) -> None:
        self._contents = contents

    def _search_like(self, operation: Operation, params: SearchParameters | SimilarityParameters) -> SearchResponse:
        self.calls.append((operation, params))
        response = SearchResponse(results=self._results[: params.num_results])
        if not response.results:
            raise EmptyResultError(EMPTY_RESULT_KINDS[operation], response)
        return response

    async def search(
        self,
        query: str,
        *options: Option,
        timeout: float | None = None,  # noqa: ARG002
    ) -> SearchResponse:
        await asyncio.sleep(0)
        base = _base_parameters(SearchParameters, query=query)
        params = apply_options(apply_defaults(base, self.options), options)
        return self._search_like(Operation.SEARCH, params)

    async def find_similar(
        self,
        url: str,
        *options: Option,
        timeout: float | None = None,  # noqa: ARG002
    ) -> SearchResponse:
        await asyncio.sleep(0)
        base = _base_parameters(SimilarityParameters, url=url)
        params = apply_options(apply_defaults(base, self.options), options)
        return self._search_like(Operation.FIND_SIMILAR, params)

    async def get_contents(
        self,
        ids: Sequence[str],
        *,
        timeout: float | None = None,  # noqa: ARG002
    ) -> ContentsResponse:
        await asyncio.sleep(0)
        if isinstance(ids, str):
            ids = [ids]
        params = _base_parameters(ContentsParameters, ids=tuple(ids))
        self.calls.append((Operation.GET_CONTENTS, params))

        by_id = {record.id: record for record in self._contents}
        response = ContentsResponse(
            contents=[by_id[i] for i in params.ids if i in by_id]
        )
        if not response.contents:
            raise EmptyResultError(EMPTY_RESULT_KINDS[Operation.GET_CONTENTS], response)
        return response
