"""metaphor-client: async client for the Metaphor web-search API.

Exposes three remote operations:
- search: neural or keyword search for a query
- find_similar: links similar to a given URL
- get_contents: extracted page text for result identifiers

Requests are configured with composable options (see metaphor_client.options).
"""

from metaphor_client.clients import (
    FakeMetaphorClient,
    MetaphorClient,
    MetaphorClientProtocol,
)
from metaphor_client.core.exceptions import (
    ConfigurationError,
    DecodeError,
    EmptyResultError,
    EmptyResultKind,
    MalformedErrorResponse,
    MetaphorError,
    RequestBuildError,
    ServerError,
    TransportError,
)
from metaphor_client.core.observability import configure_observability
from metaphor_client.models import (
    ContentRecord,
    ContentsResponse,
    RequestOverrides,
    SearchParameters,
    SearchResponse,
    SearchResult,
    SimilarityParameters,
)

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "ContentRecord",
    "ContentsResponse",
    "DecodeError",
    "EmptyResultError",
    "EmptyResultKind",
    "FakeMetaphorClient",
    "MalformedErrorResponse",
    "MetaphorClient",
    "MetaphorClientProtocol",
    "MetaphorError",
    "RequestBuildError",
    "RequestOverrides",
    "SearchParameters",
    "SearchResponse",
    "SearchResult",
    "ServerError",
    "SimilarityParameters",
    "TransportError",
    "__version__",
    "configure_observability",
]
