"""Request parameter and response models."""

from metaphor_client.models.parameters import (
    ContentsParameters,
    FilterParameters,
    RequestOverrides,
    RequestParameters,
    SearchParameters,
    SearchType,
    SimilarityParameters,
)
from metaphor_client.models.responses import (
    ContentRecord,
    ContentsResponse,
    ErrorEnvelope,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "ContentRecord",
    "ContentsParameters",
    "ContentsResponse",
    "ErrorEnvelope",
    "FilterParameters",
    "RequestOverrides",
    "RequestParameters",
    "SearchParameters",
    "SearchResponse",
    "SearchResult",
    "SearchType",
    "SimilarityParameters",
]
