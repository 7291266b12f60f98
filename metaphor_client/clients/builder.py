"""
Request builder.

Turns merged request parameters into a transport-ready RequestDescriptor.
Pure: no I/O, no client state.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from pydantic_core import PydanticSerializationError

from metaphor_client.core.config import CONTENTS_PATH, FIND_SIMILAR_PATH, SEARCH_PATH
from metaphor_client.core.exceptions import RequestBuildError
from metaphor_client.models.parameters import (
    ContentsParameters,
    RequestParameters,
    SearchParameters,
    SimilarityParameters,
)


class Operation(str, Enum):
    """Remote operations offered by the service."""

    SEARCH = "search"
    FIND_SIMILAR = "find_similar"
    GET_CONTENTS = "get_contents"


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything the transport needs to issue one call.

    Attributes:
        operation: Which remote operation this request performs
        method: HTTP method
        path: Endpoint path relative to the base URL
        body: Serialized JSON body, None for GET
        query: Raw query string (without the leading "?"), None when absent
    """

    operation: Operation
    method: str
    path: str
    body: bytes | None = None
    query: str | None = None

    def url(self, base_url: str) -> str:
        """Full URL for this request against ``base_url``."""
        url = base_url.rstrip("/") + self.path
        if self.query is not None:
            url = f"{url}?{self.query}"
        return url


def contents_query(ids: Sequence[str]) -> str:
    """Query string for GET /contents.

    The service expects a quoted, comma separated list:
    ``["a", "b"]`` -> ``ids="a","b"``. Identifiers are not escaped.
    """
    joined = '","'.join(ids)
    return f'ids="{joined}"'


def _json_body(params: RequestParameters) -> bytes:
    try:
        return json.dumps(params.to_payload()).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise RequestBuildError(
            f"could not serialize {type(params).__name__}: {e}"
        ) from e


def build_search(params: SearchParameters) -> RequestDescriptor:
    """POST /search with query and parameters as JSON."""
    return RequestDescriptor(
        operation=Operation.SEARCH,
        method="POST",
        path=SEARCH_PATH,
        body=_json_body(params),
    )


def build_find_similar(params: SimilarityParameters) -> RequestDescriptor:
    """POST /findSimilar with subject URL and parameters as JSON."""
    return RequestDescriptor(
        operation=Operation.FIND_SIMILAR,
        method="POST",
        path=FIND_SIMILAR_PATH,
        body=_json_body(params),
    )


def build_get_contents(params: ContentsParameters) -> RequestDescriptor:
    """GET /contents with identifiers in the query string, no body."""
    return RequestDescriptor(
        operation=Operation.GET_CONTENTS,
        method="GET",
        path=CONTENTS_PATH,
        query=contents_query(params.ids),
    )
