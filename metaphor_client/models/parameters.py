"""
Request parameter models.

One frozen model per operation kind. Field names are snake_case in Python and
camelCase on the wire (``num_results`` -> ``numResults``). Optional filters
default to None so they are left out of the serialized payload entirely.

Patterns Applied:
- Pydantic BaseModel for configuration validation
- Immutable values: options return new instances via model validation
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from metaphor_client.core.config import (
    DEFAULT_AUTOPROMPT,
    DEFAULT_NUM_RESULTS,
    DEFAULT_SEARCH_TYPE,
)

SearchType = Literal["neural", "keyword"]


class RequestParameters(BaseModel):
    """Base for every request parameters kind."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )

    def to_payload(self) -> dict[str, object]:
        """Wire representation: camelCase keys, unset optional fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FilterParameters(RequestParameters):
    """Filters shared by search and find-similar.

    Only one of include_domains / exclude_domains should be given; the
    service decides what happens when both are.
    """

    num_results: int = DEFAULT_NUM_RESULTS
    use_autoprompt: bool = DEFAULT_AUTOPROMPT
    include_domains: list[str] | None = None
    exclude_domains: list[str] | None = None
    start_crawl_date: str | None = None
    end_crawl_date: str | None = None
    start_published_date: str | None = None
    end_published_date: str | None = None
    exclude_source_domain: bool | None = None


class SearchParameters(FilterParameters):
    """Parameters for POST /search."""

    query: str
    type: SearchType = DEFAULT_SEARCH_TYPE  # type: ignore[assignment]


class SimilarityParameters(FilterParameters):
    """Parameters for POST /findSimilar."""

    url: str


class ContentsParameters(RequestParameters):
    """Parameters for GET /contents. Order of ids is preserved."""

    ids: tuple[str, ...] = ()


class RequestOverrides(BaseModel):
    """Bulk overrides consumed by ``with_overrides``.

    Every field defaults to its zero value (empty string, None, 0, False) and
    a zero value means "not set". As a consequence a field can never be forced
    back to zero/False/empty through this path; use the single-field options
    for that.
    """

    model_config = ConfigDict(frozen=True)

    num_results: int = 0
    use_autoprompt: bool = False
    type: str = ""
    include_domains: list[str] | None = None
    exclude_domains: list[str] | None = None
    start_crawl_date: str = ""
    end_crawl_date: str = ""
    start_published_date: str = ""
    end_published_date: str = ""
    exclude_source_domain: bool = False

    def set_fields(self) -> dict[str, object]:
        """Fields holding a non-zero value, in declaration order."""
        return {
            name: value
            for name, value in self.model_dump().items()
            if not _is_unset(value)
        }


def _is_unset(value: object) -> bool:
    # zero values: "", None, [], 0, False
    return not value


__all__ = [
    "ContentsParameters",
    "FilterParameters",
    "RequestOverrides",
    "RequestParameters",
    "SearchParameters",
    "SearchType",
    "SimilarityParameters",
]
