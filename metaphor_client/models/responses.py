"""
Response models returned by the decoder.

All result entities are frozen: once decoded they are never mutated.
Nullable fields reflect what the service actually sends (author and
published date are frequently null, url is occasionally missing). A null
collection decodes as an empty one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from metaphor_client.clients.metaphor import MetaphorClientProtocol


class _ResponseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class SearchResult(_ResponseModel):
    """A single search or find-similar hit.

    Attributes:
        id: Identifier usable with get_contents
        url: Result URL, when the service reports one
        title: Page title
        published_date: Publication date as reported by the service
        author: Author, when known
        score: Relevance score
        extract: Inline extracted text, when the service includes it
    """

    id: str
    url: str | None = None
    title: str | None = None
    published_date: str | None = None
    author: str | None = None
    score: float | None = None
    extract: str | None = None


class SearchResponse(_ResponseModel):
    """Body of a successful /search or /findSimilar call."""

    results: list[SearchResult] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def null_results_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def ids(self) -> list[str]:
        """Result identifiers in ranking order."""
        return [result.id for result in self.results]

    async def get_contents(self, client: MetaphorClientProtocol) -> ContentsResponse:
        """Fetch extracted contents for every result in this response."""
        return await client.get_contents(self.ids)


class ContentRecord(_ResponseModel):
    """Extracted text for one identifier."""

    id: str
    url: str | None = None
    title: str | None = None
    extract: str | None = None


class ContentsResponse(_ResponseModel):
    """Body of a successful /contents call."""

    contents: list[ContentRecord] = Field(default_factory=list)

    @field_validator("contents", mode="before")
    @classmethod
    def null_contents_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ErrorEnvelope(_ResponseModel):
    """Body of any non-success response: ``{"error": "<message>"}``."""

    error: str
