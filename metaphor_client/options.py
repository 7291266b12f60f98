"""
Request options.

An option is a named, pure transformation of a request parameters value: it
receives a parameters model and returns a NEW one with a single field changed.
Options compose left to right through apply_options(); when two options touch
the same field the later one wins, other fields are untouched.

Example:
    params = apply_options(
        SearchParameters(query="rust async runtimes"),
        [with_num_results(5), with_type("keyword"), with_num_results(20)],
    )
    # params.num_results == 20, params.type == "keyword"
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError

from metaphor_client.core.exceptions import RequestBuildError
from metaphor_client.models.parameters import RequestOverrides, RequestParameters

P = TypeVar("P", bound=RequestParameters)


class Option(Protocol):
    """Anything callable as ``option(params) -> params``."""

    def __call__(self, params: P) -> P: ...


def replace_fields(params: P, changes: dict[str, Any]) -> P:
    """Return a validated copy of ``params`` with ``changes`` applied.

    Raises:
        RequestBuildError: If a field does not exist on this parameters kind
            or a value fails validation
    """
    model = type(params)
    unknown = sorted(name for name in changes if name not in model.model_fields)
    if unknown:
        raise RequestBuildError(
            f"{model.__name__} has no field(s): {', '.join(unknown)}"
        )
    try:
        return model.model_validate({**params.model_dump(), **changes})
    except ValidationError as e:
        raise RequestBuildError(f"invalid {model.__name__}: {e}") from e


@dataclass(frozen=True)
class FieldOption:
    """Sets exactly one field."""

    field: str
    value: Any

    def __call__(self, params: P) -> P:
        return replace_fields(params, {self.field: self.value})

    def applies_to(self, params: RequestParameters) -> bool:
        return self.field in type(params).model_fields


@dataclass(frozen=True)
class OverridesOption:
    """Copies every set (non-zero) field of a RequestOverrides.

    Fields the target parameters kind does not have are skipped, so one
    overrides object can be shared between search and find-similar calls.
    """

    overrides: RequestOverrides

    def __call__(self, params: P) -> P:
        fields = type(params).model_fields
        changes = {
            name: value
            for name, value in self.overrides.set_fields().items()
            if name in fields
        }
        if not changes:
            return params
        return replace_fields(params, changes)


def apply_options(params: P, options: Iterable[Option]) -> P:
    """Apply ``options`` in order and return the merged parameters."""
    for option in options:
        params = option(params)
    return params


def apply_defaults(params: P, options: Iterable[Option]) -> P:
    """Apply client-level default options, skipping fields ``params`` lacks.

    One set of defaults serves every operation: a default ``with_type`` shapes
    searches and is ignored by find-similar instead of failing it.
    """
    for option in options:
        if isinstance(option, FieldOption) and not option.applies_to(params):
            continue
        params = option(params)
    return params


# =============================================================================
# Option constructors
# =============================================================================


def with_num_results(num_results: int) -> FieldOption:
    return FieldOption("num_results", num_results)


def with_include_domains(include_domains: Iterable[str]) -> FieldOption:
    return FieldOption("include_domains", list(include_domains))


def with_exclude_domains(exclude_domains: Iterable[str]) -> FieldOption:
    return FieldOption("exclude_domains", list(exclude_domains))


def with_start_crawl_date(start_crawl_date: str) -> FieldOption:
    return FieldOption("start_crawl_date", start_crawl_date)


def with_end_crawl_date(end_crawl_date: str) -> FieldOption:
    return FieldOption("end_crawl_date", end_crawl_date)


def with_start_published_date(start_published_date: str) -> FieldOption:
    return FieldOption("start_published_date", start_published_date)


def with_end_published_date(end_published_date: str) -> FieldOption:
    return FieldOption("end_published_date", end_published_date)


def with_autoprompt(use_autoprompt: bool) -> FieldOption:
    """Let the service rewrite the query into an optimized search query."""
    return FieldOption("use_autoprompt", use_autoprompt)


def with_type(search_type: str) -> FieldOption:
    """Search mode: "neural" or "keyword". Search only."""
    return FieldOption("type", search_type)


def with_exclude_source_domain(exclude_source_domain: bool) -> FieldOption:
    return FieldOption("exclude_source_domain", exclude_source_domain)


def with_overrides(overrides: RequestOverrides) -> OverridesOption:
    """Bulk option: copy only the non-zero fields of ``overrides``."""
    return OverridesOption(overrides)


__all__ = [
    "FieldOption",
    "Option",
    "OverridesOption",
    "apply_defaults",
    "apply_options",
    "replace_fields",
    "with_autoprompt",
    "with_end_crawl_date",
    "with_end_published_date",
    "with_exclude_domains",
    "with_exclude_source_domain",
    "with_include_domains",
    "with_num_results",
    "with_overrides",
    "with_start_crawl_date",
    "with_start_published_date",
    "with_type",
]
