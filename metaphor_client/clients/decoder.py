"""
Response decoder and error classifier.

Outcome of one call, in order of precedence:
1. status != 200            -> ServerError (or MalformedErrorResponse)
2. body not the result shape -> DecodeError
3. empty collection          -> EmptyResultError
4. otherwise                 -> the decoded response
"""

from __future__ import annotations

from pydantic import ValidationError

from metaphor_client.clients.builder import Operation
from metaphor_client.clients.transport import RawResponse
from metaphor_client.core.config import SUCCESS_STATUS
from metaphor_client.core.exceptions import (
    DecodeError,
    EmptyResultError,
    EmptyResultKind,
    MalformedErrorResponse,
    ServerError,
)
from metaphor_client.core.logging import get_logger
from metaphor_client.models.responses import ContentsResponse, ErrorEnvelope, SearchResponse

logger = get_logger(__name__)

EMPTY_RESULT_KINDS: dict[Operation, EmptyResultKind] = {
    Operation.SEARCH: EmptyResultKind.NO_SEARCH_RESULTS,
    Operation.FIND_SIMILAR: EmptyResultKind.NO_SIMILAR_LINKS,
    Operation.GET_CONTENTS: EmptyResultKind.NO_CONTENTS,
}


def raise_for_status(raw: RawResponse, operation: Operation) -> None:
    """Translate a non-success response into ServerError.

    Raises:
        ServerError: Body is a valid ``{"error": ...}`` envelope
        MalformedErrorResponse: Body is not a valid error envelope
    """
    if raw.status_code == SUCCESS_STATUS:
        return

    try:
        envelope = ErrorEnvelope.model_validate_json(raw.body)
    except ValidationError as e:
        logger.warning(
            "metaphor_malformed_error_response",
            operation=operation.value,
            status_code=raw.status_code,
        )
        raise MalformedErrorResponse(raw.status_code, raw.body) from e

    logger.warning(
        "metaphor_server_error",
        operation=operation.value,
        status_code=raw.status_code,
        message=envelope.error,
    )
    raise ServerError(envelope.error, raw.status_code)


def _empty(operation: Operation, response: SearchResponse | ContentsResponse) -> EmptyResultError:
    kind = EMPTY_RESULT_KINDS[operation]
    logger.info("metaphor_empty_result", operation=operation.value, kind=kind.name)
    return EmptyResultError(kind, response)


def decode_search_response(raw: RawResponse, operation: Operation) -> SearchResponse:
    """Decode a /search or /findSimilar response.

    Raises:
        ServerError, MalformedErrorResponse: Non-success status
        DecodeError: Body is not a search response
        EmptyResultError: No results (NO_SEARCH_RESULTS or NO_SIMILAR_LINKS)
    """
    raise_for_status(raw, operation)

    try:
        response = SearchResponse.model_validate_json(raw.body)
    except ValidationError as e:
        raise DecodeError(
            f"could not decode {operation.value} response: {e}",
            operation=operation.value,
        ) from e

    if not response.results:
        raise _empty(operation, response)
    return response


def decode_contents_response(raw: RawResponse) -> ContentsResponse:
    """Decode a /contents response.

    Raises:
        ServerError, MalformedErrorResponse: Non-success status
        DecodeError: Body is not a contents response
        EmptyResultError: No contents (NO_CONTENTS)
    """
    operation = Operation.GET_CONTENTS
    raise_for_status(raw, operation)

    try:
        response = ContentsResponse.model_validate_json(raw.body)
    except ValidationError as e:
        raise DecodeError(
            f"could not decode {operation.value} response: {e}",
            operation=operation.value,
        ) from e

    if not response.contents:
        raise _empty(operation, response)
    return response
