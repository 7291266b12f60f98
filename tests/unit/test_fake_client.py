"""
FakeMetaphorClient Tests

The fake is a drop-in for code that depends on MetaphorClientProtocol.
"""

import pytest

from metaphor_client.clients.builder import Operation
from metaphor_client.clients.metaphor import FakeMetaphorClient
from metaphor_client.core.exceptions import EmptyResultError, EmptyResultKind
from metaphor_client.models.responses import ContentRecord, SearchResponse, SearchResult
from metaphor_client.options import with_num_results, with_type


@pytest.fixture
def results() -> list[SearchResult]:
    return [
        SearchResult(id=f"id{i}", url=f"https://example.com/{i}", score=1.0 - i / 10)
        for i in range(5)
    ]


class TestFakeMetaphorClient:
    @pytest.mark.asyncio
    async def test_search_returns_preset_results(self, results) -> None:
        client = FakeMetaphorClient(results=results)

        response = await client.search("q")

        assert response.ids == [r.id for r in results]

    @pytest.mark.asyncio
    async def test_num_results_limits_output(self, results) -> None:
        client = FakeMetaphorClient(results=results, options=[with_num_results(4)])

        response = await client.find_similar("https://example.com", with_num_results(2))

        assert response.ids == ["id0", "id1"]

    @pytest.mark.asyncio
    async def test_records_calls(self, results) -> None:
        client = FakeMetaphorClient(results=results)

        await client.search("q", with_num_results(3))

        operation, params = client.calls[0]
        assert operation is Operation.SEARCH
        assert params.num_results == 3

    @pytest.mark.asyncio
    async def test_empty_policy_matches_real_client(self) -> None:
        client = FakeMetaphorClient()

        with pytest.raises(EmptyResultError) as exc_info:
            await client.find_similar("https://example.com")

        assert exc_info.value.kind is EmptyResultKind.NO_SIMILAR_LINKS

    @pytest.mark.asyncio
    async def test_get_contents_matches_ids_in_order(self) -> None:
        client = FakeMetaphorClient(
            contents=[
                ContentRecord(id="a", url="https://a.com", extract="A"),
                ContentRecord(id="b", url="https://b.com", extract="B"),
            ]
        )

        response = await client.get_contents(["b", "missing", "a"])

        assert [record.id for record in response.contents] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_get_contents_unknown_ids_is_empty(self) -> None:
        client = FakeMetaphorClient(contents=[ContentRecord(id="a", url="u")])

        with pytest.raises(EmptyResultError) as exc_info:
            await client.get_contents(["zzz"])

        assert exc_info.value.kind is EmptyResultKind.NO_CONTENTS

    @pytest.mark.asyncio
    async def test_search_response_get_contents_with_fake(self, results) -> None:
        client = FakeMetaphorClient(
            results=results[:1],
            contents=[ContentRecord(id="id0", url="https://example.com/0", extract="zero")],
        )

        search = await client.search("q")
        contents = await search.get_contents(client)

        assert contents.contents[0].extract == "zero"

    @pytest.mark.asyncio
    async def test_set_results(self, results) -> None:
        client = FakeMetaphorClient()
        client.set_results(results[:2])

        response = await client.search("q")

        assert isinstance(response, SearchResponse)
        assert len(response.results) == 2

    @pytest.mark.asyncio
    async def test_default_type_ignored_by_find_similar(self, results) -> None:
        client = FakeMetaphorClient(results=results, options=[with_type("keyword")])

        response = await client.find_similar("https://example.com")

        assert len(response.results) == 5
        operation, params = client.calls[0]
        assert operation is Operation.FIND_SIMILAR
        assert not hasattr(params, "type")
