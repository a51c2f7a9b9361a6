"""Tests for the pagination walk"""

import asyncio

import httpx
import pytest

from core.services.pagination import collect_data, iter_pages

from conftest import load_fixture


class StubClient:
    """Client that serves canned pages keyed by URL."""

    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    async def get_next_page(self, envelope):
        next_url = ((envelope.get("meta") or {}).get("links") or {}).get("next")
        if not next_url:
            return None
        self.requested.append(next_url)
        return self.pages[next_url]


def _page(items, next_url=None):
    return {"meta": {"links": {"next": next_url}}, "data": items}


@pytest.fixture
def three_pages():
    first = _page([1, 2], "https://example.test/obs?page=2")
    pages = {
        "https://example.test/obs?page=2": _page([3, 4], "https://example.test/obs?page=3"),
        "https://example.test/obs?page=3": {"data": [5]},
    }
    return first, StubClient(pages)


def _collect_pages(client, first, **kwargs):
    async def gather():
        return [page async for page in iter_pages(client, first, **kwargs)]

    return asyncio.run(gather())


class TestIterPages:
    def test_yields_every_page_until_meta_is_absent(self, three_pages):
        first, client = three_pages

        pages = _collect_pages(client, first)

        assert [page["data"] for page in pages] == [[1, 2], [3, 4], [5]]
        assert client.requested == [
            "https://example.test/obs?page=2",
            "https://example.test/obs?page=3",
        ]

    def test_single_page(self):
        client = StubClient({})

        pages = _collect_pages(client, load_fixture("list-projects.json"))

        assert len(pages) == 1
        assert client.requested == []

    def test_max_pages_stops_early(self, three_pages):
        first, client = three_pages

        pages = _collect_pages(client, first, max_pages=2)

        assert len(pages) == 2
        assert client.requested == ["https://example.test/obs?page=2"]

    def test_max_pages_must_be_positive(self, three_pages):
        first, client = three_pages

        with pytest.raises(ValueError):
            _collect_pages(client, first, max_pages=0)


class TestCollectData:
    def test_flattens_data_in_order(self, three_pages):
        first, client = three_pages

        assert asyncio.run(collect_data(client, first)) == [1, 2, 3, 4, 5]

    def test_detail_envelope_contributes_single_item(self):
        envelope = load_fixture("get-node.json")

        assert asyncio.run(collect_data(StubClient({}), envelope)) == [envelope["data"]]

    def test_walks_real_client(self, make_client):
        second = {"data": [{"node_vsn": "010"}]}

        def respond(request):
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=second)
            return httpx.Response(200, json=load_fixture("list-observations.json"))

        client, seen = make_client(respond)

        async def scenario():
            first = await client.list_observations()
            return await collect_data(client, first)

        items = asyncio.run(scenario())

        assert len(items) == 3
        assert items[-1] == {"node_vsn": "010"}
        assert len(seen) == 2
