import pytest
import respx
from basecamp_connector.core.client import BasecampClient
from basecamp_connector.core.errors import BasecampApiError
from basecamp_connector.core.pagination import (
    PAGE_SIZE,
    Pagination,
    collect_all,
    collect_by_link,
    collect_by_page,
    parse_next_link,
)
from httpx import Response

API = "https://3.basecampapi.com/9999"


@pytest.fixture
def client():
    return BasecampClient()


def _records(start, count):
    return [{"id": n} for n in range(start, start + count)]


def _paged(total):
    """side_effect serving `total` records in ?page=N chunks of 50."""

    def responder(request):
        page = int(request.url.params["page"])
        start = (page - 1) * PAGE_SIZE
        count = max(0, min(PAGE_SIZE, total - start))
        return Response(200, json=_records(start, count))

    return responder


def test_parse_next_link_variants():
    assert parse_next_link({"Link": '<https://x/p?page=2>; rel="next"'}) == (
        "https://x/p?page=2"
    )
    assert parse_next_link({"LINK": '<https://x/p?page=3>;rel="next"'}) == (
        "https://x/p?page=3"
    )
    assert parse_next_link({"link": '<https://x/p?page=1>; rel="prev"'}) is None
    assert parse_next_link({}) is None
    assert parse_next_link(None) is None


@pytest.mark.asyncio
@respx.mock
async def test_link_walk_follows_next_until_absent(client):
    route = respx.get(f"{API}/projects.json").mock(
        side_effect=[
            Response(
                200,
                json=_records(1, 2),
                headers={"Link": f'<{API}/projects.json?page=2>; rel="next"'},
            ),
            Response(
                200,
                json=_records(3, 2),
                headers={"link": f'<{API}/projects.json?page=3>; rel="next"'},
            ),
            Response(200, json=_records(5, 1)),
        ]
    )

    async with client:
        items = await collect_by_link(client, "/projects.json", account="9999")

    assert [i["id"] for i in items] == [1, 2, 3, 4, 5]
    assert route.call_count == 3
    assert str(route.calls[0].request.url) == f"{API}/projects.json"
    assert str(route.calls[1].request.url) == f"{API}/projects.json?page=2"
    assert str(route.calls[2].request.url) == f"{API}/projects.json?page=3"


@pytest.mark.asyncio
@respx.mock
async def test_link_walk_single_page_without_header(client):
    route = respx.get(f"{API}/people.json").mock(
        return_value=Response(200, json=_records(1, 3))
    )

    async with client:
        items = await collect_by_link(client, "/people.json", account="9999")

    assert len(items) == 3
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_link_walk_non_array_page_contributes_nothing(client):
    route = respx.get(f"{API}/projects.json").mock(
        side_effect=[
            Response(
                200,
                json={"unexpected": True},
                headers={"Link": f'<{API}/projects.json?page=2>; rel="next"'},
            ),
            Response(200, json=_records(1, 2)),
        ]
    )

    async with client:
        items = await collect_by_link(client, "/projects.json", account="9999")

    assert items == _records(1, 2)
    assert route.call_count == 2


@pytest.mark.asyncio
@respx.mock
async def test_link_walk_error_mid_walk_propagates(client):
    respx.get(f"{API}/projects.json").mock(
        side_effect=[
            Response(
                200,
                json=_records(1, 1),
                headers={"Link": f'<{API}/projects.json?page=2>; rel="next"'},
            ),
            Response(500, json={"error": "boom"}),
        ]
    )

    async with client:
        with pytest.raises(BasecampApiError) as exc:
            await collect_by_link(client, "/projects.json", account="9999")

    assert exc.value.status_code == 500


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "total, expected_requests", [(0, 1), (3, 1), (50, 2), (103, 3), (150, 4)]
)
@respx.mock
async def test_page_walk_request_count(client, total, expected_requests):
    route = respx.get(f"{API}/templates.json").mock(side_effect=_paged(total))

    async with client:
        items = await collect_by_page(client, "GET", "/templates.json", account="9999")

    assert len(items) == total
    assert route.call_count == expected_requests
    pages = [int(c.request.url.params["page"]) for c in route.calls]
    assert pages == list(range(1, expected_requests + 1))


@pytest.mark.asyncio
@respx.mock
async def test_page_walk_merges_page_into_query(client):
    route = respx.get(f"{API}/buckets/1/todolists/2/todos.json").mock(
        return_value=Response(200, json=_records(1, 4))
    )
    query = {"status": "archived"}

    async with client:
        items = await collect_by_page(
            client,
            "GET",
            "/buckets/1/todolists/2/todos.json",
            query=query,
            account="9999",
        )

    assert len(items) == 4
    params = route.calls[0].request.url.params
    assert params["status"] == "archived"
    assert params["page"] == "1"
    assert query == {"status": "archived"}


@pytest.mark.asyncio
@respx.mock
async def test_page_walk_stops_on_non_array(client):
    route = respx.get(f"{API}/templates.json").mock(
        return_value=Response(200, json={"error": "nope"})
    )

    async with client:
        items = await collect_by_page(client, "GET", "/templates.json", account="9999")

    assert items == []
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_page_walk_error_mid_walk_propagates(client):
    respx.get(f"{API}/templates.json").mock(
        side_effect=[
            Response(200, json=_records(1, PAGE_SIZE)),
            Response(429, json={"error": "slow down"}),
        ]
    )

    async with client:
        with pytest.raises(BasecampApiError) as exc:
            await collect_by_page(client, "GET", "/templates.json", account="9999")

    assert exc.value.status_code == 429


@pytest.mark.asyncio
@respx.mock
async def test_collect_all_link_carries_query_in_first_url(client):
    route = respx.get(f"{API}/projects.json").mock(
        return_value=Response(200, json=_records(1, 2))
    )

    async with client:
        items = await collect_all(
            client,
            Pagination.LINK,
            "/projects.json",
            {"status": "archived"},
            account="9999",
        )

    assert len(items) == 2
    assert route.calls[0].request.url.params["status"] == "archived"
    assert "page" not in route.calls[0].request.url.params
