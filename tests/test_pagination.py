import pytest
from ghs.github.errors import TransportError
from ghs.github.pagination import collect_pages
from fakes import FakeTransport, page

QUERY = "query Q($after: String) { things }"


def three_pages(variables):
    pages = {
        None: page([{"n": 1}, {"n": 2}], has_next=True, cursor="c1"),
        "c1": page([{"n": 3}, {"n": 4}], has_next=True, cursor="c2"),
        "c2": page([{"n": 5}, {"n": 6}], has_next=False, cursor="c3"),
    }
    return {"things": pages[variables["after"]]}


def things(data):
    return data.get("things")


@pytest.mark.asyncio
async def test_collects_every_page_in_order():
    transport = FakeTransport({QUERY: three_pages})

    results = await collect_pages(transport.execute, QUERY, {}, things)

    assert [r["n"] for r in results] == [1, 2, 3, 4, 5, 6]
    assert [v["after"] for v in transport.calls_for(QUERY)] == [None, "c1", "c2"]


@pytest.mark.asyncio
async def test_limit_stops_mid_page_without_fetching_more():
    transport = FakeTransport({QUERY: three_pages})

    results = await collect_pages(transport.execute, QUERY, {}, things, limit=3)

    assert [r["n"] for r in results] == [1, 2, 3]
    assert [v["after"] for v in transport.calls_for(QUERY)] == [None, "c1"]


@pytest.mark.asyncio
async def test_transform_skips_and_limit_counts_accepted_records():
    transport = FakeTransport({QUERY: three_pages})

    results = await collect_pages(
        transport.execute,
        QUERY,
        {"owner": "octo"},
        things,
        limit=2,
        transform=lambda node: node["n"] * 10 if node["n"] % 2 == 0 else None,
    )

    assert results == [20, 40]
    assert transport.calls_for(QUERY)[0]["owner"] == "octo"


@pytest.mark.asyncio
async def test_missing_connection_ends_collection():
    transport = FakeTransport({QUERY: lambda v: {"things": None}})

    assert await collect_pages(transport.execute, QUERY, {}, things) == []


@pytest.mark.asyncio
async def test_null_nodes_are_skipped():
    transport = FakeTransport({QUERY: lambda v: {"things": page([None, {"n": 1}])}})

    assert await collect_pages(transport.execute, QUERY, {}, things) == [{"n": 1}]


@pytest.mark.asyncio
async def test_error_on_later_page_discards_partial_results():
    def failing(variables):
        if variables["after"] is None:
            return {"things": page([{"n": 1}], has_next=True, cursor="c1")}
        return TransportError("GraphQL request failed with status 500", status=500)

    transport = FakeTransport({QUERY: failing})

    with pytest.raises(TransportError):
        await collect_pages(transport.execute, QUERY, {}, things)
