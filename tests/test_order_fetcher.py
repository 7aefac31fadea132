from __future__ import annotations

import asyncio

from analytics_service.clients.upstream import UpstreamPayloadError
from analytics_service.domain.fetcher import fetch_all_orders


def _rows(*ids: int) -> list[dict]:
    return [{"id": i, "orderNumber": f"ORD-{i}", "orderStatus": "PENDING", "totalAmount": "10"} for i in ids]


def test_fetches_every_page_in_arrival_order(fake_orders):
    source = fake_orders([_rows(5, 4), _rows(9, 1), _rows(3)])

    orders = asyncio.run(fetch_all_orders(source, page_size=2))

    assert [o.id for o in orders] == [5, 4, 9, 1, 3]
    assert source.requested == [(0, 2), (1, 2), (2, 2)]


def test_stops_on_empty_page_even_when_not_last(fake_orders):
    source = fake_orders([_rows(1, 2), [], _rows(3)])

    orders = asyncio.run(fetch_all_orders(source, page_size=2))

    assert [o.id for o in orders] == [1, 2]
    assert [page for page, _ in source.requested] == [0, 1]


def test_error_on_third_page_keeps_earlier_pages(fake_orders, caplog):
    source = fake_orders([_rows(1, 2), _rows(3, 4), _rows(5, 6)], fail_on={2})

    with caplog.at_level("WARNING"):
        orders = asyncio.run(fetch_all_orders(source, page_size=2))

    assert [o.id for o in orders] == [1, 2, 3, 4]
    assert [page for page, _ in source.requested] == [0, 1, 2]
    assert "error fetching orders page 2" in caplog.text


def test_error_on_first_page_returns_nothing(fake_orders):
    source = fake_orders([_rows(1)], fail_on={0})

    orders = asyncio.run(fetch_all_orders(source))

    assert orders == []
    assert source.requested == [(0, 100)]


def test_no_pages_returns_empty_list(fake_orders):
    source = fake_orders([])

    assert asyncio.run(fetch_all_orders(source, page_size=50)) == []
    assert source.requested == [(0, 50)]


def test_unexpected_exception_on_third_page_keeps_earlier_pages(fake_orders, caplog):
    source = fake_orders([_rows(1), _rows(2), _rows(3)], errors={2: RuntimeError("boom")})

    with caplog.at_level("WARNING"):
        orders = asyncio.run(fetch_all_orders(source, page_size=1))

    assert [o.id for o in orders] == [1, 2]
    assert "boom" in caplog.text


def test_malformed_page_payload_truncates_like_unavailable(fake_orders):
    source = fake_orders(
        [_rows(1, 2), _rows(3, 4)],
        errors={1: UpstreamPayloadError("order-service", "malformed orders page 1")},
    )

    orders = asyncio.run(fetch_all_orders(source, page_size=2))

    assert [o.id for o in orders] == [1, 2]
    assert [page for page, _ in source.requested] == [0, 1]
