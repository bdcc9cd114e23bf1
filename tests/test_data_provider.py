from __future__ import annotations

import logging

import httpx
import pytest

from http_helpers import RecordingHandler, json_response, make_provider
from retail_console_sdk.data_provider import build_list_params, paginate
from retail_console_sdk.exceptions import HttpStatusError, NetworkError, ResourceNotFoundError
from retail_console_sdk.models import ListFilter, ListRequest, Pagination
from retail_console_sdk.resources import ResourceName


def _route_not_found() -> httpx.Response:
    return json_response(404, {"success": False, "message": "Route not found"})


def test_list_unmapped_resource_is_empty_without_network() -> None:
    handler = RecordingHandler(json_response(200, {}))
    provider = make_provider(handler)

    result = provider.get_list("commissions")

    assert result.items == []
    assert result.total == 0
    assert handler.calls == 0


def test_list_unwraps_list_key() -> None:
    handler = RecordingHandler(
        json_response(200, {"success": True, "products": [{"id": "1", "title": "Mattress"}]})
    )
    provider = make_provider(handler)

    result = provider.get_list("products")

    assert result.model_dump() == {"items": [{"id": "1", "title": "Mattress"}], "total": 1}
    assert handler.requests[0].url.path == "/api/products"


def test_list_falls_back_to_data_then_bare_list() -> None:
    handler = RecordingHandler(
        json_response(200, {"success": True, "data": [{"id": "a"}, {"id": "b"}]}),
        json_response(200, [{"id": "c"}]),
    )
    provider = make_provider(handler)

    assert provider.get_list(ResourceName.ORDERS).total == 2
    assert provider.get_list(ResourceName.STORES).items == [{"id": "c"}]


def test_list_non_sequence_payload_is_empty() -> None:
    handler = RecordingHandler(json_response(200, {"success": True, "calls": {"id": "1"}}))
    provider = make_provider(handler)

    result = provider.get_list("calls")

    assert result.items == []
    assert result.total == 0


def test_list_sends_supported_filters_only() -> None:
    handler = RecordingHandler(json_response(200, {"coupons": []}))
    provider = make_provider(handler)

    provider.get_list(
        "coupons",
        filters=[
            ListFilter(field="active", value=False),
            ListFilter(field="platform", value="shopify"),
            ListFilter(field="search", value="SPRING"),
            ListFilter(field="created_by", value="me"),
        ],
    )

    params = handler.requests[0].url.params
    assert params["active"] == "false"
    assert params["platform"] == "shopify"
    assert params["search"] == "SPRING"
    assert "created_by" not in params


def test_build_list_params_drops_empty_values() -> None:
    assert build_list_params({"active": None, "platform": "", "search": None, "role": "agent"}) == {}
    assert build_list_params({"active": True}) == {"active": True}


def test_list_pagination_is_client_side_and_total_counts_everything() -> None:
    rows = [{"id": str(index)} for index in range(25)]
    handler = RecordingHandler(json_response(200, {"employees": rows}))
    provider = make_provider(handler)

    result = provider.get_list("employees", pagination=Pagination(current=3, page_size=10))

    assert [row["id"] for row in result.items] == [str(index) for index in range(20, 25)]
    assert result.total == 25


def test_paginate_off_returns_everything() -> None:
    assert paginate([1, 2, 3], Pagination(current=2, page_size=1, mode="off")) == [1, 2, 3]


def test_list_route_not_found_degrades_quietly(caplog: pytest.LogCaptureFixture) -> None:
    handler = RecordingHandler(_route_not_found())
    provider = make_provider(handler)

    with caplog.at_level(logging.DEBUG, logger="retail_console_sdk"):
        result = provider.get_list("call-clients")

    assert result.total == 0
    assert handler.calls == 1
    assert not [record for record in caplog.records if record.levelno >= logging.ERROR]


def test_list_other_failures_are_logged_and_empty(caplog: pytest.LogCaptureFixture) -> None:
    handler = RecordingHandler(json_response(500, {"message": "boom"}))
    provider = make_provider(handler, max_attempts=2)

    with caplog.at_level(logging.DEBUG, logger="retail_console_sdk"):
        result = provider.get_list("customers")

    assert result.total == 0
    assert handler.calls == 2
    assert any(record.getMessage() == "resource_list_failed" for record in caplog.records)


def test_get_one_unmapped_raises() -> None:
    provider = make_provider(RecordingHandler(json_response(200, {})))

    with pytest.raises(ResourceNotFoundError, match="commissions"):
        provider.get_one("commissions", "1")


def test_get_one_unwraps_singular_key_and_is_repeatable() -> None:
    handler = RecordingHandler(json_response(200, {"success": True, "product": {"id": "7", "title": "Pillow"}}))
    provider = make_provider(handler)

    first = provider.get_one("products", "7")
    second = provider.get_one("products", "7")

    assert first == second == {"id": "7", "title": "Pillow"}
    assert handler.requests[0].url.path == "/api/products/7"


def test_get_one_returns_whole_body_without_wrapper() -> None:
    handler = RecordingHandler(json_response(200, {"id": "3", "email": "c@example.com"}))
    provider = make_provider(handler)

    assert provider.get_one("customers", "3") == {"id": "3", "email": "c@example.com"}


def test_get_one_propagates_errors() -> None:
    handler = RecordingHandler(_route_not_found())
    provider = make_provider(handler)

    with pytest.raises(HttpStatusError):
        provider.get_one("employees", "1")


def test_create_unmapped_synthesizes_id_without_network() -> None:
    handler = RecordingHandler(json_response(200, {}))
    provider = make_provider(handler)

    created = provider.create("call-scripts", {"name": "X"})

    assert created["name"] == "X"
    assert created["id"]
    assert handler.calls == 0


def test_create_mapped_posts_payload() -> None:
    handler = RecordingHandler(json_response(201, {"success": True, "coupon": {"id": "9", "code": "SAVE"}}))
    provider = make_provider(handler)

    created = provider.create("coupons", {"code": "SAVE"})

    assert created == {"id": "9", "code": "SAVE"}
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.content == b'{"code": "SAVE"}'


def test_create_network_failure_propagates_and_keeps_session() -> None:
    handler = RecordingHandler(httpx.ConnectError("offline"))
    provider = make_provider(handler, max_attempts=1)
    before = provider.http.session_store.get()

    with pytest.raises(NetworkError):
        provider.create("products", {"title": "Bed"})

    assert provider.http.session_store.get() == before


def test_update_unmapped_echoes_payload() -> None:
    provider = make_provider(RecordingHandler(json_response(200, {})))

    assert provider.update("commissions", "5", {"rate": 0.1}) == {"rate": 0.1, "id": "5"}


def test_update_route_not_found_returns_payload_with_id() -> None:
    handler = RecordingHandler(_route_not_found())
    provider = make_provider(handler)

    updated = provider.update("users", "u1", {"name": "New"})

    assert updated == {"name": "New", "id": "u1"}
    assert handler.requests[0].method == "PUT"


def test_update_express_missing_route_is_route_not_found() -> None:
    handler = RecordingHandler(
        httpx.Response(404, text="Cannot PUT /api/calls/1", headers={"content-type": "text/html"})
    )
    provider = make_provider(handler)

    assert provider.update("calls", "1", {"status": "done"}) == {"status": "done", "id": "1"}


def test_update_other_errors_propagate() -> None:
    handler = RecordingHandler(json_response(404, {"message": "Product not found"}))
    provider = make_provider(handler)

    with pytest.raises(HttpStatusError):
        provider.update("products", "1", {"title": "Bed"})


def test_delete_unmapped_and_mapped() -> None:
    handler = RecordingHandler(json_response(200, {"success": True}))
    provider = make_provider(handler)

    assert provider.delete("commissions", "4") == {"id": "4"}
    assert handler.calls == 0
    assert provider.delete("stores", "4") == {"id": "4"}
    assert handler.requests[0].method == "DELETE"


def test_delete_failures_propagate() -> None:
    provider = make_provider(RecordingHandler(json_response(403, {"message": "forbidden"})))

    with pytest.raises(HttpStatusError):
        provider.delete("orders", "1")


def test_get_many_lists_runs_each_resource_independently() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/orders"):
            return json_response(400, {"message": "bad"})
        return json_response(200, {"products": [{"id": "1"}], "data": [{"id": "c"}]})

    provider = make_provider(handler)

    products, customers, orders, commissions = provider.get_many_lists(
        ["products", ListRequest(resource="customers"), ResourceName.ORDERS, "commissions"]
    )

    assert products.total == 1
    assert customers.items == [{"id": "c"}]
    assert orders.total == 0
    assert commissions.total == 0


def test_get_many_lists_keeps_every_request_for_the_same_resource() -> None:
    handler = RecordingHandler(json_response(200, {"products": [{"id": str(n)} for n in range(5)]}))
    provider = make_provider(handler)

    first_page, second_page = provider.get_many_lists(
        [
            ListRequest(resource="products", pagination=Pagination(current=1, page_size=3)),
            ListRequest(resource="products", pagination=Pagination(current=2, page_size=3)),
        ]
    )

    assert [item["id"] for item in first_page.items] == ["0", "1", "2"]
    assert [item["id"] for item in second_page.items] == ["3", "4"]
    assert first_page.total == second_page.total == 5
    assert handler.calls == 2


def test_custom_passes_through() -> None:
    handler = RecordingHandler(json_response(200, {"synced": 3}))
    provider = make_provider(handler)

    assert provider.custom("/coupons/sync", "post", payload={"platform": "both"}) == {"synced": 3}
    assert provider.get_api_url() == "https://api.example.test/api"
