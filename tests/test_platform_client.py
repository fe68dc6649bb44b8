"""Admin API clients against a mocked transport."""

from __future__ import annotations

import json

import httpx
import pytest

import platform_client
from platform_client import GraphqlClient, GraphqlQueryError, RestClient

REAL_ASYNC_CLIENT = httpx.AsyncClient


@pytest.fixture
def mock_transport(monkeypatch):
    def install(handler):
        monkeypatch.setattr(
            platform_client.httpx,
            "AsyncClient",
            lambda **kwargs: REAL_ASYNC_CLIENT(
                transport=httpx.MockTransport(handler), **kwargs
            ),
        )

    return install


@pytest.mark.asyncio
async def test_query_posts_to_admin_endpoint(mock_transport, session) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["token"] = request.headers["X-Shopify-Access-Token"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"shop": {"name": "Test"}}})

    mock_transport(handler)

    body = await GraphqlClient(session).query("{ shop { name } }", {"a": 1})

    assert body == {"data": {"shop": {"name": "Test"}}}
    assert seen["url"] == (
        f"https://test-shop.myshopify.com/admin/api/"
        f"{platform_client.settings.shopify_api_version}/graphql.json"
    )
    assert seen["token"] == "shpat_test"
    assert seen["body"] == {"query": "{ shop { name } }", "variables": {"a": 1}}


@pytest.mark.asyncio
async def test_graphql_errors_raise_query_error(mock_transport, session) -> None:
    errors = [{"message": "Parse error on \"}\""}]
    mock_transport(lambda request: httpx.Response(200, json={"errors": errors}))

    with pytest.raises(GraphqlQueryError) as exc_info:
        await GraphqlClient(session).query("mutation {")

    assert exc_info.value.response == errors


@pytest.mark.asyncio
async def test_http_status_errors_raise_query_error(mock_transport, session) -> None:
    mock_transport(
        lambda request: httpx.Response(401, json={"errors": "Invalid API key"})
    )

    with pytest.raises(GraphqlQueryError) as exc_info:
        await GraphqlClient(session).query("{ shop { name } }")

    assert exc_info.value.response == {"errors": "Invalid API key"}


@pytest.mark.asyncio
async def test_transport_faults_raise_query_error(mock_transport, session) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    mock_transport(handler)

    with pytest.raises(GraphqlQueryError) as exc_info:
        await GraphqlClient(session).query("{ shop { name } }")

    assert "connection refused" in exc_info.value.response


@pytest.mark.asyncio
async def test_rest_get(mock_transport, session) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/products/count.json")
        return httpx.Response(200, json={"count": 4})

    mock_transport(handler)

    assert await RestClient(session).get("products/count.json") == {"count": 4}


@pytest.mark.asyncio
async def test_non_json_success_body_raises_query_error(mock_transport, session) -> None:
    mock_transport(
        lambda request: httpx.Response(200, text="<html>Service Unavailable</html>")
    )

    with pytest.raises(GraphqlQueryError) as exc_info:
        await GraphqlClient(session).query("{ shop { name } }")

    assert exc_info.value.response == "<html>Service Unavailable</html>"
