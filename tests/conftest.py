"""Shared fixtures for the checkout customizations backend.

Environment variables are set before any backend module is imported because
``config.settings`` is built at import time.
"""

from __future__ import annotations

import os
from typing import Any

from cryptography.fernet import Fernet

os.environ.setdefault("SHOPIFY_API_KEY", "test-api-key")
os.environ.setdefault("SHOPIFY_API_SECRET", "test-api-secret")
os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("ENCRYPTION_KEY", Fernet.generate_key().decode("utf-8"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from platform_client import GraphqlQueryError, PlatformSession  # noqa: E402


def create_response(field: str, record_field: str, record_id: str = "gid://shopify/Customization/1", errors=None) -> dict:
    """Build a ``<kind>CustomizationCreate`` response body."""
    errors = errors or []
    return {
        "data": {
            field: {
                record_field: None if errors else {"id": record_id},
                "userErrors": [{"message": message} for message in errors],
            }
        }
    }


def metafields_response(errors=None) -> dict:
    errors = errors or []
    return {
        "data": {
            "metafieldsSet": {
                "metafields": [] if errors else [{"id": "gid://shopify/Metafield/9"}],
                "userErrors": [{"message": message} for message in errors],
            }
        }
    }


class FakeGraphqlClient:
    """Records queries and replays queued responses in order.

    A queued ``Exception`` instance is raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, dict | None]] = []

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    async def query(self, query: str, variables: dict | None = None) -> dict:
        self.calls.append((query, variables))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def session() -> PlatformSession:
    return PlatformSession(
        shop="test-shop.myshopify.com",
        access_token="shpat_test",
        scope="write_products",
    )


@pytest.fixture
def app():
    from main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def fake_graphql() -> FakeGraphqlClient:
    return FakeGraphqlClient()


@pytest.fixture
def api_client(app, fake_graphql):
    """TestClient whose GraphQL client is ``fake_graphql``."""
    from api.graphql import get_graphql_client

    app.dependency_overrides[get_graphql_client] = lambda: fake_graphql

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def query_error() -> GraphqlQueryError:
    return GraphqlQueryError(
        "GraphQL query returned errors",
        [{"message": "Field 'foo' doesn't exist on type 'Mutation'"}],
    )
