from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from config import settings

logger = logging.getLogger("checkout-customizations")


@dataclass
class PlatformSession:
    shop: str
    access_token: str
    scope: Optional[str] = None
    is_online: bool = False


class GraphqlQueryError(Exception):
    """Raised when the Admin API rejects a query.

    ``response`` carries the raw detail: the GraphQL ``errors`` list, the
    body of a non-2xx response, or the transport error message.
    """

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


def _admin_url(shop: str, path: str) -> str:
    return f"https://{shop}/admin/api/{settings.shopify_api_version}/{path}"


def _headers(session: PlatformSession) -> Dict[str, str]:
    return {
        "X-Shopify-Access-Token": session.access_token,
        "Content-Type": "application/json",
    }


def _response_detail(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class GraphqlClient:
    def __init__(self, session: PlatformSession):
        self.session = session
        self._url = _admin_url(session.shop, "graphql.json")

    async def query(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables
        try:
            async with httpx.AsyncClient(
                timeout=settings.shopify_request_timeout_seconds
            ) as client:
                response = await client.post(
                    self._url, headers=_headers(self.session), json=payload
                )
        except httpx.TransportError as exc:
            raise GraphqlQueryError(
                f"GraphQL request to {self.session.shop} failed", str(exc)
            ) from exc
        if response.status_code >= 400:
            raise GraphqlQueryError(
                f"GraphQL request failed with status {response.status_code}",
                _response_detail(response),
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise GraphqlQueryError(
                "GraphQL response is not valid JSON", response.text
            ) from exc
        errors = body.get("errors")
        if errors:
            raise GraphqlQueryError("GraphQL query returned errors", errors)
        return body


class RestClient:
    def __init__(self, session: PlatformSession):
        self.session = session

    async def get(self, path: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(
            timeout=settings.shopify_request_timeout_seconds
        ) as client:
            response = await client.get(
                _admin_url(self.session.shop, path),
                headers=_headers(self.session),
            )
        response.raise_for_status()
        return response.json()
