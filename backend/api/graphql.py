import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from auth import get_current_session
from platform_client import GraphqlClient, PlatformSession
from services.customization_service import create_customization, resolve_kind

logger = logging.getLogger("checkout-customizations")

router = APIRouter(prefix="/api", tags=["graphql"])


def get_graphql_client(
    session: PlatformSession = Depends(get_current_session),
) -> GraphqlClient:
    return GraphqlClient(session)


@router.post("/graphql")
async def run_named_request(
    body: Dict[str, Any] = Body(...),
    client: GraphqlClient = Depends(get_graphql_client),
) -> Response:
    payload = dict(body)
    request_name = payload.pop("requestName", None)
    kind = resolve_kind(request_name)
    if kind is None:
        logger.warning("Ignoring unknown requestName %r", request_name)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": f"Unknown requestName: {request_name}"},
        )

    try:
        request = kind.request_model.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    outcome = await create_customization(kind, request, client)
    if not outcome.ok:
        return JSONResponse(
            status_code=outcome.status_code, content={"error": outcome.error}
        )
    return Response(status_code=status.HTTP_200_OK)
