import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from auth import get_current_session
from platform_client import PlatformSession
from schemas import ProductCountResponse, ProductCreateResponse
from services.products_service import count_products, create_products

logger = logging.getLogger("checkout-customizations")

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("/count", response_model=ProductCountResponse)
async def read_product_count(
    session: PlatformSession = Depends(get_current_session),
) -> ProductCountResponse:
    return ProductCountResponse(count=await count_products(session))


@router.get("/create", response_model=ProductCreateResponse)
async def populate_products(
    session: PlatformSession = Depends(get_current_session),
):
    try:
        await create_products(session)
    except Exception as exc:
        logger.exception("Failed to process products/create: %s", exc)
        return JSONResponse(
            status_code=500,
            content=ProductCreateResponse(success=False, error=str(exc)).model_dump(),
        )
    return ProductCreateResponse(success=True, error=None)
