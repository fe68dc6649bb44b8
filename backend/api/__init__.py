from .graphql import router as graphql_router
from .health import router as health_router
from .products import router as products_router

__all__ = [
    "graphql_router",
    "health_router",
    "products_router",
]
