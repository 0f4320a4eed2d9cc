from fastapi import APIRouter

from sellerhub.api.routers import logo, products


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(products.router, prefix="/products", tags=["products"])
    router.include_router(logo.router, prefix="/logo", tags=["logo"])
    return router


__all__ = [
    "create_api_router",
]
