"""
Development Backend Server

FastAPI application serving the REST contract of the hosted backend over
the in-memory DemoBackend, so HttpApiClient can be exercised end to end
without the real service.

Endpoints (all under /api):
    - GET  /categories, /restaurants, /offers
    - POST /restaurants            (auth)
    - GET  /userdata               (auth)
    - GET  /cart                   (auth)
    - POST /cart/add, /cart/increment, /cart/decrement (auth)
    - POST /orders/create          (auth)
    - GET  /orders/user            (auth)
    - GET  /health

Any non-empty bearer token is accepted.

Run:
    python -m foodingo.devserver

Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from foodingo.core.config import get_settings, setup_logging
from foodingo.schemas import OrderCreate, RestaurantCreate
from foodingo.services.api.catalog import DemoBackend

logger = logging.getLogger(__name__)


class CartMutation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(default=1, ge=1)


def require_token(authorization: Optional[str] = Header(default=None)) -> str:
    """Extract the bearer token or reject the request."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Not authorized, token missing")
    return token.strip()


def create_app(backend: Optional[DemoBackend] = None) -> FastAPI:
    """Build the dev server around a (shared) DemoBackend."""
    settings = get_settings()
    demo = backend or DemoBackend()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"Starting {settings.app_name} dev backend")
        logger.info(f"   Version: {settings.app_version}")
        logger.info(f"   Environment: {settings.env_mode.value}")
        logger.info("=" * 60)
        yield
        logger.info("Dev backend stopped")

    app = FastAPI(
        title=f"{settings.app_name} Dev Backend",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.backend = demo
    router = APIRouter(prefix="/api")

    # =========================================================================
    # CATALOG
    # =========================================================================

    @router.get("/categories")
    async def list_categories() -> dict[str, Any]:
        return demo.categories_payload()

    @router.get("/restaurants")
    async def list_restaurants() -> list[dict[str, Any]]:
        return demo.restaurants_payload()

    @router.post("/restaurants")
    async def create_restaurant(
        restaurant: RestaurantCreate,
        token: str = Depends(require_token),
    ) -> dict[str, Any]:
        result = demo.create_restaurant(restaurant.to_wire())
        if not result["success"]:
            raise HTTPException(status_code=400, detail=result["message"])
        return result

    @router.get("/offers")
    async def list_offers() -> list[dict[str, Any]]:
        return demo.offers_payload()

    # =========================================================================
    # USER & CART
    # =========================================================================

    @router.get("/userdata")
    async def user_data(token: str = Depends(require_token)) -> dict[str, Any]:
        return demo.user_payload()

    @router.get("/cart")
    async def get_cart(token: str = Depends(require_token)) -> dict[str, Any]:
        return demo.cart_payload()

    @router.post("/cart/add")
    async def add_to_cart(
        body: CartMutation,
        token: str = Depends(require_token),
    ) -> dict[str, Any]:
        if demo.add_to_cart(body.product_id, body.quantity):
            return {"success": True, "message": "Added to cart"}
        return {"success": False, "message": "Product not found"}

    @router.post("/cart/increment")
    async def increment(
        body: CartMutation,
        token: str = Depends(require_token),
    ) -> dict[str, Any]:
        if demo.increment(body.product_id):
            return {"success": True}
        return {"success": False, "message": "Item not in cart"}

    @router.post("/cart/decrement")
    async def decrement(
        body: CartMutation,
        token: str = Depends(require_token),
    ) -> dict[str, Any]:
        if demo.decrement(body.product_id):
            return {"success": True}
        return {"success": False, "message": "Item not in cart"}

    # =========================================================================
    # ORDERS
    # =========================================================================

    @router.post("/orders/create")
    async def create_order(
        order: OrderCreate,
        token: str = Depends(require_token),
    ) -> dict[str, Any]:
        result = demo.create_order(order.to_wire())
        if not result["success"]:
            raise HTTPException(status_code=400, detail=result["message"])
        return result

    @router.get("/orders/user")
    async def list_orders(token: str = Depends(require_token)) -> dict[str, Any]:
        return demo.orders_payload()

    @router.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy", "environment": settings.env_mode.value}

    app.include_router(router)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": str(exc) if settings.debug else "An unexpected error occurred",
            },
        )

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    setup_logging()
    uvicorn.run(
        create_app(),
        host=settings.devserver_host,
        port=settings.devserver_port,
    )


if __name__ == "__main__":
    main()
