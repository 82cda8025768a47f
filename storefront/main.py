# storefront/main.py
"""
Storefront web service.

``create_app`` builds the FastAPI application: JSON API routes under
``/api``, HTML pages at ``/``, ``/products`` and ``/product/{id}``,
static files under ``/static``.  A module level ``app`` is created at
import time so it can be served directly::

    uvicorn storefront.main:app --port 3000

or with ``python -m storefront.main`` which reads HOST and PORT from the
environment.
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, settings as default_settings
from .core import ProductIn, ProductUpdate, OrderIn, AddToCartIn, envelope, find_index
from .database import JsonStore, CartStore, PRODUCTS
from .logging_config import setup_logging
from . import sdk, views

logger = logging.getLogger(__name__)


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> JsonStore:
    return request.app.state.store

def get_carts(request: Request) -> CartStore:
    return request.app.state.carts


# ---------------------------
# Error envelopes
# ---------------------------
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(success=False, message=str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )

async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        # json_invalid errors carry the byte offset as an int loc part
        where = ".".join(str(part) for part in first.get("loc", ())
                         if part != "body" and not isinstance(part, int))
        message = f"{where}: {first.get('msg')}" if where else str(first.get("msg"))
    return JSONResponse(status_code=400, content=envelope(success=False, message=message))


def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or default_settings
    setup_logging(config.log_level, config.log_file)

    app = FastAPI(title=config.project_name, version=config.api_version)
    app.state.settings = config
    app.state.store = JsonStore(config.data_dir)
    app.state.carts = CartStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    static_dir = Path(config.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.include_router(_build_routes())
    logger.info("Serving collections from %s", Path(config.data_dir).resolve())
    return app


def _build_routes() -> APIRouter:
    router = APIRouter()

    # ---------------------------
    # HTML pages
    # ---------------------------
    @router.get("/", response_class=HTMLResponse)
    async def index_page(store: JsonStore = Depends(get_store)):
        return views.render_index("Welcome to Our Store", await store.load_async(PRODUCTS))

    @router.get("/products", response_class=HTMLResponse)
    async def products_page(store: JsonStore = Depends(get_store)):
        return views.render_index("All Products", await store.load_async(PRODUCTS))

    @router.get("/product/{product_id}", response_class=HTMLResponse)
    async def product_page(product_id: str, store: JsonStore = Depends(get_store)):
        products = await store.load_async(PRODUCTS)
        i = find_index(products, int(product_id)) if product_id.isdecimal() else -1
        if i == -1:
            return HTMLResponse(
                views.render_error("Product Not Found", "The product you are looking for does not exist."),
                status_code=404,
            )
        return views.render_product(products[i])

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @router.get("/api/products")
    async def list_products(store: JsonStore = Depends(get_store)):
        return await sdk.list_products_logic(store)

    @router.get("/api/products/search")
    async def search_products(q: Optional[str] = Query(None), store: JsonStore = Depends(get_store)):
        return await sdk.search_products_logic(store, q)

    @router.post("/api/products", status_code=201)
    async def create_product(payload: ProductIn, store: JsonStore = Depends(get_store)):
        return await sdk.create_product_logic(store, payload)

    @router.get("/api/product/{product_id}")
    async def get_product(product_id: int, store: JsonStore = Depends(get_store)):
        return await sdk.get_product_logic(store, product_id)

    @router.put("/api/product/{product_id}")
    async def update_product(product_id: int, payload: ProductUpdate, store: JsonStore = Depends(get_store)):
        return await sdk.update_product_logic(store, product_id, payload)

    @router.delete("/api/product/{product_id}")
    async def delete_product(product_id: int, store: JsonStore = Depends(get_store)):
        return await sdk.delete_product_logic(store, product_id)

    # ---------------------------
    # Users
    # ---------------------------
    @router.get("/api/users")
    async def list_users(store: JsonStore = Depends(get_store)):
        return await sdk.list_users_logic(store)

    @router.get("/api/user/{user_id}")
    async def get_user(user_id: int, store: JsonStore = Depends(get_store)):
        return await sdk.get_user_logic(store, user_id)

    # ---------------------------
    # Orders
    # ---------------------------
    @router.get("/api/orders")
    async def list_orders(store: JsonStore = Depends(get_store)):
        return await sdk.list_orders_logic(store)

    @router.post("/api/orders", status_code=201)
    async def create_order(payload: OrderIn, store: JsonStore = Depends(get_store)):
        return await sdk.create_order_logic(store, payload)

    # ---------------------------
    # Cart (in-memory)
    # ---------------------------
    @router.post("/api/cart/{user_id}/add")
    async def cart_add(user_id: str, payload: AddToCartIn, carts: CartStore = Depends(get_carts)):
        return await sdk.cart_add_logic(carts, user_id, payload)

    @router.get("/api/cart/{user_id}")
    async def view_cart(user_id: str, carts: CartStore = Depends(get_carts)):
        return await sdk.view_cart_logic(carts, user_id)

    return router


app = create_app()


def main() -> None:
    import uvicorn

    logger.info("Store server running on http://localhost:%s", default_settings.port)
    logger.info("API available at http://localhost:%s/api", default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    main()
