"""FastAPI routes for the catalog.

Handlers are plain ``def`` functions: FastAPI runs them on its worker thread
pool, so concurrent requests hit the store from parallel threads.
"""

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from catalog.api.schemas import (
    ErrorResponse,
    HealthResponse,
    ProductSchema,
    StockUpdateRequest,
    StockUpdateResponse,
)
from catalog.context import CatalogContext
from catalog.exceptions import CatalogNotInitialized
from catalog.product.results import (
    InternalError,
    InvalidQuantity,
    ProductNotFound,
    StockUpdated,
)
from catalog.service import CatalogService

_STATUS_BY_RESULT = {
    StockUpdated: 200,
    ProductNotFound: 404,
    InvalidQuantity: 400,
    InternalError: 500,
}

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_context(request: Request) -> CatalogContext:
    context = getattr(request.app.state, "catalog", None)
    if context is None:
        raise CatalogNotInitialized()
    return context


def get_catalog_service(context: CatalogContext = Depends(get_context)) -> CatalogService:
    return context.service


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductSchema])
def list_products(service: CatalogService = Depends(get_catalog_service)) -> list[ProductSchema]:
    return [ProductSchema.from_product(product) for product in service.get_all_products()]


@product_router.get("/{product_id}", response_model=ProductSchema, responses=_ERROR_RESPONSES)
def get_product(product_id: str, service: CatalogService = Depends(get_catalog_service)):
    result = service.get_product(product_id)
    if isinstance(result, ProductNotFound):
        return JSONResponse(status_code=404, content=ErrorResponse(message="Product not found").model_dump())
    return ProductSchema.from_product(result)


@product_router.put("/{product_id}/stock", response_model=StockUpdateResponse, responses=_ERROR_RESPONSES)
def update_stock(
    product_id: str,
    body: StockUpdateRequest,
    response: Response,
    service: CatalogService = Depends(get_catalog_service),
) -> StockUpdateResponse:
    result = service.update_product_stock(product_id, body.quantity)
    response.status_code = _STATUS_BY_RESULT.get(type(result), 500)

    if isinstance(result, StockUpdated):
        return StockUpdateResponse(
            success=True,
            message=result.message,
            product=ProductSchema.from_product(result.product),
        )
    return StockUpdateResponse(success=False, message=result.message, product=None)


# ---------------------------------------------------------------------------
# Health Router
# ---------------------------------------------------------------------------
health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse, responses={503: {"model": ErrorResponse}})
def health(request: Request):
    context = getattr(request.app.state, "catalog", None)
    if context is None:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "success": False, "message": CatalogNotInitialized().message},
        )

    publisher = context.publisher.health()
    return HealthResponse(
        status="ok" if publisher["connected"] else "degraded",
        products=len(context.store),
        publisher=publisher,
    )
