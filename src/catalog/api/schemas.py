"""Pydantic request/response schemas for the Catalog API.

These are external contracts, kept separate from the internal ``Product``
record and the typed stock-update results.
"""

from pydantic import BaseModel, StrictInt

from catalog.product.product import Product


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class StockUpdateRequest(BaseModel):
    # Negative values are accepted here so the service can answer with its own
    # InvalidQuantity reason.
    quantity: StrictInt


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductSchema(BaseModel):
    id: str
    name: str
    description: str
    price: float
    quantity: int

    @classmethod
    def from_product(cls, product: Product) -> "ProductSchema":
        return cls(**product.model_dump())


class StockUpdateResponse(BaseModel):
    success: bool
    message: str
    product: ProductSchema | None = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class HealthResponse(BaseModel):
    status: str
    products: int
    publisher: dict
