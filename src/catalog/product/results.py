"""Typed outcomes of stock operations.

``StockUpdateResult`` is what the HTTP boundary maps to status codes:

    StockUpdated     -> 200
    ProductNotFound  -> 404
    InvalidQuantity  -> 400
    InternalError    -> 500

``QuantityChanged`` is the store-level success outcome; it carries the
quantity observed under the product's lock just before the write, which is
what the stock-change event reports.
"""

from dataclasses import dataclass

from catalog.product.product import Product


@dataclass(frozen=True)
class StockUpdated:
    message: str
    product: Product

    success = True


@dataclass(frozen=True)
class ProductNotFound:
    product_id: str

    success = False

    @property
    def message(self) -> str:
        return f"Product not found: {self.product_id}"


@dataclass(frozen=True)
class InvalidQuantity:
    reason: str

    success = False

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class InternalError:
    reason: str

    success = False

    @property
    def message(self) -> str:
        return self.reason


@dataclass(frozen=True)
class QuantityChanged:
    previous_quantity: int
    product: Product

    @property
    def new_quantity(self) -> int:
        return self.product.quantity


StockUpdateResult = StockUpdated | ProductNotFound | InvalidQuantity | InternalError
