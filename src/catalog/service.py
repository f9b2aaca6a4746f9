"""Catalog service: stock updates and product lookups.

A stock update validates before it mutates and emits after it mutates:

1. unknown product      -> ProductNotFound, nothing changes
2. negative quantity    -> InvalidQuantity, nothing changes, no event
3. atomic store write
4. StockChanged handed to the publisher (best-effort)
5. StockUpdated with the updated product snapshot

Event delivery is advisory. A publisher error is logged and the update still
reports success; the store is the source of truth.
"""

from collections.abc import Callable
from datetime import UTC, datetime

from catalog.product.events import StockChanged
from catalog.product.product import Product
from catalog.product.results import (
    InternalError,
    InvalidQuantity,
    ProductNotFound,
    QuantityChanged,
    StockUpdated,
    StockUpdateResult,
)
from catalog.product.store import ProductStore, validate_quantity
from catalog.publisher.port import EventPublisher
from catalog.utils.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CatalogService:
    def __init__(
        self,
        store: ProductStore,
        publisher: EventPublisher,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.publisher = publisher
        self._clock = clock

    def update_product_stock(self, product_id: str, new_quantity: int) -> StockUpdateResult:
        """Set a product's stock to ``new_quantity`` (an absolute value, not a delta)."""
        try:
            if self.store.get(product_id) is None:
                logger.info("stock_update_rejected", product_id=product_id, reason="not_found")
                return ProductNotFound(product_id=product_id)

            invalid = validate_quantity(new_quantity)
            if invalid is not None:
                logger.info("stock_update_rejected", product_id=product_id, reason=invalid.reason)
                return invalid

            outcome = self.store.set_quantity(product_id, new_quantity)
        except Exception:
            logger.exception("stock_update_failed", product_id=product_id, new_quantity=new_quantity)
            return InternalError(reason="Error updating stock")

        if not isinstance(outcome, QuantityChanged):
            return outcome

        logger.info(
            "stock_updated",
            product_id=product_id,
            previous_quantity=outcome.previous_quantity,
            new_quantity=outcome.new_quantity,
        )

        self._emit(
            StockChanged(
                product_id=product_id,
                previous_quantity=outcome.previous_quantity,
                new_quantity=outcome.new_quantity,
                timestamp=self._clock(),
            )
        )

        return StockUpdated(
            message=f"Stock updated successfully for product {product_id}. New quantity: {outcome.new_quantity}",
            product=outcome.product,
        )

    def get_product(self, product_id: str) -> Product | ProductNotFound:
        product = self.store.get(product_id)
        if product is None:
            return ProductNotFound(product_id=product_id)
        return product

    def get_all_products(self) -> list[Product]:
        return self.store.get_all()

    def _emit(self, event: StockChanged) -> None:
        try:
            self.publisher.publish(event)
        except Exception as exc:
            logger.warning(
                "stock_event_publish_failed",
                product_id=event.product_id,
                event_id=event.event_id,
                error=str(exc),
            )

