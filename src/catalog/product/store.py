"""Product store port and in-memory adapter.

The store is shared by every request thread. Only a single product's
quantity mutation needs atomicity, so each entry carries its own lock:
concurrent updates to the same product serialize on that lock, updates to
different products never contend. The entry map lock only guards adding
products and copying the entry list.

Every read returns a snapshot copy taken under the entry lock, so callers
never observe a half-applied write and cannot mutate stored state.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from catalog.exceptions import DuplicateProduct
from catalog.product.product import Product, is_stock_quantity
from catalog.product.results import InvalidQuantity, ProductNotFound, QuantityChanged


def validate_quantity(new_quantity) -> InvalidQuantity | None:
    """Return an ``InvalidQuantity`` outcome for unusable stock values, else None."""
    if not is_stock_quantity(new_quantity):
        return InvalidQuantity(reason=f"Quantity must be an integer, got {new_quantity!r}")
    if new_quantity < 0:
        return InvalidQuantity(reason=f"Quantity cannot be negative: {new_quantity}")
    return None


class ProductStore(ABC):
    """Keyed collection of products with atomic per-product stock updates."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Add a product while seeding. Duplicate ids are rejected."""
        ...

    @abstractmethod
    def get(self, product_id: str) -> Product | None:
        """Return a snapshot of the product, or None when the id is unknown."""
        ...

    @abstractmethod
    def get_all(self) -> list[Product]:
        """Return snapshots of every product in insertion order."""
        ...

    @abstractmethod
    def set_quantity(
        self, product_id: str, new_quantity: int
    ) -> QuantityChanged | ProductNotFound | InvalidQuantity:
        """Atomically overwrite a product's quantity."""
        ...

    def __len__(self) -> int:
        return len(self.get_all())


@dataclass
class _Entry:
    product: Product
    lock: threading.Lock = field(default_factory=threading.Lock)

    def snapshot(self) -> Product:
        with self.lock:
            return self.product.model_copy()


class InMemoryProductStore(ProductStore):
    def __init__(self, products: list[Product] | None = None) -> None:
        self._entries: dict[str, _Entry] = {}
        self._registry_lock = threading.Lock()
        for product in products or []:
            self.add(product)

    def add(self, product: Product) -> None:
        with self._registry_lock:
            if product.id in self._entries:
                raise DuplicateProduct(product.id)
            self._entries[product.id] = _Entry(product=product.model_copy())

    def get(self, product_id: str) -> Product | None:
        entry = self._entries.get(product_id)
        if entry is None:
            return None
        return entry.snapshot()

    def get_all(self) -> list[Product]:
        with self._registry_lock:
            entries = list(self._entries.values())
        return [entry.snapshot() for entry in entries]

    def set_quantity(
        self, product_id: str, new_quantity: int
    ) -> QuantityChanged | ProductNotFound | InvalidQuantity:
        invalid = validate_quantity(new_quantity)
        if invalid is not None:
            return invalid

        entry = self._entries.get(product_id)
        if entry is None:
            return ProductNotFound(product_id=product_id)

        with entry.lock:
            previous = entry.product.quantity
            entry.product.quantity = new_quantity
            snapshot = entry.product.model_copy()

        return QuantityChanged(previous_quantity=previous, product=snapshot)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
