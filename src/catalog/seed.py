"""Catalog seeding.

Products enter the store only here, at startup. ``SEED_FILE`` may point to a
JSON list of product objects; otherwise the built-in book catalog is used.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from catalog.exceptions import SeedError
from catalog.product.product import Product
from catalog.product.store import ProductStore

DEFAULT_PRODUCTS: list[dict] = [
    {
        "id": "p1",
        "name": "The Pragmatic Programmer",
        "description": "From journeyman to master, 20th anniversary edition",
        "price": 49.99,
        "quantity": 10,
    },
    {
        "id": "p2",
        "name": "Designing Data-Intensive Applications",
        "description": "The big ideas behind reliable, scalable and maintainable systems",
        "price": 59.5,
        "quantity": 25,
    },
    {
        "id": "p3",
        "name": "Domain-Driven Design",
        "description": "Tackling complexity in the heart of software",
        "price": 64.0,
        "quantity": 5,
    },
    {
        "id": "p4",
        "name": "Fluent Python",
        "description": "Clear, concise and effective programming",
        "price": 54.99,
        "quantity": 0,
    },
]


def _build_products(records: list, source: str) -> list[Product]:
    products = []
    for index, record in enumerate(records):
        try:
            products.append(Product.model_validate(record))
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}" for err in exc.errors()
            )
            raise SeedError(source, f"product #{index}: {problems}") from exc
    return products


def load_products(path: Path) -> list[Product]:
    """Read products from a JSON file holding a list of product objects."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise SeedError(str(path), f"cannot read file: {exc.strerror or exc}") from exc
    except json.JSONDecodeError as exc:
        raise SeedError(str(path), f"invalid JSON: {exc.msg} (line {exc.lineno})") from exc

    if not isinstance(raw, list):
        raise SeedError(str(path), "expected a list of products")
    return _build_products(raw, str(path))


def default_products() -> list[Product]:
    """Return the built-in book catalog used when no seed file is configured."""
    return _build_products(DEFAULT_PRODUCTS, "built-in catalog")


def seed_store(store: ProductStore, products: list[Product]) -> int:
    """Add ``products`` to ``store``; returns how many were added."""
    for product in products:
        store.add(product)
    return len(products)
