"""Shared BDD fixtures and step definitions for stock updates."""

import pytest
from catalog.product.product import Product
from catalog.product.results import InvalidQuantity, ProductNotFound, StockUpdated
from catalog.product.store import InMemoryProductStore
from catalog.publisher import FakePublisher
from catalog.service import CatalogService
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def bdd_store():
    return InMemoryProductStore()


@pytest.fixture()
def bdd_publisher():
    publisher = FakePublisher()
    publisher.init()
    yield publisher
    publisher.close()


@pytest.fixture()
def catalog(bdd_store, bdd_publisher):
    return CatalogService(store=bdd_store, publisher=bdd_publisher)


@pytest.fixture()
def outcome():
    """Container for the latest stock-update result."""
    return {"result": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{product_id}" with {quantity:d} units in stock'))
def product_in_stock(bdd_store, product_id, quantity):
    bdd_store.add(Product(id=product_id, name=f"Product {product_id}", price=10.0, quantity=quantity))


@given("the message broker is down")
def broker_down(bdd_publisher):
    bdd_publisher.configure(should_succeed=False, failure_reason="Connection refused")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the update succeeds")
def update_succeeds(outcome):
    assert isinstance(outcome["result"], StockUpdated)
    assert outcome["result"].success is True


@then("the update is rejected as an invalid quantity")
def update_invalid(outcome):
    assert isinstance(outcome["result"], InvalidQuantity)


@then("the update is rejected because the product was not found")
def update_not_found(outcome):
    assert isinstance(outcome["result"], ProductNotFound)


@then(parsers.cfparse('product "{product_id}" has {quantity:d} units in stock'))
def product_has_stock(catalog, product_id, quantity):
    assert catalog.get_product(product_id).quantity == quantity


@then(parsers.cfparse('a stock change from {previous:d} to {new:d} is published for "{product_id}"'))
def stock_change_published(bdd_publisher, previous, new, product_id):
    assert bdd_publisher.flush(timeout=2)
    assert [(e.product_id, e.previous_quantity, e.new_quantity) for e in bdd_publisher.events] == [
        (product_id, previous, new)
    ]


@then("no stock change is published")
def no_stock_change(bdd_publisher):
    assert bdd_publisher.flush(timeout=2)
    assert bdd_publisher.events == []
