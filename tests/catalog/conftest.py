import pytest
from catalog.config import Settings
from catalog.product.product import Product
from catalog.product.store import InMemoryProductStore
from catalog.publisher import FakePublisher
from catalog.service import CatalogService


def _make_product(**overrides) -> Product:
    defaults = {
        "id": "p1",
        "name": "The Pragmatic Programmer",
        "description": "From journeyman to master",
        "price": 49.99,
        "quantity": 10,
    }
    defaults.update(overrides)
    return Product(**defaults)


@pytest.fixture()
def settings():
    return Settings(environment="test", log_level="WARNING", event_broker="memory")


@pytest.fixture()
def store():
    return InMemoryProductStore(
        [
            _make_product(),
            _make_product(id="p2", name="Domain-Driven Design", price=64.0, quantity=5),
        ]
    )


@pytest.fixture()
def publisher():
    publisher = FakePublisher()
    publisher.init()
    yield publisher
    publisher.close()


@pytest.fixture()
def service(store, publisher):
    return CatalogService(store=store, publisher=publisher)
