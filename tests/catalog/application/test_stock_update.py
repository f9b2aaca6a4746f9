"""Tests for CatalogService.update_product_stock and the product lookups."""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from catalog.exceptions import PublisherUnavailable
from catalog.product.product import Product
from catalog.product.results import (
    InternalError,
    InvalidQuantity,
    ProductNotFound,
    StockUpdated,
)
from catalog.product.store import InMemoryProductStore
from catalog.publisher import EventPublisher, FakePublisher
from catalog.service import CatalogService


class TestUpdateProductStock:
    @pytest.mark.parametrize("quantity", [0, 1, 5, 10, 10_000])
    def test_non_negative_update_succeeds(self, service, quantity):
        result = service.update_product_stock("p1", quantity)
        assert isinstance(result, StockUpdated)
        assert result.success is True
        assert result.product.quantity == quantity
        assert service.get_product("p1").quantity == quantity

    def test_success_message(self, service):
        result = service.update_product_stock("p1", 5)
        assert result.message == "Stock updated successfully for product p1. New quantity: 5"

    def test_success_carries_full_product(self, service):
        result = service.update_product_stock("p1", 5)
        assert result.product == Product(
            id="p1",
            name="The Pragmatic Programmer",
            description="From journeyman to master",
            price=49.99,
            quantity=5,
        )

    @pytest.mark.parametrize("quantity", [-1, -100])
    def test_negative_update_is_rejected(self, service, publisher, quantity):
        result = service.update_product_stock("p1", quantity)
        assert isinstance(result, InvalidQuantity)
        assert result.success is False
        assert str(quantity) in result.reason
        assert service.get_product("p1").quantity == 10
        publisher.flush(timeout=2)
        assert publisher.events == []

    def test_unknown_product(self, service, store, publisher):
        before = store.get_all()
        result = service.update_product_stock("unknown", 3)
        assert result == ProductNotFound(product_id="unknown")
        assert result.message == "Product not found: unknown"
        assert store.get_all() == before
        publisher.flush(timeout=2)
        assert publisher.events == []

    def test_unknown_product_checked_before_quantity(self, service):
        assert isinstance(service.update_product_stock("unknown", -1), ProductNotFound)

    def test_repeated_update_is_idempotent(self, service):
        first = service.update_product_stock("p1", 7)
        second = service.update_product_stock("p1", 7)
        assert isinstance(first, StockUpdated)
        assert isinstance(second, StockUpdated)
        assert second.product == first.product
        assert service.get_product("p1").quantity == 7

    def test_store_fault_becomes_internal_error(self, publisher):
        store = MagicMock()
        store.get.return_value = Product(id="p1", quantity=1)
        store.set_quantity.side_effect = RuntimeError("disk on fire")
        service = CatalogService(store=store, publisher=publisher)

        result = service.update_product_stock("p1", 2)
        assert result == InternalError(reason="Error updating stock")
        assert "disk on fire" not in result.message


class TestStockChangeEvents:
    def test_event_emitted_after_update(self, service, publisher):
        service.update_product_stock("p1", 4)
        assert publisher.flush(timeout=2)

        assert len(publisher.events) == 1
        event = publisher.events[0]
        assert event.product_id == "p1"
        assert event.previous_quantity == 10
        assert event.new_quantity == 4

    def test_event_uses_service_clock(self, store, publisher):
        fixed = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
        service = CatalogService(store=store, publisher=publisher, clock=lambda: fixed)
        service.update_product_stock("p1", 4)
        publisher.flush(timeout=2)
        assert publisher.events[0].timestamp == fixed

    def test_event_emitted_when_quantity_unchanged(self, service, publisher):
        result = service.update_product_stock("p1", 10)
        assert isinstance(result, StockUpdated)
        publisher.flush(timeout=2)
        assert len(publisher.events) == 1
        event = publisher.events[0]
        assert (event.product_id, event.previous_quantity, event.new_quantity) == ("p1", 10, 10)

    def test_events_chain_previous_quantities(self, service, publisher):
        service.update_product_stock("p1", 4)
        service.update_product_stock("p1", 8)
        publisher.flush(timeout=2)
        pairs = sorted((e.previous_quantity, e.new_quantity) for e in publisher.events)
        assert pairs == [(4, 8), (10, 4)]


class TestPublisherFailures:
    def test_publish_raising_does_not_fail_update(self, store):
        publisher = MagicMock(spec=EventPublisher)
        publisher.publish.side_effect = PublisherUnavailable("redis", "connection refused")
        service = CatalogService(store=store, publisher=publisher)

        result = service.update_product_stock("p1", 3)
        assert isinstance(result, StockUpdated)
        assert store.get("p1").quantity == 3
        publisher.publish.assert_called_once()

    def test_unexpected_publish_error_does_not_fail_update(self, store):
        publisher = MagicMock(spec=EventPublisher)
        publisher.publish.side_effect = RuntimeError("boom")
        service = CatalogService(store=store, publisher=publisher)

        assert isinstance(service.update_product_stock("p1", 3), StockUpdated)
        assert store.get("p1").quantity == 3

    def test_delivery_failure_does_not_fail_update(self, service, publisher):
        publisher.configure(should_succeed=False)
        result = service.update_product_stock("p1", 2)
        assert isinstance(result, StockUpdated)
        assert publisher.flush(timeout=2)
        assert publisher.health()["failed"] == 1
        assert service.get_product("p1").quantity == 2

    def test_uninitialized_publisher_still_allows_updates(self, store):
        publisher = FakePublisher(connect_error="connection refused")
        assert publisher.init() is False
        service = CatalogService(store=store, publisher=publisher)

        result = service.update_product_stock("p1", 6)
        assert isinstance(result, StockUpdated)
        assert service.get_product("p1").quantity == 6
        assert publisher.health()["dropped"] == 1
        assert publisher.events == []


class TestLookups:
    def test_get_product(self, service):
        assert service.get_product("p2").name == "Domain-Driven Design"

    def test_get_unknown_product(self, service):
        assert service.get_product("nope") == ProductNotFound(product_id="nope")

    def test_get_all_products(self, service):
        assert [p.id for p in service.get_all_products()] == ["p1", "p2"]

    def test_get_all_products_on_empty_store(self, publisher):
        service = CatalogService(store=InMemoryProductStore(), publisher=publisher)
        assert service.get_all_products() == []


class TestConcurrentStockUpdates:
    def test_concurrent_updates_to_one_product(self, service, publisher):
        targets = list(range(20, 52))
        barrier = threading.Barrier(len(targets))

        def update(quantity):
            barrier.wait()
            return service.update_product_stock("p1", quantity)

        with ThreadPoolExecutor(max_workers=len(targets)) as pool:
            results = list(pool.map(update, targets))

        assert all(isinstance(r, StockUpdated) for r in results)
        final = service.get_product("p1").quantity
        assert final in targets

        publisher.flush(timeout=5)
        assert len(publisher.events) == len(targets)
        assert {e.new_quantity for e in publisher.events} == set(targets)

    def test_concurrent_updates_to_different_products(self, service):
        with ThreadPoolExecutor(max_workers=2) as pool:
            first = pool.submit(service.update_product_stock, "p1", 1)
            second = pool.submit(service.update_product_stock, "p2", 2)
            assert isinstance(first.result(timeout=2), StockUpdated)
            assert isinstance(second.result(timeout=2), StockUpdated)

        assert service.get_product("p1").quantity == 1
        assert service.get_product("p2").quantity == 2
