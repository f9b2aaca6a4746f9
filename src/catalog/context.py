"""Application context: the composition root of the catalog service.

``bootstrap()`` runs once at process start and wires settings, logging,
store, publisher and service into a ``CatalogContext`` that is handed to the
HTTP layer. A broker that cannot be reached only degrades event delivery;
anything that prevents building the catalog itself raises
``CatalogInitializationError``.
"""

from dataclasses import dataclass

from catalog.config import Settings
from catalog.exceptions import CatalogError, CatalogInitializationError
from catalog.product.store import InMemoryProductStore, ProductStore
from catalog.publisher import EventPublisher, build_publisher
from catalog.seed import default_products, load_products, seed_store
from catalog.service import CatalogService
from catalog.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@dataclass
class CatalogContext:
    settings: Settings
    store: ProductStore
    publisher: EventPublisher
    service: CatalogService

    def close(self) -> None:
        self.publisher.close()


def bootstrap(
    settings: Settings | None = None,
    publisher: EventPublisher | None = None,
    configure_logs: bool = True,
) -> CatalogContext:
    """Build the application context.

    ``publisher`` overrides the adapter chosen from settings (tests).
    """
    try:
        settings = settings or Settings.from_env()
    except CatalogError as exc:
        raise CatalogInitializationError(exc.message) from exc

    if configure_logs:
        configure_logging(settings)

    try:
        products = load_products(settings.seed_file) if settings.seed_file else default_products()
        store = InMemoryProductStore()
        count = seed_store(store, products)
    except CatalogError as exc:
        logger.error("catalog_seed_failed", error=exc.message)
        raise CatalogInitializationError(exc.message) from exc

    publisher = publisher or build_publisher(settings)
    if not publisher.init():
        logger.warning("event_delivery_degraded", backend=publisher.backend)

    service = CatalogService(store=store, publisher=publisher)
    logger.info(
        "catalog_initialized",
        environment=settings.environment,
        products=count,
        publisher=publisher.backend,
        publisher_connected=publisher.connected,
    )
    return CatalogContext(settings=settings, store=store, publisher=publisher, service=service)
