"""Catalog exceptions.

Stock-update outcomes are returned as typed results (see
``catalog.product.results``); the exceptions here cover construction-time
validation, configuration and infrastructure faults.
"""


class CatalogError(Exception):
    """Base exception for the catalog service."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class DuplicateProduct(CatalogError):
    """Raised when seeding adds a product id the store already holds."""

    def __init__(self, product_id: str):
        super().__init__(message=f"Duplicate product id: {product_id}", code="DUPLICATE_PRODUCT")
        self.product_id = product_id


class SeedError(CatalogError):
    """Raised when seed data cannot be read or does not describe valid products."""

    def __init__(self, source: str, reason: str):
        super().__init__(message=f"Invalid seed data in {source}: {reason}", code="SEED_ERROR")
        self.source = source
        self.reason = reason


class ConfigurationError(CatalogError):
    """Raised when an environment setting has an unusable value."""

    def __init__(self, setting: str, value: str, reason: str):
        super().__init__(message=f"Invalid {setting}={value!r}: {reason}", code="CONFIGURATION_ERROR")
        self.setting = setting
        self.value = value


class PublisherUnavailable(CatalogError):
    """Raised inside a publisher adapter when the broker cannot be reached.

    Always recovered by the publisher itself; never reaches HTTP callers.
    """

    def __init__(self, backend: str, reason: str):
        super().__init__(message=f"{backend} broker unavailable: {reason}", code="PUBLISHER_UNAVAILABLE")
        self.backend = backend


class CatalogInitializationError(CatalogError):
    """Raised by ``bootstrap()`` when the application context cannot be built."""

    def __init__(self, reason: str):
        super().__init__(message=f"Catalog service failed to initialize: {reason}", code="NOT_INITIALIZED")
        self.reason = reason


class CatalogNotInitialized(CatalogError):
    """Raised at the HTTP boundary when no application context is available."""

    def __init__(self):
        super().__init__(message="Catalog service not initialized", code="NOT_INITIALIZED")
