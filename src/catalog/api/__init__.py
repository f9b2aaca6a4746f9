from catalog.api.errors import internal_error_response, register_exception_handlers
from catalog.api.routes import health_router, product_router

__all__ = ["product_router", "health_router", "internal_error_response", "register_exception_handlers"]
