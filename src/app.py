"""Catalog service FastAPI application.

The application context is built once at startup (lifespan) and stored on
``app.state.catalog``. Tests and embedding code can pass a ready context to
``create_app()`` instead. If bootstrapping fails, the app still starts and
every product endpoint answers 500 "Catalog service not initialized".

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8080
"""

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from catalog.api import health_router, internal_error_response, product_router, register_exception_handlers
from catalog.context import CatalogContext, bootstrap
from catalog.exceptions import CatalogInitializationError
from catalog.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


def create_app(context: CatalogContext | None = None) -> FastAPI:
    """Build the FastAPI app.

    With ``context`` given, the caller owns it and the lifespan leaves it
    alone; otherwise the lifespan bootstraps one and closes it on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if app.state.catalog is None:
            try:
                owned = bootstrap()
            except CatalogInitializationError as exc:
                logger.error("catalog_not_initialized", reason=exc.reason)
            app.state.catalog = owned

        yield

        if owned is not None:
            owned.close()
            app.state.catalog = None

    app = FastAPI(
        title="Catalog Service",
        description="Product lookup and stock updates with stock-change events",
        lifespan=lifespan,
    )
    app.state.catalog = context

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind request-scoped fields to every log line of the request."""
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        clear_context()
        add_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        except Exception as exc:
            response = internal_error_response(request, exc)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(product_router)
    app.include_router(health_router)
    return app


app = create_app()
