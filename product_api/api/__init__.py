"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from product_api.api.controller import product_router
from product_api.config import get_config
from product_api.services import ProductStore, create_product_store

logger = logging.getLogger(__name__)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unreadable request bodies and bad parameters as 400, not 422."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


def create_app(store: Optional[ProductStore] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Product store to serve from. When omitted, one is built from
            the application configuration at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        product_store = store if store is not None else create_product_store(get_config())
        await product_store.connect()
        app.state.product_store = product_store
        try:
            yield
        finally:
            await product_store.close()
            logger.info("Product store closed")

    app = FastAPI(
        title="Product API",
        description="Product API Information",
        version="1.0.0",
        contact={"name": "Amazing Developer"},
        openapi_tags=[{"name": "Products", "description": "The Ecommerce Product API"}],
        docs_url="/api-docs",
        openapi_url="/api-docs/openapi.json",
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    # Include routers
    app.include_router(product_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
