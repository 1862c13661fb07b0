"""Service layer for product operations."""

from product_api.services.errors import (
    NotFoundError,
    ProductError,
    ServiceError,
    ValidationError,
)
from product_api.services.product_service import ProductService
from product_api.services.product_store import (
    CosmosProductStore,
    ProductStore,
    SqliteProductStore,
    create_product_store,
)

__all__ = [
    "CosmosProductStore",
    "NotFoundError",
    "ProductError",
    "ProductService",
    "ProductStore",
    "ServiceError",
    "SqliteProductStore",
    "ValidationError",
    "create_product_store",
]
