"""Data models module."""

from product_api.models.product import (
    UPDATABLE_FIELDS,
    Product,
    ProductCreate,
    ProductUpdate,
)

__all__ = ["UPDATABLE_FIELDS", "Product", "ProductCreate", "ProductUpdate"]
