"""Errors raised by the product service and its stores."""

from typing import Any, List, Optional


class ProductError(Exception):
    """Base class for product operation failures."""
    pass


class ValidationError(ProductError):
    """Payload is missing required fields, has wrong types, or carries disallowed keys."""

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class NotFoundError(ProductError):
    """No product matches the given identifier."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class ServiceError(ProductError):
    """The underlying document store failed."""
    pass
