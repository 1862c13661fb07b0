"""Product resource operations: list, get, create, update, delete."""

import json
import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from product_api.models import UPDATABLE_FIELDS, Product, ProductCreate, ProductUpdate
from product_api.services.errors import NotFoundError, ValidationError
from product_api.services.product_store import ProductStore

logger = logging.getLogger(__name__)


def _error_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    # Inputs are dropped: a rejected NaN or Infinity cannot be rendered as JSON
    return json.loads(error.json(include_url=False, include_input=False))


class ProductService:
    """Translates product requests into store calls.

    The store is injected so the service can run against SQLite, Cosmos DB,
    or a test double. Store failures surface unchanged as ``ServiceError``.
    """

    def __init__(self, store: ProductStore):
        self._store = store

    async def list_products(self) -> list[Product]:
        documents = await self._store.list_products()
        return [Product.model_validate(document) for document in documents]

    async def get_product(self, product_id: str) -> Product:
        document = await self._store.get_product(product_id)
        if document is None:
            raise NotFoundError(product_id)
        return Product.model_validate(document)

    async def create_product(self, payload: Any) -> Product:
        """Validate a candidate payload and store it under a fresh id.

        Raises:
            ValidationError: If required fields are missing, mistyped, or unknown keys are sent.
            ServiceError: If the store fails.
        """
        try:
            candidate = ProductCreate.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError("Invalid product", details=_error_details(e)) from e

        document = candidate.model_dump(by_alias=True, exclude_none=True)
        document["id"] = str(uuid.uuid4())

        stored = await self._store.insert_product(document)
        logger.info(f"Created product {document['id']}")
        return Product.model_validate(stored)

    async def update_product(self, product_id: str, changes: Any) -> Product:
        """Apply a partial update to an existing product.

        Every submitted key must be one of ``UPDATABLE_FIELDS``; otherwise the
        whole request is rejected before the store is touched.

        Raises:
            ValidationError: If a key is not updatable or a value fails validation.
            NotFoundError: If no product has this id.
            ServiceError: If the store fails.
        """
        if not isinstance(changes, Mapping):
            raise ValidationError("Invalid Updates", details=["body must be a JSON object"])

        disallowed = sorted(key for key in changes if key not in UPDATABLE_FIELDS)
        if disallowed:
            raise ValidationError("Invalid Updates", details=disallowed)

        try:
            update = ProductUpdate.model_validate(changes)
        except PydanticValidationError as e:
            raise ValidationError("Invalid Updates", details=_error_details(e)) from e

        current = await self._store.get_product(product_id)
        if current is None:
            raise NotFoundError(product_id)

        merged = {**current, **update.model_dump(by_alias=True, exclude_unset=True)}

        stored = await self._store.replace_product(product_id, merged)
        if stored is None:
            # Deleted between the read and the write
            raise NotFoundError(product_id)

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return Product.model_validate(stored)

    async def delete_product(self, product_id: str) -> None:
        deleted = await self._store.delete_product(product_id)
        if not deleted:
            raise NotFoundError(product_id)
        logger.info(f"Deleted product {product_id}")
