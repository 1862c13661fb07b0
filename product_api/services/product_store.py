"""Document store backends for products.

Each store exposes the same async primitives over one product collection and
translates driver failures into ``ServiceError``. A missing document is not an
error at this level: lookups return ``None`` and deletes return ``False``.
"""

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from typing import Any, Optional

from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from product_api.clients import CosmosDBClient, SqliteClient
from product_api.config.configuration import AppConfig
from product_api.services.errors import ServiceError

logger = logging.getLogger(__name__)

# SQL statements
CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    document TEXT NOT NULL
)
"""

LIST_ALL_QUERY = "SELECT * FROM c"


class ProductStore(ABC):
    """Persistence primitives for product documents."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying connection."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""

    @abstractmethod
    async def list_products(self) -> list[dict[str, Any]]:
        """Return every stored product document."""

    @abstractmethod
    async def get_product(self, product_id: str) -> Optional[dict[str, Any]]:
        """Return the document with the given id, or None."""

    @abstractmethod
    async def insert_product(self, document: dict[str, Any]) -> dict[str, Any]:
        """Store a new document (which already carries its id) and return it."""

    @abstractmethod
    async def replace_product(
        self, product_id: str, document: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        """Overwrite an existing document. Returns None if it does not exist."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> bool:
        """Remove a document. Returns False if it does not exist."""

    async def __aenter__(self) -> "ProductStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False


class SqliteProductStore(ProductStore):
    """Products stored as JSON documents in a local SQLite table."""

    def __init__(self, db_path: str = "products.db"):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self._db_path = db_path
        self._sqlite_client: Optional[SqliteClient] = None

    async def connect(self) -> None:
        try:
            self._sqlite_client = SqliteClient(self._db_path)
            self._sqlite_client.execute_write(CREATE_TABLE_SQL)
        except sqlite3.Error as e:
            raise ServiceError(f"Failed to open SQLite store at {self._db_path}: {e}") from e
        logger.info(f"Connected to SQLite product store: {self._db_path}")

    async def close(self) -> None:
        if self._sqlite_client:
            self._sqlite_client.close()
            self._sqlite_client = None

    def _require_client(self) -> SqliteClient:
        if self._sqlite_client is None:
            raise RuntimeError("SQLite product store not connected. Call connect() first.")
        return self._sqlite_client

    async def list_products(self) -> list[dict[str, Any]]:
        client = self._require_client()
        try:
            rows = client.execute_query("SELECT document FROM products ORDER BY rowid")
        except sqlite3.Error as e:
            raise ServiceError(f"Failed to list products: {e}") from e
        return [json.loads(row[0]) for row in rows]

    async def get_product(self, product_id: str) -> Optional[dict[str, Any]]:
        client = self._require_client()
        try:
            rows = client.execute_query(
                "SELECT document FROM products WHERE id = ?",
                (product_id,),
            )
        except sqlite3.Error as e:
            raise ServiceError(f"Failed to read product {product_id}: {e}") from e

        if not rows:
            return None
        return json.loads(rows[0][0])

    async def insert_product(self, document: dict[str, Any]) -> dict[str, Any]:
        client = self._require_client()
        try:
            client.execute_write(
                "INSERT INTO products (id, document) VALUES (?, ?)",
                (document["id"], json.dumps(document)),
            )
        except sqlite3.Error as e:
            raise ServiceError(f"Failed to insert product {document['id']}: {e}") from e
        return document

    async def replace_product(
        self, product_id: str, document: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        client = self._require_client()
        try:
            affected = client.execute_write(
                "UPDATE products SET document = ? WHERE id = ?",
                (json.dumps(document), product_id),
            )
        except sqlite3.Error as e:
            raise ServiceError(f"Failed to update product {product_id}: {e}") from e

        if affected == 0:
            return None
        return document

    async def delete_product(self, product_id: str) -> bool:
        client = self._require_client()
        try:
            affected = client.execute_write(
                "DELETE FROM products WHERE id = ?",
                (product_id,),
            )
        except sqlite3.Error as e:
            raise ServiceError(f"Failed to delete product {product_id}: {e}") from e
        return affected > 0


class CosmosProductStore(ProductStore):
    """Products stored in an Azure Cosmos DB container partitioned by /id."""

    def __init__(self, cosmosdb_client: CosmosDBClient):
        self._cosmosdb_client = cosmosdb_client

    async def connect(self) -> None:
        try:
            await self._cosmosdb_client.connect()
        except AzureError as e:
            raise ServiceError(f"Failed to connect to Cosmos DB: {e}") from e

    async def close(self) -> None:
        await self._cosmosdb_client.close()

    async def list_products(self) -> list[dict[str, Any]]:
        try:
            return await self._cosmosdb_client.query_items(LIST_ALL_QUERY)
        except AzureError as e:
            raise ServiceError(f"Failed to list products: {e}") from e

    async def get_product(self, product_id: str) -> Optional[dict[str, Any]]:
        try:
            return await self._cosmosdb_client.read_item(product_id, partition_key=product_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise ServiceError(f"Failed to read product {product_id}: {e}") from e

    async def insert_product(self, document: dict[str, Any]) -> dict[str, Any]:
        try:
            return await self._cosmosdb_client.create_item(document)
        except AzureError as e:
            raise ServiceError(f"Failed to insert product {document.get('id')}: {e}") from e

    async def replace_product(
        self, product_id: str, document: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        try:
            return await self._cosmosdb_client.replace_item(product_id, document)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise ServiceError(f"Failed to update product {product_id}: {e}") from e

    async def delete_product(self, product_id: str) -> bool:
        try:
            await self._cosmosdb_client.delete_item(product_id, partition_key=product_id)
        except CosmosResourceNotFoundError:
            return False
        except AzureError as e:
            raise ServiceError(f"Failed to delete product {product_id}: {e}") from e
        return True


def create_product_store(config: AppConfig) -> ProductStore:
    """Build the product store selected by ``store.backend``.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    backend = config.store.backend

    if backend == "sqlite":
        return SqliteProductStore(config.store.sqlite_path)

    if backend == "cosmosdb":
        cosmosdb = config.cosmosdb
        return CosmosProductStore(
            CosmosDBClient(
                endpoint=cosmosdb.endpoint,
                key=cosmosdb.key,
                database_name=cosmosdb.database_name,
                container_name=cosmosdb.container_name,
                partition_key_path="/id",
            )
        )

    raise ValueError(f"Unknown store backend: {backend}")
