"""Tests for ProductService.

These tests verify:
- Create assigns a unique id and round-trips every submitted field
- Update whitelist is enforced before any store access
- Not-found outcomes for get/update/delete on unknown ids
- Update idempotency and delete non-idempotency
- Store failures surface as ServiceError
"""

import os
import tempfile
from unittest.mock import AsyncMock

import pytest

from product_api.services import (
    NotFoundError,
    ProductService,
    ProductStore,
    ServiceError,
    SqliteProductStore,
    ValidationError,
)

THINKPAD = {
    "name": "Lenovo Thinkpad",
    "sellerId": 1000,
    "category": "Electronics",
    "price": 99999,
    "description": "brand new",
}


class TestProductService:
    """Test ProductService against a SQLite store."""

    @pytest.fixture
    def temp_db_path(self):
        """Create a temporary database file for testing."""
        fd, path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        yield path
        # Cleanup
        if os.path.exists(path):
            os.remove(path)

    @pytest.fixture
    async def service(self, temp_db_path):
        """Create a ProductService with a connected SQLite store."""
        store = SqliteProductStore(temp_db_path)
        await store.connect()
        yield ProductService(store)
        await store.close()

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_round_trips_fields(self, service):
        """Test that creation returns a generated id and the submitted fields."""
        product = await service.create_product(THINKPAD)

        assert product.id
        assert product.model_dump(by_alias=True, exclude={"id"}) == THINKPAD

        print(f"Created product with id: {product.id}")

    @pytest.mark.asyncio
    async def test_create_ids_are_unique(self, service):
        """Test that two creations never share an id."""
        first = await service.create_product(THINKPAD)
        second = await service.create_product(THINKPAD)

        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_rejects_client_supplied_id(self, service):
        """Test that a client-supplied id is rejected rather than used."""
        with pytest.raises(ValidationError):
            await service.create_product({**THINKPAD, "id": "chosen-by-client"})

    @pytest.mark.asyncio
    async def test_create_missing_field(self, service):
        """Test that a missing required field is a validation failure with details."""
        payload = {key: value for key, value in THINKPAD.items() if key != "price"}

        with pytest.raises(ValidationError) as exc_info:
            await service.create_product(payload)

        assert exc_info.value.details[0]["loc"] == ["price"]
        assert await service.list_products() == []

    @pytest.mark.asyncio
    async def test_create_non_object_payload(self, service):
        """Test that a JSON array is not a product."""
        with pytest.raises(ValidationError):
            await service.create_product([THINKPAD])

    @pytest.mark.asyncio
    async def test_list_and_get(self, service):
        """Test listing and fetching created products."""
        created = await service.create_product(THINKPAD)

        listed = await service.list_products()
        fetched = await service.get_product(created.id)

        assert listed == [created]
        assert fetched == created

    @pytest.mark.asyncio
    async def test_update_changes_only_submitted_fields(self, service):
        """Test a partial price update."""
        created = await service.create_product(THINKPAD)

        updated = await service.update_product(created.id, {"price": 89999})

        assert updated.price == 89999
        assert updated.id == created.id
        assert updated.model_dump(by_alias=True, exclude={"id", "price"}) == {
            key: value for key, value in THINKPAD.items() if key != "price"
        }

    @pytest.mark.asyncio
    async def test_update_is_idempotent(self, service):
        """Test that applying the same update twice equals applying it once."""
        created = await service.create_product(THINKPAD)
        changes = {"name": "Lenovo Thinkpad X1", "sellerId": 2000}

        once = await service.update_product(created.id, changes)
        twice = await service.update_product(created.id, changes)

        assert once == twice
        assert await service.get_product(created.id) == once

    @pytest.mark.asyncio
    @pytest.mark.parametrize("changes", [{"sku": "X"}, {"id": "other"}, {"price": 1, "seller_id": 5}])
    async def test_update_rejects_disallowed_keys(self, service, changes):
        """Test that any key outside the whitelist rejects the whole update."""
        created = await service.create_product(THINKPAD)

        with pytest.raises(ValidationError) as exc_info:
            await service.update_product(created.id, changes)

        assert exc_info.value.message == "Invalid Updates"
        assert await service.get_product(created.id) == created

    @pytest.mark.asyncio
    async def test_update_rejects_wrong_type(self, service):
        """Test that an allowed key with a bad value is a validation failure."""
        created = await service.create_product(THINKPAD)

        with pytest.raises(ValidationError):
            await service.update_product(created.id, {"price": "cheap"})

        assert await service.get_product(created.id) == created

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, service):
        """Test get/update/delete on an id that was never created."""
        with pytest.raises(NotFoundError):
            await service.get_product("unknown-id")

        with pytest.raises(NotFoundError):
            await service.update_product("unknown-id", {"price": 1})

        with pytest.raises(NotFoundError):
            await service.delete_product("unknown-id")

    @pytest.mark.asyncio
    async def test_delete_twice(self, service):
        """Test that the second delete of the same id is not found."""
        created = await service.create_product(THINKPAD)

        await service.delete_product(created.id)

        with pytest.raises(NotFoundError):
            await service.delete_product(created.id)

        with pytest.raises(NotFoundError):
            await service.get_product(created.id)


class TestProductServiceWithStoreDouble:
    """Test store interaction and error propagation with a mocked store."""

    @pytest.fixture
    def store(self):
        """Create a mocked ProductStore."""
        return AsyncMock(spec=ProductStore)

    @pytest.mark.asyncio
    async def test_disallowed_update_never_touches_store(self, store):
        """Test that whitelist rejection happens before any store access."""
        service = ProductService(store)

        with pytest.raises(ValidationError) as exc_info:
            await service.update_product("p-1", {"price": 1, "sku": "X"})

        assert exc_info.value.details == ["sku"]
        store.get_product.assert_not_called()
        store.replace_product.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_create_never_touches_store(self, store):
        """Test that validation runs before insertion."""
        service = ProductService(store)

        with pytest.raises(ValidationError):
            await service.create_product({"name": "No price"})

        store.insert_product.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, store):
        """Test that store errors reach the caller as ServiceError."""
        store.list_products.side_effect = ServiceError("connection lost")
        store.get_product.side_effect = ServiceError("malformed id")
        store.delete_product.side_effect = ServiceError("connection lost")
        service = ProductService(store)

        with pytest.raises(ServiceError):
            await service.list_products()

        with pytest.raises(ServiceError, match="malformed id"):
            await service.get_product("bad/id")

        with pytest.raises(ServiceError):
            await service.delete_product("p-1")

    @pytest.mark.asyncio
    async def test_update_lost_to_concurrent_delete(self, store):
        """Test that a product deleted between read and write is reported not found."""
        store.get_product.return_value = {"id": "p-1", **THINKPAD}
        store.replace_product.return_value = None
        service = ProductService(store)

        with pytest.raises(NotFoundError):
            await service.update_product("p-1", {"price": 1})
