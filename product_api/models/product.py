"""Product models for request validation and response representation."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]

# Wire names of the only fields a client may change after creation
UPDATABLE_FIELDS = frozenset({"name", "description", "sellerId", "price", "category"})


class ProductCreate(BaseModel):
    """Payload accepted when creating a product."""

    model_config = ConfigDict(
        allow_inf_nan=False,
        extra="forbid",
        json_schema_extra={
            "example": {
                "sellerId": 1000,
                "description": "This is a brand new product",
                "name": "Lenovo Thinkpad",
                "price": 99999,
                "category": "Electronics",
            }
        },
    )

    name: str = Field(description="The name of the product")
    seller_id: Number = Field(alias="sellerId", description="The product seller")
    category: str = Field(description="The category of the product")
    price: Number = Field(description="The price of the product")
    description: Optional[str] = Field(default=None, description="The description of the product")


class ProductUpdate(BaseModel):
    """Partial payload accepted when updating a product.

    Only keys the client actually sent are applied; see ``model_dump(exclude_unset=True)``.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: Optional[str] = None
    seller_id: Optional[Number] = Field(default=None, alias="sellerId")
    category: Optional[str] = None
    price: Optional[Number] = None
    description: Optional[str] = None

    @field_validator("name", "seller_id", "category", "price")
    @classmethod
    def _required_fields_not_null(cls, value):
        if value is None:
            raise ValueError("field is required and cannot be null")
        return value


class Product(ProductCreate):
    """Product as stored and returned by the API."""

    # Store metadata such as Cosmos DB's _etag and _ts is dropped
    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="The auto-generated id of the product")
