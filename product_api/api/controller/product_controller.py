"""REST controller for the product resource."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from product_api.models import Product, ProductCreate, ProductUpdate
from product_api.services import (
    NotFoundError,
    ProductService,
    ServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["Products"])

DELETED_MESSAGE = "Record was deleted"


def get_product_service(request: Request) -> ProductService:
    """Build a service around the store opened by the application lifespan."""
    return ProductService(request.app.state.product_store)


def _json_body(model) -> dict:
    # Bodies are validated by the service, so document the schema explicitly
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


def _not_found(e: NotFoundError) -> Response:
    logger.info(f"Product not found: {e.product_id}")
    return Response(status_code=status.HTTP_404_NOT_FOUND)


def _bad_request(e: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected product payload: {e.message} {e.details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": e.message, "details": e.details},
    )


def _service_failed(e: ServiceError) -> JSONResponse:
    logger.exception(f"Product store error: {e}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(e)},
    )


@router.get(
    "",
    response_model=list[Product],
    response_model_exclude_none=True,
    summary="Returns the list of all the products",
    responses={500: {"description": "Some server error"}},
)
async def list_products(service: ProductService = Depends(get_product_service)):
    try:
        return await service.list_products()
    except ServiceError as e:
        return _service_failed(e)


@router.get(
    "/{product_id}",
    response_model=Product,
    response_model_exclude_none=True,
    summary="Get the product by id",
    responses={404: {"description": "The product was not found"}},
)
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    try:
        return await service.get_product(product_id)
    except NotFoundError as e:
        return _not_found(e)
    except ServiceError as e:
        return _service_failed(e)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Product,
    response_model_exclude_none=True,
    summary="Create a new product",
    responses={
        400: {"description": "The product payload is invalid"},
        500: {"description": "Some server error"},
    },
    openapi_extra=_json_body(ProductCreate),
)
async def create_product(
    payload: Any = Body(...),
    service: ProductService = Depends(get_product_service),
):
    try:
        return await service.create_product(payload)
    except ValidationError as e:
        return _bad_request(e)
    except ServiceError as e:
        return _service_failed(e)


@router.patch(
    "/{product_id}",
    response_model=Product,
    response_model_exclude_none=True,
    summary="Update the product by the id",
    responses={
        400: {"description": "The update contains disallowed or invalid fields"},
        404: {"description": "The product was not found"},
        500: {"description": "Some error happened"},
    },
    openapi_extra=_json_body(ProductUpdate),
)
async def update_product(
    product_id: str,
    changes: Any = Body(...),
    service: ProductService = Depends(get_product_service),
):
    try:
        return await service.update_product(product_id, changes)
    except ValidationError as e:
        return _bad_request(e)
    except NotFoundError as e:
        return _not_found(e)
    except ServiceError as e:
        return _service_failed(e)


@router.delete(
    "/{product_id}",
    response_class=PlainTextResponse,
    summary="Remove the product by id",
    responses={
        200: {"description": "The product was deleted"},
        404: {"description": "The product was not found"},
    },
)
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    try:
        await service.delete_product(product_id)
    except NotFoundError as e:
        return _not_found(e)
    except ServiceError as e:
        return _service_failed(e)
    return PlainTextResponse(DELETED_MESSAGE)
