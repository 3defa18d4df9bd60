from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from motor.motor_asyncio import AsyncIOMotorCollection

from products_api.core.config import settings
from products_api.core.deps import get_products_collection
from products_api.repositories import (
    create_product,
    delete_product,
    get_product,
    list_products,
    update_product,
)
from products_api.results import StoreError, StoreResult
from products_api.schemas import ProductCreate, ProductRead, ProductUpdate

router = APIRouter()

# Every StoreError must have an entry here.
STATUS_BY_STORE_ERROR: Dict[StoreError, int] = {
    StoreError.VALIDATION: status.HTTP_400_BAD_REQUEST,
    StoreError.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    StoreError.INVALID_ID: status.HTTP_404_NOT_FOUND,
    StoreError.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def unwrap(result: StoreResult):
    if result.ok:
        return result.value
    raise HTTPException(status_code=STATUS_BY_STORE_ERROR[result.error], detail=result.message)


@router.get("/health")
def health():
    return {
        "status": "ok",
        "service": settings.app_name,
        "env": settings.environment,
        "version": settings.app_version,
    }


@router.get("/products", response_model=list[ProductRead], response_model_exclude_none=True)
async def http_list_products(collection: AsyncIOMotorCollection = Depends(get_products_collection)):
    return unwrap(await list_products(collection))


@router.post(
    "/products",
    response_model=ProductRead,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def http_create_product(
    payload: ProductCreate,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    return unwrap(await create_product(collection, payload.model_dump(exclude_none=True)))


@router.get("/products/{product_id}", response_model=ProductRead, response_model_exclude_none=True)
async def http_get_product(
    product_id: str,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    return unwrap(await get_product(collection, product_id))


@router.put("/products/{product_id}", response_model=ProductRead, response_model_exclude_none=True)
async def http_update_product(
    product_id: str,
    payload: Optional[ProductUpdate] = None,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    # A missing body is an empty update.
    fields = payload.model_dump(exclude_unset=True) if payload is not None else {}
    return unwrap(await update_product(collection, product_id, fields))


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def http_delete_product(
    product_id: str,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    unwrap(await delete_product(collection, product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
