from __future__ import annotations

from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import ConnectionFailure

from products_api.core.logging import get_logger
from products_api.models import REQUIRED_FIELDS, from_document, parse_object_id, to_document
from products_api.results import StoreError, StoreResult

logger = get_logger(__name__)

Product = Dict[str, Any]


def _missing_required(fields: Dict[str, Any], partial: bool) -> List[str]:
    missing = []
    for key in REQUIRED_FIELDS:
        if partial and key not in fields:
            continue
        value = fields.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(key)
    return missing


def _unavailable(op: str, exc: ConnectionFailure) -> StoreResult:
    logger.warning("MongoDB unavailable during %s: %s", op, exc)
    return StoreResult.failure(StoreError.STORAGE_UNAVAILABLE, "Storage unavailable")


async def create_product(collection: AsyncIOMotorCollection, fields: Dict[str, Any]) -> StoreResult[Product]:
    missing = _missing_required(fields, partial=False)
    if missing:
        return StoreResult.failure(StoreError.VALIDATION, f"Missing required fields: {', '.join(missing)}")

    doc = to_document(fields)
    try:
        inserted = await collection.insert_one(doc)
    except ConnectionFailure as e:
        return _unavailable("create", e)

    doc["_id"] = inserted.inserted_id
    logger.info("Product created id=%s", inserted.inserted_id)
    return StoreResult.success(from_document(doc))


async def list_products(collection: AsyncIOMotorCollection) -> StoreResult[List[Product]]:
    try:
        docs = await collection.find({}, sort=[("_id", ASCENDING)]).to_list(length=None)
    except ConnectionFailure as e:
        return _unavailable("list", e)
    return StoreResult.success([from_document(d) for d in docs])


async def get_product(collection: AsyncIOMotorCollection, product_id: str) -> StoreResult[Product]:
    oid = parse_object_id(product_id)
    if oid is None:
        return StoreResult.failure(StoreError.INVALID_ID, "Product not found")

    try:
        doc = await collection.find_one({"_id": oid})
    except ConnectionFailure as e:
        return _unavailable("get", e)

    if doc is None:
        return StoreResult.failure(StoreError.NOT_FOUND, "Product not found")
    return StoreResult.success(from_document(doc))


async def update_product(
    collection: AsyncIOMotorCollection, product_id: str, fields: Dict[str, Any]
) -> StoreResult[Product]:
    """
    Apply a partial update. Only keys present in `fields` change; an empty
    mapping returns the stored product untouched.
    """
    oid = parse_object_id(product_id)
    if oid is None:
        return StoreResult.failure(StoreError.INVALID_ID, "Product not found")

    missing = _missing_required(fields, partial=True)
    if missing:
        return StoreResult.failure(StoreError.VALIDATION, f"Fields cannot be empty: {', '.join(missing)}")

    changes = to_document(fields)
    if not changes:
        return await get_product(collection, product_id)

    try:
        doc = await collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
    except ConnectionFailure as e:
        return _unavailable("update", e)

    if doc is None:
        return StoreResult.failure(StoreError.NOT_FOUND, "Product not found")
    logger.info("Product updated id=%s fields=%s", product_id, sorted(changes))
    return StoreResult.success(from_document(doc))


async def delete_product(collection: AsyncIOMotorCollection, product_id: str) -> StoreResult[None]:
    oid = parse_object_id(product_id)
    if oid is None:
        return StoreResult.failure(StoreError.INVALID_ID, "Product not found")

    try:
        deleted = await collection.delete_one({"_id": oid})
    except ConnectionFailure as e:
        return _unavailable("delete", e)

    if deleted.deleted_count == 0:
        return StoreResult.failure(StoreError.NOT_FOUND, "Product not found")
    logger.info("Product deleted id=%s", product_id)
    return StoreResult.success()
