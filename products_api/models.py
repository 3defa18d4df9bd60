from __future__ import annotations

from typing import Any, Dict, Optional

from bson import ObjectId

# Fields a product document may carry besides `_id`.
PRODUCT_FIELDS = ("name", "description", "price")
REQUIRED_FIELDS = ("name", "price")


def parse_object_id(raw: str) -> Optional[ObjectId]:
    """Return the ObjectId for `raw`, or None when it is not a well-formed id."""
    if not isinstance(raw, str) or not ObjectId.is_valid(raw):
        return None
    return ObjectId(raw)


def to_document(fields: Dict[str, Any]) -> Dict[str, Any]:
    # `_id` is always generated by the store.
    return {k: v for k, v in fields.items() if k in PRODUCT_FIELDS}


def from_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    product: Dict[str, Any] = {"id": str(doc["_id"])}
    for key in PRODUCT_FIELDS:
        if doc.get(key) is not None:
            product[key] = doc[key]
    return product
