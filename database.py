"""
Database helpers

Thin layer over pymongo shared by every route module. Documents are stored
with ``created_at``/``updated_at`` timestamps and are returned to clients with
their ``_id`` exposed as a string ``id``.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from pydantic import BaseModel
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.database import Database

from config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

client = MongoClient(
    settings.DATABASE_URL,
    serverSelectionTimeoutMS=settings.DATABASE_TIMEOUT_MS,
)
db = client[settings.DATABASE_NAME]


def get_db() -> Database:
    """FastAPI dependency returning the application database."""
    return db


def utcnow() -> datetime:
    """Current time as naive UTC, matching what pymongo hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, dict):
        return {k: to_naive_utc(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_naive_utc(v) for v in value]
    return value


def _as_dict(data: Union[BaseModel, dict], exclude_unset: bool = False) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=exclude_unset)
    return to_naive_utc(dict(data))


def parse_object_id(value: str, label: str = "id") -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail=f"Invalid {label}: {value}")


def to_serializable(doc):
    if not doc:
        return doc
    d = dict(doc)
    if "_id" in d:
        d["id"] = str(d.pop("_id"))
    for key, value in d.items():
        if isinstance(value, ObjectId):
            d[key] = str(value)
    return d


def create_document(db: Database, collection_name: str, data: Union[BaseModel, dict]) -> dict:
    """Insert a document stamped with created/updated timestamps and return it."""
    doc = _as_dict(data)
    now = utcnow()
    doc["created_at"] = now
    doc["updated_at"] = now
    result = db[collection_name].insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info("Created %s %s", collection_name, result.inserted_id)
    return doc


def get_documents(
    db: Database,
    collection_name: str,
    filter_dict: Optional[dict] = None,
    sort: Optional[List[Tuple[str, int]]] = None,
    limit: Optional[int] = None,
) -> List[dict]:
    cursor = db[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return [to_serializable(d) for d in cursor]


def get_document(db: Database, collection_name: str, doc_id: str, label: str = "Document") -> dict:
    oid = parse_object_id(doc_id, f"{label.lower()} id")
    doc = db[collection_name].find_one({"_id": oid})
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return doc


def update_document(
    db: Database,
    collection_name: str,
    doc_id: str,
    data: Union[BaseModel, dict],
    label: str = "Document",
) -> dict:
    """Apply a partial ``$set`` update and return the updated document."""
    oid = parse_object_id(doc_id, f"{label.lower()} id")
    update = _as_dict(data, exclude_unset=True)
    if not update:
        raise HTTPException(status_code=400, detail="No fields to update")
    update["updated_at"] = utcnow()
    doc = db[collection_name].find_one_and_update(
        {"_id": oid},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    logger.info("Updated %s %s: %s", collection_name, doc_id, sorted(update))
    return doc


def delete_document(db: Database, collection_name: str, doc_id: str, label: str = "Document") -> dict:
    oid = parse_object_id(doc_id, f"{label.lower()} id")
    doc = db[collection_name].find_one_and_delete({"_id": oid})
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    logger.info("Deleted %s %s", collection_name, doc_id)
    return doc


def paginate(
    db: Database,
    collection_name: str,
    filter_dict: dict,
    sort: List[Tuple[str, int]],
    page: int,
    limit: int,
) -> Tuple[List[dict], dict]:
    skip = (page - 1) * limit
    docs = [
        to_serializable(d)
        for d in db[collection_name].find(filter_dict).sort(sort).skip(skip).limit(limit)
    ]
    total = db[collection_name].count_documents(filter_dict)
    pagination = {
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "total_items": total,
        "items_per_page": limit,
        "has_next": skip + len(docs) < total,
        "has_prev": page > 1,
    }
    return docs, pagination


def sort_direction(order: str) -> int:
    return DESCENDING if order == "desc" else ASCENDING


def ensure_indexes(db: Database) -> None:
    db["member"].create_index("username", unique=True)
    db["team"].create_index("game", unique=True)
    db["game"].create_index("name", unique=True)
    db["registration"].create_index([("event_id", ASCENDING), ("email", ASCENDING)], unique=True)
    db["news"].create_index([("date", DESCENDING)])
    db["news"].create_index("category")
    db["news"].create_index("published")
    logger.info("MongoDB indexes ensured")
