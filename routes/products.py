import re
from typing import Optional

from fastapi import APIRouter, Depends, status
from pymongo import DESCENDING
from pymongo.database import Database

from database import (
    create_document,
    delete_document,
    get_db,
    get_document,
    get_documents,
    to_serializable,
    update_document,
)
from schemas import Product, ProductCategory, ProductUpdate
from security import require_admin

router = APIRouter(prefix="/products", tags=["Products"])

COLLECTION = "product"
NEWEST_FIRST = [("created_at", DESCENDING)]


@router.get("")
def list_products(q: Optional[str] = None, category: Optional[ProductCategory] = None, db: Database = Depends(get_db)):
    filt = {}
    if q:
        # simple case-insensitive search on name/description
        filt["$or"] = [
            {"name": {"$regex": re.escape(q), "$options": "i"}},
            {"description": {"$regex": re.escape(q), "$options": "i"}},
        ]
    if category:
        filt["category"] = category
    return get_documents(db, COLLECTION, filt, sort=NEWEST_FIRST)


@router.get("/category/{category}")
def list_products_by_category(category: ProductCategory, db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, {"category": category}, sort=NEWEST_FIRST)


@router.get("/{product_id}")
def get_product(product_id: str, db: Database = Depends(get_db)):
    return to_serializable(get_document(db, COLLECTION, product_id, label="Product"))


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_product(payload: Product, db: Database = Depends(get_db)):
    return to_serializable(create_document(db, COLLECTION, payload))


@router.put("/{product_id}", dependencies=[Depends(require_admin)])
def update_product(product_id: str, payload: ProductUpdate, db: Database = Depends(get_db)):
    return to_serializable(update_document(db, COLLECTION, product_id, payload, label="Product"))


@router.delete("/{product_id}", dependencies=[Depends(require_admin)])
def delete_product(product_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, product_id, label="Product")
    return {"message": "Product removed"}
