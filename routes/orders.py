"""
Shop orders.

Placing an order snapshots product name and price into the line items and
takes the ordered quantity out of each product's stock. Moving an order to
``cancelled`` puts that stock back. Stock is never reserved ahead of time.
"""

import logging
from collections import OrderedDict
from typing import Dict, List

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, status
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from database import (
    create_document,
    delete_document,
    get_db,
    get_document,
    get_documents,
    parse_object_id,
    to_serializable,
    utcnow,
)
from errors import ConflictError
from routes.shop_settings import load_shop_settings
from schemas import Order, OrderCreate, OrderItem, OrderUpdate
from security import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["Orders"])

COLLECTION = "order"
PRODUCTS = "product"
REVENUE_STATUSES = ["confirmed", "shipped", "delivered"]


def _restore_stock(db: Database, quantities: Dict[ObjectId, int]) -> None:
    for oid, quantity in quantities.items():
        db[PRODUCTS].update_one({"_id": oid}, {"$inc": {"stock": quantity}})


def _take_stock(db: Database, quantities: Dict[ObjectId, int], names: Dict[ObjectId, str]) -> None:
    """Decrement stock for every product, undoing earlier decrements if one runs short."""
    taken: Dict[ObjectId, int] = {}
    for oid, quantity in quantities.items():
        res = db[PRODUCTS].update_one(
            {"_id": oid, "stock": {"$gte": quantity}},
            {"$inc": {"stock": -quantity}},
        )
        if res.modified_count == 0:
            _restore_stock(db, taken)
            raise ConflictError(f"Insufficient stock for {names[oid]}")
        taken[oid] = quantity


def _item_quantities(items: List[dict]) -> Dict[ObjectId, int]:
    quantities: Dict[ObjectId, int] = {}
    for item in items:
        oid = ObjectId(item["product_id"])
        quantities[oid] = quantities.get(oid, 0) + item["quantity"]
    return quantities


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, db: Database = Depends(get_db)):
    shop = load_shop_settings(db)
    if not shop.get("is_active", True):
        raise HTTPException(status_code=403, detail=shop.get("maintenance_message") or "Shop is closed")

    # Validate products and stock, compute totals
    quantities: Dict[ObjectId, int] = OrderedDict()
    for item in payload.items:
        oid = parse_object_id(item.product_id, "product id")
        quantities[oid] = quantities.get(oid, 0) + item.quantity

    products = {}
    for oid, quantity in quantities.items():
        prod = db[PRODUCTS].find_one({"_id": oid})
        if not prod:
            raise HTTPException(status_code=404, detail=f"Product not found: {oid}")
        if prod.get("stock", 0) < quantity:
            raise HTTPException(status_code=400, detail=f"Insufficient stock for {prod.get('name')}")
        products[oid] = prod

    order_items: List[OrderItem] = []
    total = 0.0
    for item in payload.items:
        prod = products[ObjectId(item.product_id)]
        price = float(prod.get("price", 0))
        total += price * item.quantity
        order_items.append(OrderItem(
            product_id=str(prod["_id"]),
            name=prod.get("name"),
            price=price,
            quantity=item.quantity,
        ))

    _take_stock(db, quantities, {oid: p.get("name") for oid, p in products.items()})

    order = Order(
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        customer_phone=payload.customer_phone,
        customer_location=payload.customer_location,
        items=order_items,
        total_amount=round(total, 2),
        notes=payload.notes,
    )
    try:
        doc = create_document(db, COLLECTION, order)
    except Exception:
        logger.exception("Order save failed, restoring stock")
        _restore_stock(db, quantities)
        raise
    logger.info("Order %s placed: %d items, total %.2f", doc["_id"], len(order_items), order.total_amount)
    return {"message": "Order created successfully", "order": to_serializable(doc)}


@router.get("", dependencies=[Depends(require_admin)])
def list_orders(db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, sort=[("created_at", DESCENDING)])


@router.get("/stats", dependencies=[Depends(require_admin)])
def order_stats(db: Database = Depends(get_db)):
    orders = db[COLLECTION]
    revenue = list(orders.aggregate([
        {"$match": {"status": {"$in": REVENUE_STATUSES}}},
        {"$group": {"_id": None, "total": {"$sum": "$total_amount"}}},
    ]))
    return {
        "total_orders": orders.count_documents({}),
        "pending_orders": orders.count_documents({"status": "pending"}),
        "confirmed_orders": orders.count_documents({"status": "confirmed"}),
        "shipped_orders": orders.count_documents({"status": "shipped"}),
        "delivered_orders": orders.count_documents({"status": "delivered"}),
        "cancelled_orders": orders.count_documents({"status": "cancelled"}),
        "total_revenue": round(revenue[0]["total"], 2) if revenue else 0,
    }


@router.get("/{order_id}", dependencies=[Depends(require_admin)])
def get_order(order_id: str, db: Database = Depends(get_db)):
    return to_serializable(get_document(db, COLLECTION, order_id, label="Order"))


@router.put("/{order_id}", dependencies=[Depends(require_admin)])
def update_order(order_id: str, payload: OrderUpdate, db: Database = Depends(get_db)):
    order = get_document(db, COLLECTION, order_id, label="Order")
    update = payload.model_dump(exclude_unset=True)
    if update.get("status") is None:
        update.pop("status", None)
    if not update:
        raise HTTPException(status_code=400, detail="No fields to update")

    new_status = update.get("status")
    if order["status"] == "cancelled" and new_status not in (None, "cancelled"):
        raise HTTPException(status_code=400, detail="Cancelled orders cannot be reopened")

    update["updated_at"] = utcnow()
    if new_status == "cancelled":
        # only the request that flips the status puts the stock back
        previous = db[COLLECTION].find_one_and_update(
            {"_id": order["_id"], "status": {"$ne": "cancelled"}},
            {"$set": update},
            return_document=ReturnDocument.BEFORE,
        )
        if previous is None:
            db[COLLECTION].update_one({"_id": order["_id"]}, {"$set": update})
        else:
            _restore_stock(db, _item_quantities(previous.get("items", [])))
            logger.info("Order %s cancelled, stock restored", order_id)
    else:
        res = db[COLLECTION].update_one(
            {"_id": order["_id"], "status": {"$ne": "cancelled"}} if new_status else {"_id": order["_id"]},
            {"$set": update},
        )
        if res.matched_count == 0:
            raise HTTPException(status_code=400, detail="Cancelled orders cannot be reopened")

    updated = db[COLLECTION].find_one({"_id": order["_id"]})
    return {"message": "Order updated successfully", "order": to_serializable(updated)}


@router.delete("/{order_id}", dependencies=[Depends(require_admin)])
def delete_order(order_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, order_id, label="Order")
    return {"message": "Order deleted successfully"}
