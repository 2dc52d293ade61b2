from typing import Optional

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
from schemas import ContactMessage
from security import require_admin

router = APIRouter(prefix="/contact", tags=["Contact"])

COLLECTION = "contact_message"


@router.post("", status_code=status.HTTP_201_CREATED)
def create_contact_message(payload: ContactMessage, db: Database = Depends(get_db)):
    payload.read = False
    doc = create_document(db, COLLECTION, payload)
    return {
        "success": True,
        "message": "Message sent successfully! We will get back to you soon.",
        "data": to_serializable(doc),
    }


@router.get("", dependencies=[Depends(require_admin)])
def list_contact_messages(
    category: Optional[str] = None,
    read: Optional[bool] = None,
    db: Database = Depends(get_db),
):
    filt = {}
    if category and category != "all":
        filt["category"] = category
    if read is not None:
        filt["read"] = read
    messages = get_documents(db, COLLECTION, filt, sort=[("created_at", DESCENDING)])
    return {"success": True, "data": messages, "count": len(messages)}


@router.get("/stats", dependencies=[Depends(require_admin)])
def contact_stats(db: Database = Depends(get_db)):
    messages = db[COLLECTION]
    categories = messages.aggregate([{"$group": {"_id": "$category", "count": {"$sum": 1}}}])
    return {
        "success": True,
        "data": {
            "total": messages.count_documents({}),
            "unread": messages.count_documents({"read": False}),
            "categories": {row["_id"]: row["count"] for row in categories},
        },
    }


@router.get("/{message_id}", dependencies=[Depends(require_admin)])
def get_contact_message(message_id: str, db: Database = Depends(get_db)):
    doc = get_document(db, COLLECTION, message_id, label="Message")
    return {"success": True, "data": to_serializable(doc)}


@router.patch("/{message_id}/read", dependencies=[Depends(require_admin)])
def mark_message_read(message_id: str, db: Database = Depends(get_db)):
    doc = db[COLLECTION].find_one_and_update(
        {"_id": parse_object_id(message_id, "message id")},
        {"$set": {"read": True, "updated_at": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=404, detail="Message not found")
    return {"success": True, "message": "Message marked as read", "data": to_serializable(doc)}


@router.delete("/{message_id}", dependencies=[Depends(require_admin)])
def delete_contact_message(message_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, message_id, label="Message")
    return {"success": True, "message": "Message deleted successfully"}
