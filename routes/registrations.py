"""
Event registrations.

Sign-ups are accepted only while the parent event is ``upcoming`` and its
registration deadline is still ahead, and only once per (event, email).
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from database import (
    create_document,
    delete_document,
    get_db,
    get_document,
    paginate,
    parse_object_id,
    sort_direction,
    to_serializable,
    utcnow,
)
from errors import ConflictError
from schemas import (
    BulkDelete,
    BulkStatusUpdate,
    Registration,
    RegistrationCreate,
    RegistrationStatusUpdate,
)
from security import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/registrations", tags=["Registrations"])

COLLECTION = "registration"
EVENT_SUMMARY_FIELDS = ("name", "game", "start_date", "registration_deadline")
SORTABLE_FIELDS = Literal["created_at", "updated_at", "name", "email", "status", "game_name"]


def registration_closed_reason(event: dict, now: datetime) -> Optional[str]:
    """Why ``event`` is not accepting sign-ups at ``now``, or None when it is."""
    if event.get("status") != "upcoming":
        return "Registration is closed for this event"
    deadline = event.get("registration_deadline")
    if deadline is not None and deadline <= now:
        return "Registration deadline has passed"
    return None


def _search_filter(search: Optional[str]) -> dict:
    if not search:
        return {}
    return {"$or": [
        {field: {"$regex": re.escape(search), "$options": "i"}}
        for field in ("name", "email", "game_name", "team")
    ]}


def _event_summary(event: Optional[dict]) -> Optional[dict]:
    if not event:
        return None
    return {"id": str(event["_id"]), **{f: event.get(f) for f in EVENT_SUMMARY_FIELDS}}


def _with_event(db: Database, registration: dict) -> dict:
    doc = to_serializable(registration)
    doc["event"] = _event_summary(db["event"].find_one({"_id": registration.get("event_id")}))
    return doc


@router.post("", status_code=status.HTTP_201_CREATED)
def create_registration(payload: RegistrationCreate, db: Database = Depends(get_db)):
    event_oid = parse_object_id(payload.event_id, "event id")
    event = db["event"].find_one({"_id": event_oid})
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    reason = registration_closed_reason(event, utcnow())
    if reason:
        raise HTTPException(status_code=400, detail=reason)

    registration = Registration(**payload.model_dump())
    if db[COLLECTION].find_one({"event_id": event_oid, "email": registration.email}):
        raise ConflictError("You have already registered for this event")

    data = registration.model_dump()
    data["event_id"] = event_oid
    doc = create_document(db, COLLECTION, data)
    logger.info("Registration %s for event %s", doc["_id"], payload.event_id)
    return {
        "success": True,
        "message": "Registration successful! We will contact you with further details.",
        "data": _with_event(db, doc),
    }


@router.get("", dependencies=[Depends(require_admin)])
def list_registrations(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    event_id: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: SORTABLE_FIELDS = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    db: Database = Depends(get_db),
):
    filt = _search_filter(search)
    if status_filter and status_filter != "all":
        filt["status"] = status_filter
    if event_id and event_id != "all":
        filt["event_id"] = parse_object_id(event_id, "event id")

    docs, pagination = paginate(
        db, COLLECTION, filt, [(sort_by, sort_direction(sort_order))], page, limit
    )
    events = {
        e["_id"]: e
        for e in db["event"].find({"_id": {"$in": [parse_object_id(d["event_id"]) for d in docs]}})
    }
    for doc in docs:
        doc["event"] = _event_summary(events.get(parse_object_id(doc["event_id"])))
    return {"registrations": docs, "pagination": pagination}


@router.get("/stats", dependencies=[Depends(require_admin)])
def registration_stats(db: Database = Depends(get_db)):
    registrations = db[COLLECTION]
    overall = list(registrations.aggregate([
        {"$group": {
            "_id": None,
            "total": {"$sum": 1},
            "pending": {"$sum": {"$cond": [{"$eq": ["$status", "pending"]}, 1, 0]}},
            "approved": {"$sum": {"$cond": [{"$eq": ["$status", "approved"]}, 1, 0]}},
            "rejected": {"$sum": {"$cond": [{"$eq": ["$status", "rejected"]}, 1, 0]}},
        }},
    ]))
    by_event = list(registrations.aggregate([
        {"$group": {"_id": "$event_id", "count": {"$sum": 1}}},
        {"$lookup": {"from": "event", "localField": "_id", "foreignField": "_id", "as": "event"}},
        {"$unwind": "$event"},
        {"$project": {"event_name": "$event.name", "count": 1}},
    ]))
    recent = registrations.count_documents({"created_at": {"$gte": utcnow() - timedelta(days=7)}})

    summary = overall[0] if overall else {"total": 0, "pending": 0, "approved": 0, "rejected": 0}
    summary.pop("_id", None)
    return {
        "overall": summary,
        "by_event": [
            {"event_id": str(row["_id"]), "event_name": row["event_name"], "count": row["count"]}
            for row in by_event
        ],
        "recent_registrations": recent,
    }


@router.get("/event/{event_id}", dependencies=[Depends(require_admin)])
def list_registrations_for_event(
    event_id: str,
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    db: Database = Depends(get_db),
):
    filt = _search_filter(search)
    filt["event_id"] = parse_object_id(event_id, "event id")
    if status_filter and status_filter != "all":
        filt["status"] = status_filter
    cursor = db[COLLECTION].find(filt).sort([("created_at", DESCENDING)])
    return [to_serializable(doc) for doc in cursor]


@router.patch("/bulk/status", dependencies=[Depends(require_admin)])
def bulk_update_status(payload: BulkStatusUpdate, db: Database = Depends(get_db)):
    ids = [parse_object_id(rid, "registration id") for rid in payload.registration_ids]
    result = db[COLLECTION].update_many(
        {"_id": {"$in": ids}},
        {"$set": {"status": payload.status, "updated_at": utcnow()}},
    )
    logger.info("Bulk status %s applied to %d registrations", payload.status, result.modified_count)
    return {
        "message": f"Updated {result.modified_count} registrations",
        "modified_count": result.modified_count,
    }


@router.delete("/bulk", dependencies=[Depends(require_admin)])
def bulk_delete(payload: BulkDelete, db: Database = Depends(get_db)):
    ids = [parse_object_id(rid, "registration id") for rid in payload.registration_ids]
    result = db[COLLECTION].delete_many({"_id": {"$in": ids}})
    logger.info("Bulk deleted %d registrations", result.deleted_count)
    return {
        "message": f"Deleted {result.deleted_count} registrations",
        "deleted_count": result.deleted_count,
    }


@router.get("/{registration_id}", dependencies=[Depends(require_admin)])
def get_registration(registration_id: str, db: Database = Depends(get_db)):
    return _with_event(db, get_document(db, COLLECTION, registration_id, label="Registration"))


@router.patch("/{registration_id}/status", dependencies=[Depends(require_admin)])
def update_registration_status(
    registration_id: str,
    payload: RegistrationStatusUpdate,
    db: Database = Depends(get_db),
):
    doc = db[COLLECTION].find_one_and_update(
        {"_id": parse_object_id(registration_id, "registration id")},
        {"$set": {"status": payload.status, "updated_at": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=404, detail="Registration not found")
    return _with_event(db, doc)


@router.delete("/{registration_id}", dependencies=[Depends(require_admin)])
def delete_registration(registration_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, registration_id, label="Registration")
    return {"message": "Registration removed successfully"}
