import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pymongo import ASCENDING
from pymongo.database import Database

import mock_data
from database import (
    create_document,
    delete_document,
    get_db,
    get_document,
    get_documents,
    parse_object_id,
    to_serializable,
    to_naive_utc,
    update_document,
    utcnow,
)
from mock_data import FallbackSwitch, get_fallback
from schemas import Event, EventStatus, EventUpdate
from security import require_admin
from uploads import UploadStore, get_upload_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])

COLLECTION = "event"
BY_START = [("start_date", ASCENDING)]


@router.get("")
def list_events(db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)) -> List[dict]:
    return fallback.read(
        lambda: get_documents(db, COLLECTION, sort=BY_START),
        mock_data.list_events,
    )


@router.get("/upcoming")
def list_upcoming_events(db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    return fallback.read(
        lambda: get_documents(
            db, COLLECTION, {"status": "upcoming", "start_date": {"$gte": utcnow()}}, sort=BY_START
        ),
        lambda: mock_data.list_events(upcoming=True),
    )


@router.get("/game/{game}")
def list_events_by_game(game: str, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    return fallback.read(
        lambda: get_documents(db, COLLECTION, {"game": game}, sort=BY_START),
        lambda: mock_data.list_events(game=game),
    )


@router.get("/status/{event_status}")
def list_events_by_status(
    event_status: EventStatus,
    db: Database = Depends(get_db),
    fallback: FallbackSwitch = Depends(get_fallback),
):
    return fallback.read(
        lambda: get_documents(db, COLLECTION, {"status": event_status}, sort=BY_START),
        lambda: mock_data.list_events(status=event_status),
    )


@router.post("/upload", dependencies=[Depends(require_admin)])
async def upload_event_image(image: UploadFile = File(...), store: UploadStore = Depends(get_upload_store)):
    image_path = await store.save(image, "images", allowed=("image/",))
    return {"message": "File uploaded successfully", "image_path": image_path, "success": True}


@router.get("/{event_id}")
def get_event(event_id: str, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    def from_db():
        doc = db[COLLECTION].find_one({"_id": parse_object_id(event_id, "event id")})
        return to_serializable(doc)

    event = fallback.read(from_db, lambda: mock_data.find_event(event_id))
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_event(payload: Event, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    fallback.guard_write()
    if to_naive_utc(payload.end_date) < to_naive_utc(payload.start_date):
        raise HTTPException(status_code=400, detail="End date must be after start date")
    return to_serializable(create_document(db, COLLECTION, payload))


@router.put("/{event_id}", dependencies=[Depends(require_admin)])
def update_event(
    event_id: str,
    payload: EventUpdate,
    db: Database = Depends(get_db),
    fallback: FallbackSwitch = Depends(get_fallback),
):
    fallback.guard_write()
    update = payload.model_dump(exclude_unset=True)
    if update.get("start_date") or update.get("end_date"):
        current = get_document(db, COLLECTION, event_id, label="Event")
        start = to_naive_utc(update.get("start_date") or current["start_date"])
        end = to_naive_utc(update.get("end_date") or current["end_date"])
        if end < start:
            raise HTTPException(status_code=400, detail="End date must be after start date")
    return to_serializable(update_document(db, COLLECTION, event_id, payload, label="Event"))


@router.delete("/{event_id}", dependencies=[Depends(require_admin)])
def delete_event(event_id: str, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    fallback.guard_write()
    delete_document(db, COLLECTION, event_id, label="Event")
    return {"message": "Event deleted successfully"}
