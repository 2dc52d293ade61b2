import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from pymongo import ASCENDING
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
from schemas import Partner, PartnerType, PartnerUpdate
from security import require_admin
from uploads import UploadStore, get_upload_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/partners", tags=["Partners"])

COLLECTION = "partner"


@router.get("")
def list_partners(
    type: Optional[PartnerType] = None,
    active: Optional[bool] = None,
    db: Database = Depends(get_db),
):
    filt = {}
    if type:
        filt["type"] = type
    if active is not None:
        filt["active"] = active
    return get_documents(db, COLLECTION, filt, sort=[("name", ASCENDING)])


@router.post("/upload", dependencies=[Depends(require_admin)])
async def upload_partner_logo(image: UploadFile = File(...), store: UploadStore = Depends(get_upload_store)):
    image_path = await store.save(image, "partners", allowed=("image/",))
    return {"message": "File uploaded successfully", "image_path": image_path, "success": True}


@router.get("/{partner_id}")
def get_partner(partner_id: str, db: Database = Depends(get_db)):
    return to_serializable(get_document(db, COLLECTION, partner_id, label="Partner"))


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_partner(payload: Partner, db: Database = Depends(get_db)):
    return to_serializable(create_document(db, COLLECTION, payload))


@router.put("/{partner_id}", dependencies=[Depends(require_admin)])
def update_partner(partner_id: str, payload: PartnerUpdate, db: Database = Depends(get_db)):
    return to_serializable(update_document(db, COLLECTION, partner_id, payload, label="Partner"))


@router.delete("/{partner_id}", dependencies=[Depends(require_admin)])
def delete_partner(
    partner_id: str,
    db: Database = Depends(get_db),
    store: UploadStore = Depends(get_upload_store),
):
    partner = delete_document(db, COLLECTION, partner_id, label="Partner")
    # logo may be an external URL, in which case nothing is removed
    store.delete(partner.get("logo", ""))
    return {"message": "Partner removed"}
