from bson import ObjectId
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from pymongo import DESCENDING
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
    update_document,
)
from mock_data import FallbackSwitch, get_fallback
from schemas import ROSTER_ROLES, Member, MemberUpdate
from security import require_admin
from uploads import UploadStore, get_upload_store

router = APIRouter(prefix="/members", tags=["Members"])

COLLECTION = "member"
NEWEST_FIRST = [("created_at", DESCENDING)]


@router.get("")
def list_members(db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    return fallback.read(
        lambda: get_documents(db, COLLECTION, sort=NEWEST_FIRST),
        mock_data.list_members,
    )


@router.get("/username/{username}")
def get_member_by_username(username: str, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    member = fallback.read(
        lambda: to_serializable(db[COLLECTION].find_one({"username": username})),
        lambda: mock_data.find_member(username=username),
    )
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


@router.get("/team/{team_id}")
def list_members_by_team(team_id: str, db: Database = Depends(get_db)):
    """Members on a team's roster, in roster order."""
    team = get_document(db, "team", team_id, label="Team")
    ids = [ObjectId(member_id) for member_id in team.get("members", []) if ObjectId.is_valid(member_id)]
    by_id = {doc["_id"]: doc for doc in db[COLLECTION].find({"_id": {"$in": ids}})}
    return [to_serializable(by_id[oid]) for oid in ids if oid in by_id]


@router.get("/game/{game}")
def list_members_by_game(game: str, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    return fallback.read(
        lambda: get_documents(
            db,
            COLLECTION,
            {"$or": [{"primary_game": game}, {"secondary_games": game}]},
            sort=NEWEST_FIRST,
        ),
        lambda: mock_data.list_members(game=game),
    )


@router.post("/upload", dependencies=[Depends(require_admin)])
async def upload_member_avatar(image: UploadFile = File(...), store: UploadStore = Depends(get_upload_store)):
    image_path = await store.save(image, "images", allowed=("image/",))
    return {"message": "File uploaded successfully", "image_path": image_path, "success": True}


@router.get("/{member_id}")
def get_member(member_id: str, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    def from_db():
        return to_serializable(db[COLLECTION].find_one({"_id": parse_object_id(member_id, "member id")}))

    member = fallback.read(from_db, lambda: mock_data.find_member(member_id=member_id))
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_member(payload: Member, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    fallback.guard_write()
    return to_serializable(create_document(db, COLLECTION, payload))


@router.put("/{member_id}", dependencies=[Depends(require_admin)])
def update_member(
    member_id: str,
    payload: MemberUpdate,
    db: Database = Depends(get_db),
    fallback: FallbackSwitch = Depends(get_fallback),
):
    fallback.guard_write()
    update = payload.model_dump(exclude_unset=True)
    if "role" in update or "primary_game" in update:
        role = update.get("role") or get_document(db, COLLECTION, member_id, label="Member").get("role")
        if role not in ROSTER_ROLES:
            update["primary_game"] = None
    return to_serializable(update_document(db, COLLECTION, member_id, update, label="Member"))


@router.delete("/{member_id}", dependencies=[Depends(require_admin)])
def delete_member(member_id: str, db: Database = Depends(get_db), fallback: FallbackSwitch = Depends(get_fallback)):
    fallback.guard_write()
    delete_document(db, COLLECTION, member_id, label="Member")
    db["team"].update_many({"members": member_id}, {"$pull": {"members": member_id}})
    return {"message": "Member deleted successfully"}
