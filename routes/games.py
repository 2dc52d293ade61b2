import logging
import re

from fastapi import APIRouter, Depends, status
from pymongo import ASCENDING
from pymongo.database import Database

from database import (
    create_document,
    delete_document,
    get_db,
    get_document,
    get_documents,
    parse_object_id,
    to_serializable,
    update_document,
    utcnow,
)
from errors import ConflictError
from schemas import Game, GameOrderUpdate, GameUpdate
from security import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["Games"])

COLLECTION = "game"
BY_ORDER = [("order", ASCENDING)]


def _name_taken(db: Database, name: str, exclude_id=None) -> bool:
    query = {"name": {"$regex": f"^{re.escape(name)}$", "$options": "i"}}
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    return db[COLLECTION].find_one(query) is not None


@router.get("")
def list_games(db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, sort=BY_ORDER)


@router.get("/featured")
def list_featured_games(db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, {"featured": True}, sort=BY_ORDER)


@router.put("/order/update", dependencies=[Depends(require_admin)])
def reorder_games(payload: GameOrderUpdate, db: Database = Depends(get_db)):
    now = utcnow()
    for item in payload.games:
        db[COLLECTION].update_one(
            {"_id": parse_object_id(item.id, "game id")},
            {"$set": {"order": item.order, "updated_at": now}},
        )
    logger.info("Reordered %d games", len(payload.games))
    return {"message": "Game order updated successfully"}


@router.get("/{game_id}")
def get_game(game_id: str, db: Database = Depends(get_db)):
    return to_serializable(get_document(db, COLLECTION, game_id, label="Game"))


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_game(payload: Game, db: Database = Depends(get_db)):
    if _name_taken(db, payload.name):
        raise ConflictError(f'Game with the name "{payload.name}" already exists')
    return to_serializable(create_document(db, COLLECTION, payload))


@router.put("/{game_id}", dependencies=[Depends(require_admin)])
def update_game(game_id: str, payload: GameUpdate, db: Database = Depends(get_db)):
    if payload.name is not None:
        if _name_taken(db, payload.name, exclude_id=parse_object_id(game_id, "game id")):
            raise ConflictError("Game with this name already exists")
    return to_serializable(update_document(db, COLLECTION, game_id, payload, label="Game"))


@router.delete("/{game_id}", dependencies=[Depends(require_admin)])
def delete_game(game_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, game_id, label="Game")
    return {"message": "Game deleted successfully"}
