from fastapi import APIRouter, Depends, status
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
from schemas import Team, TeamStatus, TeamUpdate
from security import require_admin

router = APIRouter(prefix="/teams", tags=["Teams"])

COLLECTION = "team"


@router.get("")
def list_teams(db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION)


@router.get("/game/{game}")
def list_teams_by_game(game: str, db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, {"game": game})


@router.get("/status/{team_status}")
def list_teams_by_status(team_status: TeamStatus, db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, {"status": team_status})


@router.get("/{team_id}")
def get_team(team_id: str, db: Database = Depends(get_db)):
    return to_serializable(get_document(db, COLLECTION, team_id, label="Team"))


# A second team for the same game trips the unique index and is answered with 409.
@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_team(payload: Team, db: Database = Depends(get_db)):
    return to_serializable(create_document(db, COLLECTION, payload))


@router.put("/{team_id}", dependencies=[Depends(require_admin)])
def update_team(team_id: str, payload: TeamUpdate, db: Database = Depends(get_db)):
    return to_serializable(update_document(db, COLLECTION, team_id, payload, label="Team"))


@router.delete("/{team_id}", dependencies=[Depends(require_admin)])
def delete_team(team_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, team_id, label="Team")
    return {"message": "Team removed"}
