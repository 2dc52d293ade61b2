import logging

from fastapi import APIRouter, Depends
from pymongo import ReturnDocument
from pymongo.database import Database

from database import create_document, get_db, to_serializable, utcnow
from schemas import ShopSettings, ShopSettingsUpdate
from security import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shop-settings", tags=["Shop"])

COLLECTION = "shop_settings"


def load_shop_settings(db: Database) -> dict:
    """Return the settings document, creating the defaults on first use."""
    settings = db[COLLECTION].find_one()
    if settings is None:
        settings = create_document(db, COLLECTION, ShopSettings())
        logger.info("Created default shop settings")
    return settings


@router.get("")
def get_shop_settings(db: Database = Depends(get_db)):
    return to_serializable(load_shop_settings(db))


@router.put("", dependencies=[Depends(require_admin)])
def update_shop_settings(payload: ShopSettingsUpdate, db: Database = Depends(get_db)):
    current = load_shop_settings(db)
    update = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k == "maintenance_message"}
    update["updated_at"] = utcnow()
    settings = db[COLLECTION].find_one_and_update(
        {"_id": current["_id"]},
        {"$set": update},
        return_document=ReturnDocument.AFTER,
    )
    logger.info("Shop settings updated: active=%s", settings.get("is_active"))
    return {"message": "Shop settings updated successfully", "settings": to_serializable(settings)}
