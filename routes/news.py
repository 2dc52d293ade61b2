import logging
from datetime import datetime

from fastapi import APIRouter, Depends, File, UploadFile, status
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
from schemas import News, NewsUpdate, PublishToggle
from security import require_admin
from uploads import UploadStore, get_upload_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["News"])

COLLECTION = "news"
NEWEST_FIRST = [("date", DESCENDING)]

DEMO_ARTICLES = [
    News(
        title="New CS:GO Roster Signed",
        excerpt="We're thrilled to announce our new professional CS:GO team joining the family.",
        content="Five exceptional CS:GO players join our professional roster. The team consists of "
        "veterans from the competitive scene who have competed at the highest levels.",
        image="news/test-image.jpg",
        date=datetime(2023, 7, 21),
        category="team",
        published=True,
    ),
    News(
        title="Summer Tournament Series Announced",
        excerpt="Join us for a summer filled with competitive gaming and amazing prizes.",
        content="We are hosting a series of tournaments throughout the summer with competitions "
        "in CS:GO, Valorant, and League of Legends.",
        image="news/test-image.jpg",
        date=datetime(2023, 7, 18),
        category="event",
        published=True,
    ),
    News(
        title="New Partnership with GamingGear",
        excerpt="We partner with GamingGear to provide members with exclusive equipment discounts.",
        content="We're excited to announce our new partnership with GamingGear, a leading provider "
        "of high-quality gaming peripherals.",
        image="news/test-image.jpg",
        date=datetime(2023, 7, 15),
        category="partnership",
        published=True,
    ),
]


def seed_news_if_empty(db: Database) -> int:
    """Insert the demo articles when the collection holds none; returns how many were added."""
    existing = db[COLLECTION].count_documents({})
    if existing:
        logger.info("Found %d existing news articles, skipping seed data", existing)
        return 0
    for article in DEMO_ARTICLES:
        create_document(db, COLLECTION, article)
    logger.info("Seeded %d demo news articles", len(DEMO_ARTICLES))
    return len(DEMO_ARTICLES)


@router.get("")
def list_news(db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, sort=NEWEST_FIRST)


@router.get("/published")
def list_published_news(db: Database = Depends(get_db)):
    return get_documents(db, COLLECTION, {"published": True}, sort=NEWEST_FIRST)


@router.post("/upload", dependencies=[Depends(require_admin)])
async def upload_news_image(image: UploadFile = File(...), store: UploadStore = Depends(get_upload_store)):
    image_path = await store.save(image, "news", allowed=("image/jpeg", "image/png", "image/gif", "image/webp"))
    return {"message": "File uploaded successfully", "image_path": image_path, "success": True}


@router.get("/{article_id}")
def get_article(article_id: str, db: Database = Depends(get_db)):
    return to_serializable(get_document(db, COLLECTION, article_id, label="Article"))


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_article(payload: News, db: Database = Depends(get_db)):
    return to_serializable(create_document(db, COLLECTION, payload))


@router.put("/{article_id}", dependencies=[Depends(require_admin)])
def update_article(article_id: str, payload: NewsUpdate, db: Database = Depends(get_db)):
    return to_serializable(update_document(db, COLLECTION, article_id, payload, label="Article"))


@router.patch("/{article_id}/publish", dependencies=[Depends(require_admin)])
def set_publish_status(article_id: str, payload: PublishToggle, db: Database = Depends(get_db)):
    return to_serializable(update_document(db, COLLECTION, article_id, payload, label="Article"))


@router.delete("/{article_id}", dependencies=[Depends(require_admin)])
def delete_article(article_id: str, db: Database = Depends(get_db)):
    delete_document(db, COLLECTION, article_id, label="Article")
    return {"message": "Article deleted successfully"}
