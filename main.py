import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import get_settings
from database import ensure_indexes, get_db, utcnow
from errors import register_exception_handlers
from mock_data import FallbackSwitch, get_fallback
from routes import api_router
from routes.news import seed_news_if_empty
from uploads import get_upload_store

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

upload_store = get_upload_store()


@asynccontextmanager
async def lifespan(app: FastAPI):
    upload_store.ensure_directories()
    db = get_db()
    try:
        ensure_indexes(db)
        if settings.SEED_NEWS_ON_STARTUP:
            seed_news_if_empty(db)
    except PyMongoError as exc:
        logger.warning("MongoDB not reachable at startup: %s", exc)
    logger.info("API started in %s mode", settings.ENVIRONMENT)
    yield
    logger.info("API shutting down")


app = FastAPI(title="Esports Organization API", lifespan=lifespan)

origins = settings.get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api")

app.mount("/uploads", StaticFiles(directory=str(upload_store.root), check_dir=False), name="uploads")


@app.get("/")
def read_root():
    return {"message": "Esports API running"}


@app.get("/api/health")
def health(fallback: FallbackSwitch = Depends(get_fallback)):
    return {
        "status": "OK",
        "timestamp": utcnow().isoformat() + "Z",
        "environment": settings.ENVIRONMENT,
        "mock_mode": fallback.engaged,
    }


@app.get("/api/test")
def test_database(db: Database = Depends(get_db)):
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_name": db.name,
        "connection_status": "Not Connected",
        "collections": [],
    }
    try:
        response["collections"] = db.list_collection_names()[:10]
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
    except PyMongoError as e:
        response["database"] = f"⚠️  Connected but Error: {str(e)[:50]}"
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
