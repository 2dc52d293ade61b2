# tests/conftest.py

import os
import tempfile

# Settings are cached on first use, so point uploads at a scratch dir first
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="esports-uploads-"))
os.environ.setdefault("SEED_NEWS_ON_STARTUP", "false")

import mongomock
import pytest
from fastapi.testclient import TestClient

from database import ensure_indexes, get_db
from main import app
from mock_data import fallback
from security import create_access_token
from uploads import UploadStore, get_upload_store


@pytest.fixture
def db():
    database = mongomock.MongoClient().db
    ensure_indexes(database)
    return database


@pytest.fixture
def upload_store(tmp_path):
    store = UploadStore(tmp_path, max_image_bytes=1024, max_video_bytes=4096)
    store.ensure_directories()
    return store


@pytest.fixture
def client(db, upload_store):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_upload_store] = lambda: upload_store
    fallback.reset()
    # No context manager: the lifespan would talk to a real MongoDB
    yield TestClient(app)
    app.dependency_overrides.clear()
    fallback.reset()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token('admin')}"}
