from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

import main
from mock_data import fallback
from uploads import SUBDIRECTORIES, UploadStore


def test_root(client):
    assert client.get("/").json() == {"message": "Esports API running"}


def test_health_reports_mock_mode(client):
    content = client.get("/api/health").json()
    assert content["status"] == "OK"
    assert content["mock_mode"] is False

    fallback.engage(ServerSelectionTimeoutError("no servers"))
    assert client.get("/api/health").json()["mock_mode"] is True


def test_database_diagnostic(client, db):
    db["event"].insert_one({"name": "x"})

    content = client.get("/api/test").json()

    assert content["connection_status"] == "Connected"
    assert "event" in content["collections"]


def test_startup_creates_upload_tree(monkeypatch, db, tmp_path):
    store = UploadStore(tmp_path / "fresh", max_image_bytes=1024, max_video_bytes=1024)
    monkeypatch.setattr(main, "upload_store", store)
    monkeypatch.setattr(main, "get_db", lambda: db)

    with TestClient(main.app):
        pass

    assert all((tmp_path / "fresh" / name).is_dir() for name in SUBDIRECTORIES)
