from config import get_settings
from security import create_access_token


def test_admin_login(client):
    settings = get_settings()
    response = client.post(
        "/api/auth/admin/login",
        json={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
    )

    assert response.status_code == 200
    content = response.json()
    assert content["success"] is True
    assert content["user"] == {"username": settings.ADMIN_USERNAME, "is_admin": True}

    response = client.get("/api/auth/verify", headers={"Authorization": f"Bearer {content['token']}"})
    assert response.json()["user"]["is_admin"] is True


def test_login_failures(client):
    assert client.post("/api/auth/admin/login", json={"username": "admin"}).status_code == 400
    response = client.post("/api/auth/admin/login", json={"username": "admin", "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_verify_requires_valid_token(client):
    response = client.get("/api/auth/verify")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authorized, no token provided"

    response = client.get("/api/auth/verify", headers={"Authorization": "Bearer garbage"})
    assert response.json()["detail"] == "Not authorized, token failed"


def test_non_admin_token_forbidden(client):
    headers = {"Authorization": f"Bearer {create_access_token('viewer', is_admin=False)}"}
    response = client.get("/api/orders", headers=headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized as an admin"
