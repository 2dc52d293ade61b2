def message_payload(**overrides):
    data = {
        "name": "Robin",
        "email": "Robin@Example.com",
        "subject": "Sponsorship",
        "message": "We would like to sponsor your Valorant roster.",
        "category": "partnership",
    }
    data.update(overrides)
    return data


def test_send_message(client):
    response = client.post("/api/contact", json=message_payload(read=True))

    assert response.status_code == 201
    content = response.json()
    assert content["success"] is True
    assert content["message"] == "Message sent successfully! We will get back to you soon."
    assert content["data"]["email"] == "robin@example.com"
    assert content["data"]["read"] is False


def test_invalid_message_rejected(client):
    assert client.post("/api/contact", json=message_payload(email="not-an-email")).status_code == 422
    assert client.post("/api/contact", json=message_payload(category="spam")).status_code == 422


def test_inbox_filters_and_stats(client, admin_headers):
    first = client.post("/api/contact", json=message_payload()).json()["data"]
    client.post("/api/contact", json=message_payload(category="support"))
    client.post("/api/contact", json=message_payload(category="support"))

    assert client.get("/api/contact").status_code == 401

    response = client.patch(f"/api/contact/{first['id']}/read", headers=admin_headers)
    assert response.json()["data"]["read"] is True

    content = client.get("/api/contact?category=support", headers=admin_headers).json()
    assert content["count"] == 2
    assert client.get("/api/contact?read=true", headers=admin_headers).json()["count"] == 1

    stats = client.get("/api/contact/stats", headers=admin_headers).json()["data"]
    assert stats == {"total": 3, "unread": 2, "categories": {"partnership": 1, "support": 2}}


def test_read_and_delete_message(client, admin_headers):
    message = client.post("/api/contact", json=message_payload()).json()["data"]

    assert client.get(f"/api/contact/{message['id']}", headers=admin_headers).json()["data"]["subject"] == "Sponsorship"
    assert client.delete(f"/api/contact/{message['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/contact/{message['id']}", headers=admin_headers).status_code == 404
