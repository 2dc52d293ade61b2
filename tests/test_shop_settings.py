def test_defaults_created_on_first_read(client, db):
    content = client.get("/api/shop-settings").json()

    assert content["is_active"] is True
    assert content["maintenance_message"].startswith("Shop is currently under maintenance")
    assert db["shop_settings"].count_documents({}) == 1

    client.get("/api/shop-settings")
    assert db["shop_settings"].count_documents({}) == 1


def test_update_shop_settings(client, admin_headers):
    assert client.put("/api/shop-settings", json={"is_active": False}).status_code == 401

    response = client.put("/api/shop-settings", json={"is_active": False}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Shop settings updated successfully"
    assert response.json()["settings"]["is_active"] is False
    assert client.get("/api/shop-settings").json()["is_active"] is False
