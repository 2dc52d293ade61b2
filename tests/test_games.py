def create_game(client, headers, **payload):
    response = client.post("/api/games", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_create_game_trims_name(client, admin_headers):
    game = create_game(client, admin_headers, name="  Valorant  ")
    assert game["name"] == "Valorant"
    assert game["featured"] is False
    assert game["order"] == 0


def test_blank_game_name_rejected(client, admin_headers):
    assert client.post("/api/games", json={"name": "   "}, headers=admin_headers).status_code == 422


def test_game_names_unique_regardless_of_case(client, admin_headers):
    create_game(client, admin_headers, name="Valorant")

    response = client.post("/api/games", json={"name": "VALORANT"}, headers=admin_headers)
    assert response.status_code == 409
    assert "already exists" in response.json()["detail"]


def test_rename_onto_existing_game_conflicts(client, admin_headers):
    create_game(client, admin_headers, name="Valorant")
    other = create_game(client, admin_headers, name="CS:GO")

    response = client.put(f"/api/games/{other['id']}", json={"name": "valorant"}, headers=admin_headers)
    assert response.status_code == 409

    response = client.put(f"/api/games/{other['id']}", json={"name": "cs:go"}, headers=admin_headers)
    assert response.status_code == 200


def test_reorder_and_featured(client, admin_headers):
    a = create_game(client, admin_headers, name="A", order=0, featured=True)
    b = create_game(client, admin_headers, name="B", order=1)
    c = create_game(client, admin_headers, name="C", order=2, featured=True)

    response = client.put(
        "/api/games/order/update",
        json={"games": [{"id": a["id"], "order": 2}, {"id": c["id"], "order": 0}]},
        headers=admin_headers,
    )
    assert response.status_code == 200

    assert [g["name"] for g in client.get("/api/games").json()] == ["C", "B", "A"]
    assert [g["name"] for g in client.get("/api/games/featured").json()] == ["C", "A"]
    assert client.get(f"/api/games/{b['id']}").json()["name"] == "B"


def test_delete_game(client, admin_headers):
    game = create_game(client, admin_headers, name="Fortnite")
    assert client.delete(f"/api/games/{game['id']}", headers=admin_headers).status_code == 200
    assert client.get("/api/games").json() == []


def test_blank_rename_rejected(client, admin_headers):
    game = create_game(client, admin_headers, name="Valorant")

    response = client.put(f"/api/games/{game['id']}", json={"name": "   "}, headers=admin_headers)

    assert response.status_code == 422
    assert client.get(f"/api/games/{game['id']}").json()["name"] == "Valorant"


def test_rename_is_trimmed(client, admin_headers):
    game = create_game(client, admin_headers, name="Valorant")
    response = client.put(f"/api/games/{game['id']}", json={"name": "  Apex  "}, headers=admin_headers)
    assert response.json()["name"] == "Apex"
