from tests.utils import make_product


def test_search_products(client, db):
    make_product(db, name="Pro Jersey", description="Official jersey")
    make_product(db, name="Mousepad", description="RGB pad with jersey print", category="accessories")
    make_product(db, name="Headset", description="Surround sound", category="peripherals")

    assert {p["name"] for p in client.get("/api/products?q=jersey").json()} == {"Pro Jersey", "Mousepad"}
    assert [p["name"] for p in client.get("/api/products?q=jersey&category=accessories").json()] == ["Mousepad"]
    assert [p["name"] for p in client.get("/api/products/category/peripherals").json()] == ["Headset"]


def test_create_product_validates_price_and_stock(client, admin_headers):
    payload = {"name": "Cap", "description": "Team cap", "category": "accessories", "price": 15, "image": "cap.jpg"}

    response = client.post("/api/products", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["stock"] == 0

    assert client.post("/api/products", json={**payload, "price": -1}, headers=admin_headers).status_code == 422
    assert client.post("/api/products", json={**payload, "stock": -5}, headers=admin_headers).status_code == 422


def test_update_and_delete_product(client, db, admin_headers):
    product_id = make_product(db)

    response = client.put(f"/api/products/{product_id}", json={"stock": 3}, headers=admin_headers)
    assert response.json()["stock"] == 3
    assert client.get(f"/api/products/{product_id}").json()["stock"] == 3

    response = client.delete(f"/api/products/{product_id}", headers=admin_headers)
    assert response.json() == {"message": "Product removed"}
    assert client.get(f"/api/products/{product_id}").status_code == 404


def test_search_treats_text_literally(client, db):
    make_product(db, name="Headset (wireless)", description="Surround sound")
    make_product(db, name="Keyboard", description="Mechanical")

    for term in ("(", "[", "?", "(wireless)"):
        response = client.get("/api/products", params={"q": term})
        assert response.status_code == 200
    assert [p["name"] for p in client.get("/api/products", params={"q": "(wireless)"}).json()] == ["Headset (wireless)"]
    assert client.get("/api/products", params={"q": "."}).json() == []
