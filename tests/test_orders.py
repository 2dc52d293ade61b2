import pytest
from pymongo.errors import PyMongoError

from errors import ConflictError
from routes import orders
from routes.orders import _take_stock
from tests.utils import make_product


def order_payload(items, **overrides):
    data = {
        "customer_name": "Sam Rivera",
        "customer_email": "sam@example.com",
        "customer_phone": "+1 555 0100",
        "customer_location": "Austin, TX",
        "items": items,
    }
    data.update(overrides)
    return data


def place_order(client, items):
    response = client.post("/api/orders", json=order_payload(items))
    assert response.status_code == 201
    return response.json()["order"]


def test_order_takes_stock_and_snapshots_prices(client, db):
    jersey = make_product(db, price=49.99, stock=5)
    pad = make_product(db, name="Mousepad", price=10.0, stock=3)

    order = place_order(client, [
        {"product_id": str(jersey), "quantity": 2},
        {"product_id": str(pad), "quantity": 1},
    ])

    assert order["status"] == "pending"
    assert order["total_amount"] == 109.98
    assert [(i["name"], i["price"]) for i in order["items"]] == [("Pro Jersey", 49.99), ("Mousepad", 10.0)]
    assert db["product"].find_one({"_id": jersey})["stock"] == 3
    assert db["product"].find_one({"_id": pad})["stock"] == 2


def test_insufficient_stock_leaves_inventory_alone(client, db):
    jersey = make_product(db, stock=5)
    pad = make_product(db, name="Mousepad", stock=1)

    response = client.post("/api/orders", json=order_payload([
        {"product_id": str(jersey), "quantity": 1},
        {"product_id": str(pad), "quantity": 2},
    ]))

    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient stock for Mousepad"
    assert db["product"].find_one({"_id": jersey})["stock"] == 5
    assert db["order"].count_documents({}) == 0


def test_repeated_lines_count_against_the_same_stock(client, db):
    jersey = make_product(db, stock=3)
    items = [{"product_id": str(jersey), "quantity": 2}, {"product_id": str(jersey), "quantity": 2}]

    assert client.post("/api/orders", json=order_payload(items)).status_code == 400


def test_order_validation(client, db):
    assert client.post("/api/orders", json=order_payload([])).status_code == 422
    missing = [{"product_id": "64b7f0c2a1b2c3d4e5f60718", "quantity": 1}]
    assert client.post("/api/orders", json=order_payload(missing)).status_code == 404
    bad_id = [{"product_id": "nope", "quantity": 1}]
    assert client.post("/api/orders", json=order_payload(bad_id)).status_code == 400


def test_take_stock_rolls_back_when_one_product_runs_short(db):
    jersey = make_product(db, stock=5)
    pad = make_product(db, name="Mousepad", stock=1)

    with pytest.raises(ConflictError):
        _take_stock(db, {jersey: 2, pad: 4}, {jersey: "Pro Jersey", pad: "Mousepad"})

    assert db["product"].find_one({"_id": jersey})["stock"] == 5
    assert db["product"].find_one({"_id": pad})["stock"] == 1


def test_inactive_shop_refuses_orders(client, db, admin_headers):
    jersey = make_product(db)
    client.put(
        "/api/shop-settings",
        json={"is_active": False, "maintenance_message": "Back next week"},
        headers=admin_headers,
    )

    response = client.post("/api/orders", json=order_payload([{"product_id": str(jersey), "quantity": 1}]))

    assert response.status_code == 403
    assert response.json()["detail"] == "Back next week"


def test_cancelling_restores_stock_once(client, db, admin_headers):
    jersey = make_product(db, stock=5)
    order = place_order(client, [{"product_id": str(jersey), "quantity": 2}])

    response = client.put(f"/api/orders/{order['id']}", json={"status": "cancelled"}, headers=admin_headers)
    assert response.json()["order"]["status"] == "cancelled"
    assert db["product"].find_one({"_id": jersey})["stock"] == 5

    client.put(f"/api/orders/{order['id']}", json={"status": "cancelled"}, headers=admin_headers)
    assert db["product"].find_one({"_id": jersey})["stock"] == 5

    response = client.put(f"/api/orders/{order['id']}", json={"status": "pending"}, headers=admin_headers)
    assert response.status_code == 400


def test_update_order_notes(client, db, admin_headers):
    order = place_order(client, [{"product_id": str(make_product(db)), "quantity": 1}])

    response = client.put(f"/api/orders/{order['id']}", json={"notes": "Gift wrap"}, headers=admin_headers)
    assert response.json()["order"]["notes"] == "Gift wrap"
    assert client.put(f"/api/orders/{order['id']}", json={}, headers=admin_headers).status_code == 400


def test_order_stats(client, db, admin_headers):
    jersey = make_product(db, price=20.0, stock=10)
    first = place_order(client, [{"product_id": str(jersey), "quantity": 1}])
    second = place_order(client, [{"product_id": str(jersey), "quantity": 2}])
    place_order(client, [{"product_id": str(jersey), "quantity": 1}])
    client.put(f"/api/orders/{first['id']}", json={"status": "delivered"}, headers=admin_headers)
    client.put(f"/api/orders/{second['id']}", json={"status": "confirmed"}, headers=admin_headers)

    stats = client.get("/api/orders/stats", headers=admin_headers).json()

    assert stats["total_orders"] == 3
    assert stats["pending_orders"] == 1
    assert stats["delivered_orders"] == 1
    assert stats["total_revenue"] == 60.0


def test_order_admin_endpoints(client, db, admin_headers):
    order = place_order(client, [{"product_id": str(make_product(db)), "quantity": 1}])

    assert client.get("/api/orders").status_code == 401
    assert [o["id"] for o in client.get("/api/orders", headers=admin_headers).json()] == [order["id"]]
    assert client.get(f"/api/orders/{order['id']}", headers=admin_headers).json()["customer_name"] == "Sam Rivera"

    response = client.delete(f"/api/orders/{order['id']}", headers=admin_headers)
    assert response.json() == {"message": "Order deleted successfully"}
    assert db["product"].find_one()["stock"] == 9


def test_failed_save_puts_stock_back(client, db, monkeypatch):
    jersey = make_product(db, stock=5)

    def broken_insert(*args, **kwargs):
        raise PyMongoError("write failed")

    monkeypatch.setattr(orders, "create_document", broken_insert)
    response = client.post("/api/orders", json=order_payload([{"product_id": str(jersey), "quantity": 2}]))

    assert response.status_code == 500
    assert db["product"].find_one({"_id": jersey})["stock"] == 5
    assert db["order"].count_documents({}) == 0


def test_cancel_after_concurrent_cancel_restores_nothing(client, db, admin_headers, monkeypatch):
    jersey = make_product(db, stock=5)
    order = place_order(client, [{"product_id": str(jersey), "quantity": 2}])
    # another request already flipped the status after this one read the order
    original_get = orders.get_document

    def stale_read(*args, **kwargs):
        doc = original_get(*args, **kwargs)
        db["order"].update_one({"_id": doc["_id"]}, {"$set": {"status": "cancelled"}})
        return doc

    monkeypatch.setattr(orders, "get_document", stale_read)
    response = client.put(f"/api/orders/{order['id']}", json={"status": "cancelled"}, headers=admin_headers)

    assert response.status_code == 200
    assert db["product"].find_one({"_id": jersey})["stock"] == 3
