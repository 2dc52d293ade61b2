from datetime import timedelta

from database import utcnow


def make_event(db, **overrides):
    now = utcnow()
    data = {
        "name": "Valorant Open",
        "description": "Open bracket",
        "image": "",
        "game": "Valorant",
        "start_date": now + timedelta(days=30),
        "end_date": now + timedelta(days=31),
        "location": "Online",
        "status": "upcoming",
        "teams": [],
        "prize_pool": 1000,
        "format": "Single Elimination",
        "registration_deadline": now + timedelta(days=20),
        "is_public": True,
        "created_at": now,
        "updated_at": now,
    }
    data.update(overrides)
    return db["event"].insert_one(data).inserted_id


def make_product(db, **overrides):
    data = {
        "name": "Pro Jersey",
        "description": "Official jersey",
        "category": "jerseys",
        "price": 50.0,
        "image": "/images/shop/jersey.jpg",
        "stock": 10,
        "rating": 4.5,
    }
    data.update(overrides)
    return db["product"].insert_one(data).inserted_id


def event_payload(**overrides):
    data = {
        "name": "CS:GO Cup",
        "description": "Regional cup",
        "game": "CS:GO",
        "start_date": "2030-06-15T10:00:00Z",
        "end_date": "2030-06-16T18:00:00Z",
        "location": "Berlin",
        "format": "Double Elimination",
        "registration_deadline": "2030-06-01T00:00:00Z",
    }
    data.update(overrides)
    return data
