import mongomock
import pytest
from fastapi.testclient import TestClient

import database


@pytest.fixture
def db(monkeypatch):
    mock_db = mongomock.MongoClient()["rfap_test"]
    monkeypatch.setattr(database, "db", mock_db)
    return mock_db


@pytest.fixture
def client(db):
    from main import app
    # entering the client runs startup, which seeds the demo product
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    response = client.post("/api/admin/login", json={"username": "rfapLogin", "password": "rfapPass"})
    assert response.status_code == 200
    return client


@pytest.fixture
def demo_product():
    return {
        "id": "p1",
        "name": "কাস্টম জার্সি",
        "price": 1200,
        "addons": [{"name": "সামনে নাম্বার প্রিন্ট", "price": 100}],
    }
