# tests/conftest.py
import json
import pytest
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.main import create_app

PRODUCTS = [
    {"id": 1, "name": "Classic Widget", "price": 19.99, "category": "Gadgets",
     "description": "The original all-purpose widget.", "stock": 25},
    {"id": 2, "name": "Espresso Maker", "price": 89.5, "category": "Kitchen",
     "description": "Stovetop espresso maker, six cups.", "stock": 8},
    {"id": 3, "name": "Trail Backpack", "price": 64.0, "category": "Outdoors",
     "description": "Fits a widget or two.", "stock": 0},
    {"id": 7, "name": "Desk Lamp", "price": 35.25, "category": "Home",
     "description": "LED lamp with dimmer.", "stock": 4},
]

USERS = [
    {"id": 1, "name": "Dana Whitfield", "email": "dana@example.com"},
    {"id": 2, "name": "Sam Okafor", "email": "sam@example.com"},
]

def write_collection(data_dir, name, records):
    (data_dir / f"{name}.json").write_text(json.dumps(records, indent=2), encoding="utf-8")

def read_collection(data_dir, name):
    return json.loads((data_dir / f"{name}.json").read_text(encoding="utf-8"))

@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    write_collection(d, "products", PRODUCTS)
    write_collection(d, "users", USERS)
    write_collection(d, "orders", [])
    return d

@pytest.fixture
def app(data_dir, tmp_path):
    return create_app(Settings(data_dir=str(data_dir), static_dir=str(tmp_path / "public")))

@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
