import os

# Settings are read at import time, so the environment must be ready first
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_EQUIPMENT"] = "false"
os.environ["MAX_UNITS"] = "5"
os.environ["ALLOW_OVERBOOKING"] = "false"
os.environ["DRIVER_CODES"] = '["DRIVER001", "DRIVER002"]'

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from beachbbq import schemas
from beachbbq.database import Base, SessionLocal, engine
from beachbbq.equipment import SqlEquipmentRegistry
from beachbbq.ledger import SqlBookingLedger
from beachbbq.main import app
from beachbbq.memory import MemoryBookingLedger, MemoryEquipmentRegistry

DAY = "2025-06-01"


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def customer():
    return SimpleNamespace(id=1, username="alice", phone="+35679000001")


def make_store(kind, db, **options):
    options.setdefault("max_units", 5)
    options.setdefault("allow_overbooking", False)
    if kind == "sql":
        ledger = SqlBookingLedger(db, **options)
        return ledger, SqlEquipmentRegistry(db, ledger)
    ledger = MemoryBookingLedger(**options)
    return ledger, MemoryEquipmentRegistry(ledger)


@pytest.fixture(params=["sql", "memory"])
def backend(request, db):
    return request.param


@pytest.fixture
def store(backend, db):
    return make_store(backend, db)


@pytest.fixture
def ledger(store):
    return store[0]


@pytest.fixture
def registry(store):
    return store[1]


def draft(**fields):
    values = {
        "location_id": 1,
        "package_id": 2,
        "date": DAY,
        "time_slot": "09:00-12:00",
        "customer_name": "Alice",
        "customer_phone": "+35679000001",
    }
    values.update(fields)
    return schemas.BookingCreate(**values)


def register(client, username, password="secret123"):
    resp = client.post("/api/register", json={
        "username": username,
        "password": password,
        "email": f"{username}@beachbbq.mt",
        "phone": "+35679001122",
    })
    assert resp.status_code == 200, resp.text
    return resp.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return bearer(register(client, "admin")["accessToken"])


@pytest.fixture
def user_headers(client, admin_headers):
    return bearer(register(client, "customer")["accessToken"])


@pytest.fixture
def driver_headers(client):
    resp = client.post("/api/driver/login", json={"driverCode": "DRIVER001"})
    assert resp.status_code == 200, resp.text
    return bearer(resp.json()["accessToken"])
