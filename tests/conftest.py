import os

# Must be set before the services import shared.core.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.database import Base, get_db
from auth_service.app.main import app as auth_app
from asset_service.app.main import app as asset_app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


auth_app.dependency_overrides[get_db] = override_get_db
asset_app.dependency_overrides[get_db] = override_get_db

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def auth_client():
    with TestClient(auth_app) as client:
        yield client


@pytest.fixture
def client():
    with TestClient(asset_app) as client:
        yield client


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(auth_client, name, email, role="EMPLOYEE", department=None):
    resp = auth_client.post("/api/users/signup", json={
        "name": name,
        "email": email,
        "password": PASSWORD,
        "role": role,
        "department": department,
    })
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    return {"user": data["user"], "headers": bearer(data["token"])}


@pytest.fixture
def admin(auth_client):
    return signup(auth_client, "Ada Admin", "admin@example.com", "ADMIN", "IT")


@pytest.fixture
def employee(auth_client, admin):
    return signup(auth_client, "Eve Employee", "eve@example.com", "EMPLOYEE", "Engineering")


@pytest.fixture
def other_employee(auth_client, admin):
    return signup(auth_client, "Oscar Other", "oscar@example.com", "EMPLOYEE")


def asset_payload(**overrides):
    payload = {
        "asset_tag": "A-1",
        "serial_number": "S-1",
        "name": "Laptop X",
        "category": "Laptop",
        "status": "available",
        "location": "HQ",
        "department": "Engineering",
        "purchase_date": "2024-01-15",
        "warranty_end": "2030-01-15",
        "cost": 1500.0,
    }
    payload.update(overrides)
    return payload


def create_asset(client, headers, **overrides):
    resp = client.post("/api/assets", json=asset_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
def make_asset(client, admin):
    def _make(**overrides):
        return create_asset(client, admin["headers"], **overrides)
    return _make


@pytest.fixture
def register(auth_client):
    def _register(name, email, role="EMPLOYEE", department=None):
        return signup(auth_client, name, email, role, department)
    return _register
