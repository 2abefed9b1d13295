"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.middleware.rate_limit import limiter
from app.storage import database, product_store, user_store
from app.storage.database import init_database
from app.storage.user_store import UserAccount, get_user_store

PASSWORD = "correct-horse"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point every test at its own SQLite file and fresh singletons."""
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "inventory.db"))
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.setenv("APP_ENV", "development")
    get_settings.cache_clear()

    monkeypatch.setattr(database, "_sqlite_db", None)
    monkeypatch.setattr(database, "_postgres_db", None)
    monkeypatch.setattr(product_store, "_store", None)
    monkeypatch.setattr(user_store, "_store", None)
    limiter.reset()

    yield

    get_settings.cache_clear()


def create_account(username: str, role: str, name: str = "Test User") -> UserAccount:
    """Create an account directly in the store."""

    async def _create():
        await init_database()
        return await get_user_store().create_user(username, PASSWORD, name, role)

    return asyncio.run(_create())


def login(client: TestClient, username: str, password: str = PASSWORD) -> Dict[str, str]:
    """Log in through the API and return bearer headers."""
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def client():
    """Create test client (runs the app lifespan)."""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def accounts(client) -> Dict[str, UserAccount]:
    """One account per role."""
    return {
        "admin": create_account("admin", "admin", "Administrator"),
        "user": create_account("clerk", "user", "Stock Clerk"),
        "viewer": create_account("auditor", "viewer", "Auditor"),
    }


@pytest.fixture
def admin_headers(client, accounts) -> Dict[str, str]:
    return login(client, "admin")


@pytest.fixture
def user_headers(client, accounts) -> Dict[str, str]:
    return login(client, "clerk")


@pytest.fixture
def viewer_headers(client, accounts) -> Dict[str, str]:
    return login(client, "auditor")


@pytest.fixture
def product_payload() -> dict:
    """A valid product body."""
    return {
        "name": "Cordless Drill",
        "quantity": 12,
        "price": 89.99,
        "company": "Makita",
        "type": "Power Tools",
        "description": "18V, two batteries",
    }


@pytest.fixture
def sample_products(client, admin_headers) -> list:
    """A small catalogue created through the API."""
    bodies = [
        {"name": "Cordless Drill", "quantity": 12, "price": 89.99, "company": "Makita", "type": "Power Tools"},
        {"name": "Impact Driver", "quantity": 0, "price": 129.0, "company": "Makita", "type": "Power Tools"},
        {"name": "Claw Hammer", "quantity": 40, "price": 14.5, "company": "Stanley", "type": "Hand Tools",
         "description": "16 oz"},
        {"name": "Tape Measure", "quantity": 25, "price": 9.75, "company": "Stanley", "type": "Hand Tools"},
        {"name": "Safety Glasses", "quantity": 100, "price": 3.2, "company": "3M", "type": "PPE"},
    ]
    created = []
    for body in bodies:
        response = client.post("/api/products", json=body, headers=admin_headers)
        assert response.status_code == 201, response.text
        created.append(response.json())
    return created
