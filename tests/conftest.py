"""Shared fixtures — in-memory database, seed data and an HTTP client."""

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from users_api.database.engine import Database
from users_api.main import create_app
from users_api.models.state import State
from users_api.models.user import User


def make_user_payload(**overrides) -> dict:
    """A request body that passes every create rule."""
    payload = {
        "email": "new.customer@example.com",
        "address": "12 Harbour Street",
        "city": "Portland",
        "state": "Oregon",
        "zip": "97201",
        "billing_name": "New Customer",
        "billing_address": "PO Box 4410",
        "billing_city": "Portland",
        "billing_state": "Oregon",
        "billing_zip": "97201",
        "work_phone": "+1(555) 123-4567",
        "home_phone": "555-987-6543",
        "mobile_phone": "+44 20 7123 4567",
    }
    payload.update(overrides)
    return payload


def _seed_user(email: str, state: str, address: str) -> User:
    data = make_user_payload(email=email, state=state, address=address)
    return User(**data)


@pytest_asyncio.fixture
async def database():
    """A fresh in-memory database with all tables created."""
    db = Database("sqlite+aiosqlite://", poolclass=StaticPool)
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def seeded_users(database: Database) -> list[User]:
    """Three users across two states, plus a state nobody lives in."""
    users = [
        _seed_user("alice@example.com", "California", "1 Market Street"),
        _seed_user("bob@example.com", "Texas", "2 Congress Avenue"),
        _seed_user("carol@example.com", "California", "3 Mission Street"),
    ]
    async with database.session() as session:
        session.add_all([State(name="California"), State(name="Texas"), State(name="Nevada")])
        session.add_all(users)
        await session.commit()
    return users


@pytest_asyncio.fixture
async def db_session(database: Database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(database: Database):
    """HTTP client talking to an app wired to the test database."""
    app = create_app(database)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c
