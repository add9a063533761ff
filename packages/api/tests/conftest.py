"""Shared test fixtures for dustfree-api."""

from __future__ import annotations

import time
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt as jose_jwt

from dustfree_shared.config import settings

HOST_ID = str(uuid4())
CLEANER_PROFILE_ID = str(uuid4())
CLEANER_ID = str(uuid4())
PROPERTY_ID = str(uuid4())

CHAIN_METHODS = (
    "select", "eq", "neq", "gt", "gte", "lt", "lte", "ilike", "order",
    "limit", "range", "in_", "insert", "update", "delete", "upsert",
)

# Every module that imports get_supabase_client by name
SUPABASE_USERS = (
    "dustfree_api.services.profile_service",
    "dustfree_api.services.property_service",
    "dustfree_api.services.task_service",
    "dustfree_api.services.cleaner_service",
    "dustfree_api.services.cleaning_service",
    "dustfree_api.services.payout_service",
)


def make_chain(data=None, count=0):
    """Create a chainable mock that returns given data on execute()."""
    chain = MagicMock()
    chain.execute.return_value = MagicMock(data=data or [], count=count)
    for method in CHAIN_METHODS:
        getattr(chain, method).return_value = chain
    return chain


def make_supabase(table_data=None):
    """Create a mock Supabase client.

    table_data: optional dict mapping table name -> rows. Each table gets
    one chain for the lifetime of the client, so tests can inspect the
    insert/update calls made on it. Unmapped tables return empty results.
    """
    client = MagicMock()
    td = table_data or {}
    tables: dict[str, MagicMock] = {}

    def _table(name):
        if name not in tables:
            tables[name] = make_chain(td.get(name, []), len(td.get(name, [])))
        return tables[name]

    client.table.side_effect = _table
    return client


def make_token(
    user_id: str,
    *,
    email: str | None = "someone@example.com",
    metadata: dict[str, Any] | None = None,
    secret: str | None = None,
    expires_in: int = 3600,
) -> str:
    """Mint a Supabase-style access token."""
    claims = {
        "sub": user_id,
        "aud": "authenticated",
        "email": email,
        "user_metadata": metadata or {},
        "exp": int(time.time()) + expires_in,
    }
    return jose_jwt.encode(claims, secret or settings.jwt_secret, algorithm="HS256")


class FakeDB:
    """One mock Supabase client shared by every service module."""

    def __init__(self) -> None:
        self.factory = MagicMock()
        self.profile: dict[str, Any] | None = None
        self.load()

    def load(self, **tables: list[dict[str, Any]]) -> MagicMock:
        if self.profile is not None:
            tables.setdefault("profiles", [self.profile])
        self.client = make_supabase(tables)
        self.factory.return_value = self.client
        return self.client

    def login(self, role: str, user_id: str | None = None) -> dict[str, str]:
        """Make the next requests authenticate as a profile with ``role``."""
        user_id = user_id or (HOST_ID if role == "host" else CLEANER_PROFILE_ID)
        self.profile = {
            "id": user_id,
            "email": f"{role}@example.com",
            "full_name": role.title(),
            "role": role,
        }
        self.load()
        return {"Authorization": f"Bearer {make_token(user_id, email=self.profile['email'])}"}

    def table(self, name: str) -> MagicMock:
        return self.client.table(name)


@pytest.fixture()
def db():
    """Patch get_supabase_client everywhere it's imported."""
    fake = FakeDB()
    patches = [patch(f"{module}.get_supabase_client", fake.factory) for module in SUPABASE_USERS]
    for p in patches:
        p.start()
    yield fake
    for p in patches:
        p.stop()


@pytest.fixture()
def app(db):
    """Create test FastAPI app with mocked Supabase."""
    from dustfree_api.app import create_app
    return create_app()


@pytest.fixture()
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture()
def host_headers(db):
    return db.login("host")


@pytest.fixture()
def cleaner_headers(db):
    return db.login("cleaner")


@pytest.fixture()
def sample_property():
    return {
        "id": PROPERTY_ID,
        "host_id": HOST_ID,
        "name": "Riverside Condo",
        "address": "12 Charoen Krung Rd",
        "floor": "3",
        "room_number": "301",
        "description": None,
        "cleaner_rate_baht": 800,
        "created_at": "2024-05-01T08:00:00+00:00",
    }


@pytest.fixture()
def sample_cleaner():
    return {
        "id": CLEANER_ID,
        "host_id": HOST_ID,
        "cleaner_profile_id": CLEANER_PROFILE_ID,
        "name": "Nok",
        "email": "cleaner@example.com",
        "phone": None,
        "hourly_rate": 0,
        "payment_details_image": None,
    }


@pytest.fixture()
def sample_cleaning(sample_property, sample_cleaner):
    return {
        "id": str(uuid4()),
        "property_id": PROPERTY_ID,
        "cleaner_id": CLEANER_ID,
        "status": "completed",
        "scheduled_date": "2024-06-10T03:00:00+00:00",
        "completed_at": "2024-06-10T05:30:00+00:00",
        "duration_hours": 2.5,
        "amount": 950,
        "transport_cost": 150,
        "property": {k: sample_property[k] for k in ("id", "name", "floor", "room_number")},
        "cleaner": {"id": CLEANER_ID, "name": sample_cleaner["name"]},
    }
