"""
Shared fixtures.

The environment is pinned before any backend module is imported: settings
are read at import time and the engine is created from them.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"

import pytest
from fastapi.testclient import TestClient

from core.clock import ManualClock
from core.host import get_clock
from core.security import hash_password
from database import Base, SessionLocal, engine
from main import app
from models.principal import Principal
import models.vault              # noqa: F401
import models.access_grant       # noqa: F401
from models.registry_sequence import RegistrySequence
import models.audit_log          # noqa: F401
from vault.registry import VaultRegistry
from vault.store import InMemoryStore

START_HEIGHT = 1000
FINGERPRINT = "a" * 64


class StubHost:
    """Host whose caller identity is switched by the test."""

    def __init__(self, identity: str, clock: ManualClock):
        self.identity = identity
        self.clock = clock

    def current_identity(self) -> str:
        return self.identity

    def current_height(self) -> int:
        return self.clock.current_height()


@pytest.fixture
def clock():
    return ManualClock(START_HEIGHT)


@pytest.fixture
def host(clock):
    return StubHost("alice", clock)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def registry(store, host):
    return VaultRegistry(store, host)


@pytest.fixture
def valid_fields():
    return {
        "title": "Doc A",
        "fingerprint": FINGERPRINT,
        "summary": "summary",
        "classification": "public",
        "labels": ["x"],
    }


@pytest.fixture
def tables():
    """Schema as the initial migration leaves it, sequence row included."""
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(RegistrySequence.__table__.insert().values(id=1, last_vault_id=0))
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db_session(tables):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(tables, clock):
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Create a principal and return bearer headers for it."""

    def _login(name: str, password: str = "Passw0rd!") -> dict:
        db = SessionLocal()
        try:
            if not db.query(Principal).filter(Principal.name == name).first():
                db.add(Principal(name=name, password_hash=hash_password(password), is_active=True))
                db.commit()
        finally:
            db.close()
        resp = client.post("/auth/login", json={"principal": name, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login
