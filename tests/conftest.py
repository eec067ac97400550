"""
Shared pytest fixtures.

The application is built with create_app(settings, repositories) so that no
MongoDB server is needed: the repositories below keep documents in memory
and record every call, which lets tests assert that rejected requests never
reached the store.
"""

import copy
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from app.core.config import Settings
from app.core.security import hash_password
from app.core.tokens import TokenService
from app.db.repositories import Repositories
from app.main import create_app
from utils.time_utils import utc_now

TEST_SECRET = "test-signing-secret-that-is-long-enough"


class FakeRepository:
    """Base for in-memory repositories."""

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.error: Optional[Exception] = None

    def _record(self, name: str):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    def _store(self, document: Dict[str, Any]) -> Dict[str, Any]:
        document["_id"] = ObjectId()
        self.documents[document["_id"]] = copy.deepcopy(document)
        return document


class FakeAccountRepository(FakeRepository):

    async def find_by_username_or_email(self, username, email):
        self._record("find_by_username_or_email")
        for doc in self.documents.values():
            if doc["username"] == username or doc["email"] == email:
                return copy.deepcopy(doc)
        return None

    async def find_by_email(self, email):
        self._record("find_by_email")
        for doc in self.documents.values():
            if doc["email"] == email:
                return copy.deepcopy(doc)
        return None

    async def find_by_id(self, account_id, include_password=False):
        self._record("find_by_id")
        doc = self.documents.get(ObjectId(account_id))
        if doc is None:
            return None
        doc = copy.deepcopy(doc)
        if not include_password:
            doc.pop("password", None)
        return doc

    async def insert(self, username, email, password):
        self._record("insert")
        for doc in self.documents.values():
            if doc["username"] == username or doc["email"] == email:
                raise DuplicateKeyError("E11000 duplicate key error")
        now = utc_now()
        return self._store({
            "username": username,
            "email": email,
            "password": hash_password(password),
            "created_at": now,
            "updated_at": now,
        })

    async def update_fields(self, account_id, fields):
        self._record("update_fields")
        oid = ObjectId(account_id)
        doc = self.documents.get(oid)
        if doc is None:
            return None
        email = fields.get("email")
        if email is not None and any(
            other["email"] == email for key, other in self.documents.items() if key != oid
        ):
            raise DuplicateKeyError("E11000 duplicate key error")
        doc.update(fields)
        doc["updated_at"] = utc_now()
        result = copy.deepcopy(doc)
        result.pop("password", None)
        return result

    async def set_password(self, account_id, new_password):
        self._record("set_password")
        doc = self.documents.get(ObjectId(account_id))
        if doc is None:
            return False
        doc["password"] = hash_password(new_password)
        return True


class FakeAddressRepository(FakeRepository):

    async def insert(self, account_id, fields):
        self._record("insert")
        return self._store({**fields, "user": ObjectId(account_id), "created_at": utc_now()})

    async def list_for_account(self, account_id):
        self._record("list_for_account")
        oid = ObjectId(account_id)
        return [copy.deepcopy(d) for d in self.documents.values() if d["user"] == oid]


class FakeContactRepository(FakeRepository):

    async def insert(self, name, email, message):
        self._record("insert")
        return self._store({"name": name, "email": email, "message": message, "created_at": utc_now()})


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        JWT_SECRET=TEST_SECRET,
        STATIC_DIR=str(tmp_path / "dist"),
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def repositories():
    return Repositories(
        accounts=FakeAccountRepository(),
        addresses=FakeAddressRepository(),
        contacts=FakeContactRepository(),
    )


@pytest.fixture
def app(settings, repositories):
    return create_app(settings, repositories)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def signup(client):
    """Creates an account through the API and returns its auth headers."""
    def _signup(username="alice", email="alice@example.com", password="s3cret-pass"):
        response = client.post(
            "/api/signup",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _signup
