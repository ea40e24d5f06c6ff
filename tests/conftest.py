import pytest
from types import SimpleNamespace
from unittest.mock import patch

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.main import app
from app.services.db_service import db_service


# In-memory stand-in for the pymongo async database (equality filters only)

def _matches(document, query):
    return all(document.get(key) == value for key, value in (query or {}).items())


def _project(document, projection):
    if not projection:
        return dict(document)
    projected = {key: document[key] for key, flag in projection.items() if flag and key in document}
    if projection.get("_id", 1) and "_id" in document:
        projected["_id"] = document["_id"]
    return projected


class FakeCursor:
    def __init__(self, documents):
        self._documents = documents

    async def to_list(self, length=None):
        return [dict(doc) for doc in self._documents]


class FakeCollection:
    def __init__(self):
        self.documents = []

    def find(self, query=None, projection=None):
        return FakeCursor([_project(doc, projection) for doc in self.documents if _matches(doc, query)])

    async def find_one(self, query=None, projection=None):
        for doc in self.documents:
            if _matches(doc, query):
                return _project(doc, projection)
        return None

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        self.documents.append(dict(document))
        return SimpleNamespace(inserted_id=document["_id"], acknowledged=True)

    async def delete_one(self, query):
        for index, doc in enumerate(self.documents):
            if _matches(doc, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1, acknowledged=True)
        return SimpleNamespace(deleted_count=0, acknowledged=True)


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


class UnreachableCollection:
    def find(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("cluster0: timed out")

    async def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("cluster0: timed out")

    async def insert_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("cluster0: timed out")

    async def delete_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("cluster0: timed out")


class UnreachableDatabase:
    def __getitem__(self, name):
        return UnreachableCollection()


@pytest.fixture
def fake_db():
    database = FakeDatabase()
    with patch.object(db_service, "_database", database):
        yield database


@pytest.fixture
def down_db():
    with patch.object(db_service, "_database", UnreachableDatabase()):
        yield


@pytest.fixture
def client():
    # No context manager: lifespan (and the real MongoDB connect) is skipped
    return TestClient(app)
