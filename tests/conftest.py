"""
Pytest configuration and shared fixtures.

Repositories talk to Firestore through get_db(); the fixtures here swap in an
in-memory stand-in that covers the calls the repositories make (documents,
equality filters, ordering, limits, create/update semantics and batches).
"""
import copy
from collections import defaultdict
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from google.api_core.exceptions import AlreadyExists, NotFound, ServiceUnavailable

from quizcircle.core.config import settings
from quizcircle.repositories import (
    articles_repo, groups_repo, members_repo, quizzes_repo, rotations_repo, topics_repo,
)

REPO_MODULES = [articles_repo, groups_repo, members_repo, quizzes_repo, rotations_repo, topics_repo]


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = copy.deepcopy(data)

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data)

    def get(self, field):
        return (self._data or {}).get(field)


class FakeDocument:
    def __init__(self, db, collection, doc_id):
        self._db = db
        self._collection = collection
        self.id = doc_id

    @property
    def _rows(self):
        return self._db.data[self._collection]

    def get(self):
        self._db.check()
        return FakeSnapshot(self.id, self._rows.get(self.id))

    def set(self, data, merge=False):
        self._db.check()
        if merge and self.id in self._rows:
            self._rows[self.id].update(copy.deepcopy(data))
        else:
            self._rows[self.id] = copy.deepcopy(data)

    def create(self, data):
        self._db.check()
        if self.id in self._rows:
            raise AlreadyExists(f"Document already exists: {self._collection}/{self.id}")
        self._rows[self.id] = copy.deepcopy(data)

    def update(self, data):
        self._db.check()
        if self.id not in self._rows:
            raise NotFound(f"No document to update: {self._collection}/{self.id}")
        self._rows[self.id].update(copy.deepcopy(data))


class FakeQuery:
    def __init__(self, db, collection, filters=(), order=None, limit=None):
        self._db = db
        self._collection = collection
        self._filters = tuple(filters)
        self._order = order
        self._limit = limit

    def where(self, field, op, value):
        assert op == "==", "only equality filters are used"
        return FakeQuery(self._db, self._collection, self._filters + ((field, value),), self._order, self._limit)

    def order_by(self, field, direction="ASCENDING"):
        return FakeQuery(self._db, self._collection, self._filters, (field, direction), self._limit)

    def limit(self, count):
        return FakeQuery(self._db, self._collection, self._filters, self._order, count)

    def stream(self):
        self._db.check()
        rows = [
            (doc_id, data) for doc_id, data in self._db.data[self._collection].items()
            if all(data.get(f) == v for f, v in self._filters)
        ]
        if self._order:
            field, direction = self._order
            rows.sort(key=lambda r: r[1].get(field), reverse=(direction == "DESCENDING"))
        if self._limit is not None:
            rows = rows[:self._limit]
        return iter([FakeSnapshot(doc_id, data) for doc_id, data in rows])

    def get(self):
        return list(self.stream())


class FakeCollection(FakeQuery):
    def document(self, doc_id=None):
        return FakeDocument(self._db, self._collection, doc_id or uuid4().hex)


class FakeBatch:
    def __init__(self, db):
        self._db = db
        self._ops = []

    def set(self, ref, data):
        self._ops.append(("set", ref, data))

    def update(self, ref, data):
        self._ops.append(("update", ref, data))

    def commit(self):
        self._db.check()
        # all-or-nothing: validate every update before applying anything
        for op, ref, _ in self._ops:
            if op == "update" and ref.id not in self._db.data[ref._collection]:
                raise NotFound(f"No document to update: {ref._collection}/{ref.id}")
        for op, ref, data in self._ops:
            getattr(ref, op)(data)


class FakeFirestore:
    def __init__(self):
        self.data = defaultdict(dict)
        self.broken = False

    def check(self):
        if self.broken:
            raise ServiceUnavailable("Firestore unavailable")

    def collection(self, name):
        self.check()
        return FakeCollection(self, name)

    def batch(self):
        return FakeBatch(self)


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeFirestore()
    for module in REPO_MODULES:
        monkeypatch.setattr(module, "get_db", lambda: db)
    return db


@pytest.fixture
def no_ai(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")


@pytest.fixture
def client(fake_db, no_ai):
    from quizcircle.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def article_text():
    return (
        "Photosynthesis converts sunlight into chemical energy inside plant leaves. "
        "Chlorophyll absorbs mostly blue and red light! "
        "Too short. "
        "Stomata regulate the exchange of gases between leaves and the atmosphere? "
        "Roots anchor plants firmly and absorb water from surrounding soil."
    )


@pytest.fixture
def group(fake_db):
    return groups_repo.create_group({
        "rotation_period": 7,
        "max_word_count": 500,
        "quizzes_enabled": True,
        "archive_enabled": False,
        "archive_time_period": None,
        "anonymous": False,
    })
