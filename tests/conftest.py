# shared fixtures for journal api tests
# provides mock db with failure injection, a fixed day window, entry factories and httpx test clients

import hashlib
from datetime import datetime, timezone, timedelta

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from bson import ObjectId
from pymongo.errors import PyMongoError

from httpx import AsyncClient, ASGITransport

from journal_app.main import app
from journal_app.prompts import JOURNAL_PROMPTS
from journal_app.services.db import get_db
from journal_app.services.completion import DayWindow
from journal_app.services.journal_store import JournalStore, to_iso
from journal_app.dependencies import get_current_user, get_day_window


USER_ID = "user_001"
OTHER_USER_ID = "user_002"

# fixed "now" for service tests: 2025-06-10 15:30 utc
NOW = datetime(2025, 6, 10, 15, 30, tzinfo=timezone.utc)
YESTERDAY = NOW - timedelta(days=1)

QUESTIONS = [p.question for p in JOURNAL_PROMPTS]


def make_entry(
    prompt: str,
    created_at: datetime,
    user_id: str = USER_ID,
    completed: bool = False,
    answer: str = "I feel good today.",
) -> dict:
    """journal_entries document as the store holds it"""
    created = to_iso(created_at)
    return {
        "_id": ObjectId(),
        "entry_id": hashlib.md5(f"{user_id}:{prompt}:{created}".encode()).hexdigest()[:12],
        "user_id": user_id,
        "prompt": prompt,
        "answer": answer,
        "ai_response": "Thanks for sharing.",
        "metadata": {
            "emotional_themes": [],
            "key_topics": ["emotion"],
            "word_count": len(answer.split()),
            "timestamp": created,
            "prompt_category": "general",
            "sentiment_indicators": {"positive": 1, "negative": 0, "neutral": 3, "intensity": 0},
        },
        "completed": completed,
        "created_at": created,
    }


def full_day(created_at: datetime, completed: bool = False, user_id: str = USER_ID) -> list[dict]:
    """one entry per catalog prompt, a second apart"""
    return [
        make_entry(q, created_at + timedelta(seconds=i), user_id=user_id, completed=completed)
        for i, q in enumerate(QUESTIONS)
    ]


# async cursor mock

class AsyncCursorMock:
    """mock for motor's async cursor — supports async for and chained methods"""

    def __init__(self, data=None):
        self._data = data or []
        self._index = 0

    def sort(self, key, direction=1):
        self._data = sorted(self._data, key=lambda d: d.get(key) or "", reverse=direction == -1)
        return self

    def skip(self, n):
        self._data = self._data[n:]
        return self

    def limit(self, n):
        self._data = self._data[:n]
        return self

    def __aiter__(self):
        self._index = 0
        return self

    async def __anext__(self):
        if self._index >= len(self._data):
            raise StopAsyncIteration
        item = self._data[self._index]
        self._index += 1
        return item

    async def to_list(self, length=None):
        if length is not None:
            return self._data[:length]
        return self._data


class MockCollection:
    """mock for a motor collection with async methods.
    add method names to fail_on to make them raise PyMongoError."""

    def __init__(self, data=None):
        self._data = data or []
        self.inserted = []
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def _call(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise PyMongoError(f"injected {name} failure")

    def find(self, query=None, projection=None):
        self._call("find")
        results = self._data
        if query:
            results = [d for d in results if self._matches(d, query)]
        return AsyncCursorMock([dict(d) for d in results])

    async def find_one(self, query=None, projection=None):
        self._call("find_one")
        for doc in self._data:
            if not query or self._matches(doc, query):
                return dict(doc)
        return None

    async def insert_one(self, doc):
        self._call("insert_one")
        oid = doc.get("_id", ObjectId())
        doc["_id"] = oid
        self._data.append(dict(doc))
        self.inserted.append(doc)
        result = MagicMock()
        result.inserted_id = oid
        return result

    async def update_one(self, query, update, upsert=False):
        self._call("update_one")
        result = MagicMock()
        result.matched_count = 0
        result.modified_count = 0
        for doc in self._data:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                result.matched_count = 1
                result.modified_count = 1
                return result
        if upsert:
            doc = {k: v for k, v in query.items() if not isinstance(v, dict)}
            doc.update(update.get("$set", {}))
            doc["_id"] = ObjectId()
            self._data.append(doc)
        return result

    async def update_many(self, query, update):
        self._call("update_many")
        result = MagicMock()
        result.matched_count = 0
        result.modified_count = 0
        for doc in self._data:
            if self._matches(doc, query):
                result.matched_count += 1
                changes = update.get("$set", {})
                if any(doc.get(k) != v for k, v in changes.items()):
                    result.modified_count += 1
                doc.update(changes)
        return result

    async def create_index(self, *args, **kwargs):
        return "mock_index"

    def _matches(self, doc, query):
        """basic mongodb query matching for tests"""
        for key, value in query.items():
            doc_val = doc.get(key)
            if isinstance(value, dict):
                if "$in" in value and doc_val not in value["$in"]:
                    return False
                if "$gte" in value and (doc_val is None or doc_val < value["$gte"]):
                    return False
                if "$lte" in value and (doc_val is None or doc_val > value["$lte"]):
                    return False
            elif doc_val != value:
                return False
        return True


class MockDatabase:
    """mock database that mimics the Database class"""

    def __init__(self):
        self.journal_entries = MockCollection([])
        self.user_stats = MockCollection([])

    async def connect(self):
        pass

    async def close(self):
        pass


@pytest.fixture
def mock_db():
    """create a fresh mock database for each test"""
    return MockDatabase()


@pytest.fixture
def store(mock_db):
    return JournalStore(mock_db)


@pytest.fixture
def catalog():
    return JOURNAL_PROMPTS


@pytest.fixture
def window():
    """today in utc, ending at NOW"""
    return DayWindow.today("UTC", now=NOW)


@pytest_asyncio.fixture
async def client(mock_db):
    """httpx async test client with mocked database, no auth override"""

    async def override_get_db():
        return mock_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_client(mock_db):
    """client authenticated as USER_ID, today in utc"""

    async def override_get_db():
        return mock_db

    async def override_get_current_user():
        return {"id": USER_ID}

    def override_get_day_window():
        return DayWindow.today("UTC")

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_day_window] = override_get_day_window

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
