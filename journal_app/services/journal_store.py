# journal store — the row primitives the journal services rely on
# insert one entry, filtered selects, batch completion by id list, user stats aggregate
# driver errors are re-raised as PersistenceError with the cause chained

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from pymongo.errors import PyMongoError

from journal_app.services.db import Database
from journal_app.services.errors import PersistenceError

logger = logging.getLogger(__name__)


def to_iso(dt: datetime) -> str:
    """utc iso-8601 with fixed microsecond precision so string ranges sort correctly"""
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


@contextmanager
def _store_errors(operation: str):
    try:
        yield
    except PyMongoError as e:
        logger.error(f"Journal store {operation} failed: {e}")
        raise PersistenceError(operation) from e


class JournalStore:
    """journal_entries and user_stats access over a motor database"""

    def __init__(self, db: Database):
        self.db = db

    async def insert_entry(self, doc: dict) -> dict:
        """insert one entry document and return it without the mongo _id"""
        with _store_errors("insert_entry"):
            await self.db.journal_entries.insert_one(doc)
        return {k: v for k, v in doc.items() if k != "_id"}

    async def find_entries(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        completed: Optional[bool] = None,
        fields: Optional[list[str]] = None,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """entries of one user, optionally limited to a created_at range and completion flag"""
        query: dict[str, Any] = {"user_id": user_id}
        created_at: dict[str, str] = {}
        if since is not None:
            created_at["$gte"] = to_iso(since)
        if until is not None:
            created_at["$lte"] = to_iso(until)
        if created_at:
            query["created_at"] = created_at
        if completed is not None:
            query["completed"] = completed

        projection = None
        if fields is not None:
            projection = {name: 1 for name in fields}
            projection["_id"] = 0

        with _store_errors("find_entries"):
            cursor = self.db.journal_entries.find(query, projection)
            cursor = cursor.sort("created_at", -1 if newest_first else 1)
            if limit is not None:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=None)

        for doc in docs:
            doc.pop("_id", None)
        return docs

    async def mark_completed(self, entry_ids: list[str]) -> int:
        """flip completed on every listed entry in one update call. returns matched count"""
        with _store_errors("mark_completed"):
            result = await self.db.journal_entries.update_many(
                {"entry_id": {"$in": entry_ids}},
                {"$set": {"completed": True}},
            )
        return result.matched_count

    async def get_user_stats(self, user_id: str) -> Optional[dict]:
        with _store_errors("get_user_stats"):
            return await self.db.user_stats.find_one({"user_id": user_id})

    async def upsert_user_stats(self, user_id: str, fields: dict) -> None:
        with _store_errors("upsert_user_stats"):
            await self.db.user_stats.update_one(
                {"user_id": user_id},
                {"$set": fields},
                upsert=True,
            )
