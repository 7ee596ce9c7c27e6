# journal stats — completed journaling days and last entry date per user
# reads the user_stats aggregate, recomputes from completed entries when that read fails

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Optional

from journal_app.models.stats import JournalStatsResponse
from journal_app.services.errors import ErrorPolicy, PersistenceError, run_with_policy
from journal_app.services.journal_store import JournalStore, to_iso

logger = logging.getLogger(__name__)


def _local_date(created_at: str, tz: tzinfo) -> date:
    dt = datetime.fromisoformat(str(created_at).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz).date()


def _as_iso(value) -> Optional[str]:
    """timestamps may be stored as bson datetimes (naive utc) or iso strings"""
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return to_iso(value)
    return str(value)


async def _stats_from_entries(store: JournalStore, user_id: str, tz: tzinfo) -> JournalStatsResponse:
    """count distinct calendar days among completed entries"""
    entries = await store.find_entries(
        user_id, completed=True, fields=["created_at"], newest_first=True
    )
    days = {_local_date(e["created_at"], tz) for e in entries if e.get("created_at")}
    last_entry_date = _as_iso(entries[0].get("created_at")) if entries else None
    return JournalStatsResponse(totalEntries=len(days), lastEntryDate=last_entry_date)


async def get_journal_stats(
    store: JournalStore, user_id: str, tz: tzinfo = timezone.utc
) -> JournalStatsResponse:
    """stats for display. never raises, falls back to a zero summary"""

    async def read_stats() -> JournalStatsResponse:
        try:
            stats = await store.get_user_stats(user_id)
        except PersistenceError as e:
            logger.warning(f"user_stats unavailable for {user_id}, recomputing from entries: {e}")
            return await _stats_from_entries(store, user_id, tz)

        if not stats:
            return JournalStatsResponse()
        return JournalStatsResponse(
            totalEntries=stats.get("total_entries") or 0,
            lastEntryDate=_as_iso(stats.get("last_entry_date")),
        )

    return await run_with_policy(
        "get_journal_stats",
        read_stats,
        ErrorPolicy.FAIL_OPEN,
        default=JournalStatsResponse(),
        suppress=(Exception,),
    )


async def refresh_user_stats(store: JournalStore, user_id: str, tz: tzinfo = timezone.utc) -> None:
    """recompute the user_stats aggregate from completed entries and upsert it.
    failures are logged only, the completed entries are already stored."""
    try:
        summary = await _stats_from_entries(store, user_id, tz)
        await store.upsert_user_stats(user_id, {
            "total_entries": summary.total_entries,
            "last_entry_date": summary.last_entry_date,
            "updated_at": to_iso(datetime.now(timezone.utc)),
        })
        logger.info(f"Stats refreshed for user {user_id}: {summary.total_entries} completed days")
    except Exception as e:
        # non-critical — the next refresh or fallback read recomputes
        logger.warning(f"Could not refresh stats for {user_id}: {e}")
