# daily completion — which prompts a user answered today and the switch to completed
# a day is completed only when every catalog question has an answer, flipped as one batch

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from journal_app.models.prompt import JournalPrompt
from journal_app.services.errors import (
    BatchCompletionError,
    ErrorPolicy,
    IncompleteSubmissionError,
    run_with_policy,
)
from journal_app.services.journal_store import JournalStore
from journal_app.services.stats_service import refresh_user_stats

logger = logging.getLogger(__name__)

STATE_OPEN = "open"
STATE_READY = "ready_to_complete"
STATE_COMPLETED = "completed"


@dataclass(frozen=True)
class DayWindow:
    """local midnight of the current day up to now"""
    start: datetime
    end: datetime

    @property
    def tz(self) -> tzinfo:
        return self.start.tzinfo or timezone.utc

    @classmethod
    def today(cls, tz_name: str = "UTC", now: Optional[datetime] = None) -> "DayWindow":
        tz = ZoneInfo(tz_name)
        local_now = (now or datetime.now(timezone.utc)).astimezone(tz)
        start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        return cls(start=start, end=local_now)


async def _todays_entries(store: JournalStore, user_id: str, window: DayWindow, **kwargs) -> list[dict]:
    return await store.find_entries(user_id, since=window.start, until=window.end, **kwargs)


async def can_submit_today(
    store: JournalStore,
    user_id: str,
    catalog: list[JournalPrompt],
    window: DayWindow,
) -> bool:
    """false once today is completed or every prompt has an answer.
    store read failures fail open so journaling is never blocked by them."""

    async def check() -> bool:
        done = await _todays_entries(store, user_id, window, completed=True, fields=["entry_id"], limit=1)
        if done:
            return False
        entries = await _todays_entries(store, user_id, window, fields=["prompt"])
        answered = {e["prompt"] for e in entries}
        return len(answered) < len(catalog)

    return await run_with_policy("can_submit_today", check, ErrorPolicy.FAIL_OPEN, default=True)


async def get_daily_progress(
    store: JournalStore,
    user_id: str,
    catalog: list[JournalPrompt],
    window: DayWindow,
) -> dict:
    """answered and remaining prompts for today plus the day state"""
    entries = await _todays_entries(store, user_id, window, fields=["prompt", "completed"])
    answered = {e["prompt"] for e in entries}
    questions = [p.question for p in catalog]
    remaining = [q for q in questions if q not in answered]

    if any(e.get("completed") for e in entries):
        state = STATE_COMPLETED
    elif not remaining:
        state = STATE_READY
    else:
        state = STATE_OPEN

    return {
        "state": state,
        "answered_prompts": [q for q in questions if q in answered],
        "remaining_prompts": remaining,
        "total_prompts": len(questions),
        "can_submit": state != STATE_COMPLETED and len(answered) < len(questions),
    }


async def complete_journal(
    store: JournalStore,
    user_id: str,
    catalog: list[JournalPrompt],
    window: DayWindow,
) -> int:
    """mark all of today's entries completed and refresh stats.

    raises IncompleteSubmissionError when a catalog question has no answer
    today. store errors, including a batch that matched fewer rows than
    requested, surface as PersistenceError. returns the number of entries
    completed.
    """
    entries = await run_with_policy(
        "complete_journal",
        lambda: _todays_entries(store, user_id, window, fields=["entry_id", "prompt"]),
        ErrorPolicy.SURFACE,
        default=[],
    )

    # coverage by membership, duplicate answers cannot stand in for a missing prompt
    answered = {e["prompt"] for e in entries}
    missing = [p.question for p in catalog if p.question not in answered]
    if len(entries) < len(catalog) or missing:
        logger.info(f"Completion refused for user {user_id}: {len(missing)} prompts unanswered")
        raise IncompleteSubmissionError(missing)

    entry_ids = [e["entry_id"] for e in entries]
    matched = await run_with_policy(
        "complete_journal",
        lambda: store.mark_completed(entry_ids),
        ErrorPolicy.SURFACE,
        default=0,
    )
    if matched != len(entry_ids):
        logger.error(f"Completion batch for user {user_id} matched {matched} of {len(entry_ids)} entries")
        raise BatchCompletionError(requested=len(entry_ids), matched=matched)

    logger.info(f"Journal completed for user {user_id}: {len(entry_ids)} entries")
    await refresh_user_stats(store, user_id, window.tz)
    return len(entry_ids)
