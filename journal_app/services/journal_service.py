# journal entry writer — scores an answer and stores it as an open entry
# metadata is computed once here and never rewritten

import hashlib
import logging
from datetime import datetime, timezone
from typing import Optional

from journal_app.services.journal_store import JournalStore, to_iso
from journal_app.services.lexical import (
    THEME_LABELS,
    TOPIC_LABELS,
    analyze_sentiment,
    categorize_prompt,
    count_words,
    extract_emotional_themes,
    extract_key_topics,
    ordered,
)

logger = logging.getLogger(__name__)


def build_metadata(prompt: str, answer: str, timestamp: str) -> dict:
    """entry metadata document for one answer"""
    return {
        "emotional_themes": ordered(extract_emotional_themes(answer), THEME_LABELS),
        "key_topics": ordered(extract_key_topics(answer), TOPIC_LABELS),
        "word_count": count_words(answer),
        "timestamp": timestamp,
        "prompt_category": categorize_prompt(prompt),
        "sentiment_indicators": dict(analyze_sentiment(answer)),
    }


async def save_journal_entry(
    store: JournalStore,
    user_id: str,
    prompt: str,
    answer: str,
    ai_response: str,
    now: Optional[datetime] = None,
) -> dict:
    """persist one answer with completed=False. PersistenceError propagates"""
    created_at = to_iso(now or datetime.now(timezone.utc))

    # entry_id is md5 of user + prompt + timestamp
    raw = f"{user_id}:{prompt}:{created_at}"
    entry_id = hashlib.md5(raw.encode()).hexdigest()[:12]

    doc = {
        "entry_id": entry_id,
        "user_id": user_id,
        "prompt": prompt,
        "answer": answer,
        "ai_response": ai_response,
        "metadata": build_metadata(prompt, answer, created_at),
        "completed": False,
        "created_at": created_at,
    }

    entry = await store.insert_entry(doc)
    logger.info(f"Journal entry saved: {entry_id} for user {user_id}")
    return entry


async def get_journal_history(store: JournalStore, user_id: str) -> list[dict]:
    """all entries of a user, newest first"""
    return await store.find_entries(user_id, newest_first=True)
