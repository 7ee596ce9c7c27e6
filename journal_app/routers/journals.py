# journals router — answer today's prompts, check progress, complete the day
# users only ever see and change their own entries

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from journal_app.dependencies import get_current_user, get_day_window, get_store
from journal_app.models.journal import (
    CanSubmitResponse,
    CompletionResponse,
    DailyProgressResponse,
    EntryMetadata,
    JournalEntryCreate,
    JournalEntryResponse,
)
from journal_app.models.prompt import JournalPrompt
from journal_app.prompts import get_prompt_catalog
from journal_app.services.completion import (
    DayWindow,
    can_submit_today,
    complete_journal,
    get_daily_progress,
)
from journal_app.services.errors import IncompleteSubmissionError, PersistenceError
from journal_app.services.journal_service import get_journal_history, save_journal_entry
from journal_app.services.journal_store import JournalStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/journals", tags=["journals"])


def _store_unavailable(e: PersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Journal storage is unavailable ({e.operation}), please try again",
    )


def _doc_to_entry(doc: dict) -> JournalEntryResponse:
    """convert a journal_entries document to response model"""
    metadata = doc.get("metadata")
    return JournalEntryResponse(
        id=doc.get("entry_id", ""),
        userId=doc.get("user_id", ""),
        prompt=doc.get("prompt", ""),
        answer=doc.get("answer", ""),
        aiResponse=doc.get("ai_response") or "",
        metadata=EntryMetadata(**metadata) if metadata else None,
        completed=bool(doc.get("completed", False)),
        createdAt=str(doc.get("created_at", "")),
    )


@router.get("", response_model=list[JournalEntryResponse])
async def list_journal_entries(
    current_user: dict = Depends(get_current_user),
    store: JournalStore = Depends(get_store),
):
    """journal history of the current user, newest first"""
    try:
        docs = await get_journal_history(store, current_user["id"])
    except PersistenceError as e:
        raise _store_unavailable(e)
    return [_doc_to_entry(doc) for doc in docs]


@router.post("", response_model=JournalEntryResponse, status_code=status.HTTP_201_CREATED)
async def submit_journal_entry(
    body: JournalEntryCreate,
    current_user: dict = Depends(get_current_user),
    store: JournalStore = Depends(get_store),
    catalog: list[JournalPrompt] = Depends(get_prompt_catalog),
    window: DayWindow = Depends(get_day_window),
):
    """save the answer to one of today's prompts"""

    if body.prompt not in {p.question for p in catalog}:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Prompt is not part of the daily journal",
        )

    if not await can_submit_today(store, current_user["id"], catalog, window):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="No more answers today: every prompt is answered or the journal is already complete",
        )

    try:
        doc = await save_journal_entry(
            store, current_user["id"], body.prompt, body.answer, body.ai_response
        )
    except PersistenceError as e:
        raise _store_unavailable(e)

    return _doc_to_entry(doc)


@router.get("/today", response_model=DailyProgressResponse)
async def get_today_progress(
    current_user: dict = Depends(get_current_user),
    store: JournalStore = Depends(get_store),
    catalog: list[JournalPrompt] = Depends(get_prompt_catalog),
    window: DayWindow = Depends(get_day_window),
):
    """answered and remaining prompts for today"""
    try:
        progress = await get_daily_progress(store, current_user["id"], catalog, window)
    except PersistenceError as e:
        raise _store_unavailable(e)

    return DailyProgressResponse(
        state=progress["state"],
        answeredPrompts=progress["answered_prompts"],
        remainingPrompts=progress["remaining_prompts"],
        totalPrompts=progress["total_prompts"],
        canSubmit=progress["can_submit"],
    )


@router.get("/can-submit", response_model=CanSubmitResponse)
async def check_can_submit(
    current_user: dict = Depends(get_current_user),
    store: JournalStore = Depends(get_store),
    catalog: list[JournalPrompt] = Depends(get_prompt_catalog),
    window: DayWindow = Depends(get_day_window),
):
    can_submit = await can_submit_today(store, current_user["id"], catalog, window)
    return CanSubmitResponse(canSubmit=can_submit)


@router.post("/complete", response_model=CompletionResponse)
async def complete_today(
    current_user: dict = Depends(get_current_user),
    store: JournalStore = Depends(get_store),
    catalog: list[JournalPrompt] = Depends(get_prompt_catalog),
    window: DayWindow = Depends(get_day_window),
):
    """mark today's journal completed once every prompt is answered"""
    try:
        count = await complete_journal(store, current_user["id"], catalog, window)
    except IncompleteSubmissionError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": str(e), "missingPrompts": e.missing_prompts},
        )
    except PersistenceError as e:
        raise _store_unavailable(e)

    return CompletionResponse(entriesCompleted=count)
