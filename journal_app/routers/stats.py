# stats router — journaling streak summary for the current user

from fastapi import APIRouter, Depends

from journal_app.dependencies import get_current_user, get_day_window, get_store
from journal_app.models.stats import JournalStatsResponse
from journal_app.services.completion import DayWindow
from journal_app.services.journal_store import JournalStore
from journal_app.services.stats_service import get_journal_stats

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=JournalStatsResponse)
async def get_stats(
    current_user: dict = Depends(get_current_user),
    store: JournalStore = Depends(get_store),
    window: DayWindow = Depends(get_day_window),
):
    """completed days and last entry date. display only, never fails"""
    return await get_journal_stats(store, current_user["id"], window.tz)
