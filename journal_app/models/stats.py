# stats models — per-user journaling summary shown on the home screen

from typing import Optional
from pydantic import BaseModel, Field


class JournalStatsResponse(BaseModel):
    """completed journaling days and the most recent completed entry"""
    total_entries: int = Field(0, ge=0, alias="totalEntries")
    last_entry_date: Optional[str] = Field(None, alias="lastEntryDate")

    model_config = {"populate_by_name": True}
