# prompt models — the fixed daily question catalog

from pydantic import BaseModel, Field


class JournalPrompt(BaseModel):
    """one question of the daily journal"""
    id: str
    question: str = Field(..., min_length=1)
