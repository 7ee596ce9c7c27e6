# journal models — answer submission, stored entry and daily progress schemas
# metadata is derived once at write time by the lexical extractor

from typing import Optional, Literal
from pydantic import BaseModel, Field


class SentimentIndicators(BaseModel):
    """token tallies from the keyword sentiment pass"""
    positive: int = Field(0, ge=0)
    negative: int = Field(0, ge=0)
    neutral: int = Field(0, ge=0)
    intensity: int = Field(0, ge=0)


class EntryMetadata(BaseModel):
    """write-once features extracted from an answer"""
    emotional_themes: list[str] = Field(default_factory=list, alias="emotionalThemes")
    key_topics: list[str] = Field(default_factory=list, alias="keyTopics")
    word_count: int = Field(0, ge=0, alias="wordCount")
    timestamp: str
    prompt_category: str = Field("general", alias="promptCategory")
    sentiment_indicators: SentimentIndicators = Field(
        default_factory=SentimentIndicators, alias="sentimentIndicators"
    )

    model_config = {"populate_by_name": True}


class JournalEntryCreate(BaseModel):
    """payload for answering one prompt of today's journal"""
    prompt: str = Field(..., min_length=1, description="catalog question being answered")
    answer: str = Field(..., max_length=10000, description="answer text")
    ai_response: str = Field("", alias="aiResponse", description="reply produced by the ai responder")

    model_config = {"populate_by_name": True}


class JournalEntryResponse(BaseModel):
    """stored journal entry from the journal_entries collection"""
    id: str
    user_id: str = Field(..., alias="userId")
    prompt: str
    answer: str
    ai_response: str = Field("", alias="aiResponse")
    metadata: Optional[EntryMetadata] = None
    completed: bool = False
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}


class DailyProgressResponse(BaseModel):
    """what has been answered today and whether the day can still change"""
    state: Literal["open", "ready_to_complete", "completed"]
    answered_prompts: list[str] = Field(default_factory=list, alias="answeredPrompts")
    remaining_prompts: list[str] = Field(default_factory=list, alias="remainingPrompts")
    total_prompts: int = Field(0, alias="totalPrompts")
    can_submit: bool = Field(True, alias="canSubmit")

    model_config = {"populate_by_name": True}


class CanSubmitResponse(BaseModel):
    can_submit: bool = Field(..., alias="canSubmit")

    model_config = {"populate_by_name": True}


class CompletionResponse(BaseModel):
    """response after all of today's entries were marked completed"""
    completed: bool = True
    entries_completed: int = Field(0, alias="entriesCompleted")
    message: str = "Today's journal is complete."

    model_config = {"populate_by_name": True}
