# prompts router — the daily question catalog, in answer order

from fastapi import APIRouter, Depends

from journal_app.models.prompt import JournalPrompt
from journal_app.prompts import get_prompt_catalog

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("", response_model=list[JournalPrompt])
async def list_prompts(catalog: list[JournalPrompt] = Depends(get_prompt_catalog)):
    return catalog
