# daily journal prompt catalog
# every question must have an answer before a day can be completed

from journal_app.models.prompt import JournalPrompt

JOURNAL_PROMPTS: list[JournalPrompt] = [
    JournalPrompt(id="mood", question="How do you feel right now, and what shaped your mood today?"),
    JournalPrompt(id="gratitude", question="What are you grateful for today?"),
    JournalPrompt(id="challenge", question="What was the most difficult moment of your day?"),
    JournalPrompt(id="growth", question="What did you learn about yourself today?"),
    JournalPrompt(id="reflection", question="When you think about tomorrow, what matters most?"),
]


def get_prompt_catalog() -> list[JournalPrompt]:
    """dependency injection for the prompt catalog"""
    return JOURNAL_PROMPTS
