# lexical feature extraction for journal answers
# static keyword tables map free text to themes, topics, sentiment and prompt category
# every function is pure and total over str input

import re
from typing import TypedDict

# (label, keywords) pairs. declaration order is the label order used in metadata
EMOTIONAL_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("joy", ("happy", "excited", "grateful", "love", "wonderful", "amazing", "delighted")),
    ("sadness", ("sad", "disappointed", "hurt", "lonely", "depressed", "down")),
    ("anger", ("angry", "frustrated", "annoyed", "upset", "irritated")),
    ("fear", ("afraid", "worried", "anxious", "nervous", "scared")),
    ("hope", ("hopeful", "optimistic", "looking forward", "excited about", "confident")),
    ("growth", ("learning", "improving", "growing", "developing", "progress", "better")),
)

TOPIC_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("reflection", ("think", "reflect", "realize", "understand", "wonder")),
    ("emotion", ("feel", "emotion", "mood", "heart")),
    ("growth", ("learn", "grow", "improve", "change", "better")),
    ("goals", ("want", "goal", "plan", "future", "hope")),
    ("relationships", ("friend", "family", "relationship", "people")),
    ("challenges", ("difficult", "challenge", "hard", "struggle")),
    ("gratitude", ("grateful", "thankful", "appreciate", "blessed")),
    ("mindfulness", ("present", "moment", "aware", "notice", "mindful")),
)

# first match wins, so this order is part of the behaviour
PROMPT_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("reflection", ("reflect", "think about", "remember", "recall")),
    ("emotion", ("feel", "emotion", "mood", "happy", "sad")),
    ("growth", ("learn", "improve", "grow", "change", "goal")),
    ("gratitude", ("grateful", "thankful", "appreciate")),
    ("challenge", ("challenge", "difficult", "overcome", "struggle")),
)
DEFAULT_CATEGORY = "general"

POSITIVE_WORDS = frozenset({
    "good", "great", "happy", "excited", "love", "wonderful", "amazing",
    "grateful", "thankful", "blessed", "joy", "delighted", "peaceful",
})

NEGATIVE_WORDS = frozenset({
    "bad", "sad", "angry", "upset", "hate", "terrible", "awful",
    "disappointed", "frustrated", "worried", "anxious", "stressed",
})

INTENSIFIERS = frozenset({
    "very", "really", "extremely", "absolutely", "totally", "completely",
    "deeply", "strongly", "highly", "incredibly",
})

THEME_LABELS = tuple(label for label, _ in EMOTIONAL_KEYWORDS)
TOPIC_LABELS = tuple(label for label, _ in TOPIC_KEYWORDS)

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


class SentimentTally(TypedDict):
    positive: int
    negative: int
    neutral: int
    intensity: int


def _matching_labels(text: str, table: tuple[tuple[str, tuple[str, ...]], ...]) -> set[str]:
    return {label for label, keywords in table if any(k in text for k in keywords)}


def extract_emotional_themes(text: str) -> set[str]:
    """themes whose keywords appear anywhere in the lower-cased text"""
    return _matching_labels(text.lower(), EMOTIONAL_KEYWORDS)


def extract_key_topics(text: str) -> set[str]:
    """topics matched sentence by sentence. one matching sentence is enough"""
    topics: set[str] = set()
    for sentence in _SENTENCE_BOUNDARY.split(text):
        sentence = sentence.lower().strip()
        if not sentence:
            continue
        topics |= _matching_labels(sentence, TOPIC_KEYWORDS)
    return topics


def analyze_sentiment(text: str) -> SentimentTally:
    """count positive, negative and neutral tokens.

    tokens are whitespace-separated and compared by exact equality after
    lower-casing. an intensifier adds to intensity and doubles the weight of
    the next non-intensifier token if that token is positive or negative.
    """
    tally: SentimentTally = {"positive": 0, "negative": 0, "neutral": 0, "intensity": 0}
    intensified = False

    for word in text.lower().split():
        if word in INTENSIFIERS:
            tally["intensity"] += 1
            intensified = True
            continue

        weight = 2 if intensified else 1
        if word in POSITIVE_WORDS:
            tally["positive"] += weight
        elif word in NEGATIVE_WORDS:
            tally["negative"] += weight
        else:
            tally["neutral"] += 1
        intensified = False

    return tally


def categorize_prompt(prompt: str) -> str:
    """category of the first table row with a keyword in the prompt, else general"""
    lowered = prompt.lower()
    for category, keywords in PROMPT_CATEGORIES:
        if any(k in lowered for k in keywords):
            return category
    return DEFAULT_CATEGORY


def count_words(text: str) -> int:
    """whitespace-separated word count. empty or blank text counts as 0"""
    return len(text.split())


def ordered(labels: set[str], universe: tuple[str, ...]) -> list[str]:
    """labels as a list in table declaration order"""
    return [label for label in universe if label in labels]
