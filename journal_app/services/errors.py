# journal error taxonomy and per-operation error policy
# store failures surface as PersistenceError, rule violations as IncompleteSubmissionError

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JournalError(Exception):
    """base class for journal service errors"""


class PersistenceError(JournalError):
    """a store read or write failed. the driver exception is kept as __cause__"""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"Journal store operation failed: {operation}")


class BatchCompletionError(PersistenceError):
    """the completion batch matched a different number of rows than requested"""

    def __init__(self, requested: int, matched: int):
        self.requested = requested
        self.matched = matched
        super().__init__(
            "mark_completed",
            f"Completion batch matched {matched} of {requested} entries",
        )


class IncompleteSubmissionError(JournalError):
    """not every prompt in the catalog has an answer today"""

    def __init__(self, missing_prompts: list[str]):
        self.missing_prompts = missing_prompts
        super().__init__("Please answer all journal prompts before completing")


class ErrorPolicy(str, Enum):
    """what an operation does with a failure from its store calls"""
    SURFACE = "surface"
    FAIL_OPEN = "fail_open"


async def run_with_policy(
    operation: str,
    call: Callable[[], Awaitable[T]],
    policy: ErrorPolicy,
    default: T,
    suppress: tuple[type[BaseException], ...] = (PersistenceError,),
) -> T:
    """await call() and apply the policy to errors listed in suppress.

    SURFACE re-raises unchanged, the store layer has already logged it.
    FAIL_OPEN logs a warning and returns default.
    """
    try:
        return await call()
    except suppress as e:
        if policy is ErrorPolicy.SURFACE:
            raise
        logger.warning(f"{operation} failed, using default {default!r}: {e}")
        return default
