# Role: Sliding-window transcript. Owns validity filtering, FIFO truncation to the last N messages,
# and appending one (user, assistant) turn. Pure functions: the caller owns the transcript and passes it in/out.

from __future__ import annotations

import logging
from typing import Any, List

from backend.models.message import Message, MessageRejection, validate_message

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 50


def sanitize(history: Any) -> List[Message]:
    """Keep only entries with string content, in their original order."""
    # Key line: anything that is not a list of records (dict, str, number) counts as no history.
    if not isinstance(history, (list, tuple)):
        if history is not None:
            logger.debug("Ignoring non-list history of type %s", type(history).__name__)
        return []

    valid: List[Message] = []
    for entry in history:
        result = validate_message(entry)
        if isinstance(result, MessageRejection):
            logger.debug("Dropping history entry: %s", result.reason.value)
            continue
        valid.append(result)
    return valid


def window(history: List[Message], limit: int = DEFAULT_HISTORY_WINDOW) -> List[Message]:
    """Retain the last `limit` messages (oldest are evicted first)."""
    if limit <= 0:
        return []
    if len(history) <= limit:
        return list(history)
    return list(history[-limit:])


def append_turn(
    history: Any,
    user_message: str,
    assistant_message: str,
    limit: int = DEFAULT_HISTORY_WINDOW,
) -> List[Message]:
    # 1) Sanitize whatever the caller handed us
    # 2) Append user, then assistant
    # 3) Re-window so len(result) <= limit always holds
    # Not idempotent: calling twice for the same turn duplicates it.
    updated = sanitize(history)
    updated.append(Message(role="user", content=user_message))
    updated.append(Message(role="assistant", content=assistant_message))
    return window(updated, limit)
