# Role: Single chat message schema for conversation_history, plus the validation step that turns an untrusted
# record (from the client) into either a Message or a MessageRejection. Nothing here raises on bad input.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Union, get_args

from pydantic import BaseModel

Role = Literal["system", "user", "assistant"]

_ROLES = set(get_args(Role))


class Message(BaseModel):
    role: Role
    content: str

    def as_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


class RejectionReason(str, Enum):
    MISSING_ENTRY = "missing_entry"
    NOT_A_RECORD = "not_a_record"
    MISSING_CONTENT = "missing_content"
    CONTENT_NOT_TEXT = "content_not_text"


@dataclass(frozen=True)
class MessageRejection:
    reason: RejectionReason
    entry: Any = None


_ROLE_ALIASES = {"human": "user", "ai": "assistant", "bot": "assistant", "model": "assistant"}


def normalize_role(raw_role: Any) -> Role:
    # Known roles and common aliases map through; anything else (missing, "tool", ...) is treated as user text.
    if isinstance(raw_role, str):
        role = raw_role.strip().lower()
        if role in _ROLES:
            return role
        if role in _ROLE_ALIASES:
            return _ROLE_ALIASES[role]
    return "user"


def validate_message(raw: Any) -> Union[Message, MessageRejection]:
    # 1) Already-typed messages pass through
    # 2) Records must carry string content (None / missing / non-str are rejected)
    # 3) Role never rejects an entry: it is normalized separately
    if isinstance(raw, Message):
        return raw
    if raw is None:
        return MessageRejection(RejectionReason.MISSING_ENTRY)

    if isinstance(raw, dict):
        role = raw.get("role")
        has_content = "content" in raw
        content = raw.get("content")
    elif isinstance(raw, BaseModel):
        role = getattr(raw, "role", None)
        has_content = hasattr(raw, "content")
        content = getattr(raw, "content", None)
    else:
        return MessageRejection(RejectionReason.NOT_A_RECORD, raw)

    if not has_content or content is None:
        return MessageRejection(RejectionReason.MISSING_CONTENT, raw)
    if not isinstance(content, str):
        return MessageRejection(RejectionReason.CONTENT_NOT_TEXT, raw)

    return Message(role=normalize_role(role), content=content)
