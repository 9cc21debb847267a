# Role: Outbound payload assembly. Produces the ordered provider input:
# [system instruction (+ time context)] + windowed history (oldest first) + the new user message.

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from backend.core.errors import MessageValidationError
from backend.models.message import Message
from backend.models.provider import InputEntry, ProviderRequest
from backend.models.user_datetime import UserDateTime
from backend.prompts.system_prompt import DEFAULT_TIME_CONTEXT_TEMPLATE, build_system_prompt


def require_message(message: Any) -> str:
    if message is None or not isinstance(message, str) or not message.strip():
        raise MessageValidationError("Message is required")
    return message


def build_request(
    system_preamble: str,
    time_context: Optional[UserDateTime],
    history: Iterable[Message],
    new_message: str,
    *,
    model: str,
    search_tool: str = "google_search",
    store: bool = True,
    time_context_template: str = DEFAULT_TIME_CONTEXT_TEMPLATE,
) -> ProviderRequest:
    # 1) Reject empty input (callers should have done this already)
    # 2) System entry first, history next, new user message last
    # 3) Hosted search tool in auto mode + durable storage on the provider side
    require_message(new_message)

    system_instruction = build_system_prompt(
        preamble=system_preamble,
        time_context=time_context,
        template=time_context_template,
    )

    entries: List[InputEntry] = [InputEntry(role="system", content=system_instruction)]
    entries.extend(InputEntry(role=m.role, content=m.content) for m in history)
    entries.append(InputEntry(role="user", content=new_message))

    return ProviderRequest(
        model=model,
        system_instruction=system_instruction,
        input=entries,
        tools=[{"type": search_tool}],
        tool_choice="auto",
        store=store,
    )
