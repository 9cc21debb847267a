# Role: Global system instruction for the search assistant, plus the optional "user clock" block
# that lets the model resolve relative time references ("tonight", "tomorrow") before searching.

from __future__ import annotations

from typing import Optional

from backend.models.user_datetime import UserDateTime

DEFAULT_SYSTEM_PREAMBLE = (
    "You are a helpful assistant with web search capabilities. When you need current information, "
    "facts, or data that might be outdated in your training, use web search to find up-to-date information."
)

DEFAULT_TIME_CONTEXT_TEMPLATE = """
IMPORTANT: Current date and time information for the user:
- Local date/time: {local_date_time}
- Timezone: {timezone}
- ISO timestamp: {timestamp}
- Unix timestamp: {unix_timestamp}

When the user asks about "tonight", "today", "tomorrow", etc., use the date/time information above to determine what they mean. For example, if they ask "who's playing in the NBA tonight?", use the local date/time to determine which date "tonight" refers to, then use web search to find "NBA games [specific date]" or "NBA schedule [specific date]". Always provide direct answers using web search results - don't ask the user for clarification when you have the date/time information and can search for the answer.
""".strip()


def _or_unknown(value: object) -> str:
    return "unknown" if value is None else str(value)


def build_system_prompt(
    preamble: str = DEFAULT_SYSTEM_PREAMBLE,
    time_context: Optional[UserDateTime] = None,
    template: str = DEFAULT_TIME_CONTEXT_TEMPLATE,
) -> str:
    if time_context is None:
        return preamble

    # Key line: partial snapshots render missing fields as "unknown".
    block = template.format(
        local_date_time=_or_unknown(time_context.local_date_time),
        timezone=_or_unknown(time_context.timezone),
        timestamp=_or_unknown(time_context.timestamp),
        unix_timestamp=_or_unknown(time_context.unix_timestamp),
    )
    return f"{preamble}\n\n{block}"
