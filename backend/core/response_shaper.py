# Role: Inbound normalization. Turns the provider's tagged-union output into one displayable string,
# substituting a fixed apology when the answer is empty (a warning, never an error).

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from backend.models.provider import FlattenedOutput, ProviderResponse, StructuredOutput

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = "I apologize, but I didn't receive a valid response. Please try again."


def _item_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    # Key line: some providers nest text parts; take the first textual one.
    if isinstance(content, list):
        for part in content:
            if isinstance(part, str):
                return part
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                return part["text"]
    if isinstance(content, dict) and isinstance(content.get("text"), str):
        return content["text"]
    return ""


def _raw_answer(response: ProviderResponse) -> str:
    output = response.output
    if isinstance(output, FlattenedOutput) and output.text and output.text.strip():
        return output.text
    if isinstance(output, StructuredOutput) and output.items:
        return _item_text(output.items[0].content)
    return ""


@dataclass(frozen=True)
class ResolvedAnswer:
    text: str
    response_id: Optional[str]
    # Key line: set only when FALLBACK_RESPONSE was substituted, never inferred from the text.
    used_fallback: bool = False


def resolve_answer(response: ProviderResponse) -> ResolvedAnswer:
    text = _raw_answer(response)
    if not text.strip():
        logger.warning(
            "Empty or null response from provider (response_id=%s), using fallback",
            response.response_id,
        )
        return ResolvedAnswer(FALLBACK_RESPONSE, response.response_id, used_fallback=True)
    return ResolvedAnswer(text, response.response_id)


def extract_answer(response: ProviderResponse) -> Tuple[str, Optional[str]]:
    """Return (answer text, provider response id); empty answers become FALLBACK_RESPONSE."""
    answer = resolve_answer(response)
    return answer.text, answer.response_id
