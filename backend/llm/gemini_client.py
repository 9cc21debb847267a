# Role: Minimal wrapper around the Gemini Interactions API. Centralizes model name, hosted search tool,
# storage flag and error handling, so the rest of the code calls a single method: create_response(request).

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from google import genai

from backend.config import get_settings
from backend.core.errors import ProviderError
from backend.models.provider import (
    FlattenedOutput,
    OutputItem,
    ProviderRequest,
    ProviderResponse,
    StructuredOutput,
)

logger = logging.getLogger(__name__)

# Key line: Gemini calls the assistant side of a conversation "model".
_PROVIDER_ROLES = {"user": "user", "assistant": "model"}


class GeminiClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None) -> None:
        # Key lines:
        # - Reads secrets from env (no secrets in code); missing key -> ConfigurationError.
        # - Model is configurable for experiments.
        settings = get_settings()
        self.api_key = api_key or settings.require_api_key()
        self.model_name = model or settings.gemini_model

        self.client = genai.Client(api_key=self.api_key)

    def _split_input(self, request: ProviderRequest) -> Tuple[str, List[dict]]:
        # 1) input[0] is the injected instruction; it travels as system_instruction
        # 2) Later system entries (from history) are appended to the instruction, in order
        # 3) Everything else becomes a provider turn
        entries = list(request.input)
        if entries and entries[0].role == "system":
            entries = entries[1:]

        instruction_parts = [request.system_instruction]
        turns: List[dict] = []
        for entry in entries:
            if entry.role == "system":
                instruction_parts.append(entry.content)
            else:
                turns.append({"role": _PROVIDER_ROLES[entry.role], "content": entry.content})
        return "\n\n".join(instruction_parts), turns

    def create_response(self, request: ProviderRequest) -> ProviderResponse:
        # 1) Map the ordered input to provider turns
        # 2) Call Gemini with the hosted search tool (model decides when to search)
        # 3) Normalize the SDK object into our tagged-union response
        system_instruction, turns = self._split_input(request)
        try:
            interaction = self.client.interactions.create(
                model=request.model or self.model_name,
                system_instruction=system_instruction,
                input=turns,
                tools=request.tools,
                store=request.store,
            )
        except Exception as e:
            raise ProviderError(f"Gemini API call failed: {e}") from e

        return to_provider_response(interaction)


def to_provider_response(interaction: Any) -> ProviderResponse:
    response_id = getattr(interaction, "id", None)
    outputs = getattr(interaction, "outputs", None) or []

    texts = [
        getattr(o, "text", None)
        for o in outputs
        if getattr(o, "type", None) == "text" and isinstance(getattr(o, "text", None), str)
    ]
    flattened = "".join(texts)
    if flattened.strip():
        return ProviderResponse(response_id=response_id, output=FlattenedOutput(text=flattened))

    logger.debug("No flattened text in interaction %s; keeping %d raw outputs", response_id, len(outputs))
    items = [
        OutputItem(
            type=str(getattr(o, "type", None) or "unknown"),
            content=getattr(o, "text", None) if hasattr(o, "text") else getattr(o, "content", None),
        )
        for o in outputs
    ]
    return ProviderResponse(response_id=response_id, output=StructuredOutput(items=items))
