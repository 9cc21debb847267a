# backend/core/flow_controller.py
# Role: Orchestrator for one conversation turn. It glues together:
# validation, history windowing, request shaping, the provider call, answer normalization, and transcript update.
# Stateless: the caller owns the transcript and the conversation id, and gets updated copies back.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from backend.config import Settings, get_settings
from backend.core.errors import ChatError, ProviderError
from backend.core.history_manager import append_turn, sanitize, window
from backend.core.request_shaper import build_request, require_message
from backend.core.response_shaper import resolve_answer
from backend.llm.gemini_client import GeminiClient
from backend.models.message import Message
from backend.models.user_datetime import UserDateTime
from backend.prompts.system_prompt import DEFAULT_SYSTEM_PREAMBLE, DEFAULT_TIME_CONTEXT_TEMPLATE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnResult:
    response: str
    response_id: Optional[str]
    conversation_id: Optional[str]
    conversation_history: List[Message]

    def to_payload(self) -> dict:
        return {
            "response": self.response,
            "response_id": self.response_id,
            "conversation_id": self.conversation_id,
            "conversation_history": [m.as_dict() for m in self.conversation_history],
        }


class FlowController:
    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        settings: Optional[Settings] = None,
        client_factory: Optional[Callable[[], GeminiClient]] = None,
        system_preamble: str = DEFAULT_SYSTEM_PREAMBLE,
        time_context_template: str = DEFAULT_TIME_CONTEXT_TEMPLATE,
    ) -> None:
        # Key line: dependencies are injectable for testing/mocking.
        # Key line: lazy client init so a missing key surfaces per-request, not at import time.
        self._client = client
        self._client_factory = client_factory or GeminiClient
        self.settings = settings or get_settings()
        self.system_preamble = system_preamble
        self.time_context_template = time_context_template

    def _get_client(self) -> GeminiClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def handle_turn(
        self,
        message: Any,
        conversation_history: Any = None,
        conversation_id: Optional[str] = None,
        user_datetime: Optional[UserDateTime] = None,
    ) -> TurnResult:
        # 1) Short-circuit on configuration / validation errors (no provider call)
        # 2) Sanitize + window prior history
        # 3) Shape request, call provider (any failure -> ProviderError)
        # 4) Extract answer (fallback if empty), append the turn, resolve identity
        if self._client is None:
            self.settings.require_api_key()
        message = require_message(message)

        limit = self.settings.history_window
        prior = window(sanitize(conversation_history), limit)

        request = build_request(
            self.system_preamble,
            user_datetime,
            prior,
            message,
            model=self.settings.gemini_model,
            search_tool=self.settings.search_tool,
            store=self.settings.store_responses,
            time_context_template=self.time_context_template,
        )
        logger.info(
            "Incoming chat: conversation_id=%s history_messages=%d time_context=%s",
            conversation_id,
            len(prior),
            user_datetime is not None,
        )

        try:
            provider_response = self._get_client().create_response(request)
        except ChatError:
            logger.exception("Provider call failed")
            raise
        except Exception as e:
            logger.exception("Provider call failed")
            raise ProviderError(str(e) or "Unknown error occurred") from e

        resolved = resolve_answer(provider_response)
        answer, response_id = resolved.text, resolved.response_id

        if resolved.used_fallback and not self.settings.keep_fallback_turns:
            updated = prior
        else:
            updated = append_turn(prior, message, answer, limit)

        logger.info("Model responded: response_id=%s chars=%d", response_id, len(answer))
        return TurnResult(
            response=answer,
            response_id=response_id,
            conversation_id=conversation_id or response_id,
            conversation_history=updated,
        )
