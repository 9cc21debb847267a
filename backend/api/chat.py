# Role: Thin HTTP adapter for the chat endpoint. Validates request/response shapes and delegates the entire
# conversation turn to FlowController (business logic lives in core, not in the API layer).

from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.api.deps import get_flow_controller
from backend.core.errors import ConfigurationError, MessageValidationError, ProviderError
from backend.core.flow_controller import FlowController
from backend.models.message import Message
from backend.models.user_datetime import UserDateTime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


class ChatRequest(BaseModel):
    # Key line: untrusted fields accept anything; core validation and sanitizing decide (400 or drop), never a 422.
    message: Optional[Any] = None
    conversation_history: Optional[Any] = None
    conversation_id: Optional[str] = None
    user_datetime: Optional[Any] = None


class ChatResponse(BaseModel):
    response: str
    response_id: Optional[str] = None
    conversation_id: Optional[str] = None
    conversation_history: List[Message] = Field(default_factory=list)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/chat", response_model=ChatResponse)
def chat(req: ChatRequest, flow: FlowController = Depends(get_flow_controller)):
    # 1) Forward the turn to the orchestrator
    # 2) Map error kinds to status codes (config 500, validation 400, provider 500)
    try:
        result = flow.handle_turn(
            req.message,
            conversation_history=req.conversation_history,
            conversation_id=req.conversation_id,
            user_datetime=UserDateTime.from_untrusted(req.user_datetime),
        )
    except ConfigurationError as e:
        logger.error("%s", e)
        return _error(e.status_code, str(e))
    except MessageValidationError as e:
        return _error(e.status_code, str(e))
    except ProviderError as e:
        return _error(e.status_code, f"Sorry, an error occurred: {e}")

    return ChatResponse(**result.to_payload())
