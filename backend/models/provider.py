# Role: Typed contract with the remote LLM provider. ProviderRequest is what we send;
# ProviderResponse wraps the provider's dual-shaped answer as a tagged union (flattened text vs structured list),
# so the response shaper normalizes it in one place instead of probing optional fields.

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from backend.models.message import Role


class InputEntry(BaseModel):
    role: Role
    content: str


class ProviderRequest(BaseModel):
    model: str
    system_instruction: str
    input: List[InputEntry]
    tools: List[dict] = Field(default_factory=lambda: [{"type": "google_search"}])
    # Gemini only supports automatic choice for hosted search, so this is informational.
    tool_choice: Literal["auto"] = "auto"
    # Key line: ask the provider to keep the exchange (durable storage on its side).
    store: bool = True


class OutputItem(BaseModel):
    type: str = "text"
    # Provider content may be text or a nested structure; only text is displayable.
    content: Any = None


class FlattenedOutput(BaseModel):
    kind: Literal["flattened"] = "flattened"
    text: Optional[str] = None


class StructuredOutput(BaseModel):
    kind: Literal["structured"] = "structured"
    items: List[OutputItem] = Field(default_factory=list)


ProviderOutput = Annotated[Union[FlattenedOutput, StructuredOutput], Field(discriminator="kind")]


class ProviderResponse(BaseModel):
    response_id: Optional[str] = None
    output: ProviderOutput = Field(default_factory=StructuredOutput)
