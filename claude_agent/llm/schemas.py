"""Provider-neutral DTOs exchanged between the chat driver and LLM backends.

Backends translate these to and from their own wire format; nothing in
here knows about any particular provider.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single transcript entry."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    def to_api(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


class LLMRequest(BaseModel):
    """System prompt plus a snapshot of the transcript for one call.

    ``messages`` is stored as a tuple so later transcript mutations in the
    driver never leak into an in-flight request.
    """

    model_config = ConfigDict(frozen=True)

    system_prompt: str
    messages: tuple[Message, ...]


class LLMResponse(BaseModel):
    """Complete (non-streamed) reply with provider-reported token usage."""

    model_config = ConfigDict(frozen=True)

    content: str = ""
    input_tokens: int = Field(0, ge=0)
    output_tokens: int = Field(0, ge=0)
