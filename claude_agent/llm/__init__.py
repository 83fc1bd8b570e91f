"""LLM abstraction layer."""

from claude_agent.llm.anthropic import AnthropicProvider
from claude_agent.llm.base import LLM, LLMError
from claude_agent.llm.schemas import LLMRequest, LLMResponse, Message, Role

__all__ = [
    "AnthropicProvider",
    "LLM",
    "LLMError",
    "LLMRequest",
    "LLMResponse",
    "Message",
    "Role",
]
