"""Shared fixtures: temp API key file, settings, and a scripted LLM backend."""

import pytest

from claude_agent.config import AgentConfig
from claude_agent.llm.base import LLM, LLMError
from claude_agent.llm.schemas import LLMRequest, LLMResponse

TEST_API_KEY = "sk-ant-test-key-123"


# ---------------------------------------------------------------------------
# Scripted backend
# ---------------------------------------------------------------------------


class ScriptedLLM(LLM):
    """Returns queued LLMResponses (or raises queued exceptions) in order.

    Records every request it receives so tests can inspect what the
    driver sent.
    """

    def __init__(self, *outcomes: LLMResponse | Exception) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[LLMRequest] = []
        self.closed = False

    async def invoke(self, request: LLMRequest) -> LLMResponse:
        self.requests.append(request)
        if not self._outcomes:
            raise LLMError("no scripted response left")
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


def reply(content: str = "OK", input_tokens: int = 10, output_tokens: int = 5) -> LLMResponse:
    return LLMResponse(content=content, input_tokens=input_tokens, output_tokens=output_tokens)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def key_file(tmp_path):
    """API key file with surrounding whitespace, as people tend to save them."""
    path = tmp_path / "anthropic1"
    path.write_text(f"  {TEST_API_KEY}\n\n")
    return path


@pytest.fixture
def config(key_file) -> AgentConfig:
    return AgentConfig(
        key_file_path=key_file,
        model="claude-3-5-sonnet-20240620",
        max_tokens=1024,
        temperature=0.5,
    )
