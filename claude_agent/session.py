"""Conversation driver -- owns the transcript, token totals and terminal loop.

Talks to the model only through the LLM interface, so any backend can be
plugged in without touching the loop.

State machine per session:
    IDLE --empty line--> IDLE
    IDLE --exit/quit--> TERMINATED
    IDLE --message--> IN_FLIGHT --success|failure--> IDLE
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TextIO

from claude_agent.config import DEFAULT_SYSTEM_PROMPT
from claude_agent.llm.base import LLM, LLMError
from claude_agent.llm.schemas import LLMRequest, LLMResponse, Message, Role
from claude_agent.usage import UsageTotals, format_accounting_line, token_cost

logger = logging.getLogger(__name__)

PROMPT = "You: "
EXIT_COMMANDS = frozenset({"exit", "quit"})

BANNER = (
    "Claude Agent - Interactive Mode (Cost Tracking Enabled)\n"
    "Type 'exit' or 'quit' to end the conversation.\n"
)


class SessionPhase(StrEnum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    TERMINATED = "terminated"


@dataclass
class SessionState:
    """Mutable per-session data. Only ChatSession mutates it, between turns."""

    messages: list[Message] = field(default_factory=list)
    usage: UsageTotals = field(default_factory=UsageTotals)
    phase: SessionPhase = SessionPhase.IDLE


class ChatSession:
    """Runs a single conversation against an LLM backend.

    Terminal I/O is injectable: ``read_line`` is called with the prompt and
    must return one line (``input`` by default), output goes to ``stdout``
    and errors to ``stderr``.
    """

    def __init__(
        self,
        llm: LLM,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        *,
        read_line: Callable[[str], str] = input,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._llm = llm
        self._system_prompt = system_prompt
        self._read_line = read_line
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self.state = SessionState()

    def _print(self, text: str = "") -> None:
        print(text, file=self._stdout, flush=True)

    def _print_error(self, error: Exception) -> None:
        print(f"Error: {error}", file=self._stderr, flush=True)

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    async def run_turn(self, user_input: str) -> LLMResponse | None:
        """Execute one turn for an already-trimmed, non-empty ``user_input``.

        On success the assistant reply is appended, totals updated and the
        reply plus accounting line printed. On LLMError the user message is
        removed again so transcript and totals match the pre-turn state.
        Returns the response, or None if the turn failed.
        """
        state = self.state
        state.messages.append(Message(role=Role.USER, content=user_input))
        request = LLMRequest(
            system_prompt=self._system_prompt,
            messages=tuple(state.messages),
        )

        state.phase = SessionPhase.IN_FLIGHT
        try:
            response = await self._llm.invoke(request)
        except LLMError as e:
            logger.debug("Turn failed, reverting user message: %s", e)
            state.messages.pop()
            self._print_error(e)
            return None
        finally:
            state.phase = SessionPhase.IDLE

        self._print(f"Agent: {response.content}")
        state.messages.append(Message(role=Role.ASSISTANT, content=response.content))
        state.usage.add(response.input_tokens, response.output_tokens)

        self._print(format_accounting_line(
            response.input_tokens,
            response.output_tokens,
            token_cost(response.input_tokens, response.output_tokens),
            state.usage.session_cost,
        ))
        self._print()
        return response

    async def handle_line(self, line: str) -> bool:
        """Process one raw input line. Returns False once the session ends."""
        text = line.strip()
        if not text:
            return True
        if text.lower() in EXIT_COMMANDS:
            self.state.phase = SessionPhase.TERMINATED
            return False
        await self.run_turn(text)
        return True

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    async def run_interactive(self) -> UsageTotals:
        """Read-eval-print loop until exit/quit (or EOF / Ctrl-C).

        OSError from the terminal propagates to the caller.
        """
        self._print(BANNER)

        while self.state.phase is not SessionPhase.TERMINATED:
            try:
                line = self._read_line(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self._print()
                self.state.phase = SessionPhase.TERMINATED
                break
            await self.handle_line(line)

        self._print()
        self._print(self.state.usage.format_summary())
        return self.state.usage

    async def run_single(self, message: str) -> bool:
        """One-shot mode: send ``message`` alone, print the bare reply.

        Does not touch the session transcript; prints no accounting line
        and no summary. Returns True on success.
        """
        request = LLMRequest(
            system_prompt=self._system_prompt,
            messages=(Message(role=Role.USER, content=message),),
        )
        try:
            response = await self._llm.invoke(request)
        except LLMError as e:
            self._print_error(e)
            return False
        self._print(response.content)
        return True
