"""Abstract base class for LLM backends."""

from abc import ABC, abstractmethod
from typing import Self

from claude_agent.llm.schemas import LLMRequest, LLMResponse


class LLMError(RuntimeError):
    """A backend call (or backend construction) failed.

    Messages are shown to the user as-is and never contain credentials.
    """


class LLM(ABC):
    """Narrow backend capability: one request in, one complete response out.

    Implementations must tolerate concurrent ``invoke`` calls on a shared
    instance, even though the chat driver only ever issues one at a time.
    """

    @abstractmethod
    async def invoke(self, request: LLMRequest) -> LLMResponse:
        """Send ``request`` and wait for the full reply.

        Raises:
            LLMError: on any transport, timeout, HTTP status or parse failure.
                No partial response is ever returned.
        """
        ...

    async def close(self) -> None:
        """Release any held resources. Default: nothing to release."""

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
