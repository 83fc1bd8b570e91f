"""Claude Agent entry point.

Parses arguments, builds settings, loads the API key via the Anthropic
provider and dispatches to one-shot or interactive mode:
  Args -> AgentConfig -> AnthropicProvider -> ChatSession
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from claude_agent import __version__
from claude_agent.config import AgentConfig
from claude_agent.llm.anthropic import AnthropicProvider
from claude_agent.llm.base import LLMError
from claude_agent.session import ChatSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-agent",
        description="A terminal agent for interacting with the Claude API.",
    )
    parser.add_argument(
        "-m", "--message",
        help="send a single message, print the reply and exit",
    )
    parser.add_argument(
        "-i", "--interactive",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="run the interactive chat loop (default; ignored when --message is given)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


async def run(args: argparse.Namespace, config: AgentConfig) -> int:
    """Construct the backend and run the selected mode. Returns exit status."""
    try:
        provider = AnthropicProvider(config)
    except LLMError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async with provider:
        session = ChatSession(provider, config.system_prompt)

        if args.message is not None:
            ok = await session.run_single(args.message)
            return 0 if ok else 1

        if not args.interactive:
            logger.info("No --message given; falling back to interactive mode")
        try:
            await session.run_interactive()
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Failed to read user input: {e}", file=sys.stderr)
            return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args and settings, configure logging, run."""
    args = build_parser().parse_args(argv)

    try:
        config = AgentConfig()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger.info("Model: %s", config.model)

    return asyncio.run(run(args, config))


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
