"""
Interactive .NET CLI assistant

A console chat loop backed by any OpenAI-compatible chat-completions
endpoint (LM Studio, Ollama, vLLM, OpenAI). The model answers questions about
the local .NET installation by calling the same tools the MCP server exposes;
tool results are the JSON envelopes produced by ``BaseTool.execute``.
"""

import asyncio
import json
import logging
import re
import sys
from typing import Any, Callable, Optional, TextIO

import httpx
from openai import APIConnectionError, APIStatusError

import config
from providers import ModelProvider, OpenAICompatibleProvider
from systemprompts import CHAT_SYSTEM_PROMPT
from tools import create_tools
from tools.models import ToolOutput
from tools.shared.base_tool import BaseTool
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

# Upper bound on model -> tool -> model round trips for a single question
MAX_TOOL_ROUNDS = 5

# Prefix some models keep from plugin-style function naming ("DotNetCli_list_installed_sdks")
LEGACY_TOOL_PREFIXES = ("DotNetCli_", "DotNetCli-", "DotNetCli.")

REASONING_PATTERNS = (
    re.compile(r"<think>.*?</think>", re.DOTALL),
    re.compile(r"<reasoning>.*?</reasoning>", re.DOTALL),
)

USER_PROMPT = "\x1b[32mYou: \x1b[0m"
ASSISTANT_COLOR = "\x1b[35m"
RESET_COLOR = "\x1b[0m"


def strip_reasoning(content: Optional[str]) -> str:
    """Remove reasoning blocks that leaked into the visible answer."""
    text = content or ""
    for pattern in REASONING_PATTERNS:
        text = pattern.sub("", text)
    return text.strip()


class ChatSession:
    """Conversation state plus the tool-calling loop for one interactive user."""

    def __init__(
        self,
        provider: ModelProvider,
        tools: dict[str, BaseTool],
        *,
        system_prompt: str = CHAT_SYSTEM_PROMPT,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self.provider = provider
        self.tools = tools
        self.temperature = config.CHAT_TEMPERATURE if temperature is None else temperature
        self.max_tokens = config.CHAT_MAX_TOKENS if max_tokens is None else max_tokens
        self.history: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}]

    def tool_definitions(self) -> list[dict[str, Any]]:
        """Describe every tool as an OpenAI function definition."""
        return [
            {
                "type": "function",
                "function": {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": tool.get_input_schema(),
                },
            }
            for tool in self.tools.values()
        ]

    async def ask(self, user_input: str) -> Optional[str]:
        """Send one user turn and return the assistant's final answer.

        Returns None when the model produced no visible text. In that case,
        and when an exception escapes, the history is rolled back to how it
        was before this turn so the user can simply retry.
        """
        checkpoint = len(self.history)
        self.history.append({"role": "user", "content": user_input})
        logger.info("Processing user query: %s", user_input)

        try:
            reply = await self._complete_with_tools()
        except BaseException:
            del self.history[checkpoint:]
            raise

        if not reply:
            logger.warning("Received empty response from chat endpoint")
            del self.history[checkpoint:]
            return None

        self.history.append({"role": "assistant", "content": reply})
        return reply

    async def _complete_with_tools(self) -> str:
        definitions = self.tool_definitions()

        for round_number in range(1, MAX_TOOL_ROUNDS + 1):
            message = await self._complete(definitions)
            tool_calls = getattr(message, "tool_calls", None) or []
            if not tool_calls:
                return strip_reasoning(message.content)

            logger.debug("Round %d: model requested %d tool call(s)", round_number, len(tool_calls))
            self.history.append(
                {
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.function.name,
                                "arguments": call.function.arguments or "{}",
                            },
                        }
                        for call in tool_calls
                    ],
                }
            )
            for call in tool_calls:
                result_text = await self._invoke_tool(call.function.name, call.function.arguments)
                self.history.append({"role": "tool", "tool_call_id": call.id, "content": result_text})

        logger.warning("Tool call limit (%d rounds) reached; asking for a final answer without tools", MAX_TOOL_ROUNDS)
        message = await self._complete(None)
        return strip_reasoning(message.content)

    async def _complete(self, definitions: Optional[list[dict[str, Any]]]):
        # The OpenAI SDK client is synchronous; keep the event loop free while it waits
        return await asyncio.to_thread(
            self.provider.complete_chat,
            list(self.history),
            definitions,
            self.temperature,
            self.max_tokens,
        )

    def _resolve_tool(self, name: str) -> Optional[BaseTool]:
        tool = self.tools.get(name)
        if tool is not None:
            return tool
        for prefix in LEGACY_TOOL_PREFIXES:
            if name.startswith(prefix):
                return self.tools.get(name[len(prefix) :])
        return None

    async def _invoke_tool(self, name: str, raw_arguments: Optional[str]) -> str:
        tool = self._resolve_tool(name)
        if tool is None:
            available = ", ".join(sorted(self.tools))
            logger.warning("Model requested unknown function %r", name)
            return self._tool_error(f"Unknown function '{name}'. Available functions: {available}", "unknown_tool")

        try:
            arguments = json.loads(raw_arguments) if raw_arguments and raw_arguments.strip() else {}
        except json.JSONDecodeError as exc:
            logger.warning("Malformed arguments for %s: %r", name, raw_arguments)
            return self._tool_error(f"Function arguments must be a JSON object: {exc}", "invalid_request")

        if not isinstance(arguments, dict):
            return self._tool_error("Function arguments must be a JSON object", "invalid_request")

        logger.info("Assistant invoking %s with %s", tool.name, arguments)
        contents = await tool.execute(arguments)
        return "\n".join(item.text for item in contents)

    @staticmethod
    def _tool_error(message: str, error_type: str) -> str:
        output = ToolOutput(status="error", content=message, content_type="text", metadata={"error_type": error_type})
        return output.model_dump_json()

    async def run_interactive(
        self,
        *,
        input_func: Callable[[str], str] = input,
        output: Optional[TextIO] = None,
    ) -> None:
        """Read questions until the user types ``exit`` or submits an empty line."""
        stream = output or sys.stdout
        logger.info("Type your questions about .NET SDK/Runtime (or 'exit' to quit)")

        while True:
            try:
                user_input = await asyncio.to_thread(input_func, USER_PROMPT)
            except EOFError:
                break

            if not user_input.strip() or user_input.strip().lower() == "exit":
                logger.info("User requested exit")
                break

            try:
                reply = await self.ask(user_input)
            except Exception as exc:
                self._report_failure(exc)
                continue

            if reply is None:
                logger.warning("Assistant: I received an empty response. Please try again.")
                continue

            print(f"{ASSISTANT_COLOR}\nAssistant: {reply}{RESET_COLOR}\n", file=stream, flush=True)

        logger.info("Goodbye!")

    def _report_failure(self, exc: Exception) -> None:
        endpoint = getattr(self.provider, "base_url", None) or "the configured endpoint"
        cause = exc.__cause__ or exc
        logger.error("Error processing chat message: %s (%s)", exc, type(cause).__name__)

        if isinstance(cause, (APIConnectionError, httpx.TransportError)):
            logger.warning("Please ensure:")
            logger.warning("  - The server at %s is running and accessible", endpoint)
            logger.warning("  - A model is loaded")
        elif isinstance(cause, APIStatusError):
            logger.warning("Please verify:")
            logger.warning("  - The endpoint %s is correct (it usually ends with /v1)", endpoint)
            logger.warning("  - The loaded model supports chat completions with function calling")


def main() -> int:
    configure_logging("assistant.log")
    logger.info("Starting .NET CLI assistant v%s", config.__version__)

    required = {
        "OPENAI_ENDPOINT": config.OPENAI_ENDPOINT,
        "OPENAI_MODEL": config.OPENAI_MODEL,
        "OPENAI_API_KEY": config.OPENAI_API_KEY,
    }
    missing = [name for name, value in required.items() if not (value or "").strip()]
    if missing:
        logger.critical("Missing required configuration: %s. Set it in .env or the environment.", ", ".join(missing))
        return 1

    try:
        provider = OpenAICompatibleProvider(
            api_key=config.OPENAI_API_KEY,
            model_name=config.OPENAI_MODEL,
            base_url=config.OPENAI_ENDPOINT,
        )
    except ValueError as exc:
        logger.critical("Invalid OPENAI_ENDPOINT: %s", exc)
        return 1

    session = ChatSession(provider, create_tools(include_effective_sdk=False))
    logger.info("Assistant initialized with %d tools: %s", len(session.tools), ", ".join(session.tools))
    logger.info("Connected to: %s (model %s)", config.OPENAI_ENDPOINT, config.OPENAI_MODEL)
    logger.warning("Note: make sure the endpoint is running with a model loaded")

    try:
        asyncio.run(session.run_interactive())
    except KeyboardInterrupt:
        pass
    finally:
        provider.close()
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
