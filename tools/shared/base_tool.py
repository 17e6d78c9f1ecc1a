"""
Core Tool Infrastructure for .NET CLI MCP Tools

This module provides the fundamental base class for all tools:
- BaseTool: Abstract base class defining the tool interface

The BaseTool class defines the contract every tool implements (name,
description, input schema, request model and ``run``) and owns the shared
plumbing around it: request validation, the per-call timeout, translation
of dotnet CLI failures into error envelopes, and JSON serialization of the
result. Both the MCP server and the chat assistant call ``execute``; neither
needs to know anything about processes or parsing.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from mcp.types import TextContent
from pydantic import ValidationError

import config
from dotnet_cli import (
    CommandFailedError,
    DotNetCliError,
    DotNetCliService,
    OperationCancelledError,
    SpawnFailedError,
    get_service,
)
from tools.models import ToolOutput
from tools.shared.base_models import ToolRequest

logger = logging.getLogger(__name__)


class ToolExecutionError(RuntimeError):
    """Raised by a tool's ``run`` when the request cannot be answered.

    The message is returned to the client verbatim inside an error envelope.
    """

    def __init__(self, message: str, *, error_type: str = "tool_error") -> None:
        super().__init__(message)
        self.error_type = error_type


class BaseTool(ABC):
    """
    Abstract base class for all .NET CLI MCP tools.

    To create a new tool:
    1. Create a new class that inherits from BaseTool
    2. Implement get_name, get_description and run
    3. Define a request model that inherits from ToolRequest when the tool takes arguments
    4. Add the class to create_tools() in tools/__init__.py
    """

    def __init__(self, service: Optional[DotNetCliService] = None):
        self._service = service
        # Cache tool metadata at initialization to avoid repeated calls
        self.name = self.get_name()
        self.description = self.get_description()

    @property
    def service(self) -> DotNetCliService:
        """The CLI service used by this tool; the shared default unless one was injected."""
        if self._service is None:
            self._service = get_service()
        return self._service

    @abstractmethod
    def get_name(self) -> str:
        """
        Return the unique name identifier for this tool.

        This name is used by MCP clients (and as the function name in the
        chat assistant) to invoke the tool and must be unique.
        """
        pass

    @abstractmethod
    def get_description(self) -> str:
        """
        Return a description of what this tool does.

        This is shown to MCP clients and LLMs to help them decide when to
        call the tool, so it should name the dotnet command being run.
        """
        pass

    def get_tool_fields(self) -> dict[str, dict[str, Any]]:
        """Return JSON schema properties for the tool's arguments."""
        return {}

    def get_required_fields(self) -> list[str]:
        return []

    def get_input_schema(self) -> dict[str, Any]:
        """
        Return the JSON Schema that defines this tool's parameters.

        The default builds an object schema from get_tool_fields() and
        get_required_fields(); tools with unusual arguments may override it.
        """
        return {
            "type": "object",
            "properties": self.get_tool_fields(),
            "required": self.get_required_fields(),
            "additionalProperties": False,
        }

    def get_annotations(self) -> Optional[dict[str, Any]]:
        """
        Return MCP tool annotations.

        Every tool only reads local SDK state, so they are all read-only and
        idempotent by default.
        """
        return {"readOnlyHint": True, "idempotentHint": True, "openWorldHint": False}

    def get_request_model(self):
        """Return the Pydantic model used to validate this tool's arguments."""
        return ToolRequest

    def get_timeout(self) -> Optional[float]:
        timeout = config.DOTNET_COMMAND_TIMEOUT
        return timeout if timeout and timeout > 0 else None

    @abstractmethod
    async def run(self, request) -> dict[str, Any]:
        """Perform the tool's work and return a JSON-serializable payload."""
        pass

    async def execute(self, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        """
        Validate ``arguments``, run the tool and wrap the outcome in a ToolOutput envelope.

        Failures never escape as exceptions (except task cancellation); they
        are reported as ``status="error"`` envelopes so callers can relay them.
        """
        logger.info("Tool %s invoked", self.name)

        try:
            request = self.get_request_model()(**(arguments or {}))
        except ValidationError as exc:
            logger.warning("Invalid arguments for %s: %s", self.name, exc)
            return [self._error_response(f"Invalid arguments for {self.name}: {exc}", error_type="invalid_request")]

        timeout = self.get_timeout()
        try:
            if timeout:
                payload = await asyncio.wait_for(self.run(request), timeout=timeout)
            else:
                payload = await self.run(request)
        except asyncio.TimeoutError:
            logger.error("Tool %s timed out after %ss", self.name, timeout)
            return [
                self._error_response(
                    f"dotnet did not finish within {timeout:g} seconds",
                    error_type="timeout",
                )
            ]
        except ToolExecutionError as exc:
            logger.info("Tool %s reported: %s", self.name, exc)
            return [self._error_response(str(exc), error_type=exc.error_type)]
        except DotNetCliError as exc:
            logger.error("Error executing %s: %s", self.name, exc)
            return [self._cli_error_response(exc)]
        except Exception as exc:
            logger.exception("Unexpected error executing %s", self.name)
            return [self._error_response(f"Error in {self.name}: {exc}", error_type="internal_error")]

        return [self._success_response(payload)]

    def _success_response(self, payload: dict[str, Any]) -> TextContent:
        output = ToolOutput(
            status="success",
            content=json.dumps(payload, indent=2, ensure_ascii=False),
            content_type="json",
            metadata={"tool": self.name},
        )
        return TextContent(type="text", text=output.model_dump_json())

    def _cli_error_response(self, exc: DotNetCliError) -> TextContent:
        if isinstance(exc, SpawnFailedError):
            error_type = "spawn_failed"
        elif isinstance(exc, CommandFailedError):
            error_type = "command_failed"
        elif isinstance(exc, OperationCancelledError):
            error_type = "cancelled"
        else:
            error_type = "cli_error"

        metadata: dict[str, Any] = {"command": exc.command}
        if exc.returncode is not None:
            metadata["return_code"] = exc.returncode
        if exc.stderr.strip():
            metadata["stderr"] = exc.stderr.strip()
        return self._error_response(str(exc), error_type=error_type, metadata=metadata)

    def _error_response(
        self,
        message: str,
        *,
        error_type: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> TextContent:
        merged = {"tool": self.name, "error_type": error_type}
        merged.update(metadata or {})
        output = ToolOutput(status="error", content=message, content_type="text", metadata=merged)
        return TextContent(type="text", text=output.model_dump_json())
