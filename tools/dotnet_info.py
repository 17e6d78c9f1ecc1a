"""get_dotnet_info tool - summarize ``dotnet --info``."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from tools.shared.base_models import COMMON_FIELD_DESCRIPTIONS, ToolRequest
from tools.shared.base_tool import BaseTool


class DotNetInfoRequest(ToolRequest):
    include_raw_output: bool = Field(False, description=COMMON_FIELD_DESCRIPTIONS["include_raw_output"])


class DotNetInfoTool(BaseTool):
    """Reports the SDK, runtime, OS and architecture lines from ``dotnet --info``.

    Fields the CLI did not print come back as "Unknown"; the raw text is only
    included on request because it is long and rarely needed by the caller.
    """

    def get_name(self) -> str:
        return "get_dotnet_info"

    def get_description(self) -> str:
        return (
            "Gets detailed .NET information including SDK version, runtime version, OS and architecture. "
            "Executes: dotnet --info"
        )

    def get_request_model(self):
        return DotNetInfoRequest

    def get_tool_fields(self) -> dict[str, dict[str, Any]]:
        return {
            "include_raw_output": {
                "type": "boolean",
                "description": COMMON_FIELD_DESCRIPTIONS["include_raw_output"],
            }
        }

    async def run(self, request: DotNetInfoRequest) -> dict[str, Any]:
        info = await self.service.get_dotnet_info()
        payload = info.model_dump(exclude={"raw_output"})
        if request.include_raw_output:
            payload["raw_output"] = info.raw_output
        return payload
