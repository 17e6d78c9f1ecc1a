"""get_effective_sdk tool - resolve the SDK dotnet would pick in a directory."""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import Field

from tools.shared.base_models import COMMON_FIELD_DESCRIPTIONS, ToolRequest
from tools.shared.base_tool import BaseTool

EFFECTIVE_SDK_NOTE = (
    "This is the SDK version that dotnet will use in this directory, respecting global.json if present"
)


class EffectiveSdkRequest(ToolRequest):
    working_directory: Optional[str] = Field(None, description=COMMON_FIELD_DESCRIPTIONS["working_directory"])


class EffectiveSdkTool(BaseTool):
    def get_name(self) -> str:
        return "get_effective_sdk"

    def get_description(self) -> str:
        return (
            "Gets the effective .NET SDK version being used in the specified directory. This respects "
            "global.json and roll-forward rules. Executes: dotnet --version (in the specified directory)"
        )

    def get_request_model(self):
        return EffectiveSdkRequest

    def get_tool_fields(self) -> dict[str, dict[str, Any]]:
        return {
            "working_directory": {
                "type": "string",
                "description": COMMON_FIELD_DESCRIPTIONS["working_directory"],
            }
        }

    async def run(self, request: EffectiveSdkRequest) -> dict[str, Any]:
        working_directory = (request.working_directory or "").strip() or None
        version = await self.service.get_effective_sdk_version(working_directory)
        return {
            "effective_version": version,
            "working_directory": working_directory or os.getcwd(),
            "note": EFFECTIVE_SDK_NOTE,
        }
