"""check_sdk_version tool - answer "is SDK X installed?"."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from tools.shared.base_models import COMMON_FIELD_DESCRIPTIONS, ToolRequest
from tools.shared.base_tool import BaseTool


class CheckSdkVersionRequest(ToolRequest):
    version: str = Field(..., min_length=1, description=COMMON_FIELD_DESCRIPTIONS["version"])

    @field_validator("version", mode="before")
    @classmethod
    def _strip_version(cls, value: Any) -> Any:
        # LLMs occasionally send numbers ("9.0" as a float) or padded strings
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value.strip()
        return value


class CheckSdkVersionTool(BaseTool):
    """Exact-match lookup over ``dotnet --list-sdks`` plus same-major suggestions."""

    def get_name(self) -> str:
        return "check_sdk_version"

    def get_description(self) -> str:
        return "Checks if a specific .NET SDK version is installed on the system"

    def get_request_model(self):
        return CheckSdkVersionRequest

    def get_tool_fields(self) -> dict[str, dict[str, Any]]:
        return {
            "version": {
                "type": "string",
                "description": COMMON_FIELD_DESCRIPTIONS["version"],
            }
        }

    def get_required_fields(self) -> list[str]:
        return ["version"]

    async def run(self, request: CheckSdkVersionRequest) -> dict[str, Any]:
        result = await self.service.check_sdk_version(request.version)
        return result.model_dump()
