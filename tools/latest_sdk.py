"""get_latest_sdk tool - report the newest installed SDK."""

from __future__ import annotations

from typing import Any

from tools.shared.base_tool import BaseTool, ToolExecutionError


class LatestSdkTool(BaseTool):
    def get_name(self) -> str:
        return "get_latest_sdk"

    def get_description(self) -> str:
        return "Gets the latest installed .NET SDK version"

    async def run(self, request) -> dict[str, Any]:
        sdks = await self.service.list_installed_sdks()
        latest = await self.service.get_latest_sdk(sdks=sdks)
        if latest is None:
            raise ToolExecutionError("No SDKs installed", error_type="not_found")

        return {
            "latest_version": latest.version,
            "path": latest.path,
            "total_sdks_installed": len(sdks),
        }
