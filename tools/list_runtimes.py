"""list_installed_runtimes tool - enumerate installed shared runtimes."""

from __future__ import annotations

from typing import Any

from tools.shared.base_tool import BaseTool


class ListRuntimesTool(BaseTool):
    def get_name(self) -> str:
        return "list_installed_runtimes"

    def get_description(self) -> str:
        return (
            "Lists all installed .NET runtimes (e.g., Microsoft.NETCore.App, Microsoft.AspNetCore.App) "
            "with their versions and installation paths. Executes: dotnet --list-runtimes"
        )

    async def run(self, request) -> dict[str, Any]:
        runtimes = await self.service.list_installed_runtimes()
        return {
            "count": len(runtimes),
            "runtimes": [runtime.model_dump() for runtime in runtimes],
        }
