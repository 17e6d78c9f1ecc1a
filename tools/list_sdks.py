"""list_installed_sdks tool - enumerate installed .NET SDKs."""

from __future__ import annotations

from typing import Any

from tools.shared.base_tool import BaseTool


class ListSdksTool(BaseTool):
    """Runs ``dotnet --list-sdks`` and reports every SDK found."""

    def get_name(self) -> str:
        return "list_installed_sdks"

    def get_description(self) -> str:
        return (
            "Lists all installed .NET SDKs with their versions and installation paths. "
            "Executes: dotnet --list-sdks"
        )

    async def run(self, request) -> dict[str, Any]:
        sdks = await self.service.list_installed_sdks()
        return {
            "count": len(sdks),
            "sdks": [sdk.model_dump() for sdk in sdks],
        }
