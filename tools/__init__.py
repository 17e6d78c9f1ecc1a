"""
Tool implementations for the .NET CLI MCP server
"""

from .check_sdk import CheckSdkVersionTool
from .dotnet_info import DotNetInfoTool
from .effective_sdk import EffectiveSdkTool
from .latest_sdk import LatestSdkTool
from .list_runtimes import ListRuntimesTool
from .list_sdks import ListSdksTool

__all__ = [
    "CheckSdkVersionTool",
    "DotNetInfoTool",
    "EffectiveSdkTool",
    "LatestSdkTool",
    "ListRuntimesTool",
    "ListSdksTool",
    "create_tools",
]


def create_tools(service=None, *, include_effective_sdk: bool = True) -> dict:
    """Instantiate every tool, keyed by tool name.

    The chat assistant passes ``include_effective_sdk=False``; its tool
    list matches the functions described in its system prompt.
    """
    tool_classes = [
        ListSdksTool,
        ListRuntimesTool,
        DotNetInfoTool,
        CheckSdkVersionTool,
        LatestSdkTool,
    ]
    if include_effective_sdk:
        tool_classes.insert(3, EffectiveSdkTool)

    tools = [tool_cls(service) for tool_cls in tool_classes]
    return {tool.name: tool for tool in tools}
