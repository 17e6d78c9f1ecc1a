"""
Shared infrastructure for .NET CLI MCP tools.
"""

from .base_models import COMMON_FIELD_DESCRIPTIONS, ToolRequest
from .base_tool import BaseTool

__all__ = [
    "BaseTool",
    "COMMON_FIELD_DESCRIPTIONS",
    "ToolRequest",
]
