"""
Base models for .NET CLI MCP tools.

This module contains the shared Pydantic request model and field
descriptions used across tools, kept apart from ``base_tool`` to avoid
circular imports.
"""

from pydantic import BaseModel, ConfigDict

# Shared field descriptions to avoid duplication between request models and schemas
COMMON_FIELD_DESCRIPTIONS = {
    "version": "The SDK version to check (e.g., '8.0.202' or '9.0.302').",
    "working_directory": (
        "The directory to check. If not provided, uses the server's current working directory. "
        "global.json files in this directory or its parents are honoured by dotnet itself."
    ),
    "include_raw_output": "Include the complete unparsed `dotnet --info` text in the result.",
}


class ToolRequest(BaseModel):
    """
    Base request model for all .NET CLI tools.

    Unknown arguments are ignored so clients that send empty or
    decorated argument objects still reach the tool.
    """

    model_config = ConfigDict(extra="ignore")
