"""
Data models for tool responses
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ToolOutput(BaseModel):
    """Standardized output format for all tools"""

    status: Literal["success", "error"] = "success"
    content: Optional[str] = Field(None, description="The main content/response from the tool")
    content_type: Literal["text", "json"] = "text"
    metadata: Optional[dict[str, Any]] = Field(default_factory=dict)
