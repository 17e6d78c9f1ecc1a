"""
System prompts for the .NET CLI assistant
"""

from .chat_prompt import CHAT_SYSTEM_PROMPT

__all__ = ["CHAT_SYSTEM_PROMPT"]
