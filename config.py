"""
Configuration and constants for the .NET CLI MCP server

This module centralizes all configuration settings for the server and the
interactive assistant. Values are read once at import time through
``utils.env`` so a ``.env`` file next to the project can supply them.
"""

from pathlib import Path

from utils.env import get_env, get_env_bool, get_env_float, get_env_int

# Version and metadata
# These values are used in server responses and for tracking releases
__version__ = "1.0.0"
__updated__ = "2026-10-18"
__author__ = "dotnet-cli-mcp contributors"

SERVER_NAME = "dotnet-cli-mcp"

PROJECT_ROOT = Path(__file__).resolve().parent

# Name or absolute path of the dotnet executable. Override with DOTNET_CLI_PATH
# when the SDK is installed outside PATH (e.g. ~/.dotnet/dotnet).
DOTNET_EXECUTABLE = (get_env("DOTNET_CLI_PATH", "dotnet") or "dotnet").strip() or "dotnet"

# Upper bound applied by the MCP and chat adapters to a single dotnet call.
# The core runner never times out on its own; 0 disables the adapter timeout.
DOTNET_COMMAND_TIMEOUT = get_env_float("DOTNET_COMMAND_TIMEOUT", 120.0)

# Logging
LOG_LEVEL = (get_env("LOG_LEVEL", "INFO") or "INFO").upper()
LOG_DIR = Path(get_env("LOG_DIR") or PROJECT_ROOT / "logs")
LOG_TO_FILE = get_env_bool("LOG_TO_FILE", True)
LOG_BACKUP_COUNT = get_env_int("LOG_BACKUP_COUNT", 7)

# OpenAI-compatible endpoint used by the interactive assistant (LM Studio,
# Ollama, vLLM, ...). The endpoint should include the /v1 suffix.
OPENAI_ENDPOINT = get_env("OPENAI_ENDPOINT")
OPENAI_MODEL = get_env("OPENAI_MODEL")
OPENAI_API_KEY = get_env("OPENAI_API_KEY")

# Low temperature keeps tool selection stable while leaving room for reasoning models
CHAT_TEMPERATURE = get_env_float("CHAT_TEMPERATURE", 0.2)
CHAT_MAX_TOKENS = get_env_int("CHAT_MAX_TOKENS", 1500)
