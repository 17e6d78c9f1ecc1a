"""
Pytest configuration for .NET CLI MCP tests
"""

import asyncio
import importlib
import sys
from pathlib import Path

import pytest

# Ensure the parent directory is in the Python path for imports
parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import utils.env as env_config  # noqa: E402

# Ensure tests operate with runtime environment rather than .env overrides during imports
env_config.reload_env({"DOTNET_MCP_FORCE_ENV_OVERRIDE": "false"})

# Force reload of config module to pick up the runtime environment
import config  # noqa: E402

importlib.reload(config)

# Configure asyncio for Windows compatibility
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())


@pytest.fixture(autouse=True)
def _reset_env_override():
    """Keep .env override semantics from leaking between tests."""
    yield
    env_config.reload_env({"DOTNET_MCP_FORCE_ENV_OVERRIDE": "false"})


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "asyncio: mark test as async")
