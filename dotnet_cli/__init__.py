"""Typed access to the local dotnet CLI."""

from __future__ import annotations

from .models import DotNetInfo, RuntimeInfo, SdkInfo, SdkVersionCheck
from .parsers import parse_dotnet_info, parse_runtime_list, parse_sdk_list
from .runner import (
    CommandFailedError,
    DotNetCliError,
    OperationCancelledError,
    ProcessRunner,
    SpawnFailedError,
)
from .service import DotNetCliService, get_service, select_latest_sdk

__all__ = [
    "CommandFailedError",
    "DotNetCliError",
    "DotNetCliService",
    "DotNetInfo",
    "OperationCancelledError",
    "ProcessRunner",
    "RuntimeInfo",
    "SdkInfo",
    "SdkVersionCheck",
    "SpawnFailedError",
    "get_service",
    "parse_dotnet_info",
    "parse_runtime_list",
    "parse_sdk_list",
    "select_latest_sdk",
]
