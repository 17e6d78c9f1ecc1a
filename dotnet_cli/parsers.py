"""Parsers for dotnet CLI text output.

The CLI prints human-oriented text whose exact layout drifts between SDK
releases, so every parser here is tolerant: lines that do not match are
skipped and single fields that cannot be found fall back to ``UNKNOWN``.
None of these functions raise on malformed input.
"""

from __future__ import annotations

import re

from .constants import UNKNOWN
from .models import DotNetInfo, RuntimeInfo, SdkInfo

# "9.0.302 [/usr/local/share/dotnet/sdk]"
SDK_LINE_PATTERN = re.compile(r"^([\d.]+(?:-[\w.]+)?)\s+\[([^\]]+)\]")

# "Microsoft.NETCore.App 9.0.3 [/usr/local/share/dotnet/shared/Microsoft.NETCore.App]"
RUNTIME_LINE_PATTERN = re.compile(r"^([\w.]+)\s+([\d.]+(?:-[\w.]+)?)\s+\[([^\]]+)\]")

# dotnet --info labels; searched against the whole text, first match wins
SDK_VERSION_PATTERN = re.compile(r"Version:\s+(.+)", re.MULTILINE)
RUNTIME_VERSION_PATTERN = re.compile(r"Microsoft\.NETCore\.App\s+([\d.]+)", re.MULTILINE)
OS_VERSION_PATTERN = re.compile(r"OS\s+(?:Version|Name):\s+(.+)", re.MULTILINE)
ARCHITECTURE_PATTERN = re.compile(r"Architecture:\s+(.+)", re.MULTILINE)


def _non_empty_lines(text: str | None) -> list[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def parse_sdk_list(text: str | None) -> list[SdkInfo]:
    """Parse ``dotnet --list-sdks`` output, preserving input order."""

    sdks: list[SdkInfo] = []
    for line in _non_empty_lines(text):
        match = SDK_LINE_PATTERN.match(line)
        if match:
            sdks.append(SdkInfo(version=match.group(1), path=match.group(2)))
    return sdks


def parse_runtime_list(text: str | None) -> list[RuntimeInfo]:
    """Parse ``dotnet --list-runtimes`` output, preserving input order."""

    runtimes: list[RuntimeInfo] = []
    for line in _non_empty_lines(text):
        match = RUNTIME_LINE_PATTERN.match(line)
        if match:
            runtimes.append(RuntimeInfo(name=match.group(1), version=match.group(2), path=match.group(3)))
    return runtimes


def _first_group(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    if not match:
        return UNKNOWN
    value = match.group(1).strip()
    return value or UNKNOWN


def parse_dotnet_info(text: str | None) -> DotNetInfo:
    """Extract SDK, runtime, OS and architecture details from ``dotnet --info``."""

    raw = text or ""
    return DotNetInfo(
        sdk_version=_first_group(SDK_VERSION_PATTERN, raw),
        runtime_version=_first_group(RUNTIME_VERSION_PATTERN, raw),
        os_version=_first_group(OS_VERSION_PATTERN, raw),
        architecture=_first_group(ARCHITECTURE_PATTERN, raw),
        raw_output=raw,
    )


__all__ = [
    "parse_dotnet_info",
    "parse_runtime_list",
    "parse_sdk_list",
]
