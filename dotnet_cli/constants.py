"""Internal defaults and constants for the dotnet CLI wrapper."""

from __future__ import annotations

DEFAULT_EXECUTABLE = "dotnet"
DEFAULT_STREAM_LIMIT = 10 * 1024 * 1024  # 10MB per line

# Seconds to wait for stream readers after killing a cancelled process
TERMINATE_GRACE_SECONDS = 5.0

# Sentinel for info fields the parser could not extract
UNKNOWN = "Unknown"

LIST_SDKS_ARGS: tuple[str, ...] = ("--list-sdks",)
LIST_RUNTIMES_ARGS: tuple[str, ...] = ("--list-runtimes",)
INFO_ARGS: tuple[str, ...] = ("--info",)
VERSION_ARGS: tuple[str, ...] = ("--version",)

# Suppress the first-run welcome banner and telemetry notice so stdout only
# carries the requested listing.
DEFAULT_ENV: dict[str, str] = {
    "DOTNET_NOLOGO": "1",
    "DOTNET_CLI_TELEMETRY_OPTOUT": "1",
}
