"""High level operations over the dotnet CLI.

Each operation maps to exactly one ``dotnet`` invocation followed by one
parser call. Runner failures (``SpawnFailedError``, ``CommandFailedError``,
``OperationCancelledError``) propagate unchanged; the service never retries
and never substitutes defaults for a failed command.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from .constants import INFO_ARGS, LIST_RUNTIMES_ARGS, LIST_SDKS_ARGS, VERSION_ARGS
from .models import DotNetInfo, RuntimeInfo, SdkInfo, SdkVersionCheck
from .parsers import parse_dotnet_info, parse_runtime_list, parse_sdk_list
from .runner import ProcessRunner


class DotNetCliService:
    """Stateless facade consumed by the MCP tools and the chat assistant."""

    def __init__(self, runner: ProcessRunner | None = None, *, logger: logging.Logger | None = None) -> None:
        self._runner = runner or ProcessRunner()
        self._logger = logger or logging.getLogger("dotnet_cli.service")

    @property
    def executable(self) -> str:
        return self._runner.executable

    async def get_dotnet_info(self, *, cancel_event: asyncio.Event | None = None) -> DotNetInfo:
        self._logger.info("Executing dotnet --info")
        output = await self._runner.run(INFO_ARGS, cancel_event=cancel_event)
        return parse_dotnet_info(output)

    async def list_installed_sdks(self, *, cancel_event: asyncio.Event | None = None) -> list[SdkInfo]:
        self._logger.info("Executing dotnet --list-sdks")
        output = await self._runner.run(LIST_SDKS_ARGS, cancel_event=cancel_event)
        sdks = parse_sdk_list(output)
        self._logger.info("Found %d installed SDKs", len(sdks))
        return sdks

    async def list_installed_runtimes(self, *, cancel_event: asyncio.Event | None = None) -> list[RuntimeInfo]:
        self._logger.info("Executing dotnet --list-runtimes")
        output = await self._runner.run(LIST_RUNTIMES_ARGS, cancel_event=cancel_event)
        runtimes = parse_runtime_list(output)
        self._logger.info("Found %d installed runtimes", len(runtimes))
        return runtimes

    async def get_effective_sdk_version(
        self,
        working_directory: str | Path | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> str:
        """Return the SDK version dotnet selects in ``working_directory``.

        Resolution (global.json lookup, roll-forward) is left entirely to the
        dotnet host; the directory only scopes where the command runs.
        """
        if isinstance(working_directory, str):
            working_directory = working_directory.strip() or None

        self._logger.info("Executing dotnet --version in %s", working_directory or "current directory")
        output = await self._runner.run(VERSION_ARGS, cwd=working_directory, cancel_event=cancel_event)
        return output.strip()

    async def check_sdk_version(self, version: str, *, cancel_event: asyncio.Event | None = None) -> SdkVersionCheck:
        sdks = await self.list_installed_sdks(cancel_event=cancel_event)
        major = version.split(".")[0]
        return SdkVersionCheck(
            requested_version=version,
            is_installed=any(sdk.version == version for sdk in sdks),
            closest_matches=[sdk for sdk in sdks if sdk.version.startswith(major)],
        )

    async def get_latest_sdk(
        self,
        *,
        sdks: Sequence[SdkInfo] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> SdkInfo | None:
        """Return the installed SDK with the greatest version string, or None.

        Versions are compared as plain strings, so "9.0.9" ranks above
        "9.0.10". See DESIGN.md before changing this to semantic ordering.
        A listing the caller already fetched can be passed as ``sdks`` to
        skip the second ``dotnet --list-sdks`` run.
        """
        if sdks is None:
            sdks = await self.list_installed_sdks(cancel_event=cancel_event)
        return select_latest_sdk(sdks)


def select_latest_sdk(sdks: Sequence[SdkInfo]) -> SdkInfo | None:
    """Pick the SDK with the greatest version string; the first one wins on ties."""

    if not sdks:
        return None
    return max(sdks, key=lambda sdk: sdk.version)


_SERVICE: DotNetCliService | None = None


def get_service() -> DotNetCliService:
    global _SERVICE
    if _SERVICE is None:
        import config

        _SERVICE = DotNetCliService(ProcessRunner(config.DOTNET_EXECUTABLE))
    return _SERVICE
