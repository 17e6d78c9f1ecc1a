"""Execute dotnet CLI commands and capture their output."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from .constants import DEFAULT_ENV, DEFAULT_EXECUTABLE, DEFAULT_STREAM_LIMIT, TERMINATE_GRACE_SECONDS


class DotNetCliError(RuntimeError):
    """Base class for failures while executing a dotnet CLI command."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class SpawnFailedError(DotNetCliError):
    """Raised when the executable could not be started (missing binary, permissions, bad cwd)."""


class CommandFailedError(DotNetCliError):
    """Raised when the command ran but exited with a non-zero status."""


class OperationCancelledError(DotNetCliError):
    """Raised when the caller's cancellation event fires before the command completes."""


class ProcessRunner:
    """Run one external command per call and return its stdout.

    Both pipes are drained line by line by two concurrent readers so a chatty
    command can never block on a full OS pipe buffer. Cancellation is signalled
    through an ``asyncio.Event``; cancelling the awaiting task works too and
    kills the child before ``CancelledError`` propagates.
    """

    def __init__(
        self,
        executable: str | None = None,
        *,
        env: Mapping[str, str] | None = None,
        stream_limit: int = DEFAULT_STREAM_LIMIT,
        logger: logging.Logger | None = None,
    ) -> None:
        self.executable = executable or DEFAULT_EXECUTABLE
        self._env_overrides = dict(DEFAULT_ENV if env is None else env)
        self._stream_limit = stream_limit
        self._logger = logger or logging.getLogger("dotnet_cli.runner")

    async def run(
        self,
        args: Sequence[str],
        *,
        cwd: str | Path | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> str:
        command = [self.executable, *args]
        display = " ".join(command)

        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError(f"'{display}' was cancelled before it started", command=command)

        if cwd is not None and not Path(cwd).is_dir():
            raise SpawnFailedError(f"Working directory does not exist: {cwd}", command=command)

        self._logger.debug("Executing CLI command: %s", display)
        if cwd is not None:
            self._logger.debug("Working directory: %s", cwd)

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(cwd) if cwd is not None else None,
                env=self._build_environment(),
                limit=self._stream_limit,
            )
        except OSError as exc:
            self._logger.error("Failed to start '%s': %s", display, exc)
            raise SpawnFailedError(f"Failed to start '{display}': {exc}", command=command) from exc

        stdout_lines: list[str] = []
        stderr_lines: list[str] = []
        completion = asyncio.ensure_future(self._communicate(process, stdout_lines, stderr_lines))

        try:
            cancelled = await self._wait_for_completion(completion, cancel_event)
        except asyncio.CancelledError:
            self._logger.debug("Task awaiting '%s' was cancelled; terminating pid %s", display, process.pid)
            await self._terminate(process, completion, display)
            raise

        if cancelled:
            self._logger.info("'%s' cancelled by caller; terminating pid %s", display, process.pid)
            await self._terminate(process, completion, display)
            raise OperationCancelledError(
                f"'{display}' was cancelled",
                command=command,
                returncode=process.returncode,
                stdout="".join(stdout_lines),
                stderr="".join(stderr_lines),
            )

        returncode = completion.result()
        stdout_text = "".join(stdout_lines)
        stderr_text = "".join(stderr_lines)

        if returncode != 0:
            self._logger.error("'%s' failed with exit code %s: %s", display, returncode, stderr_text.strip())
            raise CommandFailedError(
                f"'{display}' exited with status {returncode}: {stderr_text.strip()}",
                command=command,
                returncode=returncode,
                stdout=stdout_text,
                stderr=stderr_text,
            )

        self._logger.debug("'%s' output: %s", display, stdout_text)
        return stdout_text

    def _build_environment(self) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._env_overrides)
        return env

    async def _wait_for_completion(self, completion: asyncio.Future, cancel_event: asyncio.Event | None) -> bool:
        """Wait for the process or the cancel event; return True when cancellation won."""

        # Shielded so a cancelled caller leaves the readers running until the kill lands.
        if cancel_event is None:
            await asyncio.shield(completion)
            return False

        cancel_waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({completion, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_waiter.cancel()
        return completion not in done

    async def _communicate(
        self,
        process: asyncio.subprocess.Process,
        stdout_lines: list[str],
        stderr_lines: list[str],
    ) -> int:
        await asyncio.gather(
            self._drain(process.stdout, stdout_lines),
            self._drain(process.stderr, stderr_lines),
        )
        return await process.wait()

    async def _drain(self, stream: asyncio.StreamReader | None, sink: list[str]) -> None:
        if stream is None:
            return
        while True:
            try:
                raw = await stream.readline()
            except ValueError:
                # readline() already discarded the oversized chunk from its buffer
                self._logger.warning("Discarded output line longer than %d bytes", self._stream_limit)
                continue
            if not raw:
                break
            sink.append(raw.decode("utf-8", errors="replace").rstrip("\r\n") + "\n")

    async def _terminate(self, process: asyncio.subprocess.Process, completion: asyncio.Future, display: str) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:  # pragma: no cover - exited between the check and the kill
                pass

        try:
            await asyncio.wait_for(completion, timeout=TERMINATE_GRACE_SECONDS)
        except asyncio.TimeoutError:
            self._logger.warning(
                "'%s' (pid %s) did not release its pipes within %.1fs after kill",
                display,
                process.pid,
                TERMINATE_GRACE_SECONDS,
            )
