"""Utilities for executing external commands and reducing them to outcomes."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Sequence
import os
import shlex
import subprocess


COMMAND_NOT_FOUND = 127
"""Return code reported when the executable cannot be spawned at all."""

COMMAND_NOT_EXECUTABLE = 126
"""Return code reported when the executable exists but cannot be started."""


@dataclass
class CommandResult:
    """Represents the outcome of an executed command."""

    command: Sequence[str]
    returncode: int
    stdout: str
    stderr: str
    streamed: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandError(RuntimeError):
    """Raised when a command fails."""

    def __init__(self, result: CommandResult):
        message = f"Command failed with exit code {result.returncode}: {format_command(result.command)}"
        if result.streamed:
            message = f"{message}\nstdout/stderr already streamed above."
        elif result.stderr:
            message = f"{message}\nstderr: {result.stderr}"
        super().__init__(message)
        self.result = result


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(part)) for part in command)


class CommandRunner:
    """Abstract command runner interface."""

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
        stream: bool = False,
    ) -> CommandResult:
        raise NotImplementedError

    def format_command(self, command: Sequence[str]) -> str:
        return format_command(command)


class SubprocessCommandRunner(CommandRunner):
    """Command runner that executes commands via :mod:`subprocess`.

    Calls block until the child terminates. In capture mode the error stream is
    collected in full; in stream mode the child shares this process' standard
    streams so its output is visible live. A missing executable is reported as
    return code 127 and any other spawn failure (such as a missing execute
    bit) as 126, instead of an exception.
    """

    @staticmethod
    def _merge_environment(env: Mapping[str, str] | None) -> Dict[str, str] | None:
        if env is None:
            return None
        merged = os.environ.copy()
        merged.update(env)
        return merged

    def _finalize(self, result: CommandResult, *, check: bool) -> CommandResult:
        if check and result.returncode != 0:
            raise CommandError(result)
        return result

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
        stream: bool = False,
    ) -> CommandResult:
        merged_env = self._merge_environment(env)
        try:
            if not stream:
                process = subprocess.run(
                    list(command),
                    cwd=str(cwd) if cwd else None,
                    env=merged_env,
                    capture_output=True,
                    text=True,
                    check=False,
                )
                result = CommandResult(
                    command=command,
                    returncode=process.returncode,
                    stdout=process.stdout or "",
                    stderr=process.stderr or "",
                )
            else:
                process = subprocess.run(
                    list(command),
                    cwd=str(cwd) if cwd else None,
                    env=merged_env,
                    check=False,
                )
                result = CommandResult(
                    command=command,
                    returncode=process.returncode,
                    stdout="",
                    stderr="",
                    streamed=True,
                )
        except FileNotFoundError as exc:
            # Only raised when the executable itself (or cwd) cannot be found.
            result = CommandResult(
                command=command,
                returncode=COMMAND_NOT_FOUND,
                stdout="",
                stderr=str(exc),
                streamed=stream,
            )
        except OSError as exc:
            result = CommandResult(
                command=command,
                returncode=COMMAND_NOT_EXECUTABLE,
                stdout="",
                stderr=str(exc),
                streamed=stream,
            )
        return self._finalize(result, check=check)


@dataclass(slots=True)
class RecordedCommand:
    command: List[str]
    cwd: str | None
    env: Dict[str, str]
    stream: bool


CommandHandler = Callable[[RecordedCommand], "CommandResult | None"]


class RecordingCommandRunner(CommandRunner):
    """Command runner that records commands instead of executing them.

    ``handler`` may return a :class:`CommandResult` to script the outcome of a
    recorded command; returning ``None`` falls back to a successful result.
    """

    def __init__(self, handler: CommandHandler | None = None) -> None:
        self.commands: List[RecordedCommand] = []
        self._handler = handler

    @staticmethod
    def _record_entry(
        *,
        command: Sequence[str],
        cwd: Path | None,
        env: Mapping[str, str] | None,
        stream: bool,
    ) -> RecordedCommand:
        return RecordedCommand(
            command=list(command),
            cwd=str(cwd) if cwd else None,
            env=dict(env) if env else {},
            stream=stream,
        )

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
        stream: bool = False,
    ) -> CommandResult:
        record = self._record_entry(command=command, cwd=cwd, env=env, stream=stream)
        self.commands.append(record)
        result = self._handler(record) if self._handler else None
        if result is None:
            result = CommandResult(command=command, returncode=0, stdout="", stderr="", streamed=stream)
        if check and result.returncode != 0:
            raise CommandError(result)
        return result

    def iter_commands(self) -> Iterable[RecordedCommand]:
        return iter(self.commands)

