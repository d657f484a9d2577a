"""Invoke the compiler toolchain to rebuild the binding from source."""
from __future__ import annotations

from typing import List, Mapping, Sequence
import os

from buildcore.command_runner import COMMAND_NOT_FOUND, CommandResult, CommandRunner
from buildcore.console import Console

from .config import BuildSettings
from .errors import ToolchainFailedError, ToolchainNotFoundError
from .options import BuildOptions

BUILD_VARIABLES: Sequence[str] = (
    "libsass_ext",
    "libsass_cflags",
    "libsass_ldflags",
    "libsass_library",
)
"""Toolchain variables forwarded from the same-named uppercase environment variables."""


class BuildInvoker:
    def __init__(
        self,
        *,
        settings: BuildSettings,
        runner: CommandRunner,
        console: Console,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._console = console
        self._environ = environ

    def variable_overrides(self) -> List[str]:
        env = os.environ if self._environ is None else self._environ
        return [f"--{name}={env.get(name.upper(), '')}" for name in BUILD_VARIABLES]

    def command(self, options: BuildOptions) -> List[str]:
        return [
            *self._settings.toolchain,
            "rebuild",
            "--verbose",
            *self.variable_overrides(),
            *options.args,
        ]

    def run(self, options: BuildOptions) -> CommandResult:
        """Run the toolchain with its output attached to this process' streams.

        Returns the result on exit code 0; raises :class:`ToolchainNotFoundError`
        for 127 and :class:`ToolchainFailedError` for any other failure.
        """
        command = self.command(options)
        self._console.info(self._runner.format_command(command))
        result = self._runner.run(command, cwd=self._settings.root, check=False, stream=True)
        if result.returncode == 0:
            return result
        if result.returncode == COMMAND_NOT_FOUND:
            raise ToolchainNotFoundError(f"{self._settings.toolchain_name} not found!")
        raise ToolchainFailedError(result.returncode)
