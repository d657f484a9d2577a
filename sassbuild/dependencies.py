"""Make sure the LibSass sources are available at the pinned revision."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Mapping
import os

from buildcore.command_runner import CommandResult, CommandRunner
from buildcore.console import Console
from buildcore.git_api import GitRepository

from .config import BuildSettings
from .environment import LIBSASS_EXT_VAR, env_flag
from .errors import DependencyFetchError
from .options import BuildOptions


class DependencyState(str, Enum):
    PRESENT = "present"
    FETCHABLE = "fetchable"
    OVERRIDDEN = "overridden"


class DependencyFetcher:
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

    @property
    def source_path(self) -> Path:
        return self._settings.source_path

    def probe(self, options: BuildOptions) -> DependencyState:
        if options.libsass_ext or env_flag(LIBSASS_EXT_VAR, self._environ):
            return DependencyState.OVERRIDDEN
        try:
            os.stat(self.source_path)
        except FileNotFoundError:
            return DependencyState.FETCHABLE
        except OSError as exc:
            # Only a missing path is fetched; anything else is left to the build.
            self._console.debug("Cannot inspect %s: %s", self.source_path, exc)
        return DependencyState.PRESENT

    def ensure(self, options: BuildOptions) -> DependencyState:
        """Fetch the sources when they are missing and no external LibSass is configured.

        Raises :class:`DependencyFetchError` when clone or checkout fails; a partial
        clone is left in place.
        """
        state = self.probe(options)
        if state is DependencyState.OVERRIDDEN:
            self._console.debug("Using externally supplied LibSass, skipping fetch")
        elif state is DependencyState.PRESENT:
            self._inspect_existing()
        else:
            self._fetch()
        return state

    def _fetch(self) -> None:
        settings = self._settings
        self._console.info("Detected a git install")
        self._console.info("Cloning LibSass into %s", self.source_path)
        repository, result = GitRepository.clone(
            settings.libsass_repository,
            self.source_path,
            runner=self._runner,
            check=False,
        )
        self._raise_on_failure(result)

        self._console.info("Checking out LibSass to %s", settings.libsass)
        self._raise_on_failure(repository.checkout(settings.libsass, check=False))

    @staticmethod
    def _raise_on_failure(result: CommandResult) -> None:
        if not result.ok:
            raise DependencyFetchError(result.stderr or f"git exited with code {result.returncode}")

    def _inspect_existing(self) -> None:
        # Presence alone decides; this only reports trees that look incomplete.
        repository = GitRepository(self.source_path, runner=self._runner)
        if not repository.is_valid:
            self._console.debug("%s is not a git checkout, using it as-is", self.source_path)
            return
        if not repository.head_matches(self._settings.libsass):
            self._console.warn(
                "LibSass at %s is not checked out at %s; remove it to fetch again",
                self.source_path,
                self._settings.libsass,
            )
