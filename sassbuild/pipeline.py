"""Verify-or-build pipeline for the binding."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from buildcore.command_runner import CommandRunner
from buildcore.console import Console

from .build import BuildInvoker
from .config import BuildSettings
from .dependencies import DependencyFetcher
from .extensions import ArtifactLocation, artifact_location
from .host import probe_binary
from .install import ArtifactRelocator
from .options import BuildOptions
from .verify import BinaryProbe, BinaryVerifier


class PipelineOutcome(str, Enum):
    VERIFIED = "verified"
    INSTALLED = "installed"
    NOT_INSTALLED = "not-installed"


@dataclass(slots=True)
class PipelineResult:
    outcome: PipelineOutcome
    location: ArtifactLocation


class Pipeline:
    """Keep a working binding if there is one, otherwise fetch, build and install.

    Fatal conditions (fetch failure, missing toolchain, failed build) propagate
    as :class:`~sassbuild.errors.SassBuildError`; deciding the exit status is
    left to the caller.
    """

    def __init__(
        self,
        *,
        settings: BuildSettings,
        runner: CommandRunner,
        console: Console,
        abi: str,
        probe: BinaryProbe = probe_binary,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings
        self._console = console
        self._abi = abi
        self._environ = environ
        self._verifier = BinaryVerifier(console=console, probe=probe, environ=environ)
        self._fetcher = DependencyFetcher(settings=settings, runner=runner, console=console, environ=environ)
        self._invoker = BuildInvoker(settings=settings, runner=runner, console=console, environ=environ)
        self._relocator = ArtifactRelocator(console)

    def locate(self, options: BuildOptions) -> ArtifactLocation:
        return artifact_location(options, self._settings, abi=self._abi, environ=self._environ)

    def run(self, options: BuildOptions) -> PipelineResult:
        location = self.locate(options)
        if not self._verifier.needs_build(options, location.install_path):
            return PipelineResult(PipelineOutcome.VERIFIED, location)
        return self.build(options, location)

    def build(self, options: BuildOptions, location: ArtifactLocation) -> PipelineResult:
        self._fetcher.ensure(options)
        self._invoker.run(options)
        installed = self._relocator.install(location)
        outcome = PipelineOutcome.INSTALLED if installed else PipelineOutcome.NOT_INSTALLED
        return PipelineResult(outcome, location)
