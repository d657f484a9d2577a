"""Command line entry point: ``sassbuild [-f] [-d] [--target_arch=ARCH] [--libsass_ext=MODE] [ARGS...]``."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping
import os
import sys

from buildcore.command_runner import CommandRunner, SubprocessCommandRunner
from buildcore.console import Console

from .config import load_settings
from .environment import LOGLEVEL_VAR, current_runtime
from .errors import SassBuildError, one_line
from .host import probe_binary
from .options import parse_args
from .pipeline import Pipeline, PipelineOutcome
from .verify import BinaryProbe

LOG_PREFIX = "sassbuild"


def main(
    argv: Iterable[str] | None = None,
    *,
    workspace: Path | None = None,
    runner: CommandRunner | None = None,
    probe: BinaryProbe = probe_binary,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the pipeline and map its result to a process status."""
    tokens = list(sys.argv[1:] if argv is None else argv)
    env = os.environ if environ is None else environ
    console = Console.from_environment(LOGLEVEL_VAR, prefix=LOG_PREFIX, environ=env)
    workspace = workspace or Path.cwd()
    runtime = current_runtime()
    console.debug("Runtime: %s", runtime.to_mapping())

    try:
        settings = load_settings(workspace)
        options = parse_args(tokens, runtime=runtime)
        pipeline = Pipeline(
            settings=settings,
            runner=runner or SubprocessCommandRunner(),
            console=console,
            abi=runtime.abi,
            probe=probe,
            environ=env,
        )
        result = pipeline.run(options)
    except SassBuildError as exc:
        console.error("%s", one_line(str(exc)))
        return 1

    if result.outcome is PipelineOutcome.NOT_INSTALLED:
        console.warn("Binding was built but not installed at %s", result.location.install_path)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
