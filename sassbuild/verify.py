"""Decide whether an installed binding can be kept."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Mapping

from buildcore.console import Console

from .environment import FORCE_BUILD_VAR, env_flag
from .extensions import has_binary
from .host import probe_binary
from .options import BuildOptions

BinaryProbe = Callable[[Path], object]


class BinaryVerifier:
    def __init__(
        self,
        *,
        console: Console,
        probe: BinaryProbe = probe_binary,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._console = console
        self._probe = probe
        self._environ = environ

    def force_requested(self, options: BuildOptions) -> bool:
        return options.force or env_flag(FORCE_BUILD_VAR, self._environ)

    def needs_build(self, options: BuildOptions, binary_path: Path) -> bool:
        if self.force_requested(options):
            return True

        if not has_binary(binary_path):
            return True

        self._console.info("Binary found at %s", binary_path)
        self._console.info("Testing binary")
        try:
            self._probe(binary_path)
        except Exception as exc:
            self._console.error("Binary has a problem: %s", exc)
            self._console.info("Building the binary locally")
            return True

        self._console.info("Binary is fine")
        return False
