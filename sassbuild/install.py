"""Move a freshly built binding into its install location."""
from __future__ import annotations

import os

from buildcore.console import Console

from .extensions import ArtifactLocation


class ArtifactRelocator:
    def __init__(self, console: Console) -> None:
        self._console = console

    def install(self, location: ArtifactLocation) -> bool:
        """Rename the toolchain output onto the install path.

        Failures are logged and reported through the return value only.
        """
        install_dir = location.install_path.parent
        try:
            install_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._console.error("%s", exc)
            return False

        if not location.build_output.is_file():
            self._console.error("Build succeeded but target not found")
            return False

        try:
            os.replace(location.build_output, location.install_path)
        except OSError as exc:
            self._console.error("%s", exc)
            return False

        self._console.info("Installed to %s", location.install_path)
        return True
