"""Error types raised by the build pipeline."""
from __future__ import annotations


def one_line(text: str) -> str:
    """Collapse captured tool output into a single diagnostic line."""
    return " ".join(text.split())


class SassBuildError(RuntimeError):
    """Base class for failures that end the invocation with a non-zero status."""


class ConfigError(SassBuildError):
    """The project manifest is missing or invalid."""


class DependencyFetchError(SassBuildError):
    """Cloning or checking out the LibSass sources failed."""


class ToolchainNotFoundError(SassBuildError):
    """The compiler toolchain could not be started (exit code 127)."""


class ToolchainFailedError(SassBuildError):
    def __init__(self, returncode: int) -> None:
        super().__init__(f"Build failed with error code: {returncode}")
        self.returncode = returncode


__all__ = [
    "ConfigError",
    "DependencyFetchError",
    "SassBuildError",
    "ToolchainFailedError",
    "ToolchainNotFoundError",
    "one_line",
]
