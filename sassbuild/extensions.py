"""Where the binding is built and where it is installed."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
import os

from .config import BuildSettings
from .environment import BINARY_PATH_VAR
from .options import BuildOptions


@dataclass(frozen=True, slots=True)
class ArtifactLocation:
    build_output: Path
    install_path: Path

    def __post_init__(self) -> None:
        # Both paths are absolute and normalized before anything touches the filesystem.
        object.__setattr__(self, "build_output", Path(self.build_output).resolve())
        object.__setattr__(self, "install_path", Path(self.install_path).resolve())


def build_configuration(options: BuildOptions, settings: BuildSettings) -> str:
    return "Debug" if options.debug else settings.default_configuration


def get_build_output_path(options: BuildOptions, settings: BuildSettings) -> Path:
    return settings.root / "build" / build_configuration(options, settings) / settings.binary_name


def get_binary_path(
    options: BuildOptions,
    settings: BuildSettings,
    *,
    abi: str,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(BINARY_PATH_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_absolute() else settings.root / path
    binary_dir = f"{options.platform}-{options.arch}-{abi}"
    return settings.root / settings.vendor_dir / binary_dir / settings.binary_name


def artifact_location(
    options: BuildOptions,
    settings: BuildSettings,
    *,
    abi: str,
    environ: Mapping[str, str] | None = None,
) -> ArtifactLocation:
    return ArtifactLocation(
        build_output=get_build_output_path(options, settings),
        install_path=get_binary_path(options, settings, abi=abi, environ=environ),
    )


def has_binary(path: Path) -> bool:
    return path.is_file()
