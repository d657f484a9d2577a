"""Project manifest loading for the ``[tool.sassbuild]`` table."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Tuple

from buildcore.config_loader import load_config_file, lookup_table, normalize_string_list

from .errors import ConfigError

MANIFEST_NAME = "pyproject.toml"
MANIFEST_TABLE = "tool.sassbuild"

DEFAULT_REPOSITORY = "https://github.com/sass/libsass.git"
DEFAULT_SOURCE_DIR = "src/libsass"
DEFAULT_TOOLCHAIN = ("node-gyp",)
DEFAULT_CONFIGURATION = "Release"
DEFAULT_BINARY_NAME = "binding.node"
DEFAULT_VENDOR_DIR = "vendor"


@dataclass(frozen=True, slots=True)
class BuildSettings:
    root: Path
    libsass: str
    libsass_repository: str = DEFAULT_REPOSITORY
    source_dir: str = DEFAULT_SOURCE_DIR
    toolchain: Tuple[str, ...] = DEFAULT_TOOLCHAIN
    default_configuration: str = DEFAULT_CONFIGURATION
    binary_name: str = DEFAULT_BINARY_NAME
    vendor_dir: str = DEFAULT_VENDOR_DIR

    @property
    def source_path(self) -> Path:
        return (self.root / self.source_dir).resolve()

    @property
    def toolchain_name(self) -> str:
        return Path(self.toolchain[-1]).name


def _string_field(table: Mapping[str, Any], key: str, default: str | None) -> str:
    value = table.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{MANIFEST_TABLE}.{key} must be a non-empty string")
    return value.strip()


def settings_from_mapping(root: Path, table: Mapping[str, Any]) -> BuildSettings:
    try:
        toolchain = tuple(normalize_string_list(table.get("toolchain", list(DEFAULT_TOOLCHAIN)), field_name="toolchain"))
    except TypeError as exc:
        raise ConfigError(f"{MANIFEST_TABLE}.{exc}") from exc
    if not toolchain:
        raise ConfigError(f"{MANIFEST_TABLE}.toolchain must name the toolchain entry point")

    return BuildSettings(
        root=root.resolve(),
        libsass=_string_field(table, "libsass", None),
        libsass_repository=_string_field(table, "libsass_repository", DEFAULT_REPOSITORY),
        source_dir=_string_field(table, "source_dir", DEFAULT_SOURCE_DIR),
        toolchain=toolchain,
        default_configuration=_string_field(table, "default_configuration", DEFAULT_CONFIGURATION),
        binary_name=_string_field(table, "binary_name", DEFAULT_BINARY_NAME),
        vendor_dir=_string_field(table, "vendor_dir", DEFAULT_VENDOR_DIR),
    )


def load_settings(root: Path) -> BuildSettings:
    """Read the manifest in ``root`` once and validate it."""
    manifest = root / MANIFEST_NAME
    if not manifest.is_file():
        raise ConfigError(f"Manifest not found: {manifest}")
    try:
        data = load_config_file(manifest)
        table = lookup_table(data, MANIFEST_TABLE)
    except (OSError, ValueError, TypeError) as exc:
        raise ConfigError(f"Unable to read {manifest}: {exc}") from exc
    if not table:
        raise ConfigError(f"{manifest} has no [{MANIFEST_TABLE}] table")
    return settings_from_mapping(root, table)
