"""Runtime identifiers and environment signals used to locate the binding."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping
import os
import platform
import sys


FORCE_BUILD_VAR = "SASS_FORCE_BUILD"
LIBSASS_EXT_VAR = "LIBSASS_EXT"
BINARY_PATH_VAR = "SASS_BINARY_PATH"
LOGLEVEL_VAR = "SASS_BUILD_LOGLEVEL"

_ARCH_ALIASES: Dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def normalize_arch(machine: str) -> str:
    """Map ``platform.machine()`` spellings onto the short names used in install paths."""
    text = machine.strip().lower()
    return _ARCH_ALIASES.get(text, text)


def env_flag(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """A signal variable counts as set when it is present and non-empty."""
    env = os.environ if environ is None else environ
    return bool(env.get(name))


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    platform: str
    arch: str
    abi: str

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "platform": self.platform,
            "arch": self.arch,
            "abi": self.abi,
        }


def current_runtime() -> RuntimeContext:
    return RuntimeContext(
        platform=sys.platform,
        arch=normalize_arch(platform.machine()),
        abi=sys.implementation.cache_tag or sys.implementation.name,
    )
