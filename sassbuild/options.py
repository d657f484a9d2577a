"""Turn the raw argument list into an immutable build configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .environment import RuntimeContext, current_runtime

_TARGET_ARCH = "--target_arch"
_LIBSASS_EXT = "--libsass_ext"


@dataclass(frozen=True, slots=True)
class BuildOptions:
    platform: str
    arch: str
    debug: bool = False
    force: bool = False
    libsass_ext: bool = False
    args: Tuple[str, ...] = field(default_factory=tuple)


def _option_value(token: str, name: str) -> str:
    # The value starts one character past the option name, whatever that character is.
    return token[len(name) + 1:]


def parse_args(tokens: Iterable[str], *, runtime: RuntimeContext | None = None) -> BuildOptions:
    """Build :class:`BuildOptions` from ``tokens``.

    Only ``-f``/``--force`` is consumed. ``--target_arch``, ``--debug`` and
    ``--libsass_ext`` take effect and are still forwarded to the toolchain,
    as is every unrecognized token, in the original order.
    """
    runtime = runtime or current_runtime()
    arch = runtime.arch
    debug = False
    force = False
    libsass_ext = False
    passthrough: List[str] = []

    for token in tokens:
        if token in {"-f", "--force"}:
            force = True
            continue
        if token.startswith(_TARGET_ARCH):
            arch = _option_value(token, _TARGET_ARCH)
        elif token in {"-d", "--debug"}:
            debug = True
        elif token.startswith(_LIBSASS_EXT) and _option_value(token, _LIBSASS_EXT) != "no":
            libsass_ext = True
        passthrough.append(token)

    return BuildOptions(
        platform=runtime.platform,
        arch=arch,
        debug=debug,
        force=force,
        libsass_ext=libsass_ext,
        args=tuple(passthrough),
    )
