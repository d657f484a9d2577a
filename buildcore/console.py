"""Levelled console output used for build diagnostics."""
from __future__ import annotations

from typing import Mapping
import os
import sys


class Console:
    """Simple console output handler with configurable log level.

    Levels: none < error < warn < info < debug
    Errors and warnings go to stderr, everything else to stdout.
    """

    LEVELS: Mapping[str, int] = {
        "none": 0,
        "error": 1,
        "warn": 2,
        "info": 3,
        "debug": 4,
    }

    def __init__(self, level: str = "info", *, prefix: str | None = None) -> None:
        self.level_name = level if level in self.LEVELS else "info"
        self.level = self.LEVELS[self.level_name]
        self.prefix = prefix

    @classmethod
    def from_environment(
        cls,
        variable: str,
        *,
        prefix: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Console":
        env = os.environ if environ is None else environ
        level = env.get(variable, "").strip().lower() or "info"
        return cls(level, prefix=prefix)

    def _format(self, tag: str, message: str, args: tuple) -> str:
        if args:
            message = message % args
        if self.prefix:
            return f"[{tag}] {self.prefix}: {message}"
        return f"[{tag}] {message}"

    def error(self, message: str, *args: object) -> None:
        if self.level >= self.LEVELS["error"]:
            print(self._format("ERROR", message, args), file=sys.stderr)

    def warn(self, message: str, *args: object) -> None:
        if self.level >= self.LEVELS["warn"]:
            print(self._format("WARN", message, args), file=sys.stderr)

    def info(self, message: str, *args: object) -> None:
        if self.level >= self.LEVELS["info"]:
            print(self._format("INFO", message, args))

    def debug(self, message: str, *args: object) -> None:
        if self.level >= self.LEVELS["debug"]:
            print(self._format("DEBUG", message, args))
