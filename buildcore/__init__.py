"""Shared core utilities for running external tools during a build."""

from .command_runner import (
    COMMAND_NOT_EXECUTABLE,
    COMMAND_NOT_FOUND,
    CommandError,
    CommandResult,
    CommandRunner,
    RecordedCommand,
    RecordingCommandRunner,
    SubprocessCommandRunner,
    format_command,
)
from .config_loader import (
    ConfigLoader,
    FILE_LOADERS,
    load_config_file,
    lookup_table,
    normalize_string_list,
)
from .console import Console
from .git_api import GitRepository

__all__ = [
    "COMMAND_NOT_EXECUTABLE",
    "COMMAND_NOT_FOUND",
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "RecordedCommand",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
    "format_command",
    "ConfigLoader",
    "FILE_LOADERS",
    "load_config_file",
    "lookup_table",
    "normalize_string_list",
    "Console",
    "GitRepository",
]
