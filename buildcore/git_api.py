"""Git API wrapper integrating pygit2 for reads and CLI for writes."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional

import pygit2

from .command_runner import (
    CommandResult,
    CommandRunner,
    SubprocessCommandRunner,
)


class GitRepository:
    """
    Thin API over a local git working tree.

    Design Philosophy:
    - READ operations use pygit2 and never touch the network.
    - WRITE operations (clone, checkout) use the Git CLI through a command runner,
      so callers get the CLI's exit code and error stream.
    """

    def __init__(
        self, path: Path | str, runner: Optional[CommandRunner] = None
    ) -> None:
        self.path = Path(path).resolve()
        self._repo: Optional[pygit2.Repository] = None
        self._runner = runner or SubprocessCommandRunner()

    # --- Core & Properties (pygit2) ---

    def open(self) -> None:
        """Opens the repository. Raises exception if not found."""
        try:
            self._repo = pygit2.Repository(str(self.path))
        except pygit2.GitError as e:
            raise RuntimeError(f"Failed to open repository at {self.path}: {e}") from e

    @property
    def repo(self) -> pygit2.Repository:
        if self._repo is None:
            self.open()
        return self._repo  # type: ignore

    @property
    def is_valid(self) -> bool:
        """Checks if the path is a valid git repository."""
        if not (self.path / ".git").exists():
            return False
        try:
            self.open()
            return True
        except RuntimeError:
            return False

    def get_head_commit(self) -> Optional[str]:
        """Returns the full commit hash of HEAD, or None for an unborn HEAD."""
        try:
            if self.repo.head_is_unborn:
                return None
            return str(self.repo.head.target)
        except pygit2.GitError:
            return None

    def resolve_rev(self, spec: str) -> Optional[str]:
        """Resolves a revision (branch, tag, sha) to a full commit hash."""
        try:
            obj = self.repo.revparse_single(spec)
            if isinstance(obj, pygit2.Tag):
                obj = obj.peel(pygit2.Commit)
            return str(obj.id)
        except (KeyError, ValueError, pygit2.GitError):
            return None

    def head_matches(self, spec: str) -> bool:
        """True when HEAD points at the commit ``spec`` resolves to."""
        head = self.get_head_commit()
        return head is not None and head == self.resolve_rev(spec)

    # --- CLI Helper ---

    def _run_git(
        self,
        args: List[str],
        *,
        check: bool = True,
        env: Optional[Mapping[str, str]] = None,
    ) -> CommandResult:
        return self._runner.run(["git"] + args, cwd=self.path, env=env, check=check)

    # --- Write Actions (CLI) ---

    def checkout(self, target: str, *, check: bool = True) -> CommandResult:
        """Checkout a branch, tag or commit."""
        return self._run_git(["checkout", target], check=check)

    # --- Factory ---

    @staticmethod
    def clone(
        url: str,
        path: Path | str,
        *,
        runner: Optional[CommandRunner] = None,
        check: bool = True,
    ) -> tuple[GitRepository, CommandResult]:
        """Clone ``url`` into ``path`` (CLI) and return the repository with the clone outcome."""
        runner = runner or SubprocessCommandRunner()
        result = runner.run(["git", "clone", url, str(path)], check=check)
        return GitRepository(path, runner=runner), result
