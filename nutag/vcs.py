"""
Thin wrappers around the git and jj command line tools.

Each backend knows how to list and fetch tags, which branch (or bookmarks)
the user is on, which commit a new tag should point to, and how to create
and push that tag.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from nutag.errors import VcsError

logger = logging.getLogger(__name__)


class Vcs(ABC):
    executable: str = ""

    def __init__(self, root: Path):
        self.root = root

    def _run(self, args: List[str], executable: Optional[str] = None) -> str:
        """Run a command in the repository root and return its stdout."""
        executable = executable or self.executable
        command = [executable] + args
        logger.debug("running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=self.root,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as exc:
            raise VcsError(command, f"{executable} is not installed") from exc
        except subprocess.CalledProcessError as exc:
            raise VcsError(command, exc.stderr or "") from exc
        return result.stdout

    def _lines(self, args: List[str]) -> List[str]:
        return [line.strip() for line in self._run(args).splitlines() if line.strip()]

    @abstractmethod
    def fetch_tags(self, remote: str) -> None: ...

    @abstractmethod
    def list_tags(self) -> List[str]: ...

    @abstractmethod
    def current_branches(self) -> List[str]: ...

    @abstractmethod
    def target_commit(self) -> str: ...

    @abstractmethod
    def remote_url(self, remote: str) -> Optional[str]: ...

    @abstractmethod
    def create_tag(self, name: str, commit: str) -> None: ...

    @abstractmethod
    def push_tag(self, name: str, remote: str) -> None: ...


class Git(Vcs):
    executable = "git"

    def fetch_tags(self, remote: str) -> None:
        self._run(["fetch", "--tags", remote])

    def list_tags(self) -> List[str]:
        return self._lines(["tag", "--list"])

    def current_branches(self) -> List[str]:
        branch = self._run(["rev-parse", "--abbrev-ref", "HEAD"]).strip()
        # Detached HEAD
        if branch == "HEAD":
            return []
        return [branch]

    def target_commit(self) -> str:
        return self._run(["rev-parse", "HEAD"]).strip()

    def remote_url(self, remote: str) -> Optional[str]:
        try:
            return self._run(["remote", "get-url", remote]).strip() or None
        except VcsError:
            return None

    def create_tag(self, name: str, commit: str) -> None:
        self._run(["tag", name, commit])

    def push_tag(self, name: str, remote: str) -> None:
        self._run(["push", remote, f"refs/tags/{name}"])


class Jujutsu(Vcs):
    """Jujutsu repositories backed by git.

    The working-copy commit ``@`` is usually empty, so tags go on its
    parent ``@-`` and the bookmarks found there stand in for the branch.
    """

    executable = "jj"
    revision = "@-"

    def fetch_tags(self, remote: str) -> None:
        self._run(["git", "fetch", "--remote", remote])

    def list_tags(self) -> List[str]:
        return self._lines(["tag", "list", "-T", 'name ++ "\\n"'])

    def current_branches(self) -> List[str]:
        output = self._run(
            [
                "log",
                "--no-graph",
                "-r",
                self.revision,
                "-T",
                'local_bookmarks.map(|b| b.name()).join(" ")',
            ]
        )
        return output.split()

    def target_commit(self) -> str:
        return self._run(["log", "--no-graph", "-r", self.revision, "-T", "commit_id"]).strip()

    def remote_url(self, remote: str) -> Optional[str]:
        for line in self._lines(["git", "remote", "list"]):
            name, _, url = line.partition(" ")
            if name == remote:
                return url.strip() or None
        return None

    def _git_dir(self) -> str:
        return self._run(["git", "root"]).strip()

    def create_tag(self, name: str, commit: str) -> None:
        self._run(["tag", "set", name, "-r", commit])

    def push_tag(self, name: str, remote: str) -> None:
        # jj git push only moves bookmarks; tags go through git itself
        self._run(["--git-dir", self._git_dir(), "push", remote, f"refs/tags/{name}"], executable="git")


def detect(path: Path) -> Vcs:
    """Find the repository containing ``path``, preferring jj over git."""
    path = path.resolve()
    for directory in [path] + list(path.parents):
        if (directory / ".jj").is_dir():
            return Jujutsu(directory)
        if (directory / ".git").exists():
            return Git(directory)
    raise VcsError(["detect", str(path)], "not inside a git or jj repository")
