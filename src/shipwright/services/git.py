"""Git operations for shipwright."""

import re
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import GitOperationFailure
from .command import Command, CommandResult, CommandRunner, SubprocessRunner

_REMOTE_URL_PATTERN = re.compile(
    r"^(?:https?://|ssh://)?(?:[^@/]+@)?(?P<host>[^:/]+)[:/](?P<slug>[^/]+/[^/]+?)(?:\.git)?/?$"
)


@dataclass
class GitClient:
    """Git commands bound to a working directory."""

    cwd: Path
    runner: CommandRunner = field(default_factory=SubprocessRunner)
    exec_path: str = "git"

    def run(self, *args: str, check: bool = True) -> str:
        """Run git command and return stripped stdout.

        Args:
            *args: Git arguments
            check: Raise on non-zero exit

        Returns:
            Command stdout, stripped

        Raises:
            GitOperationFailure: If command fails and check=True
        """
        result = self.run_result(*args)
        if check and not result.ok:
            raise GitOperationFailure(f"git {' '.join(args)} failed: {result.error_text()}")
        return result.stdout.strip()

    def run_result(self, *args: str) -> CommandResult:
        return self.runner.run(Command(self.exec_path, tuple(args), cwd=self.cwd))

    def is_repository(self) -> bool:
        return self.run_result("rev-parse", "--git-dir").ok

    def get_repo_root(self) -> Path:
        """Get git repository root directory.

        Raises:
            GitOperationFailure: If not in a git repository
        """
        result = self.run_result("rev-parse", "--show-toplevel")
        if not result.ok:
            raise GitOperationFailure("Not a git repository")
        return Path(result.stdout.strip())

    def get_head_sha(self) -> str:
        return self.run("rev-parse", "HEAD")

    def has_changes(self) -> bool:
        """True if the worktree or index differs from HEAD."""
        unstaged = self.run_result("diff", "--quiet")
        staged = self.run_result("diff", "--cached", "--quiet")
        return not (unstaged.ok and staged.ok)

    def has_staged_changes(self) -> bool:
        return not self.run_result("diff", "--cached", "--quiet").ok

    def stage_files(self, files: list[str]) -> None:
        if files:
            self.run("add", "--", *files)

    def commit(self, message: str) -> str:
        """Commit staged changes and return the new HEAD SHA."""
        self.run("commit", "-m", message)
        return self.get_head_sha()

    def tag_exists(self, tag: str) -> bool:
        return self.run("tag", "-l", tag, check=False) == tag

    def create_annotated_tag(self, tag: str, message: str) -> None:
        self.run("tag", "-a", tag, "-m", message)

    def delete_tag(self, tag: str) -> bool:
        return self.run_result("tag", "-d", tag).ok

    def tag_commit(self, tag: str) -> str:
        """Commit SHA that a tag points to."""
        return self.run("rev-list", "-n", "1", tag)

    def previous_tag(self) -> str:
        """Most recent tag reachable from HEAD~1, or "" if there is none."""
        result = self.run_result("describe", "--tags", "--abbrev=0", "HEAD~1")
        return result.stdout.strip() if result.ok else ""

    def push_tag(self, remote: str, tag: str) -> CommandResult:
        return self.run_result("push", remote, tag)

    def delete_remote_tag(self, remote: str, tag: str) -> CommandResult:
        return self.run_result("push", remote, "--delete", tag)

    def remote_url(self, remote: str) -> str | None:
        result = self.run_result("remote", "get-url", remote)
        return result.stdout.strip() if result.ok else None


def parse_repository_slug(url: str) -> str | None:
    """Extract owner/name from a git remote URL.

    Handles https (https://github.com/owner/name.git) and scp-style ssh
    (git@github.com:owner/name.git) forms.
    """
    match = _REMOTE_URL_PATTERN.match(url.strip())
    if not match:
        return None
    return match.group("slug")
