"""GitHub release service backed by the gh CLI."""

import logging
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from ..errors import ReleaseFailure
from ..models import ReleaseRecord
from .command import Command, CommandResult, CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


class ReleaseService(Protocol):
    """Narrow contract for a remote, tag-keyed release store."""

    def is_authenticated(self) -> bool: ...

    def exists(self, tag: str) -> bool: ...

    def create(
        self,
        tag: str,
        title: str,
        notes: str,
        target_commit: str,
        asset: Path,
    ) -> ReleaseRecord: ...

    def delete(self, tag: str) -> bool: ...

    def url_for(self, tag: str) -> str: ...


@dataclass
class GitHubReleaseService:
    """Releases on GitHub via `gh release`.

    Attributes:
        repository: owner/name slug
        cwd: Working directory for gh (the project checkout)
        host: Web host used to build release and compare URLs
    """

    repository: str
    cwd: Path
    host: str = "https://github.com"
    exec_path: str = "gh"
    runner: CommandRunner = field(default_factory=SubprocessRunner)

    @property
    def web_url(self) -> str:
        return f"{self.host.rstrip('/')}/{self.repository}"

    def _gh(self, *args: str) -> CommandResult:
        return self.runner.run(Command(self.exec_path, tuple(args), cwd=self.cwd))

    def is_authenticated(self) -> bool:
        return self._gh("auth", "status").ok

    def exists(self, tag: str) -> bool:
        return self._gh("release", "view", tag, "--repo", self.repository).ok

    def url_for(self, tag: str) -> str:
        return f"{self.web_url}/releases/tag/{tag}"

    def create(
        self,
        tag: str,
        title: str,
        notes: str,
        target_commit: str,
        asset: Path,
    ) -> ReleaseRecord:
        """Create a release with notes and one attached asset.

        Raises:
            ReleaseFailure: If gh rejects the release
        """
        with tempfile.NamedTemporaryFile(mode="w", suffix=".md", delete=False) as f:
            f.write(notes)
            notes_file = Path(f.name)
        try:
            result = self._gh(
                "release",
                "create",
                tag,
                "--repo",
                self.repository,
                "--title",
                title,
                "--notes-file",
                str(notes_file),
                "--target",
                target_commit,
                str(asset),
            )
        finally:
            notes_file.unlink(missing_ok=True)

        if not result.ok:
            raise ReleaseFailure(f"Failed to create release {tag}: {result.error_text()}")

        return ReleaseRecord(
            tag=tag,
            title=title,
            notes=notes,
            target_commit=target_commit,
            asset=asset,
            url=result.stdout.strip() or self.url_for(tag),
        )

    def delete(self, tag: str) -> bool:
        result = self._gh("release", "delete", tag, "--repo", self.repository, "--yes")
        if not result.ok:
            logger.debug("gh release delete %s: %s", tag, result.error_text())
        return result.ok
