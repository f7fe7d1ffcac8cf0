"""Version-bump commits and annotated release tags."""

import logging
from dataclasses import dataclass, field

from ..constants import COMMIT_MESSAGE_TEMPLATE, TAG_PREFIX
from ..errors import TagAlreadyExists, TagPushFailure
from ..models import Outcome, StageResult, Tag
from ..services.git import GitClient

logger = logging.getLogger(__name__)


@dataclass
class TagReport:
    """What publishing a version to git produced."""

    tag: Tag
    results: list[StageResult] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [r.message for r in self.results if r.outcome == Outcome.RECOVERABLE]


@dataclass
class GitTagger:
    """Commits the version bump, tags it and pushes the tag."""

    git: GitClient
    project_name: str
    remote: str = "origin"
    tag_prefix: str = TAG_PREFIX
    commit_message: str = COMMIT_MESSAGE_TEMPLATE

    def tag_name(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"

    def commit_version_bump(self, version: str, files: list[str]) -> StageResult:
        """Stage the descriptor and metadata files and commit them.

        Files that do not exist are skipped. Nothing to commit is a no-op.

        Raises:
            GitOperationFailure: If staging or committing fails
        """
        if not self.git.has_changes():
            logger.info("No changes to commit")
            return StageResult(stage="commit", message="No changes to commit")

        existing = [f for f in files if (self.git.cwd / f).exists()]
        self.git.stage_files(existing)

        if not self.git.has_staged_changes():
            logger.info("No version changes staged; skipping commit")
            return StageResult(stage="commit", message="No version changes to commit")

        message = self.commit_message.format(version=version)
        sha = self.git.commit(message)
        logger.info("Committed version bump: %s", sha[:8])
        return StageResult(stage="commit", message=f"Committed {sha[:8]}: {message}")

    def tag(self, version: str) -> Tag:
        """Create the annotated tag for a version.

        Raises:
            TagAlreadyExists: If the tag exists locally (it is left untouched)
            GitOperationFailure: If tag creation fails
        """
        name = self.tag_name(version)
        if self.git.tag_exists(name):
            raise TagAlreadyExists(f"Git tag {name} already exists")

        self.git.create_annotated_tag(name, f"{self.project_name} {name}")
        logger.info("Created git tag: %s", name)
        return Tag(name=name, version=version)

    def push(self, tag: Tag) -> StageResult:
        """Push a tag to the remote.

        Raises:
            TagPushFailure: If the push is rejected or the remote unreachable
        """
        result = self.git.push_tag(self.remote, tag.name)
        if not result.ok:
            raise TagPushFailure(
                f"Failed to push tag {tag.name} to {self.remote} "
                f"(this is okay if working locally): {result.error_text()}"
            )
        logger.info("Pushed tag to remote: %s", tag.name)
        return StageResult(stage="push", message=f"Pushed {tag.name}")

    def publish(self, version: str, files: list[str]) -> TagReport:
        """Commit, tag and push, downgrading non-fatal conditions to warnings."""
        results = [self.commit_version_bump(version, files)]

        try:
            tag = self.tag(version)
        except TagAlreadyExists as e:
            logger.warning("%s; using existing tag", e)
            results.append(
                StageResult(stage="tag", outcome=Outcome.RECOVERABLE, message=str(e))
            )
            return TagReport(
                tag=Tag(name=self.tag_name(version), version=version, created=False),
                results=results,
            )
        results.append(StageResult(stage="tag", message=f"Created {tag.name}"))

        try:
            results.append(self.push(tag))
        except TagPushFailure as e:
            logger.warning("%s", e)
            results.append(
                StageResult(stage="push", outcome=Outcome.RECOVERABLE, message=str(e))
            )
        return TagReport(tag=tag, results=results)
