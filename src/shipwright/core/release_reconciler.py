"""Idempotent reconciliation of the remote release for a tag.

States over a tag T:

    NoRelease --create--> Released
    Released (force=False) --skip--> Released      (no mutation)
    Released (force=True)  --delete--> NoRelease --create--> Released

Authentication and repository presence are checked before any
transition is attempted.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import (
    ArtifactNotFoundError,
    GitOperationFailure,
    ReleaseAuthError,
    ReleaseConflict,
    ReleaseFailure,
)
from ..models import ReconcileResult, ReleaseAction, ReleaseRecord
from ..services.git import GitClient
from ..services.github import ReleaseService
from .release_notes import NotesReviewer, PassthroughReviewer, generate_release_notes

logger = logging.getLogger(__name__)


@dataclass
class ReleaseReconciler:
    """Creates, skips or recreates the release for a tag.

    Attributes:
        git: Git client for the project checkout
        service: Remote release service
        project_name: Used in the release title
        web_url: Repository web URL for the changelog link
        requirements: Requirement lines for the notes template
        reviewer: Notes review hook (passthrough by default)
    """

    git: GitClient
    service: ReleaseService
    project_name: str
    web_url: str
    requirements: list[str] = field(default_factory=list)
    reviewer: NotesReviewer = field(default_factory=PassthroughReviewer)
    checked: bool = field(default=False, init=False)

    def check_preconditions(self, repository_known: bool = False) -> None:
        """Raise before any state transition if publishing is impossible.

        Runs once per reconciler; later calls return immediately.

        Args:
            repository_known: Caller already verified the git repository

        Raises:
            GitOperationFailure: If the project is not inside a git repository
            ReleaseAuthError: If the release service rejects our credentials
        """
        if self.checked:
            return
        if not repository_known and not self.git.is_repository():
            raise GitOperationFailure("Not in a git repository. Cannot create release.")
        if not self.service.is_authenticated():
            raise ReleaseAuthError(
                "Not authenticated with GitHub CLI. Run 'gh auth login' first."
            )
        self.checked = True

    def target_commit(self, tag: str) -> str:
        """Commit the tag points to if it exists locally, else HEAD."""
        if self.git.tag_exists(tag):
            commit = self.git.tag_commit(tag)
            logger.info("Using existing tag %s (commit: %s)", tag, commit[:7])
        else:
            commit = self.git.get_head_sha()
            logger.info("Using current HEAD (commit: %s)", commit[:7])
        return commit

    def build_notes(self, tag: str) -> str:
        previous = self.git.previous_tag()
        if not previous:
            logger.debug("No previous tag found for changelog link")
        notes = generate_release_notes(
            tag=tag,
            previous_tag=previous,
            web_url=self.web_url,
            requirements=self.requirements,
        )
        return self.reviewer.review(notes)

    def create(self, tag: str, asset: Path) -> ReleaseRecord:
        """Generate notes and create the release with the asset attached.

        Raises:
            ArtifactNotFoundError: If the asset file is missing
            ReleaseFailure: If the service rejects the release
        """
        if not asset.is_file():
            raise ArtifactNotFoundError(f"Artifact not found for release: {asset}")

        title = f"{self.project_name} {tag}"
        logger.info("Creating release: %s", title)
        notes = self.build_notes(tag)
        record = self.service.create(
            tag=tag,
            title=title,
            notes=notes,
            target_commit=self.target_commit(tag),
            asset=asset,
        )
        logger.info("Release created successfully: %s", title)
        return record

    def reconcile(self, tag: str, asset: Path, force: bool = False) -> ReconcileResult:
        """Bring the remote release for tag to the Released state.

        Args:
            tag: Release tag
            asset: Artifact to attach
            force: Delete and recreate an existing release

        Returns:
            ReconcileResult describing the action taken

        Raises:
            GitOperationFailure, ReleaseAuthError: Preconditions not met
            ReleaseFailure: Delete or create rejected
        """
        self.check_preconditions()

        try:
            action = self._clear_existing(tag, force)
        except ReleaseConflict as e:
            url = self.service.url_for(tag)
            logger.info("%s; view it at %s", e, url)
            logger.info("Use --force-release to recreate it")
            return ReconcileResult(
                action=ReleaseAction.SKIPPED,
                record=ReleaseRecord(tag=tag, url=url),
            )

        record = self.create(tag, asset)
        return ReconcileResult(action=action, record=record)

    def _clear_existing(self, tag: str, force: bool) -> ReleaseAction:
        """Move the tag to NoRelease, deleting an existing release if forced.

        Raises:
            ReleaseConflict: Release exists and force is not set
            ReleaseFailure: Deletion rejected
        """
        if not self.service.exists(tag):
            return ReleaseAction.CREATED
        if not force:
            raise ReleaseConflict(f"Release {tag} already exists")

        logger.info("Release %s already exists, force release enabled - deleting it", tag)
        if not self.service.delete(tag):
            raise ReleaseFailure(f"Failed to delete existing release: {tag}")
        logger.info("Deleted existing release: %s", tag)
        return ReleaseAction.RECREATED