"""Removal of a tag and its release, locally and remotely."""

import logging
from collections.abc import Callable

from ..errors import ConfigError
from ..models import Outcome, StageResult
from ..services.git import GitClient
from ..services.github import ReleaseService

logger = logging.getLogger(__name__)


def clean_tag(
    git: GitClient,
    tag: str,
    remote: str = "origin",
    service: ReleaseService | None = None,
    get_service: Callable[[], ReleaseService] | None = None,
) -> list[StageResult]:
    """Delete the local tag, the remote tag and the release for tag.

    Every step is best-effort: something that does not exist, or cannot
    be deleted, is reported and the next step still runs. get_service is
    only called once both tags are handled, so a release service that
    cannot be configured never blocks the tag deletions.
    """
    logger.info("Cleaning up existing tag: %s", tag)
    results: list[StageResult] = []

    if git.delete_tag(tag):
        logger.info("Deleted local tag: %s", tag)
        results.append(StageResult(stage="local-tag", message=f"Deleted local tag {tag}"))
    else:
        logger.info("Local tag %s doesn't exist", tag)
        results.append(
            StageResult(
                stage="local-tag",
                outcome=Outcome.RECOVERABLE,
                message=f"Local tag {tag} doesn't exist",
            )
        )

    if git.delete_remote_tag(remote, tag).ok:
        logger.info("Deleted remote tag: %s", tag)
        results.append(StageResult(stage="remote-tag", message=f"Deleted remote tag {tag}"))
    else:
        logger.info("Remote tag %s doesn't exist or couldn't be deleted", tag)
        results.append(
            StageResult(
                stage="remote-tag",
                outcome=Outcome.RECOVERABLE,
                message=f"Remote tag {tag} doesn't exist or couldn't be deleted",
            )
        )

    if service is None and get_service is not None:
        try:
            service = get_service()
        except ConfigError as e:
            logger.warning("%s; release not deleted", e)
            results.append(
                StageResult(
                    stage="release",
                    outcome=Outcome.RECOVERABLE,
                    message="Cannot determine the GitHub repository; release not deleted",
                )
            )
            return results

    if service is not None:
        if service.delete(tag):
            logger.info("Deleted release: %s", tag)
            results.append(StageResult(stage="release", message=f"Deleted release {tag}"))
        else:
            logger.info("Release %s doesn't exist", tag)
            results.append(
                StageResult(
                    stage="release",
                    outcome=Outcome.RECOVERABLE,
                    message=f"Release {tag} doesn't exist",
                )
            )

    return results
