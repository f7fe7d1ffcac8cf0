"""Artifact deployment into the target plugins directory."""

import logging
import shutil
from pathlib import Path

from ..errors import ArtifactNotFoundError, DeployFailure
from ..models import BuildArtifact, DeploymentSlot

logger = logging.getLogger(__name__)


def _same_file(a: Path, b: Path) -> bool:
    return a.resolve() == b.resolve()


def clear_stale(slot: DeploymentSlot, keep: Path | None = None) -> list[Path]:
    """Remove every artifact in the slot that belongs to this project.

    Creates the directory when it is absent. Finding nothing to remove is
    not an error. keep is never removed, so a slot that is also the build
    output directory does not lose the fresh artifact.

    Returns:
        Paths that were removed

    Raises:
        DeployFailure: If the directory cannot be created or a file removed
    """
    if not slot.directory.is_dir():
        logger.warning("Deployment directory does not exist: %s", slot.directory)
        logger.info("Creating deployment directory...")
        try:
            slot.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DeployFailure(f"Cannot create {slot.directory}: {e}") from e
        return []

    removed: list[Path] = []
    for path in slot.matching_files():
        if keep is not None and _same_file(path, keep):
            continue
        logger.info("Removing old artifact: %s", path.name)
        try:
            path.unlink()
        except OSError as e:
            raise DeployFailure(f"Cannot remove {path}: {e}") from e
        removed.append(path)

    if removed:
        logger.info("Removed %d old artifact file(s)", len(removed))
    else:
        logger.info("No old artifact versions found to remove")
    return removed


def install(artifact: BuildArtifact, slot: DeploymentSlot) -> Path:
    """Copy the artifact into the slot.

    Returns:
        Path of the installed file

    Raises:
        ArtifactNotFoundError: If the artifact file does not exist
        DeployFailure: If the copy fails
    """
    if not artifact.path.is_file():
        raise ArtifactNotFoundError(f"Artifact file not found: {artifact.path}")

    target = slot.directory / artifact.filename
    if _same_file(target, artifact.path):
        logger.info("Artifact already in place: %s", target.name)
        return target
    try:
        slot.directory.mkdir(parents=True, exist_ok=True)
        shutil.copy2(artifact.path, target)
    except OSError as e:
        raise DeployFailure(f"Failed to copy {artifact.filename} to {slot.directory}: {e}") from e

    logger.info("Deployed: %s", target.name)
    return target


def deploy(artifact: BuildArtifact, slot: DeploymentSlot) -> Path:
    """Replace this project's artifact in the slot with a new build."""
    clear_stale(slot, keep=artifact.path)
    return install(artifact, slot)
