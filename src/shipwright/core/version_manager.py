"""Semantic version parsing, incrementing and write-back."""

import logging
from pathlib import Path
from typing import Protocol

from ..constants import VERSION_LEVELS
from ..errors import InvalidVersionLevel
from ..models import VersionState
from ..services.maven import read_descriptor_version

logger = logging.getLogger(__name__)


class DescriptorUpdater(Protocol):
    """Build tool facility that rewrites the descriptor version."""

    def set_version(self, version: str) -> None: ...


def parse(descriptor: Path) -> VersionState:
    """Read and validate the version stored in the project descriptor.

    Raises:
        VersionFormatError: If the stored string is not major.minor.patch
    """
    return VersionState.from_string(read_descriptor_version(descriptor))


def increment(state: VersionState, level: str) -> VersionState:
    """Advance a version by one level.

    patch bumps patch only; minor bumps minor and zeroes patch; major
    bumps major and zeroes minor and patch.

    Raises:
        InvalidVersionLevel: If level is not major, minor or patch
    """
    if level == "major":
        return VersionState(major=state.major + 1, minor=0, patch=0)
    if level == "minor":
        return VersionState(major=state.major, minor=state.minor + 1, patch=0)
    if level == "patch":
        return VersionState(major=state.major, minor=state.minor, patch=state.patch + 1)
    raise InvalidVersionLevel(
        f"Invalid version type: {level} (must be: {', '.join(VERSION_LEVELS)})"
    )


def override(explicit: str) -> VersionState:
    """Use an exact caller-supplied version, bypassing increment.

    Raises:
        VersionFormatError: If explicit is not major.minor.patch
    """
    return VersionState.from_string(explicit)


def resolve(
    current: VersionState,
    level: str = "patch",
    explicit: str | None = None,
    no_increment: bool = False,
) -> VersionState:
    """Compute the target version for this run.

    An explicit version wins over everything; otherwise no_increment keeps
    the current version and the default is to increment by level.
    """
    if explicit:
        target = override(explicit)
        logger.info("Setting version to: %s", target)
    elif no_increment:
        target = current
        logger.info("Using current version: %s", target)
    else:
        target = increment(current, level)
        logger.info("Incrementing %s version: %s -> %s", level, current, target)
    return target


def apply(state: VersionState, updater: DescriptorUpdater) -> None:
    """Write the resolved version into the descriptor via the build tool.

    Raises:
        BuildFailure: If the build tool cannot update the descriptor
    """
    logger.info("Updating project version to %s", state)
    updater.set_version(str(state))
