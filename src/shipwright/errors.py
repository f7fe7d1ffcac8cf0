"""Error taxonomy for the release pipeline.

Every error carries the process exit code the CLI uses when it aborts.
Recoverable conditions (TagPushFailure, TagAlreadyExists, ReleaseConflict)
are still modelled as exceptions so stages can raise them internally, but
they are caught and downgraded to warnings before reaching the CLI.
"""


class ShipwrightError(Exception):
    """Base exception for pipeline errors."""

    exit_code = 1


class MissingDependency(ShipwrightError):
    """A required external tool is not installed."""

    exit_code = 2


class ConfigError(ShipwrightError):
    """Configuration file could not be read or validated."""

    exit_code = 3


class VersionFormatError(ShipwrightError):
    """Version string is not strict major.minor.patch."""

    exit_code = 10


class InvalidVersionLevel(ShipwrightError):
    """Increment level is not one of major, minor, patch."""

    exit_code = 11


class BuildFailure(ShipwrightError):
    """The external build tool reported failure."""

    exit_code = 12


class ArtifactNotFoundError(ShipwrightError):
    """Expected build output is missing."""

    exit_code = 13


class DeployFailure(ShipwrightError):
    """Copying the artifact into the deployment directory failed."""

    exit_code = 14


class GitOperationFailure(ShipwrightError):
    """Commit or tag creation failed, or no repository is present."""

    exit_code = 20


class TagPushFailure(ShipwrightError):
    """Pushing a tag to the remote failed (non-fatal)."""

    exit_code = 21


class TagAlreadyExists(ShipwrightError):
    """Tag already exists locally (non-fatal)."""

    exit_code = 22


class ReleaseAuthError(ShipwrightError):
    """Not authenticated against the release service."""

    exit_code = 30


class ReleaseFailure(ShipwrightError):
    """The release service rejected a create or delete."""

    exit_code = 31


class ReleaseConflict(ShipwrightError):
    """Release already exists and force was not requested (informational)."""

    exit_code = 0
