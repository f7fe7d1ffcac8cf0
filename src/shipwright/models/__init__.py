"""Pydantic data models for shipwright.

This package defines the data structures shared by the pipeline stages:
- Semantic versions (VersionState)
- Content snapshots (ProjectSnapshot)
- Build artifacts and deployment slots (BuildArtifact, DeploymentSlot)
- Tags, stage outcomes and release records
- Persisted caches (PersistedState)

Example:
    >>> from shipwright.models import VersionState
    >>> str(VersionState.from_string("1.2.3"))
    '1.2.3'
"""

from .artifact import BuildArtifact, DeploymentSlot
from .outcome import Outcome, StageResult, Tag
from .release import ReconcileResult, ReleaseAction, ReleaseRecord
from .snapshot import ProjectSnapshot
from .state import PersistedState
from .version import VERSION_PATTERN, VersionState

__all__ = [
    "VERSION_PATTERN",
    "BuildArtifact",
    "DeploymentSlot",
    "Outcome",
    "PersistedState",
    "ProjectSnapshot",
    "ReconcileResult",
    "ReleaseAction",
    "ReleaseRecord",
    "StageResult",
    "Tag",
    "VersionState",
]
