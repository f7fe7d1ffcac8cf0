"""Release record and reconciliation result models."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class ReleaseAction(str, Enum):
    """What the reconciler did for a tag."""

    CREATED = "created"
    RECREATED = "recreated"
    SKIPPED = "skipped"


class ReleaseRecord(BaseModel):
    """Remote release published for one version.

    Attributes:
        tag: Tag name (e.g. v1.3.0)
        title: Release title
        notes: Release notes body
        target_commit: Commit the release points to
        asset: Attached artifact
        url: Location of the release on the remote service
    """

    tag: str = Field(description="Release tag")
    title: str = Field(default="", description="Release title")
    notes: str = Field(default="", description="Release notes body")
    target_commit: str | None = Field(default=None, description="Target commit SHA")
    asset: Path | None = Field(default=None, description="Attached artifact")
    url: str | None = Field(default=None, description="Release URL")


class ReconcileResult(BaseModel):
    """Outcome of reconciling the release for a tag."""

    action: ReleaseAction
    record: ReleaseRecord
