"""Content snapshot model for change detection."""

from pydantic import BaseModel, Field


class ProjectSnapshot(BaseModel):
    """Content identity of all tracked files at a point in time.

    Attributes:
        paths: Tracked file paths, sorted lexicographically (posix, relative)
        digest: SHA256 hex digest over the concatenated contents
    """

    paths: list[str] = Field(default_factory=list, description="Sorted tracked paths")
    digest: str = Field(description="SHA256 hex digest of tracked contents")
