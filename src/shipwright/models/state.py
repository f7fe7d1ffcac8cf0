"""Persisted pipeline state model."""

from pydantic import BaseModel, Field


class PersistedState(BaseModel):
    """Caches carried between pipeline runs.

    Loaded once at pipeline start and written back at defined
    checkpoints. A missing value means there is no prior baseline.

    Attributes:
        last_version: Last successfully built version string
        last_digest: Content digest recorded with the last successful build
    """

    last_version: str | None = Field(default=None, description="Last built version")
    last_digest: str | None = Field(default=None, description="Last recorded content digest")
