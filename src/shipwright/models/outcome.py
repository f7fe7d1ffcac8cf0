"""Tagged outcomes for external calls.

Each pipeline stage that talks to an external tool reports a StageResult
so that non-fatal paths (tag push failure, pre-existing tag) stay explicit
instead of being inferred from exit codes.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Outcome(str, Enum):
    """Severity of a stage result."""

    SUCCESS = "success"
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class StageResult(BaseModel):
    """Result of a single external call."""

    stage: str = Field(description="Stage name (commit, tag, push, ...)")
    outcome: Outcome = Field(default=Outcome.SUCCESS)
    message: str = Field(default="", description="Human readable detail")

    @property
    def ok(self) -> bool:
        return self.outcome != Outcome.FATAL


class Tag(BaseModel):
    """Annotated version tag.

    Attributes:
        name: Tag name (e.g. v1.3.0)
        version: Version the tag labels
        created: False when the tag already existed and was reused
    """

    name: str
    version: str
    created: bool = True
