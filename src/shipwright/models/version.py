"""Semantic version model."""

import re
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from ..errors import VersionFormatError

# ASCII digits only, no leading zeros, no surrounding whitespace
VERSION_PATTERN = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")


class VersionState(BaseModel):
    """The project's current semantic version.

    Attributes:
        major: Major component
        minor: Minor component
        patch: Patch component
    """

    model_config = ConfigDict(frozen=True)

    major: int = Field(ge=0, description="Major version")
    minor: int = Field(ge=0, description="Minor version")
    patch: int = Field(ge=0, description="Patch version")

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse a strict major.minor.patch string.

        Raises:
            VersionFormatError: If the string does not match the pattern
        """
        match = VERSION_PATTERN.fullmatch(value)
        if not match:
            raise VersionFormatError(
                f"Invalid version format: {value!r} (expected: major.minor.patch)"
            )
        major, minor, patch = (int(part) for part in match.groups())
        return cls(major=major, minor=minor, patch=patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
