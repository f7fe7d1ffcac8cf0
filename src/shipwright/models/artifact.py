"""Build artifact and deployment slot models."""

from pathlib import Path

from pydantic import BaseModel, Field


class BuildArtifact(BaseModel):
    """Packaged output of one build.

    Attributes:
        name: Artifact id (e.g. the Maven artifactId)
        version: Version string the artifact was built for
        path: Location of the artifact file
    """

    name: str = Field(description="Artifact name")
    version: str = Field(description="Built version")
    path: Path = Field(description="Artifact file path")

    @property
    def filename(self) -> str:
        return self.path.name


class DeploymentSlot(BaseModel):
    """Live artifact location for a project on the target host.

    Attributes:
        directory: Deployment directory
        pattern: Glob matching this project's artifact names
    """

    directory: Path = Field(description="Deployment directory")
    pattern: str = Field(description="Glob matching this project's artifacts")

    def matching_files(self) -> list[Path]:
        """Files currently in the slot that belong to this project."""
        if not self.directory.is_dir():
            return []
        return sorted(p for p in self.directory.glob(self.pattern) if p.is_file())
