"""Clean build through the external build tool."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..errors import ArtifactNotFoundError
from ..models import BuildArtifact

logger = logging.getLogger(__name__)


class Packager(Protocol):
    """Build tool facility that produces the artifact."""

    def package(self) -> None: ...


@dataclass
class BuildInvoker:
    """Runs the build and locates its output.

    Attributes:
        tool: Build tool wrapper (e.g. MavenBuildTool)
        artifact_name: Artifact id used in the output file name
        artifact_template: Output path template with {artifact_id} and {version}
        project_dir: Directory the template is relative to
    """

    tool: Packager
    artifact_name: str
    artifact_template: str
    project_dir: Path

    def expected_path(self, version: str) -> Path:
        relative = self.artifact_template.format(artifact_id=self.artifact_name, version=version)
        return self.project_dir / relative

    def build(self, version: str) -> BuildArtifact:
        """Run a clean build and return the produced artifact.

        No incremental state is trusted and there is no retry.

        Raises:
            BuildFailure: If the build tool exits non-zero
            ArtifactNotFoundError: If the expected output is missing afterwards
        """
        logger.info("Building %s %s...", self.artifact_name, version)
        self.tool.package()

        path = self.expected_path(version)
        if not path.is_file():
            raise ArtifactNotFoundError(f"Artifact not found after build: {path}")

        logger.info("Build succeeded: %s", path.name)
        return BuildArtifact(name=self.artifact_name, version=version, path=path)
