"""Build tool integration (Maven by default)."""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from ..config import BuildConfig
from ..errors import BuildFailure, VersionFormatError
from .command import Command, CommandResult, CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

_FIRST_VERSION = re.compile(r"<version>\s*([^<]*?)\s*</version>")


def read_descriptor_version(descriptor: Path) -> str:
    """Read the project version string from a pom.xml.

    Looks for the project-level <version> element (namespace aware),
    skipping the <parent> block. Falls back to the first <version> in
    the file when the XML cannot be parsed.

    Raises:
        VersionFormatError: If the descriptor is missing or has no version
    """
    if not descriptor.exists():
        raise VersionFormatError(f"Project descriptor not found: {descriptor}")

    text = descriptor.read_text()
    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        root = None

    if root is not None:
        for child in root:
            if child.tag.rsplit("}", 1)[-1] == "version" and child.text:
                return child.text.strip()

    match = _FIRST_VERSION.search(text)
    if match:
        return match.group(1)
    raise VersionFormatError(f"Failed to read version from {descriptor}")


@dataclass
class MavenBuildTool:
    """Wraps the external build tool for a project directory."""

    project_dir: Path
    config: BuildConfig = field(default_factory=BuildConfig)
    runner: CommandRunner = field(default_factory=SubprocessRunner)

    def _run(self, args: list[str]) -> CommandResult:
        return self.runner.run(Command(self.config.exec, tuple(args), cwd=self.project_dir))

    def set_version(self, version: str) -> None:
        """Rewrite the descriptor version using the build tool itself.

        Raises:
            BuildFailure: If the build tool rejects the update
        """
        args = [arg.format(version=version) for arg in self.config.set_version_args]
        result = self._run(args)
        if not result.ok:
            raise BuildFailure(f"Failed to update version to {version}: {result.error_text()}")

    def package(self) -> None:
        """Run a clean build.

        Raises:
            BuildFailure: On any non-zero exit
        """
        result = self._run(list(self.config.package_args))
        if not result.ok:
            raise BuildFailure(f"{self.config.exec} build failed: {result.error_text()}")
