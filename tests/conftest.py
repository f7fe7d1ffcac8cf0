"""Shared test fixtures for shipwright tests."""

import os
import re
import subprocess
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from typer.testing import CliRunner

from shipwright.errors import ReleaseFailure
from shipwright.models import ReleaseRecord
from shipwright.services import Command, CommandResult, SubprocessRunner

POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
    <parent>
        <groupId>org.example</groupId>
        <artifactId>parent</artifactId>
        <version>9.9.9</version>
    </parent>
    <artifactId>WeatherVoting</artifactId>
    <version>{version}</version>
    <dependencies>
        <dependency>
            <groupId>io.papermc</groupId>
            <artifactId>paper-api</artifactId>
            <version>1.21.6</version>
        </dependency>
    </dependencies>
</project>
"""

Handler = Callable[[Command], CommandResult]


@dataclass
class FakeRunner:
    """CommandRunner that dispatches on the executable name.

    Commands without a handler succeed with empty output, except git,
    which runs for real unless a handler overrides it.
    """

    handlers: dict[str, Handler] = field(default_factory=dict)
    history: list[Command] = field(default_factory=list)
    real: SubprocessRunner = field(default_factory=SubprocessRunner)

    def run(self, command: Command) -> CommandResult:
        self.history.append(command)
        handler = self.handlers.get(command.verb)
        if handler is not None:
            return handler(command)
        if command.verb == "git":
            return self.real.run(command)
        return CommandResult(command=command, returncode=0)

    def calls(self, verb: str) -> list[Command]:
        return [c for c in self.history if c.verb == verb]


def fake_maven(project_dir: Path, fail_package: bool = False) -> Handler:
    """Handler emulating `mvn versions:set` and `mvn clean package`."""

    def handle(command: Command) -> CommandResult:
        pom = project_dir / "pom.xml"
        if command.args and command.args[0] == "versions:set":
            new_version = next(
                a.split("=", 1)[1] for a in command.args if a.startswith("-DnewVersion=")
            )
            text = pom.read_text()
            text = re.sub(
                r"(</parent>.*?<version>)[^<]*(</version>)",
                rf"\g<1>{new_version}\g<2>",
                text,
                count=1,
                flags=re.DOTALL,
            )
            pom.write_text(text)
            return CommandResult(command=command, returncode=0)

        if "package" in command.args:
            if fail_package:
                return CommandResult(command=command, returncode=1, stderr="COMPILATION ERROR")
            version = re.search(r"</parent>.*?<version>([^<]*)</version>", pom.read_text(), re.S)
            assert version is not None
            target = project_dir / "target"
            target.mkdir(exist_ok=True)
            (target / f"WeatherVoting-{version.group(1)}.jar").write_bytes(
                b"PK\x03\x04" + version.group(1).encode()
            )
            return CommandResult(command=command, returncode=0)

        return CommandResult(command=command, returncode=0)

    return handle


@dataclass
class FakeReleaseService:
    """In-memory ReleaseService."""

    repository: str = "Staticpast/WeatherVoting"
    authenticated: bool = True
    fail_create: bool = False
    releases: dict[str, ReleaseRecord] = field(default_factory=dict)
    created: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    auth_checks: int = 0

    def is_authenticated(self) -> bool:
        self.auth_checks += 1
        return self.authenticated

    def exists(self, tag: str) -> bool:
        return tag in self.releases

    def url_for(self, tag: str) -> str:
        return f"https://github.com/{self.repository}/releases/tag/{tag}"

    def create(
        self,
        tag: str,
        title: str,
        notes: str,
        target_commit: str,
        asset: Path,
    ) -> ReleaseRecord:
        if self.fail_create:
            raise ReleaseFailure(f"Failed to create release {tag}: HTTP 422")
        record = ReleaseRecord(
            tag=tag,
            title=title,
            notes=notes,
            target_commit=target_commit,
            asset=asset,
            url=self.url_for(tag),
        )
        self.releases[tag] = record
        self.created.append(tag)
        return record

    def delete(self, tag: str) -> bool:
        if tag not in self.releases:
            return False
        del self.releases[tag]
        self.deleted.append(tag)
        return True


def git(cwd: Path, *args: str) -> str:
    """Run a git command in tests and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository.

    Initializes a git repo with user config and an initial commit.
    Changes cwd to the repo directory for the duration of the test.
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "tag.gpgSign", "false")
    git(repo, "config", "commit.gpgSign", "false")

    (repo / "README.md").write_text("# Test\n")
    git(repo, "add", ".")
    git(repo, "commit", "-m", "Initial commit")

    original_cwd = os.getcwd()
    os.chdir(repo)
    try:
        yield repo
    finally:
        os.chdir(original_cwd)


def write_project(project_dir: Path, deploy_dir: Path, version: str = "1.2.3") -> None:
    """Lay out a minimal Maven plugin project with shipwright config."""
    (project_dir / "pom.xml").write_text(POM_TEMPLATE.format(version=version))
    java_dir = project_dir / "src" / "main" / "java" / "org" / "example"
    java_dir.mkdir(parents=True)
    (java_dir / "WeatherVoting.java").write_text("public class WeatherVoting {}\n")
    resources = project_dir / "src" / "main" / "resources"
    resources.mkdir(parents=True)
    (resources / "plugin.yml").write_text("name: WeatherVoting\nversion: ${project.version}\n")
    (project_dir / ".gitignore").write_text("target/\n.shipwright/last_build_*\n")

    shipwright_dir = project_dir / ".shipwright"
    shipwright_dir.mkdir()
    (shipwright_dir / "config.toml").write_text(
        f"""[project]
name = "WeatherVoting"

[deploy]
directory = "{deploy_dir.as_posix()}"

[release]
repository = "Staticpast/WeatherVoting"
requirements = ["Spigot/Paper 1.21.6+", "Java 21+"]
"""
    )


@pytest.fixture
def deploy_dir(tmp_path: Path) -> Path:
    """Deployment directory outside the project (not created yet)."""
    return tmp_path / "server" / "plugins"


@pytest.fixture
def plugin_project(tmp_path: Path, deploy_dir: Path) -> Path:
    """Maven plugin project at version 1.2.3, not under version control."""
    project_dir = tmp_path / "plugin"
    project_dir.mkdir()
    write_project(project_dir, deploy_dir)
    return project_dir


@pytest.fixture
def git_plugin_project(temp_git_repo: Path, deploy_dir: Path) -> Path:
    """Maven plugin project at version 1.2.3, committed in a git repository."""
    write_project(temp_git_repo, deploy_dir)
    git(temp_git_repo, "add", ".")
    git(temp_git_repo, "commit", "-m", "Add plugin project")
    return temp_git_repo


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def release_service() -> FakeReleaseService:
    return FakeReleaseService()
