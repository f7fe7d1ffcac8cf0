"""Configuration management for shipwright."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from .constants import (
    COMMIT_MESSAGE_TEMPLATE,
    CONFIG_FILE,
    DIGEST_CACHE_FILE,
    SHIPWRIGHT_DIR,
    TAG_PREFIX,
    VERSION_CACHE_FILE,
)
from .errors import ConfigError


class ProjectConfig(BaseModel):
    """Project-level configuration."""

    name: str = "unnamed-project"
    artifact_id: str | None = None  # Defaults to name
    descriptor: str = "pom.xml"
    metadata_files: list[str] = Field(
        default_factory=lambda: ["src/main/resources/plugin.yml"],
        description="Generated metadata committed alongside the descriptor",
    )

    def get_artifact_id(self) -> str:
        return self.artifact_id or self.name


class TrackingConfig(BaseModel):
    """Files that participate in change detection."""

    roots: list[str] = Field(default_factory=lambda: ["src", "pom.xml"])
    extensions: list[str] = Field(default_factory=lambda: [".java", ".yml", ".xml"])


class BuildConfig(BaseModel):
    """Build tool invocation."""

    exec: str = "mvn"
    package_args: list[str] = Field(default_factory=lambda: ["clean", "package", "-q"])
    set_version_args: list[str] = Field(
        default_factory=lambda: [
            "versions:set",
            "-DnewVersion={version}",
            "-DgenerateBackupPoms=false",
            "-q",
        ]
    )
    artifact: str = Field(
        default="target/{artifact_id}-{version}.jar",
        description="Artifact path template relative to the project directory",
    )


class DeployConfig(BaseModel):
    """Deployment target."""

    directory: str = "../server/plugins"
    pattern: str = "{artifact_id}-*.jar"


class GitConfig(BaseModel):
    """Version control settings."""

    remote: str = "origin"
    tag_prefix: str = TAG_PREFIX
    commit_message: str = COMMIT_MESSAGE_TEMPLATE


class ReleaseConfig(BaseModel):
    """Remote release settings (GitHub via gh CLI)."""

    exec: str = "gh"
    repository: str | None = None  # owner/name, derived from git remote if unset
    host: str = "https://github.com"
    requirements: list[str] = Field(default_factory=list)
    edit_notes: bool = False


class StateConfig(BaseModel):
    """Persisted cache file names, relative to the .shipwright directory."""

    version_file: str = VERSION_CACHE_FILE
    digest_file: str = DIGEST_CACHE_FILE


class ShipwrightConfig(BaseModel):
    """Root configuration for shipwright."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    deploy: DeployConfig = Field(default_factory=DeployConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    state: StateConfig = Field(default_factory=StateConfig)

    def tag_for(self, version: str) -> str:
        """Tag name for a version string."""
        return f"{self.git.tag_prefix}{version}"

    def deploy_dir(self, project_dir: Path) -> Path:
        return (project_dir / self.deploy.directory).resolve()

    def deploy_pattern(self) -> str:
        return self.deploy.pattern.format(artifact_id=self.project.get_artifact_id())


def get_shipwright_dir(project_dir: Path) -> Path:
    """Get .shipwright directory path for a project."""
    return project_dir / SHIPWRIGHT_DIR


def load_config(shipwright_dir: Path) -> ShipwrightConfig:
    """Load config from .shipwright/config.toml.

    Args:
        shipwright_dir: Path to .shipwright directory

    Returns:
        Loaded configuration, or defaults if config.toml doesn't exist

    Raises:
        ConfigError: If the file is not valid TOML or fails validation
    """
    config_path = shipwright_dir / CONFIG_FILE
    if not config_path.exists():
        return ShipwrightConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return ShipwrightConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def write_config_template(shipwright_dir: Path, project_name: str = "your-plugin") -> Path:
    """Write default config.toml template.

    Args:
        shipwright_dir: Path to .shipwright directory
        project_name: Project name to prefill

    Returns:
        Path to the written config file
    """
    config_path = shipwright_dir / CONFIG_FILE
    template = {
        "project": {
            "name": project_name,
            "descriptor": "pom.xml",
            "metadata_files": ["src/main/resources/plugin.yml"],
        },
        "tracking": {"roots": ["src", "pom.xml"], "extensions": [".java", ".yml", ".xml"]},
        "build": {"exec": "mvn", "artifact": "target/{artifact_id}-{version}.jar"},
        "deploy": {"directory": "../server/plugins", "pattern": "{artifact_id}-*.jar"},
        "git": {"remote": "origin", "tag_prefix": TAG_PREFIX},
        # Requirements are listed in generated release notes
        "release": {
            "exec": "gh",
            "host": "https://github.com",
            "requirements": ["Spigot/Paper 1.21.6+", "Java 21+"],
            "edit_notes": False,
        },
    }
    shipwright_dir.mkdir(parents=True, exist_ok=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
