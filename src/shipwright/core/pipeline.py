"""Release pipeline orchestration.

Stages run strictly in sequence and each one gates the next:

    detect changes -> resolve version -> build -> deploy -> tag -> release

Fatal errors propagate as ShipwrightError subclasses; recoverable
conditions are collected as warnings on the PipelineResult.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from ..config import ShipwrightConfig
from ..constants import VERSION_LEVELS
from ..errors import ConfigError, GitOperationFailure, InvalidVersionLevel
from ..models import (
    BuildArtifact,
    DeploymentSlot,
    PersistedState,
    ProjectSnapshot,
    ReconcileResult,
    StageResult,
    Tag,
    VersionState,
)
from ..services.command import CommandRunner, SubprocessRunner
from ..services.git import GitClient, parse_repository_slug
from ..services.github import GitHubReleaseService, ReleaseService
from ..services.maven import MavenBuildTool
from . import change_detector, deployer, version_manager
from .build_invoker import BuildInvoker
from .git_tagger import GitTagger
from .release_notes import NotesReviewer, PassthroughReviewer
from .release_reconciler import ReleaseReconciler
from .state_store import StateStore
from .tag_cleanup import clean_tag

logger = logging.getLogger(__name__)


class PipelineOptions(BaseModel):
    """Flags that steer one pipeline run."""

    level: str | None = Field(default=None, description="Explicit increment level")
    explicit_version: str | None = Field(default=None, description="Exact target version")
    no_increment: bool = False
    force: bool = False
    check_only: bool = False
    build_only: bool = False
    release: bool = False
    git_only: bool = False
    force_release: bool = False
    clean_tag: str | None = None

    @property
    def publishes(self) -> bool:
        return self.release or self.git_only


class PipelineStatus(str, Enum):
    """How far a run went."""

    CHECKED = "checked"
    UP_TO_DATE = "up_to_date"
    BUILT = "built"
    DEPLOYED = "deployed"


class PipelineResult(BaseModel):
    """Summary of a pipeline run."""

    status: PipelineStatus
    changed: bool
    reason: str = ""
    previous_version: str | None = None
    version: str | None = None
    artifact: BuildArtifact | None = None
    deployed_path: Path | None = None
    tag: Tag | None = None
    release: ReconcileResult | None = None
    warnings: list[str] = Field(default_factory=list)


def should_build(options: PipelineOptions, changed: bool) -> tuple[bool, str]:
    """Decide whether this run builds, with the reason for the decision."""
    if options.force:
        return True, "Force build requested"
    if changed:
        return True, "Changes detected, build required"
    if options.explicit_version:
        return True, "Specific version requested, build required"
    if options.level:
        return True, "Version increment requested, build required"
    return False, "No changes detected and no build forced"


def resolve_repository(config: ShipwrightConfig, git: GitClient) -> str:
    """owner/name of the release repository, from config or the git remote.

    Raises:
        ConfigError: If neither source names a repository
    """
    slug = config.release.repository
    if not slug:
        url = git.remote_url(config.git.remote)
        slug = parse_repository_slug(url) if url else None
    if not slug:
        raise ConfigError(
            "Cannot determine the GitHub repository; set release.repository in config.toml"
        )
    return slug


@dataclass
class Pipeline:
    """Wires the stages for one project directory.

    Attributes:
        project_dir: Directory holding the descriptor and sources
        config: Loaded configuration
        runner: Executes build tool and git commands
        store: Persisted cache access (defaults to .shipwright/ files)
        release_service: Remote release service (built from config when None)
        reviewer: Release notes review hook
    """

    project_dir: Path
    config: ShipwrightConfig
    runner: CommandRunner = field(default_factory=SubprocessRunner)
    store: StateStore | None = None
    release_service: ReleaseService | None = None
    reviewer: NotesReviewer = field(default_factory=PassthroughReviewer)

    def __post_init__(self) -> None:
        self.state_store = self.store or StateStore.for_project(self.project_dir, self.config)
        self._repository: str | None = None
        self.git = GitClient(cwd=self.project_dir, runner=self.runner)
        self.build_tool = MavenBuildTool(
            project_dir=self.project_dir, config=self.config.build, runner=self.runner
        )
        self.invoker = BuildInvoker(
            tool=self.build_tool,
            artifact_name=self.config.project.get_artifact_id(),
            artifact_template=self.config.build.artifact,
            project_dir=self.project_dir,
        )

    @property
    def descriptor(self) -> Path:
        return self.project_dir / self.config.project.descriptor

    def version(self) -> VersionState:
        """Version currently recorded in the descriptor."""
        return version_manager.parse(self.descriptor)

    @property
    def slot(self) -> DeploymentSlot:
        return DeploymentSlot(
            directory=self.config.deploy_dir(self.project_dir),
            pattern=self.config.deploy_pattern(),
        )

    def snapshot(self) -> ProjectSnapshot:
        return change_detector.snapshot(
            self.project_dir,
            self.config.tracking.roots,
            self.config.tracking.extensions,
        )

    def repository(self) -> str:
        """owner/name of the release repository, resolved once per pipeline."""
        if self._repository is None:
            self._repository = resolve_repository(self.config, self.git)
        return self._repository

    def web_url(self) -> str:
        host = self.config.release.host.rstrip("/")
        return f"{host}/{self.repository()}"

    def get_release_service(self) -> ReleaseService:
        if self.release_service is None:
            self.release_service = GitHubReleaseService(
                repository=self.repository(),
                cwd=self.project_dir,
                host=self.config.release.host,
                exec_path=self.config.release.exec,
                runner=self.runner,
            )
        return self.release_service

    def reconciler(self) -> ReleaseReconciler:
        return ReleaseReconciler(
            git=self.git,
            service=self.get_release_service(),
            project_name=self.config.project.name,
            web_url=self.web_url(),
            requirements=self.config.release.requirements,
            reviewer=self.reviewer,
        )

    def tagger(self) -> GitTagger:
        return GitTagger(
            git=self.git,
            project_name=self.config.project.name,
            remote=self.config.git.remote,
            tag_prefix=self.config.git.tag_prefix,
            commit_message=self.config.git.commit_message,
        )

    def clean_tag(self, tag: str) -> list[StageResult]:
        """Delete a tag locally, remotely and its release (best-effort)."""
        if not self.git.is_repository():
            raise GitOperationFailure("Not in a git repository. Cannot clean tag.")
        return clean_tag(
            self.git,
            tag,
            remote=self.config.git.remote,
            get_service=self.get_release_service,
        )

    def run(self, options: PipelineOptions) -> PipelineResult:
        """Execute the pipeline.

        Raises:
            ShipwrightError: Any fatal stage failure
        """
        if options.level is not None and options.level not in VERSION_LEVELS:
            raise InvalidVersionLevel(
                f"Invalid version type: {options.level} (must be: major, minor, patch)"
            )

        if options.clean_tag:
            self.clean_tag(options.clean_tag)

        state = self.state_store.load()

        logger.info("Detecting changes in project...")
        current = self.snapshot()
        changed = change_detector.has_changed(current, state.last_digest)
        logger.info("Changes detected in project" if changed else "No changes detected")

        if options.check_only:
            return PipelineResult(
                status=PipelineStatus.CHECKED,
                changed=changed,
                previous_version=state.last_version,
            )

        build, reason = should_build(options, changed)
        logger.info(reason)
        if not build:
            return PipelineResult(
                status=PipelineStatus.UP_TO_DATE,
                changed=False,
                reason=reason,
                previous_version=state.last_version,
            )

        current_version = self.version()
        logger.info("Current version: %s", current_version)
        target = version_manager.resolve(
            current_version,
            level=options.level or "patch",
            explicit=options.explicit_version,
            no_increment=options.no_increment,
        )
        if target != current_version:
            version_manager.apply(target, self.build_tool)

        artifact = self.invoker.build(str(target))

        # Checkpoint: only a successful build moves the baseline. The
        # snapshot is retaken so it includes the rewritten descriptor.
        self.state_store.save(
            PersistedState(last_version=str(target), last_digest=self.snapshot().digest)
        )

        result = PipelineResult(
            status=PipelineStatus.BUILT,
            changed=changed,
            reason=reason,
            previous_version=str(current_version),
            version=str(target),
            artifact=artifact,
        )

        if options.build_only:
            if options.publishes:
                logger.warning("Build-only mode: skipping git tag and release")
                result.warnings.append("Build-only mode: skipping git tag and release")
            return result

        result.deployed_path = deployer.deploy(artifact, self.slot)
        result.status = PipelineStatus.DEPLOYED

        if options.publishes:
            self._publish(result, str(target), result.deployed_path, options)
        return result

    def _publish(
        self,
        result: PipelineResult,
        version: str,
        asset: Path,
        options: PipelineOptions,
    ) -> None:
        if not self.git.is_repository():
            raise GitOperationFailure("Not in a git repository. Cannot tag version.")

        reconciler = None
        if options.release:
            # Auth and repository are checked before anything is tagged
            reconciler = self.reconciler()
            reconciler.check_preconditions(repository_known=True)

        files = [self.config.project.descriptor, *self.config.project.metadata_files]
        report = self.tagger().publish(version, files)
        result.tag = report.tag
        result.warnings.extend(report.warnings)

        if reconciler is not None:
            result.release = reconciler.reconcile(
                report.tag.name,
                asset,
                force=options.force_release,
            )

    def release_current(self, force: bool = False) -> ReconcileResult:
        """Reconcile the release for the descriptor's version without building.

        Uses the deployed artifact when present, else the build output.

        Raises:
            ArtifactNotFoundError: If neither artifact exists
        """
        version = str(self.version())
        deployed = self.slot.directory / self.invoker.expected_path(version).name
        asset = deployed if deployed.is_file() else self.invoker.expected_path(version)
        return self.reconciler().reconcile(
            self.config.tag_for(version),
            asset,
            force=force,
        )
