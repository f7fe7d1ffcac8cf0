"""Build command implementation: the full release pipeline."""

from pathlib import Path

import typer

from ..config import ShipwrightConfig, get_shipwright_dir, load_config
from ..core import (
    EditorReviewer,
    PassthroughReviewer,
    Pipeline,
    PipelineOptions,
    PipelineResult,
    PipelineStatus,
    check_dependencies,
)
from ..errors import ShipwrightError
from ..models import ReleaseAction
from ..output import OutputContext, get_output_context
from ..services import SubprocessRunner


def format_size(num_bytes: int) -> str:
    """Human readable file size (du -h style)."""
    size = float(num_bytes)
    for unit in ("B", "K", "M", "G"):
        if size < 1024 or unit == "G":
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}G"


def required_tools(config: ShipwrightConfig, options: PipelineOptions) -> dict[str, str]:
    """External tools this run needs, keyed by display name."""
    tools: dict[str, str] = {}
    if not options.check_only:
        tools[config.build.exec] = config.build.exec
    if options.publishes or options.clean_tag:
        tools["git"] = "git"
    if options.release or options.clean_tag:
        tools["gh (GitHub CLI)"] = config.release.exec
    return tools


def _render(ctx: OutputContext, result: PipelineResult, project_dir: Path) -> None:
    data = result.model_dump(mode="json")

    if result.status == PipelineStatus.CHECKED:
        message = "Changes detected in project" if result.changed else "No changes detected"
        ctx.result(data, message)
        return

    if result.status == PipelineStatus.UP_TO_DATE:
        ctx.result(data, f"{result.reason}\nUse -f/--force to build anyway")
        return

    if ctx.json_mode:
        ctx.print_json(data)
        return

    for warning in result.warnings:
        ctx.warning(warning)

    if result.status == PipelineStatus.BUILT and result.artifact is not None:
        ctx.success("Build completed successfully!")
        ctx.success(f"Version: {result.version}")
        path = result.artifact.path
        ctx.print("\nBuilt file:")
        ctx.print(f"  ✓ {path.name} ({format_size(path.stat().st_size)})")
        location = path.parent
        if location.is_relative_to(project_dir):
            location = location.relative_to(project_dir)
        next_steps = [
            "Run without -b/--build-only to deploy",
            f"Or manually copy the artifact from {location}/",
        ]
        if result.changed:
            next_steps.append("Changes were detected in the project")
        ctx.steps("Next steps:", next_steps)
        return

    if result.deployed_path is not None:
        ctx.success("Build and deployment completed successfully!")
        ctx.success(f"Version: {result.version}")
        ctx.success(f"Location: {result.deployed_path.parent}/")
        ctx.print("\nDeployed file:")
        ctx.print(f"  ✓ {result.deployed_path.name}")

    if result.tag is not None:
        state = "created" if result.tag.created else "existing"
        ctx.print(f"\nGit tag: {result.tag.name} ({state})")

    if result.release is not None:
        record = result.release.record
        if result.release.action == ReleaseAction.SKIPPED:
            ctx.print(f"Release {record.tag} already exists: {record.url}")
            ctx.print("Use --force-release to recreate it")
        else:
            ctx.success(f"Release {result.release.action.value}: {record.url}")

    next_steps = [
        "Restart the server to load the new version",
        "Check server logs for any errors during loading",
    ]
    if result.changed:
        next_steps.append("Changes were detected and deployed")
    ctx.steps("Next steps:", next_steps)


def build(
    project: Path = typer.Option(Path("."), "--project", "-C", help="Project directory"),
    level: str | None = typer.Option(
        None, "--type", "-t", help="Version increment type: major, minor, patch (default: patch)"
    ),
    set_version: str | None = typer.Option(
        None, "--set-version", "-s", help="Set specific version instead of incrementing"
    ),
    no_increment: bool = typer.Option(
        False, "--no-increment", "-n", help="Build and deploy without incrementing version"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Build even if no changes detected"),
    check_only: bool = typer.Option(
        False, "--check-only", "-c", help="Only check for changes, don't build or deploy"
    ),
    build_only: bool = typer.Option(
        False, "--build-only", "-b", help="Build but don't deploy"
    ),
    release: bool = typer.Option(
        False, "--release", "-r", help="Create GitHub release after successful deploy"
    ),
    git_only: bool = typer.Option(
        False, "--git-only", "-g", help="Only commit and tag version, no GitHub release"
    ),
    force_release: bool = typer.Option(
        False, "--force-release", help="Recreate GitHub release even if it exists"
    ),
    clean_tag: str | None = typer.Option(
        None, "--clean-tag", help="Delete existing tag and its release before running"
    ),
    edit_notes: bool = typer.Option(
        False, "--edit-notes", "-e", help="Edit release notes in $EDITOR before publishing"
    ),
) -> None:
    """Detect changes, bump the version, build, deploy and optionally release.

    Only builds when tracked sources changed, unless forced or a version
    change is requested explicitly.
    """
    ctx = get_output_context()
    project_dir = project.resolve()

    options = PipelineOptions(
        level=level,
        explicit_version=set_version,
        no_increment=no_increment,
        force=force,
        check_only=check_only,
        build_only=build_only,
        release=release,
        git_only=git_only,
        force_release=force_release,
        clean_tag=clean_tag,
    )

    try:
        config = load_config(get_shipwright_dir(project_dir))
        check_dependencies(required_tools(config, options))

        use_editor = edit_notes or config.release.edit_notes
        pipeline = Pipeline(
            project_dir=project_dir,
            config=config,
            runner=SubprocessRunner(),
            reviewer=EditorReviewer() if use_editor else PassthroughReviewer(),
        )
        result = pipeline.run(options)
    except ShipwrightError as e:
        ctx.error(str(e))
        raise typer.Exit(e.exit_code) from None

    _render(ctx, result, project_dir)
