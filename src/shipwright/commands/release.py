"""Release command implementation."""

from pathlib import Path

import typer

from ..config import get_shipwright_dir, load_config
from ..core import EditorReviewer, PassthroughReviewer, Pipeline, check_dependencies
from ..errors import ShipwrightError
from ..models import ReleaseAction
from ..output import get_output_context
from ..services import SubprocessRunner


def release(
    project: Path = typer.Option(Path("."), "--project", "-C", help="Project directory"),
    force_release: bool = typer.Option(
        False, "--force-release", help="Recreate GitHub release even if it exists"
    ),
    edit_notes: bool = typer.Option(
        False, "--edit-notes", "-e", help="Edit release notes in $EDITOR before publishing"
    ),
) -> None:
    """Publish the GitHub release for the current version without rebuilding."""
    ctx = get_output_context()
    project_dir = project.resolve()

    try:
        config = load_config(get_shipwright_dir(project_dir))
        check_dependencies({"git": "git", "gh (GitHub CLI)": config.release.exec})
        use_editor = edit_notes or config.release.edit_notes
        pipeline = Pipeline(
            project_dir=project_dir,
            config=config,
            runner=SubprocessRunner(),
            reviewer=EditorReviewer() if use_editor else PassthroughReviewer(),
        )
        result = pipeline.release_current(force=force_release)
    except ShipwrightError as e:
        ctx.error(str(e))
        raise typer.Exit(e.exit_code) from None

    record = result.record
    if result.action == ReleaseAction.SKIPPED:
        ctx.result(
            result.model_dump(mode="json"),
            f"Release {record.tag} already exists: {record.url}\n"
            "Use --force-release to recreate it",
        )
    else:
        ctx.success(f"Release {result.action.value}: {record.url}", {"tag": record.tag})
