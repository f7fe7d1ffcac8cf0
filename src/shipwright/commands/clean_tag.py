"""Clean-tag command implementation."""

from pathlib import Path

import typer

from ..config import get_shipwright_dir, load_config
from ..core import Pipeline, check_dependencies
from ..errors import ShipwrightError
from ..models import Outcome
from ..output import get_output_context


def clean_tag(
    tag: str = typer.Argument(..., help="Tag to delete (e.g. v1.1.5)"),
    project: Path = typer.Option(Path("."), "--project", "-C", help="Project directory"),
) -> None:
    """Delete a tag locally and remotely, and its GitHub release."""
    ctx = get_output_context()
    project_dir = project.resolve()

    try:
        config = load_config(get_shipwright_dir(project_dir))
        check_dependencies({"git": "git", "gh (GitHub CLI)": config.release.exec})
        results = Pipeline(project_dir=project_dir, config=config).clean_tag(tag)
    except ShipwrightError as e:
        ctx.error(str(e))
        raise typer.Exit(e.exit_code) from None

    ctx.result(
        {"tag": tag, "results": [r.model_dump(mode="json") for r in results]},
    )
    for r in results:
        style = "green" if r.outcome == Outcome.SUCCESS else "dim"
        ctx.print(f"[{style}]{r.message}[/{style}]")
