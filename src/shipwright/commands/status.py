"""Status command implementation."""

from pathlib import Path

import typer

from ..config import get_shipwright_dir, load_config
from ..core import Pipeline, has_changed
from ..errors import ShipwrightError, VersionFormatError
from ..output import get_output_context


def status(
    project: Path = typer.Option(Path("."), "--project", "-C", help="Project directory"),
) -> None:
    """Show current version, last build and whether sources changed."""
    ctx = get_output_context()
    project_dir = project.resolve()

    try:
        config = load_config(get_shipwright_dir(project_dir))
    except ShipwrightError as e:
        ctx.error(str(e))
        raise typer.Exit(e.exit_code) from None

    pipeline = Pipeline(project_dir=project_dir, config=config)
    state = pipeline.state_store.load()
    snapshot = pipeline.snapshot()
    changed = has_changed(snapshot, state.last_digest)

    try:
        current: str | None = str(pipeline.version())
    except VersionFormatError as e:
        ctx.warning(str(e))
        current = None

    deployed = [p.name for p in pipeline.slot.matching_files()]

    data = {
        "project": config.project.name,
        "version": current,
        "last_built_version": state.last_version,
        "changed": changed,
        "tracked_files": len(snapshot.paths),
        "deploy_dir": str(pipeline.slot.directory),
        "deployed": deployed,
    }
    if ctx.json_mode:
        ctx.print_json(data)
        return

    ctx.print(f"[bold]Project:[/bold] {config.project.name}")
    ctx.print(f"[bold]Descriptor version:[/bold] {current or '-'}")
    ctx.print(f"[bold]Last built version:[/bold] {state.last_version or '-'}")
    ctx.print(f"[bold]Tracked files:[/bold] {len(snapshot.paths)}")
    if changed:
        ctx.print("[yellow]Changes detected since last build[/yellow]")
    else:
        ctx.print("[green]No changes since last build[/green]")
    ctx.print(f"[bold]Deployment directory:[/bold] {pipeline.slot.directory}")
    for name in deployed:
        ctx.print(f"  ✓ {name}")
