"""Init command implementation."""

import subprocess
from pathlib import Path

import typer

from ..config import get_shipwright_dir, load_config, write_config_template
from ..constants import CONFIG_FILE
from ..errors import ConfigError
from ..output import get_output_context


def init(
    project: Path = typer.Option(Path("."), "--project", "-C", help="Project directory"),
    name: str | None = typer.Option(None, "--name", help="Project name (default: dir name)"),
) -> None:
    """Initialize shipwright in a project directory."""
    ctx = get_output_context()
    project_dir = project.resolve()
    shipwright_dir = get_shipwright_dir(project_dir)
    config_path = shipwright_dir / CONFIG_FILE

    if not config_path.exists():
        write_config_template(shipwright_dir, name or project_dir.name)
        ctx.console.print(f"[green]Created config template:[/green] {config_path}")
    else:
        ctx.console.print(f"[yellow]Config already exists:[/yellow] {config_path}")

    try:
        config = load_config(shipwright_dir)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(e.exit_code) from None

    # Validate toolchain
    tools = {
        "git": ["git", "--version"],
        "gh": [config.release.exec, "auth", "status"],
        config.build.exec: [config.build.exec, "--version"],
    }

    all_ok = True
    for tool, cmd in tools.items():
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
            if result.returncode == 0:
                ctx.console.print(f"[green]✓[/green] {tool}")
            else:
                ctx.console.print(f"[red]✗[/red] {tool}: {result.stderr.strip()[:50]}")
                all_ok = False
        except FileNotFoundError:
            ctx.console.print(f"[red]✗[/red] {tool}: not found in PATH")
            all_ok = False

    if not all_ok:
        ctx.console.print("\n[yellow]Warning: Some tools are missing or not configured[/yellow]")
        raise typer.Exit(2)

    ctx.console.print("\n[bold green]Shipwright initialized successfully![/bold green]")
