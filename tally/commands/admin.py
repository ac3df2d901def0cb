"""Admin commands for backup and init."""

import shutil
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from tally.commands.common import console
from tally.config import create_default_config, get_config_path, load_config, resolve_db_path
from tally.store.kv import SqliteStore
from tally.store.records import load_categories, save_categories
from tally.store.schema import database_exists


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup database and configuration files."""
    config_path = get_config_path()
    db_path = resolve_db_path(load_config(config_path))

    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'tally init' first.[/red]", style="bold")
        sys.exit(1)

    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".tally" / "backups"

    backup_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    db_backup = backup_dir / f"tally_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        # Config is optional: defaults apply when it is missing
        if config_path.exists():
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config, seeding the default categories."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    store = SqliteStore(db_path)
    save_categories(store, load_categories(store))
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize tally database and configuration."""
    config_path = get_config_path()
    db_path = resolve_db_path(load_config(config_path))

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'tally init --force' to overwrite[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
