"""CLI commands for memosync."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from memosync import __logo__, __version__

app = typer.Typer(
    name="memosync",
    help=f"{__logo__} memosync - Mirror your Memos into a markdown vault",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} memosync v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    log_file: Path = typer.Option(None, "--log-file", help="Also keep a debug log in this file"),
):
    """memosync - Mirror your Memos into a markdown vault."""
    from memosync.logging_config import setup_logging

    setup_logging("DEBUG" if verbose else None, log_file)


# ============================================================================
# Shared helpers
# ============================================================================


def _notify(message: str, is_error: bool = False) -> None:
    """Print sync progress the way a host notice would show it."""
    if is_error:
        console.print(f"[red]✗ {escape(message)}[/red]")
    else:
        console.print(f"[green]✓[/green] {escape(message)}")


def _make_service(config, dry_run: bool = False):
    from memosync.sync.service import MemosSyncService
    from memosync.vault import create_vault

    vault = create_vault(config.vault_path, dry_run=dry_run)
    return MemosSyncService(config.sync, vault, notify=_notify)


def _mask(secret: str) -> str:
    if not secret:
        return "[dim]not set[/dim]"
    return "[green]✓ set[/green]"


# ============================================================================
# Onboard / Setup
# ============================================================================


@app.command()
def onboard(
    api_url: str = typer.Option(None, "--url", help="Memos API URL, e.g. https://memos.example.com/api/v1"),
    token: str = typer.Option(None, "--token", help="Memos access token"),
    vault: str = typer.Option(None, "--vault", help="Local vault directory"),
):
    """Initialize memosync configuration."""
    from memosync.config.loader import get_config_path, save_config
    from memosync.config.schema import Config

    config_path = get_config_path()

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit()

    data: dict = {}
    if api_url:
        data.setdefault("sync", {})["memos_api_url"] = api_url
    if token:
        data.setdefault("sync", {})["memos_access_token"] = token
    if vault:
        data["vault"] = {"path": vault}

    config = Config.model_validate(data)
    save_config(config, config_path)
    console.print(f"[green]✓[/green] Created config at {config_path}")

    console.print(f"\n{__logo__} memosync is ready!")
    console.print("\nNext steps:")
    if not config.sync.memos_api_url or not config.sync.memos_access_token:
        console.print(f"  1. Add your Memos URL and access token to [cyan]{config_path}[/cyan]")
        console.print("     or run: [cyan]memosync config set sync.memosApiUrl https://...[/cyan]")
    console.print("  2. Sync: [cyan]memosync sync[/cyan]")


# ============================================================================
# Sync Commands
# ============================================================================


@app.command()
def sync(
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Fetch and render without writing to the vault"
    ),
):
    """Run one sync pass."""
    from memosync.config.loader import load_config

    config = load_config()
    service = _make_service(config, dry_run=dry_run)
    result = asyncio.run(service.sync())

    if dry_run and result.paths:
        table = Table(title="Documents (dry run)")
        table.add_column("Path", style="cyan")
        for path in result.paths:
            table.add_row(escape(path))
        console.print(table)

    if result.ok:
        console.print(
            f"[dim]{result.resources_downloaded} resources downloaded, "
            f"{result.resources_reused} already present[/dim]"
        )
    else:
        raise typer.Exit(1)


@app.command()
def watch(
    now: bool = typer.Option(False, "--now", help="Sync once immediately before waiting"),
):
    """Sync automatically every autoSyncInterval minutes."""
    from memosync.config.loader import load_config
    from memosync.sync.scheduler import AutoSyncScheduler

    config = load_config()
    if config.sync.sync_frequency != "auto":
        console.print("[red]Error: syncFrequency is 'manual'.[/red]")
        console.print("Enable it with: [cyan]memosync config set sync.syncFrequency auto[/cyan]")
        raise typer.Exit(1)

    service = _make_service(config)
    interval = config.sync.auto_sync_interval

    async def run():
        if now:
            await service.sync()
        scheduler = AutoSyncScheduler(service.sync, interval * 60)
        await scheduler.start()
        console.print(f"{__logo__} Auto sync every {interval} minutes. Press Ctrl+C to stop.")
        try:
            while scheduler.is_running:
                await asyncio.sleep(1)
        finally:
            scheduler.stop()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        console.print("\nStopped.")


# ============================================================================
# Config Commands
# ============================================================================

config_app = typer.Typer(help="Show or change settings")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show():
    """Show the current settings."""
    from memosync.config.loader import convert_to_camel, load_config

    config = load_config()
    data = convert_to_camel(config.model_dump())
    for section, key in (("sync", "memosAccessToken"), ("ai", "apiKey")):
        if data[section][key]:
            data[section][key] = "********"

    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for section, values in data.items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", escape(str(value)))
    console.print(table)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting key, e.g. sync.syncLimit"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change one setting and save it."""
    from pydantic import ValidationError

    from memosync.config.loader import camel_to_snake, load_config, save_config
    from memosync.config.schema import Config

    config = load_config()
    data = config.model_dump()

    section, _, field = key.partition(".")
    field = camel_to_snake(field)
    if section not in data or field not in data[section]:
        console.print(f"[red]Unknown setting: {key}[/red]")
        raise typer.Exit(1)

    data[section][field] = value
    try:
        updated = Config.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(1)

    save_config(updated)
    shown = getattr(getattr(updated, section), field)
    if field in ("memos_access_token", "api_key"):
        shown = "********"
    console.print(f"[green]✓[/green] {key} = {shown}")


# ============================================================================
# AI Commands
# ============================================================================

ai_app = typer.Typer(help="Generate summaries, tags and digests")
app.add_typer(ai_app, name="ai")


def _make_ai_service():
    from memosync.ai.service import create_ai_service, create_dummy_ai_service
    from memosync.config.loader import load_config

    config = load_config()
    if not config.ai.api_key:
        console.print("[yellow]No AI API key configured; nothing will be generated.[/yellow]")
        return config, create_dummy_ai_service()
    return config, create_ai_service(config.ai.model_type, config.ai.api_key, config.ai.model_name)


def _read_note(path: Path) -> str:
    if not path.is_file():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


@ai_app.command("summarize")
def ai_summarize(
    file: Path = typer.Argument(..., help="Markdown note to summarize"),
    language: str = typer.Option(None, "--language", "-l", help="Summary language"),
):
    """Summarize one note."""
    config, service = _make_ai_service()
    content = _read_note(file)
    summary = asyncio.run(service.generate_summary(content, language or config.ai.language))
    console.print(summary or "[dim]No summary generated.[/dim]")


@ai_app.command("tags")
def ai_tags(
    file: Path = typer.Argument(..., help="Markdown note to tag"),
):
    """Suggest tags for one note."""
    _, service = _make_ai_service()
    content = _read_note(file)
    tags = asyncio.run(service.generate_tags(content))
    console.print(" ".join(f"#{tag}" for tag in tags) if tags else "[dim]No tags generated.[/dim]")


@ai_app.command("digest")
def ai_digest(
    files: list[Path] = typer.Argument(..., help="Notes to include in the digest"),
):
    """Write a weekly digest over several notes."""
    _, service = _make_ai_service()
    contents = [_read_note(path) for path in files]
    digest = asyncio.run(service.generate_weekly_digest(contents))
    console.print(digest or "[dim]No digest generated.[/dim]")


# ============================================================================
# Status Commands
# ============================================================================


@app.command()
def status():
    """Show memosync status."""
    from memosync.config.loader import get_config_path, load_config

    config_path = get_config_path()
    config = load_config()
    vault = config.vault_path
    sync_config = config.sync

    console.print(f"{__logo__} memosync Status\n")

    console.print(
        f"Config: {config_path} {'[green]✓[/green]' if config_path.exists() else '[red]✗[/red]'}"
    )
    console.print(
        f"Vault: {vault} {'[green]✓[/green]' if vault.exists() else '[red]✗[/red]'}"
    )

    if config_path.exists():
        console.print(f"Memos API: {sync_config.memos_api_url or '[dim]not set[/dim]'}")
        console.print(f"Access token: {_mask(sync_config.memos_access_token)}")
        console.print(f"Sync directory: {sync_config.sync_directory}")
        console.print(f"Sync limit: {sync_config.sync_limit}")
        if sync_config.sync_frequency == "auto":
            console.print(f"Frequency: auto, every {sync_config.auto_sync_interval} minutes")
        else:
            console.print("Frequency: manual")
        console.print(f"AI: {config.ai.model_type} / {config.ai.model_name} ({_mask(config.ai.api_key)})")


if __name__ == "__main__":
    app()
