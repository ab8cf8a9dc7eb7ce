"""CLI interface for sitesync."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from sitesync.config import SiteSyncConfig, load_config, merge_cli_overrides
from sitesync.content import defaults
from sitesync.content.merge import to_document
from sitesync.content.models import ContentModel
from sitesync.content.store import SLICES
from sitesync.session import ContentSession
from sitesync.state import STATE_FILENAME
from sitesync.sync.adapters import firestore as firestore_adapter
from sitesync.sync.adapters.base import RemoteStore
from sitesync.sync.adapters.null import NullStore
from sitesync.sync.paths import Collection, SettingKey, doc_path, setting_path

app = typer.Typer(
    name="sitesync",
    help="Inspect and seed the marketing site's synchronized content.",
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from sitesync import __version__

        console.print(f"sitesync {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .sitesync.toml file."),
    ] = None,
    backend: Annotated[
        Optional[str],
        typer.Option("--backend", help="Store backend: auto, firestore, json, memory or none."),
    ] = None,
    project_id: Annotated[
        Optional[str],
        typer.Option("--project-id", help="Firestore project id."),
    ] = None,
    store_path: Annotated[
        Optional[Path],
        typer.Option("--store-path", help="JSON store file or directory."),
    ] = None,
    state_dir: Annotated[
        Optional[Path],
        typer.Option("--state-dir", help="Directory holding local-only state."),
    ] = None,
) -> None:
    """sitesync - live content sync for the marketing site."""
    _configure_logging(verbose)
    config = load_config(config_path)
    try:
        config = merge_cli_overrides(
            config,
            backend=backend,
            project_id=project_id,
            json_path=store_path,
            state_dir=state_dir,
        )
    except ValueError as exc:
        err_console.print(f"[red]Invalid option:[/red] {exc}")
        raise typer.Exit(2) from exc
    ctx.obj = config


def _config(ctx: typer.Context) -> SiteSyncConfig:
    return ctx.obj if isinstance(ctx.obj, SiteSyncConfig) else load_config()


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


async def _collect(session: ContentSession, wait: float) -> dict:
    async with session:
        if wait > 0:
            await asyncio.sleep(wait)
        return session.model.snapshot.model_dump(mode="json", by_alias=True)


@app.command()
def show(
    ctx: typer.Context,
    group: Annotated[
        Optional[str],
        typer.Argument(help="Content slice to print, e.g. services or pricing_pages."),
    ] = None,
    wait: Annotated[
        float,
        typer.Option("--wait", "-w", help="Seconds to wait for remote snapshots."),
    ] = 0.0,
) -> None:
    """Print the resolved content model as JSON."""
    if group is not None and group not in SLICES:
        err_console.print(f"[red]Unknown group:[/red] {group}")
        err_console.print(f"Choose one of: {', '.join(SLICES)}")
        raise typer.Exit(1)

    data = asyncio.run(_collect(ContentSession(_config(ctx)), wait))
    if group is not None:
        data = data[ContentModel.model_fields[group].alias or group]
    console.print_json(json.dumps(data))


# ---------------------------------------------------------------------------
# seed
# ---------------------------------------------------------------------------


def _seed_documents() -> list[tuple[str, dict]]:
    """Every compiled-in default as (path, document) pairs."""
    documents: list[tuple[str, dict]] = []
    for service in defaults.SERVICES:
        documents.append((doc_path(Collection.SERVICES, service.id), to_document(service)))
    for service_id, detail in defaults.SERVICE_DETAILS.items():
        documents.append((doc_path(Collection.SERVICE_DETAILS, service_id), to_document(detail)))
    for testimonial in defaults.TESTIMONIALS:
        documents.append((doc_path(Collection.TESTIMONIALS, testimonial.id), to_document(testimonial)))
    for tier in defaults.PRICING_TIERS:
        documents.append((doc_path(Collection.PRICING_TIERS, tier.id), to_document(tier)))
    for faq in defaults.FAQ_ITEMS:
        documents.append((doc_path(Collection.FAQS, faq.id), to_document(faq)))
    for page_id, page in defaults.DEFAULT_PRICING_PAGE_CONTENT.items():
        documents.append((doc_path(Collection.PRICING_PAGES, page_id), to_document(page)))
    documents.extend(
        [
            (setting_path(SettingKey.HOMEPAGE), to_document(defaults.DEFAULT_HOMEPAGE_SETTINGS)),
            (setting_path(SettingKey.HOMEPAGE_CONTENT), to_document(defaults.DEFAULT_HOMEPAGE_CONTENT)),
            (setting_path(SettingKey.SOCIAL_LINKS), to_document(defaults.DEFAULT_SOCIAL_LINKS)),
            (setting_path(SettingKey.ABOUT_PAGE), to_document(defaults.DEFAULT_ABOUT_PAGE_SETTINGS)),
        ]
    )
    return documents


async def _seed(store: RemoteStore, documents: list[tuple[str, dict]], overwrite: bool) -> None:
    await store.ensure_session()
    for path, document in documents:
        await store.upsert(path, document, merge=not overwrite)


@app.command()
def seed(
    ctx: typer.Context,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace existing documents instead of merging."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="List the documents without writing them."),
    ] = False,
) -> None:
    """Write the compiled-in default content to the configured store."""
    documents = _seed_documents()
    if dry_run:
        for path, _ in documents:
            console.print(path)
        console.print(f"[dim]{len(documents)} documents[/dim]")
        return

    session = ContentSession(_config(ctx))
    if not session.remote_enabled:
        err_console.print("[red]No remote store configured.[/red] Set FIREBASE_PROJECT_ID or --store-path.")
        raise typer.Exit(1)
    try:
        asyncio.run(_seed(session.store, documents, overwrite))
    except Exception as exc:
        err_console.print(f"[red]Seeding failed:[/red] {exc}")
        raise typer.Exit(1) from exc
    finally:
        session.close()
    console.print(f"[green]Seeded {len(documents)} documents[/green] into the {session.store.name} store")


# ---------------------------------------------------------------------------
# reset / doctor
# ---------------------------------------------------------------------------


@app.command()
def reset(ctx: typer.Context) -> None:
    """Clear local-only state (dismissed modal markers)."""
    session = ContentSession(_config(ctx), store=NullStore("not needed"))
    had_state = (session.state_dir / STATE_FILENAME).exists()
    session.gateway.reset_data()
    session.close()
    if had_state:
        console.print(f"[green]Cleared[/green] {session.state_dir / STATE_FILENAME}")
    else:
        console.print("Nothing to reset")


@app.command()
def doctor(ctx: typer.Context) -> None:
    """Report which store backend resolved and whether it is usable."""
    config = _config(ctx)
    session = ContentSession(config)
    store = session.store

    table = Table(title="sitesync", show_header=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("Configured backend", str(config.store.backend))
    table.add_row("Resolved store", store.name)
    table.add_row("Store configured", "yes" if config.store.is_configured else "no")
    table.add_row("Remote writes", "[green]enabled[/green]" if store.available else "[yellow]local only[/yellow]")
    if not store.available:
        table.add_row("Reason", getattr(store, "reason", "unknown"))
    table.add_row("Firestore project", config.store.project_id or "-")
    table.add_row("Firestore client", "installed" if firestore_adapter.is_installed() else "not installed")
    table.add_row("JSON store path", config.store.json_path or "-")
    table.add_row("State directory", str(session.state_dir))
    session.close()
    console.print(table)
