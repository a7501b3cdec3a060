"""CLI interface for archive-pages."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from archive_pages.archive.plugin import ArchivePagesPlugin
from archive_pages.config import ArchivePagesConfig, load_config, merge_cli_overrides
from archive_pages.content.models import RecordStatus
from archive_pages.content.store import JsonRecordStore
from archive_pages.errors import ArchivePageNotFoundError, ArchivePagesError
from archive_pages.host.catalog import TypeCatalog
from archive_pages.host.site import ADMINISTRATOR_CAPABILITIES, Operator, Site
from archive_pages.integrations.github import GitHubUpdateChecker

app = typer.Typer(
    name="archive-pages",
    help="Keep one editable archive page per content type.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from archive_pages import __version__

        console.print(f"archive-pages {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .archive-pages.toml file."),
    ] = None,
    store_dir: Annotated[
        Optional[Path],
        typer.Option("--store", help="Directory holding the record store."),
    ] = None,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", help="Public base URL of the site."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Archive Pages - editable landing pages for content type listings."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    config = load_config(config_path)
    ctx.obj = merge_cli_overrides(
        config,
        store_directory=str(store_dir) if store_dir is not None else None,
        site_base_url=base_url,
    )


def _build_site(config: ArchivePagesConfig) -> tuple[Site, ArchivePagesPlugin]:
    """Construct a file-backed site with the archive page plugin wired in."""
    catalog = TypeCatalog(config.site.base_url)
    for content_type in config.content_types():
        catalog.register(content_type)
    site = Site(
        catalog,
        JsonRecordStore(config.store_path),
        admin_path=config.site.admin_path,
        page_for_posts=config.site.page_for_posts,
    )
    plugin = ArchivePagesPlugin(
        site,
        capability=config.archive.capability,
        excluded_types=config.archive.excluded_types,
    )
    plugin.register(site.hooks)
    site.init()
    return site, plugin


def _administrator(config: ArchivePagesConfig) -> Operator:
    return Operator(
        name="admin",
        capabilities=set(ADMINISTRATOR_CAPABILITIES) | {config.archive.capability},
    )


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


@app.command()
def reconcile(ctx: typer.Context) -> None:
    """Create archive pages for every eligible content type that lacks one."""
    _, plugin = _build_site(ctx.obj)
    created = plugin.reconciler.reconcile()
    if not created:
        console.print("All eligible content types already have archive pages.")
        return
    table = Table(title="Created archive pages")
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Title")
    for record in created:
        table.add_row(str(record.id), record.slug, record.title)
    console.print(table)


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """List archive pages with their resolved public addresses."""
    site, plugin = _build_site(ctx.obj)
    table = Table(title="Archive pages")
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Address")
    for content_type in plugin.reconciler.eligible_types():
        page = plugin.index.find_archive_page(content_type.identifier)
        if page is None:
            table.add_row("-", content_type.identifier, "[dim]missing[/dim]", "", "")
            continue
        address = site.public_address(page.id) or "[dim]none[/dim]"
        table.add_row(str(page.id), content_type.identifier, page.title, page.status, address)
    console.print(table)


@app.command("edit-link")
def edit_link(
    ctx: typer.Context,
    type_id: Annotated[str, typer.Argument(help="Content type identifier.")],
) -> None:
    """Print the admin edit address of a type's archive page."""
    _, plugin = _build_site(ctx.obj)
    try:
        console.print(plugin.index.edit_link(type_id))
    except ArchivePageNotFoundError as exc:
        _fail(str(exc))


@app.command()
def link(
    ctx: typer.Context,
    type_id: Annotated[str, typer.Argument(help="Content type identifier.")],
) -> None:
    """Print the public address an archive page resolves to."""
    site, plugin = _build_site(ctx.obj)
    page = plugin.index.find_archive_page(type_id)
    if page is None:
        _fail(str(ArchivePageNotFoundError(type_id)))
    address = site.public_address(page.id)
    if address is None:
        _fail(f"Content type {type_id!r} has no listing address")
    console.print(address)


@app.command()
def edit(
    ctx: typer.Context,
    type_id: Annotated[str, typer.Argument(help="Content type identifier.")],
    title: Annotated[Optional[str], typer.Option(help="New title.")] = None,
    body: Annotated[Optional[str], typer.Option(help="New body content.")] = None,
    excerpt: Annotated[Optional[str], typer.Option(help="New excerpt.")] = None,
    image: Annotated[Optional[str], typer.Option(help="Featured image URL.")] = None,
    status: Annotated[Optional[RecordStatus], typer.Option(help="New status.")] = None,
) -> None:
    """Edit the metadata fields of a type's archive page."""
    fields = {
        name: value
        for name, value in {
            "title": title,
            "body": body,
            "excerpt": excerpt,
            "featured_image": image,
            "status": status,
        }.items()
        if value is not None
    }
    if not fields:
        _fail("Nothing to change; pass at least one field option")
    site, plugin = _build_site(ctx.obj)
    page = plugin.index.find_archive_page(type_id)
    if page is None:
        _fail(str(ArchivePageNotFoundError(type_id)))
    try:
        record = site.edit_record(_administrator(ctx.obj), page.id, **fields)
    except ArchivePagesError as exc:
        _fail(str(exc))
    console.print(f"Updated archive page {record.id} ({record.title})")


@app.command()
def menu(
    ctx: typer.Context,
    capability: Annotated[
        Optional[list[str]],
        typer.Option("--capability", help="Act as an operator holding only these capabilities."),
    ] = None,
) -> None:
    """Run an admin request and print the archive page menu entries."""
    site, _ = _build_site(ctx.obj)
    operator = (
        Operator(name="operator", capabilities=set(capability))
        if capability
        else _administrator(ctx.obj)
    )
    admin_menu = site.admin_request(operator)
    if not len(admin_menu):
        console.print("No archive page entries for this operator.")
        return
    table = Table(title="Admin menu")
    table.add_column("Parent")
    table.add_column("Label")
    table.add_column("Target")
    for parent in admin_menu.parents:
        for entry in admin_menu.entries(parent):
            table.add_row(parent, entry.label, entry.target)
    console.print(table)


@app.command()
def doctor(ctx: typer.Context) -> None:
    """Report duplicate, dangling and missing archive page associations."""
    _, plugin = _build_site(ctx.obj)
    eligible = [t.identifier for t in plugin.reconciler.eligible_types()]
    report = plugin.index.audit(eligible)

    table = Table(title="Archive Pages Doctor")
    table.add_column("Check", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")
    table.add_row(
        "Duplicates",
        "FAIL" if report.duplicates else "OK",
        "; ".join(f"{t}: {ids}" for t, ids in report.duplicates.items()),
    )
    table.add_row(
        "Dangling",
        "WARN" if report.dangling else "OK",
        "; ".join(f"{i} -> {t}" for i, t in report.dangling.items()),
    )
    table.add_row(
        "Unassociated",
        "WARN" if report.unassociated else "OK",
        ", ".join(str(i) for i in report.unassociated),
    )
    table.add_row(
        "Missing",
        "WARN" if report.missing else "OK",
        ", ".join(report.missing),
    )
    console.print(table)
    if report.duplicates:
        raise typer.Exit(1)


@app.command("check-update")
def check_update(ctx: typer.Context) -> None:
    """Check the source repository for a newer release."""
    from archive_pages import __version__

    config: ArchivePagesConfig = ctx.obj
    if not config.updater.is_configured:
        console.print("Update checks are disabled.")
        return
    info = GitHubUpdateChecker(config.updater).check_for_update(__version__)
    if info is None:
        console.print(f"archive-pages {__version__} is up to date.")
        return
    console.print(f"Update available: [bold]{info.version}[/bold] (installed {__version__})")
    console.print(f"Download: {info.zip_url}")


if __name__ == "__main__":
    app()
