"""CLI interface for blogcms legal pages."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from blogcms.config import load_config, merge_cli_overrides
from blogcms.legal.models import LegalPage
from blogcms.legal.storage import build_storage
from blogcms.legal.store import LegalPageStore
from blogcms.legal.validation import Err, validate_page_input, validate_published, validate_slug
from blogcms.shared.errors import ConfigError, NotFoundError, StorageError

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="blogcms",
    help="Manage the blog's legal pages (privacy policy, terms of service).",
    no_args_is_help=True,
)
admin_app = typer.Typer(help="Privileged commands: every page, drafts included.")
public_app = typer.Typer(help="Public view: published pages only.")
app.add_typer(admin_app, name="admin")
app.add_typer(public_app, name="public")

console = Console()
err_console = Console(stderr=True)

EXIT_NOT_FOUND = 1
EXIT_INVALID = 2
EXIT_STORAGE = 3


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from blogcms import __version__

        console.print(f"blogcms {__version__}")
        raise typer.Exit()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .blogcms.toml file."),
    ] = None,
    store_dir: Annotated[
        Optional[str],
        typer.Option("--store-dir", help="Directory holding the page store."),
    ] = None,
    backend: Annotated[
        Optional[str],
        typer.Option("--backend", help="Storage backend: json or memory."),
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
    """blogcms - legal page content store."""
    try:
        config = merge_cli_overrides(
            load_config(config_path),
            storage_directory=store_dir,
            storage_backend=backend,
            log_level="DEBUG" if verbose else None,
        )
        storage = build_storage(config.storage)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(EXIT_INVALID) from exc
    _setup_logging(config.logging.level)
    logger.debug("Using %s storage (%s)", config.storage.backend, config.storage.directory)
    ctx.obj = LegalPageStore(storage)


def _store(ctx: typer.Context) -> LegalPageStore:
    return ctx.obj


def _require_slug(raw: str) -> str:
    """Validate a slug for privileged commands, exiting on failure."""
    result = validate_slug(raw)
    if isinstance(result, Err):
        err_console.print(f"[red]Invalid slug:[/red] {escape(result.reason)}")
        raise typer.Exit(EXIT_INVALID)
    return result.value.value


def _not_found(exc: NotFoundError) -> typer.Exit:
    err_console.print(f"[red]Not found:[/red] {escape(str(exc))}")
    return typer.Exit(EXIT_NOT_FOUND)


def _storage_failed(exc: StorageError) -> typer.Exit:
    err_console.print(f"[red]Storage error:[/red] {escape(str(exc))}")
    return typer.Exit(EXIT_STORAGE)


def _page_dict(page: LegalPage) -> dict[str, object]:
    return page.model_dump(mode="json")


def _print_pages(pages: list[LegalPage], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps([_page_dict(p) for p in pages], indent=2))
        return
    if not pages:
        console.print("No legal pages.")
        return
    table = Table(title="Legal pages")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Published")
    table.add_column("Updated")
    for page in pages:
        updated = page.updated_at.strftime("%Y-%m-%d %H:%M") if page.updated_at else "-"
        table.add_row(escape(page.slug), escape(page.title), "yes" if page.published else "no", updated)
    console.print(table)


def _print_page(page: LegalPage, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(_page_dict(page), indent=2))
        return
    state = "published" if page.published else "draft"
    console.print(f"[bold]{escape(page.title)}[/bold] ({escape(page.slug)}, {state})")
    console.print(page.body, markup=False, highlight=False)


JsonFlag = Annotated[bool, typer.Option("--json", help="Print JSON instead of text.")]


# ── Admin commands ───────────────────────────────────────────────


@admin_app.command("list")
def admin_list(ctx: typer.Context, as_json: JsonFlag = False) -> None:
    """List every legal page, drafts included."""
    try:
        pages = _store(ctx).get_all()
    except StorageError as exc:
        raise _storage_failed(exc) from exc
    _print_pages(pages, as_json)


@admin_app.command("show")
def admin_show(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Page slug (privacy or terms).")],
    as_json: JsonFlag = False,
) -> None:
    """Show one legal page regardless of publish state."""
    slug = _require_slug(slug)
    try:
        page = _store(ctx).get_by_slug(slug)
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    except StorageError as exc:
        raise _storage_failed(exc) from exc
    _print_page(page, as_json)


@admin_app.command("put")
def admin_put(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Page slug (privacy or terms).")],
    title: Annotated[str, typer.Option("--title", "-t", help="Page title.")],
    body: Annotated[
        Optional[str],
        typer.Option("--body", "-b", help="HTML body."),
    ] = None,
    body_file: Annotated[
        Optional[Path],
        typer.Option(
            "--body-file",
            "-f",
            help="Read the HTML body from a file.",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    as_json: JsonFlag = False,
) -> None:
    """Create or update a legal page's title and body."""
    slug = _require_slug(slug)
    if (body is None) == (body_file is None):
        err_console.print("[red]Error:[/red] pass exactly one of --body or --body-file")
        raise typer.Exit(EXIT_INVALID)
    if body_file is not None:
        body = body_file.read_text(encoding="utf-8")

    result = validate_page_input(title, body)
    if isinstance(result, Err):
        err_console.print(f"[red]Invalid page:[/red] {escape(result.reason)}")
        raise typer.Exit(EXIT_INVALID)

    try:
        page = _store(ctx).upsert(slug, result.value)
    except StorageError as exc:
        raise _storage_failed(exc) from exc
    if as_json:
        _print_page(page, as_json)
    else:
        console.print(f"Saved legal page '{page.slug}'.")


def _set_published(ctx: typer.Context, slug: str, published: bool, as_json: bool) -> None:
    slug = _require_slug(slug)
    try:
        page = _store(ctx).set_published(slug, published)
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    except StorageError as exc:
        raise _storage_failed(exc) from exc
    if as_json:
        _print_page(page, as_json)
    else:
        state = "published" if page.published else "unpublished"
        console.print(f"Legal page '{page.slug}' {state}.")


@admin_app.command("publish")
def admin_publish(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Page slug (privacy or terms).")],
    as_json: JsonFlag = False,
) -> None:
    """Make a legal page publicly visible."""
    _set_published(ctx, slug, True, as_json)


@admin_app.command("unpublish")
def admin_unpublish(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Page slug (privacy or terms).")],
    as_json: JsonFlag = False,
) -> None:
    """Return a legal page to draft."""
    _set_published(ctx, slug, False, as_json)


@admin_app.command("set-published")
def admin_set_published(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Page slug (privacy or terms).")],
    value: Annotated[str, typer.Argument(help="true or false.")],
    as_json: JsonFlag = False,
) -> None:
    """Set the publish flag explicitly."""
    result = validate_published(value)
    if isinstance(result, Err):
        err_console.print(f"[red]Invalid value:[/red] {escape(result.reason)}")
        raise typer.Exit(EXIT_INVALID)
    _set_published(ctx, slug, result.value, as_json)


# ── Public commands ──────────────────────────────────────────────


@public_app.command("list")
def public_list(ctx: typer.Context, as_json: JsonFlag = False) -> None:
    """List published legal pages."""
    try:
        pages = _store(ctx).get_public_all()
    except StorageError as exc:
        raise _storage_failed(exc) from exc
    _print_pages(pages, as_json)


@public_app.command("show")
def public_show(
    ctx: typer.Context,
    slug: Annotated[str, typer.Argument(help="Page slug.")],
    as_json: JsonFlag = False,
) -> None:
    """Show a published legal page."""
    try:
        page = _store(ctx).get_public_by_slug(slug)
    except NotFoundError as exc:
        raise _not_found(exc) from exc
    except StorageError as exc:
        raise _storage_failed(exc) from exc
    _print_page(page, as_json)


if __name__ == "__main__":
    app()
