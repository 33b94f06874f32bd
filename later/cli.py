"""
Command-line interface for the reading list.

Uses Typer to expose item ingestion, listing, editing and deletion. The
owner id is passed explicitly on every command. Supports loading .env
files for database configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import AppConfig, load_config
from .core.types import FilterSpec, ItemEdit
from .errors import LaterError
from .logging_utils import setup_logging
from .service import ItemService, build_service
from .storage.database import create_db_engine, init_db

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    database_url: str | None = typer.Option(
        None, "--database-url", help="Override the database URL (or set LATER_DATABASE_URL)."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Save URLs to a reading list and query them back."""
    load_dotenv()

    cfg = load_config(str(config) if config else None)

    if database_url:
        cfg.storage.database_url = database_url
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    setup_logging(cfg.logging)
    ctx.obj = cfg


@app.command("init-db")
def init_db_command(ctx: typer.Context):
    """Create the database tables."""
    cfg: AppConfig = ctx.obj
    init_db(create_db_engine(cfg.storage))
    console.print(f"Database ready: {cfg.storage.database_url}")


@app.command("add-owner")
def add_owner(ctx: typer.Context, name: str, email: str):
    """Register an owner and print its id."""
    service = _service(ctx)
    owner_id = _run(lambda: service.register_owner(name, email))
    console.print_json(data={"id": owner_id, "name": name, "email": email})


@app.command()
def add(
    ctx: typer.Context,
    owner_id: int,
    url: str,
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag to attach (repeatable)."),
):
    """Save URL for OWNER_ID, merging tags if it was saved before."""
    service = _service(ctx)
    record = _run(lambda: service.add_item(owner_id, url, tag or []))
    console.print_json(data=record.to_dict())


@app.command("list")
def list_items(
    ctx: typer.Context,
    owner_id: int,
    state: str | None = typer.Option(None, "--state", help="all, unread or read."),
    content_type: str | None = typer.Option(
        None, "--content-type", help="all, article, image or video."
    ),
    sort: str | None = typer.Option(None, "--sort", help="newest, oldest or title."),
    limit: int | None = typer.Option(None, "--limit", help="Maximum number of items."),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Match any of these tags."),
):
    """List OWNER_ID's items under the given filters."""
    cfg: AppConfig = ctx.obj
    service = _service(ctx)

    def _list():
        spec = FilterSpec(
            owner_id=owner_id,
            state=state or cfg.listing.state,
            content_type=content_type or cfg.listing.content_type,
            sort=sort or cfg.listing.sort,
            limit=limit if limit is not None else cfg.listing.limit,
            tags=frozenset(tag or []),
        )
        return service.list_items(spec)

    records = _run(_list)
    console.print_json(data=[record.to_dict() for record in records])


@app.command("by-tags")
def by_tags(
    ctx: typer.Context,
    owner_id: int,
    tag: list[str] = typer.Option(..., "--tag", "-t", help="Match any of these tags."),
):
    """List OWNER_ID's items carrying any of the given tags."""
    service = _service(ctx)
    records = _run(lambda: service.list_items_by_tag(owner_id, tag))
    console.print_json(data=[record.to_dict() for record in records])


@app.command()
def edit(
    ctx: typer.Context,
    owner_id: int,
    item_id: int,
    unread: bool | None = typer.Option(None, "--unread/--read", help="Set the read state."),
    tag: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag to add (repeatable)."),
    replace_tags: bool = typer.Option(
        False, "--replace-tags", help="Replace existing tags instead of adding."
    ),
):
    """Change the read state or tags of ITEM_ID."""
    service = _service(ctx)
    change = ItemEdit(
        item_id=item_id,
        unread=unread,
        tags=frozenset(tag or []),
        replace_tags=replace_tags,
    )
    _run(lambda: service.edit_item(owner_id, change))
    console.print(f"Item {item_id} updated")


@app.command()
def delete(ctx: typer.Context, owner_id: int, item_id: int):
    """Delete ITEM_ID if it belongs to OWNER_ID."""
    service = _service(ctx)
    _run(lambda: service.delete_item(owner_id, item_id))
    console.print(f"Item {item_id} deleted")


def _service(ctx: typer.Context) -> ItemService:
    return build_service(ctx.obj)


def _run(action) -> Any:  # noqa: ANN001
    try:
        return action()
    except LaterError as exc:
        console.print(f"[red]Error {exc.status}:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
