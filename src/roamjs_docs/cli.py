"""CLI for roamjs-docs (render, paths, catalog import, MCP server)."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from roamjs_docs.api import RoamApi
from roamjs_docs.config import is_development, resolve_data_directory
from roamjs_docs.core.database.store import import_items_file, open_item_store
from roamjs_docs.core.graph.reader import GraphReader
from roamjs_docs.handlers.request_path import RequestParams, handle_request_path
from roamjs_docs.logging_config import configure_logging

app = typer.Typer(help="RoamJS docs: render extension documentation from the Roam graph.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _make_reader(cache: bool) -> GraphReader:
    try:
        return GraphReader(RoamApi(from_cache=cache))
    except RuntimeError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


@app.command()
def render(
    extension_id: str = typer.Argument(..., help="Extension id, optionally with a subpage"),
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Catalog database directory"),
    ] = None,
    dev: bool = typer.Option(False, "--dev", help="Rewrite site links to the local dev server"),
    cache: bool = typer.Option(
        False,
        "--cache",
        "-C",
        help="Cache queries and use cache. Returns stale data, but prevents ratelimits "
        "while developing",
    ),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output the response body"),
) -> None:
    """Render the documentation of one extension."""
    reader = _make_reader(cache)
    store = open_item_store(data_dir or resolve_data_directory())
    try:
        response = asyncio.run(
            handle_request_path(
                RequestParams(id=extension_id),
                reader=reader,
                store=store,
                development=dev or is_development(),
            )
        )
    finally:
        store.conn.close()

    if response.status_code != 200:
        typer.echo(f"Error ({response.status_code}): {response.body}", err=True)
        raise typer.Exit(1)
    if output_json:
        typer.echo(response.body)
    else:
        typer.echo(json.loads(response.body)["content"])


@app.command()
def paths(
    sub: bool = typer.Option(False, "--sub", "-s", help="List documented subpages"),
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Catalog database directory"),
    ] = None,
    cache: bool = typer.Option(False, "--cache", "-C", help="Cache queries and use cache"),
) -> None:
    """List catalog entries, or documented subpages with --sub."""
    store = open_item_store(data_dir or resolve_data_directory())
    try:
        if sub:
            reader = _make_reader(cache)
            response = asyncio.run(
                handle_request_path(RequestParams(sub=True), reader=reader, store=store)
            )
            for entry in json.loads(response.body)["paths"]:
                typer.echo("/".join([entry["id"], *entry["subpage"]]))
        else:
            for item in store.scan():
                typer.echo(f"{item.id}\t{item.state or ''}\t{item.description or ''}")
    finally:
        store.conn.close()


@app.command(name="import-extensions")
def import_extensions(
    source: Path = typer.Argument(..., help="JSON file with an array of catalog records"),
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Catalog database directory"),
    ] = None,
) -> None:
    """Import extension catalog records into the catalog database."""
    if not source.exists():
        logger.error("Catalog file not found: {}", source)
        raise typer.Exit(1)

    store = open_item_store(data_dir or resolve_data_directory())
    try:
        stats = import_items_file(store, source)
    finally:
        store.conn.close()
    typer.echo(f"Imported {stats.items_imported} extensions, skipped {stats.items_skipped}")


@app.command(name="serve-mcp")
def serve_mcp() -> None:
    """Run the MCP server over stdio."""
    from roamjs_docs.mcp.server import mcp_server

    mcp_server.run()
