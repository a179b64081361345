"""MCP server exposing extension documentation tools."""

import json
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from roamjs_docs.api import RoamApi
from roamjs_docs.config import is_development, resolve_data_directory
from roamjs_docs.core.database.store import SqliteItemStore, open_item_store
from roamjs_docs.core.graph.reader import GraphReader
from roamjs_docs.handlers.page_props import page_props
from roamjs_docs.handlers.request_path import RequestParams, handle_request_path
from roamjs_docs.protocols import ItemStoreProtocol

# --- Core functions (testable without MCP context) ---


async def roamjs_read_extension(
    reader: GraphReader,
    store: ItemStoreProtocol,
    *,
    extension_id: str,
    development: bool = False,
) -> dict[str, Any]:
    """Render an extension's documentation page.

    Args:
        extension_id: Extension id, optionally followed by "/<subpage>".
        development: Rewrite site links to the local dev server.
    """
    response = await handle_request_path(
        RequestParams(id=extension_id),
        reader=reader,
        store=store,
        development=development,
    )
    props = page_props(extension_id, response)
    if response.status_code != 200:
        props["error"] = response.body
        props["status"] = response.status_code
    return props


async def roamjs_list_paths(
    reader: GraphReader,
    store: ItemStoreProtocol,
    *,
    sub: bool = False,
) -> dict[str, Any]:
    """List catalog entries, or documented subpages when ``sub`` is set."""
    response = await handle_request_path(RequestParams(sub=sub), reader=reader, store=store)
    paths = json.loads(response.body)["paths"]
    return {"paths": paths, "count": len(paths)}


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    store: SqliteItemStore
    reader: GraphReader
    development: bool


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Open the catalog and query client on startup, close on shutdown."""
    store = open_item_store(resolve_data_directory())
    try:
        reader = GraphReader(RoamApi(from_cache=os.environ.get("ROAMJS_CACHE") == "1"))
        logger.info("MCP server ready")
        yield ServerContext(store=store, reader=reader, development=is_development())
    finally:
        store.conn.close()


mcp_server = FastMCP(
    "roamjs-docs",
    instructions="""\
RoamJS extension documentation lives in a Roam graph as outlines. These tools
render it as MDX-flavoured markdown.

1. Call roamjs_list_paths_tool to find extension ids (sub=true lists subpages
   such as "query-builder/examples").
2. Call roamjs_read_extension_tool with an id to get its rendered documentation.

A response with development=true and an "error" field is a failed render, not content.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def roamjs_read_extension_tool(ctx: Context, extension_id: str) -> dict[str, Any]:
    """Render the documentation of a RoamJS extension (id or id/subpage)."""
    server = _ctx(ctx)
    return await roamjs_read_extension(
        server.reader,
        server.store,
        extension_id=extension_id,
        development=server.development,
    )


@mcp_server.tool()
async def roamjs_list_paths_tool(ctx: Context, sub: bool = False) -> dict[str, Any]:
    """List RoamJS extensions, or their documented subpages when sub is true."""
    server = _ctx(ctx)
    return await roamjs_list_paths(server.reader, server.store, sub=sub)
