"""The request-path handler: documentation content and catalog paths."""

import asyncio
import json
import re
from dataclasses import dataclass
from typing import Any

from loguru import logger

from roamjs_docs.api import RoamApi, fetch_github_readme
from roamjs_docs.config import is_development, resolve_data_directory
from roamjs_docs.core.database.store import open_item_store
from roamjs_docs.core.graph.reader import GraphReader
from roamjs_docs.core.tree.formatter import TreeFormatter
from roamjs_docs.core.tree.markdown import RenderContext, render_blocks, rewrite_site_links
from roamjs_docs.errors import NotFoundError, RateLimitedError
from roamjs_docs.handlers.headers import cors_headers
from roamjs_docs.models.node import OutlineNode, PageContent, Response
from roamjs_docs.protocols import ItemStoreProtocol, ReadmeFetcherProtocol

DOCUMENTATION_TITLE_REGEX = re.compile(r"\s*Documentation\s*", re.IGNORECASE)
GITHUB_REPO_REGEX = re.compile(r"https://github\.com/\w+/[\w-]+")


@dataclass(frozen=True)
class RequestParams:
    """Query string parameters of a request-path call."""

    id: str | None = None
    sub: bool = False

    @classmethod
    def from_query(cls, params: dict[str, Any] | None) -> "RequestParams":
        params = params or {}
        return cls(id=params.get("id") or None, sub=params.get("sub") == "true")


def documentation_roots(extension_id: str, content: PageContent) -> tuple[OutlineNode, ...]:
    """Pick the blocks to render.

    An extension's own page keeps its docs under a "Documentation" block; a
    subpage (``extension/sub``) is documentation in its entirety.
    """
    if extension_id != content.path:
        return content.blocks
    for block in content.blocks:
        if DOCUMENTATION_TITLE_REGEX.fullmatch(block.text):
            return block.children
    return ()


async def render_extension_content(
    extension_id: str,
    *,
    reader: GraphReader,
    readme_fetcher: ReadmeFetcherProtocol = fetch_github_readme,
    development: bool = False,
) -> str:
    """Build and render the documentation of an extension page.

    Documentation consisting of a single GitHub repository link is replaced by
    that repository's README.
    """
    formatter = TreeFormatter(reader, document_id=extension_id)
    content = await formatter.load_content(extension_id)
    docs = documentation_roots(extension_id, content)

    if len(docs) == 1 and GITHUB_REPO_REGEX.fullmatch(docs[0].text):
        logger.debug("Serving README of {} for {!r}", docs[0].text, extension_id)
        readme = await asyncio.to_thread(readme_fetcher, docs[0].text)
        return rewrite_site_links(readme, development=development)

    context = RenderContext(path=content.path, development=development)
    return render_blocks(docs, content.view_type, context=context)


async def extension_response(
    extension_id: str,
    *,
    reader: GraphReader,
    store: ItemStoreProtocol,
    readme_fetcher: ReadmeFetcherProtocol = fetch_github_readme,
    development: bool = False,
    headers: dict[str, str] | None = None,
) -> Response:
    """Render one extension page together with its catalog metadata."""
    headers = headers or {}
    try:
        item = store.get_item(extension_id.split("/")[0])
        if item is None:
            msg = f"No extension found with id {extension_id.split('/')[0]!r}"
            raise NotFoundError(msg)
        content = await render_extension_content(
            extension_id,
            reader=reader,
            readme_fetcher=readme_fetcher,
            development=development,
        )
    except Exception as e:
        logger.exception("Failed to render documentation for {!r}", extension_id)
        status = 429 if isinstance(e, RateLimitedError) else 500
        return Response(status_code=status, body=str(e), headers=headers)

    logger.info("Rendered documentation for {!r} ({} chars)", extension_id, len(content))
    body = {
        "content": content,
        "state": item.state or "PRIVATE",
        "description": item.description or "",
        "entry": item.src,
        "downloadUrl": item.download,
    }
    return Response(status_code=200, body=json.dumps(body), headers=headers)


async def subpages_response(
    *, reader: GraphReader, headers: dict[str, str] | None = None
) -> Response:
    """List the documented subpages of every extension."""
    subpages = await reader.documented_subpages()
    paths = [{"id": s.id, "subpage": list(s.subpage)} for s in subpages]
    return Response(status_code=200, body=json.dumps({"paths": paths}), headers=headers or {})


def catalog_response(
    *, store: ItemStoreProtocol, headers: dict[str, str] | None = None
) -> Response:
    """List every extension in the catalog."""
    paths = []
    for item in store.scan():
        entry = {
            "id": item.id,
            "description": item.description,
            "state": item.state,
            "featured": item.featured,
            "entry": item.src,
        }
        # Unset attributes are left out rather than sent as null.
        paths.append({k: v for k, v in entry.items() if v is not None})
    return Response(status_code=200, body=json.dumps({"paths": paths}), headers=headers or {})


async def handle_request_path(
    params: RequestParams,
    *,
    reader: GraphReader,
    store: ItemStoreProtocol,
    readme_fetcher: ReadmeFetcherProtocol = fetch_github_readme,
    development: bool = False,
    headers: dict[str, str] | None = None,
) -> Response:
    """Dispatch a request-path call to the page, subpage or catalog listing."""
    if params.id:
        return await extension_response(
            params.id,
            reader=reader,
            store=store,
            readme_fetcher=readme_fetcher,
            development=development,
            headers=headers,
        )
    if params.sub:
        return await subpages_response(reader=reader, headers=headers)
    return catalog_response(store=store, headers=headers)


def handler(event: dict[str, Any], _context: Any = None) -> dict[str, Any]:
    """Lambda-style entry point: build collaborators from configuration and serve one event."""
    headers = cors_headers(event)
    params = RequestParams.from_query(event.get("queryStringParameters"))
    store = None
    try:
        store = open_item_store(resolve_data_directory())
        reader = GraphReader(RoamApi())
        response = asyncio.run(
            handle_request_path(
                params,
                reader=reader,
                store=store,
                development=is_development(),
                headers=headers,
            )
        )
    except Exception as e:
        logger.exception("request-path failed for {!r}", params)
        response = Response(status_code=500, body=str(e), headers=headers)
    finally:
        if store is not None:
            store.conn.close()
    return response.to_dict()
