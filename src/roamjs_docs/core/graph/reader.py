"""Async lookups against the Roam graph."""

import asyncio
from typing import Any

from loguru import logger

from roamjs_docs.core.graph.pull_reader import first_entity, parse_pull_block
from roamjs_docs.core.graph.queries import (
    DOCUMENTED_SUBPAGES_QUERY,
    content_query,
    page_title_by_block_uid_query,
    text_by_block_uid_query,
)
from roamjs_docs.models.node import RawNode, Subpage
from roamjs_docs.protocols import QueryProtocol


class GraphReader:
    """Run graph queries off the event loop and parse their results.

    The query client is blocking; every query runs in a worker thread so that
    lookups issued from one request can proceed concurrently.
    """

    def __init__(self, api: QueryProtocol) -> None:
        self._api = api

    async def _query(self, query: str) -> list[list[Any]]:
        return await asyncio.to_thread(self._api.query, query)

    async def pull_content(self, target: str, *, by_uid: bool = False) -> RawNode | None:
        """Pull a page by title, or a block by uid, with its whole subtree."""
        rows = await self._query(content_query(target, by_uid=by_uid))
        return first_entity(rows)

    async def page_title_by_block_uid(self, block_uid: str) -> str:
        """Return the title of the page containing a block, or "" if unknown."""
        node = first_entity(await self._query(page_title_by_block_uid_query(block_uid)))
        return (node.title if node else None) or ""

    async def text_by_block_uid(self, block_uid: str) -> str:
        """Return a block's raw string, or "" if unknown."""
        node = first_entity(await self._query(text_by_block_uid_query(block_uid)))
        return (node.string if node else None) or ""

    async def documented_subpages(self) -> list[Subpage]:
        """List every "<id>/<sub>" page under an extension with a Documentation block."""
        rows = await self._query(DOCUMENTED_SUBPAGES_QUERY)
        paths: list[Subpage] = []
        for row in rows:
            page, sub = (parse_pull_block(field) for field in row[:2])
            page_title = page.title or ""
            sub_title = sub.title or ""
            if not sub_title.startswith(f"{page_title}/"):
                continue
            paths.append(Subpage(id=page_title, subpage=tuple(sub_title.split("/")[1:])))
        logger.debug("Found {} documented subpages", len(paths))
        return paths
