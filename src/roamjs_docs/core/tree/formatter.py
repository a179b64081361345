"""Build normalized outline trees from pulled graph content."""

from datetime import UTC, datetime

from loguru import logger

from roamjs_docs.core.graph.reader import GraphReader
from roamjs_docs.core.resolve.references import ReferenceResolver
from roamjs_docs.core.tasks import gather_all
from roamjs_docs.models.node import EPOCH, OutlineNode, PageContent, RawNode, ViewType


def _sorted_children(raw: RawNode) -> list[RawNode]:
    return sorted(raw.children, key=lambda c: c.order or 0)


def _edit_time(raw: RawNode) -> datetime:
    if raw.edit_time is None:
        return EPOCH
    return datetime.fromtimestamp(raw.edit_time / 1000, tz=UTC)


class TreeFormatter:
    """Format the outline of one requested document.

    Args:
        reader: Graph lookups.
        document_id: The requested id, used to classify references.
        embed_chain: Uids of the embeds currently being expanded, outermost first.
    """

    def __init__(
        self,
        reader: GraphReader,
        *,
        document_id: str,
        embed_chain: tuple[str, ...] = (),
    ) -> None:
        self._reader = reader
        self.document_id = document_id
        self.embed_chain = embed_chain
        self.resolver = ReferenceResolver(
            reader,
            document_id=document_id,
            load_embed=self.load_embed,
            embed_chain=embed_chain,
        )

    async def format_node(self, raw: RawNode, inherited_view_type: ViewType) -> OutlineNode:
        """Format a pulled block and its descendants, resolving references in its text."""
        view_type = raw.view_type or inherited_view_type
        children = await gather_all(
            [self.format_node(child, view_type) for child in _sorted_children(raw)]
        )
        text = raw.string or raw.title or ""
        # Embedded children land after the sorted ones, unsorted.
        resolved = await self.resolver.resolve_text(text, children)

        return OutlineNode(
            text=resolved,
            open=True if raw.open is None else raw.open,
            order=raw.order or 0,
            uid=raw.uid or "",
            heading=raw.heading or 0,
            view_type=view_type,
            edit_time=_edit_time(raw),
            text_align=raw.text_align or "left",
            children=tuple(children),
        )

    async def load_content(self, target: str, *, by_uid: bool = False) -> PageContent:
        """Load a page by title (or a block by uid) as formatted top-level blocks."""
        path = target.split("/")[0]
        root = await self._reader.pull_content(target, by_uid=by_uid)
        if root is None:
            logger.debug("No content found for {!r}", target)
            return PageContent(blocks=(), view_type=ViewType.BULLET, path=path)

        view_type = root.view_type or ViewType.BULLET
        blocks = await gather_all(
            [self.format_node(child, view_type) for child in _sorted_children(root)]
        )
        return PageContent(
            blocks=tuple(blocks),
            view_type=view_type,
            path=path,
            text=root.string or root.title or "",
        )

    async def load_embed(self, uid: str, chain: tuple[str, ...]) -> PageContent:
        """Load an embedded block, formatting its subtree under the given embed chain."""
        nested = TreeFormatter(self._reader, document_id=self.document_id, embed_chain=chain)
        return await nested.load_content(uid, by_uid=True)
