"""Resolve block references, aliases and embeds inside block text."""

import re
from collections.abc import Awaitable, Callable

from loguru import logger

from roamjs_docs.core.graph.reader import GraphReader
from roamjs_docs.core.resolve.splice import apply_replacements
from roamjs_docs.core.tasks import gather_all
from roamjs_docs.errors import ReferenceCycleError
from roamjs_docs.models.node import OutlineNode, PageContent, ReplacementSpan

_BLOCK_REF = r"\(\(([\w\d-]{9,10})\)\)"

BLOCK_REF_REGEX = re.compile(_BLOCK_REF)
EMBED_REF_REGEX = re.compile(r"{{(?:\[\[)?embed(?:\]\])?:\s*" + _BLOCK_REF + r"\s*}}")
ALIAS_BLOCK_REGEX = re.compile(r"\[(.*?)\]\(" + _BLOCK_REF + r"\)")
# A reference directly followed by "}" or ")" belongs to an embed or an alias.
BARE_BLOCK_REF_REGEX = re.compile(_BLOCK_REF + r"(?![})])")

EmbedLoader = Callable[[str, tuple[str, ...]], Awaitable[PageContent]]


def page_path(title: str) -> str:
    """Turn a page title into its documentation path segment."""
    return title.replace(" ", "_").lower()


def _within(span: tuple[int, int], others: list[tuple[int, int]]) -> bool:
    start, end = span
    return any(o_start <= start and end <= o_end for o_start, o_end in others)


class ReferenceResolver:
    """Substitute the references found in block text for one requested document.

    Args:
        reader: Graph lookups.
        document_id: The requested id (``extension`` or ``extension/sub``);
            references into other pages render as plain text.
        load_embed: Loads an embedded block's formatted subtree, given its uid
            and the embed chain it is expanded under.
        embed_chain: Uids of the embeds being expanded, outermost first.
    """

    def __init__(
        self,
        reader: GraphReader,
        *,
        document_id: str,
        load_embed: EmbedLoader,
        embed_chain: tuple[str, ...] = (),
    ) -> None:
        self._reader = reader
        self.document_id = document_id
        self._load_embed = load_embed
        self.embed_chain = embed_chain

    def is_external(self, page: str) -> bool:
        return page != self.document_id and not page.startswith(f"{self.document_id}/")

    async def resolve_text(self, text: str, children: list[OutlineNode]) -> str:
        """Return ``text`` with every reference replaced.

        Embedded blocks also contribute their children: they are appended to
        ``children`` in the order the embeds appear in ``text``.
        """
        embeds = list(EMBED_REF_REGEX.finditer(text))
        aliases = list(ALIAS_BLOCK_REGEX.finditer(text))
        consumed = [m.span() for m in (*embeds, *aliases)]
        bare = [m for m in BARE_BLOCK_REF_REGEX.finditer(text) if not _within(m.span(), consumed)]
        if not (embeds or aliases or bare):
            return text

        embed_children: list[list[OutlineNode]] = [[] for _ in embeds]
        spans = await gather_all(
            [self._resolve_embed(m, acc) for m, acc in zip(embeds, embed_children)]
            + [self._resolve_alias(m) for m in aliases]
            + [self._resolve_bare(m) for m in bare]
        )
        for acc in embed_children:
            children.extend(acc)
        return apply_replacements(text, spans)

    def _descend(self, uid: str) -> "ReferenceResolver":
        chain = (*self.embed_chain, uid)
        if uid in self.embed_chain:
            raise ReferenceCycleError(chain)
        return ReferenceResolver(
            self._reader,
            document_id=self.document_id,
            load_embed=self._load_embed,
            embed_chain=chain,
        )

    async def _resolve_embed(
        self, match: re.Match[str], children: list[OutlineNode]
    ) -> ReplacementSpan:
        uid = match[1]
        logger.debug("Resolving embed of {!r}", uid)
        nested = self._descend(uid)
        content = await self._load_embed(uid, nested.embed_chain)
        children.extend(content.blocks)
        value = await nested.resolve_text(content.text, children)
        return ReplacementSpan(value=value, start=match.start(), end=match.end())

    async def _resolve_alias(self, match: re.Match[str]) -> ReplacementSpan:
        label, uid = match[1], match[2]
        page = await self._reader.page_title_by_block_uid(uid)
        value = label if self.is_external(page) else f"[{label}](/extensions/{page}#{uid})"
        return ReplacementSpan(value=value, start=match.start(), end=match.end())

    async def _resolve_bare(self, match: re.Match[str]) -> ReplacementSpan:
        uid = match[1]
        reference, title = await gather_all(
            [self._reader.text_by_block_uid(uid), self._reader.page_title_by_block_uid(uid)]
        )
        page = page_path(title)
        if self.is_external(page):
            value = reference or match[0]
        else:
            value = f"[{reference or match[0]}](/extensions/{page}#{uid})"
        return ReplacementSpan(value=value, start=match.start(), end=match.end())
