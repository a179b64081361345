"""Render outline trees as MDX-flavoured markdown."""

import io
import re
from dataclasses import dataclass
from functools import lru_cache

from roamjs_docs.config import DEV_SITE_URL, SITE_URL
from roamjs_docs.models.node import OutlineNode, ViewType

VIEW_TYPE_PREFIX: dict[ViewType, str] = {
    ViewType.BULLET: "- ",
    ViewType.DOCUMENT: "",
    ViewType.NUMBERED: "1. ",
}

_LOOM_REGEX = re.compile(
    r"{{(?:\[\[)?video(?:\]\])?:\s*https://www\.loom\.com/share/([0-9a-f]*)}}"
)
_YOUTUBE_REGEX = re.compile(
    r"{{(?:\[\[)?(?:youtube|video)(?:\]\])?:\s*https://"
    r"(?:youtu\.be/([\w-]*)|(?:www\.)?youtube\.com/watch\?v=([\w-]+)[^}]*)}}"
)
_DEMO_VIDEO_REGEX = re.compile(r"{{(?:\[\[)?video(?:\]\])?:\s*(\S+?)\s*}}")
_HIGHLIGHT_REGEX = re.compile(r"\^\^(.*?)\^\^")
_TRAILING_FENCE_REGEX = re.compile(r"```\Z")
_SITE_URL_REGEX = re.compile(re.escape(SITE_URL))
_NBSP = chr(160)


@dataclass(frozen=True)
class RenderContext:
    """Request-wide settings for rendering.

    Attributes:
        path: The extension id; ``[[path]]`` and ``[[path/...]]`` links become site links.
        development: Rewrite absolute site links to the local dev server.
    """

    path: str
    development: bool = False


@lru_cache(maxsize=64)
def _page_link_regexes(path: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    escaped = re.escape(path)
    return (
        re.compile(rf"\[(.*?)\]\(\[\[{escaped}/(.*?)\]\]\)"),
        re.compile(rf"\[(.*?)\]\(\[\[{escaped}\]\]\)"),
    )


def rewrite_site_links(text: str, *, development: bool) -> str:
    """Point absolute links to the site at the local dev server when developing."""
    if not development:
        return text
    return _SITE_URL_REGEX.sub(DEV_SITE_URL, text)


def replace_components(text: str, prefix: str, *, context: RenderContext) -> str:
    """Convert inline Roam markup to MDX components and fix up whitespace.

    Args:
        text: Resolved block text.
        prefix: The line prefix of the block; continuation lines are indented to its width.
        context: Render settings.
    """
    subpage_link, page_link = _page_link_regexes(context.path)

    text = _LOOM_REGEX.sub(lambda m: f'<Loom id={{"{m[1]}"}} />', text)
    text = _YOUTUBE_REGEX.sub(lambda m: f'<YouTube id={{"{m[1] or m[2]}"}} />', text)
    text = _DEMO_VIDEO_REGEX.sub(lambda m: f'<DemoVideo src={{"{m[1]}"}} />', text)
    text = subpage_link.sub(
        lambda m: f"[{m[1]}](/extensions/{context.path}/{m[2].replace(' ', '_').lower()})",
        text,
    )
    text = page_link.sub(lambda m: f"[{m[1]}](/extensions/{context.path})", text)
    text = _HIGHLIGHT_REGEX.sub(lambda m: f"<Highlight>{m[1]}</Highlight>", text)
    text = text.replace("__", "_").replace(_NBSP, " ")
    text = _TRAILING_FENCE_REGEX.sub("\n```", text)
    text = text.replace("\n", "\n" + " " * len(prefix))
    return rewrite_site_links(text, development=context.development)


def render_block(
    block: OutlineNode,
    view_type: ViewType,
    depth: int = 0,
    *,
    context: RenderContext,
) -> str:
    """Render a block and its descendants.

    ``view_type`` decides this block's list marker and whether children are
    indented; each child's marker comes from this block's own view type.
    """
    prefix = " " * (depth * 4) + VIEW_TYPE_PREFIX[view_type]
    padding = f"\n\n{' ' * len(prefix)}" if "\n" in block.text else ""
    centered = block.text_align == "center"

    out = io.StringIO()
    out.write(f'{prefix}<Block id={{"{block.uid}"}}>')
    if block.heading > 0:
        out.write("#" * block.heading + " ")
    if centered:
        out.write("<Center>")
    out.write(padding)
    out.write(replace_components(block.text, prefix, context=context))
    out.write(padding)
    if centered:
        out.write("</Center>")
    out.write("</Block>\n\n")

    # Document view types render their children as flat paragraphs.
    child_depth = depth if view_type == ViewType.DOCUMENT else depth + 1
    for child in block.children:
        out.write(render_block(child, block.view_type, child_depth, context=context))
    if view_type == ViewType.DOCUMENT and block.children:
        out.write("\n")
    return out.getvalue()


def render_blocks(
    blocks: tuple[OutlineNode, ...] | list[OutlineNode],
    view_type: ViewType,
    *,
    context: RenderContext,
) -> str:
    """Render a set of sibling root blocks."""
    return "".join(render_block(b, view_type, context=context) for b in blocks)
