"""Tests for markdown rendering of outline trees."""

import pytest

from roamjs_docs.core.tree.markdown import (
    RenderContext,
    render_block,
    render_blocks,
    replace_components,
    rewrite_site_links,
)
from roamjs_docs.models.node import OutlineNode, ViewType

CONTEXT = RenderContext(path="query-builder")


def test_render_single_bullet_block() -> None:
    node = OutlineNode(text="hello", uid="uid1")
    assert render_block(node, ViewType.BULLET, 0, context=CONTEXT) == (
        '- <Block id={"uid1"}>hello</Block>\n\n'
    )


@pytest.mark.parametrize(
    ("view_type", "marker"),
    [(ViewType.BULLET, "- "), (ViewType.DOCUMENT, ""), (ViewType.NUMBERED, "1. ")],
)
def test_render_marker_per_view_type(view_type: ViewType, marker: str) -> None:
    node = OutlineNode(text="x", uid="u")
    assert render_block(node, view_type, 1, context=CONTEXT) == (
        f'    {marker}<Block id={{"u"}}>x</Block>\n\n'
    )


def test_render_heading_and_center() -> None:
    node = OutlineNode(text="Title", uid="h", heading=2, text_align="center")
    assert render_block(node, ViewType.BULLET, context=CONTEXT) == (
        '- <Block id={"h"}>## <Center>Title</Center></Block>\n\n'
    )


def test_render_children_indent_under_bullets() -> None:
    node = OutlineNode(
        text="parent",
        uid="p",
        view_type=ViewType.NUMBERED,
        children=(
            OutlineNode(text="one", uid="c1", view_type=ViewType.NUMBERED),
            OutlineNode(text="two", uid="c2", view_type=ViewType.NUMBERED),
        ),
    )
    assert render_block(node, ViewType.BULLET, context=CONTEXT) == (
        '- <Block id={"p"}>parent</Block>\n\n'
        '    1. <Block id={"c1"}>one</Block>\n\n'
        '    1. <Block id={"c2"}>two</Block>\n\n'
    )


def test_render_document_children_stay_flat() -> None:
    node = OutlineNode(
        text="Intro",
        uid="p",
        view_type=ViewType.DOCUMENT,
        children=(OutlineNode(text="Paragraph", uid="c", view_type=ViewType.DOCUMENT),),
    )
    assert render_block(node, ViewType.DOCUMENT, context=CONTEXT) == (
        '<Block id={"p"}>Intro</Block>\n\n'
        '<Block id={"c"}>Paragraph</Block>\n\n'
        "\n"
    )


def test_render_multiline_text_is_padded_to_prefix() -> None:
    node = OutlineNode(text="line1\nline2", uid="m")
    assert render_block(node, ViewType.BULLET, context=CONTEXT) == (
        '- <Block id={"m"}>\n\n  line1\n  line2\n\n  </Block>\n\n'
    )


def test_render_is_idempotent() -> None:
    node = OutlineNode(
        text="^^a^^",
        uid="r",
        children=(OutlineNode(text="b\nc", uid="s", heading=1),),
    )
    first = render_block(node, ViewType.BULLET, context=CONTEXT)
    assert render_block(node, ViewType.BULLET, context=CONTEXT) == first


def test_render_blocks_concatenates_roots() -> None:
    blocks = (OutlineNode(text="a", uid="1"), OutlineNode(text="b", uid="2"))
    assert render_blocks(blocks, ViewType.BULLET, context=CONTEXT) == (
        '- <Block id={"1"}>a</Block>\n\n- <Block id={"2"}>b</Block>\n\n'
    )


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("{{[[video]]: https://www.loom.com/share/abc123}}", '<Loom id={"abc123"} />'),
        ("{{youtube: https://youtu.be/dQw4w9WgXcQ}}", '<YouTube id={"dQw4w9WgXcQ"} />'),
        (
            "{{[[video]]: https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10}}",
            '<YouTube id={"dQw4w9WgXcQ"} />',
        ),
        (
            "{{video: https://example.com/demo.mp4 }}",
            '<DemoVideo src={"https://example.com/demo.mp4"} />',
        ),
        ("^^important^^ and ^^more^^", "<Highlight>important</Highlight> and <Highlight>more</Highlight>"),
        ("snake__case", "snake_case"),
        ("a\u00a0b", "a b"),
        ("[Examples]([[query-builder/Examples Page]])", "[Examples](/extensions/query-builder/examples_page)"),
        ("[Home]([[query-builder]])", "[Home](/extensions/query-builder)"),
        ("[Other]([[other-extension]])", "[Other]([[other-extension]])"),
    ],
)
def test_replace_components(text: str, expected: str) -> None:
    assert replace_components(text, "- ", context=CONTEXT) == expected


def test_replace_components_breaks_line_before_trailing_fence() -> None:
    assert replace_components("```js\ncode```", "", context=CONTEXT) == "```js\ncode\n```"


def test_replace_components_reindents_newlines() -> None:
    assert replace_components("a\nb", "        - ", context=CONTEXT) == "a\n          b"


def test_site_links_rewritten_only_in_development() -> None:
    text = "see https://roamjs.com/docs"
    assert rewrite_site_links(text, development=False) == text
    assert rewrite_site_links(text, development=True) == "see http://localhost:3000/docs"
    dev = RenderContext(path="query-builder", development=True)
    assert replace_components(text, "", context=dev) == "see http://localhost:3000/docs"
