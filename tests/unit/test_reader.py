"""Tests for async graph lookups."""

import asyncio

from roamjs_docs.core.graph.queries import content_query
from roamjs_docs.core.graph.reader import GraphReader
from tests.unit.fakes import FakeApi


def test_lookups_default_to_empty_strings() -> None:
    reader = GraphReader(FakeApi())
    assert asyncio.run(reader.page_title_by_block_uid("abcdefghi")) == ""
    assert asyncio.run(reader.text_by_block_uid("abcdefghi")) == ""
    assert asyncio.run(reader.pull_content("nothing")) is None


def test_lookups_return_registered_values() -> None:
    api = FakeApi()
    api.add_reference("abcdefghi", text="block text", page="Some Page")
    reader = GraphReader(api)

    assert asyncio.run(reader.text_by_block_uid("abcdefghi")) == "block text"
    assert asyncio.run(reader.page_title_by_block_uid("abcdefghi")) == "Some Page"


def test_content_query_escapes_quotes() -> None:
    query = content_query('say "hi"')
    assert ':node/title "say \\"hi\\""]' in query
    assert content_query("abcdefghi", by_uid=True).endswith(':block/uid "abcdefghi"]]')
