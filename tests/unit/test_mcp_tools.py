"""Tests for MCP tool core functions."""

import asyncio

from roamjs_docs.core.graph.reader import GraphReader
from roamjs_docs.mcp.server import roamjs_list_paths, roamjs_read_extension
from tests.unit.fakes import FakeItemStore


def test_read_extension_returns_page_props(reader: GraphReader, item_store: FakeItemStore) -> None:
    result = asyncio.run(roamjs_read_extension(reader, item_store, extension_id="query-builder"))

    assert "error" not in result
    assert result["id"] == "query-builder"
    assert result["development"] is False
    assert "Install it first" in result["content"]


def test_read_extension_reports_failures(reader: GraphReader, item_store: FakeItemStore) -> None:
    result = asyncio.run(roamjs_read_extension(reader, item_store, extension_id="missing"))

    assert result["development"] is True
    assert result["status"] == 500
    assert result["content"].startswith("Failed to render due to:")


def test_list_paths_returns_catalog(reader: GraphReader, item_store: FakeItemStore) -> None:
    result = asyncio.run(roamjs_list_paths(reader, item_store))

    assert result["count"] == 3
    assert {p["id"] for p in result["paths"]} == {"query-builder", "widget", "legacy-thing"}


def test_list_paths_sub_with_no_documented_pages(
    reader: GraphReader, item_store: FakeItemStore
) -> None:
    assert asyncio.run(roamjs_list_paths(reader, item_store, sub=True)) == {"paths": [], "count": 0}
