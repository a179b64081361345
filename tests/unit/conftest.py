"""Shared test fixtures."""

import sqlite3

import pytest

from roamjs_docs.core.database.schema import create_schema
from roamjs_docs.core.database.store import SqliteItemStore
from roamjs_docs.core.graph.reader import GraphReader
from tests.unit.fakes import CATALOG, QUERY_BUILDER_PAGE, FakeApi, FakeItemStore


@pytest.fixture
def fake_api() -> FakeApi:
    api = FakeApi()
    api.add_page("query-builder", QUERY_BUILDER_PAGE)
    return api


@pytest.fixture
def reader(fake_api: FakeApi) -> GraphReader:
    return GraphReader(fake_api)


@pytest.fixture
def item_store() -> FakeItemStore:
    return FakeItemStore(CATALOG)


@pytest.fixture
def catalog_db() -> SqliteItemStore:
    """Return an in-memory catalog with the test items."""
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    store = SqliteItemStore(conn)
    store.put_items(CATALOG)
    return store
