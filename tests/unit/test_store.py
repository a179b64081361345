"""Tests for the SQLite extension catalog."""

import json
from pathlib import Path

from roamjs_docs.core.database.store import (
    SqliteItemStore,
    import_items_file,
    open_item_store,
    parse_item,
)
from roamjs_docs.models.node import ExtensionItem
from roamjs_docs.protocols import ItemStoreProtocol


def test_store_satisfies_protocol(catalog_db: SqliteItemStore) -> None:
    assert isinstance(catalog_db, ItemStoreProtocol)


def test_get_item_returns_stored_item(catalog_db: SqliteItemStore) -> None:
    item = catalog_db.get_item("query-builder")
    assert item is not None
    assert item.state == "LIVE"
    assert item.featured == 3


def test_get_item_keeps_missing_fields_unset(catalog_db: SqliteItemStore) -> None:
    assert catalog_db.get_item("legacy-thing") == ExtensionItem(id="legacy-thing", state="LEGACY")
    assert catalog_db.get_item("nope") is None


def test_scan_returns_all_items_by_id(catalog_db: SqliteItemStore) -> None:
    assert [i.id for i in catalog_db.scan()] == ["legacy-thing", "query-builder", "widget"]


def test_put_items_replaces_existing(catalog_db: SqliteItemStore) -> None:
    catalog_db.put_items([ExtensionItem(id="widget", state="LIVE")])
    item = catalog_db.get_item("widget")
    assert item is not None
    assert item.state == "LIVE"
    assert item.description is None


def test_parse_item_coerces_featured() -> None:
    item = parse_item({"id": "x", "featured": "2", "src": None})
    assert item == ExtensionItem(id="x", featured=2)


def test_import_items_file_skips_records_without_id(tmp_path: Path) -> None:
    source = tmp_path / "catalog.json"
    source.write_text(json.dumps([{"id": "a", "state": "LIVE"}, {"description": "orphan"}]))
    store = open_item_store(tmp_path / "data")

    stats = import_items_file(store, source)

    assert stats.items_imported == 1
    assert stats.items_skipped == 1
    assert [i.id for i in store.scan()] == ["a"]
    assert (tmp_path / "data" / "extensions.db").exists()
    store.conn.close()
