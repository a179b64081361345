"""SQLite-backed extension catalog store."""

import json
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from roamjs_docs.core.database.schema import migrate_schema
from roamjs_docs.models.node import ExtensionItem

_COLUMNS = "id, state, description, src, download, featured"


def _to_item(row: tuple) -> ExtensionItem:
    return ExtensionItem(
        id=row[0], state=row[1], description=row[2],
        src=row[3] or "", download=row[4] or "", featured=int(row[5] or 0),
    )


class SqliteItemStore:
    """Key-value access to extension catalog items."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get_item(self, item_id: str) -> ExtensionItem | None:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM extensions WHERE id = ?", (item_id,)
        ).fetchone()
        return _to_item(row) if row else None

    def scan(self) -> list[ExtensionItem]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM extensions ORDER BY id").fetchall()
        return [_to_item(r) for r in rows]

    def put_items(self, items: list[ExtensionItem]) -> None:
        now_ms = int(time.time() * 1000)
        self.conn.executemany(
            """INSERT OR REPLACE INTO extensions
               (id, state, description, src, download, featured, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            [
                (i.id, i.state, i.description, i.src, i.download, i.featured, now_ms)
                for i in items
            ],
        )
        self.conn.commit()


@dataclass(frozen=True)
class ImportStats:
    """Summary of a catalog import."""

    items_imported: int
    items_skipped: int


def parse_item(data: dict[str, Any]) -> ExtensionItem:
    """Parse one catalog record; ``featured`` may be a number or a numeric string."""
    return ExtensionItem(
        id=data["id"],
        state=data.get("state"),
        description=data.get("description"),
        src=data.get("src") or "",
        download=data.get("download") or "",
        featured=int(data.get("featured") or 0),
    )


def import_items_file(store: SqliteItemStore, path: Path) -> ImportStats:
    """Import catalog records from a JSON array file.

    Records without an ``id`` are skipped.
    """
    records: list[dict[str, Any]] = json.loads(path.read_text(encoding="utf-8"))
    items: list[ExtensionItem] = []
    skipped = 0
    for record in records:
        if not record.get("id"):
            logger.warning("Skipping catalog record without id: {!r}", record)
            skipped += 1
            continue
        items.append(parse_item(record))

    store.put_items(items)
    logger.info("Imported {} catalog items from {}", len(items), path)
    return ImportStats(items_imported=len(items), items_skipped=skipped)


def open_item_store(data_dir: Path) -> SqliteItemStore:
    """Open (creating if needed) the catalog database in ``data_dir``."""
    data_dir.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(data_dir / "extensions.db"))
    migrate_schema(conn)
    return SqliteItemStore(conn)
