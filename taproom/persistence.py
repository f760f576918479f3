"""SQLite persistence for the cart snapshot and UI preferences."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from taproom.config import DB_PATH
from taproom.models import (
    BeerMetadata,
    Cart,
    CartLine,
    Product,
    ProductMetadata,
    VariantPrice,
    WineMetadata,
)

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """The durable store could not be read or written."""


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def product_to_dict(product: Product) -> dict[str, Any]:
    """Snapshot a product as plain JSON-compatible data."""
    return asdict(product)


def product_from_dict(data: dict[str, Any]) -> Product:
    """Rebuild a product snapshot written by :func:`product_to_dict`."""
    metadata = None
    raw_meta = data.get("metadata")
    if raw_meta:
        beer = BeerMetadata(**raw_meta["beer"]) if raw_meta.get("beer") else None
        wine = WineMetadata(**raw_meta["wine"]) if raw_meta.get("wine") else None
        tags = tuple(raw_meta["tags"]) if raw_meta.get("tags") is not None else None
        metadata = ProductMetadata(beer=beer, wine=wine, tags=tags)

    fields = dict(data)
    fields["metadata"] = metadata
    fields["variant_prices"] = tuple(VariantPrice(**variant) for variant in data.get("variant_prices") or ())
    fields["raw_metadata"] = dict(data.get("raw_metadata") or {})
    return Product(**fields)


class SqliteCartStore:
    """Durable cart and preference storage keyed by namespace."""

    def __init__(self, db_path: str | Path = DB_PATH) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def bootstrap_schema(self) -> None:
        """Create persistence schema if it does not already exist."""
        try:
            with self._connect() as conn:
                conn.executescript(
                    """
                    CREATE TABLE IF NOT EXISTS carts (
                        namespace TEXT PRIMARY KEY,
                        notes TEXT NOT NULL DEFAULT '',
                        updated_at TEXT NOT NULL
                    );

                    CREATE TABLE IF NOT EXISTS cart_lines (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        namespace TEXT NOT NULL,
                        line_index INTEGER NOT NULL,
                        product_id TEXT NOT NULL,
                        variant TEXT,
                        quantity INTEGER NOT NULL,
                        product_json TEXT NOT NULL,
                        FOREIGN KEY(namespace) REFERENCES carts(namespace) ON DELETE CASCADE
                    );

                    CREATE TABLE IF NOT EXISTS preferences (
                        namespace TEXT NOT NULL,
                        key TEXT NOT NULL,
                        value TEXT NOT NULL,
                        PRIMARY KEY (namespace, key)
                    );

                    CREATE INDEX IF NOT EXISTS idx_cart_lines_namespace_line
                        ON cart_lines(namespace, line_index);
                    """
                )
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot initialise store at {self.db_path}: {exc}") from exc

    def load_cart(self, namespace: str) -> Cart | None:
        """Return the persisted cart for ``namespace``, or ``None`` if never saved."""
        try:
            with self._connect() as conn:
                row = conn.execute("SELECT notes FROM carts WHERE namespace = ?", (namespace,)).fetchone()
                if row is None:
                    return None
                line_rows = conn.execute(
                    """
                    SELECT variant, quantity, product_json
                    FROM cart_lines
                    WHERE namespace = ?
                    ORDER BY line_index
                    """,
                    (namespace,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot read cart {namespace!r}: {exc}") from exc

        lines = []
        for variant, quantity, product_json in line_rows:
            try:
                product = product_from_dict(json.loads(product_json))
            except (ValueError, TypeError, KeyError) as exc:
                logger.warning("skipping unreadable cart line in %s: %s", namespace, exc)
                continue
            lines.append(CartLine(product=product, quantity=int(quantity), selected_variant=variant))
        return Cart(lines=tuple(lines), notes=row[0])

    def save_cart(self, namespace: str, cart: Cart) -> None:
        """Replace the persisted cart for ``namespace`` in a single transaction."""
        rows = [
            (
                namespace,
                idx,
                line.product.id,
                line.selected_variant,
                line.quantity,
                json.dumps(product_to_dict(line.product), ensure_ascii=False, default=str),
            )
            for idx, line in enumerate(cart.lines)
        ]
        try:
            with self._connect() as conn:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO carts (namespace, notes, updated_at) VALUES (?, ?, ?)
                        ON CONFLICT(namespace) DO UPDATE SET notes = excluded.notes, updated_at = excluded.updated_at
                        """,
                        (namespace, cart.notes, _utc_now_iso()),
                    )
                    conn.execute("DELETE FROM cart_lines WHERE namespace = ?", (namespace,))
                    conn.executemany(
                        """
                        INSERT INTO cart_lines (namespace, line_index, product_id, variant, quantity, product_json)
                        VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        rows,
                    )
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot write cart {namespace!r}: {exc}") from exc
        logger.debug("saved cart %s lines=%d", namespace, len(rows))

    def load_preference(self, namespace: str, key: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT value FROM preferences WHERE namespace = ? AND key = ?",
                    (namespace, key),
                ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot read preference {namespace}/{key}: {exc}") from exc
        return row[0] if row else None

    def save_preference(self, namespace: str, key: str, value: str) -> None:
        try:
            with self._connect() as conn:
                with conn:
                    conn.execute(
                        """
                        INSERT INTO preferences (namespace, key, value) VALUES (?, ?, ?)
                        ON CONFLICT(namespace, key) DO UPDATE SET value = excluded.value
                        """,
                        (namespace, key, value),
                    )
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot write preference {namespace}/{key}: {exc}") from exc
